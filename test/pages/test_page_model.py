"""Tests for page state flags and metadata persistence."""

import pytest

from apps.pages.models import Page


@pytest.mark.django_db
class TestHomePage:
    """Tests for home page detection."""

    def test_link_url_slash_is_home(self, page):
        """Test a page linking to "/" is the home page."""
        page.link_url = "/"

        assert page.is_home is True

    def test_home_ignores_surrounding_whitespace(self, page, context):
        """Test a padded "/" link is the home page, matching the URL it resolves to."""
        page.link_url = " / "

        assert page.url(context) == "/"
        assert page.is_home is True

    def test_normal_page_is_not_home(self, page):
        """Test a page without the home link is a normal page."""
        assert page.is_home is False

    def test_home_lookup(self, page):
        """Test the manager finds the home page."""
        home = Page.objects.create(title="Home", link_url="/")

        assert Page.objects.home() == home


@pytest.mark.django_db
class TestDraftPages:
    """Tests for draft/live state."""

    def test_draft_page_is_not_live(self, page):
        """Test a draft is not live."""
        page.draft = True

        assert not page.is_live

    def test_non_draft_page_is_live(self, page):
        """Test a non-draft page is live."""
        page.draft = False

        assert page.is_live

    def test_live_queryset_excludes_drafts(self, page):
        """Test the live() filter drops drafts."""
        Page.objects.create(title="Hidden", draft=True)

        assert list(Page.objects.live()) == [page]

    def test_in_menu_requires_live_and_flag(self, page):
        """Test in_menu needs both a live page and show_in_menu."""
        Page.objects.create(title="Draft", draft=True)
        Page.objects.create(title="Hidden", show_in_menu=False)

        assert list(Page.objects.in_menu()) == [page]
        assert page.in_menu is True

    def test_first_live_child_skips_drafts(self, page):
        """Test drafts are skipped when picking the first child."""
        page.children.create(title="Draft", draft=True)
        live = page.children.create(title="Live")

        assert page.first_live_child() == live


@pytest.mark.django_db
class TestMetaData:
    """Tests for SEO metadata fields."""

    @pytest.mark.parametrize(
        ("field", "value"),
        [
            ("meta_keywords", "Some, great, keywords"),
            ("meta_description", "This is my description of the page for search results."),
            ("browser_title", "An awesome browser title for SEO"),
        ],
    )
    def test_assign_and_round_trip(self, page, field, value):
        """Test metadata is assignable and survives save/reload unchanged."""
        setattr(page, field, value)
        assert getattr(page, field) == value

        page.save()
        page.refresh_from_db()

        assert getattr(page, field) == value

    def test_new_page_has_empty_metadata(self, page):
        """Test metadata defaults to empty strings."""
        assert (page.meta_keywords, page.meta_description, page.browser_title) == ("", "", "")
