"""Tests for the page deletion policy."""

import pytest

from apps.pages.models import Page, PagePart, PageSlug
from apps.pages.services import can_destroy


def _assert_cannot_be_destroyed(page: Page) -> None:
    assert page.destroy() is False
    assert Page.objects.filter(pk=page.pk).exists()


@pytest.mark.django_db
class TestDeletionPolicy:
    """Pages are protected by link_url, menu_match and the deletable flag."""

    def test_link_url_blocks_deletion(self, page):
        """Test a page with a link_url is kept."""
        page.link_url = "/plugin-name"

        _assert_cannot_be_destroyed(page)

    def test_deletable_false_blocks_deletion(self, page):
        """Test a page flagged not deletable is kept."""
        page.deletable = False

        _assert_cannot_be_destroyed(page)

    def test_menu_match_blocks_deletion(self, page):
        """Test a page with a menu_match is kept."""
        page.menu_match = "^/Pytest is great for testing too.*$"

        _assert_cannot_be_destroyed(page)

    def test_unprotected_page_is_deleted(self, page):
        """Test a page with no guards is deleted and a truthy result returned."""
        page_id = page.pk

        assert page.destroy()
        assert not Page.objects.filter(pk=page_id).exists()

    def test_unsaved_page_is_not_destroyed(self, db):
        """Test destroying a page that was never saved returns False instead of raising."""
        page = Page(title="Never saved")

        assert page.destroy() is False
        assert not Page.objects.filter(title="Never saved").exists()

    def test_whitespace_only_guards_do_not_protect(self, page):
        """Test blank-looking link_url and menu_match count as absent."""
        page.link_url = "   "
        page.menu_match = ""

        assert can_destroy(page) is True
        assert page.is_deletable is True

    def test_deletion_cascades_to_parts_and_slugs(self, page):
        """Test parts and custom slugs are removed with their page."""
        page.parts.create(title="body", content="Body")
        page.custom_slug = "doomed"
        page.save()
        page_id = page.pk

        assert page.destroy()
        assert not PagePart.objects.filter(page_id=page_id).exists()
        assert not PageSlug.objects.filter(page_id=page_id).exists()

    def test_page_with_children_is_kept(self, page, child):
        """Test a page is not deleted while it still has children."""
        _assert_cannot_be_destroyed(page)
        assert Page.objects.filter(pk=child.pk).exists()

    def test_child_can_be_deleted(self, page, child):
        """Test deleting a leaf child leaves the parent in place."""
        assert child.destroy()
        assert list(page.children.all()) == []

    def test_force_destroy_clears_guards(self, page):
        """Test force_destroy deletes an otherwise protected page."""
        page.link_url = "/plugin-name"
        page.menu_match = "^/plugin.*$"
        page.deletable = False
        page_id = page.pk

        assert page.force_destroy()
        assert not Page.objects.filter(pk=page_id).exists()
