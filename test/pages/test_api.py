"""Tests for the pages read API."""

import pytest

from apps.pages.models import Page


@pytest.mark.django_db
class TestResolveEndpoint:
    """Tests for GET /api/pages/resolve."""

    def test_resolves_nested_page(self, client, page, child):
        """Test a nested path returns the child page with its parts rendered."""
        child.parts.create(title="body", content="Child body")
        child.browser_title = "Child in the browser"
        child.save()

        response = client.get("/api/pages/resolve", {"path": "pytest-is-great-for-testing-too/the-child-page"})

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == child.pk
        assert data["browser_title"] == "Child in the browser"
        assert data["path"] == "Pytest is great for testing too - The child page"
        assert data["nested_path"] == "/pytest-is-great-for-testing-too/the-child-page"
        assert data["parts"] == [{"title": "body", "position": 0, "content": "<p>Child body</p>"}]
        assert data["redirect_to"] is None

    def test_unknown_path_is_404(self, client, page):
        """Test a path that matches no page returns 404."""
        response = client.get("/api/pages/resolve", {"path": "nope"})

        assert response.status_code == 404

    def test_draft_page_is_404(self, client, page):
        """Test drafts are not served."""
        page.draft = True
        page.save()

        response = client.get("/api/pages/resolve", {"path": "pytest-is-great-for-testing-too"})

        assert response.status_code == 404

    def test_empty_path_resolves_home(self, client, db):
        """Test the root path returns the home page."""
        home = Page.objects.create(title="Home", link_url="/")

        response = client.get("/api/pages/resolve")

        assert response.status_code == 200
        assert response.json()["id"] == home.pk
        assert response.json()["is_home"] is True

    def test_skip_to_first_child_reports_redirect(self, client, page, child):
        """Test a skip-to-first-child page points at its first live child."""
        page.skip_to_first_child = True
        page.save()

        response = client.get("/api/pages/resolve", {"path": "pytest-is-great-for-testing-too"})

        assert response.json()["redirect_to"] == "/pytest-is-great-for-testing-too/the-child-page"

    def test_locale_from_request_selects_custom_slug(self, client, page):
        """Test the request locale picks the matching custom slug."""
        page.set_custom_slug("testirovanie", locale="ru")
        page.save()

        response = client.get("/api/pages/resolve", {"path": "testirovanie"}, HTTP_ACCEPT_LANGUAGE="ru")

        assert response.status_code == 200
        assert response.json()["id"] == page.pk


@pytest.mark.django_db
class TestMenuEndpoint:
    """Tests for GET /api/pages/menu."""

    def test_menu_tree(self, client, page, child):
        """Test live in-menu pages are returned with nested children."""
        page.menu_title = "Testing"
        page.save()
        Page.objects.create(title="Secret", show_in_menu=False)
        page.children.create(title="Draft child", draft=True)

        response = client.get("/api/pages/menu")

        assert response.status_code == 200
        assert response.json() == [
            {
                "id": page.pk,
                "title": "Testing",
                "url": {"id": None, "path": ["testing"]},
                "children": [
                    {
                        "id": child.pk,
                        "title": "The child page",
                        "url": {"id": None, "path": ["testing", "the-child-page"]},
                        "children": [],
                    }
                ],
            }
        ]
