"""Read API the rendering layer resolves pages through."""

import logfire
from django.http import Http404, HttpRequest
from ninja import NinjaAPI

from apps.pages.models import Page
from apps.pages.services import ResolutionContext

api = NinjaAPI(urls_namespace="pages_api")


def _menu_item(page: Page, context: ResolutionContext) -> dict:
    """Serialize a page and its in-menu descendants for navigation.

    Args:
        page: The menu page.
        context: Resolution context shared by the whole menu.

    Returns:
        Dict with title, url and nested children.

    """
    return {
        "id": page.pk,
        "title": page.menu_title or page.title,
        "url": page.url(context),
        "children": [_menu_item(child, context) for child in page.children.in_menu()],
    }


@api.get("/resolve")
def resolve_page(request: HttpRequest, path: str = "") -> dict:
    """Resolve a request path to a live page and its rendered parts.

    Args:
        request: The HTTP request.
        path: Slash-separated slug path; empty for the home page.

    Returns:
        Dict with the page's metadata, URL and rendered parts.

    Raises:
        Http404: If no live page sits at that path.

    """
    context = ResolutionContext.current()
    page = Page.objects.live().find_by_path(path, context)
    if page is None:
        logfire.debug("Page path not found", path=path, locale=context.locale)
        raise Http404("Page not found")

    redirect_to = None
    if page.skip_to_first_child:
        child = page.first_live_child()
        if child is not None:
            redirect_to = child.nested_path(context)

    logfire.info("Page resolved", path=path, page_id=page.pk, locale=context.locale)

    return {
        "id": page.pk,
        "title": page.title,
        "browser_title": page.browser_title or page.title,
        "meta_keywords": page.meta_keywords,
        "meta_description": page.meta_description,
        "path": page.path(),
        "url": page.url(context),
        "nested_path": page.nested_path(context),
        "is_home": page.is_home,
        "redirect_to": redirect_to,
        "parts": [
            {"title": part.title, "position": part.position, "content": part.rendered_content}
            for part in page.parts.all()
        ],
    }


@api.get("/menu")
def get_menu(request: HttpRequest) -> list:
    """Return the navigation tree of live, in-menu pages.

    Args:
        request: The HTTP request.

    Returns:
        List of top-level menu items with nested children.

    """
    context = ResolutionContext.current()
    return [_menu_item(page, context) for page in Page.objects.in_menu().roots()]
