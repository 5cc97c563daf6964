"""Slug, path, URL and deletion rules for the page tree.

Everything here is a pure function of a page's loaded attributes plus an
explicit ``ResolutionContext``. Callers snapshot the context once per request
(``ResolutionContext.current()``) and pass it down, so a locale switch halfway
through a resolution cannot produce a mixed result.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import logfire
from constance import config
from django.conf import settings
from django.db import transaction
from django.utils import translation
from django.utils.text import slugify

if TYPE_CHECKING:
    from apps.pages.models import Page

RESERVED_SLUG_SUFFIX = "-page"
DEFAULT_PATH_JOINER = " - "

# Anything that is not a word character, whitespace or hyphen separates words.
_SEPARATOR_RE = re.compile(r"[^\w\s-]")


@dataclass(frozen=True)
class ResolutionContext:
    """Locale and URL settings a slug/path/url computation reads.

    Attributes:
        locale: Locale custom slugs are looked up in.
        default_locale: Site default locale; links are not prefixed in it.
        marketable_urls: Hierarchical slug paths (True) or flat slug ids (False).
        reserved_words: Slugs that collide with system routes.
        allow_unicode: Keep non-ASCII characters in generated slugs.

    """

    locale: str = "en"
    default_locale: str = "en"
    marketable_urls: bool = True
    reserved_words: tuple[str, ...] = ()
    allow_unicode: bool = False

    @classmethod
    def current(cls) -> ResolutionContext:
        """Snapshot the active translation and configured URL settings.

        Returns:
            A context for the current request/thread.

        """
        default_locale = settings.LANGUAGE_CODE
        return cls(
            locale=translation.get_language() or default_locale,
            default_locale=default_locale,
            marketable_urls=bool(config.USE_MARKETABLE_URLS),
            reserved_words=tuple(getattr(settings, "PAGES_RESERVED_WORDS", ())),
            allow_unicode=bool(getattr(settings, "PAGES_ALLOW_UNICODE_SLUGS", False)),
        )


def normalize_slug(text: str, *, allow_unicode: bool = False) -> str:
    """Turn arbitrary text into a URL-safe slug.

    Diacritics are folded to ASCII (``"Café"`` -> ``"cafe"``). When folding
    would drop letters that have no ASCII equivalent (Cyrillic, CJK, also in
    mixed-script text like ``"Привет world"``) the unicode slug is used so
    no word silently disappears.

    Args:
        text: Title, menu title or custom slug.
        allow_unicode: Keep non-ASCII letters even when they could be folded.

    Returns:
        Lowercase slug with runs of separators collapsed into single hyphens.

    """
    text = _SEPARATOR_RE.sub(" ", text or "")
    if allow_unicode:
        return slugify(text, allow_unicode=True)

    folded = slugify(text)
    unicode_slug = slugify(text, allow_unicode=True)
    if len(_word_chars(folded)) < len(_word_chars(unicode_slug)):
        return unicode_slug
    return folded


def _word_chars(slug: str) -> str:
    return slug.replace("-", "")


def resolve_slug(page: Page, context: ResolutionContext) -> str:
    """Resolve the slug a page is addressed by in the given context.

    Source precedence: custom slug for ``context.locale``, then
    ``menu_title``, then ``title``. Reserved words get ``-page`` appended.

    Args:
        page: The page to resolve.
        context: Locale and reserved-word settings.

    Returns:
        The page's slug.

    """
    source = page.custom_slug_for(context.locale) or page.menu_title or page.title
    slug = normalize_slug(source, allow_unicode=context.allow_unicode)
    if slug in context.reserved_words:
        slug = f"{slug}{RESERVED_SLUG_SUFFIX}"
    return slug


def ancestors(page: Page) -> list[Page]:
    """Return the page's ancestors, nearest parent first."""
    chain = []
    node = page.parent
    while node is not None:
        chain.append(node)
        node = node.parent
    return chain


def build_path(page: Page, *, reverse: bool = True, joiner: str = DEFAULT_PATH_JOINER) -> str:
    """Join the titles of a page and its ancestors.

    Args:
        page: The page to describe.
        reverse: Top-most ancestor first ("Parent - Child") when True,
            the page itself first ("Child - Parent") when False.
        joiner: Separator placed between titles.

    Returns:
        The display path.

    """
    titles = [page.title] + [ancestor.title for ancestor in ancestors(page)]
    if reverse:
        titles.reverse()
    return joiner.join(titles)


def nested_url(page: Page, context: ResolutionContext) -> list[str]:
    """Return slugs from the top-most ancestor down to the page itself."""
    chain = [page, *ancestors(page)]
    return [resolve_slug(node, context) for node in reversed(chain)]


def localized_link_url(link_url: str, context: ResolutionContext) -> str:
    """Prefix site-relative links with the locale outside the default locale.

    Args:
        link_url: The page's literal link.
        context: Active and default locale.

    Returns:
        ``/ru/contact`` for ``/contact`` in ``ru`` when ``en`` is the default;
        the link unchanged otherwise.

    """
    if link_url.startswith("/") and context.locale != context.default_locale:
        return f"/{context.locale}{link_url}"
    return link_url


def build_url(page: Page, context: ResolutionContext) -> dict[str, Any] | str:
    """Resolve the URL a rendering layer should link a page with.

    Args:
        page: The page to resolve.
        context: Locale and marketable-URL settings.

    Returns:
        The literal ``link_url`` when one is set; otherwise
        ``{"id": None, "path": [...]}`` with marketable URLs on, or
        ``{"id": slug, "path": None}`` with them off.

    """
    link_url = (page.link_url or "").strip()
    if link_url:
        return localized_link_url(link_url, context)

    if context.marketable_urls:
        return {"id": None, "path": nested_url(page, context)}
    return {"id": resolve_slug(page, context), "path": None}


def can_destroy(page: Page) -> bool:
    """Check whether a page may be deleted.

    A page is protected when it links somewhere (``link_url``), is matched
    by navigation (``menu_match``) or has been flagged not deletable.

    Args:
        page: The page to check.

    Returns:
        True if nothing protects the page.

    """
    return bool(page.deletable) and not (page.link_url or "").strip() and not (page.menu_match or "").strip()


def reposition_parts(page: Page) -> int:
    """Renumber a page's parts 0..n-1, keeping their current relative order.

    Ties on ``position`` are broken by creation order. Only rows whose
    position changes are written.

    Args:
        page: The page owning the parts.

    Returns:
        Number of parts whose position was updated.

    """
    with transaction.atomic():
        parts = list(page.parts.select_for_update().order_by("position", "id"))
        changed = []
        for index, part in enumerate(parts):
            if part.position != index:
                part.position = index
                changed.append(part)
        if changed:
            type(changed[0]).objects.bulk_update(changed, ["position"])

    logfire.info(
        "Page parts repositioned",
        page_id=page.pk,
        part_count=len(parts),
        updated_count=len(changed),
    )
    return len(changed)
