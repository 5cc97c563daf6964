"""Models for pages app."""

from __future__ import annotations

from typing import Any, ClassVar

import logfire
from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models, transaction
from django.db.models import Max
from django.utils import timezone, translation
from django.utils.html import linebreaks

from apps.pages import services
from apps.pages.services import ResolutionContext


def _part_key(name: Any) -> str:
    """Normalize a part title for lookups ("Side Body" == "side_body")."""
    return str(name).strip().lower().replace(" ", "_")


class PageQuerySet(models.QuerySet):
    """Query helpers for the page tree."""

    def live(self) -> PageQuerySet:
        """Pages that are not drafts."""
        return self.filter(draft=False)

    def in_menu(self) -> PageQuerySet:
        """Live pages flagged to show in navigation."""
        return self.live().filter(show_in_menu=True)

    def roots(self) -> PageQuerySet:
        """Top-level pages."""
        return self.filter(parent__isnull=True)

    def home(self) -> Page | None:
        """Return the home page (``link_url == "/"``), if any."""
        return self.filter(link_url="/").first()

    def find_by_slug(self, slug: str, context: ResolutionContext | None = None) -> Page | None:
        """Find a page by its flat slug, ignoring hierarchy.

        Args:
            slug: Slug as produced by ``Page.url()`` with marketable URLs off.
            context: Resolution context; the current one when omitted.

        Returns:
            The first matching page in tree order, or None.

        """
        context = context or ResolutionContext.current()
        for page in self.prefetch_related("custom_slugs"):
            if services.resolve_slug(page, context) == slug:
                return page
        return None

    def find_by_path(self, path: str, context: ResolutionContext | None = None) -> Page | None:
        """Walk the tree top-down matching each path segment to a slug.

        Args:
            path: Slash-separated slugs, e.g. ``"about/team"``. An empty
                path resolves to the home page.
            context: Resolution context; the current one when omitted.

        Returns:
            The page at that path, or None when any segment misses.

        """
        context = context or ResolutionContext.current()
        segments = [segment for segment in path.strip("/").split("/") if segment]
        if not segments:
            return self.home()

        node = None
        candidates = self.roots()
        for segment in segments:
            node = next(
                (
                    page
                    for page in candidates.prefetch_related("custom_slugs")
                    if services.resolve_slug(page, context) == segment
                ),
                None,
            )
            if node is None:
                return None
            candidates = self.filter(parent=node)
        return node


class Page(models.Model):
    """A node in the CMS page tree.

    Slugs and URLs are not stored; they are resolved on read from the
    title fields and the locale-scoped custom slug (see ``apps.pages.services``).

    Attributes:
        title: Display title, required.
        menu_title: Overrides the title as slug source and in navigation.
        link_url: Literal URL that replaces tree-based resolution ("/" = home).
        menu_match: Pattern used by navigation matching; protects from deletion.
        deletable: False protects the page from deletion.
        draft: Draft pages are not live.
        show_in_menu: Whether live page appears in navigation.
        skip_to_first_child: Send visitors to the first live child instead.
        meta_keywords: SEO keywords.
        meta_description: SEO description.
        browser_title: Overrides the title in the browser tab.
        parent: Parent page, None for top-level pages.
        position: Ordering among siblings.
        created_at: Creation timestamp.
        updated_at: Last update timestamp.

    """

    title = models.CharField(max_length=255, help_text="Page title")
    menu_title = models.CharField(
        max_length=255,
        blank=True,
        help_text="Title used in navigation and for the slug (uses page title if empty)",
    )
    link_url = models.CharField(
        max_length=255,
        blank=True,
        help_text="Send visitors to this URL instead of the page (e.g. '/' for the home page)",
    )
    menu_match = models.CharField(
        max_length=255,
        blank=True,
        help_text="Regular expression matching request paths this page's menu item stays active for",
    )
    deletable = models.BooleanField(default=True)
    draft = models.BooleanField(default=False, help_text="Draft pages are not shown to visitors")
    show_in_menu = models.BooleanField(default=True)
    skip_to_first_child = models.BooleanField(default=False)

    # SEO
    meta_keywords = models.TextField(blank=True)
    meta_description = models.TextField(blank=True)
    browser_title = models.CharField(max_length=255, blank=True)

    # Tree
    parent = models.ForeignKey(
        "self",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="children",
    )
    position = models.PositiveIntegerField(null=True, blank=True, help_text="Order among sibling pages")

    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)

    objects = PageQuerySet.as_manager()

    class Meta:
        """Meta options for Page model."""

        verbose_name = "Page"
        verbose_name_plural = "Pages"
        ordering: ClassVar[list[str]] = ["position", "id"]

    def __str__(self) -> str:
        """Return string representation of page."""
        return self.title

    # Custom slugs

    def _staged_custom_slugs(self) -> dict[str, str]:
        # Assigned but not yet saved, keyed by locale.
        return self.__dict__.setdefault("_staged_slugs", {})

    def _saved_custom_slugs(self) -> dict[str, str]:
        if "_saved_slugs" not in self.__dict__:
            saved = {}
            if self.pk is not None:
                saved = {custom.locale: custom.slug for custom in self.custom_slugs.all()}
            self.__dict__["_saved_slugs"] = saved
        return self.__dict__["_saved_slugs"]

    def custom_slug_for(self, locale: str) -> str:
        """Return the custom slug for a locale, staged values included.

        Args:
            locale: Locale code.

        Returns:
            The custom slug, or "" when the page has none in that locale.

        """
        staged = self._staged_custom_slugs()
        if locale in staged:
            return staged[locale]
        return self._saved_custom_slugs().get(locale, "")

    def set_custom_slug(self, value: str | None, locale: str | None = None) -> None:
        """Stage a custom slug for a locale; it is written on ``save()``.

        Args:
            value: The slug, or empty/None to remove it. Stored normalized so the
                per-locale uniqueness constraint guards the slug URLs use.
            locale: Locale code, the active one when omitted.

        """
        locale = locale or translation.get_language() or settings.LANGUAGE_CODE
        allow_unicode = bool(getattr(settings, "PAGES_ALLOW_UNICODE_SLUGS", False))
        self._staged_custom_slugs()[locale] = services.normalize_slug(value or "", allow_unicode=allow_unicode)

    @property
    def custom_slug(self) -> str:
        """Custom slug in the active locale."""
        return self.custom_slug_for(translation.get_language() or settings.LANGUAGE_CODE)

    @custom_slug.setter
    def custom_slug(self, value: str | None) -> None:
        self.set_custom_slug(value)

    def _write_custom_slugs(self) -> None:
        staged = self._staged_custom_slugs()
        saved = self._saved_custom_slugs()
        for locale, slug in staged.items():
            if slug:
                PageSlug.objects.update_or_create(page=self, locale=locale, defaults={"slug": slug})
                saved[locale] = slug
            else:
                PageSlug.objects.filter(page=self, locale=locale).delete()
                saved.pop(locale, None)
        staged.clear()

    # Persistence

    def clean(self) -> None:
        """Reject a parent that would make the tree cyclic."""
        if self.parent_id is None or self.pk is None:
            return
        node = self.parent
        while node is not None:
            if node.pk == self.pk:
                raise ValidationError({"parent": "A page cannot be placed below itself or its own descendants."})
            node = node.parent

    def save(self, *args, **kwargs):
        """Save the page and any staged custom slugs in one transaction."""
        self.clean()
        if self.position is None:
            siblings = Page.objects.filter(parent_id=self.parent_id)
            highest = siblings.aggregate(highest=Max("position"))["highest"]
            self.position = 0 if highest is None else highest + 1
        with transaction.atomic():
            super().save(*args, **kwargs)
            self._write_custom_slugs()

    def refresh_from_db(self, using=None, fields=None, **kwargs):
        """Reload fields; a full reload also drops cached and staged custom slugs."""
        super().refresh_from_db(using=using, fields=fields, **kwargs)
        # Deferred-field loads pass ``fields`` and must keep staged slugs.
        if fields is None:
            self.__dict__.pop("_saved_slugs", None)
            self.__dict__.pop("_staged_slugs", None)

    # State

    @property
    def is_home(self) -> bool:
        """Check if this is the home page."""
        return (self.link_url or "").strip() == "/"

    @property
    def is_live(self) -> bool:
        """Check if the page is visible to visitors."""
        return not self.draft

    @property
    def in_menu(self) -> bool:
        """Check if the page appears in navigation."""
        return self.is_live and self.show_in_menu

    @property
    def is_deletable(self) -> bool:
        """Check if the deletion policy allows destroying the page."""
        return services.can_destroy(self)

    def first_live_child(self) -> Page | None:
        """Return the first live child in sibling order."""
        return self.children.live().first()

    # Paths and URLs

    def slug(self, context: ResolutionContext | None = None) -> str:
        """Return the slug this page resolves to."""
        return services.resolve_slug(self, context or ResolutionContext.current())

    def path(self, *, reverse: bool = True, joiner: str = services.DEFAULT_PATH_JOINER) -> str:
        """Return the title chain, e.g. "Parent - Child".

        Args:
            reverse: Top-most ancestor first (default); False puts this page first.
            joiner: Separator between titles.

        Returns:
            The display path.

        """
        return services.build_path(self, reverse=reverse, joiner=joiner)

    def url(self, context: ResolutionContext | None = None) -> dict[str, Any] | str:
        """Return ``link_url`` or the ``{"id": ..., "path": ...}`` URL parameters."""
        return services.build_url(self, context or ResolutionContext.current())

    def nested_url(self, context: ResolutionContext | None = None) -> list[str]:
        """Return slugs from the top-most ancestor down to this page."""
        return services.nested_url(self, context or ResolutionContext.current())

    def nested_path(self, context: ResolutionContext | None = None) -> str:
        """Return the hierarchical path, e.g. "/about/team"."""
        return "/" + "/".join(self.nested_url(context))

    # Deletion

    def destroy(self) -> Page | bool:
        """Delete the page if the deletion policy allows it.

        Parts and custom slugs are deleted with the page. Pages with children
        are never deleted; move or delete the children first.

        Returns:
            The deleted page, or False when nothing was deleted.

        """
        if not services.can_destroy(self):
            logfire.warning(
                "Page deletion refused",
                page_id=self.pk,
                title=self.title,
                link_url=self.link_url,
                menu_match=self.menu_match,
                deletable=self.deletable,
            )
            return False

        if self.pk is None:
            logfire.debug("Page deletion skipped - page was never saved", title=self.title)
            return False

        if self.children.exists():
            logfire.warning(
                "Page deletion refused - page has children",
                page_id=self.pk,
                title=self.title,
                child_count=self.children.count(),
            )
            return False

        page_id = self.pk
        self.delete()
        logfire.info("Page deleted", page_id=page_id, title=self.title)
        return self

    def force_destroy(self) -> Page | bool:
        """Clear every deletion guard on the page, then destroy it."""
        self.link_url = ""
        self.menu_match = ""
        self.deletable = True
        return self.destroy()

    # Parts

    def part_with_title(self, name: Any) -> PagePart | None:
        """Find a part by title, ignoring case and treating "_" as " "."""
        key = _part_key(name)
        return next((part for part in self.parts.all() if _part_key(part.title) == key), None)

    def content_for(self, name: Any) -> str | None:
        """Return a part's rendered content, or None if the page has no such part."""
        part = self.part_with_title(name)
        return part.rendered_content if part is not None else None

    def all_page_part_content(self) -> str:
        """Return every part's rendered content in position order, space-joined."""
        return " ".join(part.rendered_content for part in self.parts.all())

    def reposition_parts(self) -> None:
        """Renumber this page's parts 0..n-1 keeping their relative order."""
        services.reposition_parts(self)


class PageSlug(models.Model):
    """Custom slug of a page in one locale."""

    page = models.ForeignKey(Page, on_delete=models.CASCADE, related_name="custom_slugs")
    locale = models.CharField(max_length=10)
    slug = models.CharField(max_length=255)

    class Meta:
        """Meta options for PageSlug model."""

        verbose_name = "Page Slug"
        verbose_name_plural = "Page Slugs"
        constraints: ClassVar[list] = [
            models.UniqueConstraint(fields=["locale", "slug"], name="unique_page_slug_per_locale"),
            models.UniqueConstraint(fields=["page", "locale"], name="unique_locale_per_page"),
        ]

    def __str__(self) -> str:
        """Return string representation."""
        return f"{self.slug} ({self.locale})"


class PagePart(models.Model):
    """A named, ordered content fragment of a page (e.g. "body", "side body").

    Attributes:
        page: Owning page; parts are deleted with it.
        title: Name the part is looked up by.
        content: Raw Markdown/HTML body.
        position: Order within the page, assigned after the last part when empty.

    """

    page = models.ForeignKey(Page, on_delete=models.CASCADE, related_name="parts")
    title = models.CharField(max_length=255)
    content = models.TextField(blank=True)
    position = models.PositiveIntegerField(null=True, blank=True)

    class Meta:
        """Meta options for PagePart model."""

        verbose_name = "Page Part"
        verbose_name_plural = "Page Parts"
        ordering: ClassVar[list[str]] = ["position", "id"]

    def __str__(self) -> str:
        """Return string representation."""
        return f"{self.page} - {self.title}"

    def save(self, *args, **kwargs):
        """Append the part after the page's last part when no position is set."""
        if self.position is None:
            highest = PagePart.objects.filter(page_id=self.page_id).aggregate(highest=Max("position"))["highest"]
            self.position = 0 if highest is None else highest + 1
        super().save(*args, **kwargs)

    @property
    def rendered_content(self) -> str:
        """Content as HTML.

        Content that already starts with a tag is passed through. Plain text is
        wrapped in ``<p>`` paragraphs (blank lines split paragraphs, single
        newlines become ``<br>``) and is never interpreted as markup syntax.
        """
        content = self.content or ""
        if not content.strip() or content.lstrip().startswith("<"):
            return content
        return linebreaks(content.strip(), autoescape=False)
