"""Admin configuration for pages app."""

from typing import ClassVar

from django.contrib import admin, messages
from django.utils.html import format_html

from apps.pages.models import Page, PagePart


class PagePartInline(admin.TabularInline):
    """Inline editor for a page's content parts."""

    model = PagePart
    extra = 0
    fields: ClassVar[list[str]] = ["title", "content", "position"]


@admin.register(Page)
class PageAdmin(admin.ModelAdmin):
    """Admin configuration for Page model."""

    list_display: ClassVar[list[str]] = [
        "title",
        "parent",
        "status_badge",
        "show_in_menu",
        "position",
        "deletable",
        "updated_at",
    ]
    list_filter: ClassVar[list[str]] = ["draft", "show_in_menu", "deletable"]
    search_fields: ClassVar[list[str]] = ["title", "menu_title", "link_url"]
    readonly_fields: ClassVar[list[str]] = ["created_at", "updated_at"]
    inlines: ClassVar[list] = [PagePartInline]

    fieldsets = (
        (
            None,
            {
                "fields": ("title", "parent", "draft"),
            },
        ),
        (
            "Navigation",
            {
                "fields": ("menu_title", "show_in_menu", "skip_to_first_child", "position", "link_url", "menu_match"),
                "description": "How this page appears in navigation and where its link points.",
            },
        ),
        (
            "Search Engine Optimization",
            {
                "fields": ("browser_title", "meta_keywords", "meta_description"),
                "classes": ("collapse",),
            },
        ),
        (
            "Advanced",
            {
                "fields": ("deletable", "created_at", "updated_at"),
                "classes": ("collapse",),
            },
        ),
    )

    def has_delete_permission(self, request, obj=None) -> bool:
        """Hide the delete action for pages the deletion policy protects."""
        if obj is not None and not obj.is_deletable:
            return False
        return super().has_delete_permission(request, obj)

    def delete_model(self, request, obj) -> None:
        """Delete through ``Page.destroy`` so the deletion policy applies."""
        if not obj.destroy():
            messages.error(request, f"Page '{obj.title}' cannot be deleted.")

    def delete_queryset(self, request, queryset) -> None:
        """Bulk delete page by page, reporting the ones that were kept."""
        refused = [page.title for page in queryset if not page.destroy()]
        if refused:
            messages.error(request, f"These pages cannot be deleted: {', '.join(refused)}")

    @admin.display(description="Status")
    def status_badge(self, obj) -> str:
        """Display live/draft status as a colored badge.

        Args:
            obj: The Page object.

        Returns:
            HTML formatted status badge.

        """
        if obj.is_live:
            return format_html('<span style="color: green; font-weight: bold;">Live</span>')
        return format_html('<span style="color: orange; font-weight: bold;">Draft</span>')
