"""Create Page, PageSlug and PagePart."""

from django.db import migrations, models
import django.db.models.deletion
import django.utils.timezone


class Migration(migrations.Migration):
    """Initial page tree schema."""

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Page",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("title", models.CharField(help_text="Page title", max_length=255)),
                (
                    "menu_title",
                    models.CharField(
                        blank=True,
                        help_text="Title used in navigation and for the slug (uses page title if empty)",
                        max_length=255,
                    ),
                ),
                (
                    "link_url",
                    models.CharField(
                        blank=True,
                        help_text="Send visitors to this URL instead of the page (e.g. '/' for the home page)",
                        max_length=255,
                    ),
                ),
                (
                    "menu_match",
                    models.CharField(
                        blank=True,
                        help_text="Regular expression matching request paths this page's menu item stays active for",
                        max_length=255,
                    ),
                ),
                ("deletable", models.BooleanField(default=True)),
                ("draft", models.BooleanField(default=False, help_text="Draft pages are not shown to visitors")),
                ("show_in_menu", models.BooleanField(default=True)),
                ("skip_to_first_child", models.BooleanField(default=False)),
                ("meta_keywords", models.TextField(blank=True)),
                ("meta_description", models.TextField(blank=True)),
                ("browser_title", models.CharField(blank=True, max_length=255)),
                ("position", models.PositiveIntegerField(blank=True, help_text="Order among sibling pages", null=True)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "parent",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="children",
                        to="pages.page",
                    ),
                ),
            ],
            options={
                "verbose_name": "Page",
                "verbose_name_plural": "Pages",
                "ordering": ["position", "id"],
            },
        ),
        migrations.CreateModel(
            name="PagePart",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("title", models.CharField(max_length=255)),
                ("content", models.TextField(blank=True)),
                ("position", models.PositiveIntegerField(blank=True, null=True)),
                (
                    "page",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="parts",
                        to="pages.page",
                    ),
                ),
            ],
            options={
                "verbose_name": "Page Part",
                "verbose_name_plural": "Page Parts",
                "ordering": ["position", "id"],
            },
        ),
        migrations.CreateModel(
            name="PageSlug",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("locale", models.CharField(max_length=10)),
                ("slug", models.CharField(max_length=255)),
                (
                    "page",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="custom_slugs",
                        to="pages.page",
                    ),
                ),
            ],
            options={
                "verbose_name": "Page Slug",
                "verbose_name_plural": "Page Slugs",
                "constraints": [
                    models.UniqueConstraint(fields=("locale", "slug"), name="unique_page_slug_per_locale"),
                    models.UniqueConstraint(fields=("page", "locale"), name="unique_locale_per_page"),
                ],
            },
        ),
    ]
