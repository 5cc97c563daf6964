"""Management command to renumber page part positions."""

from django.core.management.base import BaseCommand, CommandError

from apps.pages.models import Page


class Command(BaseCommand):
    """Renumber page parts 0..n-1 for one page or every page."""

    help = "Normalize page part positions into a 0-based sequence, keeping their current order."

    def add_arguments(self, parser) -> None:
        """Register command arguments."""
        parser.add_argument("--page", type=int, help="Only reposition the parts of this page ID")

    def handle(self, *args, **options) -> None:
        """Execute the command."""
        pages = Page.objects.all()
        if options["page"] is not None:
            pages = pages.filter(pk=options["page"])
            if not pages.exists():
                raise CommandError(f"Page {options['page']} does not exist.")

        count = 0
        for page in pages:
            page.reposition_parts()
            count += 1

        self.stdout.write(self.style.SUCCESS(f"Repositioned parts of {count} page(s)."))
