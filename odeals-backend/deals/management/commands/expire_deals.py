# deals/management/commands/expire_deals.py
from datetime import date

from django.core.management.base import BaseCommand, CommandError

from deals.services import expire_deals


class Command(BaseCommand):
    help = "Deactivate active deals whose end date is before today (or --date)."

    def add_arguments(self, parser):
        parser.add_argument(
            "--date",
            type=str,
            help="Treat this ISO date (YYYY-MM-DD) as today",
        )

    def handle(self, *args, **options):
        today = None
        if options.get("date"):
            try:
                today = date.fromisoformat(options["date"])
            except ValueError:
                raise CommandError(f"Invalid date: {options['date']}")

        count = expire_deals(today)
        self.stdout.write(self.style.SUCCESS(f"Expired {count} deal(s)"))
