"""
Django management command to create the holiday reminders of a year.

Holidays that already have a reminder on their date are skipped.

Usage:
    python manage.py seed_holiday_reminders [--year 2025]
"""

from django.core.management.base import BaseCommand, CommandError

from registry.services.reminder_service import ReminderService


class Command(BaseCommand):
    help = "Create reminders for the Greek holidays of a year"

    def add_arguments(self, parser):
        parser.add_argument("--year", type=int, help="Calendar year (defaults to the current year)")

    def handle(self, *args, **options):
        result = ReminderService().seed_holiday_reminders(options.get("year"))

        if not result["success"]:
            raise CommandError(result["message"])

        self.stdout.write(self.style.SUCCESS(result["message"]))
        if result["data"]["skipped"]:
            self.stdout.write(f"Skipped {result['data']['skipped']} dates that already had reminders")
