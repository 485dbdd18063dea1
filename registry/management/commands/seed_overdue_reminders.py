"""
Django management command to create follow-up reminders for overdue requests.

Usage:
    python manage.py seed_overdue_reminders
"""

from django.core.management.base import BaseCommand, CommandError

from registry.services.reminder_service import ReminderService


class Command(BaseCommand):
    help = "Create a follow-up reminder for every overdue request without an open one"

    def handle(self, *args, **options):
        result = ReminderService().seed_overdue_reminders()

        if not result["success"]:
            raise CommandError(result["message"])

        self.stdout.write(self.style.SUCCESS(result["message"]))
        self.stdout.write(f"Overdue requests: {result['data']['overdue']}")
