import logging
from datetime import date

from django.utils import timezone

from registry.exceptions import StoreError
from registry.query.criteria import REMINDER_SEARCH
from registry.query.enrichment import ReminderEnricher, requester_label
from registry.query.predicates import AllOf, DateRange, Equals, NotNull
from registry.reference import (
    HOLIDAY_YEARS,
    REMINDER_HOLIDAY,
    REMINDER_REQUEST,
    holidays_for_year,
)
from registry.services.base import RecordService, validation_failure
from registry.services.request_service import RequestService
from registry.timeutils import to_date

logger = logging.getLogger(__name__)


class ReminderService(RecordService):
    """Dated reminders, including the generated holiday and follow-up ones."""

    search = REMINDER_SEARCH
    label = "reminder"
    plural = "reminders"
    enricher_class = ReminderEnricher

    def toggle_complete(self, record_id, actor: str = None) -> dict:
        """Flip ``is_completed`` on a reminder."""
        try:
            current = self.store.get(self.search.table, record_id)
            if current is None:
                return self.not_found(record_id)
            row = self.store.update(
                self.search.table, record_id, {"is_completed": not current.get("is_completed")}
            )
        except StoreError as e:
            return self.store_failure("save", e)

        state = "completed" if row["is_completed"] else "reopened"
        logger.info(f"Reminder {record_id} {state} by {actor}")
        return {"success": True, "message": f"Reminder {state}", "data": row}

    def seed_holiday_reminders(self, year: int = None, actor: str = None) -> dict:
        """
        Create one holiday reminder per holiday of ``year``.

        Dates that already carry a holiday reminder are skipped, so running it
        twice creates nothing the second time.
        """
        year = year or timezone.localdate().year
        if year not in HOLIDAY_YEARS:
            return validation_failure(
                f"Year must be between {HOLIDAY_YEARS[0]} and {HOLIDAY_YEARS[-1]}"
            )
        predicate = AllOf(
            (
                Equals("reminder_type", REMINDER_HOLIDAY),
                DateRange("reminder_date", start=date(year, 1, 1), end=date(year, 12, 31)),
            )
        )
        try:
            existing = self.store.fetch_all(self.search.table, predicate)
            taken = {to_date(row.get("reminder_date")) for row in existing}
            created = []
            for day, name in holidays_for_year(year):
                if day in taken:
                    continue
                created.append(
                    self.store.insert(
                        self.search.table,
                        {
                            "title": name,
                            "description": f"Ευχές για {name}",
                            "reminder_date": day,
                            "reminder_type": REMINDER_HOLIDAY,
                            "is_completed": False,
                            "created_by": actor,
                        },
                    )
                )
                taken.add(day)
        except StoreError as e:
            return self.store_failure("save", e)

        logger.info(f"Seeded {len(created)} holiday reminders for {year}")
        return {
            "success": True,
            "message": f"Created {len(created)} holiday reminders for {year}",
            "data": {"created": len(created), "skipped": len(holidays_for_year(year)) - len(created)},
        }

    def seed_overdue_reminders(self, today: date = None, actor: str = None) -> dict:
        """Create a follow-up reminder for each overdue request that has no open one."""
        today = today or timezone.localdate()
        overdue = RequestService(store=self.store).overdue(today)
        if not overdue["success"]:
            return overdue

        predicate = AllOf(
            (
                Equals("reminder_type", REMINDER_REQUEST),
                Equals("is_completed", False),
                NotNull("related_request_id"),
            )
        )
        try:
            open_reminders = self.store.fetch_all(self.search.table, predicate)
            followed = {str(row["related_request_id"]) for row in open_reminders}
            created = []
            for request in overdue["data"]:
                if str(request["id"]) in followed:
                    continue
                label = requester_label(request.get("citizen"), request.get("military_personnel"))
                created.append(
                    self.store.insert(
                        self.search.table,
                        {
                            "title": f"Εκκρεμές αίτημα: {request['request_type']}",
                            "description": f"{label}: {request['description']}",
                            "reminder_date": today,
                            "reminder_type": REMINDER_REQUEST,
                            "related_request_id": str(request["id"]),
                            "is_completed": False,
                            "created_by": actor,
                        },
                    )
                )
        except StoreError as e:
            return self.store_failure("save", e)

        logger.info(f"Seeded {len(created)} follow-up reminders for overdue requests")
        return {
            "success": True,
            "message": f"Created {len(created)} follow-up reminders",
            "data": {"created": len(created), "overdue": len(overdue["data"])},
        }
