import logging

from django.conf import settings
from django.utils import timezone

from registry.exceptions import StoreError
from registry.query.criteria import REQUEST_SEARCH
from registry.query.enrichment import RequestEnricher
from registry.query.predicates import AllOf, Equals, NotNull
from registry.reference import STATUS_PENDING
from registry.rules import apply_status_change, check_requester, is_overdue
from registry.services.base import RecordService

logger = logging.getLogger(__name__)


class RequestService(RecordService):
    """Requests filed for citizens or military personnel."""

    search = REQUEST_SEARCH
    label = "request"
    plural = "requests"
    enricher_class = RequestEnricher

    def __init__(self, store=None, page_size=None, policy=None):
        super().__init__(store, page_size)
        self.policy = policy or settings.REGISTRY_COMPLETION_DATE_POLICY

    def prepare_create(self, values):
        check_requester(values.get("citizen_id"), values.get("military_personnel_id"))
        return apply_status_change(values, policy=self.policy)

    def prepare_update(self, values, current):
        # requester references are checked only when the write changes them
        if "citizen_id" in values or "military_personnel_id" in values:
            merged = {**current, **values}
            check_requester(merged.get("citizen_id"), merged.get("military_personnel_id"))
        return apply_status_change(values, current, policy=self.policy)

    def overdue(self, today=None) -> dict:
        """
        Pending requests whose send date is at least ``REGISTRY_OVERDUE_DAYS`` old.

        Returns:
            dict: ``data`` is the list of enriched overdue requests, oldest first
        """
        today = today or timezone.localdate()
        predicate = AllOf((Equals("status", STATUS_PENDING), NotNull("send_date")))
        try:
            rows = self.store.fetch_all(self.search.table, predicate, "send_date")
            overdue = [
                row
                for row in rows
                if is_overdue(row, today, threshold=settings.REGISTRY_OVERDUE_DAYS)
            ]
            overdue = self.enrich(overdue)
        except StoreError as e:
            return self.store_failure("load", e)

        logger.info(f"Found {len(overdue)} overdue requests as of {today}")
        return {
            "success": True,
            "message": f"{len(overdue)} overdue requests",
            "data": overdue,
        }
