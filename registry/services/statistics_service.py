import logging

from django.conf import settings
from django.utils import timezone

from registry.exceptions import StoreError
from registry.query.aggregation import (
    completion_rate,
    count_since,
    grouped_counts,
    monthly_counts,
    top_n,
    window_cutoff,
)
from registry.reference import STATUS_COMPLETED, STATUS_PENDING, STATUS_REJECTED
from registry.rules import is_overdue
from registry.stores import get_store
from registry.timeutils import to_date

logger = logging.getLogger(__name__)


class StatisticsService:
    """Dashboard figures computed from the full record tables."""

    def __init__(self, store=None):
        self.store = store or get_store()

    def dashboard(self, window="month", now=None) -> dict:
        """
        Totals, groupings, rankings and recent activity for the dashboard.

        Args:
            window: "week", "month", "year" or a number of days for the
                recent-activity counts
            now: Reference time, defaults to the current time

        Returns:
            dict: Contains 'success' boolean and the figures in 'data'
        """
        now = now or timezone.now()
        try:
            cutoff = window_cutoff(now, window)
        except ValueError as e:
            return {"success": False, "error": "validation", "message": str(e)}

        try:
            citizens = self.store.fetch_all("citizens")
            military = self.store.fetch_all("military_personnel")
            requests = self.store.fetch_all("requests")
        except StoreError as e:
            logger.error(f"Error loading statistics: {str(e)}")
            return {
                "success": False,
                "error": "store",
                "message": "Could not load statistics. Please try again.",
            }

        by_municipality = grouped_counts(citizens, "municipality")
        by_rank = grouped_counts(military, "rank")
        by_esso = grouped_counts(military, "esso")
        by_region = grouped_counts(citizens, "area")
        by_status = grouped_counts(requests, "status")
        by_category = grouped_counts(requests, "request_type")
        pending = by_status.get(STATUS_PENDING, 0)
        completed = by_status.get(STATUS_COMPLETED, 0)
        rejected = by_status.get(STATUS_REJECTED, 0)
        today = timezone.localtime(now).date()
        since_day = timezone.localtime(cutoff).date()

        data = {
            "window": window,
            "since": cutoff.isoformat(),
            "totals": {
                "citizens": len(citizens),
                "military_personnel": len(military),
                "requests": len(requests),
            },
            "citizens_by_municipality": by_municipality,
            "citizens_by_region": by_region,
            "citizens_by_electoral_district": grouped_counts(citizens, "electoral_district"),
            "military_by_rank": by_rank,
            "military_by_esso": by_esso,
            "requests_by_status": by_status,
            "requests_by_category": by_category,
            "top_municipalities": top_n(by_municipality, 5),
            "top_ranks": top_n(by_rank, 5),
            "top_esso": top_n(by_esso, 8),
            "top_regions": top_n(by_region, 5),
            "top_categories": top_n(by_category, 5),
            "requests": {
                "pending": pending,
                "completed": completed,
                "rejected": rejected,
                "completion_rate": completion_rate(completed, len(requests)),
                "overdue": sum(
                    1
                    for row in requests
                    if is_overdue(row, today, threshold=settings.REGISTRY_OVERDUE_DAYS)
                ),
            },
            "recent": {
                "citizens": count_since(citizens, cutoff),
                "military_personnel": count_since(military, cutoff),
                "requests": count_since(requests, cutoff),
                "completed_requests": sum(
                    1
                    for row in requests
                    if row.get("status") == STATUS_COMPLETED
                    and to_date(row.get("completion_date")) is not None
                    and to_date(row.get("completion_date")) >= since_day
                ),
            },
            "monthly_citizens": monthly_counts(citizens),
        }
        return {"success": True, "message": "OK", "data": data}
