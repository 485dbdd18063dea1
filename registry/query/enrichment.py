"""
Attach related-record summaries to listed rows.

Lookups are batched: one store call per related table, keyed by the distinct
ids present in the rows, so a page of N requests costs at most two extra
queries. References to rows that no longer exist resolve to None.
"""

import logging

from registry.stores.base import distinct

logger = logging.getLogger(__name__)

UNKNOWN_REQUESTER = "Άγνωστος αιτών"

CITIZEN_SUMMARY = ("name", "surname", "mobile_phone", "email")
MILITARY_SUMMARY = ("name", "surname", "rank", "esso", "service_unit")
REQUEST_SUMMARY = ("request_type", "description", "status")


def requester_label(citizen: dict = None, military: dict = None) -> str:
    """``"surname name"`` for a citizen, ``"rank surname name"`` for military personnel."""
    if citizen:
        return f"{citizen.get('surname')} {citizen.get('name')}"
    if military:
        rank = f"{military['rank']} " if military.get("rank") else ""
        return f"{rank}{military.get('surname')} {military.get('name')}"
    return UNKNOWN_REQUESTER


class RequestEnricher:
    def __init__(self, store):
        self.store = store

    def enrich(self, rows: list) -> list:
        """Copies of ``rows`` with ``citizen``, ``military_personnel`` and ``requester_label``."""
        citizen_ids = distinct(row.get("citizen_id") for row in rows)
        military_ids = distinct(row.get("military_personnel_id") for row in rows)

        citizens = (
            self.store.fetch_by_ids("citizens", citizen_ids, CITIZEN_SUMMARY) if citizen_ids else {}
        )
        military = (
            self.store.fetch_by_ids("military_personnel", military_ids, MILITARY_SUMMARY)
            if military_ids
            else {}
        )

        enriched = []
        for row in rows:
            citizen = citizens.get(str(row.get("citizen_id"))) if row.get("citizen_id") else None
            person = (
                military.get(str(row.get("military_personnel_id")))
                if row.get("military_personnel_id")
                else None
            )
            if (row.get("citizen_id") and citizen is None) or (
                row.get("military_personnel_id") and person is None
            ):
                logger.warning(f"Request {row.get('id')} references a missing requester")
            enriched.append(
                {
                    **row,
                    "citizen": citizen,
                    "military_personnel": person,
                    "requester_label": requester_label(citizen, person),
                }
            )
        return enriched


class ReminderEnricher:
    def __init__(self, store):
        self.store = store

    def enrich(self, rows: list) -> list:
        request_ids = distinct(row.get("related_request_id") for row in rows)
        related = (
            self.store.fetch_by_ids("requests", request_ids, REQUEST_SUMMARY) if request_ids else {}
        )
        return [
            {
                **row,
                "related_request": related.get(str(row.get("related_request_id")))
                if row.get("related_request_id")
                else None,
            }
            for row in rows
        ]
