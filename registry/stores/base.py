"""
Record store interface.

A store holds the four record tables and answers predicate queries over them.
Rows cross this boundary as plain dictionaries keyed by column name, with
string ids and foreign keys exposed as ``<name>_id``.
"""

import uuid
from abc import ABC, abstractmethod

from registry.query.predicates import MATCH_ALL, Predicate

TABLES = ("citizens", "military_personnel", "requests", "reminders")

AUDIT = ("created_at", "updated_at", "created_by")

# Row shape per table: every row carries every column, null when unset.
COLUMNS = {
    "citizens": (
        "id", "surname", "name", "patronymic", "recommendation_from", "mobile_phone",
        "landline_phone", "email", "address", "postal_code", "municipality", "area",
        "electoral_district", "last_contact_date", "notes", *AUDIT,
    ),
    "military_personnel": (
        "id", "name", "surname", "rank", "service_unit", "wish", "send_date", "comments",
        "military_id", "esso_year", "esso_letter", "esso", *AUDIT,
    ),
    "requests": (
        "id", "citizen_id", "military_personnel_id", "request_type", "description", "status",
        "send_date", "completion_date", "notes", *AUDIT,
    ),
    "reminders": (
        "id", "title", "description", "reminder_date", "reminder_type", "related_request_id",
        "is_completed", "created_at", "created_by",
    ),
}


class RecordStore(ABC):
    """Backend-neutral access to the record tables."""

    name = "abstract"

    @abstractmethod
    def fetch_page(
        self, table: str, predicate: Predicate, ordering: str, start: int, end: int
    ) -> tuple:
        """
        Fetch the rows at inclusive positions ``start..end`` together with the
        exact number of rows matching ``predicate``.

        Returns:
            tuple: (rows, total)

        Raises:
            StoreError: If the backend call fails
        """

    @abstractmethod
    def fetch_all(self, table: str, predicate: Predicate = MATCH_ALL, ordering: str = None,
                  limit: int = None) -> list:
        """Every row matching ``predicate``, optionally capped at ``limit``."""

    @abstractmethod
    def fetch_by_ids(self, table: str, ids, fields=None) -> dict:
        """Rows whose id is in ``ids``, keyed by id. Unknown ids are absent."""

    @abstractmethod
    def get(self, table: str, record_id: str):
        """A single row or None."""

    @abstractmethod
    def insert(self, table: str, values: dict) -> dict:
        """Insert a row and return it as stored (with id and timestamps)."""

    @abstractmethod
    def update(self, table: str, record_id: str, values: dict):
        """Apply ``values`` to a row and return it, or None if it does not exist."""

    @abstractmethod
    def delete(self, table: str, record_id: str) -> bool:
        """Delete a row. Returns False if there was nothing to delete."""

    @abstractmethod
    def ping(self) -> bool:
        """Whether the backend is reachable."""

    def check_table(self, table: str):
        if table not in TABLES:
            raise ValueError(f"Unknown table: {table}")


def split_ordering(ordering: str):
    """``"-created_at"`` -> ``("created_at", True)``."""
    ordering = ordering or "-created_at"
    if ordering.startswith("-"):
        return ordering[1:], True
    return ordering, False


def distinct(ids) -> list:
    """Non-empty ids with duplicates removed, first occurrence kept."""
    seen = []
    for value in ids:
        if value and str(value) not in seen:
            seen.append(str(value))
    return seen


def is_valid_id(value) -> bool:
    """Record ids are UUIDs; anything else can never match a row."""
    try:
        uuid.UUID(str(value))
        return True
    except ValueError:
        return False
