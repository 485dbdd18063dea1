import copy
import logging
import uuid

from django.utils import timezone

from registry.query.predicates import MATCH_ALL, filter_rows
from registry.reference import REMINDER_GENERAL, STATUS_PENDING
from registry.stores.base import COLUMNS, TABLES, RecordStore, distinct, split_ordering

logger = logging.getLogger(__name__)

# Column defaults the database schema applies on insert
DEFAULTS = {
    "requests": {"status": STATUS_PENDING},
    "reminders": {"reminder_type": REMINDER_GENERAL, "is_completed": False},
}


def _sort_value(value):
    if hasattr(value, "isoformat"):
        return value.isoformat()
    return value


class MemoryStore(RecordStore):
    """In-process tables used for offline work and tests."""

    name = "memory"

    def __init__(self, tables: dict = None):
        self.tables = {table: {} for table in TABLES}
        for table, rows in (tables or {}).items():
            for row in rows:
                self.insert(table, row)

    def _ordered(self, rows, ordering):
        field, descending = split_ordering(ordering)
        present = [row for row in rows if row.get(field) is not None]
        missing = [row for row in rows if row.get(field) is None]
        # nulls last in either direction
        present.sort(key=lambda row: _sort_value(row[field]), reverse=descending)
        return present + missing

    def _rows(self, table):
        self.check_table(table)
        return list(self.tables[table].values())

    def fetch_page(self, table, predicate, ordering, start, end):
        matched = self._ordered(filter_rows(predicate, self._rows(table)), ordering)
        return copy.deepcopy(matched[start:end + 1]), len(matched)

    def fetch_all(self, table, predicate=MATCH_ALL, ordering=None, limit=None):
        matched = self._ordered(filter_rows(predicate, self._rows(table)), ordering)
        if limit is not None:
            matched = matched[:limit]
        return copy.deepcopy(matched)

    def fetch_by_ids(self, table, ids, fields=None):
        self.check_table(table)
        found = {}
        for record_id in distinct(ids):
            row = self.tables[table].get(record_id)
            if row is None:
                continue
            if fields:
                row = {name: row.get(name) for name in ("id", *fields)}
            found[record_id] = copy.deepcopy(row)
        return found

    def get(self, table, record_id):
        self.check_table(table)
        row = self.tables[table].get(str(record_id))
        return copy.deepcopy(row) if row is not None else None

    def insert(self, table, values):
        self.check_table(table)
        now = timezone.now()
        row = dict.fromkeys(COLUMNS[table])
        row.update(DEFAULTS.get(table, {}))
        row.update(values)
        row["id"] = str(values.get("id") or uuid.uuid4())
        row["created_at"] = row["created_at"] or now
        if "updated_at" in row:
            row["updated_at"] = row["updated_at"] or now
        self.tables[table][row["id"]] = row
        logger.debug(f"Inserted {table} row {row['id']}")
        return copy.deepcopy(row)

    def update(self, table, record_id, values):
        self.check_table(table)
        row = self.tables[table].get(str(record_id))
        if row is None:
            return None
        row.update({key: value for key, value in values.items() if key != "id"})
        if "updated_at" in row:
            row["updated_at"] = timezone.now()
        return copy.deepcopy(row)

    def delete(self, table, record_id):
        self.check_table(table)
        removed = self.tables[table].pop(str(record_id), None)
        if removed is None:
            return False
        self._detach(table, removed["id"])
        return True

    def _detach(self, table, record_id):
        """Null out references to a deleted row, mirroring ON DELETE SET NULL."""
        references = {
            "citizens": [("requests", "citizen_id")],
            "military_personnel": [("requests", "military_personnel_id")],
            "requests": [("reminders", "related_request_id")],
        }
        for other, column in references.get(table, []):
            for row in self.tables[other].values():
                if row.get(column) == record_id:
                    row[column] = None

    def ping(self):
        return True
