import logging

from django.conf import settings

from registry.exceptions import RuleViolation, StoreError
from registry.query.builder import build_predicate, text_predicate
from registry.query.pagination import Paginator
from registry.query.predicates import MATCH_ALL
from registry.stores import get_store

logger = logging.getLogger(__name__)

ERROR_VALIDATION = "validation"
ERROR_NOT_FOUND = "not_found"
ERROR_STORE = "store"

NO_RESULTS = "No results for this search"


def validation_failure(error) -> dict:
    result = {"success": False, "error": ERROR_VALIDATION, "message": str(error)}
    if isinstance(error, RuleViolation):
        result["message"] = error.message
        result["field"] = error.field
    return result


class RecordService:
    """
    Shared list/lookup/CRUD operations over one record table.

    Every method returns a result dict with ``success`` and ``message``;
    successful calls carry ``data`` and failures carry ``error`` (one of
    ``validation``, ``not_found``, ``store``). Store failures are logged here
    and never propagate to the caller.
    """

    search = None
    label = "record"
    plural = "records"
    enricher_class = None
    facets = None

    def __init__(self, store=None, page_size: int = None):
        self.store = store or get_store()
        self.paginator = Paginator(self.store, page_size)
        self.enricher = self.enricher_class(self.store) if self.enricher_class else None

    def enrich(self, rows: list) -> list:
        return self.enricher.enrich(rows) if self.enricher else rows

    def store_failure(self, action: str, error: Exception) -> dict:
        logger.error(f"Error {action} {self.plural}: {str(error)}")
        return {
            "success": False,
            "error": ERROR_STORE,
            "message": f"Could not {action} {self.plural}. Please try again.",
        }

    def not_found(self, record_id) -> dict:
        return {
            "success": False,
            "error": ERROR_NOT_FOUND,
            "message": f"{self.label.capitalize()} {record_id} not found",
        }

    def list(self, term: str = "", criteria=None, page: int = 1) -> dict:
        """
        One page of rows matching ``term`` and ``criteria``.

        Returns:
            dict: ``data`` holds the page dict (results plus page metadata);
            an empty page is a success with a "no results" message
        """
        try:
            predicate = build_predicate(self.search, term, criteria)
            result = self.paginator.get_page(self.search, predicate, page)
            result.items = self.enrich(result.items)
        except StoreError as e:
            return self.store_failure("load", e)
        except ValueError as e:
            return validation_failure(e)

        message = (
            f"Showing {result.first_shown}-{result.last_shown} of {result.total}"
            if result.items
            else NO_RESULTS
        )
        return {"success": True, "message": message, "data": result.as_dict()}

    def groupings(self, term: str = "", criteria=None) -> dict:
        """
        Facet counts over every row matching ``term`` and ``criteria``.

        Returns:
            dict: ``data`` holds ``total`` and ``groupings``, a mapping of facet
            name to ``[{"value", "count"}]`` ordered by count
        """
        try:
            predicate = build_predicate(self.search, term, criteria)
            rows = self.store.fetch_all(self.search.table, predicate)
        except StoreError as e:
            return self.store_failure("load", e)
        except ValueError as e:
            return validation_failure(e)

        groupings = {name: facet.counts(rows) for name, facet in (self.facets or {}).items()}
        return {
            "success": True,
            "message": f"Grouped {len(rows)} {self.plural}",
            "data": {"total": len(rows), "groupings": groupings},
        }

    def lookup(self, term: str = "", limit: int = None) -> dict:
        """Short list for pickers, matched on the lookup fields only."""
        limit = limit or settings.REGISTRY_LOOKUP_LIMIT
        predicate = text_predicate(self.search.lookup_fields, term) or MATCH_ALL
        try:
            rows = self.store.fetch_all(
                self.search.table, predicate, self.search.lookup_fields[0], limit
            )
        except StoreError as e:
            return self.store_failure("load", e)
        return {"success": True, "message": f"Found {len(rows)} {self.plural}", "data": rows}

    def get(self, record_id) -> dict:
        try:
            row = self.store.get(self.search.table, record_id)
            if row is None:
                return self.not_found(record_id)
            return {"success": True, "message": "OK", "data": self.enrich([row])[0]}
        except StoreError as e:
            return self.store_failure("load", e)

    def prepare_create(self, values: dict) -> dict:
        return dict(values)

    def prepare_update(self, values: dict, current: dict) -> dict:
        return dict(values)

    def create(self, values: dict, actor: str = None) -> dict:
        try:
            prepared = self.prepare_create(values)
        except RuleViolation as e:
            return validation_failure(e)
        prepared["created_by"] = actor

        try:
            row = self.store.insert(self.search.table, prepared)
        except StoreError as e:
            return self.store_failure("save", e)

        logger.info(f"Created {self.label} {row['id']} by {actor}")
        return {"success": True, "message": f"{self.label.capitalize()} created", "data": row}

    def update(self, record_id, values: dict, actor: str = None) -> dict:
        try:
            current = self.store.get(self.search.table, record_id)
            if current is None:
                return self.not_found(record_id)
            try:
                prepared = self.prepare_update(values, current)
            except RuleViolation as e:
                return validation_failure(e)
            row = self.store.update(self.search.table, record_id, prepared)
        except StoreError as e:
            return self.store_failure("save", e)

        if row is None:
            return self.not_found(record_id)
        logger.info(f"Updated {self.label} {record_id} by {actor}")
        return {"success": True, "message": f"{self.label.capitalize()} updated", "data": row}

    def delete(self, record_id, actor: str = None) -> dict:
        try:
            deleted = self.store.delete(self.search.table, record_id)
        except StoreError as e:
            return self.store_failure("delete", e)

        if not deleted:
            return self.not_found(record_id)
        logger.info(f"Deleted {self.label} {record_id} by {actor}")
        return {"success": True, "message": f"{self.label.capitalize()} deleted"}
