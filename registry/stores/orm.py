import logging
import uuid
from functools import reduce

from django.core.exceptions import ValidationError
from django.db import DatabaseError, connection
from django.db.models import Q

from registry.exceptions import StoreError
from registry.models import Citizen, MilitaryPersonnel, Reminder, Request
from registry.query.predicates import (
    MATCH_ALL,
    AllOf,
    AnyOf,
    Contains,
    DateRange,
    Equals,
    NotNull,
    OneOf,
)
from registry.stores.base import RecordStore, distinct, is_valid_id

logger = logging.getLogger(__name__)

MODELS = {
    "citizens": Citizen,
    "military_personnel": MilitaryPersonnel,
    "requests": Request,
    "reminders": Reminder,
}


def compile_q(predicate) -> Q:
    """Translate a predicate tree into a Django ``Q`` object."""
    if isinstance(predicate, Contains):
        return Q(**{f"{predicate.field}__icontains": predicate.value})
    if isinstance(predicate, Equals):
        if predicate.value is None:
            return Q(**{f"{predicate.field}__isnull": True})
        return Q(**{predicate.field: predicate.value})
    if isinstance(predicate, OneOf):
        return Q(**{f"{predicate.field}__in": list(predicate.values)})
    if isinstance(predicate, DateRange):
        lookup = f"{predicate.field}__date" if predicate.timestamp else predicate.field
        query = Q()
        if predicate.start is not None:
            query &= Q(**{f"{lookup}__gte": predicate.start})
        if predicate.end is not None:
            query &= Q(**{f"{lookup}__lte": predicate.end})
        return query & Q(**{f"{predicate.field}__isnull": False})
    if isinstance(predicate, NotNull):
        return Q(**{f"{predicate.field}__isnull": False})
    if isinstance(predicate, AnyOf):
        if not predicate.children:
            return Q(pk__in=[])
        return reduce(lambda left, right: left | right, map(compile_q, predicate.children))
    if isinstance(predicate, AllOf):
        return reduce(lambda left, right: left & right, map(compile_q, predicate.children), Q())
    raise ValueError(f"Unsupported predicate: {predicate!r}")


def to_row(instance) -> dict:
    """Model instance -> plain row dict with string ids."""
    row = {}
    for field in instance._meta.concrete_fields:
        value = getattr(instance, field.attname)
        if isinstance(value, uuid.UUID):
            value = str(value)
        row[field.attname] = value
    return row


class OrmStore(RecordStore):
    """Record store backed by the Django database."""

    name = "orm"

    def model(self, table):
        self.check_table(table)
        return MODELS[table]

    def _queryset(self, table, predicate, ordering=None):
        queryset = self.model(table).objects.filter(compile_q(predicate or MATCH_ALL))
        if ordering:
            queryset = queryset.order_by(ordering)
        return queryset

    def fetch_page(self, table, predicate, ordering, start, end):
        try:
            queryset = self._queryset(table, predicate, ordering)
            total = queryset.count()
            rows = [to_row(instance) for instance in queryset[start:end + 1]]
        except ValidationError as e:
            raise ValueError(f"Invalid filter value for {table}: {e.messages}")
        except DatabaseError as e:
            logger.error(f"Error fetching {table} page: {str(e)}")
            raise StoreError(f"Error fetching {table}: {str(e)}") from e
        return rows, total

    def fetch_all(self, table, predicate=MATCH_ALL, ordering=None, limit=None):
        try:
            queryset = self._queryset(table, predicate, ordering)
            if limit is not None:
                queryset = queryset[:limit]
            return [to_row(instance) for instance in queryset]
        except ValidationError as e:
            raise ValueError(f"Invalid filter value for {table}: {e.messages}")
        except DatabaseError as e:
            logger.error(f"Error fetching {table}: {str(e)}")
            raise StoreError(f"Error fetching {table}: {str(e)}") from e

    def fetch_by_ids(self, table, ids, fields=None):
        ids = [value for value in distinct(ids) if is_valid_id(value)]
        if not ids:
            return {}
        try:
            instances = self.model(table).objects.filter(pk__in=ids)
            found = {}
            for instance in instances:
                row = to_row(instance)
                if fields:
                    row = {name: row.get(name) for name in ("id", *fields)}
                found[row["id"]] = row
            return found
        except DatabaseError as e:
            logger.error(f"Error looking up {table} by id: {str(e)}")
            raise StoreError(f"Error looking up {table}: {str(e)}") from e

    def _instance(self, table, record_id):
        try:
            return self.model(table).objects.filter(pk=record_id).first()
        except ValidationError:
            return None

    def get(self, table, record_id):
        try:
            instance = self._instance(table, record_id)
        except DatabaseError as e:
            logger.error(f"Error getting {table} {record_id}: {str(e)}")
            raise StoreError(f"Error getting {table}: {str(e)}") from e
        return to_row(instance) if instance is not None else None

    def insert(self, table, values):
        try:
            instance = self.model(table)(**values)
            instance.save()
            return to_row(instance)
        except DatabaseError as e:
            logger.error(f"Error inserting into {table}: {str(e)}")
            raise StoreError(f"Error saving {table}: {str(e)}") from e

    def update(self, table, record_id, values):
        try:
            instance = self._instance(table, record_id)
            if instance is None:
                return None
            for key, value in values.items():
                if key != "id":
                    setattr(instance, key, value)
            instance.save()
            return to_row(instance)
        except DatabaseError as e:
            logger.error(f"Error updating {table} {record_id}: {str(e)}")
            raise StoreError(f"Error saving {table}: {str(e)}") from e

    def delete(self, table, record_id):
        try:
            instance = self._instance(table, record_id)
            if instance is None:
                return False
            instance.delete()
            return True
        except DatabaseError as e:
            logger.error(f"Error deleting {table} {record_id}: {str(e)}")
            raise StoreError(f"Error deleting {table}: {str(e)}") from e

    def ping(self):
        try:
            connection.ensure_connection()
            return True
        except DatabaseError as e:
            logger.error(f"Database not reachable: {str(e)}")
            return False
