"""
Record store for the hosted PostgreSQL instance, reached through its PostgREST
interface.

Predicates compile to PostgREST query parameters. Pages are requested with a
``Range`` header and ``Prefer: count=exact`` so one round-trip returns both the
rows and the total, read back from ``Content-Range``.
"""

import json
import logging
from datetime import timedelta

import requests
from django.conf import settings
from django.core.serializers.json import DjangoJSONEncoder

from registry.exceptions import StoreError
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
from registry.stores.base import RecordStore, distinct, is_valid_id, split_ordering
from registry.timeutils import to_datetime

logger = logging.getLogger(__name__)

RESERVED = set(',.:()"\\ ')


def quote(value) -> str:
    """Double-quote a value that contains PostgREST reserved characters."""
    text = str(value)
    if not any(char in RESERVED for char in text):
        return text
    escaped = text.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def like_term(value) -> str:
    """Substring pattern for ``ilike`` with the LIKE wildcards in ``value`` matched literally."""
    text = str(value).replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"*{text}*"


def _literal(value):
    if hasattr(value, "isoformat"):
        return value.isoformat()
    return str(value)


def leaf_conditions(predicate, nested=False) -> list:
    """``(column, "op.value")`` pairs for a leaf predicate."""
    fmt = quote if nested else str
    if isinstance(predicate, Contains):
        return [(predicate.field, f"ilike.{fmt(like_term(predicate.value))}")]
    if isinstance(predicate, Equals):
        if predicate.value is None:
            return [(predicate.field, "is.null")]
        if isinstance(predicate.value, bool):
            return [(predicate.field, f"is.{str(predicate.value).lower()}")]
        return [(predicate.field, f"eq.{fmt(_literal(predicate.value))}")]
    if isinstance(predicate, OneOf):
        values = ",".join(quote(_literal(value)) for value in predicate.values)
        return [(predicate.field, f"in.({values})")]
    if isinstance(predicate, DateRange):
        if predicate.start is None and predicate.end is None:
            return [(predicate.field, "not.is.null")]
        conditions = []
        if predicate.timestamp:
            # whole local days: [start 00:00, end + 1 day 00:00)
            if predicate.start is not None:
                start = to_datetime(predicate.start).isoformat()
                conditions.append((predicate.field, f"gte.{fmt(start)}"))
            if predicate.end is not None:
                end = to_datetime(predicate.end + timedelta(days=1)).isoformat()
                conditions.append((predicate.field, f"lt.{fmt(end)}"))
        else:
            if predicate.start is not None:
                conditions.append((predicate.field, f"gte.{predicate.start.isoformat()}"))
            if predicate.end is not None:
                conditions.append((predicate.field, f"lte.{predicate.end.isoformat()}"))
        return conditions
    if isinstance(predicate, NotNull):
        return [(predicate.field, "not.is.null")]
    return None


def logic_expression(predicate) -> str:
    """A predicate rendered inside an ``or=(...)``/``and=(...)`` tree."""
    conditions = leaf_conditions(predicate, nested=True)
    if conditions is not None:
        rendered = [f"{column}.{condition}" for column, condition in conditions]
        return rendered[0] if len(rendered) == 1 else f"and({','.join(rendered)})"
    if isinstance(predicate, AnyOf):
        if not predicate.children:
            return "id.is.null"
        return f"or({','.join(logic_expression(child) for child in predicate.children)})"
    if isinstance(predicate, AllOf):
        if not predicate.children:
            return "id.not.is.null"
        return f"and({','.join(logic_expression(child) for child in predicate.children)})"
    raise ValueError(f"Unsupported predicate: {predicate!r}")


def compile_params(predicate) -> list:
    """
    Translate a predicate tree into PostgREST query parameters.

    Top-level leaves become plain column filters (ANDed by PostgREST); a single
    top-level OR becomes ``or=(...)`` and several are wrapped in ``and=(...)``.
    """
    pending = [predicate or MATCH_ALL]
    params = []
    groups = []
    while pending:
        current = pending.pop(0)
        conditions = leaf_conditions(current)
        if conditions is not None:
            params.extend(conditions)
        elif isinstance(current, AllOf):
            pending.extend(current.children)
        elif isinstance(current, AnyOf):
            if current.children:
                groups.append(current)
            else:
                params.append(("id", "is.null"))
        else:
            raise ValueError(f"Unsupported predicate: {current!r}")

    if len(groups) == 1:
        params.append(("or", f"({','.join(logic_expression(c) for c in groups[0].children)})"))
    elif groups:
        params.append(("and", f"({','.join(logic_expression(group) for group in groups)})"))
    return params


def order_param(ordering: str) -> str:
    field, descending = split_ordering(ordering)
    return f"{field}.{'desc' if descending else 'asc'}.nullslast"


def parse_total(content_range: str):
    """``"0-19/45"`` -> 45; ``"*/0"`` -> 0; unknown totals give None."""
    if not content_range or "/" not in content_range:
        return None
    total = content_range.rsplit("/", 1)[1]
    return int(total) if total.isdigit() else None


class PostgrestStore(RecordStore):
    """Record store speaking to the hosted store's REST interface."""

    name = "postgrest"

    def __init__(self, base_url=None, api_key=None, timeout=None):
        self.base_url = (base_url or settings.POSTGREST_URL).rstrip("/")
        self.api_key = api_key if api_key is not None else settings.POSTGREST_API_KEY
        self.timeout = timeout or settings.REGISTRY_STORE_TIMEOUT

    def headers(self, **extra) -> dict:
        headers = {
            "apikey": self.api_key,
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        headers.update(extra)
        return headers

    def url(self, table):
        self.check_table(table)
        return f"{self.base_url}/{table}"

    def _check(self, response, action):
        if response.status_code >= 400:
            try:
                detail = response.json().get("message", response.text)
            except ValueError:
                detail = response.text
            logger.error(f"Store rejected {action}. Status: {response.status_code}, {detail}")
            raise StoreError(f"Error {action}: {response.status_code} {detail}")
        return response

    def _send(self, method, action, *args, **kwargs):
        try:
            return method(*args, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            logger.error(f"Error {action}: {str(e)}")
            raise StoreError(f"Error {action}: {str(e)}") from e

    def fetch_page(self, table, predicate, ordering, start, end):
        action = f"fetching {table}"
        params = [("select", "*"), ("order", order_param(ordering)), *compile_params(predicate)]
        response = self._send(
            requests.get,
            action,
            self.url(table),
            params=params,
            headers=self.headers(
                **{"Range-Unit": "items", "Range": f"{start}-{end}", "Prefer": "count=exact"}
            ),
        )
        total = parse_total(response.headers.get("Content-Range"))
        if response.status_code == 416:
            # page past the end: no rows, total still reported
            return [], total or 0
        rows = self._check(response, action).json()
        return rows, total if total is not None else len(rows)

    def fetch_all(self, table, predicate=MATCH_ALL, ordering=None, limit=None):
        action = f"fetching {table}"
        params = [("select", "*"), *compile_params(predicate)]
        if ordering:
            params.append(("order", order_param(ordering)))
        if limit is not None:
            params.append(("limit", str(limit)))
        response = self._send(
            requests.get, action, self.url(table), params=params, headers=self.headers()
        )
        return self._check(response, action).json()

    def fetch_by_ids(self, table, ids, fields=None):
        ids = [value for value in distinct(ids) if is_valid_id(value)]
        if not ids:
            return {}
        action = f"looking up {table}"
        select = ",".join(("id", *fields)) if fields else "*"
        response = self._send(
            requests.get,
            action,
            self.url(table),
            params=[("select", select), ("id", f"in.({','.join(ids)})")],
            headers=self.headers(),
        )
        return {row["id"]: row for row in self._check(response, action).json()}

    def get(self, table, record_id):
        if not is_valid_id(record_id):
            return None
        action = f"getting {table}"
        response = self._send(
            requests.get,
            action,
            self.url(table),
            params=[("select", "*"), ("id", f"eq.{record_id}")],
            headers=self.headers(),
        )
        rows = self._check(response, action).json()
        return rows[0] if rows else None

    def insert(self, table, values):
        action = f"saving {table}"
        response = self._send(
            requests.post,
            action,
            self.url(table),
            data=json.dumps(values, cls=DjangoJSONEncoder),
            headers=self.headers(Prefer="return=representation"),
        )
        rows = self._check(response, action).json()
        return rows[0]

    def update(self, table, record_id, values):
        if not is_valid_id(record_id):
            return None
        action = f"saving {table}"
        response = self._send(
            requests.patch,
            action,
            self.url(table),
            params=[("id", f"eq.{record_id}")],
            data=json.dumps(values, cls=DjangoJSONEncoder),
            headers=self.headers(Prefer="return=representation"),
        )
        rows = self._check(response, action).json()
        return rows[0] if rows else None

    def delete(self, table, record_id):
        if not is_valid_id(record_id):
            return False
        action = f"deleting {table}"
        response = self._send(
            requests.delete,
            action,
            self.url(table),
            params=[("id", f"eq.{record_id}")],
            headers=self.headers(Prefer="return=representation"),
        )
        return bool(self._check(response, action).json())

    def ping(self):
        try:
            response = requests.get(f"{self.base_url}/", headers=self.headers(), timeout=self.timeout)
            return response.status_code < 500
        except requests.RequestException as e:
            logger.error(f"Store not reachable: {str(e)}")
            return False
