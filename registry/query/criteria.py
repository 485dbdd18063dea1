"""
Filter criteria and the searchable shape of each table.

``FilterCriteria`` is an immutable value object; views build one from query
parameters, the search controller swaps it wholesale, and the predicate
builder turns it into a predicate tree.
"""

from dataclasses import dataclass, field

from registry.query.predicates import AnyOf, Contains, DateRange, Equals, OneOf
from registry.timeutils import to_date

EXACT = "exact"
CONTAINS = "contains"
FROM = "from"
TO = "to"
FLAG = "flag"

TRUE_VALUES = {"true", "1", "yes", "on"}
FALSE_VALUES = {"false", "0", "no", "off"}


def is_blank(value) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, set, frozenset)):
        return all(is_blank(item) for item in value)
    return False


def parse_flag(value) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in TRUE_VALUES:
        return True
    if text in FALSE_VALUES:
        return False
    raise ValueError(f"Invalid boolean value: {value!r}")


@dataclass(frozen=True)
class FilterRule:
    """How one filter key constrains one or more columns."""

    kind: str
    fields: tuple
    timestamp: bool = False

    def predicate(self, value):
        if self.kind == EXACT:
            if isinstance(value, (list, tuple, set, frozenset)):
                values = tuple(item for item in value if not is_blank(item))
                return self._either([OneOf(name, values) for name in self.fields])
            return self._either([Equals(name, value) for name in self.fields])
        if self.kind == CONTAINS:
            text = str(value).strip()
            return self._either([Contains(name, text) for name in self.fields])
        if self.kind == FROM:
            return DateRange(self.fields[0], start=to_date(value), timestamp=self.timestamp)
        if self.kind == TO:
            return DateRange(self.fields[0], end=to_date(value), timestamp=self.timestamp)
        if self.kind == FLAG:
            return Equals(self.fields[0], parse_flag(value))
        raise ValueError(f"Unknown filter kind: {self.kind}")

    @staticmethod
    def _either(predicates):
        if len(predicates) == 1:
            return predicates[0]
        return AnyOf(tuple(predicates))


def exact(*fields):
    return FilterRule(EXACT, fields)


def contains(*fields):
    return FilterRule(CONTAINS, fields)


def date_from(column, timestamp=False):
    return FilterRule(FROM, (column,), timestamp)


def date_to(column, timestamp=False):
    return FilterRule(TO, (column,), timestamp)


def flag(column):
    return FilterRule(FLAG, (column,))


@dataclass(frozen=True)
class EntitySearch:
    """Searchable text columns, the fixed filter keys and default ordering of a table."""

    table: str
    text_fields: tuple
    filters: dict = field(default_factory=dict)
    ordering: str = "-created_at"
    lookup_fields: tuple = ("surname", "name")


@dataclass(frozen=True)
class FilterCriteria:
    """Immutable set of ``key -> value`` filters. Blank values are dropped."""

    items: tuple = ()

    @classmethod
    def of(cls, **values):
        return cls.from_mapping(values)

    @classmethod
    def from_mapping(cls, values: dict):
        cleaned = {}
        for key, value in values.items():
            if is_blank(value):
                continue
            if isinstance(value, (list, set, frozenset)):
                value = tuple(value)
            cleaned[key] = value
        return cls(tuple(sorted(cleaned.items(), key=lambda item: item[0])))

    @classmethod
    def from_params(cls, search: EntitySearch, params):
        """
        Pick the known filter keys of ``search`` out of request query params.

        Repeated keys (``?status=A&status=B``) become a tuple of values.
        """
        values = {}
        for key in search.filters:
            if hasattr(params, "getlist"):
                found = [item for item in params.getlist(key) if not is_blank(item)]
            else:
                found = [params[key]] if key in params and not is_blank(params[key]) else []
            if len(found) == 1:
                values[key] = found[0]
            elif found:
                values[key] = tuple(found)
        return cls.from_mapping(values)

    def get(self, key, default=None):
        return self.as_dict().get(key, default)

    def replace(self, **changes):
        """A new criteria with ``changes`` applied; blank values remove a key."""
        return FilterCriteria.from_mapping({**self.as_dict(), **changes})

    def as_dict(self) -> dict:
        return dict(self.items)

    def __bool__(self):
        return bool(self.items)


CITIZEN_SEARCH = EntitySearch(
    table="citizens",
    text_fields=("surname", "name", "mobile_phone", "landline_phone", "email"),
    filters={
        "region": exact("area"),
        "municipality": exact("municipality"),
        "electoral_district": exact("electoral_district"),
        "name": contains("name"),
        "surname": contains("surname"),
        "phone": contains("mobile_phone", "landline_phone"),
        "email": contains("email"),
        "recommendation_from": contains("recommendation_from"),
        "created_from": date_from("created_at", timestamp=True),
        "created_to": date_to("created_at", timestamp=True),
        "last_contact_from": date_from("last_contact_date"),
        "last_contact_to": date_to("last_contact_date"),
    },
)

MILITARY_SEARCH = EntitySearch(
    table="military_personnel",
    text_fields=("esso", "name", "surname", "rank", "service_unit", "military_id"),
    filters={
        "rank": exact("rank"),
        "esso_year": exact("esso_year"),
        "esso_letter": exact("esso_letter"),
        "name": contains("name"),
        "surname": contains("surname"),
        "esso": contains("esso"),
        "service_unit": contains("service_unit"),
        "send_from": date_from("send_date"),
        "send_to": date_to("send_date"),
        "created_from": date_from("created_at", timestamp=True),
        "created_to": date_to("created_at", timestamp=True),
    },
)

REQUEST_SEARCH = EntitySearch(
    table="requests",
    text_fields=("request_type", "description", "notes"),
    filters={
        "status": exact("status"),
        "citizen_id": exact("citizen_id"),
        "military_personnel_id": exact("military_personnel_id"),
        "request_type": contains("request_type"),
        "send_from": date_from("send_date"),
        "send_to": date_to("send_date"),
        "completed_from": date_from("completion_date"),
        "completed_to": date_to("completion_date"),
        "created_from": date_from("created_at", timestamp=True),
        "created_to": date_to("created_at", timestamp=True),
    },
    lookup_fields=("request_type", "description"),
)

REMINDER_SEARCH = EntitySearch(
    table="reminders",
    text_fields=("title", "description"),
    filters={
        "reminder_type": exact("reminder_type"),
        "related_request_id": exact("related_request_id"),
        "is_completed": flag("is_completed"),
        "date_from": date_from("reminder_date"),
        "date_to": date_to("reminder_date"),
    },
    ordering="reminder_date",
    lookup_fields=("title",),
)
