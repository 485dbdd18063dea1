"""
Store-independent predicate tree.

Each node knows how to evaluate itself against a row dictionary; the record
stores compile the same tree into their own query language.
"""

from dataclasses import dataclass
from datetime import date

from registry.timeutils import to_date


class Predicate:
    """Base class of every predicate node."""

    def matches(self, row: dict) -> bool:
        raise NotImplementedError


@dataclass(frozen=True)
class Contains(Predicate):
    """Case-insensitive substring match."""

    field: str
    value: str

    def matches(self, row):
        found = row.get(self.field)
        if found is None:
            return False
        return str(self.value).casefold() in str(found).casefold()


@dataclass(frozen=True)
class Equals(Predicate):
    field: str
    value: object

    def matches(self, row):
        return row.get(self.field) == self.value


@dataclass(frozen=True)
class OneOf(Predicate):
    """Equality against any of several values."""

    field: str
    values: tuple

    def matches(self, row):
        return row.get(self.field) in self.values


@dataclass(frozen=True)
class DateRange(Predicate):
    """
    Inclusive calendar-date bounds; either side may be open.

    ``timestamp`` marks fields holding datetimes, which are compared by their
    local calendar date.
    """

    field: str
    start: date = None
    end: date = None
    timestamp: bool = False

    def matches(self, row):
        day = to_date(row.get(self.field))
        if day is None:
            return False
        if self.start is not None and day < self.start:
            return False
        if self.end is not None and day > self.end:
            return False
        return True


@dataclass(frozen=True)
class NotNull(Predicate):
    field: str

    def matches(self, row):
        return row.get(self.field) is not None


@dataclass(frozen=True)
class AnyOf(Predicate):
    """Logical OR of the children. An empty OR matches nothing."""

    children: tuple

    def matches(self, row):
        return any(child.matches(row) for child in self.children)


@dataclass(frozen=True)
class AllOf(Predicate):
    """Logical AND of the children. An empty AND matches everything."""

    children: tuple = ()

    def matches(self, row):
        return all(child.matches(row) for child in self.children)


MATCH_ALL = AllOf(())


def filter_rows(predicate: Predicate, rows) -> list:
    """Rows satisfying ``predicate``, in their original order. Inputs are left untouched."""
    predicate = predicate or MATCH_ALL
    return [row for row in rows if predicate.matches(row)]
