"""
Derived statistics over already-fetched rows.

All functions are pure and keep insertion order where order is otherwise
undefined, so equal inputs always give equal outputs.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta

from registry.timeutils import to_date, to_datetime

UNKNOWN = "Άγνωστο"

WINDOWS = {
    "week": 7,
    "month": 30,
    "year": 365,
}


def grouped_counts(rows, field: str, unknown: str = UNKNOWN) -> dict:
    """
    Count rows per value of ``field``.

    Keys appear in first-encountered order; null or missing values are counted
    under ``unknown``.
    """
    counts = {}
    for row in rows:
        value = row.get(field)
        key = unknown if value is None else value
        counts[key] = counts.get(key, 0) + 1
    return counts


def top_n(counts: dict, n: int) -> list:
    """The ``n`` largest ``(key, count)`` pairs; ties keep first-encountered order."""
    return sorted(counts.items(), key=lambda item: item[1], reverse=True)[:n]


def window_cutoff(now: datetime, window) -> datetime:
    """Start of a trailing window: ``"week"``, ``"month"``, ``"year"`` or a day count."""
    if isinstance(window, str):
        if window not in WINDOWS:
            raise ValueError(f"Unknown time window: {window}")
        days = WINDOWS[window]
    else:
        days = int(window)
    if days < 0:
        raise ValueError("Time window cannot be negative")
    return now - timedelta(days=days)


def count_since(rows, cutoff: datetime, field: str = "created_at") -> int:
    """Rows whose ``field`` is at or after ``cutoff``."""
    cutoff = to_datetime(cutoff)
    count = 0
    for row in rows:
        moment = to_datetime(row.get(field))
        if moment is not None and moment >= cutoff:
            count += 1
    return count


def percentage(part: int, total: int) -> float:
    if not total:
        return 0.0
    return part / total * 100


def completion_rate(completed: int, total: int) -> float:
    """Completed share of all requests, as a percentage."""
    return percentage(completed, total)


def monthly_counts(rows, field: str = "created_at") -> list:
    """Chronological ``(YYYY-MM, count)`` buckets; rows without a date are skipped."""
    buckets = {}
    for row in rows:
        day = to_date(row.get(field))
        if day is None:
            continue
        key = f"{day.year:04d}-{day.month:02d}"
        buckets[key] = buckets.get(key, 0) + 1
    return sorted(buckets.items())


def year_of(value) -> str:
    day = to_date(value)
    return str(day.year) if day is not None else None


@dataclass(frozen=True)
class Facet:
    """
    One grouping offered next to a filtered list.

    Rows with no value are counted under ``unknown``, or left out when
    ``unknown`` is None. ``transform`` maps a stored value to its group
    (a date to its year, for example).
    """

    field: str
    unknown: str = UNKNOWN
    transform: object = None

    def counts(self, rows) -> list:
        """``[{"value", "count"}]`` largest first; ties keep first-encountered order."""
        counts = {}
        for row in rows:
            value = row.get(self.field)
            if value is not None and self.transform is not None:
                value = self.transform(value)
            if value is None:
                if self.unknown is None:
                    continue
                value = self.unknown
            counts[value] = counts.get(value, 0) + 1
        return [{"value": value, "count": count} for value, count in top_n(counts, len(counts))]
