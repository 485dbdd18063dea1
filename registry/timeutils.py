"""Date coercion shared by predicates, rules and statistics.

Rows coming from the ORM carry ``date``/``datetime`` objects while rows from the
hosted store carry ISO strings; everything is compared in the local timezone.
"""

from datetime import date, datetime

from django.utils import timezone
from django.utils.dateparse import parse_date, parse_datetime


def to_datetime(value):
    """Coerce a datetime, date or ISO string into an aware datetime, or None."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        result = value
    elif isinstance(value, date):
        result = datetime(value.year, value.month, value.day)
    else:
        text = str(value)
        result = parse_datetime(text)
        if result is None:
            day = parse_date(text)
            if day is None:
                raise ValueError(f"Invalid date value: {value!r}")
            result = datetime(day.year, day.month, day.day)
    if timezone.is_naive(result):
        result = timezone.make_aware(result)
    return result


def to_date(value):
    """Coerce a datetime, date or ISO string into a local calendar date, or None."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return timezone.localtime(value).date() if timezone.is_aware(value) else value.date()
    if isinstance(value, date):
        return value
    text = str(value)
    day = parse_date(text)
    if day is not None:
        return day
    moment = parse_datetime(text)
    if moment is None:
        raise ValueError(f"Invalid date value: {value!r}")
    return to_date(moment)
