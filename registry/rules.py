"""
Domain rules that hold regardless of which record store is active.

These are pure functions over plain row dictionaries so that the services,
the ORM models and the tests all apply exactly the same logic.
"""

import re
from datetime import date

from django.utils import timezone

from registry.exceptions import RuleViolation
from registry.reference import ESSO_LETTERS, STATUS_COMPLETED, STATUS_PENDING
from registry.timeutils import to_date

OVERDUE_AFTER_DAYS = 25

POLICY_CLEAR = "clear"
POLICY_RETAIN = "retain"
COMPLETION_DATE_POLICIES = (POLICY_CLEAR, POLICY_RETAIN)

ESSO_YEAR_PATTERN = re.compile(r"^\d{4}$")


def derive_esso(year, letter):
    """
    Build the ESSO code from its two sources.

    Args:
        year: 4-digit intake year (string)
        letter: intake group letter (Α, Β, Γ, Δ, Ε, ΣΤ)

    Returns:
        str or None: "{year}{letter}" when both are present, None otherwise
    """
    if not year or not letter:
        return None
    year = str(year)
    if not ESSO_YEAR_PATTERN.match(year):
        raise RuleViolation(f"ESSO year must have 4 digits, got {year!r}", field="esso_year")
    if letter not in ESSO_LETTERS:
        raise RuleViolation(f"Unknown ESSO letter {letter!r}", field="esso_letter")
    return f"{year}{letter}"


def with_esso(values: dict, current: dict = None) -> dict:
    """Return a copy of ``values`` with ``esso`` recomputed when either source changes."""
    result = dict(values)
    result.pop("esso", None)
    if current is None or "esso_year" in values or "esso_letter" in values:
        merged = {**(current or {}), **values}
        result["esso"] = derive_esso(merged.get("esso_year"), merged.get("esso_letter"))
    return result


def days_since(value, today: date = None):
    day = to_date(value)
    if day is None:
        return None
    today = today or timezone.localdate()
    return (today - day).days


def is_overdue(row: dict, today: date = None, threshold: int = OVERDUE_AFTER_DAYS) -> bool:
    """A pending request whose send date is at least ``threshold`` days in the past."""
    if row.get("status") != STATUS_PENDING:
        return False
    elapsed = days_since(row.get("send_date"), today)
    return elapsed is not None and elapsed >= threshold


def check_requester(citizen_id, military_personnel_id):
    """A request references exactly one of a citizen or a military person."""
    if citizen_id and military_personnel_id:
        raise RuleViolation(
            "A request cannot reference both a citizen and military personnel",
            field="citizen_id",
        )
    if not citizen_id and not military_personnel_id:
        raise RuleViolation(
            "A request must reference either a citizen or military personnel",
            field="citizen_id",
        )


def apply_status_change(
    changes: dict, current: dict = None, policy: str = POLICY_CLEAR, today: date = None
) -> dict:
    """
    Reconcile the completion date with the status a write will leave behind.

    Entering the completed state stamps today's date unless one is supplied.
    Any other resulting status drops the completion date under the "clear"
    policy and leaves it alone under "retain".
    """
    if policy not in COMPLETION_DATE_POLICIES:
        raise ValueError(f"Unknown completion date policy: {policy}")

    current = current or {}
    result = dict(changes)
    status = result.get("status") or current.get("status") or STATUS_PENDING
    if not current:
        result["status"] = status

    if status == STATUS_COMPLETED:
        completion = result.get("completion_date", current.get("completion_date"))
        if not completion:
            result["completion_date"] = today or timezone.localdate()
    elif policy == POLICY_CLEAR:
        if result.get("completion_date") or current.get("completion_date"):
            result["completion_date"] = None
    return result
