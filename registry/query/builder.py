"""Compose a free-text term and filter criteria into one predicate."""

import logging

from registry.query.criteria import EntitySearch, FilterCriteria
from registry.query.predicates import AllOf, AnyOf, Contains, Predicate

logger = logging.getLogger(__name__)


def text_predicate(fields, term: str):
    """OR of case-insensitive substring matches of ``term`` over ``fields``, or None."""
    text = (term or "").strip()
    if not text:
        return None
    return AnyOf(tuple(Contains(name, text) for name in fields))


def build_predicate(
    search: EntitySearch, term: str = "", criteria: FilterCriteria = None
) -> Predicate:
    """
    Build the predicate for a search over one table.

    Args:
        search: The table's searchable shape
        term: Free text; blank contributes nothing
        criteria: Structured filters; absent keys impose no constraint

    Returns:
        Predicate: AND of the text predicate and every active filter

    Raises:
        ValueError: For a filter key the table does not know, or an invalid
            date/boolean value
    """
    parts = []
    text = text_predicate(search.text_fields, term)
    if text is not None:
        parts.append(text)

    for key, value in (criteria or FilterCriteria()).items:
        rule = search.filters.get(key)
        if rule is None:
            raise ValueError(f"Unknown filter '{key}' for {search.table}")
        parts.append(rule.predicate(value))

    logger.debug(f"Built predicate for {search.table}: term={term!r}, filters={len(parts)}")
    return AllOf(tuple(parts))
