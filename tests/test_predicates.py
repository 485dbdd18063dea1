"""
Tests for the predicate tree, filter criteria and predicate builder.
"""

from datetime import date, datetime

import pytest
from django.http import QueryDict
from django.utils import timezone

from registry.query.builder import build_predicate
from registry.query.criteria import (
    CITIZEN_SEARCH,
    MILITARY_SEARCH,
    REMINDER_SEARCH,
    REQUEST_SEARCH,
    FilterCriteria,
)
from registry.query.predicates import (
    MATCH_ALL,
    AllOf,
    AnyOf,
    Contains,
    DateRange,
    Equals,
    NotNull,
    OneOf,
    filter_rows,
)

CITIZENS = [
    {"id": "1", "surname": "Παπαδόπουλος", "name": "Γιώργος", "area": "Α", "mobile_phone": "6944111222", "landline_phone": None, "email": "gp@example.com", "municipality": "ΚΑΛΑΜΑΡΙΑΣ"},
    {"id": "2", "surname": "Ιωάννου", "name": "Μαρία", "area": "Α", "mobile_phone": None, "landline_phone": "2310123456", "email": None, "municipality": "ΘΕΣΣΑΛΟΝΙΚΗΣ"},
    {"id": "3", "surname": "Δημητρίου", "name": "Ελένη", "area": "Α", "mobile_phone": "6977000111", "landline_phone": None, "email": "ed@example.com", "municipality": "ΚΑΛΑΜΑΡΙΑΣ"},
    {"id": "4", "surname": "Κωνσταντίνου", "name": "Νίκος", "area": "Β", "mobile_phone": "6988000222", "landline_phone": None, "email": None, "municipality": None},
    {"id": "5", "surname": "Smith", "name": "John", "area": "Β", "mobile_phone": None, "landline_phone": None, "email": "JOHN@example.com", "municipality": "ΑΛΛΟ"},
]


def ids(rows):
    return [row["id"] for row in rows]


class TestPredicates:
    """Test cases for in-memory predicate evaluation."""

    def test_contains_is_case_insensitive(self):
        """Test substring matching ignores case, including Greek text."""
        assert Contains("email", "john").matches({"email": "JOHN@example.com"})
        assert Contains("surname", "παπα").matches({"surname": "Παπαδόπουλος"})

    def test_contains_matches_wildcards_literally(self):
        assert Contains("notes", "50%").matches({"notes": "έκπτωση 50%"})
        assert not Contains("notes", "50%").matches({"notes": "έκπτωση 500"})
        assert not Contains("surname", "Α_Β").matches({"surname": "ΑΧΒ"})

    def test_contains_never_matches_null(self):
        """Test a null column does not match any substring."""
        assert not Contains("email", "").matches({"email": None})
        assert not Contains("email", "a").matches({})

    def test_equals_and_one_of(self):
        """Test exact and any-of equality."""
        assert Equals("area", "Α").matches({"area": "Α"})
        assert not Equals("area", "Α").matches({"area": "α"})
        assert OneOf("status", ("A", "B")).matches({"status": "B"})
        assert not OneOf("status", ("A", "B")).matches({"status": "C"})

    def test_date_range_is_inclusive(self):
        """Test both bounds of a date range are closed."""
        predicate = DateRange("send_date", start=date(2025, 1, 1), end=date(2025, 1, 31))

        assert predicate.matches({"send_date": date(2025, 1, 1)})
        assert predicate.matches({"send_date": "2025-01-31"})
        assert not predicate.matches({"send_date": date(2025, 2, 1)})
        assert not predicate.matches({"send_date": None})

    def test_timestamp_range_uses_local_date(self):
        """Test datetimes are compared by their local calendar date."""
        predicate = DateRange("created_at", end=date(2025, 3, 1), timestamp=True)
        late_evening = timezone.make_aware(datetime(2025, 3, 1, 23, 30))

        assert predicate.matches({"created_at": late_evening})

    def test_empty_or_matches_nothing_and_empty_and_matches_everything(self):
        """Test the identities of empty logical nodes."""
        assert not AnyOf(()).matches({"a": 1})
        assert AllOf(()).matches({"a": 1})
        assert MATCH_ALL.matches({})

    def test_not_null(self):
        assert NotNull("send_date").matches({"send_date": date(2025, 1, 1)})
        assert not NotNull("send_date").matches({"send_date": None})

    def test_filter_rows_leaves_input_untouched(self):
        """Test filtering returns a new list and keeps original order."""
        rows = list(CITIZENS)

        result = filter_rows(Equals("area", "Α"), rows)

        assert ids(result) == ["1", "2", "3"]
        assert rows == CITIZENS


class TestFilterCriteria:
    """Test cases for the immutable filter criteria object."""

    def test_blank_values_are_dropped(self):
        """Test empty strings, None and empty lists add no key."""
        criteria = FilterCriteria.of(region="Α", municipality="", email=None, status=[])

        assert criteria.as_dict() == {"region": "Α"}

    def test_key_order_does_not_matter(self):
        """Test criteria built in different orders are equal."""
        assert FilterCriteria.of(a="1", b="2") == FilterCriteria.of(b="2", a="1")

    def test_replace_returns_new_object(self):
        """Test replace leaves the original untouched and removes blanked keys."""
        original = FilterCriteria.of(region="Α", name="Μαρ")

        changed = original.replace(region="Β", name="")

        assert original.as_dict() == {"region": "Α", "name": "Μαρ"}
        assert changed.as_dict() == {"region": "Β"}

    def test_from_params_keeps_known_keys_only(self):
        """Test query params outside the table's filter set are ignored."""
        params = QueryDict("region=Α&page=2&search=x&unknown=1")

        criteria = FilterCriteria.from_params(CITIZEN_SEARCH, params)

        assert criteria.as_dict() == {"region": "Α"}

    def test_from_params_repeated_keys_become_tuple(self):
        """Test a repeated query param is read as a list of values."""
        params = QueryDict("status=ΕΚΚΡΕΜΕΙ&status=ΑΠΟΡΡΙΦΘΗΚΕ")

        criteria = FilterCriteria.from_params(REQUEST_SEARCH, params)

        assert criteria.get("status") == ("ΕΚΚΡΕΜΕΙ", "ΑΠΟΡΡΙΦΘΗΚΕ")

    def test_empty_criteria_is_falsy(self):
        assert not FilterCriteria()
        assert FilterCriteria.of(region="Α")


class TestBuildPredicate:
    """Test cases for composing term and filters into one predicate."""

    def test_empty_term_and_filters_return_everything(self):
        """Test no term and no filters yields the unfiltered collection."""
        predicate = build_predicate(CITIZEN_SEARCH, "", FilterCriteria())

        assert ids(filter_rows(predicate, CITIZENS)) == ids(CITIZENS)

    def test_whitespace_term_adds_nothing(self):
        """Test a whitespace-only term is treated as empty."""
        predicate = build_predicate(CITIZEN_SEARCH, "   ")

        assert predicate == AllOf(())

    def test_term_matches_any_text_field(self):
        """Test the term is ORed over surname, name, phones and email."""
        assert ids(filter_rows(build_predicate(CITIZEN_SEARCH, "2310"), CITIZENS)) == ["2"]
        assert ids(filter_rows(build_predicate(CITIZEN_SEARCH, "john@"), CITIZENS)) == ["5"]
        assert ids(filter_rows(build_predicate(CITIZEN_SEARCH, " ελένη "), CITIZENS)) == ["3"]

    def test_filter_order_does_not_change_result(self):
        """Test ANDed filters give the same rows whichever order they are applied in."""
        first = FilterCriteria.from_mapping({"region": "Α", "municipality": "ΚΑΛΑΜΑΡΙΑΣ"})
        second = FilterCriteria.from_mapping({"municipality": "ΚΑΛΑΜΑΡΙΑΣ", "region": "Α"})

        by_first = filter_rows(build_predicate(CITIZEN_SEARCH, "", first), CITIZENS)
        by_second = filter_rows(build_predicate(CITIZEN_SEARCH, "", second), CITIZENS)
        manual = filter_rows(
            Equals("area", "Α"), filter_rows(Equals("municipality", "ΚΑΛΑΜΑΡΙΑΣ"), CITIZENS)
        )

        assert ids(by_first) == ids(by_second) == ids(manual) == ["1", "3"]

    def test_region_filter_then_term_narrows(self):
        """Test a region filter alone keeps its rows and an unrelated term removes them all."""
        region = FilterCriteria.of(region="Α")

        assert len(filter_rows(build_predicate(CITIZEN_SEARCH, "", region), CITIZENS)) == 3
        assert len(filter_rows(build_predicate(CITIZEN_SEARCH, "xyz", region), CITIZENS)) == 0

    def test_phone_filter_matches_mobile_or_landline(self):
        """Test the phone filter looks at both phone columns."""
        criteria = FilterCriteria.of(phone="69")
        assert ids(filter_rows(build_predicate(CITIZEN_SEARCH, "", criteria), CITIZENS)) == [
            "1",
            "3",
            "4",
        ]

        criteria = FilterCriteria.of(phone="2310")
        assert ids(filter_rows(build_predicate(CITIZEN_SEARCH, "", criteria), CITIZENS)) == ["2"]

    def test_list_value_means_any_of(self):
        """Test an exact filter given several values matches any of them."""
        criteria = FilterCriteria.of(municipality=["ΑΛΛΟ", "ΘΕΣΣΑΛΟΝΙΚΗΣ"])

        rows = filter_rows(build_predicate(CITIZEN_SEARCH, "", criteria), CITIZENS)

        assert ids(rows) == ["2", "5"]

    def test_date_filters_become_ranges(self):
        """Test from/to keys compile to date range nodes."""
        predicate = build_predicate(
            MILITARY_SEARCH, "", FilterCriteria.of(send_from="2025-01-01", send_to="2025-01-31")
        )

        assert DateRange("send_date", start=date(2025, 1, 1)) in predicate.children
        assert DateRange("send_date", end=date(2025, 1, 31)) in predicate.children

    def test_flag_filter_parses_booleans(self):
        """Test the completed flag accepts query-string booleans."""
        predicate = build_predicate(REMINDER_SEARCH, "", FilterCriteria.of(is_completed="false"))

        assert predicate.children == (Equals("is_completed", False),)

    def test_unknown_filter_key_raises(self):
        """Test a key outside the table's filter set is rejected."""
        with pytest.raises(ValueError, match="Unknown filter"):
            build_predicate(CITIZEN_SEARCH, "", FilterCriteria.of(rank="Λοχίας"))

    def test_invalid_date_raises(self):
        with pytest.raises(ValueError):
            build_predicate(REQUEST_SEARCH, "", FilterCriteria.of(send_from="not-a-date"))

    def test_invalid_flag_raises(self):
        with pytest.raises(ValueError):
            build_predicate(REMINDER_SEARCH, "", FilterCriteria.of(is_completed="maybe"))

    def test_builder_does_not_mutate_criteria(self):
        """Test building a predicate leaves the criteria unchanged."""
        criteria = FilterCriteria.of(region="Α", name="Γιώ")
        before = criteria.as_dict()

        build_predicate(CITIZEN_SEARCH, "term", criteria)

        assert criteria.as_dict() == before
