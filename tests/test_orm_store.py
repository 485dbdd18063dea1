"""
Tests for the Django database record store.
"""

from datetime import date

import pytest
from django.db.models import Q
from django.utils import timezone

from registry.models import Citizen, MilitaryPersonnel, Request
from registry.query.builder import build_predicate
from registry.query.criteria import CITIZEN_SEARCH, REQUEST_SEARCH, FilterCriteria
from registry.query.pagination import Paginator
from registry.query.predicates import AnyOf, Contains, Equals
from registry.reference import STATUS_PENDING
from registry.stores.memory import MemoryStore
from registry.stores.orm import OrmStore, compile_q


class TestCompileQ:
    """Test cases for predicate -> Q translation."""

    def test_contains(self):
        assert compile_q(Contains("name", "Μαρ")) == Q(name__icontains="Μαρ")

    def test_null_equality(self):
        assert compile_q(Equals("citizen_id", None)) == Q(citizen_id__isnull=True)

    def test_empty_or_matches_nothing(self):
        assert compile_q(AnyOf(())) == Q(pk__in=[])


@pytest.mark.django_db
class TestOrmStore:
    """Test cases for ORM-backed reads and writes."""

    def setup_method(self):
        self.store = OrmStore()

    def test_insert_returns_plain_row(self):
        row = self.store.insert("citizens", {"surname": "Ιωάννου", "name": "Μαρία", "area": "Α"})

        assert isinstance(row["id"], str)
        assert row["surname"] == "Ιωάννου"
        assert row["created_at"] is not None
        assert Citizen.objects.filter(pk=row["id"]).exists()

    def test_region_filter_and_term(self):
        """Test 3 of 5 citizens in region Α, narrowed to 0 by an unrelated term."""
        for index in range(3):
            self.store.insert("citizens", {"surname": f"Α{index}", "name": "Χ", "area": "Α"})
        for index in range(2):
            self.store.insert("citizens", {"surname": f"Β{index}", "name": "Χ", "area": "Β"})
        paginator = Paginator(self.store, page_size=20)
        region = FilterCriteria.of(region="Α")

        filtered = paginator.get_page(CITIZEN_SEARCH, build_predicate(CITIZEN_SEARCH, "", region), 1)
        narrowed = paginator.get_page(
            CITIZEN_SEARCH, build_predicate(CITIZEN_SEARCH, "xyz", region), 1
        )

        assert filtered.total == 3
        assert len(filtered.items) == 3
        assert narrowed.total == 0

    def test_fetch_page_window_and_total(self):
        for index in range(5):
            self.store.insert("citizens", {"surname": f"S{index}", "name": "N"})

        rows, total = self.store.fetch_page("citizens", build_predicate(CITIZEN_SEARCH), "surname", 2, 3)

        assert total == 5
        assert [row["surname"] for row in rows] == ["S2", "S3"]

    def test_military_save_derives_esso(self):
        row = self.store.insert(
            "military_personnel",
            {"surname": "Ν", "name": "Κ", "esso_year": "2024", "esso_letter": "Δ"},
        )

        assert row["esso"] == "2024Δ"
        updated = self.store.update("military_personnel", row["id"], {"esso_letter": None})
        assert updated["esso"] is None
        assert MilitaryPersonnel.objects.get(pk=row["id"]).esso is None

    def test_deleting_citizen_nulls_request_reference(self):
        citizen = self.store.insert("citizens", {"surname": "Σ", "name": "Ν"})
        request = self.store.insert(
            "requests",
            {"citizen_id": citizen["id"], "request_type": "ΕΦΚΑ", "description": "x"},
        )

        assert self.store.delete("citizens", citizen["id"]) is True
        assert self.store.get("requests", request["id"])["citizen_id"] is None

    @pytest.mark.parametrize(
        "table, values",
        [
            ("citizens", {"surname": "Σ", "name": "Ν"}),
            ("military_personnel", {"surname": "Σ", "name": "Ν"}),
            ("requests", {"request_type": "ΕΦΚΑ", "description": "x"}),
            ("reminders", {"title": "Κλήση", "reminder_date": date(2025, 5, 1)}),
        ],
    )
    def test_memory_rows_have_database_shape(self, table, values):
        """Test unset columns and column defaults look the same in both stores."""
        stored = self.store.insert(table, dict(values))
        in_memory = MemoryStore().insert(table, dict(values))

        assert set(in_memory) == set(stored)
        for column in set(stored) - {"id", "created_at", "updated_at"}:
            assert in_memory[column] == stored[column]

    def test_substring_wildcards_match_literally(self):
        self.store.insert("citizens", {"surname": "Α_Β", "name": "Χ", "notes": "έκπτωση 50%"})
        self.store.insert("citizens", {"surname": "ΑΧΒ", "name": "Χ", "notes": "έκπτωση 500"})

        underscore = self.store.fetch_all("citizens", Contains("surname", "_"))
        percent = self.store.fetch_all("citizens", Contains("notes", "50%"))

        assert [row["surname"] for row in underscore] == ["Α_Β"]
        assert [row["surname"] for row in percent] == ["Α_Β"]

    def test_request_filters(self):
        citizen = self.store.insert("citizens", {"surname": "Σ", "name": "Ν"})
        self.store.insert(
            "requests",
            {
                "citizen_id": citizen["id"],
                "request_type": "ΕΦΚΑ",
                "description": "x",
                "send_date": date(2025, 1, 10),
            },
        )
        self.store.insert(
            "requests",
            {"citizen_id": citizen["id"], "request_type": "ΙΑΤΡΙΚΟ", "description": "y"},
        )
        criteria = FilterCriteria.of(
            status=STATUS_PENDING, citizen_id=citizen["id"], send_from="2025-01-01"
        )

        rows = self.store.fetch_all("requests", build_predicate(REQUEST_SEARCH, "", criteria))

        assert [row["request_type"] for row in rows] == ["ΕΦΚΑ"]

    def test_timestamp_range(self):
        self.store.insert("citizens", {"surname": "Σ", "name": "Ν"})
        today = timezone.localtime(Citizen.objects.get().created_at).date().isoformat()

        predicate = build_predicate(
            CITIZEN_SEARCH, "", FilterCriteria.of(created_from=today, created_to=today)
        )

        assert len(self.store.fetch_all("citizens", predicate)) == 1

    def test_fetch_by_ids(self):
        first = self.store.insert("citizens", {"surname": "Α", "name": "Ν"})
        second = self.store.insert("citizens", {"surname": "Β", "name": "Ν"})

        found = self.store.fetch_by_ids("citizens", [first["id"], second["id"], "missing"], ("surname",))

        assert found[first["id"]] == {"id": first["id"], "surname": "Α"}
        assert set(found) == {first["id"], second["id"]}

    def test_missing_rows(self):
        assert self.store.get("citizens", "not-a-uuid") is None
        assert self.store.get("citizens", "6f1c1a52-0f4e-4d7e-9a43-1f2f0f6c9b10") is None
        assert self.store.update("citizens", "not-a-uuid", {"name": "x"}) is None
        assert self.store.delete("citizens", "6f1c1a52-0f4e-4d7e-9a43-1f2f0f6c9b10") is False

    def test_invalid_uuid_filter_is_value_error(self):
        predicate = build_predicate(REQUEST_SEARCH, "", FilterCriteria.of(citizen_id="nope"))

        with pytest.raises(ValueError):
            self.store.fetch_page("requests", predicate, "-created_at", 0, 19)

    def test_ping(self):
        assert self.store.ping() is True

    def test_request_model_overdue_property(self):
        request = Request(status=STATUS_PENDING, send_date=date(2000, 1, 1))

        assert request.is_overdue is True
