"""
Tests for attaching requester and related-request summaries.
"""

from unittest.mock import Mock

from registry.query.enrichment import (
    UNKNOWN_REQUESTER,
    ReminderEnricher,
    RequestEnricher,
    requester_label,
)


class TestRequesterLabel:
    """Test cases for requester display labels."""

    def test_citizen_label(self):
        assert requester_label({"surname": "Ιωάννου", "name": "Μαρία"}) == "Ιωάννου Μαρία"

    def test_military_label_with_rank(self):
        military = {"rank": "Λοχίας", "surname": "Νικολάου", "name": "Κώστας"}

        assert requester_label(None, military) == "Λοχίας Νικολάου Κώστας"

    def test_military_label_without_rank(self):
        military = {"rank": None, "surname": "Νικολάου", "name": "Κώστας"}

        assert requester_label(None, military) == "Νικολάου Κώστας"

    def test_unknown(self):
        assert requester_label(None, None) == UNKNOWN_REQUESTER


class TestRequestEnricher:
    """Test cases for request enrichment."""

    def test_citizen_and_military_requesters(
        self, store, create_citizen, create_military, create_request
    ):
        citizen = create_citizen(surname="Ιωάννου", name="Μαρία")
        soldier = create_military(surname="Νικολάου", name="Κώστας", rank="Δεκανέας")
        rows = [
            create_request(citizen_id=citizen["id"]),
            create_request(military_personnel_id=soldier["id"]),
        ]

        enriched = RequestEnricher(store).enrich(rows)

        assert enriched[0]["requester_label"] == "Ιωάννου Μαρία"
        assert enriched[0]["citizen"]["id"] == citizen["id"]
        assert enriched[0]["military_personnel"] is None
        assert enriched[1]["requester_label"] == "Δεκανέας Νικολάου Κώστας"
        assert enriched[1]["military_personnel"]["esso"] == "2024Β"

    def test_deleted_citizen_gives_unknown(self, store, create_citizen, create_request):
        """Test a request pointing at a deleted citizen renders the unknown placeholder."""
        citizen = create_citizen()
        row = create_request(citizen_id=citizen["id"])
        store.tables["citizens"].pop(citizen["id"])

        enriched = RequestEnricher(store).enrich([row])

        assert enriched[0]["requester_label"] == UNKNOWN_REQUESTER
        assert enriched[0]["citizen"] is None

    def test_lookups_batched_by_distinct_id(self):
        """Test a page costs one lookup per related table, whatever its size."""
        store = Mock()
        store.fetch_by_ids.side_effect = lambda table, ids, fields: {
            value: {"id": value, "surname": "Σ", "name": "Ο", "rank": None} for value in ids
        }
        rows = [
            {"id": "r1", "citizen_id": "c1", "military_personnel_id": None},
            {"id": "r2", "citizen_id": "c1", "military_personnel_id": None},
            {"id": "r3", "citizen_id": "c2", "military_personnel_id": None},
            {"id": "r4", "citizen_id": None, "military_personnel_id": "m1"},
        ]

        RequestEnricher(store).enrich(rows)

        assert store.fetch_by_ids.call_count == 2
        citizen_call, military_call = store.fetch_by_ids.call_args_list
        assert citizen_call.args[:2] == ("citizens", ["c1", "c2"])
        assert military_call.args[:2] == ("military_personnel", ["m1"])

    def test_no_references_no_lookups(self):
        store = Mock()

        enriched = RequestEnricher(store).enrich([{"id": "r1"}])

        store.fetch_by_ids.assert_not_called()
        assert enriched[0]["requester_label"] == UNKNOWN_REQUESTER

    def test_input_rows_untouched(self, store, create_citizen, create_request):
        row = create_request(citizen_id=create_citizen()["id"])

        RequestEnricher(store).enrich([row])

        assert "requester_label" not in row


class TestReminderEnricher:
    """Test cases for reminder enrichment."""

    def test_related_request_summary(self, store, create_request, create_reminder):
        request = create_request(request_type="ΕΦΚΑ", description="Σύνταξη")
        reminder = create_reminder(related_request_id=request["id"])
        standalone = create_reminder()

        enriched = ReminderEnricher(store).enrich([reminder, standalone])

        assert enriched[0]["related_request"]["request_type"] == "ΕΦΚΑ"
        assert enriched[0]["related_request"]["description"] == "Σύνταξη"
        assert enriched[1]["related_request"] is None

    def test_deleted_request_gives_none(self, store, create_request, create_reminder):
        request = create_request()
        reminder = create_reminder(related_request_id=request["id"])
        store.tables["requests"].pop(request["id"])

        assert ReminderEnricher(store).enrich([reminder])[0]["related_request"] is None
