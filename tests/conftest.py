"""
Pytest configuration and shared fixtures for the test suite.
"""

from datetime import date, timedelta
from unittest.mock import Mock

import pytest
from django.utils import timezone
from rest_framework.test import APIClient

from registry.reference import REMINDER_GENERAL, STATUS_PENDING
from registry.stores import get_store, reset_memory_store


@pytest.fixture(autouse=True)
def fresh_memory_store():
    """Every test starts with empty in-process tables."""
    reset_memory_store()
    yield
    reset_memory_store()


@pytest.fixture
def store():
    """The in-process record store the services use under test settings."""
    return get_store()


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def today():
    return timezone.localdate()


@pytest.fixture
def create_citizen(store):
    """Factory fixture to insert a citizen row."""

    def _create_citizen(**kwargs):
        values = {
            "surname": "Παπαδόπουλος",
            "name": "Γιώργος",
            "mobile_phone": "6900000000",
            "area": "Α",
            "municipality": "ΚΑΛΑΜΑΡΙΑΣ",
            **kwargs,
        }
        return store.insert("citizens", values)

    return _create_citizen


@pytest.fixture
def create_military(store):
    """Factory fixture to insert a military personnel row."""

    def _create_military(**kwargs):
        values = {
            "surname": "Νικολάου",
            "name": "Κώστας",
            "rank": "Λοχίας",
            "esso_year": "2024",
            "esso_letter": "Β",
            **kwargs,
        }
        values["esso"] = (
            f"{values['esso_year']}{values['esso_letter']}"
            if values.get("esso_year") and values.get("esso_letter")
            else None
        )
        return store.insert("military_personnel", values)

    return _create_military


@pytest.fixture
def create_request(store):
    """Factory fixture to insert a request row."""

    def _create_request(**kwargs):
        values = {
            "request_type": "ΙΑΤΡΙΚΟ",
            "description": "Ραντεβού σε νοσοκομείο",
            "status": STATUS_PENDING,
            "send_date": None,
            "completion_date": None,
            **kwargs,
        }
        return store.insert("requests", values)

    return _create_request


@pytest.fixture
def create_reminder(store):
    """Factory fixture to insert a reminder row."""

    def _create_reminder(**kwargs):
        values = {
            "title": "Τηλεφώνημα",
            "reminder_date": date(2025, 5, 1),
            "reminder_type": REMINDER_GENERAL,
            "is_completed": False,
            "related_request_id": None,
            **kwargs,
        }
        return store.insert("reminders", values)

    return _create_reminder


@pytest.fixture
def overdue_send_date(today):
    return today - timedelta(days=30)


@pytest.fixture
def mock_requests_get(mocker):
    """Mock requests.get for hosted store calls."""
    return mocker.patch("registry.stores.postgrest.requests.get")


@pytest.fixture
def mock_requests_post(mocker):
    """Mock requests.post for hosted store calls."""
    return mocker.patch("registry.stores.postgrest.requests.post")


@pytest.fixture
def mock_requests_patch(mocker):
    """Mock requests.patch for hosted store calls."""
    return mocker.patch("registry.stores.postgrest.requests.patch")


@pytest.fixture
def store_response():
    """Build a fake hosted store response."""

    def _store_response(status_code=200, json_data=None, headers=None):
        response = Mock()
        response.status_code = status_code
        response.json.return_value = json_data if json_data is not None else []
        response.headers = headers or {}
        response.text = ""
        return response

    return _store_response
