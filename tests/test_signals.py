"""
Tests for user profile signals and the management commands.
"""

from io import StringIO

import pytest
from django.contrib.auth.models import User
from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import Client

from registry.exceptions import StoreError
from registry.models import UserProfile
from registry.reference import ROLE_USER


@pytest.mark.django_db
class TestUserProfileSignals:
    """Test cases for profile creation and login stamping."""

    def test_profile_created_with_user(self):
        user = User.objects.create_user(
            username="grafeio", password="secret-pass", first_name="Ελένη", last_name="Κ"
        )

        profile = UserProfile.objects.get(user=user)
        assert profile.role == ROLE_USER
        assert profile.full_name == "Ελένη Κ"
        assert profile.is_admin is False

    def test_saving_user_again_keeps_one_profile(self):
        user = User.objects.create_user(username="grafeio", password="secret-pass")
        user.email = "office@example.com"
        user.save()

        assert UserProfile.objects.filter(user=user).count() == 1

    def test_login_stamps_profile(self):
        user = User.objects.create_user(username="grafeio", password="secret-pass")

        Client().force_login(user)

        profile = UserProfile.objects.get(user=user)
        assert profile.last_login_at is not None


@pytest.mark.django_db
class TestManagementCommands:
    """Test cases for the reminder seeding commands."""

    def test_seed_holiday_reminders(self, store):
        out = StringIO()

        call_command("seed_holiday_reminders", "--year", "2025", stdout=out)
        call_command("seed_holiday_reminders", "--year", "2025", stdout=out)

        assert "Created 13 holiday reminders for 2025" in out.getvalue()
        assert "Skipped 13 dates" in out.getvalue()
        assert len(store.fetch_all("reminders")) == 13

    def test_seed_holiday_reminders_rejects_unsupported_year(self, store):
        with pytest.raises(CommandError):
            call_command("seed_holiday_reminders", "--year", "2100", stdout=StringIO())

    def test_seed_overdue_reminders(self, store, create_citizen, create_request, overdue_send_date):
        create_request(citizen_id=create_citizen()["id"], send_date=overdue_send_date)
        out = StringIO()

        call_command("seed_overdue_reminders", stdout=out)

        assert "Created 1 follow-up reminders" in out.getvalue()
        assert "Overdue requests: 1" in out.getvalue()

    def test_store_failure_raises_command_error(self, mocker, store):
        mocker.patch.object(store, "fetch_all", side_effect=StoreError("down"))

        with pytest.raises(CommandError):
            call_command("seed_overdue_reminders", stdout=StringIO())
