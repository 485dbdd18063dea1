import uuid

from rest_framework import serializers

from registry.exceptions import RuleViolation
from registry.reference import (
    ELECTORAL_DISTRICTS,
    ESSO_LETTERS,
    HOLIDAY_YEARS,
    MUNICIPALITIES,
    REMINDER_GENERAL,
    REMINDER_TYPES,
    REQUEST_STATUSES,
)
from registry.rules import check_requester


def optional_text(max_length=None, **kwargs):
    return serializers.CharField(
        max_length=max_length, required=False, allow_null=True, **kwargs
    )


class RecordSerializer(serializers.Serializer):
    """
    Validates write payloads into plain dicts for the services.

    Blank strings are read as null, and UUIDs come out as strings so that
    every record store receives the same shapes.
    """

    def to_internal_value(self, data):
        if hasattr(data, "dict"):
            data = data.dict()
        data = {
            key: None if isinstance(value, str) and not value.strip() else value
            for key, value in data.items()
        }
        values = super().to_internal_value(data)
        return {
            key: str(value) if isinstance(value, uuid.UUID) else value
            for key, value in values.items()
        }


class CitizenSerializer(RecordSerializer):
    surname = serializers.CharField(max_length=255)
    name = serializers.CharField(max_length=255)
    patronymic = optional_text(255)
    recommendation_from = optional_text(255)
    mobile_phone = optional_text(50)
    landline_phone = optional_text(50)
    email = serializers.EmailField(required=False, allow_null=True)
    address = optional_text(500)
    postal_code = optional_text(20)
    municipality = serializers.ChoiceField(choices=MUNICIPALITIES, required=False, allow_null=True)
    area = optional_text(255)
    electoral_district = serializers.ChoiceField(
        choices=ELECTORAL_DISTRICTS, required=False, allow_null=True
    )
    last_contact_date = serializers.DateField(required=False, allow_null=True)
    notes = optional_text()


class MilitarySerializer(RecordSerializer):
    """ESSO is derived on the server and is not accepted as input."""

    name = serializers.CharField(max_length=255)
    surname = serializers.CharField(max_length=255)
    rank = optional_text(100)
    service_unit = optional_text(255)
    wish = optional_text(500)
    send_date = serializers.DateField(required=False, allow_null=True)
    comments = optional_text()
    military_id = optional_text(100)
    esso_year = serializers.RegexField(
        r"^\d{4}$",
        required=False,
        allow_null=True,
        error_messages={"invalid": "ESSO year must have 4 digits."},
    )
    esso_letter = serializers.ChoiceField(choices=ESSO_LETTERS, required=False, allow_null=True)


class RequestSerializer(RecordSerializer):
    citizen_id = serializers.UUIDField(required=False, allow_null=True)
    military_personnel_id = serializers.UUIDField(required=False, allow_null=True)
    request_type = serializers.CharField(max_length=255)
    description = serializers.CharField()
    status = serializers.ChoiceField(choices=REQUEST_STATUSES, required=False)
    send_date = serializers.DateField(required=False, allow_null=True)
    completion_date = serializers.DateField(required=False, allow_null=True)
    notes = optional_text()

    def validate(self, attrs):
        # partial updates are checked against the stored row by the service
        if not self.partial:
            try:
                check_requester(attrs.get("citizen_id"), attrs.get("military_personnel_id"))
            except RuleViolation as e:
                raise serializers.ValidationError({e.field: [e.message]})
        return attrs


class ReminderSerializer(RecordSerializer):
    title = serializers.CharField(max_length=255)
    description = optional_text()
    reminder_date = serializers.DateField()
    reminder_type = serializers.ChoiceField(choices=REMINDER_TYPES, default=REMINDER_GENERAL)
    related_request_id = serializers.UUIDField(required=False, allow_null=True)
    is_completed = serializers.BooleanField(default=False)


class SeedHolidaysSerializer(serializers.Serializer):
    year = serializers.IntegerField(
        required=False, min_value=HOLIDAY_YEARS[0], max_value=HOLIDAY_YEARS[-1]
    )
