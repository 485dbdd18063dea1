import uuid

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models

from registry.reference import (
    ELECTORAL_DISTRICTS,
    ESSO_LETTERS,
    MUNICIPALITIES,
    REMINDER_TYPES,
    REQUEST_STATUSES,
    USER_ROLES,
    as_choices,
)


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Citizen",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("surname", models.CharField(max_length=255)),
                ("name", models.CharField(max_length=255)),
                ("patronymic", models.CharField(blank=True, max_length=255, null=True)),
                (
                    "recommendation_from",
                    models.CharField(
                        blank=True,
                        help_text="Who referred the citizen to the office",
                        max_length=255,
                        null=True,
                    ),
                ),
                ("mobile_phone", models.CharField(blank=True, max_length=50, null=True)),
                ("landline_phone", models.CharField(blank=True, max_length=50, null=True)),
                ("email", models.EmailField(blank=True, max_length=254, null=True)),
                ("address", models.CharField(blank=True, max_length=500, null=True)),
                ("postal_code", models.CharField(blank=True, max_length=20, null=True)),
                (
                    "municipality",
                    models.CharField(
                        blank=True,
                        choices=as_choices(MUNICIPALITIES),
                        db_index=True,
                        max_length=100,
                        null=True,
                    ),
                ),
                ("area", models.CharField(blank=True, help_text="Region or area", max_length=255, null=True)),
                (
                    "electoral_district",
                    models.CharField(
                        blank=True,
                        choices=as_choices(ELECTORAL_DISTRICTS),
                        db_index=True,
                        max_length=100,
                        null=True,
                    ),
                ),
                ("last_contact_date", models.DateField(blank=True, null=True)),
                ("notes", models.TextField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "created_by",
                    models.CharField(
                        blank=True, help_text="Identifier of the acting user", max_length=64, null=True
                    ),
                ),
            ],
            options={
                "db_table": "citizens",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["surname", "name"], name="citizens_surname_8c1f0e_idx"),
                    models.Index(fields=["area"], name="citizens_area_5d2b7a_idx"),
                    models.Index(fields=["created_at"], name="citizens_created_3a9e41_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="MilitaryPersonnel",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=255)),
                ("surname", models.CharField(max_length=255)),
                ("rank", models.CharField(blank=True, db_index=True, max_length=100, null=True)),
                ("service_unit", models.CharField(blank=True, max_length=255, null=True)),
                ("wish", models.CharField(blank=True, help_text="Placement wish", max_length=500, null=True)),
                ("send_date", models.DateField(blank=True, help_text="Transfer/send date", null=True)),
                ("comments", models.TextField(blank=True, null=True)),
                (
                    "military_id",
                    models.CharField(
                        blank=True, help_text="Military registry number", max_length=100, null=True
                    ),
                ),
                ("esso_year", models.CharField(blank=True, max_length=4, null=True)),
                (
                    "esso_letter",
                    models.CharField(blank=True, choices=as_choices(ESSO_LETTERS), max_length=2, null=True),
                ),
                (
                    "esso",
                    models.CharField(
                        blank=True,
                        db_index=True,
                        editable=False,
                        help_text="Derived from esso_year and esso_letter",
                        max_length=6,
                        null=True,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("created_by", models.CharField(blank=True, max_length=64, null=True)),
            ],
            options={
                "verbose_name": "Military personnel",
                "verbose_name_plural": "Military personnel",
                "db_table": "military_personnel",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["esso_year", "esso_letter"], name="military_pe_esso_ye_4b7e2c_idx"),
                    models.Index(fields=["surname", "name"], name="military_pe_surname_9d03f1_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="Request",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("request_type", models.CharField(max_length=255)),
                ("description", models.TextField()),
                (
                    "status",
                    models.CharField(
                        choices=as_choices(REQUEST_STATUSES),
                        db_index=True,
                        default="ΕΚΚΡΕΜΕΙ",
                        max_length=20,
                    ),
                ),
                ("send_date", models.DateField(blank=True, null=True)),
                (
                    "completion_date",
                    models.DateField(
                        blank=True, help_text="Only meaningful while the request is completed", null=True
                    ),
                ),
                ("notes", models.TextField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("created_by", models.CharField(blank=True, max_length=64, null=True)),
                (
                    "citizen",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="requests",
                        to="registry.citizen",
                    ),
                ),
                (
                    "military_personnel",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="requests",
                        to="registry.militarypersonnel",
                    ),
                ),
            ],
            options={
                "db_table": "requests",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["status", "send_date"], name="requests_status_61e0ab_idx"),
                    models.Index(fields=["created_at"], name="requests_created_f27c55_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="Reminder",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("title", models.CharField(max_length=255)),
                ("description", models.TextField(blank=True, null=True)),
                ("reminder_date", models.DateField(db_index=True)),
                (
                    "reminder_type",
                    models.CharField(choices=as_choices(REMINDER_TYPES), default="ΓΕΝΙΚΗ", max_length=20),
                ),
                ("is_completed", models.BooleanField(default=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("created_by", models.CharField(blank=True, max_length=64, null=True)),
                (
                    "related_request",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="reminders",
                        to="registry.request",
                    ),
                ),
            ],
            options={
                "db_table": "reminders",
                "ordering": ["reminder_date"],
                "indexes": [
                    models.Index(fields=["reminder_type", "is_completed"], name="reminders_reminde_0a4c9d_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="UserProfile",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("full_name", models.CharField(blank=True, max_length=255, null=True)),
                ("role", models.CharField(choices=as_choices(USER_ROLES), default="USER", max_length=10)),
                ("is_active", models.BooleanField(default=True)),
                ("last_login_at", models.DateTimeField(blank=True, null=True)),
                ("last_login_ip", models.GenericIPAddressField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "user",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="profile",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "db_table": "user_profiles",
            },
        ),
    ]
