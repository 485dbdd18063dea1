import uuid

from django.db import models

from registry.reference import ELECTORAL_DISTRICTS, MUNICIPALITIES, as_choices


class Citizen(models.Model):
    """A citizen served by the constituency office."""

    MUNICIPALITY_CHOICES = as_choices(MUNICIPALITIES)
    ELECTORAL_DISTRICT_CHOICES = as_choices(ELECTORAL_DISTRICTS)

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    surname = models.CharField(max_length=255)
    name = models.CharField(max_length=255)
    patronymic = models.CharField(max_length=255, blank=True, null=True)
    recommendation_from = models.CharField(
        max_length=255, blank=True, null=True, help_text="Who referred the citizen to the office"
    )
    mobile_phone = models.CharField(max_length=50, blank=True, null=True)
    landline_phone = models.CharField(max_length=50, blank=True, null=True)
    email = models.EmailField(blank=True, null=True)
    address = models.CharField(max_length=500, blank=True, null=True)
    postal_code = models.CharField(max_length=20, blank=True, null=True)
    municipality = models.CharField(
        max_length=100, blank=True, null=True, choices=MUNICIPALITY_CHOICES, db_index=True
    )
    area = models.CharField(max_length=255, blank=True, null=True, help_text="Region or area")
    electoral_district = models.CharField(
        max_length=100, blank=True, null=True, choices=ELECTORAL_DISTRICT_CHOICES, db_index=True
    )
    last_contact_date = models.DateField(blank=True, null=True)
    notes = models.TextField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    created_by = models.CharField(
        max_length=64, blank=True, null=True, help_text="Identifier of the acting user"
    )

    class Meta:
        db_table = "citizens"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["surname", "name"], name="citizens_surname_8c1f0e_idx"),
            models.Index(fields=["area"], name="citizens_area_5d2b7a_idx"),
            models.Index(fields=["created_at"], name="citizens_created_3a9e41_idx"),
        ]

    def __str__(self):
        return f"{self.surname} {self.name}"
