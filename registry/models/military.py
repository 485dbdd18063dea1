import uuid

from django.db import models

from registry.reference import ESSO_LETTERS, as_choices
from registry.rules import derive_esso


class MilitaryPersonnel(models.Model):
    """
    A conscript or officer the office follows up on.

    The ESSO code is a cache of ``esso_year`` + ``esso_letter`` kept only so the
    store can filter on it; it is recomputed on every save.
    """

    ESSO_LETTER_CHOICES = as_choices(ESSO_LETTERS)

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    surname = models.CharField(max_length=255)
    rank = models.CharField(max_length=100, blank=True, null=True, db_index=True)
    service_unit = models.CharField(max_length=255, blank=True, null=True)
    wish = models.CharField(max_length=500, blank=True, null=True, help_text="Placement wish")
    send_date = models.DateField(blank=True, null=True, help_text="Transfer/send date")
    comments = models.TextField(blank=True, null=True)
    military_id = models.CharField(
        max_length=100, blank=True, null=True, help_text="Military registry number"
    )
    esso_year = models.CharField(max_length=4, blank=True, null=True)
    esso_letter = models.CharField(
        max_length=2, blank=True, null=True, choices=ESSO_LETTER_CHOICES
    )
    esso = models.CharField(
        max_length=6, blank=True, null=True, editable=False, db_index=True,
        help_text="Derived from esso_year and esso_letter",
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    created_by = models.CharField(max_length=64, blank=True, null=True)

    class Meta:
        db_table = "military_personnel"
        ordering = ["-created_at"]
        verbose_name = "Military personnel"
        verbose_name_plural = "Military personnel"
        indexes = [
            models.Index(fields=["esso_year", "esso_letter"], name="military_pe_esso_ye_4b7e2c_idx"),
            models.Index(fields=["surname", "name"], name="military_pe_surname_9d03f1_idx"),
        ]

    def __str__(self):
        rank = f"{self.rank} " if self.rank else ""
        return f"{rank}{self.surname} {self.name}"

    def save(self, *args, **kwargs):
        self.esso = derive_esso(self.esso_year, self.esso_letter)
        super().save(*args, **kwargs)
