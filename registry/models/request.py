import uuid

from django.db import models

from registry.reference import REQUEST_STATUSES, STATUS_PENDING, as_choices
from registry.rules import is_overdue


class Request(models.Model):
    """
    A case opened by or for a citizen or a military person.

    Status moves from pending to either completed or rejected. The referenced
    person may be deleted later; the request then keeps a null reference.
    """

    STATUS_CHOICES = as_choices(REQUEST_STATUSES)

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    citizen = models.ForeignKey(
        "registry.Citizen",
        on_delete=models.SET_NULL,
        blank=True,
        null=True,
        related_name="requests",
    )
    military_personnel = models.ForeignKey(
        "registry.MilitaryPersonnel",
        on_delete=models.SET_NULL,
        blank=True,
        null=True,
        related_name="requests",
    )
    request_type = models.CharField(max_length=255)
    description = models.TextField()
    status = models.CharField(
        max_length=20, choices=STATUS_CHOICES, default=STATUS_PENDING, db_index=True
    )
    send_date = models.DateField(blank=True, null=True)
    completion_date = models.DateField(
        blank=True, null=True, help_text="Only meaningful while the request is completed"
    )
    notes = models.TextField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    created_by = models.CharField(max_length=64, blank=True, null=True)

    class Meta:
        db_table = "requests"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["status", "send_date"], name="requests_status_61e0ab_idx"),
            models.Index(fields=["created_at"], name="requests_created_f27c55_idx"),
        ]

    def __str__(self):
        return f"{self.request_type} ({self.status})"

    @property
    def is_overdue(self):
        return is_overdue({"status": self.status, "send_date": self.send_date})
