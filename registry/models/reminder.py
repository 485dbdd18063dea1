import uuid

from django.db import models

from registry.reference import REMINDER_GENERAL, REMINDER_TYPES, as_choices


class Reminder(models.Model):
    """A dated reminder: a holiday, a follow-up on a request, or a general note."""

    TYPE_CHOICES = as_choices(REMINDER_TYPES)

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True, null=True)
    reminder_date = models.DateField(db_index=True)
    reminder_type = models.CharField(max_length=20, choices=TYPE_CHOICES, default=REMINDER_GENERAL)
    related_request = models.ForeignKey(
        "registry.Request",
        on_delete=models.SET_NULL,
        blank=True,
        null=True,
        related_name="reminders",
    )
    is_completed = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    created_by = models.CharField(max_length=64, blank=True, null=True)

    class Meta:
        db_table = "reminders"
        ordering = ["reminder_date"]
        indexes = [
            models.Index(fields=["reminder_type", "is_completed"], name="reminders_reminde_0a4c9d_idx"),
        ]

    def __str__(self):
        return f"{self.reminder_date} - {self.title}"
