from django.conf import settings
from django.db import models

from registry.reference import ROLE_ADMIN, ROLE_USER, USER_ROLES, as_choices


class UserProfile(models.Model):
    """Office-specific data attached to each Django user."""

    ROLE_CHOICES = as_choices(USER_ROLES)

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="profile"
    )
    full_name = models.CharField(max_length=255, blank=True, null=True)
    role = models.CharField(max_length=10, choices=ROLE_CHOICES, default=ROLE_USER)
    is_active = models.BooleanField(default=True)
    last_login_at = models.DateTimeField(blank=True, null=True)
    last_login_ip = models.GenericIPAddressField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "user_profiles"

    def __str__(self):
        return f"{self.full_name or self.user} ({self.role})"

    @property
    def is_admin(self):
        return self.role == ROLE_ADMIN
