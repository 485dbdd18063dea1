import logging

from django.conf import settings
from django.contrib.auth.signals import user_logged_in
from django.db.models.signals import post_save
from django.dispatch import receiver
from django.utils import timezone

from registry.models import UserProfile

logger = logging.getLogger(__name__)


@receiver(post_save, sender=settings.AUTH_USER_MODEL)
def user_post_save(sender, instance, created, **kwargs):
    """Give every new user an office profile with the default role."""
    if not created:
        return
    full_name = instance.get_full_name() if hasattr(instance, "get_full_name") else ""
    UserProfile.objects.get_or_create(user=instance, defaults={"full_name": full_name or None})
    logger.info(f"Created profile for user {instance.pk}")


@receiver(user_logged_in)
def user_login(sender, request, user, **kwargs):
    """Stamp the profile with the time and address of the latest login."""
    profile, _ = UserProfile.objects.get_or_create(user=user)
    profile.last_login_at = timezone.now()
    profile.last_login_ip = request.META.get("REMOTE_ADDR") if request is not None else None
    profile.save(update_fields=["last_login_at", "last_login_ip", "updated_at"])
    logger.info(f"User {user.pk} logged in from {profile.last_login_ip}")
