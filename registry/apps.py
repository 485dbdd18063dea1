from django.apps import AppConfig


class RegistryConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "registry"
    verbose_name = "Constituency registry"

    def ready(self):
        """Import signal handlers."""
        import registry.signals  # noqa
