import logging

from django.apps import AppConfig
from django.conf import settings

logger = logging.getLogger(__name__)


class MarketplaceConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "marketplace"

    def ready(self):
        # Domain service modules import each other through this package; load it first.
        import marketplace.services  # noqa: F401

        if not getattr(settings, "OTEL_TRACING_ENABLED", False):
            return

        from marketplace.infra.observability.tracing import setup_tracing

        try:
            setup_tracing(
                service_name=getattr(settings, "OTEL_SERVICE_NAME", "lapak-marketplace"),
                console_export=getattr(settings, "OTEL_CONSOLE_EXPORTER", False),
            )
        except Exception as e:
            logger.error(f"Failed to initialize tracing: {e}", exc_info=True)
