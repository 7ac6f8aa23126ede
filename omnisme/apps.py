"""
App configuration for OmniSME.
"""

import logging
import os
import sys

from django.apps import AppConfig

logger = logging.getLogger(__name__)


class OmniSMEConfig(AppConfig):
    """App configuration for the OmniSME project."""

    name = "omnisme"
    verbose_name = "OmniSME"

    def ready(self):
        """Called when Django starts."""
        # Skip for management commands that never serve requests
        if len(sys.argv) > 1 and sys.argv[1] in [
            "migrate",
            "makemigrations",
            "collectstatic",
        ]:
            return

        # RUN_MAIN is "false" in the autoreloader's parent process
        if os.environ.get("RUN_MAIN") == "false":
            return

        self.register_event_handlers()
        self.setup_observability()

    def setup_observability(self):
        """Setup OpenTelemetry after apps are ready."""
        from core.instrumentation import setup_opentelemetry

        try:
            setup_opentelemetry()
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.warning("Failed to setup OpenTelemetry: %s", e)

    def register_event_handlers(self):
        """Register event handlers after apps are ready."""
        from core.infrastructure.event_handlers import register_event_handlers

        register_event_handlers()
