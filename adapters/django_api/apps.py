"""
ShopGate Django Adapter — App Configuration
=============================================
Builds the policy registry when Django finishes loading, so a broken
role table, lifecycle table or override file stops the process at
startup instead of on the first request.

Rules:
- Runs once via ready()
- Skips during management commands that don't serve requests
- Skips under pytest (tests build their own registries)
- If the build fails → the error propagates and prevents startup
"""

import logging
import os
import sys

from django.apps import AppConfig

logger = logging.getLogger("shopgate.adapters")

# Commands that should NOT trigger the registry build
SKIP_COMMANDS = {
    "migrate",
    "makemigrations",
    "showmigrations",
    "shell",
    "test",
    "collectstatic",
    "check",
}


def _is_management_command_skip() -> bool:
    if len(sys.argv) >= 2:
        return sys.argv[1] in SKIP_COMMANDS
    return False


def _is_pytest_context() -> bool:
    return (
        "PYTEST_CURRENT_TEST" in os.environ
        or "pytest" in sys.modules
    )


class ShopGateAdapterConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "adapters.django_api"
    label = "shopgate_api"
    verbose_name = "ShopGate Policy API"

    def ready(self):
        if _is_management_command_skip() or _is_pytest_context():
            logger.info("Policy registry build skipped for management/test context.")
            return

        from adapters.django_api.wiring import get_policy_registry
        get_policy_registry()
