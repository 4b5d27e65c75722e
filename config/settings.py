"""
ShopGate – Django Settings (Adapter Only)
===========================================
Django hosts the HTTP adapter. The policy engine itself does not
depend on Django; the adapter reads SHOPGATE_POLICY_CONFIG to pick an
optional override file.
"""

import os
from pathlib import Path

# ── Paths ─────────────────────────────────────────────────────
BASE_DIR = Path(__file__).resolve().parent.parent

# ── Security ──────────────────────────────────────────────────
SECRET_KEY = os.environ.get(
    "SHOPGATE_SECRET_KEY", "shopgate-dev-key-replace-before-deployment"
)

DEBUG = os.environ.get("SHOPGATE_DEBUG", "1") == "1"

ALLOWED_HOSTS = [
    h for h in os.environ.get("SHOPGATE_ALLOWED_HOSTS", "").split(",") if h
]

# ── Installed Apps ────────────────────────────────────────────
INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "adapters.django_api",
]

# ── Middleware ────────────────────────────────────────────────
MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
]

# ── URL ───────────────────────────────────────────────────────
ROOT_URLCONF = "config.urls"

# ── Database ──────────────────────────────────────────────────
# The policy engine stores nothing; SQLite keeps Django content.
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": BASE_DIR / "db.sqlite3",
    }
}

# ── Internationalization ──────────────────────────────────────
LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# ── ShopGate ──────────────────────────────────────────────────
# Optional path to a JSON override document (see shopgate.config).
SHOPGATE_POLICY_CONFIG = os.environ.get("SHOPGATE_POLICY_CONFIG") or None

# ── Logging ───────────────────────────────────────────────────
LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "handlers": {
        "console": {"class": "logging.StreamHandler"},
    },
    "loggers": {
        "shopgate": {
            "handlers": ["console"],
            "level": os.environ.get("SHOPGATE_LOG_LEVEL", "INFO"),
        },
    },
}
