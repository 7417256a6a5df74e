"""
Kargah – Django Settings (Infrastructure Only)
================================================
Django hosts the snapshot persistence app and the engine rules.
The engines and the entity store do not depend on Django at import
time; only kargah.persistence.repository needs a configured project.
"""

import os
from pathlib import Path

# ── Paths ─────────────────────────────────────────────────────
BASE_DIR = Path(__file__).resolve().parent.parent

# ── Security ──────────────────────────────────────────────────
SECRET_KEY = os.environ.get("KARGAH_SECRET_KEY", "kargah-dev-key")

DEBUG = os.environ.get("KARGAH_DEBUG", "1") == "1"

ALLOWED_HOSTS = []

# ── Installed Apps ────────────────────────────────────────────
INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "kargah.persistence",
]

# ── Database ──────────────────────────────────────────────────
# SQLite for development. Production DB configured separately.
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": os.environ.get("KARGAH_DB_PATH", BASE_DIR / "db.sqlite3"),
    }
}

# ── Internationalization ──────────────────────────────────────
LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

# ── Default Primary Key ──────────────────────────────────────
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# ── Engine Rules ──────────────────────────────────────────────
# Read by kargah.core.config.rules_from_settings().
KARGAH_ENGINE_RULES = {
    "OVERPAYMENT_POLICY": os.environ.get("KARGAH_OVERPAYMENT_POLICY", "ACCEPT"),
    "COSTING_DISCIPLINE": os.environ.get("KARGAH_COSTING_DISCIPLINE", "RECURSIVE"),
    "HOURS_PER_DAY": 8,
    "DEFAULT_REORDER_THRESHOLD": 10,
}

# ── Logging ───────────────────────────────────────────────────
LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "plain": {
            "format": "%(asctime)s %(levelname)s %(name)s %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "plain",
        },
    },
    "loggers": {
        "kargah": {
            "handlers": ["console"],
            "level": os.environ.get("KARGAH_LOG_LEVEL", "INFO"),
            "propagate": True,
        },
    },
}
