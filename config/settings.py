"""
POS – Django Settings (Infrastructure Only)
============================================
Django serves as the framework container for the POS core:
it hosts the ledger's ORM store and carries the POS_* rules.
The POS core is the authority — Django does not dictate structure.
"""

import os
from pathlib import Path

# ── Paths ─────────────────────────────────────────────────────
BASE_DIR = Path(__file__).resolve().parent.parent

# ── Security ──────────────────────────────────────────────────
SECRET_KEY = os.environ.get("POS_SECRET_KEY", "pos-dev-key-replace-before-deployment")

DEBUG = os.environ.get("POS_DEBUG", "1") == "1"

ALLOWED_HOSTS = []

# ── Installed Apps ────────────────────────────────────────────
INSTALLED_APPS = [
    "django.contrib.contenttypes",
    # ── POS Modules ──────────────────────────────────────
    "core.ledger",
]

MIDDLEWARE = []

# ── Database ──────────────────────────────────────────────────
# SQLite for development. Production DB configured separately.
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": os.environ.get("POS_DB_PATH", BASE_DIR / "db.sqlite3"),
    }
}

# ── Internationalization ──────────────────────────────────────
LANGUAGE_CODE = "en-gb"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# ── POS Rules ─────────────────────────────────────────────────
# Read by core.config.load_pos_config().
POS_WEEK_START = os.environ.get("POS_WEEK_START", "MONDAY")
POS_REPORT_TIME_ZONE = os.environ.get("POS_REPORT_TIME_ZONE", "UTC")
POS_REPORT_REFRESH_SECONDS = float(os.environ.get("POS_REPORT_REFRESH_SECONDS", "60"))
POS_PAYMENT_METHODS = os.environ.get("POS_PAYMENT_METHODS", "CARD,CASH")
POS_PERCENTAGE_TIERS = (5, 10, 20)
POS_CURRENCY_SYMBOL = os.environ.get("POS_CURRENCY_SYMBOL", "£")

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
        "pos": {
            "handlers": ["console"],
            "level": os.environ.get("POS_LOG_LEVEL", "INFO"),
        },
    },
}
