"""
Pixie - Django Settings
=======================
Values that the installer manages (database credentials, runtime mode,
debug flag, base URL, app key) are read from the configuration resource
(``.env`` at the project root). The process environment fills keys the
resource does not carry; development defaults fill the rest.

Before installation the resource may not exist yet: the defaults below
must be enough to serve the installer.
"""

import os
from pathlib import Path

from dotenv import dotenv_values

from config.database import database_engine

# ── Paths ─────────────────────────────────────────────────────
# BASE_DIR = project root (where .env lives)
BASE_DIR = Path(__file__).resolve().parent.parent

PIXIE_ENV_FILE = Path(os.environ.get("PIXIE_ENV_FILE", BASE_DIR / ".env"))
PIXIE_ENV_TEMPLATE = Path(
    os.environ.get("PIXIE_ENV_TEMPLATE", BASE_DIR / ".env.example")
)

_ENV = {**os.environ, **{k: v for k, v in dotenv_values(PIXIE_ENV_FILE, interpolate=False).items() if v is not None}}


def _env(name, default=None):
    value = _ENV.get(name)
    if value is None or value.strip().lower() in ("", "null"):
        return default
    return value


def _env_bool(name, default=False):
    value = _env(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


# ── Runtime mode ──────────────────────────────────────────────
APP_ENV = _env("APP_ENV", "local")
BASE_URL = _env("BASE_URL", "")

# ── Security ──────────────────────────────────────────────────
# Replaced by the installer with a generated APP_KEY.
SECRET_KEY = _env("APP_KEY", "pixie-dev-key-replace-before-deployment")

DEBUG = _env_bool("APP_DEBUG", default=APP_ENV != "production")

ALLOWED_HOSTS = ["*"]

# ── Installed Apps ────────────────────────────────────────────
INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "core.settings_store",
    "core.accounts",
]

# ── Middleware ────────────────────────────────────────────────
MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
]

# Signed cookies: a session exists before the schema does.
SESSION_ENGINE = "django.contrib.sessions.backends.signed_cookies"

# ── URL ───────────────────────────────────────────────────────
ROOT_URLCONF = "config.urls"

# ── Database ──────────────────────────────────────────────────
# SQLite unless the configuration resource says otherwise.
DATABASES = {
    "default": {
        "ENGINE": database_engine(_env("DB_CONNECTION")),
        "NAME": _env("DB_NAME", str(BASE_DIR / "db.sqlite3")),
        "HOST": _env("DB_HOST", ""),
        "PORT": _env("DB_PORT", ""),
        "USER": _env("DB_USER", ""),
        "PASSWORD": _env("DB_PASSWORD", ""),
    }
}

# ── Installer ─────────────────────────────────────────────────
PIXIE_MIN_PYTHON = (3, 10)
PIXIE_INSTALL_SEED_FIXTURES = ()
PIXIE_REQUIRED_WRITABLE_DIRS = (
    "../assets/avatars",
    "storage",
    "storage/app",
    "storage/framework",
    "storage/logs",
    "storage/uploads",
    "storage/zips",
)

# ── Logging ───────────────────────────────────────────────────
LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "plain": {"format": "%(asctime)s %(levelname)s %(name)s: %(message)s"},
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "plain"},
    },
    "loggers": {
        "pixie": {
            "handlers": ["console"],
            "level": "DEBUG" if DEBUG else "INFO",
        },
    },
}

# ── Internationalization ──────────────────────────────────────
LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"
