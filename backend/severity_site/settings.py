"""
Django settings for the severity dashboard backend.

Everything that changes between a laptop and a server is read from the
environment, the rest is kept as plain constants so it is easy to find.
"""
from pathlib import Path
import os

# Base directory for the backend project (../backend)
BASE_DIR = Path(__file__).resolve().parent.parent

# SECURITY WARNING: keep the secret key used in production secret!
SECRET_KEY = os.environ.get("DJANGO_SECRET_KEY", "dev-secret-key-for-local-use-only")

# Off by default so unknown routes get the JSON 404 instead of the debug page.
DEBUG = os.environ.get("DJANGO_DEBUG", "0") == "1"

ALLOWED_HOSTS: list[str] = ["*"]

INSTALLED_APPS = [
    # Our app goes first so its `runserver` (PORT aware) wins.
    "core",

    # DRF still needs auth/contenttypes for AnonymousUser, even without logins.
    "django.contrib.auth",
    "django.contrib.contenttypes",

    # Third‑party apps
    "rest_framework",
    "corsheaders",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    # CORS middleware should come before CommonMiddleware
    "corsheaders.middleware.CorsMiddleware",
    "django.middleware.common.CommonMiddleware",
]

ROOT_URLCONF = "severity_site.urls"

WSGI_APPLICATION = "severity_site.wsgi.application"

# The test live server looks this up even without the staticfiles app.
STATIC_URL = "/static/"

# Nothing is stored in a database, but Django wants the setting to exist.
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": BASE_DIR / "db.sqlite3",
    }
}

LANGUAGE_CODE = "en-us"
TIME_ZONE = "Europe/Rome"
USE_I18N = True
USE_TZ = True

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# No trailing slashes on the API (/config, /data, /upload).
APPEND_SLASH = False

CORS_ALLOW_ALL_ORIGINS = True

REST_FRAMEWORK = {
    # No accounts in this project: every endpoint is public.
    "DEFAULT_AUTHENTICATION_CLASSES": [],
    "DEFAULT_PERMISSION_CLASSES": [
        "rest_framework.permissions.AllowAny",
    ],
    "UNAUTHENTICATED_USER": None,
    "DEFAULT_RENDERER_CLASSES": [
        "rest_framework.renderers.JSONRenderer",
    ],
    "EXCEPTION_HANDLER": "core.exceptions.api_exception_handler",
}

# ---------------------------------------------------------------------------
# Flat file storage
# ---------------------------------------------------------------------------

# All persisted state lives under this directory (the working dir by default).
STORAGE_DIR = Path(os.environ.get("STORAGE_DIR", "."))

CONFIG_FILE = STORAGE_DIR / "config" / "config.json"
DATA_FILE = STORAGE_DIR / "data" / "data.json"
UPLOAD_DIR = STORAGE_DIR / "uploads"

# 2 MiB per CSV.
UPLOAD_MAX_BYTES = 2 * 1024 * 1024

UPLOAD_RETENTION_DAYS = float(os.environ.get("UPLOAD_RETENTION_DAYS", "7"))

# How often the retention sweep runs, in seconds.
UPLOAD_SWEEP_INTERVAL = 60 * 60

# Keep uploads on disk instead of in memory once they are bigger than this.
FILE_UPLOAD_MAX_MEMORY_SIZE = UPLOAD_MAX_BYTES

# Static frontend roots, searched in order.
FRONTEND_DIRS = [
    BASE_DIR / "public",
]

PORT = os.environ.get("PORT", "3000")

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {
            "format": "%(asctime)s %(levelname)s %(name)s: %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "simple",
        },
    },
    "loggers": {
        "core": {
            "handlers": ["console"],
            "level": os.environ.get("LOG_LEVEL", "INFO"),
        },
    },
}
