"""
Django settings for the dispatch service.

Stateless: there is no database. Everything tunable comes from the
environment (a .env file is honoured).
"""
import os
from pathlib import Path

from dotenv import load_dotenv

from dispatch.policy import policy_from_env

BASE_DIR = Path(__file__).resolve().parent.parent

load_dotenv(BASE_DIR.parent / ".env")

SECRET_KEY = os.getenv("DJANGO_SECRET_KEY", "dev-only-dispatch-secret-key")
DEBUG = os.getenv("DJANGO_DEBUG", "false").lower() in ("1", "true", "yes", "on")
ALLOWED_HOSTS = [h.strip() for h in os.getenv("DJANGO_ALLOWED_HOSTS", "localhost,127.0.0.1").split(",") if h.strip()]

INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "django.contrib.auth",
    "corsheaders",
    "rest_framework",
    "assignments",
]

MIDDLEWARE = [
    "corsheaders.middleware.CorsMiddleware",
    "django.middleware.common.CommonMiddleware",
]

ROOT_URLCONF = "dispatch_backend.urls"
WSGI_APPLICATION = "dispatch_backend.wsgi.application"
APPEND_SLASH = False

DATABASES = {}

USE_TZ = True

CORS_ALLOW_ALL_ORIGINS = True

REST_FRAMEWORK = {
    "DEFAULT_RENDERER_CLASSES": ["rest_framework.renderers.JSONRenderer"],
    "DEFAULT_PARSER_CLASSES": ["rest_framework.parsers.JSONParser"],
    "DEFAULT_AUTHENTICATION_CLASSES": [],
    "DEFAULT_PERMISSION_CLASSES": ["rest_framework.permissions.AllowAny"],
    "UNAUTHENTICATED_USER": None,
}

# Scoring/selection tunables, see dispatch.policy.DispatchPolicy
DISPATCH_POLICY = policy_from_env()

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
        "dispatch": {"handlers": ["console"], "level": os.getenv("DISPATCH_LOG_LEVEL", "INFO"), "propagate": True},
        "assignments": {"handlers": ["console"], "level": os.getenv("DISPATCH_LOG_LEVEL", "INFO"), "propagate": True},
    },
}
