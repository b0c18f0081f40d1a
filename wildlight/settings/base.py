"""
Base settings for the wildlight project (production defaults).

Values come from the environment or a ``.env`` file through python-decouple.
"""

from pathlib import Path

from decouple import Csv, config

BASE_DIR = Path(__file__).resolve().parent.parent.parent

SECRET_KEY = config("SESSION_SECRET", default="wildlife-gallery-secret")

DEBUG = config("DEBUG", default=False, cast=bool)

ALLOWED_HOSTS = config("ALLOWED_HOSTS", default="localhost,127.0.0.1", cast=Csv())

INSTALLED_APPS = [
    "gallery.apps.GalleryConfig",
    "likes",
    "studio",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "wildlight.urls"

WSGI_APPLICATION = "wildlight.wsgi.application"

# Flat JSON files only
DATABASES = {}

LANGUAGE_CODE = "en-us"
TIME_ZONE = config("TIME_ZONE", default="UTC")
USE_I18N = False
USE_TZ = True

# JSON bodies are small; uploads stream to temp files past this size
DATA_UPLOAD_MAX_MEMORY_SIZE = 2 * 1024 * 1024

# Wildlight store
WILDLIGHT_DATA_DIR = Path(config("WILDLIGHT_DATA_DIR", default=str(BASE_DIR / "data")))
WILDLIGHT_UPLOAD_DIR = Path(config("WILDLIGHT_UPLOAD_DIR", default=str(BASE_DIR / "uploads")))
WILDLIGHT_PREPARE_STORE = config("WILDLIGHT_PREPARE_STORE", default=True, cast=bool)
WILDLIGHT_MAX_UPLOAD_BYTES = 20 * 1024 * 1024

# Admin gate
WILDLIGHT_ADMIN_PASSWORD = config("ADMIN_PASSWORD", default="change-me")
WILDLIGHT_ADMIN_COOKIE = "wildlight_admin"
WILDLIGHT_ADMIN_COOKIE_MAX_AGE = 7 * 24 * 60 * 60
WILDLIGHT_ADMIN_COOKIE_SECURE = config("ADMIN_COOKIE_SECURE", default=False, cast=bool)

# Likes
WILDLIGHT_LIKE_SALT = config("LIKE_SALT", default="")
WILDLIGHT_TRUST_PROXY = config("WILDLIGHT_TRUST_PROXY", default=False, cast=bool)
WILDLIGHT_VISITOR_IDENTITY = "likes.identity.AddressHashIdentity"

LOG_LEVEL = config("LOG_LEVEL", default="INFO")

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "rich": {
            "format": "{message}",
            "style": "{",
            "datefmt": "[%X]",
        },
    },
    "handlers": {
        "console": {
            "level": LOG_LEVEL,
            "class": "rich.logging.RichHandler",
            "formatter": "rich",
        },
    },
    "loggers": {
        "django": {
            "handlers": ["console"],
            "level": LOG_LEVEL,
            "propagate": False,
        },
        **{
            name: {"handlers": ["console"], "level": LOG_LEVEL, "propagate": False}
            for name in ("common", "gallery", "likes", "studio", "wildlight")
        },
    },
}
