"""Django settings for pagetree_platform project.

Values that vary per deployment come from ``pagetree_platform.config.settings``
(pydantic-settings); values editable at runtime live in Constance.

"""

from pathlib import Path

import logfire

from pagetree_platform.config import settings

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = settings.secret_key
DEBUG = settings.debug
ALLOWED_HOSTS = settings.allowed_hosts

INSTALLED_APPS = [
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    "constance",
    "apps.pages",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.locale.LocaleMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "pagetree_platform.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    },
]

WSGI_APPLICATION = "pagetree_platform.wsgi.application"

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": BASE_DIR / settings.sqlite_path,
    }
}

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# Internationalization
LANGUAGE_CODE = settings.language_code
LANGUAGES = [(code, code) for code in settings.languages]
USE_I18N = True
USE_TZ = True
TIME_ZONE = "UTC"

STATIC_URL = "static/"

# Pages
PAGES_RESERVED_WORDS = settings.pages_reserved_words
PAGES_ALLOW_UNICODE_SLUGS = settings.pages_allow_unicode_slugs

# Constance (runtime settings)
CONSTANCE_BACKEND = "constance.backends.database.DatabaseBackend"
CONSTANCE_CONFIG = {
    "USE_MARKETABLE_URLS": (
        True,
        "Build hierarchical page URLs from slugs (off: flat slug identifiers)",
        bool,
    ),
}
CONSTANCE_CONFIG_FIELDSETS = {
    "Pages": ("USE_MARKETABLE_URLS",),
}

# Logfire
logfire.configure(
    token=settings.logfire_token,
    environment=settings.logfire_environment,
    service_name="pagetree_platform",
    send_to_logfire="if-token-present",
)
logfire.instrument_django()
