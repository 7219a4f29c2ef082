"""
Django settings for the Empiria admin dashboard.

Every value comes from the environment (optionally seeded from a local
``.env``). In development/production the identity-provider and SMTP secrets
can also be pulled from AWS Secrets Manager.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent.parent

load_dotenv(BASE_DIR.parent / ".env")

ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

# --- Secrets Manager overlay --------------------------------------------------
APP_SECRET_NAME = os.getenv("APP_SECRET_NAME", "")

if ENVIRONMENT in ["production", "development"] and APP_SECRET_NAME:
    from config.secrets import load_secret_into_environ

    load_secret_into_environ(
        APP_SECRET_NAME, region_name=os.getenv("AWS_REGION", "us-east-1")
    )


def _env_bool(name, default="false"):
    return os.getenv(name, default).lower() in ("1", "true", "yes")


SECRET_KEY = os.getenv("DJANGO_SECRET_KEY", "django-insecure-local-dev-key")

DEBUG = _env_bool("DJANGO_DEBUG", "true" if ENVIRONMENT == "local" else "false")

ALLOWED_HOSTS = [
    h.strip()
    for h in os.getenv("DJANGO_ALLOWED_HOSTS", "localhost,127.0.0.1").split(",")
    if h.strip()
]

CSRF_TRUSTED_ORIGINS = [
    o.strip() for o in os.getenv("CSRF_TRUSTED_ORIGINS", "").split(",") if o.strip()
]

INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    "django.contrib.humanize",
    "accounts.apps.AccountsConfig",
    "events.apps.EventsConfig",
    "orders.apps.OrdersConfig",
    "tickets.apps.TicketsConfig",
    "dashboard.apps.DashboardConfig",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "config.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [BASE_DIR / "templates"],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.debug",
                "django.template.context_processors.request",
                "django.contrib.messages.context_processors.messages",
                "accounts.context_processors.admin_user",
                "config.context_processors.dashboard_settings",
            ],
        },
    },
]

WSGI_APPLICATION = "config.wsgi.application"

# --- Database -----------------------------------------------------------------
# The platform database is hosted; tables are owned by the platform and mapped
# by the models here. Locally and under tests we fall back to SQLite.
DB_ENGINE = os.getenv("DB_ENGINE", "sqlite")

if DB_ENGINE == "postgres":
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.postgresql",
            "NAME": os.getenv("DB_NAME", "postgres"),
            "USER": os.getenv("DB_USER", "postgres"),
            "PASSWORD": os.getenv("DB_PASSWORD", ""),
            "HOST": os.getenv("DB_HOST", "localhost"),
            "PORT": os.getenv("DB_PORT", "5432"),
            "CONN_MAX_AGE": int(os.getenv("DB_CONN_MAX_AGE", "60")),
            "OPTIONS": {"sslmode": os.getenv("DB_SSLMODE", "require")},
        }
    }
else:
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.sqlite3",
            "NAME": BASE_DIR / "db.sqlite3",
        }
    }

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# --- Sessions -------------------------------------------------------------------
SESSION_ENGINE = "django.contrib.sessions.backends.signed_cookies"
SESSION_COOKIE_HTTPONLY = True
SESSION_COOKIE_SECURE = ENVIRONMENT == "production"
CSRF_COOKIE_SECURE = ENVIRONMENT == "production"

# --- Identity provider (Auth0, OpenID Connect) ----------------------------------
AUTH0 = {
    "DOMAIN": os.getenv("AUTH0_DOMAIN", "")
    .replace("https://", "")
    .rstrip("/"),
    "CLIENT_ID": os.getenv("AUTH0_CLIENT_ID", ""),
    "CLIENT_SECRET": os.getenv("AUTH0_CLIENT_SECRET", ""),
    "SCOPE": "openid profile email",
}
APP_BASE_URL = os.getenv("APP_BASE_URL", "http://localhost:8000")

LOGIN_URL = "accounts:login"
LOGIN_REDIRECT_URL = "dashboard:overview"

# --- Email ------------------------------------------------------------------------
if ENVIRONMENT == "local" and not os.getenv("EMAIL_HOST"):
    EMAIL_BACKEND = "django.core.mail.backends.console.EmailBackend"
else:
    EMAIL_BACKEND = os.getenv(
        "EMAIL_BACKEND", "django.core.mail.backends.smtp.EmailBackend"
    )
EMAIL_HOST = os.getenv("EMAIL_HOST", "smtp.resend.com")
EMAIL_PORT = int(os.getenv("EMAIL_PORT", "587"))
EMAIL_HOST_USER = os.getenv("EMAIL_HOST_USER", "resend")
EMAIL_HOST_PASSWORD = os.getenv("EMAIL_HOST_PASSWORD", "")
EMAIL_USE_TLS = _env_bool("EMAIL_USE_TLS", "true")
EMAIL_TIMEOUT = int(os.getenv("EMAIL_TIMEOUT", "20"))
DEFAULT_FROM_EMAIL = os.getenv("DEFAULT_FROM_EMAIL", "Empiria Tickets <tickets@empiria.events>")

# --- Dashboard --------------------------------------------------------------------
DASHBOARD_PAGE_SIZE = int(os.getenv("DASHBOARD_PAGE_SIZE", "25"))
REPORTING_CURRENCY = os.getenv("REPORTING_CURRENCY", "cad")
ORGANIZER_APP_URL = os.getenv("ORGANIZER_APP_URL", "")
# Set when the database consumes tier inventory in a trigger on ticket insert.
TICKET_INVENTORY_TRIGGER = _env_bool("TICKET_INVENTORY_TRIGGER")

# --- I18n / static ------------------------------------------------------------------
LANGUAGE_CODE = "en-ca"
TIME_ZONE = os.getenv("TIME_ZONE", "UTC")
USE_I18N = True
USE_TZ = True

STATIC_URL = "static/"
STATIC_ROOT = BASE_DIR / "staticfiles"

# --- Logging ---------------------------------------------------------------------------
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "standard": {
            "format": "%(asctime)s %(levelname)s %(name)s: %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "standard",
        },
    },
    "root": {"handlers": ["console"], "level": LOG_LEVEL},
    "loggers": {
        "django": {"handlers": ["console"], "level": "WARNING", "propagate": False},
    },
}
