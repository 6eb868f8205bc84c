import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


SECRET_KEY = os.getenv("DJANGO_SECRET_KEY", "django-insecure-sidebars-dev-key")
DEBUG = _env_flag("DJANGO_DEBUG")
ALLOWED_HOSTS = [
    host.strip()
    for host in os.getenv("DJANGO_ALLOWED_HOSTS", "localhost,127.0.0.1,testserver").split(",")
    if host.strip()
]

INSTALLED_APPS = [
    "core",
    "widgets.apps.WidgetsConfig",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
]

ROOT_URLCONF = "config.urls"
WSGI_APPLICATION = "config.wsgi.application"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.request",
            ],
        },
    },
]

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": BASE_DIR / "db.sqlite3",
    }
}

LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {"format": "%(asctime)s %(levelname)s %(name)s: %(message)s"},
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "simple"},
    },
    "root": {
        "handlers": ["console"],
        "level": os.getenv("DJANGO_LOG_LEVEL", "INFO"),
    },
}

# Prefix for the sidebar and widget API routes, e.g. "wp-json/wp/v2/".
REST_URL_PREFIX = os.getenv("REST_URL_PREFIX", "")

# Registered sidebars, in display order. "widgets" lists the placed instance
# ids ("{id_base}-{number}"); everything else is passed to register_sidebar().
SIDEBARS = [
    {
        "id": "primary",
        "name": "Primary Sidebar",
        "description": "Shown next to posts and pages.",
        "widgets": ["search-2", "text-2", "meta"],
    },
    {
        "id": "footer",
        "name": "Footer",
        "description": "Shown at the bottom of every page.",
        "before_widget": '<section id="%1$s" class="widget %2$s">',
        "after_widget": "</section>",
        "widgets": ["custom_html-2"],
    },
]

# Instance settings keyed by id_base, then by instance number.
WIDGET_INSTANCES = {
    "search": {2: {"title": "Search"}},
    "text": {2: {"title": "About", "content": "Notes about *this* site."}},
    "custom_html": {2: {"content": "<p>&copy; The authors</p>"}},
}
