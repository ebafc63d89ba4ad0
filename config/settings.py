"""
Django settings for the marketplace back office.

Uses django-environ for 12-factor configuration via .env file.
"""

from pathlib import Path

import environ

BASE_DIR = Path(__file__).resolve().parent.parent

env = environ.Env(
    DEBUG=(bool, False),
    ALLOWED_HOSTS=(list, ["localhost", "127.0.0.1", "testserver"]),
    ENABLE_EMBEDDED_SHOPFRONTS=(bool, False),
)

# Read .env file if it exists (dev convenience)
environ.Env.read_env(BASE_DIR / ".env")

SECRET_KEY = env("SECRET_KEY", default="dev-secret-CHANGE-ME")
DEBUG = env("DEBUG")
ALLOWED_HOSTS = env("ALLOWED_HOSTS")

INSTALLED_APPS = [
    # django-unfold must come before django.contrib.admin
    "unfold",
    "unfold.contrib.filters",
    "unfold.contrib.forms",
    # Django built-ins
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    # Local apps
    "accounts",
    "enterprises",
    "customers",
    "catalog",
    "order_cycles",
    "orders",
    "payments",
    "shopfront",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
    "shopfront.middleware.EmbeddedShopfrontMiddleware",
]

ROOT_URLCONF = "config.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.debug",
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    },
]

WSGI_APPLICATION = "config.wsgi.application"

# Balances are read-only aggregations, so SQLite is fine for local dev and tests.
# Production points DATABASE_URL at PostgreSQL.
DATABASES = {
    "default": env.db("DATABASE_URL", default=f"sqlite:///{BASE_DIR / 'db.sqlite3'}")
}

# Custom User model (must be set before first migration)
AUTH_USER_MODEL = "accounts.User"

AUTH_PASSWORD_VALIDATORS = [
    {"NAME": "django.contrib.auth.password_validation.UserAttributeSimilarityValidator"},
    {"NAME": "django.contrib.auth.password_validation.MinimumLengthValidator"},
    {"NAME": "django.contrib.auth.password_validation.CommonPasswordValidator"},
    {"NAME": "django.contrib.auth.password_validation.NumericPasswordValidator"},
]

LANGUAGE_CODE = "en-us"
TIME_ZONE = env("TIME_ZONE", default="UTC")
USE_I18N = True
USE_TZ = True

STATIC_URL = "/static/"
STATIC_ROOT = BASE_DIR / "staticfiles"

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

LOGIN_URL = "/admin/login/"

# Logging: app loggers go to the console at LOG_LEVEL
LOG_LEVEL = env("LOG_LEVEL", default="INFO")

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {"format": "%(asctime)s %(levelname)s %(name)s: %(message)s"},
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "simple"},
    },
    "root": {"handlers": ["console"], "level": "WARNING"},
    "loggers": {
        app: {"handlers": ["console"], "level": LOG_LEVEL, "propagate": False}
        for app in (
            "api",
            "customers",
            "catalog",
            "order_cycles",
            "orders",
            "payments",
            "shopfront",
        )
    },
}

# Order states reached only after checkout; only these count towards a
# customer's balance. Injected into customers.queries.CustomersWithBalance.
ORDER_FINALIZED_STATES = env.list(
    "ORDER_FINALIZED_STATES",
    default=["complete", "resumed", "payment", "awaiting_return", "returned"],
)

# JSON API pagination
API_DEFAULT_PER_PAGE = env.int("API_DEFAULT_PER_PAGE", default=50)
API_MAX_PER_PAGE = env.int("API_MAX_PER_PAGE", default=100)

# Embedded shopfronts: third-party sites allowed to iframe shop pages.
# Whitelist is a space separated list of domains, without "www.".
ENABLE_EMBEDDED_SHOPFRONTS = env("ENABLE_EMBEDDED_SHOPFRONTS")
EMBEDDED_SHOPFRONTS_WHITELIST = env("EMBEDDED_SHOPFRONTS_WHITELIST", default="")

# django-unfold Admin customisation
UNFOLD = {
    "SITE_TITLE": "Food Marketplace",
    "SITE_HEADER": "Marketplace back office",
    "SITE_SYMBOL": "storefront",
    "SHOW_HISTORY": True,
    "SHOW_VIEW_ON_SITE": False,
    "SIDEBAR": {
        "show_search": True,
        "navigation": [
            {
                "title": "Customers",
                "items": [
                    {"title": "Customers", "link": "/admin/customers/customer/"},
                    {"title": "Enterprises", "link": "/admin/enterprises/enterprise/"},
                ],
            },
            {
                "title": "Selling",
                "items": [
                    {"title": "Order cycles", "link": "/admin/order_cycles/ordercycle/"},
                    {"title": "Schedules", "link": "/admin/order_cycles/schedule/"},
                    {"title": "Products", "link": "/admin/catalog/product/"},
                ],
            },
            {
                "title": "Finance",
                "items": [
                    {"title": "Orders", "link": "/admin/orders/order/"},
                    {"title": "Payments", "link": "/admin/payments/payment/"},
                ],
            },
            {
                "title": "System",
                "items": [
                    {"title": "Users", "link": "/admin/accounts/user/"},
                ],
            },
        ],
    },
}
