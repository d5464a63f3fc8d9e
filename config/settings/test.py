# config/settings/test.py
from .base import *  # noqa

DEBUG = False

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

LOGGING["loggers"]["studio_core"]["level"] = "DEBUG"
# let pytest's caplog see studio_core records
LOGGING["loggers"]["studio_core"]["propagate"] = True
