"""Test settings for ShareIt project.

In-memory SQLite, fast password hashing and human readable logs.
"""

from .base import *  # noqa: F401,F403

DEBUG = False

SECRET_KEY = 'test-secret-key'

ALLOWED_HOSTS = ['testserver', 'localhost']

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']

STORAGES = {
    'default': {
        'BACKEND': 'django.core.files.storage.FileSystemStorage',
    },
    'staticfiles': {
        'BACKEND': 'django.contrib.staticfiles.storage.StaticFilesStorage',
    },
}

LOGGING['handlers']['console']['formatter'] = 'console'  # noqa: F405
LOGGING['loggers']['apps']['level'] = 'WARNING'  # noqa: F405
LOGGING['loggers']['shared']['level'] = 'WARNING'  # noqa: F405
