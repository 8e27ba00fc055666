"""
Test settings for the Auto Shop project.
"""

from .base import *

DEBUG = False

SECRET_KEY = 'test-secret-key'

ALLOWED_HOSTS = ['*']

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']

AUTOSHOP = {
    **AUTOSHOP,
    'RESERVE_STOCK_ON_CREATE': False,
    'DEFAULT_PAGE_SIZE': 10,
}

# No log file; records propagate to the root logger so caplog sees them.
LOGGING['handlers'].pop('file')
for _name in ('autoshop', 'application', 'infrastructure', 'presentation'):
    LOGGING['loggers'][_name].update(handlers=[], level='WARNING', propagate=True)
