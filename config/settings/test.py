"""
Django test settings for task_manager project.

Used by pytest-django (see pyproject.toml) and `manage.py test --settings`.
"""

from .base import *

DEBUG = False

ALLOWED_HOSTS = ['testserver', 'localhost']

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

# Fast hashing for test users
PASSWORD_HASHERS = [
    'django.contrib.auth.hashers.MD5PasswordHasher',
]

EMAIL_BACKEND = 'django.core.mail.backends.locmem.EmailBackend'

# Run queued notifications inline so tests can inspect mail.outbox
Q_CLUSTER = {
    'name': 'task_manager_test',
    'sync': True,
    'timeout': 60,
    'retry': 120,
    'orm': 'default',
    'catch_up': False,
}

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
        },
    },
    'root': {
        'handlers': ['console'],
        'level': 'WARNING',
    },
}
