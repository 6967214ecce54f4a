"""
Settings used by the test suite.
Runs everything in-process: sqlite in memory, eager Celery, locmem email.
"""

import tempfile

from .settings import *

DEBUG = False

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']

EMAIL_BACKEND = 'django.core.mail.backends.locmem.EmailBackend'

CELERY_TASK_ALWAYS_EAGER = True
CELERY_TASK_EAGER_PROPAGATES = True
CELERY_BROKER_URL = 'memory://'
CELERY_RESULT_BACKEND = 'cache+memory://'

CONSTANCE_BACKEND = 'constance.backends.memory.MemoryBackend'

MEDIA_ROOT = tempfile.mkdtemp(prefix='belfx-test-media-')

ADMIN_EMAILS = ['admin@belfx.com']

SUMSUB_APP_TOKEN = 'test-app-token'
SUMSUB_SECRET_KEY = 'test-secret-key'
