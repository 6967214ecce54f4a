"""
Django settings for the BELFX project.

Values come from the environment (or a .env file next to manage.py) through
django-environ. Runtime-tunable knobs live in CONSTANCE_CONFIG and can be
edited from the Django admin without a redeploy.
"""

import os
from pathlib import Path

import environ
from celery.schedules import crontab

BASE_DIR = Path(__file__).resolve().parent.parent

env = environ.Env(
    DEBUG=(bool, False),
    ALLOWED_HOSTS=(list, ['localhost', '127.0.0.1']),
    ADMIN_EMAILS=(list, ['admin@belfx.com']),
)

env_file = os.path.join(BASE_DIR, '.env')
if os.path.exists(env_file):
    environ.Env.read_env(env_file)

SECRET_KEY = env('SECRET_KEY', default='django-insecure-belfx-dev-key-change-me')

DEBUG = env('DEBUG')

ALLOWED_HOSTS = env('ALLOWED_HOSTS')

CSRF_TRUSTED_ORIGINS = env.list('CSRF_TRUSTED_ORIGINS', default=[])


INSTALLED_APPS = [
    'django.contrib.admin',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',
    'django.contrib.humanize',

    'constance',

    'home',
    'authentication',
    'wallet',
    'user_dashboard',
    'kyc_integration',
    'admin_panel',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
    'authentication.middleware.session_security.SessionSecurityMiddleware',
    'authentication.middleware.session_security.AccountStatusMiddleware',
]

ROOT_URLCONF = 'belfx.urls'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [BASE_DIR / 'templates'],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.debug',
                'django.template.context_processors.request',
                'django.contrib.auth.context_processors.auth',
                'django.contrib.messages.context_processors.messages',
                'home.context_processors.site_navigation',
            ],
        },
    },
]

WSGI_APPLICATION = 'belfx.wsgi.application'


DATABASES = {
    'default': env.db('DATABASE_URL', default=f"sqlite:///{BASE_DIR / 'db.sqlite3'}"),
}

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'


AUTH_PASSWORD_VALIDATORS = [
    {'NAME': 'django.contrib.auth.password_validation.UserAttributeSimilarityValidator'},
    {'NAME': 'django.contrib.auth.password_validation.MinimumLengthValidator', 'OPTIONS': {'min_length': 8}},
    {'NAME': 'django.contrib.auth.password_validation.CommonPasswordValidator'},
    {'NAME': 'django.contrib.auth.password_validation.NumericPasswordValidator'},
]

LOGIN_URL = 'Login'
LOGIN_REDIRECT_URL = 'user_dashboard:home'
LOGOUT_REDIRECT_URL = 'index'

# Seconds of inactivity before the session security middleware signs a user out
SESSION_IDLE_TIMEOUT = env.int('SESSION_IDLE_TIMEOUT', default=900)

# Emails that are always treated as platform admins, regardless of profile flags
ADMIN_EMAILS = [email.lower() for email in env('ADMIN_EMAILS')]


LANGUAGE_CODE = 'en-us'
TIME_ZONE = env('TIME_ZONE', default='Africa/Lagos')
USE_I18N = True
USE_TZ = True


STATIC_URL = '/static/'
STATIC_ROOT = os.path.join(BASE_DIR, 'staticfiles')
STATICFILES_DIRS = [BASE_DIR / 'static']

MEDIA_URL = '/media/'
MEDIA_ROOT = env('MEDIA_ROOT', default=os.path.join(BASE_DIR, 'media'))

STORAGES = {
    'default': {'BACKEND': 'django.core.files.storage.FileSystemStorage'},
    'staticfiles': {'BACKEND': 'django.contrib.staticfiles.storage.StaticFilesStorage'},
}


# Email
EMAIL_BACKEND = env('EMAIL_BACKEND', default='django.core.mail.backends.console.EmailBackend')
EMAIL_HOST = env('EMAIL_HOST', default='localhost')
EMAIL_PORT = env.int('EMAIL_PORT', default=587)
EMAIL_HOST_USER = env('EMAIL_HOST_USER', default='')
EMAIL_HOST_PASSWORD = env('EMAIL_HOST_PASSWORD', default='')
EMAIL_USE_TLS = env.bool('EMAIL_USE_TLS', default=True)
DEFAULT_FROM_EMAIL = env('DEFAULT_FROM_EMAIL', default='BELFX <no-reply@belfx.com>')
SITE_URL = env('SITE_URL', default='http://localhost:8000')


# Celery
CELERY_BROKER_URL = env('CELERY_BROKER_URL', default='redis://localhost:6379/0')
CELERY_RESULT_BACKEND = env('CELERY_RESULT_BACKEND', default='redis://localhost:6379/0')
CELERY_TASK_ALWAYS_EAGER = env.bool('CELERY_TASK_ALWAYS_EAGER', default=False)
CELERY_ACCEPT_CONTENT = ['json']
CELERY_TASK_SERIALIZER = 'json'
CELERY_TIMEZONE = TIME_ZONE
CELERY_BEAT_SCHEDULE = {
    'cleanup-expired-sessions': {
        'task': 'authentication.cleanup_expired_sessions',
        'schedule': crontab(hour=3, minute=0),
    },
}


# Identity verification providers
SUMSUB_APP_TOKEN = env('SUMSUB_APP_TOKEN', default='YOUR_APP_TOKEN')
SUMSUB_SECRET_KEY = env('SUMSUB_SECRET_KEY', default='YOUR_SECRET_KEY')
SUMSUB_BASE_URL = env('SUMSUB_BASE_URL', default='https://api.sumsub.com')
SUMSUB_TIMEOUT = env.int('SUMSUB_TIMEOUT', default=15)


# Runtime configuration
CONSTANCE_BACKEND = env('CONSTANCE_BACKEND', default='constance.backends.database.DatabaseBackend')

CONSTANCE_CONFIG = {
    'SUPPORTED_CURRENCIES': (
        'NGN,USD,CAD,GBP,EUR',
        'Comma-separated currency codes shown on the dashboard, in display order',
        str,
    ),
    'DASHBOARD_RECENT_TRANSACTIONS': (
        5,
        'Number of transactions listed under Recent Activity',
        int,
    ),
    'KYC_MAX_UPLOAD_MB': (
        5,
        'Largest KYC document or selfie upload accepted, in megabytes',
        int,
    ),
    'SUMSUB_TOKEN_TTL': (
        600,
        'Lifetime in seconds of Sumsub SDK access tokens',
        int,
    ),
    'ADMIN_USERS_PAGE_SIZE': (
        25,
        'Rows per page in the admin panel user and KYC tables',
        int,
    ),
}

CONSTANCE_CONFIG_FIELDSETS = {
    'Dashboard': ('SUPPORTED_CURRENCIES', 'DASHBOARD_RECENT_TRANSACTIONS'),
    'KYC': ('KYC_MAX_UPLOAD_MB', 'SUMSUB_TOKEN_TTL'),
    'Admin panel': ('ADMIN_USERS_PAGE_SIZE',),
}


LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'verbose': {
            'format': '{levelname} {asctime} {name} {message}',
            'style': '{',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'verbose',
        },
    },
    'root': {
        'handlers': ['console'],
        'level': env('LOG_LEVEL', default='INFO'),
    },
    'loggers': {
        'django': {
            'handlers': ['console'],
            'level': env('DJANGO_LOG_LEVEL', default='WARNING'),
            'propagate': False,
        },
    },
}
