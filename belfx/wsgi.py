"""WSGI config for the BELFX project."""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'belfx.settings')

application = get_wsgi_application()
