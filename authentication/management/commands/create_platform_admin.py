"""
Create (or promote) the BELFX platform administrator.

Usage:
    DJANGO_SUPERUSER_EMAIL=ops@belfx.com DJANGO_SUPERUSER_PASSWORD=... \
        python manage.py create_platform_admin
"""

import os

from django.core.management.base import BaseCommand, CommandError
from django.contrib.auth.models import User

from authentication.models import Profile


class Command(BaseCommand):
    help = 'Create a platform admin account if it does not exist, or promote an existing one'

    def add_arguments(self, parser):
        parser.add_argument('--email', help='Admin email (defaults to DJANGO_SUPERUSER_EMAIL)')
        parser.add_argument('--full-name', default='BELFX Admin')

    def handle(self, *args, **options):
        email = (options.get('email') or os.environ.get('DJANGO_SUPERUSER_EMAIL', 'admin@belfx.com')).lower()
        password = os.environ.get('DJANGO_SUPERUSER_PASSWORD')

        user = User.objects.filter(username=email).first()
        if user is None:
            if not password:
                raise CommandError('Set DJANGO_SUPERUSER_PASSWORD to create a new admin account')
            user = User.objects.create_superuser(username=email, email=email, password=password)
            self.stdout.write(self.style.SUCCESS(f'Admin {email} created'))
        else:
            if password:
                user.set_password(password)
            user.is_staff = True
            user.is_superuser = True
            user.is_active = True
            user.save()
            self.stdout.write(self.style.SUCCESS(f'Admin {email} already exists, privileges refreshed'))

        profile, _ = Profile.objects.get_or_create(owner=user)
        profile.is_admin = True
        profile.email = email
        if not profile.full_name:
            profile.full_name = options['full_name']
        profile.save()
