import logging

from django.contrib.auth.models import User
from django.db.models.signals import post_save
from django.dispatch import receiver

from .models import Profile

logger = logging.getLogger(__name__)


@receiver(post_save, sender=User)
def create_user_profile(sender, instance, created, **kwargs):
    """
    Make sure every user has a Profile, including superusers created
    from the command line. Registration fills in the full name afterwards.
    """
    if not created:
        return

    profile, profile_created = Profile.objects.get_or_create(
        owner=instance,
        defaults={
            'full_name': instance.get_full_name(),
            'email': (instance.email or '').lower(),
            'is_admin': instance.is_superuser,
        }
    )
    if profile_created:
        logger.info(f"Created profile for user {instance.pk}")
