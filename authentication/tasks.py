"""
Celery tasks for account emails and session housekeeping.
"""

from celery import shared_task
from django.contrib.auth.models import User
from django.contrib.sessions.models import Session
from django.utils import timezone
import logging

from .emails import send_confirmation_email

logger = logging.getLogger(__name__)


@shared_task(name='authentication.send_account_confirmation')
def send_account_confirmation_task(user_id, confirm_url):
    """
    Email the confirmation link to a freshly registered user.
    """
    user = User.objects.filter(pk=user_id).select_related('profile').first()
    if user is None:
        logger.warning(f"Skipping confirmation email: user {user_id} no longer exists")
        return False
    return send_confirmation_email(user, confirm_url)


@shared_task(name='authentication.cleanup_expired_sessions')
def cleanup_expired_sessions():
    """
    Cleanup expired sessions from database.
    Runs daily via Celery Beat.
    """
    try:
        expired_sessions = Session.objects.filter(expire_date__lt=timezone.now())
        count = expired_sessions.count()
        expired_sessions.delete()

        logger.info(f'Cleaned up {count} expired sessions')
        return f'Deleted {count} expired sessions'

    except Exception as e:
        logger.error(f'Error cleaning up sessions: {str(e)}')
        raise
