"""
Session utility functions for BELFX.
"""

from django.contrib.sessions.models import Session
from django.utils import timezone


def invalidate_all_user_sessions(user, exclude_current=None):
    """
    Invalidate all sessions for a user.

    Args:
        user: User object
        exclude_current: Session key to exclude (current session)

    Returns:
        int: number of sessions deleted

    Usage:
        # Sign a suspended user out of every device
        invalidate_all_user_sessions(user)
    """
    sessions = Session.objects.filter(expire_date__gte=timezone.now())

    user_sessions = []
    user_id_str = str(user.id)

    for session in sessions:
        try:
            data = session.get_decoded()
        except Exception:
            # Skip corrupted sessions
            continue

        if data.get('_auth_user_id') != user_id_str:
            continue
        if exclude_current and session.session_key == exclude_current:
            continue
        user_sessions.append(session.session_key)

    Session.objects.filter(session_key__in=user_sessions).delete()

    return len(user_sessions)
