"""
Session guards for signed-in BELFX users.

SessionSecurityMiddleware signs a user out after SESSION_IDLE_TIMEOUT seconds
without a request and records where the session came from.
AccountStatusMiddleware ends the session of a user suspended from the admin
console while still signed in.
"""

import time
import logging

from django.conf import settings
from django.contrib import messages
from django.contrib.auth import logout
from django.shortcuts import redirect
from django.utils.deprecation import MiddlewareMixin

from user_dashboard.kyc_utils import get_client_ip

logger = logging.getLogger(__name__)

IDLE_MESSAGE = 'You were logged out due to inactivity to keep your account secure.'
SUSPENDED_MESSAGE = 'Your account has been suspended. Please contact support.'

# Auth pages and assets never count as activity.
PUBLIC_PREFIXES = (
    '/user/',
    '/api/register-user',
    '/static/',
    '/media/',
    '/admin/login/',
)


def _sign_out(request, level, text):
    logout(request)
    messages.add_message(request, level, text)
    return redirect('Login')


class SessionSecurityMiddleware(MiddlewareMixin):
    """Idle timeout plus a one-off snapshot of the client behind the session."""

    def process_request(self, request):
        if request.path.startswith(PUBLIC_PREFIXES) or not request.user.is_authenticated:
            return None

        session = request.session
        now = time.time()
        seen = session.get('last_activity')
        limit = getattr(settings, 'SESSION_IDLE_TIMEOUT', 900)

        if seen and now - seen > limit:
            logger.info("Session of user %s idle for %.0fs, signing out", request.user.pk, now - seen)
            return _sign_out(request, messages.WARNING, IDLE_MESSAGE)

        session['last_activity'] = now
        if not session.get('session_metadata_stored'):
            session.update({
                'user_agent': request.META.get('HTTP_USER_AGENT', 'Unknown'),
                'ip_address': get_client_ip(request) or 'Unknown',
                'login_timestamp': now,
                'session_metadata_stored': True,
            })
        return None


class AccountStatusMiddleware(MiddlewareMixin):

    def process_request(self, request):
        if not request.user.is_authenticated:
            return None

        profile = getattr(request.user, 'profile', None)
        if profile is None or not profile.is_suspended:
            return None

        logger.warning("Ending session of suspended user %s", request.user.pk)
        return _sign_out(request, messages.ERROR, SUSPENDED_MESSAGE)
