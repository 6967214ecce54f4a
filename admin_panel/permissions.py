from functools import wraps
from urllib.parse import urlencode

from django.conf import settings
from django.contrib import messages
from django.shortcuts import redirect
from django.urls import reverse


def is_platform_admin(user):
    """
    Profile flagged is_admin, Django staff, or an email listed in ADMIN_EMAILS.
    """
    if not user or not user.is_authenticated:
        return False
    if user.is_staff or user.is_superuser:
        return True
    profile = getattr(user, 'profile', None)
    if profile is not None and profile.is_admin:
        return True
    admin_emails = {email.lower() for email in getattr(settings, 'ADMIN_EMAILS', [])}
    return (user.email or '').lower() in admin_emails


def admin_required(view_func):
    """
    Anonymous users go to the admin login page; signed-in non-admins are
    sent back to their dashboard.
    """
    @wraps(view_func)
    def wrapped_view(request, *args, **kwargs):
        if not request.user.is_authenticated:
            login_url = reverse('admin_panel:login')
            return redirect(f"{login_url}?{urlencode({'next': request.get_full_path()})}")

        if not is_platform_admin(request.user):
            messages.error(request, 'Unauthorized')
            return redirect('user_dashboard:home')

        return view_func(request, *args, **kwargs)
    return wrapped_view
