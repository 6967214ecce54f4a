from functools import wraps
from urllib.parse import urlencode

from django.contrib import messages
from django.shortcuts import redirect
from django.urls import reverse


def anonymous_required(view_func):
    """Send signed-in users straight to the dashboard instead of the auth pages."""
    @wraps(view_func)
    def wrapped_view(request, *args, **kwargs):
        if request.user.is_authenticated:
            return redirect('user_dashboard:home')
        return view_func(request, *args, **kwargs)
    return wrapped_view


def login_required_with_message(message='Please log in to continue.'):
    """
    Like login_required, but leaves a message for the login page and keeps
    the requested path in ?next=.
    """
    def decorator(view_func):
        @wraps(view_func)
        def wrapped_view(request, *args, **kwargs):
            if not request.user.is_authenticated:
                messages.info(request, message)
                login_url = reverse('Login')
                return redirect(f"{login_url}?{urlencode({'next': request.get_full_path()})}")
            return view_func(request, *args, **kwargs)
        return wrapped_view
    return decorator
