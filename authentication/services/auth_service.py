import logging

from django.shortcuts import render, redirect
from django.contrib import messages
from django.contrib.auth import authenticate, login, logout
from django.contrib.auth.models import User

from authentication.forms import LoginForm, RegisterForm
from authentication.models import Profile
from .registration_service import RegistrationService, RegistrationError

logger = logging.getLogger(__name__)


class AuthManager:
    @staticmethod
    def login_view(request):
        form = LoginForm(request.POST or None)
        if request.method == 'POST':
            if not form.is_valid():
                return render(request, 'authentication/login.html', {'form': form})

            email = form.cleaned_data['email']
            user = authenticate(request, username=email, password=form.cleaned_data['password'])
            if user is None:
                if AuthManager._is_unconfirmed(email, form.cleaned_data['password']):
                    messages.error(request, 'Email not confirmed. Please follow the link we emailed you.')
                    return render(request, 'authentication/login.html', {'form': form})
                logger.info(f"Failed login attempt for {email}")
                messages.error(request, 'Invalid login credentials')
                return render(request, 'authentication/login.html', {'form': form})

            profile = Profile.objects.filter(owner=user).first()
            if profile and profile.is_suspended:
                logger.warning(f"Suspended user {user.pk} attempted to log in")
                messages.error(request, 'Your account has been suspended. Please contact support.')
                return render(request, 'authentication/login.html', {'form': form})

            login(request, user)
            messages.success(request, 'Login Successful')
            next_url = request.POST.get('next') or request.GET.get('next')
            if next_url and next_url.startswith('/') and not next_url.startswith('//'):
                return redirect(next_url)
            return redirect('user_dashboard:home')

        return render(request, 'authentication/login.html', {'form': form})

    @staticmethod
    def register_view(request):
        form = RegisterForm(request.POST or None)
        if request.method == 'POST' and form.is_valid():
            try:
                RegistrationService.register_user(
                    email=form.cleaned_data['email'],
                    password=form.cleaned_data['password'],
                    full_name=form.cleaned_data['full_name'],
                    request=request,
                )
            except RegistrationError as e:
                messages.error(request, e.message)
                return render(request, 'authentication/register.html', {'form': form})

            messages.success(request, RegistrationService.SUCCESS_MESSAGE)
            return redirect('Login')

        return render(request, 'authentication/register.html', {'form': form})

    @staticmethod
    def confirm_email_view(request, uidb64, token):
        user = RegistrationService.confirm_email(uidb64, token)
        if user is None:
            messages.error(request, 'This confirmation link is invalid or has expired.')
        else:
            messages.success(request, 'Your email has been confirmed. You can now log in.')
        return redirect('Login')

    @staticmethod
    def logout_view(request):
        # Sign-out problems never keep the user on a protected page
        try:
            logout(request)
        except Exception as e:
            logger.error(f"Error during logout: {str(e)}")
        messages.info(request, 'You have been successfully logged out.')
        return redirect('index')

    @staticmethod
    def _is_unconfirmed(email, password):
        user = User.objects.filter(username=email, is_active=False).first()
        return user is not None and user.check_password(password)
