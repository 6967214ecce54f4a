import logging

from django.shortcuts import render, redirect
from django.contrib import messages
from django.contrib.auth.forms import PasswordResetForm
from django.conf import settings

from authentication.forms import ForgotPasswordForm

logger = logging.getLogger(__name__)


class PasswordService:
    @staticmethod
    def forget_password(request):
        """
        Email a reset link. The response is identical whether or not the
        address belongs to an account.
        """
        form = ForgotPasswordForm(request.POST or None)
        if request.method == 'POST' and form.is_valid():
            reset_form = PasswordResetForm({'email': form.cleaned_data['email']})
            if reset_form.is_valid():
                try:
                    reset_form.save(
                        request=request,
                        use_https=request.is_secure(),
                        from_email=settings.DEFAULT_FROM_EMAIL,
                        email_template_name='authentication/password_reset_email.txt',
                        subject_template_name='authentication/password_reset_subject.txt',
                    )
                except Exception as e:
                    logger.error(f"Failed to send password reset email: {str(e)}", exc_info=True)

            messages.success(
                request,
                'Password Reset Email Sent. Please check your email for instructions.'
            )
            return redirect('forget_password')

        return render(request, 'authentication/forgot_password.html', {'form': form})
