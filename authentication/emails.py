from django.core.mail import EmailMultiAlternatives
from django.template.loader import render_to_string
from django.conf import settings
from django.utils.html import strip_tags
import logging

logger = logging.getLogger(__name__)


def send_confirmation_email(user, confirm_url):
    """
    Send the account confirmation link to a newly registered user.

    Args:
        user: User instance (inactive until the link is followed)
        confirm_url: Absolute URL of the confirmation view

    Returns:
        bool: True if email sent successfully, False otherwise
    """
    try:
        profile = getattr(user, 'profile', None)
        context = {
            'full_name': profile.full_name if profile else user.get_full_name(),
            'email': user.email,
            'confirm_url': confirm_url,
        }

        html_message = render_to_string('emails/confirm_email.html', context)
        text_message = strip_tags(html_message)

        email = EmailMultiAlternatives(
            subject='Confirm your BELFX account',
            body=text_message,
            from_email=settings.DEFAULT_FROM_EMAIL,
            to=[user.email],
        )
        email.attach_alternative(html_message, "text/html")
        email.send(fail_silently=False)

        logger.info(f"Confirmation email sent to user {user.pk}")
        return True

    except Exception as e:
        logger.error(f"Failed to send confirmation email to user {user.pk}: {str(e)}", exc_info=True)
        return False
