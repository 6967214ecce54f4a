from django.core.mail import EmailMultiAlternatives
from django.template.loader import render_to_string
from django.conf import settings
from django.utils.html import strip_tags
import logging

from .models import KycRequest

logger = logging.getLogger(__name__)


SUBJECTS = {
    KycRequest.STATUS_APPROVED: 'Your BELFX identity verification was approved',
    KycRequest.STATUS_REJECTED: 'Your BELFX identity verification needs attention',
}


def send_kyc_decision_email(kyc_request):
    """
    Tell the user how their KYC request was decided.

    Returns:
        bool: True if email sent successfully, False otherwise
    """
    subject = SUBJECTS.get(kyc_request.status)
    if subject is None:
        logger.warning(f"No decision email for KYC request {kyc_request.pk} in status {kyc_request.status}")
        return False

    user = kyc_request.user
    try:
        profile = getattr(user, 'profile', None)
        context = {
            'full_name': (profile.full_name if profile else '') or user.email,
            'status': kyc_request.status,
            'is_approved': kyc_request.is_approved,
            'rejection_reason': kyc_request.rejection_reason,
            'document_type': kyc_request.get_document_type_display(),
            'kyc_url': f"{settings.SITE_URL.rstrip('/')}/kyc/",
        }

        html_message = render_to_string('emails/kyc_decision.html', context)
        text_message = strip_tags(html_message)

        email = EmailMultiAlternatives(
            subject=subject,
            body=text_message,
            from_email=settings.DEFAULT_FROM_EMAIL,
            to=[user.email],
        )
        email.attach_alternative(html_message, "text/html")
        email.send(fail_silently=False)

        logger.info(f"KYC decision email ({kyc_request.status}) sent to user {user.pk}")
        return True

    except Exception as e:
        logger.error(f"Failed to send KYC decision email to user {user.pk}: {str(e)}", exc_info=True)
        return False
