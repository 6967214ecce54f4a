from celery import shared_task
import logging

from .emails import send_kyc_decision_email
from .models import KycRequest

logger = logging.getLogger(__name__)


@shared_task(name='user_dashboard.send_kyc_decision_email')
def send_kyc_decision_email_task(kyc_request_id):
    kyc_request = KycRequest.objects.select_related('user', 'user__profile').filter(
        pk=kyc_request_id
    ).first()
    if kyc_request is None:
        logger.warning(f"Skipping KYC decision email: request {kyc_request_id} not found")
        return False
    return send_kyc_decision_email(kyc_request)
