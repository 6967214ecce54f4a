"""
Admin decisions on KYC requests.
Shared by the admin panel and the Django admin actions.
"""

import logging

from django.db import transaction

from .models import KycRequest
from .tasks import send_kyc_decision_email_task

logger = logging.getLogger(__name__)


class KycReviewService:

    @staticmethod
    def _notify(kyc_request):
        try:
            send_kyc_decision_email_task.delay(kyc_request.pk)
        except Exception as e:
            logger.error(f"Could not queue KYC decision email for request {kyc_request.pk}: {e}")

    @staticmethod
    def approve(kyc_request, admin_user, notes='', ip_address=None):
        with transaction.atomic():
            kyc_request.approve(admin_user, notes=notes, ip_address=ip_address)
        logger.info(f"KYC request {kyc_request.pk} approved by user {admin_user.pk}")
        KycReviewService._notify(kyc_request)
        return kyc_request

    @staticmethod
    def reject(kyc_request, admin_user, reason=None, ip_address=None):
        with transaction.atomic():
            kyc_request.reject(admin_user, reason=reason, ip_address=ip_address)
        logger.info(f"KYC request {kyc_request.pk} rejected by user {admin_user.pk}")
        KycReviewService._notify(kyc_request)
        return kyc_request

    @staticmethod
    def filter_requests(status=KycRequest.STATUS_PENDING_REVIEW):
        """
        Requests newest first with the submitter's profile joined.
        status 'all' (or blank) returns every request.
        """
        queryset = KycRequest.objects.select_related(
            'user', 'user__profile', 'reviewed_by'
        ).order_by('-created_at')
        if status and status != 'all':
            queryset = queryset.filter(status=status)
        return queryset
