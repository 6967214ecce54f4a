"""
Utilities for KYC verification and enforcement.
Use these everywhere a page needs to know where a user stands with KYC.
"""

import os
import re

from constance import config

from .models import KycRequest, KycAuditLog



ALLOWED_IMAGE_TYPES = ['image/jpeg', 'image/jpg', 'image/png', 'image/webp', 'image/heic']
ALLOWED_DOCUMENT_TYPES = ALLOWED_IMAGE_TYPES + ['application/pdf']

DOCUMENT_RULES = {
    KycRequest.DOC_TYPE_BVN: (r'^\d{11}$', 'BVN must be exactly 11 digits'),
    KycRequest.DOC_TYPE_NATIONAL_ID: (r'^\d{11}$', 'NIN must be exactly 11 digits'),
    KycRequest.DOC_TYPE_PASSPORT: (
        r'^[A-Za-z0-9]{6,}$',
        'Passport number must be at least 6 letters or digits'
    ),
    KycRequest.DOC_TYPE_DRIVERS_LICENSE: (
        r'^[A-Za-z0-9]{5,}$',
        "Driver's license number must be at least 5 letters or digits"
    ),
}


def get_latest_kyc_request(user):
    """Newest KYC request for the user, or None."""
    if not user or not user.is_authenticated:
        return None
    return KycRequest.objects.filter(user=user).order_by('-created_at').first()


def get_kyc_status(user):
    """
    Status of the newest request, or 'pending_submission' when the user
    has never submitted.
    """
    kyc_request = get_latest_kyc_request(user)
    if kyc_request is None:
        return KycRequest.STATUS_PENDING_SUBMISSION
    return kyc_request.status


def is_kyc_verified(user):
    return get_kyc_status(user) == KycRequest.STATUS_APPROVED


def can_start_kyc(user):
    """
    Returns:
        tuple: (bool, str) - (can_start, reason_if_not)
    """
    status = get_kyc_status(user)
    if status == KycRequest.STATUS_APPROVED:
        return False, 'Your identity is already verified.'
    if status == KycRequest.STATUS_PENDING_REVIEW:
        return False, 'Your KYC is already under review. We\'ll notify you once it\'s complete.'
    return True, ''


def validate_document_value(value, document_type):
    """
    Check a document number against the format for its type.

    Returns:
        tuple: (is_valid, error_message)
    """
    value = (value or '').strip()
    if not value:
        return False, 'Document number is required'

    rule = DOCUMENT_RULES.get(document_type)
    if rule is None:
        return False, 'Please choose a valid document type'

    pattern, error_message = rule
    if not re.match(pattern, value):
        return False, error_message

    return True, ''


def max_upload_bytes():
    return int(config.KYC_MAX_UPLOAD_MB) * 1024 * 1024


def validate_upload(uploaded_file, allow_pdf=False, label='File'):
    """
    Content type and size check for KYC uploads.

    Returns:
        tuple: (is_valid, error_message)
    """
    if uploaded_file is None:
        return False, f'{label} is required.'

    allowed = ALLOWED_DOCUMENT_TYPES if allow_pdf else ALLOWED_IMAGE_TYPES
    if uploaded_file.content_type not in allowed:
        if allow_pdf:
            return False, f'{label} must be an image or PDF.'
        return False, f'{label} must be an image.'

    limit = config.KYC_MAX_UPLOAD_MB
    if uploaded_file.size > max_upload_bytes():
        return False, f'{label} is too large (max {limit}MB).'

    return True, ''


def safe_filename(name):
    """Base name stripped down to characters storage backends accept."""
    base = os.path.basename(name or 'upload')
    cleaned = re.sub(r'[^A-Za-z0-9._-]', '_', base)
    return cleaned or 'upload'


def log_kyc_action(kyc_request, action, user=None, notes='', ip_address=None):
    return KycAuditLog.objects.create(
        kyc_request=kyc_request,
        action=action,
        performed_by=user,
        notes=notes,
        ip_address=ip_address
    )


def get_client_ip(request):
    x_forwarded_for = request.META.get('HTTP_X_FORWARDED_FOR')
    if x_forwarded_for:
        ip = x_forwarded_for.split(',')[0].strip()
    else:
        ip = request.META.get('REMOTE_ADDR')
    return ip or None


def format_kyc_status_message(status):
    """
    Banner copy for the dashboard.

    Returns:
        dict with title, message, action (CTA label or None) and color
    """
    if status == KycRequest.STATUS_APPROVED:
        return {
            'title': 'Verified',
            'message': 'Your account is fully verified. You can access all features.',
            'action': None,
            'color': 'success',
        }
    if status == KycRequest.STATUS_PENDING_REVIEW:
        return {
            'title': 'KYC Verification Required',
            'message': "Your KYC documents are under review. We'll notify you once completed.",
            'action': None,
            'color': 'info',
        }
    if status == KycRequest.STATUS_REJECTED:
        return {
            'title': 'KYC Verification Required',
            'message': (
                'Your KYC verification was rejected. Please check your email or '
                'notifications for details and resubmit.'
            ),
            'action': 'Resubmit KYC',
            'color': 'danger',
        }
    return {
        'title': 'KYC Verification Required',
        'message': (
            'Please complete your KYC verification to access all platform features, '
            'including trading and withdrawals.'
        ),
        'action': 'Complete KYC Now',
        'color': 'warning',
    }
