"""
Template filter for KYC verification status.

Usage in templates:
    {% load kyc_tags %}
    {{ kyc_status|kyc_status_badge }}
"""

from django import template
from django.utils.html import format_html

from user_dashboard.models import KycRequest

register = template.Library()


STATUS_BADGES = {
    KycRequest.STATUS_PENDING_SUBMISSION: ('badge-warning', 'Not Verified'),
    KycRequest.STATUS_PENDING_REVIEW: ('badge-info', 'Under Review'),
    KycRequest.STATUS_APPROVED: ('badge-success', 'Verified'),
    KycRequest.STATUS_REJECTED: ('badge-danger', 'Rejected'),
}


@register.filter
def kyc_status_badge(status):
    css_class, text = STATUS_BADGES.get(
        status, STATUS_BADGES[KycRequest.STATUS_PENDING_SUBMISSION]
    )
    return format_html('<span class="badge {}">{}</span>', css_class, text)
