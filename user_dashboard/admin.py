from django.contrib import admin
from django.utils.html import format_html, format_html_join

from .kyc_review import KycReviewService
from .kyc_utils import get_client_ip
from .models import KycRequest, KycAuditLog


BADGE_COLORS = {
    KycRequest.STATUS_PENDING_REVIEW: '#d97706',
    KycRequest.STATUS_APPROVED: '#15803d',
    KycRequest.STATUS_REJECTED: '#b91c1c',
}


@admin.register(KycRequest)
class KycRequestAdmin(admin.ModelAdmin):
    """Django admin fallback for the KYC queue; the admin console is the primary tool."""

    list_display = ('applicant', 'status_badge', 'document_type', 'created_at', 'reviewed_by')
    list_filter = ('status', 'document_type', 'created_at', 'reviewed_at')
    search_fields = (
        'user__email', 'user__username', 'user__profile__full_name',
        'document_value', 'smile_id_job_id',
    )
    readonly_fields = (
        'user', 'created_at', 'updated_at', 'reviewed_by', 'reviewed_at',
        'smile_id_job_id', 'result', 'uploads', 'history',
    )
    fieldsets = (
        ('Applicant', {'fields': ('user', 'created_at', 'updated_at')}),
        ('Submitted document', {
            'fields': ('document_type', 'document_value', 'uploads', 'document_file', 'selfie_file'),
        }),
        ('Decision', {
            'fields': ('status', 'rejection_reason', 'reviewed_by', 'reviewed_at', 'smile_id_job_id', 'result'),
        }),
        ('History', {'fields': ('history',), 'classes': ('collapse',)}),
    )
    actions = ['approve_requests', 'reject_requests']

    def applicant(self, obj):
        name = obj.user.profile.full_name if hasattr(obj.user, 'profile') else ''
        return format_html('<strong>{}</strong><br><small>{}</small>', name or obj.user.username, obj.user.email)
    applicant.short_description = 'Applicant'

    def status_badge(self, obj):
        return format_html(
            '<span style="background:{};color:#fff;padding:2px 8px;border-radius:10px">{}</span>',
            BADGE_COLORS.get(obj.status, '#6b7280'),
            obj.get_status_display()
        )
    status_badge.short_description = 'Status'

    def uploads(self, obj):
        files = [(label, f.url) for label, f in (('ID document', obj.document_file), ('Selfie', obj.selfie_file)) if f]
        if not files:
            return 'Nothing uploaded'
        return format_html_join(' | ', '<a href="{1}" target="_blank" rel="noopener">{0}</a>', files)
    uploads.short_description = 'Uploads'

    def history(self, obj):
        entries = obj.audit_logs.select_related('performed_by')[:20]
        if not entries:
            return 'No review history'
        return format_html_join(
            '',
            '<div>{} &middot; {} by {}{}</div>',
            (
                (
                    entry.created_at.strftime('%d %b %Y %H:%M'),
                    entry.get_action_display(),
                    entry.performed_by.email if entry.performed_by else 'system',
                    f' ({entry.notes})' if entry.notes else '',
                )
                for entry in entries
            )
        )
    history.short_description = 'History'

    def _review(self, request, queryset, skip_status, decide, verb):
        ip_address = get_client_ip(request)
        pending = list(queryset.exclude(status=skip_status))
        for kyc_request in pending:
            decide(kyc_request, request.user, ip_address=ip_address)
        self.message_user(request, f'{len(pending)} KYC request(s) {verb}.')

    def approve_requests(self, request, queryset):
        self._review(request, queryset, KycRequest.STATUS_APPROVED, KycReviewService.approve, 'approved')
    approve_requests.short_description = 'Approve selected KYC requests'

    def reject_requests(self, request, queryset):
        self._review(request, queryset, KycRequest.STATUS_REJECTED, KycReviewService.reject, 'rejected')
    reject_requests.short_description = 'Reject selected KYC requests'


@admin.register(KycAuditLog)
class KycAuditLogAdmin(admin.ModelAdmin):
    list_display = ('created_at', 'applicant_email', 'action', 'performed_by', 'ip_address')
    list_filter = ('action', 'created_at')
    search_fields = ('kyc_request__user__email', 'performed_by__email', 'notes')
    readonly_fields = ('kyc_request', 'action', 'performed_by', 'notes', 'ip_address', 'created_at')

    def applicant_email(self, obj):
        return obj.kyc_request.user.email or obj.kyc_request.user.username
    applicant_email.short_description = 'Applicant'

    # Audit entries are written by KycReviewService only.
    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
