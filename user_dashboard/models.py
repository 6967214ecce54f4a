from django.db import models
from django.contrib.auth.models import User
from django.utils import timezone


class KycRequest(models.Model):
    """
    One identity-verification submission.
    A user may have many; the newest one decides their KYC status.
    """

    STATUS_PENDING_SUBMISSION = 'pending_submission'
    STATUS_PENDING_REVIEW = 'pending_review'
    STATUS_APPROVED = 'approved'
    STATUS_REJECTED = 'rejected'

    STATUS_CHOICES = [
        (STATUS_PENDING_REVIEW, 'Pending Review'),
        (STATUS_APPROVED, 'Approved'),
        (STATUS_REJECTED, 'Rejected'),
    ]

    # Statuses that block a new submission
    OPEN_STATUSES = (STATUS_PENDING_REVIEW, STATUS_APPROVED)

    DOC_TYPE_BVN = 'bvn'
    DOC_TYPE_NATIONAL_ID = 'national_id'
    DOC_TYPE_PASSPORT = 'passport'
    DOC_TYPE_DRIVERS_LICENSE = 'drivers_license'

    DOC_TYPE_CHOICES = [
        (DOC_TYPE_BVN, 'BVN'),
        (DOC_TYPE_NATIONAL_ID, 'National ID (NIN)'),
        (DOC_TYPE_PASSPORT, 'International Passport'),
        (DOC_TYPE_DRIVERS_LICENSE, "Driver's License"),
    ]

    user = models.ForeignKey(
        User,
        on_delete=models.CASCADE,
        related_name='kyc_requests'
    )

    status = models.CharField(
        max_length=30,
        choices=STATUS_CHOICES,
        default=STATUS_PENDING_REVIEW
    )

    document_type = models.CharField(max_length=30, choices=DOC_TYPE_CHOICES)
    document_value = models.CharField(
        max_length=50,
        help_text="BVN, NIN, passport or licence number as entered"
    )

    document_file = models.FileField(
        upload_to='kyc/documents/%Y/%m/',
        blank=True,
        help_text="ID document image or PDF"
    )
    selfie_file = models.ImageField(
        upload_to='kyc/selfies/%Y/%m/',
        blank=True,
        help_text="Selfie used for face match"
    )

    # Provider fields
    smile_id_job_id = models.CharField(max_length=100, blank=True)
    result = models.JSONField(
        null=True,
        blank=True,
        help_text="Raw verification result returned by the provider"
    )

    # Admin review fields
    rejection_reason = models.TextField(blank=True, null=True)
    reviewed_by = models.ForeignKey(
        User,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='kyc_reviews'
    )
    reviewed_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "KYC Request"
        verbose_name_plural = "KYC Requests"
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['status'], name='kycrequest_status_idx'),
            models.Index(fields=['user', '-created_at'], name='kycrequest_user_created_idx'),
        ]

    def __str__(self):
        return f"KYC {self.get_document_type_display()} - {self.user.username} ({self.status})"

    @property
    def is_approved(self):
        return self.status == self.STATUS_APPROVED

    @property
    def is_pending(self):
        return self.status == self.STATUS_PENDING_REVIEW

    @property
    def masked_document_value(self):
        value = self.document_value or ''
        if len(value) <= 4:
            return value
        return '*' * (len(value) - 4) + value[-4:]

    def approve(self, admin_user, notes='', ip_address=None):
        self.status = self.STATUS_APPROVED
        self.rejection_reason = None
        self.reviewed_by = admin_user
        self.reviewed_at = timezone.now()
        self.save()

        KycAuditLog.objects.create(
            kyc_request=self,
            action=KycAuditLog.ACTION_APPROVED,
            performed_by=admin_user,
            notes=notes,
            ip_address=ip_address,
        )

    def reject(self, admin_user, reason=None, ip_address=None):
        """Blank reasons fall back to "Rejected by admin"."""
        reason = (reason or '').strip() or 'Rejected by admin'
        self.status = self.STATUS_REJECTED
        self.rejection_reason = reason
        self.reviewed_by = admin_user
        self.reviewed_at = timezone.now()
        self.save()

        KycAuditLog.objects.create(
            kyc_request=self,
            action=KycAuditLog.ACTION_REJECTED,
            performed_by=admin_user,
            notes=reason,
            ip_address=ip_address,
        )


class KycAuditLog(models.Model):
    """
    Audit trail for KYC submissions and admin decisions.
    """

    ACTION_SUBMITTED = 'submitted'
    ACTION_APPROVED = 'approved'
    ACTION_REJECTED = 'rejected'

    ACTION_CHOICES = [
        (ACTION_SUBMITTED, 'Submitted'),
        (ACTION_APPROVED, 'Approved'),
        (ACTION_REJECTED, 'Rejected'),
    ]

    kyc_request = models.ForeignKey(
        KycRequest,
        on_delete=models.CASCADE,
        related_name='audit_logs'
    )
    action = models.CharField(max_length=30, choices=ACTION_CHOICES)
    performed_by = models.ForeignKey(
        User,
        on_delete=models.SET_NULL,
        null=True,
        blank=True
    )
    notes = models.TextField(blank=True)
    ip_address = models.GenericIPAddressField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = "KYC Audit Log"
        verbose_name_plural = "KYC Audit Logs"
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.action} - {self.kyc_request.user.username} at {self.created_at}"
