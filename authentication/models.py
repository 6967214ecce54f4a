from django.db import models
from django.contrib.auth.models import User


class Profile(models.Model):
    """
    Public profile for a platform user.
    The Django username is always the lower-cased email address.
    """

    STATUS_ACTIVE = 'active'
    STATUS_SUSPENDED = 'suspended'

    STATUS_CHOICES = [
        (STATUS_ACTIVE, 'Active'),
        (STATUS_SUSPENDED, 'Suspended'),
    ]

    owner = models.OneToOneField(User, on_delete=models.CASCADE, related_name='profile')
    full_name = models.CharField(max_length=150, blank=True)
    email = models.EmailField(blank=True, db_index=True)
    avatar = models.ImageField(upload_to='avatars/', blank=True, null=True)
    is_admin = models.BooleanField(
        default=False,
        help_text="Grants access to the BELFX admin panel"
    )
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_ACTIVE)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['status'], name='profile_status_idx'),
            models.Index(fields=['is_admin'], name='profile_is_admin_idx'),
        ]

    def __str__(self):
        return self.full_name or self.email or str(self.owner)

    @property
    def display_name(self):
        return self.full_name or self.email or self.owner.email

    @property
    def initials(self):
        """Initials from the full name, else the first letter of the email, else "U"."""
        if self.full_name:
            parts = [part for part in self.full_name.split(' ') if part]
            if parts:
                return ''.join(part[0] for part in parts).upper()
        email = self.email or self.owner.email
        if email:
            return email[0].upper()
        return 'U'

    @property
    def is_suspended(self):
        return self.status == self.STATUS_SUSPENDED
