from django.contrib import admin, messages
from django.core.exceptions import PermissionDenied
from django.utils.html import format_html

from admin_panel.services import AdminUserService
from .models import Profile


@admin.register(Profile)
class ProfileAdmin(admin.ModelAdmin):
    list_display = [
        'full_name',
        'email',
        'role_badge',
        'status_badge',
        'created_at',
    ]

    list_filter = ['status', 'is_admin', 'created_at']

    search_fields = ['full_name', 'email', 'owner__username']

    readonly_fields = ['owner', 'created_at', 'updated_at']

    actions = ['suspend_users', 'activate_users']

    def role_badge(self, obj):
        color = '#d4a017' if obj.is_admin else '#6c757d'
        label = 'Admin' if obj.is_admin else 'User'
        return format_html(
            '<span style="background-color: {}; color: white; padding: 3px 10px; '
            'border-radius: 3px;">{}</span>',
            color, label
        )
    role_badge.short_description = 'Role'

    def status_badge(self, obj):
        color = '#28a745' if obj.status == Profile.STATUS_ACTIVE else '#dc3545'
        return format_html(
            '<span style="background-color: {}; color: white; padding: 3px 10px; '
            'border-radius: 3px;">{}</span>',
            color, obj.get_status_display()
        )
    status_badge.short_description = 'Status'

    def _set_status(self, request, queryset, status, verb):
        changed = 0
        for profile in queryset.select_related('owner'):
            try:
                AdminUserService.set_status(profile, status, request.user)
            except PermissionDenied as e:
                self.message_user(request, str(e), level=messages.ERROR)
                continue
            changed += 1
        self.message_user(request, f'{changed} user(s) {verb}.')

    def suspend_users(self, request, queryset):
        self._set_status(request, queryset, Profile.STATUS_SUSPENDED, 'suspended')
    suspend_users.short_description = 'Suspend selected users'

    def activate_users(self, request, queryset):
        self._set_status(request, queryset, Profile.STATUS_ACTIVE, 'activated')
    activate_users.short_description = 'Activate selected users'
