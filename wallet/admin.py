import csv

from django.contrib import admin
from django.http import HttpResponse
from django.urls import reverse
from django.utils.html import format_html

from .models import Wallet, WalletTransaction
from .services import format_currency


@admin.register(Wallet)
class WalletAdmin(admin.ModelAdmin):
    list_display = ('owner', 'currency_code', 'total', 'locked', 'available', 'updated_at')
    list_filter = ('currency_code', 'created_at')
    search_fields = ('user__email', 'user__username', 'user__profile__full_name')
    readonly_fields = ('created_at', 'updated_at')
    actions = ['export_wallets']

    def owner(self, obj):
        return format_html(
            '<a href="{}">{}</a>',
            reverse('admin:auth_user_change', args=[obj.user.pk]),
            obj.user.email or obj.user.username
        )
    owner.short_description = 'Owner'

    def total(self, obj):
        return format_currency(obj.balance, obj.currency_code)
    total.short_description = 'Balance'

    def locked(self, obj):
        amount = format_currency(obj.locked_balance, obj.currency_code)
        if obj.locked_balance > 0:
            return format_html('<span style="color:#d97706">{}</span>', amount)
        return amount
    locked.short_description = 'Locked'

    def available(self, obj):
        return format_html('<strong>{}</strong>', format_currency(obj.available_balance, obj.currency_code))
    available.short_description = 'Available'

    def export_wallets(self, request, queryset):
        response = HttpResponse(content_type='text/csv')
        response['Content-Disposition'] = 'attachment; filename="belfx-wallets.csv"'

        writer = csv.writer(response)
        writer.writerow(['Email', 'Currency', 'Balance', 'Locked', 'Available', 'Updated'])
        writer.writerows(
            (w.user.email, w.currency_code, w.balance, w.locked_balance,
             w.available_balance, w.updated_at.strftime('%Y-%m-%d %H:%M'))
            for w in queryset.select_related('user')
        )
        return response
    export_wallets.short_description = 'Export selected wallets to CSV'


TRANSACTION_STATUS_COLORS = {
    WalletTransaction.STATUS_PENDING: '#d97706',
    WalletTransaction.STATUS_COMPLETED: '#15803d',
    WalletTransaction.STATUS_FAILED: '#b91c1c',
    WalletTransaction.STATUS_CANCELLED: '#6b7280',
}


@admin.register(WalletTransaction)
class WalletTransactionAdmin(admin.ModelAdmin):
    list_display = ('reference_number', 'user', 'transaction_type', 'signed_amount', 'state', 'created_at')
    list_filter = ('transaction_type', 'status', 'currency_code', 'created_at')
    search_fields = ('reference_number', 'user__email', 'description')
    readonly_fields = ('reference_number', 'created_at', 'updated_at', 'completed_at')
    date_hierarchy = 'created_at'

    def signed_amount(self, obj):
        color, sign = ('#b91c1c', '-') if obj.is_debit else ('#15803d', '+')
        return format_html(
            '<span style="color:{}">{}{}</span>', color, sign, format_currency(obj.amount, obj.currency_code)
        )
    signed_amount.short_description = 'Amount'

    def state(self, obj):
        return format_html(
            '<span style="background:{};color:#fff;padding:2px 8px;border-radius:10px">{}</span>',
            TRANSACTION_STATUS_COLORS.get(obj.status, '#6b7280'),
            obj.get_status_display()
        )
    state.short_description = 'Status'
