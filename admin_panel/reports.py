from decimal import Decimal

from dateutil.relativedelta import relativedelta
from django.contrib.auth.models import User
from django.db.models import Count, Sum
from django.utils import timezone

from user_dashboard.models import KycRequest
from wallet.models import WalletTransaction
from wallet.services import supported_currencies

REPORT_MONTHS = 6


def month_windows(months=REPORT_MONTHS, now=None):
    """
    (start, end) pairs for the last `months` calendar months, oldest first,
    the current month included.
    """
    now = timezone.localtime(now or timezone.now())
    current = now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    windows = []
    for offset in range(months - 1, -1, -1):
        start = current - relativedelta(months=offset)
        windows.append((start, start + relativedelta(months=1)))
    return windows


class ReportService:

    @staticmethod
    def monthly_signups(windows):
        rows = []
        for start, end in windows:
            rows.append({
                'month': start.strftime('%b %Y'),
                'count': User.objects.filter(date_joined__gte=start, date_joined__lt=end).count(),
            })
        return rows

    @staticmethod
    def monthly_volume(windows, currencies):
        """Completed transaction volume per currency per month."""
        rows = []
        for start, end in windows:
            totals = dict.fromkeys(currencies, Decimal('0.00'))
            sums = WalletTransaction.objects.filter(
                status=WalletTransaction.STATUS_COMPLETED,
                created_at__gte=start,
                created_at__lt=end,
            ).values('currency_code').annotate(total=Sum('amount'))
            for row in sums:
                if row['currency_code'] in totals:
                    totals[row['currency_code']] = row['total'] or Decimal('0.00')
            rows.append({
                'month': start.strftime('%b %Y'),
                'totals': [totals[code] for code in currencies],
            })
        return rows

    @staticmethod
    def kyc_status_counts():
        counts = dict.fromkeys(
            [code for code, _ in KycRequest.STATUS_CHOICES], 0
        )
        for row in KycRequest.objects.values('status').annotate(total=Count('id')):
            counts[row['status']] = row['total']
        return counts

    @staticmethod
    def build(months=REPORT_MONTHS, now=None):
        windows = month_windows(months, now)
        currencies = supported_currencies()
        return {
            'generated_at': timezone.localtime(now or timezone.now()),
            'currencies': currencies,
            'signups': ReportService.monthly_signups(windows),
            'volume': ReportService.monthly_volume(windows, currencies),
            'kyc_counts': ReportService.kyc_status_counts(),
            'total_users': User.objects.count(),
        }
