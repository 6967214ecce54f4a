from decimal import Decimal, InvalidOperation
import logging

from constance import config

from .models import Wallet, WalletTransaction, CURRENCY_CHOICES

logger = logging.getLogger(__name__)


CURRENCY_SYMBOLS = {
    'USD': '$',
    'CAD': 'CA$',
    'GBP': '£',
    'EUR': '€',
    'NGN': '₦',
}

DEFAULT_RECENT_LIMIT = 5


def supported_currencies():
    """
    Currency codes in display order, read from the SUPPORTED_CURRENCIES knob.
    Unknown codes are dropped.
    """
    known = {code for code, _ in CURRENCY_CHOICES}
    codes = []
    for code in str(config.SUPPORTED_CURRENCIES).split(','):
        code = code.strip().upper()
        if code in known and code not in codes:
            codes.append(code)
    return codes


def format_currency(amount, currency_code):
    """
    Render an amount with its currency symbol, thousands separators and
    two decimals, e.g. "$1,234.50". Returns "N/A" for missing or
    non-numeric amounts.
    """
    if amount is None or isinstance(amount, bool):
        return 'N/A'
    try:
        value = Decimal(str(amount))
    except (InvalidOperation, ValueError, TypeError):
        return 'N/A'
    if not value.is_finite():
        return 'N/A'

    code = (currency_code or '').upper()
    symbol = CURRENCY_SYMBOLS.get(code)
    sign = '-' if value < 0 else ''
    formatted = f"{abs(value):,.2f}"
    if symbol:
        return f"{sign}{symbol}{formatted}"
    return f"{sign}{formatted} {code}".strip()


def transaction_direction(transaction_type):
    """'debit' when money leaves the wallet (sells and withdrawals), else 'credit'."""
    kind = (transaction_type or '').lower()
    if 'sell' in kind or 'withdrawal' in kind:
        return 'debit'
    return 'credit'


def transaction_type_label(transaction_type):
    if not transaction_type:
        return 'N/A'
    return transaction_type.replace('_', ' ')


class WalletService:
    """
    Read side of the multi-currency wallets.
    Balances only change through the admin or future P2P settlement.
    """

    @staticmethod
    def available_balance(wallet):
        """balance - locked_balance for a Wallet or a placeholder entry"""
        if isinstance(wallet, dict):
            balance = wallet.get('balance') or Decimal('0.00')
            locked = wallet.get('locked_balance') or Decimal('0.00')
        else:
            balance = wallet.balance or Decimal('0.00')
            locked = wallet.locked_balance or Decimal('0.00')
        return Decimal(balance) - Decimal(locked)

    @staticmethod
    def _entry(wallet):
        return {
            'id': wallet.pk,
            'currency_code': wallet.currency_code,
            'balance': wallet.balance,
            'locked_balance': wallet.locked_balance,
            'available_balance': wallet.available_balance,
            'formatted_balance': format_currency(wallet.balance, wallet.currency_code),
            'formatted_available': format_currency(wallet.available_balance, wallet.currency_code),
            'is_placeholder': False,
        }

    @staticmethod
    def _placeholder(user, currency_code):
        zero = Decimal('0.00')
        return {
            'id': f"{currency_code}-placeholder-{user.pk}",
            'currency_code': currency_code,
            'balance': zero,
            'locked_balance': zero,
            'available_balance': zero,
            'formatted_balance': format_currency(zero, currency_code),
            'formatted_available': format_currency(zero, currency_code),
            'is_placeholder': True,
        }

    @staticmethod
    def display_wallets(user):
        """
        One entry per supported currency in display order.
        Currencies the user holds no wallet for come back as zero-balance
        placeholders that are never written to the database.
        """
        existing = {
            wallet.currency_code: wallet
            for wallet in Wallet.objects.filter(user=user)
        }

        entries = []
        for code in supported_currencies():
            wallet = existing.get(code)
            if wallet is not None:
                entries.append(WalletService._entry(wallet))
            else:
                entries.append(WalletService._placeholder(user, code))
        return entries

    @staticmethod
    def recent_transactions(user, limit=None):
        """Newest first, DASHBOARD_RECENT_TRANSACTIONS by default."""
        if limit is None:
            limit = config.DASHBOARD_RECENT_TRANSACTIONS or DEFAULT_RECENT_LIMIT
        return list(
            WalletTransaction.objects.filter(user=user).order_by('-created_at')[:limit]
        )

    @staticmethod
    def transaction_history(user, currency_code=None, status=None, transaction_type=None):
        """
        Filtered queryset for the history page; blank filters are ignored.
        """
        queryset = WalletTransaction.objects.filter(user=user)

        if currency_code:
            queryset = queryset.filter(currency_code=currency_code.upper())
        if status:
            queryset = queryset.filter(status=status)
        if transaction_type:
            queryset = queryset.filter(transaction_type=transaction_type)

        return queryset.order_by('-created_at')

    @staticmethod
    def get_wallet_summary(user):
        wallets = WalletService.display_wallets(user)
        return {
            'wallets': wallets,
            'funded_count': sum(1 for w in wallets if w['balance'] > 0),
            'pending_count': WalletTransaction.objects.filter(
                user=user, status=WalletTransaction.STATUS_PENDING
            ).count(),
        }
