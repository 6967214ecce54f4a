# wallet/views.py

from django.shortcuts import render
from django.contrib import messages
from django.core.paginator import Paginator
import logging

from .models import WalletTransaction, CURRENCY_CHOICES
from .services import WalletService
from authentication.decorators import login_required_with_message
from user_dashboard.kyc_utils import get_kyc_status, is_kyc_verified

logger = logging.getLogger(__name__)


TRANSACTIONS_PER_PAGE = 20


@login_required_with_message()
def wallet_overview(request):
    """
    All supported currency wallets with available and locked amounts.
    Deposit/withdraw buttons are rendered disabled until KYC is approved.
    """
    try:
        summary = WalletService.get_wallet_summary(request.user)
    except Exception as e:
        logger.error(f"Error loading wallets for user {request.user.pk}: {e}")
        messages.error(request, "We couldn't load your wallets right now.")
        summary = {'wallets': [], 'funded_count': 0, 'pending_count': 0}

    context = {
        'wallets': summary['wallets'],
        'funded_count': summary['funded_count'],
        'pending_count': summary['pending_count'],
        'kyc_verified': is_kyc_verified(request.user),
        'kyc_status': get_kyc_status(request.user),
    }
    return render(request, 'wallet/overview.html', context)


@login_required_with_message()
def transaction_history(request):
    """
    Paginated transaction history, filterable by currency, status and type.
    """
    currency = request.GET.get('currency', '').strip()
    status = request.GET.get('status', '').strip()
    transaction_type = request.GET.get('type', '').strip()

    try:
        transactions = WalletService.transaction_history(
            request.user,
            currency_code=currency,
            status=status,
            transaction_type=transaction_type,
        )
    except Exception as e:
        logger.error(f"Error loading transactions for user {request.user.pk}: {e}")
        transactions = WalletTransaction.objects.none()

    paginator = Paginator(transactions, TRANSACTIONS_PER_PAGE)
    page_obj = paginator.get_page(request.GET.get('page'))

    context = {
        'page_obj': page_obj,
        'transactions': page_obj.object_list,
        'currency_choices': CURRENCY_CHOICES,
        'status_choices': WalletTransaction.STATUS_CHOICES,
        'type_choices': WalletTransaction.TRANSACTION_TYPES,
        'current_filters': {
            'currency': currency,
            'status': status,
            'type': transaction_type,
        },
    }
    return render(request, 'wallet/transaction_history.html', context)
