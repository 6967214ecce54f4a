import datetime
import logging

from django.shortcuts import render
from django.utils import timezone
from django.utils.timesince import timesince

from authentication.decorators import login_required_with_message
from wallet.services import WalletService
from .kyc_utils import get_kyc_status, format_kyc_status_message
from .models import KycRequest

logger = logging.getLogger(__name__)


def _greeting(hour):
    if 5 <= hour < 12:
        return "Good Morning"
    if 12 <= hour < 17:
        return "Good Afternoon"
    if 17 <= hour < 21:
        return "Good Evening"
    return "Good Night"


@login_required_with_message('Please log in to view the dashboard.')
def home(request):
    profile = getattr(request.user, 'profile', None)
    display_name = (profile.full_name if profile else '') or request.user.email

    last_login = request.user.last_login
    if last_login:
        if (timezone.now() - last_login).total_seconds() < 60:
            last_login_display = "Just now"
        else:
            last_login_display = timesince(last_login) + " ago"
    else:
        last_login_display = "First time login"

    # Each block degrades to its empty state on failure
    try:
        kyc_status = get_kyc_status(request.user)
    except Exception as e:
        logger.error(f"Dashboard - error fetching KYC status for user {request.user.pk}: {e}")
        kyc_status = KycRequest.STATUS_PENDING_SUBMISSION

    wallets_error = False
    try:
        wallets = WalletService.display_wallets(request.user)
    except Exception as e:
        logger.error(f"Dashboard - error fetching wallets for user {request.user.pk}: {e}")
        wallets = []
        wallets_error = True

    transactions_error = False
    try:
        recent_transactions = WalletService.recent_transactions(request.user)
    except Exception as e:
        logger.error(f"Dashboard - error fetching transactions for user {request.user.pk}: {e}")
        recent_transactions = []
        transactions_error = True

    is_kyc_approved = kyc_status == KycRequest.STATUS_APPROVED

    context = {
        'profile': profile,
        'display_name': display_name,
        'greeting': _greeting(datetime.datetime.now().hour),
        'last_login_display': last_login_display,
        'kyc_status': kyc_status,
        'is_kyc_approved': is_kyc_approved,
        'kyc_banner': None if is_kyc_approved else format_kyc_status_message(kyc_status),
        'wallets': wallets,
        'wallets_error': wallets_error,
        'recent_transactions': recent_transactions,
        'transactions_error': transactions_error,
    }
    return render(request, 'user_dashboard/home.html', context)
