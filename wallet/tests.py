from decimal import Decimal

import pytest
from constance.test import override_config
from django.contrib.auth.models import User
from django.core.exceptions import ValidationError
from django.urls import reverse

from .models import Wallet, WalletTransaction
from .services import (
    WalletService,
    format_currency,
    supported_currencies,
    transaction_direction,
    transaction_type_label,
)


@pytest.fixture
def user(db):
    return User.objects.create_user(
        username='ada@example.com', email='ada@example.com', password='Secret#123'
    )


@pytest.fixture
def signed_in_client(client, user):
    client.force_login(user)
    return client


class TestFormatCurrency:
    def test_symbols_and_separators(self):
        assert format_currency(Decimal('1234.5'), 'USD') == '$1,234.50'
        assert format_currency(500, 'NGN') == '₦500.00'
        assert format_currency('0', 'GBP') == '£0.00'
        assert format_currency(Decimal('99.999'), 'EUR') == '€100.00'
        assert format_currency(1000000, 'CAD') == 'CA$1,000,000.00'

    def test_missing_or_non_numeric(self):
        assert format_currency(None, 'USD') == 'N/A'
        assert format_currency('abc', 'USD') == 'N/A'
        assert format_currency(float('nan'), 'USD') == 'N/A'

    def test_negative_amount(self):
        assert format_currency(Decimal('-12.5'), 'USD') == '-$12.50'


class TestTransactionHelpers:
    def test_direction(self):
        assert transaction_direction('p2p_sell') == 'debit'
        assert transaction_direction('withdrawal') == 'debit'
        assert transaction_direction('p2p_buy') == 'credit'
        assert transaction_direction('deposit') == 'credit'
        assert transaction_direction(None) == 'credit'

    def test_type_label(self):
        assert transaction_type_label('p2p_buy') == 'p2p buy'
        assert transaction_type_label('') == 'N/A'


@pytest.mark.django_db
class TestWalletModel:
    def test_available_balance(self, user):
        wallet = Wallet.objects.create(
            user=user, currency_code='USD',
            balance=Decimal('100.00'), locked_balance=Decimal('30.00')
        )
        assert wallet.available_balance == Decimal('70.00')
        assert WalletService.available_balance(wallet) == Decimal('70.00')

    def test_locked_cannot_exceed_balance(self, user):
        with pytest.raises(ValidationError):
            Wallet.objects.create(
                user=user, currency_code='USD',
                balance=Decimal('10.00'), locked_balance=Decimal('20.00')
            )

    def test_one_wallet_per_currency(self, user):
        Wallet.objects.create(user=user, currency_code='NGN')
        with pytest.raises(ValidationError):
            Wallet.objects.create(user=user, currency_code='NGN')

    def test_transaction_reference_generated(self, user):
        txn = WalletTransaction.objects.create(
            user=user, transaction_type='deposit', amount=Decimal('5.00'),
            currency_code='USD', status='completed'
        )
        assert txn.reference_number.startswith('BFX-')
        assert txn.completed_at is not None
        assert txn.direction == 'credit'


@pytest.mark.django_db
class TestDisplayWallets:
    def test_placeholders_fill_missing_currencies(self, user):
        Wallet.objects.create(user=user, currency_code='USD', balance=Decimal('25.00'))

        wallets = WalletService.display_wallets(user)

        assert [w['currency_code'] for w in wallets] == ['NGN', 'USD', 'CAD', 'GBP', 'EUR']
        ngn = wallets[0]
        assert ngn['is_placeholder'] is True
        assert ngn['id'] == f'NGN-placeholder-{user.pk}'
        assert ngn['balance'] == Decimal('0.00')
        assert wallets[1]['is_placeholder'] is False
        assert wallets[1]['formatted_balance'] == '$25.00'
        assert Wallet.objects.filter(user=user).count() == 1

    @override_config(SUPPORTED_CURRENCIES='usd, EUR,XYZ')
    def test_configured_order(self, user):
        assert supported_currencies() == ['USD', 'EUR']
        assert [w['currency_code'] for w in WalletService.display_wallets(user)] == ['USD', 'EUR']

    def test_recent_transactions_newest_first(self, user):
        for amount in ('1.00', '2.00', '3.00', '4.00', '5.00', '6.00'):
            WalletTransaction.objects.create(
                user=user, transaction_type='deposit',
                amount=Decimal(amount), currency_code='NGN'
            )

        recent = WalletService.recent_transactions(user)

        assert len(recent) == 5
        assert recent[0].amount == Decimal('6.00')


@pytest.mark.django_db
class TestWalletViews:
    def test_overview_requires_login(self, client):
        response = client.get(reverse('wallet:overview'))
        assert response.status_code == 302
        assert reverse('Login') in response.url

    def test_overview_lists_wallets(self, signed_in_client, user):
        Wallet.objects.create(user=user, currency_code='GBP', balance=Decimal('12.00'))
        response = signed_in_client.get(reverse('wallet:overview'))
        assert response.status_code == 200
        assert len(response.context['wallets']) == 5
        assert response.context['kyc_verified'] is False
        assert '£12.00' in response.content.decode()

    def test_history_filters_by_currency(self, signed_in_client, user):
        WalletTransaction.objects.create(
            user=user, transaction_type='deposit', amount=Decimal('1.00'), currency_code='USD'
        )
        WalletTransaction.objects.create(
            user=user, transaction_type='p2p_sell', amount=Decimal('2.00'), currency_code='NGN'
        )

        response = signed_in_client.get(reverse('wallet:transaction_history'), {'currency': 'ngn'})

        assert response.status_code == 200
        transactions = list(response.context['transactions'])
        assert len(transactions) == 1
        assert transactions[0].currency_code == 'NGN'

    def test_history_paginates_twenty_per_page(self, signed_in_client, user):
        for i in range(21):
            WalletTransaction.objects.create(
                user=user, transaction_type='deposit', amount=Decimal(i + 1), currency_code='USD'
            )
        url = reverse('wallet:transaction_history')

        first = signed_in_client.get(url)
        assert len(first.context['transactions']) == 20
        assert first.context['page_obj'].paginator.num_pages == 2

        second = signed_in_client.get(url, {'page': 2})
        assert len(second.context['transactions']) == 1

    def test_history_filters_by_status_and_type(self, signed_in_client, user):
        WalletTransaction.objects.create(
            user=user, transaction_type='deposit', amount=Decimal('5.00'),
            currency_code='USD', status='completed'
        )
        WalletTransaction.objects.create(
            user=user, transaction_type='p2p_sell', amount=Decimal('7.00'), currency_code='USD'
        )
        url = reverse('wallet:transaction_history')

        completed = list(signed_in_client.get(url, {'status': 'completed'}).context['transactions'])
        assert [t.transaction_type for t in completed] == ['deposit']

        sells = list(signed_in_client.get(url, {'type': 'p2p_sell'}).context['transactions'])
        assert [t.status for t in sells] == ['pending']

        assert len(signed_in_client.get(url).context['transactions']) == 2

    def test_overview_formats_locked_amount(self, signed_in_client, user):
        Wallet.objects.create(
            user=user, currency_code='USD', balance=Decimal('2000.00'), locked_balance=Decimal('1250.00')
        )
        response = signed_in_client.get(reverse('wallet:overview'))
        content = response.content.decode()
        assert '$1,250.00' in content
        assert '$750.00' in content
