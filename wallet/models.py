from django.db import models
from django.contrib.auth.models import User
from django.utils import timezone
from django.core.validators import MinValueValidator
from django.core.exceptions import ValidationError
from decimal import Decimal
import uuid


CURRENCY_CHOICES = (
    ('NGN', 'Nigerian Naira'),
    ('USD', 'US Dollar'),
    ('CAD', 'Canadian Dollar'),
    ('GBP', 'British Pound'),
    ('EUR', 'Euro'),
)


class Wallet(models.Model):
    """
    One balance per user and currency.
    locked_balance is the part of balance reserved by open P2P offers.
    """

    user = models.ForeignKey(
        User,
        on_delete=models.CASCADE,
        related_name='wallets'
    )
    currency_code = models.CharField(
        max_length=3,
        choices=CURRENCY_CHOICES,
        help_text="ISO 4217 currency code"
    )

    balance = models.DecimalField(
        max_digits=18,
        decimal_places=2,
        default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0.00'))],
        help_text="Total balance (available + locked)"
    )
    locked_balance = models.DecimalField(
        max_digits=18,
        decimal_places=2,
        default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0.00'))],
        help_text="Balance locked for pending operations"
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Wallet"
        verbose_name_plural = "Wallets"
        ordering = ['currency_code']
        constraints = [
            models.UniqueConstraint(
                fields=['user', 'currency_code'],
                name='wallet_unique_user_currency'
            ),
            models.CheckConstraint(
                condition=models.Q(balance__gte=0),
                name='wallet_balance_non_negative'
            ),
            models.CheckConstraint(
                condition=models.Q(locked_balance__gte=0),
                name='wallet_locked_non_negative'
            ),
        ]

    def __str__(self):
        return f"{self.user.username}'s {self.currency_code} Wallet - {self.balance}"

    def clean(self):
        """Locked funds can never exceed the balance they are locked from"""
        super().clean()
        if self.locked_balance is not None and self.balance is not None \
                and self.locked_balance > self.balance:
            raise ValidationError(
                f"Locked balance ({self.locked_balance}) cannot exceed "
                f"balance ({self.balance})"
            )

    def save(self, *args, **kwargs):
        self.full_clean()
        super().save(*args, **kwargs)

    @property
    def available_balance(self):
        return Decimal(self.balance) - Decimal(self.locked_balance)

    @property
    def is_placeholder(self):
        return False


class WalletTransaction(models.Model):
    """
    Records all wallet activity for history and the admin panel.
    """
    TYPE_DEPOSIT = 'deposit'
    TYPE_WITHDRAWAL = 'withdrawal'
    TYPE_P2P_BUY = 'p2p_buy'
    TYPE_P2P_SELL = 'p2p_sell'
    TYPE_TRANSFER = 'transfer'
    TYPE_FEE = 'fee'

    TRANSACTION_TYPES = (
        (TYPE_DEPOSIT, 'Deposit'),
        (TYPE_WITHDRAWAL, 'Withdrawal'),
        (TYPE_P2P_BUY, 'P2P Buy'),
        (TYPE_P2P_SELL, 'P2P Sell'),
        (TYPE_TRANSFER, 'Transfer'),
        (TYPE_FEE, 'Fee'),
    )

    STATUS_PENDING = 'pending'
    STATUS_COMPLETED = 'completed'
    STATUS_FAILED = 'failed'
    STATUS_CANCELLED = 'cancelled'

    STATUS_CHOICES = (
        (STATUS_PENDING, 'Pending'),
        (STATUS_COMPLETED, 'Completed'),
        (STATUS_FAILED, 'Failed'),
        (STATUS_CANCELLED, 'Cancelled'),
    )

    reference_number = models.CharField(
        max_length=100,
        unique=True,
        help_text="Unique transaction reference"
    )

    user = models.ForeignKey(
        User,
        on_delete=models.CASCADE,
        related_name='wallet_transactions'
    )

    transaction_type = models.CharField(max_length=30, choices=TRANSACTION_TYPES)
    amount = models.DecimalField(
        max_digits=18,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))]
    )
    currency_code = models.CharField(max_length=3, choices=CURRENCY_CHOICES)

    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_PENDING)

    description = models.TextField(blank=True, null=True)
    metadata = models.JSONField(
        default=dict,
        blank=True,
        help_text="Additional transaction data (offer id, counterparty, etc.)"
    )

    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)
    completed_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        verbose_name = "Wallet Transaction"
        verbose_name_plural = "Wallet Transactions"
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['user', '-created_at'], name='wallettxn_user_created_idx'),
            models.Index(fields=['status'], name='wallettxn_status_idx'),
            models.Index(fields=['transaction_type'], name='wallettxn_type_idx'),
        ]

    def __str__(self):
        return f"{self.reference_number} - {self.get_transaction_type_display()} - {self.currency_code} {self.amount}"

    def save(self, *args, **kwargs):
        if not self.reference_number:
            self.reference_number = self.generate_reference_number()

        if self.status == self.STATUS_COMPLETED and not self.completed_at:
            self.completed_at = timezone.now()

        self.full_clean()
        super().save(*args, **kwargs)

    @staticmethod
    def generate_reference_number():
        """Generate unique transaction reference"""
        timestamp = timezone.now().strftime('%Y%m%d%H%M%S')
        unique_id = str(uuid.uuid4().hex)[:8].upper()
        return f"BFX-{timestamp}-{unique_id}"

    @property
    def type_label(self):
        return (self.transaction_type or '').replace('_', ' ') or 'N/A'

    @property
    def is_debit(self):
        """Sells and withdrawals take money out of the wallet"""
        kind = self.transaction_type or ''
        return 'sell' in kind or 'withdrawal' in kind

    @property
    def direction(self):
        return 'debit' if self.is_debit else 'credit'
