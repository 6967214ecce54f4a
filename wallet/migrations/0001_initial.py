from decimal import Decimal

from django.conf import settings
import django.core.validators
from django.db import migrations, models
import django.db.models.deletion
import django.utils.timezone


CURRENCY_CHOICES = [
    ('NGN', 'Nigerian Naira'),
    ('USD', 'US Dollar'),
    ('CAD', 'Canadian Dollar'),
    ('GBP', 'British Pound'),
    ('EUR', 'Euro'),
]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Wallet',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('currency_code', models.CharField(choices=CURRENCY_CHOICES, help_text='ISO 4217 currency code', max_length=3)),
                ('balance', models.DecimalField(decimal_places=2, default=Decimal('0.00'), help_text='Total balance (available + locked)', max_digits=18, validators=[django.core.validators.MinValueValidator(Decimal('0.00'))])),
                ('locked_balance', models.DecimalField(decimal_places=2, default=Decimal('0.00'), help_text='Balance locked for pending operations', max_digits=18, validators=[django.core.validators.MinValueValidator(Decimal('0.00'))])),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='wallets', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Wallet',
                'verbose_name_plural': 'Wallets',
                'ordering': ['currency_code'],
                'constraints': [
                    models.UniqueConstraint(fields=('user', 'currency_code'), name='wallet_unique_user_currency'),
                    models.CheckConstraint(condition=models.Q(balance__gte=0), name='wallet_balance_non_negative'),
                    models.CheckConstraint(condition=models.Q(locked_balance__gte=0), name='wallet_locked_non_negative'),
                ],
            },
        ),
        migrations.CreateModel(
            name='WalletTransaction',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('reference_number', models.CharField(help_text='Unique transaction reference', max_length=100, unique=True)),
                ('transaction_type', models.CharField(choices=[('deposit', 'Deposit'), ('withdrawal', 'Withdrawal'), ('p2p_buy', 'P2P Buy'), ('p2p_sell', 'P2P Sell'), ('transfer', 'Transfer'), ('fee', 'Fee')], max_length=30)),
                ('amount', models.DecimalField(decimal_places=2, max_digits=18, validators=[django.core.validators.MinValueValidator(Decimal('0.01'))])),
                ('currency_code', models.CharField(choices=CURRENCY_CHOICES, max_length=3)),
                ('status', models.CharField(choices=[('pending', 'Pending'), ('completed', 'Completed'), ('failed', 'Failed'), ('cancelled', 'Cancelled')], default='pending', max_length=20)),
                ('description', models.TextField(blank=True, null=True)),
                ('metadata', models.JSONField(blank=True, default=dict, help_text='Additional transaction data (offer id, counterparty, etc.)')),
                ('created_at', models.DateTimeField(default=django.utils.timezone.now)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('completed_at', models.DateTimeField(blank=True, null=True)),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='wallet_transactions', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Wallet Transaction',
                'verbose_name_plural': 'Wallet Transactions',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['user', '-created_at'], name='wallettxn_user_created_idx'),
                    models.Index(fields=['status'], name='wallettxn_status_idx'),
                    models.Index(fields=['transaction_type'], name='wallettxn_type_idx'),
                ],
            },
        ),
    ]
