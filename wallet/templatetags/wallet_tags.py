"""
Template filters for money and transaction rendering.

Usage in templates:
    {% load wallet_tags %}
    {{ wallet.balance|money:wallet.currency_code }}
    {{ txn.transaction_type|direction }}
"""

from django import template

from wallet.services import format_currency, transaction_direction, transaction_type_label

register = template.Library()


@register.filter
def money(amount, currency_code):
    return format_currency(amount, currency_code)


@register.filter
def direction(transaction_type):
    return transaction_direction(transaction_type)


@register.filter
def type_label(transaction_type):
    return transaction_type_label(transaction_type)
