# wallet/urls.py
from django.urls import path
from . import views

app_name = 'wallet'

urlpatterns = [
    path('', views.wallet_overview, name='overview'),
    path('transactions/', views.transaction_history, name='transaction_history'),
]
