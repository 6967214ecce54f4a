from django.urls import path
from . import views

app_name = 'kyc_integration'

urlpatterns = [
    path('smileid', views.smileid_submit, name='smileid_submit'),
    path('sumsub-token', views.sumsub_token, name='sumsub_token'),
]
