# user_dashboard/kyc_urls.py
from django.urls import path
from . import kyc_views

app_name = 'kyc'

urlpatterns = [
    path('', kyc_views.kyc_status, name='status'),

    # Four-step flow
    path('details/', kyc_views.kyc_details, name='details'),
    path('document/', kyc_views.kyc_document, name='document'),
    path('selfie/', kyc_views.kyc_selfie, name='selfie'),
    path('review/', kyc_views.kyc_review, name='review'),

    path('cancel/', kyc_views.kyc_cancel, name='cancel'),
]
