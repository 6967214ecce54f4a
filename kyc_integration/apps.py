from django.apps import AppConfig


class KycIntegrationConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'kyc_integration'
    verbose_name = 'KYC Providers'
