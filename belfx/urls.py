"""BELFX URL Configuration"""

from django.contrib import admin
from django.urls import path, include
from django.conf import settings
from django.conf.urls.static import static

from authentication.views import register_user_api


urlpatterns = [
    path('admin/', admin.site.urls),

    # Public marketing site
    path('', include('home.urls')),

    # Authentication (login, register, password reset)
    path('user/', include('authentication.urls')),

    # Dashboard and KYC flow
    path('dashboard/', include('user_dashboard.urls', namespace='user_dashboard')),
    path('kyc/', include('user_dashboard.kyc_urls', namespace='kyc')),

    # Wallets and transaction history
    path('wallet/', include('wallet.urls', namespace='wallet')),

    # Platform admin panel
    path('admin-panel/', include('admin_panel.urls', namespace='admin_panel')),

    # JSON endpoints
    path('api/register-user', register_user_api, name='register_user_api'),
    path('api/kyc/', include('kyc_integration.urls', namespace='kyc_integration')),
]

# Static & Media files in development
if settings.DEBUG:
    urlpatterns += static(settings.STATIC_URL, document_root=settings.STATIC_ROOT)
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
