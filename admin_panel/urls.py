from django.urls import path
from django.views.generic import RedirectView
from . import views

app_name = 'admin_panel'

urlpatterns = [
    path('', RedirectView.as_view(pattern_name='admin_panel:users', permanent=False), name='index'),
    path('login/', views.admin_login, name='login'),
    path('logout/', views.admin_logout, name='logout'),

    # Users
    path('users/', views.users, name='users'),
    path('users/<int:user_id>/', views.users, name='user_detail'),
    path('users/<int:user_id>/status/', views.user_status, name='user_status'),

    # KYC
    path('kyc/', views.kyc, name='kyc'),
    path('kyc/<int:pk>/', views.kyc, name='kyc_detail'),
    path('kyc/<int:pk>/approve/', views.kyc_approve, name='kyc_approve'),
    path('kyc/<int:pk>/reject/', views.kyc_reject, name='kyc_reject'),

    # Settings
    path('settings/', views.admin_settings, name='settings'),
    path('settings/<int:user_id>/toggle-admin/', views.toggle_admin, name='toggle_admin'),

    # Reports
    path('reports/', views.reports, name='reports'),
    path('reports/export/<str:fmt>/', views.export_report, name='export_report'),

    path('more/', views.more, name='more'),
]
