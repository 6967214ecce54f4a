from django.urls import path, reverse_lazy
from django.contrib.auth import views as auth_views
from . import views


urlpatterns=[
    path('login', views.Login, name='Login'),
    path('register', views.Register, name='Register'),
    path('logout', views.Logout, name='Logout'),
    path('confirm/<uidb64>/<token>', views.confirm_email, name='confirm_email'),
    path('forgot-password', views.forget_password, name='forget_password'),

    # Reset links emailed by the forgot-password flow
    path('reset/<uidb64>/<token>/', auth_views.PasswordResetConfirmView.as_view(
        template_name='authentication/reset_password.html',
        success_url=reverse_lazy('password_reset_complete'),
    ), name='password_reset_confirm'),
    path('reset/done/', auth_views.PasswordResetCompleteView.as_view(
        template_name='authentication/reset_password_done.html',
    ), name='password_reset_complete'),
]
