from django.urls import path
from . import views


urlpatterns = [
    path('', views.Home, name='index'),
    path('landing', views.landing, name='landing'),
    path('terms', views.terms, name='terms'),
    path('privacy', views.privacy, name='privacy'),
]
