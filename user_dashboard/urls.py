# user_dashboard/urls.py
from django.urls import path
from . import views

app_name = 'user_dashboard'

urlpatterns = [
    path('', views.home, name='home'),
]
