# apps/accounts/urls.py
from django.urls import path
from . import views

urlpatterns = [
    path('register', views.register_view, name='register'),
    path('login', views.login_view, name='login'),

    # Email verification
    path('send-otp', views.send_otp_view, name='send-otp'),
    path('verify-otp', views.verify_otp_view, name='verify-otp'),
]
