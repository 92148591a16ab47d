# apps/accounts/approval_urls.py
from django.urls import path
from . import admin_views

urlpatterns = [
    path('teacher-confirmations', admin_views.teacher_confirmations, name='teacher-confirmations'),
    path('company-approvals', admin_views.company_approvals, name='company-approvals'),
]
