# apps/accounts/admin_urls.py
from django.urls import path
from . import admin_views

urlpatterns = [
    path('users', admin_views.list_users, name='admin-list-users'),
    path('users/<str:user_id>', admin_views.user_detail, name='admin-user-detail'),
    path('update-user-role', admin_views.update_user_role, name='admin-update-user-role'),

    path('pending-teachers', admin_views.pending_teachers, name='admin-pending-teachers'),
    path('confirm-teacher', admin_views.confirm_teacher, name='admin-confirm-teacher'),
    path('pending-companies', admin_views.pending_companies, name='admin-pending-companies'),
    path('confirm-company', admin_views.confirm_company, name='admin-confirm-company'),
]
