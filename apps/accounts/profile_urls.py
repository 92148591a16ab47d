# apps/accounts/profile_urls.py
from django.urls import path
from . import profile_views

urlpatterns = [
    path('profile', profile_views.my_profile, name='user-profile'),
    path('profile/avatar', profile_views.upload_avatar, name='user-profile-avatar'),
    path('profile/portfolio', profile_views.upload_portfolio_file, name='user-profile-files'),
    path('profile/portfolio/<str:file_id>', profile_views.delete_portfolio_file, name='user-profile-file-detail'),
    path('profile/by-email', profile_views.profile_by_email, name='user-profile-by-email'),
]
