# apps/portfolios/comment_urls.py
from django.urls import path
from . import comment_views

urlpatterns = [
    path('comments', comment_views.comment_collection, name='comment-list'),
    path('comments/<int:comment_id>', comment_views.delete_comment, name='comment-detail'),
]
