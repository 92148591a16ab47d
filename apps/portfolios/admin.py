# apps/portfolios/admin.py
from django.contrib import admin

from .models import Portfolio, Comment


class CommentInline(admin.TabularInline):
    model = Comment
    extra = 0
    fields = ['author_email', 'author_role', 'content', 'created_at']
    readonly_fields = ['created_at']


@admin.register(Portfolio)
class PortfolioAdmin(admin.ModelAdmin):
    list_display = ['id', 'title', 'category', 'status', 'submitted_by', 'approved_by', 'created_at']
    list_filter = ['status', 'category']
    search_fields = ['title', 'description', 'client', 'submitted_by__email']
    raw_id_fields = ['submitted_by', 'approved_by']
    readonly_fields = ['created_at', 'updated_at']
    inlines = [CommentInline]


@admin.register(Comment)
class CommentAdmin(admin.ModelAdmin):
    list_display = ['id', 'portfolio', 'author_email', 'author_role', 'created_at']
    search_fields = ['author_email', 'content']
    raw_id_fields = ['portfolio', 'author']
