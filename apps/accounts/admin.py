# apps/accounts/admin.py
from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from .models import User, ProfileFile, OneTimePasscode


class ProfileFileInline(admin.TabularInline):
    model = ProfileFile
    extra = 0
    readonly_fields = ['file_id', 'name', 'kind', 'size', 'url', 'uploaded_at']


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    list_display = ['username', 'email', 'role', 'is_active', 'teacher_confirmed', 'company_approved', 'date_joined']
    list_filter = ['role', 'is_active', 'teacher_confirmed', 'company_approved']
    search_fields = ['username', 'email', 'first_name', 'last_name', 'company_name']
    ordering = ['-date_joined']
    inlines = [ProfileFileInline]

    fieldsets = BaseUserAdmin.fieldsets + (
        ('Role', {'fields': ('role',)}),
        ('Student', {'fields': ('student_id', 'year_of_study', 'phone')}),
        ('Teacher', {'fields': (
            'teacher_id', 'title', 'faculty', 'department', 'position',
            'office_room', 'office_phone', 'specialization',
        )}),
        ('Company', {'fields': (
            'company_name', 'contact_first_name', 'contact_last_name',
            'industry', 'address', 'description',
        )}),
        ('Approval', {'fields': (
            'teacher_confirmed', 'confirmed_by', 'confirmed_at',
            'company_approved', 'approved_by', 'approved_at',
        )}),
        ('Profile', {'fields': ('avatar_url', 'bio', 'skills')}),
    )
    raw_id_fields = ['confirmed_by', 'approved_by']


@admin.register(OneTimePasscode)
class OneTimePasscodeAdmin(admin.ModelAdmin):
    list_display = ['email', 'expires_at', 'attempts', 'is_used', 'verified_at', 'consumed_at', 'created_at']
    list_filter = ['is_used']
    search_fields = ['email']
    exclude = ['code']
    readonly_fields = ['email', 'expires_at', 'attempts', 'is_used', 'verified_at', 'consumed_at']
