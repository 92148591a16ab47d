# apps/accounts/models.py
from datetime import timedelta
import secrets

from django.conf import settings
from django.contrib.auth.models import AbstractUser, UserManager as DjangoUserManager
from django.db import models
from django.utils import timezone


class UserManager(DjangoUserManager):

    def create_superuser(self, username, email=None, password=None, **extra_fields):
        extra_fields.setdefault('role', User.ROLE_ADMIN)
        return super().create_superuser(username, email, password, **extra_fields)


class User(AbstractUser):
    ROLE_ADMIN = 'admin'
    ROLE_STUDENT = 'student'
    ROLE_TEACHER = 'teacher'
    ROLE_COMPANY = 'company'

    ROLE_CHOICES = (
        (ROLE_ADMIN, 'Admin'),
        (ROLE_STUDENT, 'Student'),
        (ROLE_TEACHER, 'Teacher'),
        (ROLE_COMPANY, 'Company'),
    )

    email = models.EmailField(unique=True)
    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default=ROLE_STUDENT)

    # Student fields
    student_id = models.CharField(max_length=50, blank=True)
    phone = models.CharField(max_length=20, blank=True)
    year_of_study = models.CharField(max_length=20, blank=True)

    # Teacher fields
    teacher_id = models.CharField(max_length=50, blank=True)
    title = models.CharField(max_length=50, blank=True)
    faculty = models.CharField(max_length=150, blank=True)
    department = models.CharField(max_length=150, blank=True)
    position = models.CharField(max_length=150, blank=True)
    office_room = models.CharField(max_length=50, blank=True)
    office_phone = models.CharField(max_length=20, blank=True)
    specialization = models.CharField(max_length=200, blank=True)

    # Company fields
    company_name = models.CharField(max_length=200, blank=True)
    contact_first_name = models.CharField(max_length=100, blank=True)
    contact_last_name = models.CharField(max_length=100, blank=True)
    industry = models.CharField(max_length=150, blank=True)
    address = models.TextField(blank=True)
    description = models.TextField(blank=True)

    # Teacher confirmation
    teacher_confirmed = models.BooleanField(default=False)
    confirmed_by = models.ForeignKey(
        'self', on_delete=models.SET_NULL, null=True, blank=True,
        related_name='confirmed_teachers'
    )
    confirmed_at = models.DateTimeField(null=True, blank=True)

    # Company approval
    company_approved = models.BooleanField(default=False)
    approved_by = models.ForeignKey(
        'self', on_delete=models.SET_NULL, null=True, blank=True,
        related_name='approved_companies'
    )
    approved_at = models.DateTimeField(null=True, blank=True)

    # Profile
    avatar_url = models.CharField(max_length=500, blank=True)
    bio = models.TextField(max_length=1000, blank=True)
    skills = models.JSONField(default=list, blank=True)

    updated_at = models.DateTimeField(auto_now=True)

    objects = UserManager()

    class Meta:
        ordering = ['-date_joined']

    def save(self, *args, **kwargs):
        if self.email:
            self.email = self.email.strip().lower()
        super().save(*args, **kwargs)

    @property
    def is_admin(self):
        return self.role == self.ROLE_ADMIN

    @property
    def awaiting_approval(self):
        """True while a teacher is unconfirmed or a company unapproved."""
        if self.role == self.ROLE_TEACHER:
            return not self.teacher_confirmed
        if self.role == self.ROLE_COMPANY:
            return not self.company_approved
        return False

    def __str__(self):
        return self.username


class ProfileFile(models.Model):
    """A document or image attached to a user's profile."""

    KIND_CHOICES = (
        ('image', 'Image'),
        ('pdf', 'PDF'),
    )

    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='portfolio_files')
    file_id = models.CharField(max_length=32, unique=True, editable=False)
    name = models.CharField(max_length=255)
    kind = models.CharField(max_length=10, choices=KIND_CHOICES)
    size = models.PositiveIntegerField()
    url = models.CharField(max_length=500)
    uploaded_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['uploaded_at']

    def save(self, *args, **kwargs):
        if not self.file_id:
            self.file_id = secrets.token_hex(16)
        super().save(*args, **kwargs)

    def __str__(self):
        return f"{self.name} ({self.user.username})"


class OneTimePasscode(models.Model):
    """Email verification code issued before a student or teacher registers."""

    email = models.EmailField(db_index=True)
    code = models.CharField(max_length=6)
    expires_at = models.DateTimeField(db_index=True)
    attempts = models.PositiveSmallIntegerField(default=0)
    is_used = models.BooleanField(default=False)
    verified_at = models.DateTimeField(null=True, blank=True)
    consumed_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['email', 'is_used'], name='otp_email_used_idx'),
        ]

    @staticmethod
    def generate_code():
        return f"{secrets.randbelow(900000) + 100000}"

    @staticmethod
    def lifetime():
        return timedelta(minutes=settings.OTP_LIFETIME_MINUTES)

    @classmethod
    def clean_expired(cls):
        """Purge expired codes, keeping verifications still redeemable by registration."""
        now = timezone.now()
        window_start = now - timedelta(minutes=settings.OTP_VERIFICATION_WINDOW_MINUTES)
        deleted, _ = (
            cls.objects.filter(expires_at__lt=now)
            .exclude(verified_at__gte=window_start, consumed_at__isnull=True)
            .delete()
        )
        return deleted

    @property
    def is_expired(self):
        return self.expires_at <= timezone.now()

    def __str__(self):
        return f"OTP for {self.email} - {'USED' if self.is_used else 'ACTIVE'}"
