# apps/portfolios/models.py
from django.conf import settings
from django.db import models


class Portfolio(models.Model):
    CATEGORY_CHOICES = (
        ('web', 'Web'),
        ('mobile', 'Mobile'),
        ('uiux', 'UI/UX'),
        ('fullstack', 'Full Stack'),
        ('game', 'Game'),
        ('design', 'Design'),
        ('data', 'Data'),
        ('ai', 'AI'),
        ('other', 'Other'),
    )

    STATUS_PENDING = 'pending'
    STATUS_APPROVED = 'approved'
    STATUS_REJECTED = 'rejected'

    STATUS_CHOICES = (
        (STATUS_PENDING, 'Pending'),
        (STATUS_APPROVED, 'Approved'),
        (STATUS_REJECTED, 'Rejected'),
    )

    DEFAULT_TECHNOLOGIES = ['General']
    DEFAULT_FEATURES = ['Portfolio Item']

    category = models.CharField(max_length=20, choices=CATEGORY_CHOICES, db_index=True)
    title = models.CharField(max_length=200)
    description = models.TextField()
    full_description = models.TextField()
    technologies = models.JSONField(default=list, blank=True)
    features = models.JSONField(default=list, blank=True)
    image = models.TextField(blank=True)
    demo_url = models.CharField(max_length=500, blank=True)
    github_url = models.CharField(max_length=500, blank=True)
    duration = models.CharField(max_length=100)
    client = models.CharField(max_length=200)

    # Upload form fields
    uploaded_file = models.TextField(blank=True)
    images = models.JSONField(default=list, blank=True)
    repo_url = models.CharField(max_length=500, blank=True)
    details = models.TextField(blank=True)

    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_PENDING, db_index=True)
    submitted_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True,
        related_name='submitted_portfolios'
    )
    approved_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True,
        related_name='reviewed_portfolios'
    )
    approved_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['id']

    def __str__(self):
        return f"#{self.pk} {self.title} ({self.status})"


class Comment(models.Model):
    portfolio = models.ForeignKey(Portfolio, on_delete=models.CASCADE, related_name='comments')
    author = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True,
        related_name='comments'
    )
    # Snapshot of the author at posting time
    author_email = models.EmailField()
    author_name = models.CharField(max_length=150)
    author_role = models.CharField(max_length=20)
    content = models.CharField(max_length=500)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at', '-id']
        indexes = [
            models.Index(fields=['portfolio', 'author_email'], name='comment_portfolio_author_idx'),
        ]

    @property
    def display_name(self):
        """Live username when the author still exists, else the stored snapshot."""
        if self.author is not None and self.author.username:
            return self.author.username
        return self.author_name or self.author_email.split('@')[0]

    def __str__(self):
        return f"Comment #{self.pk} on portfolio #{self.portfolio_id} by {self.author_email}"
