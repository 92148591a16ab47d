# apps/portfolios/serializers.py
from django.conf import settings
from rest_framework import serializers

from apps.accounts import policies
from .models import Portfolio, Comment


def _clean_list(values):
    return [str(v).strip() for v in values or [] if str(v).strip()]


class PortfolioSerializer(serializers.ModelSerializer):
    """
    Portfolio entry in its public camelCase shape.

    Review fields (status, submitter, approver) are read-only here; they only
    change through portfolio approval.
    """

    fullDescription = serializers.CharField(source='full_description')
    technologies = serializers.ListField(child=serializers.CharField(allow_blank=True), required=False)
    features = serializers.ListField(child=serializers.CharField(allow_blank=True), required=False)
    image = serializers.CharField(required=False, allow_blank=True)
    demoUrl = serializers.CharField(source='demo_url', max_length=500, required=False, allow_blank=True)
    githubUrl = serializers.CharField(source='github_url', max_length=500, required=False, allow_blank=True)
    uploadedFile = serializers.CharField(source='uploaded_file', required=False, allow_blank=True)
    images = serializers.ListField(child=serializers.CharField(), required=False)
    repoUrl = serializers.CharField(source='repo_url', max_length=500, required=False, allow_blank=True)
    submittedBy = serializers.SlugRelatedField(source='submitted_by', slug_field='email', read_only=True)
    approvedBy = serializers.SlugRelatedField(source='approved_by', slug_field='email', read_only=True)
    approvedAt = serializers.DateTimeField(source='approved_at', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = Portfolio
        fields = [
            'id', 'category', 'title', 'description', 'fullDescription',
            'technologies', 'features', 'image', 'demoUrl', 'githubUrl',
            'duration', 'client', 'uploadedFile', 'images', 'repoUrl', 'details',
            'status', 'submittedBy', 'approvedBy', 'approvedAt',
            'createdAt', 'updatedAt',
        ]
        read_only_fields = ['id', 'status']
        extra_kwargs = {
            'details': {'required': False},
        }

    def validate(self, attrs):
        creating = self.instance is None

        if creating or 'technologies' in attrs:
            attrs['technologies'] = _clean_list(attrs.get('technologies')) or list(Portfolio.DEFAULT_TECHNOLOGIES)
        if creating or 'features' in attrs:
            attrs['features'] = _clean_list(attrs.get('features')) or list(Portfolio.DEFAULT_FEATURES)

        if creating or 'image' in attrs:
            if not attrs.get('image', '').strip():
                uploaded = attrs.get('uploaded_file')
                if uploaded is None and not creating:
                    uploaded = self.instance.uploaded_file
                attrs['image'] = self.fallback_image(uploaded)

        return attrs

    @staticmethod
    def fallback_image(uploaded_file):
        if uploaded_file and uploaded_file.startswith('data:image'):
            return uploaded_file
        return settings.PORTFOLIO_PLACEHOLDER_IMAGE


class CommentSerializer(serializers.ModelSerializer):
    portfolioId = serializers.IntegerField(source='portfolio_id', read_only=True)
    authorEmail = serializers.EmailField(source='author_email', read_only=True)
    authorName = serializers.CharField(source='display_name', read_only=True)
    authorRole = serializers.CharField(source='author_role', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)
    canDelete = serializers.SerializerMethodField()

    class Meta:
        model = Comment
        fields = [
            'id', 'portfolioId', 'authorEmail', 'authorName', 'authorRole',
            'content', 'createdAt', 'updatedAt', 'canDelete',
        ]
        read_only_fields = fields

    def get_canDelete(self, obj):
        request = self.context.get('request')
        user = getattr(request, 'user', None)
        return policies.can_delete_comment(user, obj).allowed
