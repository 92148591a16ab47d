# apps/accounts/serializers.py
from rest_framework import serializers

from .models import User, ProfileFile


class ProfileFileSerializer(serializers.ModelSerializer):
    """A file attached to a profile"""

    fileId = serializers.CharField(source='file_id', read_only=True)
    type = serializers.CharField(source='kind', read_only=True)
    uploadedAt = serializers.DateTimeField(source='uploaded_at', read_only=True)

    class Meta:
        model = ProfileFile
        fields = ['fileId', 'name', 'type', 'size', 'url', 'uploadedAt']
        read_only_fields = fields


class ProfileSerializer(serializers.ModelSerializer):
    """
    Fields an account may edit about itself.

    Anything not listed here (role, email, approval flags, activity) is
    silently ignored, both at registration and on profile updates.
    """

    firstName = serializers.CharField(source='first_name', max_length=150, required=False, allow_blank=True)
    lastName = serializers.CharField(source='last_name', max_length=150, required=False, allow_blank=True)
    studentId = serializers.CharField(source='student_id', max_length=50, required=False, allow_blank=True)
    yearOfStudy = serializers.CharField(source='year_of_study', max_length=20, required=False, allow_blank=True)
    teacherId = serializers.CharField(source='teacher_id', max_length=50, required=False, allow_blank=True)
    officeRoom = serializers.CharField(source='office_room', max_length=50, required=False, allow_blank=True)
    officePhone = serializers.CharField(source='office_phone', max_length=20, required=False, allow_blank=True)
    companyName = serializers.CharField(source='company_name', max_length=200, required=False, allow_blank=True)
    contactFirstName = serializers.CharField(source='contact_first_name', max_length=100, required=False, allow_blank=True)
    contactLastName = serializers.CharField(source='contact_last_name', max_length=100, required=False, allow_blank=True)
    skills = serializers.ListField(child=serializers.CharField(max_length=100), required=False)

    class Meta:
        model = User
        fields = [
            'firstName', 'lastName',
            'studentId', 'yearOfStudy', 'phone',
            'teacherId', 'title', 'faculty', 'department', 'position',
            'officeRoom', 'officePhone', 'specialization',
            'companyName', 'contactFirstName', 'contactLastName',
            'industry', 'address', 'description',
            'bio', 'skills',
        ]
        extra_kwargs = {
            field: {'required': False}
            for field in ('phone', 'title', 'faculty', 'department', 'position',
                          'specialization', 'industry', 'address', 'description', 'bio')
        }


class AccountSerializer(serializers.ModelSerializer):
    """Full account representation; the password hash is never included"""

    isActive = serializers.BooleanField(source='is_active', read_only=True)
    firstName = serializers.CharField(source='first_name', read_only=True)
    lastName = serializers.CharField(source='last_name', read_only=True)
    studentId = serializers.CharField(source='student_id', read_only=True)
    yearOfStudy = serializers.CharField(source='year_of_study', read_only=True)
    teacherId = serializers.CharField(source='teacher_id', read_only=True)
    officeRoom = serializers.CharField(source='office_room', read_only=True)
    officePhone = serializers.CharField(source='office_phone', read_only=True)
    companyName = serializers.CharField(source='company_name', read_only=True)
    contactFirstName = serializers.CharField(source='contact_first_name', read_only=True)
    contactLastName = serializers.CharField(source='contact_last_name', read_only=True)
    teacherConfirmed = serializers.BooleanField(source='teacher_confirmed', read_only=True)
    confirmedBy = serializers.SlugRelatedField(source='confirmed_by', slug_field='email', read_only=True)
    confirmedAt = serializers.DateTimeField(source='confirmed_at', read_only=True)
    companyApproved = serializers.BooleanField(source='company_approved', read_only=True)
    approvedBy = serializers.SlugRelatedField(source='approved_by', slug_field='email', read_only=True)
    approvedAt = serializers.DateTimeField(source='approved_at', read_only=True)
    avatarUrl = serializers.CharField(source='avatar_url', read_only=True)
    portfolioFiles = ProfileFileSerializer(source='portfolio_files', many=True, read_only=True)
    createdAt = serializers.DateTimeField(source='date_joined', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = User
        fields = [
            'id', 'username', 'email', 'role', 'isActive',
            'firstName', 'lastName',
            'studentId', 'yearOfStudy', 'phone',
            'teacherId', 'title', 'faculty', 'department', 'position',
            'officeRoom', 'officePhone', 'specialization',
            'companyName', 'contactFirstName', 'contactLastName',
            'industry', 'address', 'description',
            'teacherConfirmed', 'confirmedBy', 'confirmedAt',
            'companyApproved', 'approvedBy', 'approvedAt',
            'avatarUrl', 'bio', 'skills', 'portfolioFiles',
            'createdAt', 'updatedAt',
        ]
        read_only_fields = fields


class PublicProfileSerializer(serializers.ModelSerializer):
    """What anyone may see about an account"""

    firstName = serializers.CharField(source='first_name', read_only=True)
    lastName = serializers.CharField(source='last_name', read_only=True)
    studentId = serializers.CharField(source='student_id', read_only=True)
    yearOfStudy = serializers.CharField(source='year_of_study', read_only=True)
    avatarUrl = serializers.CharField(source='avatar_url', read_only=True)
    portfolioFiles = ProfileFileSerializer(source='portfolio_files', many=True, read_only=True)
    createdAt = serializers.DateTimeField(source='date_joined', read_only=True)

    class Meta:
        model = User
        fields = [
            'id', 'email', 'username', 'firstName', 'lastName', 'role',
            'avatarUrl', 'bio', 'skills', 'portfolioFiles',
            'phone', 'yearOfStudy', 'department', 'studentId', 'createdAt',
        ]
        read_only_fields = fields


class AccountSummarySerializer(serializers.ModelSerializer):
    """Compact row used by review queues"""

    firstName = serializers.CharField(source='first_name', read_only=True)
    lastName = serializers.CharField(source='last_name', read_only=True)
    teacherId = serializers.CharField(source='teacher_id', read_only=True)
    companyName = serializers.CharField(source='company_name', read_only=True)
    contactFirstName = serializers.CharField(source='contact_first_name', read_only=True)
    contactLastName = serializers.CharField(source='contact_last_name', read_only=True)
    createdAt = serializers.DateTimeField(source='date_joined', read_only=True)

    class Meta:
        model = User
        fields = [
            'id', 'username', 'email', 'role',
            'firstName', 'lastName', 'teacherId', 'title', 'faculty', 'department',
            'companyName', 'contactFirstName', 'contactLastName', 'industry',
            'createdAt',
        ]
        read_only_fields = fields
