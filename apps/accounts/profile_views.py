# apps/accounts/profile_views.py
import logging

from django.conf import settings
from django.db import transaction
from rest_framework.decorators import api_view, authentication_classes, permission_classes, parser_classes
from rest_framework.parsers import MultiPartParser, FormParser
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework import status

from apps.common.exceptions import NotFoundError, ValidationError, MissingFields
from . import storage
from .authentication import OptionalBearerTokenAuthentication
from .models import User, ProfileFile
from .otp import normalize_email
from .serializers import (
    AccountSerializer,
    ProfileSerializer,
    PublicProfileSerializer,
    ProfileFileSerializer,
)

logger = logging.getLogger(__name__)

IMAGE_TYPES = ('image/png', 'image/jpeg', 'image/webp')
PDF_TYPES = ('application/pdf',)


def _uploaded_file(request):
    uploaded = request.FILES.get('file')
    if uploaded is None:
        raise MissingFields(['file'], 'No file uploaded')
    return uploaded


def _mb(size):
    return f'{size / (1024 * 1024):g}MB'


@api_view(['GET', 'PUT'])
@permission_classes([IsAuthenticated])
def my_profile(request):
    """Get or update the caller's own profile"""
    user = request.user

    if request.method == 'PUT':
        serializer = ProfileSerializer(user, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        logger.info("User #%s updated their profile", user.pk)

    return Response({
        'success': True,
        'data': AccountSerializer(user).data
    })


@api_view(['POST'])
@permission_classes([IsAuthenticated])
@parser_classes([MultiPartParser, FormParser])
def upload_avatar(request):
    uploaded = _uploaded_file(request)

    if uploaded.content_type not in IMAGE_TYPES:
        raise ValidationError('Avatar must be a PNG, JPEG or WEBP image', code='invalid_file_type')
    if uploaded.size > settings.AVATAR_MAX_BYTES:
        raise ValidationError(
            f'Avatar must be smaller than {_mb(settings.AVATAR_MAX_BYTES)}', code='file_too_large'
        )

    user = request.user
    previous = user.avatar_url
    user.avatar_url = storage.put(uploaded, f'avatars/{user.pk}')
    user.save(update_fields=['avatar_url', 'updated_at'])

    if previous:
        storage.delete(previous)

    return Response({
        'success': True,
        'message': 'Avatar updated successfully',
        'data': {'avatarUrl': user.avatar_url}
    })


@api_view(['POST'])
@permission_classes([IsAuthenticated])
@parser_classes([MultiPartParser, FormParser])
def upload_portfolio_file(request):
    """Attach an image or PDF to the caller's profile"""
    uploaded = _uploaded_file(request)

    if uploaded.content_type in IMAGE_TYPES:
        kind, limit = 'image', settings.PROFILE_IMAGE_MAX_BYTES
    elif uploaded.content_type in PDF_TYPES:
        kind, limit = 'pdf', settings.PROFILE_PDF_MAX_BYTES
    else:
        raise ValidationError('Only PNG, JPEG, WEBP images or PDF files are allowed', code='invalid_file_type')

    if uploaded.size > limit:
        raise ValidationError(f'{kind.upper()} files must be smaller than {_mb(limit)}', code='file_too_large')

    url = storage.put(uploaded, f'profile-files/{request.user.pk}')
    profile_file = ProfileFile.objects.create(
        user=request.user,
        name=uploaded.name,
        kind=kind,
        size=uploaded.size,
        url=url,
    )
    logger.info("User #%s uploaded %s file %s", request.user.pk, kind, profile_file.file_id)

    return Response({
        'success': True,
        'message': 'File uploaded successfully',
        'data': ProfileFileSerializer(profile_file).data
    }, status=status.HTTP_201_CREATED)


@api_view(['DELETE'])
@permission_classes([IsAuthenticated])
def delete_portfolio_file(request, file_id):
    try:
        profile_file = ProfileFile.objects.get(user=request.user, file_id=file_id)
    except ProfileFile.DoesNotExist:
        raise NotFoundError('File not found')

    url = profile_file.url
    with transaction.atomic():
        profile_file.delete()
    storage.delete(url)

    return Response({
        'success': True,
        'message': 'File deleted successfully'
    })


@api_view(['GET'])
@authentication_classes([OptionalBearerTokenAuthentication])
@permission_classes([AllowAny])
def profile_by_email(request):
    """Public view of any account, looked up by email"""
    email = normalize_email(request.query_params.get('email'))
    if not email:
        raise MissingFields(['email'], 'Email parameter is required')

    user = User.objects.filter(email=email).prefetch_related('portfolio_files').first()
    if user is None:
        raise NotFoundError('User not found')

    return Response({
        'success': True,
        'data': PublicProfileSerializer(user).data
    })
