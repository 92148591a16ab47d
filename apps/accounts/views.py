# apps/accounts/views.py
import logging

from rest_framework.decorators import api_view, authentication_classes, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework import status

from apps.common.exceptions import require_fields
from .email_utils import send_otp_email
from .exceptions import InvalidCredentials, AccountPendingApproval, EmailDeliveryFailed
from .models import User
from .otp import normalize_email, issue_code, verify_code
from .registration import register_account
from .serializers import AccountSerializer
from .tokens import issue_token

logger = logging.getLogger(__name__)


def _session_payload(user):
    return {
        'user': AccountSerializer(user).data,
        'token': issue_token(user),
    }


@api_view(['POST'])
@authentication_classes([])
@permission_classes([AllowAny])
def register_view(request):
    """Create a student, teacher or company account"""
    user = register_account(request.data)

    message = 'User registered successfully'
    if user.awaiting_approval:
        message = 'Registration successful. Wait for a teacher or administrator to approve your account.'

    return Response({
        'success': True,
        'message': message,
        'data': _session_payload(user)
    }, status=status.HTTP_201_CREATED)


@api_view(['POST'])
@authentication_classes([])
@permission_classes([AllowAny])
def login_view(request):
    require_fields(request.data, ('email', 'password'))

    email = normalize_email(request.data.get('email'))
    password = request.data.get('password')

    user = User.objects.filter(email=email).first()
    if user is None or not user.is_active or not user.check_password(password):
        logger.info("Failed login for %s", email)
        raise InvalidCredentials()

    if user.awaiting_approval:
        raise AccountPendingApproval()

    logger.info("User #%s logged in", user.pk)
    return Response({
        'success': True,
        'message': 'Login successful',
        'data': _session_payload(user)
    }, status=status.HTTP_200_OK)


@api_view(['POST'])
@authentication_classes([])
@permission_classes([AllowAny])
def send_otp_view(request):
    """Email a verification code to an institutional address"""
    require_fields(request.data, ('email',))

    record = issue_code(request.data.get('email'))
    if not send_otp_email(record.email, record.code):
        raise EmailDeliveryFailed()

    return Response({
        'success': True,
        'message': 'OTP sent to your email',
        'data': {
            'email': record.email,
            'expiresAt': record.expires_at,
        }
    })


@api_view(['POST'])
@authentication_classes([])
@permission_classes([AllowAny])
def verify_otp_view(request):
    require_fields(request.data, ('email', 'otp'))

    record = verify_code(request.data.get('email'), request.data.get('otp'))

    return Response({
        'success': True,
        'message': 'Email verified successfully',
        'data': {
            'email': record.email,
            'verified': True,
        }
    })
