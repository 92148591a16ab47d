# apps/accounts/admin_views.py
import logging

from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from rest_framework import status
from django.db import IntegrityError, transaction
from django.utils import timezone

from apps.common.exceptions import (
    NotFoundError,
    ValidationError,
    MissingFields,
    require_fields,
    parse_id,
)
from . import policies
from .exceptions import SelfActionForbidden, DuplicateAccount
from .models import User
from .otp import normalize_email
from .permissions import IsAdministrator, IsReviewer
from .registration import find_duplicate_field
from .serializers import AccountSerializer, AccountSummarySerializer
from .workflows import teacher_confirmation, company_approval

logger = logging.getLogger(__name__)


def _get_user(user_id):
    try:
        return User.objects.get(pk=parse_id(user_id, 'userId'))
    except User.DoesNotExist:
        raise NotFoundError('User not found')


# ---------------------------------------------------------------------------
# User management
# ---------------------------------------------------------------------------

@api_view(['GET'])
@permission_classes([IsAdministrator])
def list_users(request):
    """Get all accounts, newest first"""
    users = User.objects.select_related('confirmed_by', 'approved_by').prefetch_related('portfolio_files')
    serializer = AccountSerializer(users, many=True)

    return Response({
        'success': True,
        'count': len(serializer.data),
        'data': serializer.data
    })


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAdministrator])
def user_detail(request, user_id):
    user = _get_user(user_id)

    if request.method == 'GET':
        return Response({
            'success': True,
            'data': AccountSerializer(user).data
        })

    if request.method == 'PUT':
        return _update_identity(request, user)

    if request.method == 'PATCH':
        return _set_active(request, user)

    if policies.is_self(request.user, user):
        raise SelfActionForbidden('You cannot delete your own account')
    policies.can_delete_account(request.user, user).enforce()

    user_email = user.email
    user.delete()
    logger.info("Admin #%s deleted user #%s (%s)", request.user.pk, user_id, user_email)

    return Response({
        'success': True,
        'message': 'User deleted successfully'
    })


def _update_identity(request, user):
    """Only username and email are editable here; role has its own endpoint."""
    username = request.data.get('username')
    email = request.data.get('email')
    if username is None and email is None:
        raise MissingFields(['username', 'email'], 'Username or email is required')

    username = str(username).strip() if username is not None else user.username
    email = normalize_email(email) if email is not None else user.email
    if not username or not email:
        raise ValidationError('Username and email cannot be blank')

    duplicate = find_duplicate_field(email, username, exclude_pk=user.pk)
    if duplicate:
        raise DuplicateAccount(duplicate)

    user.username = username
    user.email = email
    try:
        with transaction.atomic():
            user.save(update_fields=['username', 'email', 'updated_at'])
    except IntegrityError:
        raise DuplicateAccount(find_duplicate_field(email, username, exclude_pk=user.pk) or 'email')

    logger.info("Admin #%s updated user #%s", request.user.pk, user.pk)
    return Response({
        'success': True,
        'message': 'User updated successfully',
        'data': AccountSerializer(user).data
    })


def _set_active(request, user):
    """Set ``isActive`` explicitly, or toggle it when omitted."""
    if policies.is_self(request.user, user):
        raise SelfActionForbidden('You cannot change the status of your own account')

    is_active = request.data.get('isActive')
    if is_active is None:
        is_active = not user.is_active
    elif not isinstance(is_active, bool):
        raise ValidationError('isActive must be a boolean')

    user.is_active = is_active
    user.save(update_fields=['is_active', 'updated_at'])
    logger.info(
        "Admin #%s %s user #%s", request.user.pk, 'activated' if is_active else 'deactivated', user.pk
    )

    return Response({
        'success': True,
        'message': f"User {'activated' if is_active else 'deactivated'} successfully",
        'data': AccountSerializer(user).data
    })


@api_view(['POST'])
@permission_classes([IsAdministrator])
def update_user_role(request):
    """Change an account's role; the only place a role can change"""
    user_id = request.data.get('userId')
    email = request.data.get('email')
    if user_id is None and not email:
        raise MissingFields(['userId'], 'userId or email is required')

    new_role = str(request.data.get('newRole') or User.ROLE_ADMIN).strip().lower()
    if new_role not in dict(User.ROLE_CHOICES):
        raise ValidationError('Invalid role', code='invalid_role')

    if user_id is not None:
        user = _get_user(user_id)
    else:
        user = User.objects.filter(email=normalize_email(email)).first()
        if user is None:
            raise NotFoundError('User not found')

    if policies.is_self(request.user, user):
        raise SelfActionForbidden('You cannot change your own role')
    policies.can_change_role(request.user, user, new_role).enforce()

    now = timezone.now()
    old_role = user.role
    user.role = new_role
    update_fields = ['role', 'updated_at']

    # An admin promotion counts as the approval for gated roles.
    if new_role == User.ROLE_TEACHER and not user.teacher_confirmed:
        user.teacher_confirmed = True
        user.confirmed_by = request.user
        user.confirmed_at = now
        update_fields += ['teacher_confirmed', 'confirmed_by', 'confirmed_at']
    elif new_role == User.ROLE_COMPANY and not user.company_approved:
        user.company_approved = True
        user.approved_by = request.user
        user.approved_at = now
        update_fields += ['company_approved', 'approved_by', 'approved_at']

    user.save(update_fields=update_fields)
    logger.info("Admin #%s changed role of user #%s: %s -> %s", request.user.pk, user.pk, old_role, new_role)

    return Response({
        'success': True,
        'message': f'User role updated to {new_role}',
        'data': AccountSerializer(user).data
    })


# ---------------------------------------------------------------------------
# Account confirmation queues
# ---------------------------------------------------------------------------

def _pending_response(workflow):
    accounts = AccountSummarySerializer(workflow.pending(), many=True).data
    return Response({
        'success': True,
        'count': len(accounts),
        'data': accounts
    })


def _transition_response(workflow, request, id_field):
    require_fields(request.data, (id_field, 'action'))
    target_id = parse_id(request.data.get(id_field), id_field)

    outcome, target = workflow.transition(target_id, request.data.get('action'), request.user)

    body = {
        'success': True,
        'message': f'{workflow.label} {outcome} successfully',
    }
    if target is not None:
        body['data'] = AccountSerializer(target).data
    return Response(body, status=status.HTTP_200_OK)


@api_view(['GET'])
@permission_classes([IsAdministrator])
def pending_teachers(request):
    return _pending_response(teacher_confirmation)


@api_view(['POST'])
@permission_classes([IsAdministrator])
def confirm_teacher(request):
    """Accept or reject a pending teacher"""
    return _transition_response(teacher_confirmation, request, 'teacherId')


@api_view(['GET'])
@permission_classes([IsAdministrator])
def pending_companies(request):
    return _pending_response(company_approval)


@api_view(['POST'])
@permission_classes([IsAdministrator])
def confirm_company(request):
    """Accept or reject a pending company"""
    return _transition_response(company_approval, request, 'companyId')


@api_view(['GET', 'POST'])
@permission_classes([IsReviewer])
def teacher_confirmations(request):
    """Teacher confirmation queue for admins and confirmed teachers"""
    if request.method == 'GET':
        return _pending_response(teacher_confirmation)
    return _transition_response(teacher_confirmation, request, 'teacherId')


@api_view(['GET', 'POST'])
@permission_classes([IsReviewer])
def company_approvals(request):
    """Company approval queue for admins and confirmed teachers"""
    if request.method == 'GET':
        return _pending_response(company_approval)
    return _transition_response(company_approval, request, 'companyId')
