# apps/common/exceptions.py
"""
Error taxonomy shared by every API view.

Views raise these exceptions; ``envelope_exception_handler`` (wired through
``REST_FRAMEWORK['EXCEPTION_HANDLER']``) renders them, and anything else that
escapes a view, as ``{'success': False, 'error': <code>, 'message': <text>}``.
"""
import logging

from django.core.exceptions import PermissionDenied
from django.http import Http404
from rest_framework import exceptions, status
from rest_framework.response import Response

logger = logging.getLogger(__name__)


class ServiceError(exceptions.APIException):
    """Base class: a stable error code plus a human readable message."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Request failed'
    default_code = 'error'

    def __init__(self, detail=None, code=None, **extra):
        super().__init__(detail, code)
        self.error_code = code or self.default_code
        self.extra = extra


class ValidationError(ServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Invalid request'
    default_code = 'validation_error'


class AuthenticationError(ServiceError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = 'Authentication required'
    default_code = 'authentication_failed'


class AuthorizationError(ServiceError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = 'You do not have permission to perform this action'
    default_code = 'forbidden'


class NotFoundError(ServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'Not found'
    default_code = 'not_found'


class ConflictError(ServiceError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'Conflict'
    default_code = 'conflict'


class InternalError(ServiceError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = 'An unexpected error occurred'
    default_code = 'internal_error'


class MissingFields(ValidationError):
    default_code = 'missing_fields'

    def __init__(self, fields, detail=None):
        super().__init__(
            detail or f"Missing required fields: {', '.join(fields)}",
            missingFields=list(fields),
        )


class InvalidAction(ValidationError):
    default_code = 'invalid_action'


class Forbidden(AuthorizationError):
    default_code = 'forbidden'


class AlreadyProcessed(NotFoundError):
    default_detail = 'Not found or already processed'
    default_code = 'already_processed'


def require_fields(data, fields):
    """Raise MissingFields for every name in ``fields`` that is absent or blank."""
    missing = []
    for field in fields:
        value = data.get(field)
        if value is None or (isinstance(value, str) and not value.strip()):
            missing.append(field)
    if missing:
        raise MissingFields(missing)


def parse_id(value, label='id'):
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f'{label} must be a number', code='invalid_id')


# DRF's own exceptions keep their status, but get a stable code here.
_DRF_CODES = (
    (exceptions.NotAuthenticated, 'no_token'),
    (exceptions.AuthenticationFailed, 'invalid_token'),
    (exceptions.PermissionDenied, 'forbidden'),
    (exceptions.NotFound, 'not_found'),
    (exceptions.MethodNotAllowed, 'method_not_allowed'),
    (exceptions.ParseError, 'malformed_request'),
    (exceptions.UnsupportedMediaType, 'unsupported_media_type'),
    (exceptions.ValidationError, 'validation_error'),
    (Http404, 'not_found'),
    (PermissionDenied, 'forbidden'),
)


def _error_code(exc):
    if isinstance(exc, ServiceError):
        return exc.error_code
    for exc_class, code in _DRF_CODES:
        if isinstance(exc, exc_class):
            return code
    return getattr(exc, 'default_code', 'error')


def envelope_exception_handler(exc, context):
    # rest_framework.views loads the authentication classes from settings,
    # which import this module.
    from rest_framework.views import exception_handler

    response = exception_handler(exc, context)

    if response is None:
        view = context.get('view')
        logger.exception(
            "Unhandled error in %s", view.__class__.__name__ if view else 'unknown view'
        )
        return Response({
            'success': False,
            'error': InternalError.default_code,
            'message': InternalError.default_detail,
        }, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    body = {
        'success': False,
        'error': _error_code(exc),
    }

    if isinstance(exc, exceptions.ValidationError):
        body['message'] = 'Validation failed'
        body['errors'] = response.data
    elif isinstance(exc, exceptions.NotAuthenticated):
        body['message'] = 'Authorization token required'
    else:
        body['message'] = str(exc.detail) if hasattr(exc, 'detail') else str(exc)

    if isinstance(exc, ServiceError):
        body.update(exc.extra)
        if exc.status_code >= 500:
            logger.error("%s: %s", exc.error_code, body['message'])

    response.data = body
    return response
