# apps/accounts/exceptions.py
from apps.common.exceptions import (
    ValidationError,
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    InternalError,
)


class PasswordMismatch(ValidationError):
    default_detail = 'Passwords do not match'
    default_code = 'password_mismatch'


class PasswordTooShort(ValidationError):
    default_detail = 'Password must be at least 6 characters'
    default_code = 'password_too_short'


class DomainNotAllowed(ValidationError):
    default_detail = 'Email domain is not allowed'
    default_code = 'domain_not_allowed'


class InvalidAccountKind(ValidationError):
    default_detail = 'Account kind must be "student", "teacher" or "company"'
    default_code = 'invalid_account_kind'


class OtpNotVerified(ValidationError):
    default_detail = 'Email must be verified with OTP before registration'
    default_code = 'otp_not_verified'


class InvalidOtp(ValidationError):
    default_detail = 'Invalid or expired OTP'
    default_code = 'invalid_otp'


class TooManyAttempts(ValidationError):
    default_detail = 'Too many attempts. Please request a new OTP.'
    default_code = 'too_many_attempts'


class NoToken(AuthenticationError):
    default_detail = 'Authorization token required'
    default_code = 'no_token'


class InvalidToken(AuthenticationError):
    default_detail = 'Invalid or expired token'
    default_code = 'invalid_token'


class UserNotFound(AuthenticationError):
    default_detail = 'User not found'
    default_code = 'user_not_found'


class AccountInactive(AuthenticationError):
    default_detail = 'Account is disabled'
    default_code = 'account_inactive'


class InvalidCredentials(AuthenticationError):
    default_detail = 'Invalid email or password'
    default_code = 'invalid_credentials'


class AccountPendingApproval(AuthorizationError):
    default_detail = 'Wait for a teacher or administrator to approve your account.'
    default_code = 'account_pending_approval'


class SelfActionForbidden(AuthorizationError):
    default_detail = 'You cannot perform this action on your own account'
    default_code = 'self_action_forbidden'


class DuplicateAccount(ConflictError):
    default_code = 'duplicate_account'

    def __init__(self, field):
        super().__init__(f'{field} already exists', field=field)


class EmailDeliveryFailed(InternalError):
    default_detail = 'Failed to send email. Please try again later.'
    default_code = 'email_delivery_failed'
