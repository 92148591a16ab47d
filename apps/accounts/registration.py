# apps/accounts/registration.py
import logging

from django.conf import settings
from django.db import IntegrityError, transaction

from apps.common.exceptions import ValidationError, require_fields
from .exceptions import (
    PasswordMismatch,
    PasswordTooShort,
    DomainNotAllowed,
    InvalidAccountKind,
    OtpNotVerified,
    DuplicateAccount,
)
from .models import User
from .otp import normalize_email, email_in_allowed_domain, consume_verification
from .serializers import ProfileSerializer

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6
USERNAME_LENGTH = (3, 30)

ACCOUNT_KINDS = (User.ROLE_STUDENT, User.ROLE_TEACHER, User.ROLE_COMPANY)
# Institutional accounts prove their address through the OTP ledger.
DOMAIN_BOUND_KINDS = (User.ROLE_STUDENT, User.ROLE_TEACHER)


def resolve_account_kind(data):
    kind = data.get('accountKind') or data.get('userType') or User.ROLE_STUDENT
    kind = str(kind).strip().lower()
    if kind not in ACCOUNT_KINDS:
        raise InvalidAccountKind()
    return kind


def find_duplicate_field(email, username, exclude_pk=None):
    accounts = User.objects.all()
    if exclude_pk is not None:
        accounts = accounts.exclude(pk=exclude_pk)
    if accounts.filter(email__iexact=email).exists():
        return 'email'
    if accounts.filter(username__iexact=username).exists():
        return 'username'
    return None


def register_account(data):
    """
    Create an account from a registration payload and return the new User.

    The role comes only from ``accountKind``; any ``role`` or approval flag
    in the payload is dropped. Teachers and companies start behind their
    approval gate.
    """
    require_fields(data, ('email', 'username', 'password'))

    email = normalize_email(data.get('email'))
    username = str(data.get('username')).strip()
    password = str(data.get('password'))
    confirm_password = data.get('confirmPassword')

    if confirm_password is not None and str(confirm_password) != password:
        raise PasswordMismatch()

    if len(password) < MIN_PASSWORD_LENGTH:
        raise PasswordTooShort()

    low, high = USERNAME_LENGTH
    if not low <= len(username) <= high:
        raise ValidationError(
            f'Username must be between {low} and {high} characters', code='invalid_username'
        )

    kind = resolve_account_kind(data)

    if kind in DOMAIN_BOUND_KINDS and not email_in_allowed_domain(email):
        raise DomainNotAllowed(f'Email must end with @{settings.ALLOWED_EMAIL_DOMAIN}')

    profile = ProfileSerializer(data=data)
    profile.is_valid(raise_exception=True)

    with transaction.atomic():
        if kind in DOMAIN_BOUND_KINDS and not consume_verification(email):
            raise OtpNotVerified()

        duplicate = find_duplicate_field(email, username)
        if duplicate:
            raise DuplicateAccount(duplicate)

        user = User(
            email=email,
            username=username,
            role=kind,
            is_active=True,
            teacher_confirmed=False,
            company_approved=False,
        )
        for attr, value in profile.validated_data.items():
            setattr(user, attr, value)
        user.set_password(password)

        try:
            with transaction.atomic():
                user.save()
        except IntegrityError:
            raise DuplicateAccount(find_duplicate_field(email, username) or 'email')

    logger.info("Registered %s account #%s (%s)", kind, user.pk, email)
    return user
