# apps/accounts/otp.py
"""
One-time passcode ledger used to prove ownership of an institutional email
before a student or teacher account is created.

Lifecycle of a record: issued -> verified (``is_used`` + ``verified_at``)
-> consumed by registration (``consumed_at``). A record is also retired
(``is_used`` without ``verified_at``) when it is superseded by a newer code
or runs out of attempts.
"""
import logging
from datetime import timedelta

from django.conf import settings
from django.db.models import F
from django.utils import timezone

from apps.common.exceptions import ValidationError
from .exceptions import DomainNotAllowed, InvalidOtp, TooManyAttempts
from .models import OneTimePasscode

logger = logging.getLogger(__name__)


def normalize_email(email):
    if email is None:
        return ''
    if not isinstance(email, str):
        raise ValidationError('Email must be a string', code='invalid_email')
    return email.strip().lower()


def email_in_allowed_domain(email):
    _, _, domain = normalize_email(email).rpartition('@')
    return bool(domain) and domain == settings.ALLOWED_EMAIL_DOMAIN.lower()


def issue_code(email):
    """Create a fresh passcode for ``email`` and retire any older unused one."""
    email = normalize_email(email)
    if not email_in_allowed_domain(email):
        raise DomainNotAllowed(f'Email must end with @{settings.ALLOWED_EMAIL_DOMAIN}')

    purged = OneTimePasscode.clean_expired()
    superseded = OneTimePasscode.objects.filter(email=email, is_used=False).update(is_used=True)

    record = OneTimePasscode.objects.create(
        email=email,
        code=OneTimePasscode.generate_code(),
        expires_at=timezone.now() + OneTimePasscode.lifetime(),
    )
    logger.info(
        "OTP issued for %s (purged %s expired, superseded %s)", email, purged, superseded
    )
    return record


def _retire(record):
    OneTimePasscode.objects.filter(pk=record.pk, is_used=False).update(is_used=True)


def verify_code(email, code):
    """
    Mark the matching outstanding passcode as verified.

    A wrong code counts against the newest outstanding record for the email;
    the attempt that reaches ``OTP_MAX_ATTEMPTS`` retires it for good.
    """
    email = normalize_email(email)
    code = str(code).strip()
    now = timezone.now()
    max_attempts = settings.OTP_MAX_ATTEMPTS

    outstanding = OneTimePasscode.objects.filter(email=email, is_used=False, expires_at__gt=now)
    record = outstanding.filter(code=code).first()

    if record is None:
        latest = outstanding.order_by('-created_at').first()
        if latest is None:
            logger.info("OTP verification failed for %s: no outstanding code", email)
            raise InvalidOtp()

        OneTimePasscode.objects.filter(pk=latest.pk).update(attempts=F('attempts') + 1)
        latest.refresh_from_db(fields=['attempts'])
        if latest.attempts >= max_attempts:
            _retire(latest)
            logger.warning("OTP for %s retired after %s failed attempts", email, latest.attempts)
            raise TooManyAttempts()

        logger.info("OTP verification failed for %s (attempt %s)", email, latest.attempts)
        raise InvalidOtp()

    if record.attempts >= max_attempts:
        _retire(record)
        raise TooManyAttempts()

    verified = OneTimePasscode.objects.filter(pk=record.pk, is_used=False).update(
        is_used=True, verified_at=now
    )
    if not verified:
        raise InvalidOtp()

    logger.info("OTP verified for %s", email)
    return record


def consume_verification(email):
    """
    Redeem a recent verification for ``email``; return True on success.

    Each verification can be redeemed once. Call inside the registration
    transaction so a failed registration gives the verification back.
    """
    email = normalize_email(email)
    now = timezone.now()
    window_start = now - timedelta(minutes=settings.OTP_VERIFICATION_WINDOW_MINUTES)

    candidate = (
        OneTimePasscode.objects
        .filter(email=email, verified_at__gte=window_start, consumed_at__isnull=True)
        .order_by('-verified_at')
        .values_list('pk', flat=True)
        .first()
    )
    if candidate is None:
        return False

    return bool(
        OneTimePasscode.objects
        .filter(pk=candidate, consumed_at__isnull=True)
        .update(consumed_at=now)
    )
