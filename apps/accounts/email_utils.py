# apps/accounts/email_utils.py
import logging

from django.core.mail import send_mail
from django.conf import settings

logger = logging.getLogger(__name__)


def send_otp_email(email, code):
    """
    Send a registration verification code

    Args:
        email: Address the code was issued for
        code: The 6-digit passcode
    """
    subject = 'UPORT - Your verification code'

    message = f"""
Hello,

Your UPORT verification code is:

    {code}

The code expires in {settings.OTP_LIFETIME_MINUTES} minutes. If you did not request it, you can ignore this email.

Best regards,
UPORT Team
    """

    try:
        send_mail(
            subject=subject,
            message=message,
            from_email=settings.DEFAULT_FROM_EMAIL,
            recipient_list=[email],
            fail_silently=False,
        )
        logger.info("Verification code email sent to %s", email)
        return True
    except Exception:
        logger.exception("Error sending verification code email to %s", email)
        return False


def send_account_approved_email(user):
    """Tell a teacher or company that their account can now sign in"""
    subject = 'UPORT - Your account has been approved'

    name = user.company_name if user.role == user.ROLE_COMPANY and user.company_name else user.username

    message = f"""
Dear {name},

Your {user.role} account on UPORT has been approved. You can now sign in:

{settings.FRONTEND_URL}/login

Best regards,
UPORT Team
    """

    try:
        send_mail(
            subject=subject,
            message=message,
            from_email=settings.DEFAULT_FROM_EMAIL,
            recipient_list=[user.email],
            fail_silently=False,
        )
        logger.info("Approval email sent to %s", user.email)
        return True
    except Exception:
        logger.exception("Error sending approval email to %s", user.email)
        return False
