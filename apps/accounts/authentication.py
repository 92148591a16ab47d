# apps/accounts/authentication.py
import logging

from rest_framework.authentication import BaseAuthentication, get_authorization_header
from rest_framework.permissions import SAFE_METHODS

from apps.common.exceptions import AuthenticationError, AuthorizationError
from .exceptions import NoToken, UserNotFound, AccountInactive, AccountPendingApproval
from .models import User
from .tokens import verify_token

logger = logging.getLogger(__name__)


class BearerTokenAuthentication(BaseAuthentication):
    """
    Resolve ``Authorization: Bearer <token>`` to the live account.

    ``request.user`` is the freshly loaded User, ``request.auth`` the token
    claims. Role decisions must use ``request.user.role``; the role claim in
    the token is only a snapshot from when it was issued.
    """

    keyword = 'Bearer'

    def authenticate(self, request):
        raw_token = self.get_raw_token(request)
        if raw_token is None:
            return None

        claims = verify_token(raw_token)
        user = self.get_user(claims)
        return user, claims

    def authenticate_header(self, request):
        return f'{self.keyword} realm="api"'

    def get_raw_token(self, request):
        header = get_authorization_header(request).split()
        if not header or header[0].lower() != self.keyword.lower().encode():
            return None

        if len(header) != 2:
            raise NoToken('Malformed authorization header')

        try:
            return header[1].decode()
        except UnicodeError:
            raise NoToken('Malformed authorization header')

    def get_user(self, claims):
        try:
            user = User.objects.get(pk=claims['user_id'])
        except (User.DoesNotExist, ValueError, TypeError):
            raise UserNotFound()

        if not user.is_active:
            raise AccountInactive()

        if user.awaiting_approval:
            raise AccountPendingApproval()

        return user


class OptionalBearerTokenAuthentication(BearerTokenAuthentication):
    """Public read endpoints: an unusable token on a safe request means anonymous."""

    def authenticate(self, request):
        try:
            return super().authenticate(request)
        except (AuthenticationError, AuthorizationError) as e:
            if request.method not in SAFE_METHODS:
                raise
            logger.debug("Ignoring unusable token on %s %s: %s", request.method, request.path, e.error_code)
            return None
