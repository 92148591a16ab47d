# apps/accounts/tokens.py
"""Session tokens: SimpleJWT access tokens carrying the account identity."""
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import AccessToken

from .exceptions import InvalidToken

IDENTITY_CLAIMS = ('email', 'username', 'role')


def issue_token(user):
    """Mint a signed token for ``user``; lifetime comes from ``SIMPLE_JWT``."""
    token = AccessToken.for_user(user)
    for claim in IDENTITY_CLAIMS:
        token[claim] = getattr(user, claim)
    return str(token)


def verify_token(raw_token):
    """
    Return the claims of a valid token.

    Raises InvalidToken for a bad signature, a malformed payload, a token of
    another type, or an expired token.
    """
    try:
        token = AccessToken(raw_token)
    except TokenError as e:
        raise InvalidToken() from e

    claims = dict(token.payload)
    if 'user_id' not in claims:
        raise InvalidToken('Invalid token payload')
    return claims
