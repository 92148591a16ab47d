# apps/accounts/policies.py
"""
Authorization policy: every role and ownership rule lives here.

Each predicate returns a ``Decision``; handlers either branch on
``decision.allowed`` (e.g. to compute ``canDelete``) or call
``decision.enforce()`` to turn a denial into a 403.
"""
from typing import NamedTuple

from apps.common.exceptions import Forbidden
from .models import User

REVIEWER_ROLES = (User.ROLE_ADMIN, User.ROLE_TEACHER)


class Decision(NamedTuple):
    allowed: bool
    reason: str = ''

    def __bool__(self):
        return self.allowed

    def enforce(self, exc_class=Forbidden):
        if not self.allowed:
            raise exc_class(self.reason or None)
        return self


ALLOW = Decision(True)


def _is_user(user):
    return user is not None and getattr(user, 'is_authenticated', False)


def has_role(user, roles, reason='You do not have permission to perform this action'):
    if _is_user(user) and user.role in roles:
        return ALLOW
    return Decision(False, reason)


def is_admin(user):
    return has_role(user, (User.ROLE_ADMIN,), 'Admin access required')


def can_review(user):
    """Admins and teachers confirm accounts and approve portfolios."""
    return has_role(user, REVIEWER_ROLES, 'Only admin or teacher can perform approvals')


def _owns(user, portfolio):
    return _is_user(user) and portfolio.submitted_by_id is not None and portfolio.submitted_by_id == user.pk


def can_view_portfolio(user, portfolio):
    if portfolio.status == portfolio.STATUS_APPROVED:
        return ALLOW
    if can_review(user) or _owns(user, portfolio):
        return ALLOW
    return Decision(False, 'Portfolio not found')


def can_modify_portfolio(user, portfolio):
    if _owns(user, portfolio) or is_admin(user):
        return ALLOW
    return Decision(False, 'You do not have permission to modify this portfolio')


def can_delete_comment(user, comment):
    if not _is_user(user):
        return Decision(False, 'Authentication required')
    if comment.author_id is not None and comment.author_id == user.pk:
        return ALLOW
    if _owns(user, comment.portfolio) or is_admin(user):
        return ALLOW
    return Decision(False, 'You do not have permission to delete this comment')


def is_self(actor, target):
    return _is_user(actor) and actor.pk == target.pk


def can_delete_account(actor, target):
    """Admins delete accounts, never their own and never another admin's."""
    decision = is_admin(actor)
    if not decision:
        return decision
    if is_self(actor, target):
        return Decision(False, 'You cannot delete your own account')
    if target.role == User.ROLE_ADMIN:
        return Decision(False, 'Cannot delete admin users')
    return ALLOW


def can_change_role(actor, target, new_role):
    """Admins change roles, but never demote another admin."""
    decision = is_admin(actor)
    if not decision:
        return decision
    if target.role == User.ROLE_ADMIN and new_role != User.ROLE_ADMIN:
        return Decision(False, 'Cannot change the role of an admin user')
    return ALLOW
