# apps/accounts/permissions.py
from rest_framework.permissions import BasePermission

from . import policies
from .models import User


class HasRole(BasePermission):
    """Allow authenticated accounts whose live role is in ``roles``."""

    roles = ()
    message = 'You do not have permission to perform this action'

    def has_permission(self, request, view):
        decision = policies.has_role(request.user, self.roles, self.message)
        return decision.allowed


class IsAdministrator(HasRole):
    roles = (User.ROLE_ADMIN,)
    message = 'Admin access required'


class IsReviewer(HasRole):
    roles = policies.REVIEWER_ROLES
    message = 'Only admin or teacher can perform approvals'
