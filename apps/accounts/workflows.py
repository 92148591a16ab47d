# apps/accounts/workflows.py
from apps.common.workflows import ApprovalWorkflow
from . import policies
from .email_utils import send_account_approved_email
from .models import User


class AccountGateWorkflow(ApprovalWorkflow):
    """
    Opens the sign-in gate of a teacher or company account.

    Accepting sets the gate flag and stamps the reviewer; rejecting deletes
    the pending account.
    """

    role = None
    gate_field = None
    actor_field = None
    stamp_field = None

    def get_queryset(self):
        return User.objects.filter(role=self.role)

    def pending_filter(self):
        return {self.gate_field: False}

    def authorize(self, actor):
        policies.can_review(actor).enforce()

    def accept_values(self, actor, now):
        return {
            self.gate_field: True,
            self.actor_field: actor,
            self.stamp_field: now,
            'is_active': True,
            'updated_at': now,
        }

    def reject(self, queryset, actor, now):
        _, deleted = queryset.delete()
        return deleted.get(User._meta.label, 0)

    def on_accepted(self, target, actor):
        send_account_approved_email(target)


class TeacherConfirmation(AccountGateWorkflow):
    name = 'teacher_confirmation'
    label = 'Teacher'
    role = User.ROLE_TEACHER
    gate_field = 'teacher_confirmed'
    actor_field = 'confirmed_by'
    stamp_field = 'confirmed_at'


class CompanyApproval(AccountGateWorkflow):
    name = 'company_approval'
    label = 'Company'
    role = User.ROLE_COMPANY
    gate_field = 'company_approved'
    actor_field = 'approved_by'
    stamp_field = 'approved_at'


teacher_confirmation = TeacherConfirmation()
company_approval = CompanyApproval()
