# apps/portfolios/workflows.py
from apps.accounts import policies
from apps.common.workflows import ApprovalWorkflow
from .models import Portfolio


class PortfolioApproval(ApprovalWorkflow):
    """Publishes a pending portfolio or marks it rejected; both stamp the reviewer."""

    name = 'portfolio_approval'
    label = 'Portfolio'

    def get_queryset(self):
        return Portfolio.objects.all()

    def pending_filter(self):
        return {'status': Portfolio.STATUS_PENDING}

    def authorize(self, actor):
        policies.can_review(actor).enforce()

    def _review_values(self, status, actor, now):
        return {
            'status': status,
            'approved_by': actor,
            'approved_at': now,
            'updated_at': now,
        }

    def accept_values(self, actor, now):
        return self._review_values(Portfolio.STATUS_APPROVED, actor, now)

    def reject(self, queryset, actor, now):
        return queryset.update(**self._review_values(Portfolio.STATUS_REJECTED, actor, now))


portfolio_approval = PortfolioApproval()
