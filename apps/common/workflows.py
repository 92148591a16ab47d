# apps/common/workflows.py
"""
Pending -> accepted / rejected state machine shared by account confirmation,
company approval and portfolio approval.

Every transition is one conditional write against rows that are still
pending, so two reviewers racing on the same target cannot both succeed: the
loser updates zero rows and gets ``AlreadyProcessed``.
"""
import logging

from django.db import transaction
from django.utils import timezone

from .exceptions import InvalidAction, AlreadyProcessed

logger = logging.getLogger(__name__)

ACCEPTED = 'accepted'
REJECTED = 'rejected'


class ApprovalWorkflow:
    name = 'approval'
    label = 'Record'
    accept_actions = ('accept', 'approve')
    reject_actions = ('reject',)

    def get_queryset(self):
        raise NotImplementedError

    def pending_filter(self):
        raise NotImplementedError

    def accept_values(self, actor, now):
        raise NotImplementedError

    def reject(self, queryset, actor, now):
        """Apply the rejection to ``queryset``; return the number of targets affected."""
        raise NotImplementedError

    def authorize(self, actor):
        """Raise when ``actor`` may not drive this workflow."""

    def on_accepted(self, target, actor):
        pass

    def pending(self):
        return self.get_queryset().filter(**self.pending_filter())

    def parse_action(self, action):
        action = (action or '').strip().lower()
        if action in self.accept_actions:
            return ACCEPTED
        if action in self.reject_actions:
            return REJECTED
        allowed = '", "'.join(self.accept_actions + self.reject_actions)
        raise InvalidAction(f'Action must be one of "{allowed}"')

    def transition(self, target_id, action, actor):
        """
        Move a pending target to its terminal state.

        Returns ``(outcome, target)`` where ``target`` is the refreshed
        instance after an accept and ``None`` when a rejection removed it.
        """
        self.authorize(actor)
        outcome = self.parse_action(action)
        now = timezone.now()

        with transaction.atomic():
            candidates = self.pending().filter(pk=target_id)
            if outcome == ACCEPTED:
                changed = candidates.update(**self.accept_values(actor, now))
            else:
                changed = self.reject(candidates, actor, now)

            if not changed:
                raise AlreadyProcessed(f'{self.label} not found or already processed')

            target = self.get_queryset().filter(pk=target_id).first()

        logger.info(
            "%s: %s #%s %s by user #%s", self.name, self.label, target_id, outcome, actor.pk
        )
        if outcome == ACCEPTED and target is not None:
            self.on_accepted(target, actor)
        return outcome, target
