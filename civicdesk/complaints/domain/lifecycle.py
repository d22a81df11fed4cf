"""
Complaint Lifecycle
===================

Finite state machine for complaint statuses:

    New -> Seen -> Assigned -> In Progress -> Completed -> Closed

Strictly linear: one successor per state, no skips, no cycles, and Closed
is terminal. Invalid requests are rejected, never clamped to the nearest
legal state.
"""

from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import FrozenSet, Optional, Tuple, Union

from civicdesk.complaints.domain.entities import Actor, Complaint
from civicdesk.config import ComplaintStatus
from civicdesk.core import ApplicationException, InvalidTransitionException, UnauthorizedException

WORKFLOW: Tuple[ComplaintStatus, ...] = (
    ComplaintStatus.NEW,
    ComplaintStatus.SEEN,
    ComplaintStatus.ASSIGNED,
    ComplaintStatus.IN_PROGRESS,
    ComplaintStatus.COMPLETED,
    ComplaintStatus.CLOSED,
)

_SUCCESSOR = {current: nxt for current, nxt in zip(WORKFLOW, WORKFLOW[1:])}

StatusLike = Union[ComplaintStatus, str]


@dataclass(frozen=True)
class TransitionResult:
    """
    Outcome of a status update request.

    Exactly one of `complaint` (the updated record) or `error` is set.
    """
    complaint: Optional[Complaint] = None
    error: Optional[ApplicationException] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Complaint:
        """Return the updated complaint or raise the carried error."""
        if self.error is not None:
            raise self.error
        return self.complaint


class ComplaintLifecycle:
    """Stateless transition rules."""

    @staticmethod
    def get_next_statuses(current: StatusLike) -> FrozenSet[ComplaintStatus]:
        """The single successor of `current`, or nothing for Closed."""
        successor = _SUCCESSOR.get(ComplaintStatus(current))
        return frozenset({successor}) if successor else frozenset()

    @classmethod
    def validate_transition(
        cls,
        complaint: Complaint,
        requested: StatusLike
    ) -> Optional[InvalidTransitionException]:
        """Return the rejection for an illegal request, or None."""
        allowed = cls.get_next_statuses(complaint.status)
        try:
            requested_status = ComplaintStatus(requested)
        except ValueError:
            requested_status = None

        if requested_status in allowed:
            return None
        return InvalidTransitionException(
            complaint_id=complaint.id,
            current_status=complaint.status.value,
            requested_status=str(getattr(requested, "value", requested)),
            allowed=[s.value for s in allowed],
        )

    @staticmethod
    def authorize(actor: Actor, complaint: Complaint) -> Optional[UnauthorizedException]:
        """Only the complaint's own department may advance it."""
        if actor.can_edit_department == complaint.department:
            return None
        return UnauthorizedException(actor.username, complaint.department)

    @classmethod
    def apply_transition(
        cls,
        complaint: Complaint,
        new_status: StatusLike,
        worker_notes: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> Complaint:
        """
        Produce the complaint after a legal transition.

        Blank notes keep the existing note. The input is left untouched.

        Raises:
            InvalidTransitionException: If the caller skipped validation
        """
        error = cls.validate_transition(complaint, new_status)
        if error is not None:
            raise error

        notes = worker_notes if worker_notes and worker_notes.strip() else complaint.worker_notes
        return replace(
            complaint,
            status=ComplaintStatus(new_status),
            worker_notes=notes,
            updated_at=now or datetime.now(timezone.utc),
            version=complaint.version + 1,
        )

    @classmethod
    def transition(
        cls,
        actor: Actor,
        complaint: Complaint,
        requested: StatusLike,
        worker_notes: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> TransitionResult:
        """Authorize, validate and apply a status change."""
        error = cls.authorize(actor, complaint)
        if error is None:
            error = cls.validate_transition(complaint, requested)
        if error is not None:
            return TransitionResult(error=error)
        return TransitionResult(
            complaint=cls.apply_transition(complaint, requested, worker_notes, now)
        )


def get_next_statuses(current: StatusLike) -> FrozenSet[ComplaintStatus]:
    return ComplaintLifecycle.get_next_statuses(current)
