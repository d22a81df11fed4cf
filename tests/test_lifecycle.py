"""Tests for the complaint status state machine."""

from datetime import timedelta

import pytest

from conftest import make_complaint
from civicdesk.complaints.domain import WORKFLOW, ComplaintLifecycle, get_next_statuses
from civicdesk.config import ComplaintStatus
from civicdesk.core import InvalidTransitionException, UnauthorizedException


class TestNextStatuses:
    """Successor lookup."""

    @pytest.mark.parametrize("current,expected", [
        (ComplaintStatus.NEW, ComplaintStatus.SEEN),
        (ComplaintStatus.SEEN, ComplaintStatus.ASSIGNED),
        (ComplaintStatus.ASSIGNED, ComplaintStatus.IN_PROGRESS),
        (ComplaintStatus.IN_PROGRESS, ComplaintStatus.COMPLETED),
        (ComplaintStatus.COMPLETED, ComplaintStatus.CLOSED),
    ])
    def test_single_successor(self, current, expected):
        assert get_next_statuses(current) == frozenset({expected})

    def test_closed_is_terminal(self):
        assert get_next_statuses(ComplaintStatus.CLOSED) == frozenset()

    def test_accepts_plain_strings(self):
        assert get_next_statuses("In Progress") == frozenset({ComplaintStatus.COMPLETED})

    def test_full_walk_reaches_closed(self):
        status = ComplaintStatus.NEW
        visited = [status]
        while get_next_statuses(status):
            (status,) = get_next_statuses(status)
            visited.append(status)
        assert tuple(visited) == WORKFLOW


class TestValidateTransition:
    """Rejections are returned, never raised or clamped."""

    def test_valid_step(self):
        complaint = make_complaint("c1")
        assert ComplaintLifecycle.validate_transition(complaint, ComplaintStatus.SEEN) is None

    def test_skip_is_rejected(self):
        complaint = make_complaint("c1")
        error = ComplaintLifecycle.validate_transition(complaint, ComplaintStatus.ASSIGNED)

        assert isinstance(error, InvalidTransitionException)
        assert error.current_status == "New"
        assert error.requested_status == "Assigned"
        assert error.allowed == ["Seen"]

    def test_backwards_is_rejected(self):
        complaint = make_complaint("c1", status=ComplaintStatus.ASSIGNED)
        assert ComplaintLifecycle.validate_transition(complaint, ComplaintStatus.NEW) is not None

    def test_same_status_is_rejected(self):
        complaint = make_complaint("c1", status=ComplaintStatus.SEEN)
        assert ComplaintLifecycle.validate_transition(complaint, ComplaintStatus.SEEN) is not None

    def test_unknown_status_is_rejected(self):
        complaint = make_complaint("c1")
        error = ComplaintLifecycle.validate_transition(complaint, "Escalated")
        assert error.requested_status == "Escalated"

    def test_closed_rejects_everything(self):
        complaint = make_complaint("c1", status=ComplaintStatus.CLOSED)
        for status in ComplaintStatus:
            assert ComplaintLifecycle.validate_transition(complaint, status) is not None


class TestApplyTransition:
    """State changes on a legal step."""

    def test_updates_status_timestamp_and_version(self, now):
        complaint = make_complaint("c1", created_at=now - timedelta(hours=3))
        updated = ComplaintLifecycle.apply_transition(complaint, ComplaintStatus.SEEN, now=now)

        assert updated.status == ComplaintStatus.SEEN
        assert updated.updated_at == now
        assert updated.version == complaint.version + 1
        assert complaint.status == ComplaintStatus.NEW

    def test_notes_replaced_when_given(self, now):
        complaint = make_complaint("c1", created_at=now, worker_notes="old")
        updated = ComplaintLifecycle.apply_transition(complaint, "Seen", "crew booked", now)
        assert updated.worker_notes == "crew booked"

    @pytest.mark.parametrize("notes", [None, "", "   "])
    def test_blank_notes_keep_existing(self, now, notes):
        complaint = make_complaint("c1", created_at=now, worker_notes="old")
        updated = ComplaintLifecycle.apply_transition(complaint, "Seen", notes, now)
        assert updated.worker_notes == "old"

    def test_illegal_step_raises(self, now):
        complaint = make_complaint("c1", created_at=now)
        with pytest.raises(InvalidTransitionException):
            ComplaintLifecycle.apply_transition(complaint, ComplaintStatus.CLOSED, now=now)


class TestTransition:
    """Authorization plus validation."""

    def test_department_sub_admin_may_advance(self, water_admin, now):
        complaint = make_complaint("c1", "Water", created_at=now)
        result = ComplaintLifecycle.transition(water_admin, complaint, "Seen", now=now)

        assert result.ok
        assert result.unwrap().status == ComplaintStatus.SEEN

    def test_other_department_is_unauthorized(self, roads_admin, now):
        complaint = make_complaint("c1", "Water", created_at=now)
        result = ComplaintLifecycle.transition(roads_admin, complaint, "Seen", now=now)

        assert not result.ok
        assert isinstance(result.error, UnauthorizedException)

    def test_main_admin_cannot_advance(self, main_admin, now):
        complaint = make_complaint("c1", "Water", created_at=now)
        result = ComplaintLifecycle.transition(main_admin, complaint, "Seen", now=now)
        assert isinstance(result.error, UnauthorizedException)

    def test_authorization_checked_before_validity(self, roads_admin, now):
        complaint = make_complaint("c1", "Water", created_at=now)
        result = ComplaintLifecycle.transition(roads_admin, complaint, "Closed", now=now)
        assert isinstance(result.error, UnauthorizedException)

    def test_invalid_step_carried_in_result(self, water_admin, now):
        complaint = make_complaint("c1", "Water", created_at=now)
        result = ComplaintLifecycle.transition(water_admin, complaint, "Completed", now=now)

        assert isinstance(result.error, InvalidTransitionException)
        with pytest.raises(InvalidTransitionException):
            result.unwrap()
