"""Tests for SLA deadline and bucket calculation."""

from datetime import datetime, timedelta, timezone

import pytest

from civicdesk.config import SLAStatus
from civicdesk.routing.domain import DepartmentConfig
from civicdesk.sla.domain import SLACalculator, as_utc, calculate_sla_status


class TestCalculateSLAStatus:
    """Deterministic bucket boundaries with an explicit `now`."""

    def test_fresh_complaint_is_within(self, now):
        result = calculate_sla_status(now, "Water", now)

        assert result.status == SLAStatus.WITHIN
        assert result.hours_remaining == pytest.approx(48.0)
        assert result.deadline == now + timedelta(hours=48)

    def test_boundary_exactly_at_approaching_threshold(self, now):
        """Water (48h) with 12h left is exactly 25%: approaching."""
        result = calculate_sla_status(now - timedelta(hours=36), "Water", now)

        assert result.status == SLAStatus.APPROACHING
        assert result.hours_remaining == pytest.approx(12.0)

    def test_just_above_threshold_is_within(self, now):
        result = calculate_sla_status(now - timedelta(hours=35, minutes=59), "Water", now)
        assert result.status == SLAStatus.WITHIN

    def test_zero_remaining_is_overdue(self, now):
        result = calculate_sla_status(now - timedelta(hours=24), "Health", now)

        assert result.status == SLAStatus.OVERDUE
        assert result.hours_remaining == pytest.approx(0.0)
        assert result.is_overdue

    def test_negative_remaining(self, now):
        result = calculate_sla_status(now - timedelta(hours=30), "Garbage", now)

        assert result.status == SLAStatus.OVERDUE
        assert result.hours_remaining == pytest.approx(-6.0)

    @pytest.mark.parametrize("department", ["Health", "Garbage"])
    @pytest.mark.parametrize("fraction,expected", [
        (0.8, SLAStatus.APPROACHING),
        (0.5, SLAStatus.WITHIN),
    ])
    def test_day_long_deadline_fractions(self, now, department, fraction, expected):
        """24h departments: 19.2h elapsed is approaching, 12h is within."""
        result = calculate_sla_status(now - timedelta(hours=24 * fraction), department, now)

        assert result.deadline_hours == 24
        assert result.status == expected

    def test_fractional_hours(self, now):
        result = calculate_sla_status(now - timedelta(minutes=90), "Roads", now)
        assert result.hours_remaining == pytest.approx(70.5)

    def test_unknown_department_uses_default_window(self, now):
        result = calculate_sla_status(now - timedelta(hours=1), "Parks", now)

        assert result.deadline_hours == 48
        assert result.hours_remaining == pytest.approx(47.0)

    def test_department_hours_come_from_config(self, now):
        config = DepartmentConfig(
            departments=[
                {"id": "roads", "name": "Roads", "keywords": ["road"], "sla_hours": 10},
            ],
        )
        result = calculate_sla_status(now - timedelta(hours=8), "Roads", now, config)

        assert result.deadline_hours == 10
        assert result.status == SLAStatus.APPROACHING

    def test_configured_approaching_ratio(self, now):
        config = DepartmentConfig(approaching_ratio=0.5)
        result = calculate_sla_status(now - timedelta(hours=24), "Water", now, config)
        assert result.status == SLAStatus.APPROACHING

    def test_naive_timestamps_treated_as_utc(self, now):
        naive_created = (now - timedelta(hours=36)).replace(tzinfo=None)
        result = calculate_sla_status(naive_created, "Water", now)
        assert result.hours_remaining == pytest.approx(12.0)

    def test_defaults_to_wall_clock(self):
        result = calculate_sla_status(datetime.now(timezone.utc), "Water")
        assert result.status == SLAStatus.WITHIN


class TestSLACalculator:
    """Bucket helper and serialization."""

    @pytest.mark.parametrize("remaining,expected", [
        (10.0, SLAStatus.WITHIN),
        (2.5, SLAStatus.APPROACHING),
        (0.001, SLAStatus.APPROACHING),
        (0.0, SLAStatus.OVERDUE),
        (-1.0, SLAStatus.OVERDUE),
    ])
    def test_classify_remaining(self, remaining, expected):
        assert SLACalculator.classify_remaining(remaining, 10, 0.25) == expected

    def test_to_dict(self, now):
        data = SLACalculator().calculate(now, "Health", now).to_dict()

        assert data["status"] == "within"
        assert data["deadline_hours"] == 24
        assert data["deadline"] == (now + timedelta(hours=24)).isoformat()

    def test_as_utc_keeps_aware_values(self, now):
        assert as_utc(now) is now
