"""
SLA Value Objects
==================

SLA calculation for complaints.

SLA status is derived, never stored: it is a pure function of the
complaint's creation time, its department and the evaluation instant, and
must be recomputed on every read.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from civicdesk.config import SLAStatus
from civicdesk.routing.domain import DepartmentConfig

_SECONDS_PER_HOUR = 3600.0


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC (SQLite drops tzinfo)."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


@dataclass(frozen=True)
class SLAStatusResult:
    """SLA bucket and the fractional hours left (negative once overdue)."""
    status: SLAStatus
    hours_remaining: float
    deadline_hours: int
    deadline: datetime

    @property
    def is_overdue(self) -> bool:
        return self.status == SLAStatus.OVERDUE

    def to_dict(self) -> dict:
        return {
            "status": self.status.value,
            "hours_remaining": self.hours_remaining,
            "deadline_hours": self.deadline_hours,
            "deadline": self.deadline.isoformat(),
        }


class SLACalculator:
    """
    Pure functions for SLA calculations.

    Deadline hours come from the department table; names missing from the
    table use `default_sla_hours`.
    """

    def __init__(self, config: Optional[DepartmentConfig] = None):
        self._config = config or DepartmentConfig()

    def deadline_hours(self, department: str) -> int:
        return self._config.get_sla_hours(department)

    @staticmethod
    def classify_remaining(hours_remaining: float, deadline_hours: float, approaching_ratio: float) -> SLAStatus:
        """
        Bucket the remaining time.

        Exactly zero remaining is overdue, not approaching.
        """
        if hours_remaining <= 0:
            return SLAStatus.OVERDUE
        if hours_remaining <= deadline_hours * approaching_ratio:
            return SLAStatus.APPROACHING
        return SLAStatus.WITHIN

    def calculate(
        self,
        created_at: datetime,
        department: str,
        now: Optional[datetime] = None
    ) -> SLAStatusResult:
        """
        Calculate the SLA status of a complaint.

        Args:
            created_at: When the complaint was filed
            department: Department name stored on the complaint
            now: Evaluation instant (defaults to the wall clock)

        Returns:
            SLAStatusResult with bucket and fractional hours remaining
        """
        created_at = as_utc(created_at)
        current_time = as_utc(now) if now else datetime.now(timezone.utc)

        deadline_hours = self.deadline_hours(department)
        elapsed_hours = (current_time - created_at).total_seconds() / _SECONDS_PER_HOUR
        hours_remaining = deadline_hours - elapsed_hours

        return SLAStatusResult(
            status=self.classify_remaining(
                hours_remaining, deadline_hours, self._config.approaching_ratio
            ),
            hours_remaining=hours_remaining,
            deadline_hours=deadline_hours,
            deadline=created_at + timedelta(hours=deadline_hours),
        )


def calculate_sla_status(
    created_at: datetime,
    department: str,
    now: Optional[datetime] = None,
    config: Optional[DepartmentConfig] = None,
) -> SLAStatusResult:
    return SLACalculator(config).calculate(created_at, department, now)
