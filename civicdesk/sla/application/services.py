"""
SLA Application Services
========================

Application services for per-complaint SLA status and the aggregate
numbers behind the dashboard and analytics views.

Every aggregate is computed over one actor-scoped complaint set at a single
evaluation instant, so all SLA buckets in one report agree with each other.
"""

from collections import Counter
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone
from typing import Dict, List, Optional, Sequence, Tuple

from civicdesk.complaints.application import ComplaintService
from civicdesk.complaints.domain import Actor, Complaint
from civicdesk.config import ComplaintStatus, Priority, SLAStatus
from civicdesk.core import UnauthorizedException
from civicdesk.shared.infrastructure.logging import get_logger
from civicdesk.sla.domain import SLACalculator, SLAStatusResult, as_utc

logger = get_logger(__name__)

TOP_LOCATIONS_LIMIT = 10
DAILY_WINDOW_DAYS = 7
MONTHLY_WINDOW_MONTHS = 6


# ========== Aggregate Value Objects ==========

@dataclass(frozen=True)
class DashboardStats:
    """Headline numbers over the complaints an actor can see."""
    total: int
    pending: int
    resolved_today: int
    overdue: int
    approaching: int
    avg_resolution_hours: float
    sla_compliance_percent: float
    by_status: Dict[str, int] = field(default_factory=dict)
    by_priority: Dict[str, int] = field(default_factory=dict)
    by_department: Dict[str, int] = field(default_factory=dict)
    daily_created: List[Tuple[date, int]] = field(default_factory=list)


@dataclass(frozen=True)
class DepartmentStats:
    department: str
    total: int
    resolved: int
    pending: int
    overdue: int
    avg_resolution_hours: float
    resolution_rate: float


@dataclass(frozen=True)
class PriorityStats:
    priority: Priority
    total: int
    resolved: int
    pending: int
    overdue: int
    resolution_rate: float


@dataclass(frozen=True)
class SLAPerformance:
    """Share of complaints handled in time; approaching and breached exclude resolved ones."""
    within_percent: float
    approaching: int
    breached: int


@dataclass(frozen=True)
class AnalyticsReport:
    departments: List[DepartmentStats]
    priorities: List[PriorityStats]
    sla_performance: SLAPerformance
    top_locations: List[Tuple[str, int]]
    daily_created: List[Tuple[date, int]]
    monthly_trend: List[Tuple[date, int, int]] = field(default_factory=list)


def _percent(part: int, whole: int) -> float:
    return round(part * 100.0 / whole, 2) if whole else 0.0


def _is_pending(complaint: Complaint) -> bool:
    return not complaint.is_resolved


def _is_completed(complaint: Complaint) -> bool:
    return complaint.status == ComplaintStatus.COMPLETED


class ComplaintStatistics:
    """
    Pure aggregation over a complaint collection.

    "Resolved" in rates and averages means Completed; "pending" means
    neither Completed nor Closed.
    """

    def __init__(self, calculator: Optional[SLACalculator] = None):
        self._calculator = calculator or SLACalculator()

    def _sla(self, complaints: Sequence[Complaint], now: datetime) -> Dict[str, SLAStatusResult]:
        return {c.id: self._calculator.calculate(c.created_at, c.department, now) for c in complaints}

    @staticmethod
    def average_resolution_hours(complaints: Sequence[Complaint]) -> float:
        completed = [c for c in complaints if _is_completed(c)]
        if not completed:
            return 0.0
        return round(sum(c.resolution_hours for c in completed) / len(completed), 2)

    @staticmethod
    def daily_created(complaints: Sequence[Complaint], now: datetime) -> List[Tuple[date, int]]:
        """Complaints filed per UTC day, oldest first, ending today."""
        today = as_utc(now).date()
        counts = Counter(as_utc(c.created_at).date() for c in complaints)
        days = [today - timedelta(days=offset) for offset in range(DAILY_WINDOW_DAYS - 1, -1, -1)]
        return [(day, counts.get(day, 0)) for day in days]

    @staticmethod
    def monthly_trend(complaints: Sequence[Complaint], now: datetime) -> List[Tuple[date, int, int]]:
        """
        Filed and Completed counts per UTC calendar month, oldest first.

        Each entry is (first day of month, filed, of those filed now Completed).
        """
        current = as_utc(now).date().replace(day=1)
        months = []
        for back in range(MONTHLY_WINDOW_MONTHS - 1, -1, -1):
            year, month = divmod(current.year * 12 + current.month - 1 - back, 12)
            months.append(date(year, month + 1, 1))

        filed = Counter()
        completed = Counter()
        for c in complaints:
            key = as_utc(c.created_at).date().replace(day=1)
            filed[key] += 1
            if _is_completed(c):
                completed[key] += 1
        return [(month, filed[month], completed[month]) for month in months]

    def dashboard(self, complaints: Sequence[Complaint], now: Optional[datetime] = None) -> DashboardStats:
        now = as_utc(now) if now else datetime.now(timezone.utc)
        sla = self._sla(complaints, now)
        today = now.date()

        overdue = sum(1 for c in complaints if _is_pending(c) and sla[c.id].status == SLAStatus.OVERDUE)
        approaching = sum(1 for c in complaints if _is_pending(c) and sla[c.id].status == SLAStatus.APPROACHING)
        compliant = sum(1 for c in complaints if _is_completed(c) or sla[c.id].status == SLAStatus.WITHIN)

        return DashboardStats(
            total=len(complaints),
            pending=sum(1 for c in complaints if _is_pending(c)),
            resolved_today=sum(
                1 for c in complaints
                if _is_completed(c) and as_utc(c.updated_at).date() == today
            ),
            overdue=overdue,
            approaching=approaching,
            avg_resolution_hours=self.average_resolution_hours(complaints),
            sla_compliance_percent=_percent(compliant, len(complaints)),
            by_status={s.value: sum(1 for c in complaints if c.status == s) for s in ComplaintStatus},
            by_priority={p.value: sum(1 for c in complaints if c.priority == p) for p in Priority},
            by_department=dict(Counter(c.department for c in complaints)),
            daily_created=self.daily_created(complaints, now),
        )

    def analytics(
        self,
        complaints: Sequence[Complaint],
        departments: Sequence[str],
        now: Optional[datetime] = None
    ) -> AnalyticsReport:
        """
        Breakdown by department, priority, SLA bucket, location and month.

        Args:
            complaints: The complaint set to report on
            departments: Department names in table order; names seen only on
                complaints are appended after them
            now: Evaluation instant for SLA buckets
        """
        now = as_utc(now) if now else datetime.now(timezone.utc)
        sla = self._sla(complaints, now)

        def overdue_in(group: Sequence[Complaint]) -> int:
            return sum(1 for c in group if _is_pending(c) and sla[c.id].is_overdue)

        names = list(departments)
        names.extend(sorted({c.department for c in complaints} - set(names)))

        department_stats = []
        for name in names:
            group = [c for c in complaints if c.department == name]
            resolved = sum(1 for c in group if _is_completed(c))
            department_stats.append(DepartmentStats(
                department=name,
                total=len(group),
                resolved=resolved,
                pending=sum(1 for c in group if _is_pending(c)),
                overdue=overdue_in(group),
                avg_resolution_hours=self.average_resolution_hours(group),
                resolution_rate=_percent(resolved, len(group)),
            ))

        priority_stats = []
        for priority in Priority:
            group = [c for c in complaints if c.priority == priority]
            resolved = sum(1 for c in group if _is_completed(c))
            priority_stats.append(PriorityStats(
                priority=priority,
                total=len(group),
                resolved=resolved,
                pending=sum(1 for c in group if _is_pending(c)),
                overdue=overdue_in(group),
                resolution_rate=_percent(resolved, len(group)),
            ))

        performance = SLAPerformance(
            within_percent=_percent(
                sum(1 for c in complaints if _is_completed(c) or sla[c.id].status == SLAStatus.WITHIN),
                len(complaints)
            ),
            approaching=sum(
                1 for c in complaints if _is_pending(c) and sla[c.id].status == SLAStatus.APPROACHING
            ),
            breached=overdue_in(complaints),
        )

        locations = Counter(c.location.strip() for c in complaints)

        return AnalyticsReport(
            departments=department_stats,
            priorities=priority_stats,
            sla_performance=performance,
            top_locations=locations.most_common(TOP_LOCATIONS_LIMIT),
            daily_created=self.daily_created(complaints, now),
            monthly_trend=self.monthly_trend(complaints, now),
        )


# ========== Application Services ==========

class SLAService:
    """
    SLA reads on behalf of an actor.

    Visibility rules come from the complaint service so the dashboard never
    counts complaints the actor could not list.
    """

    def __init__(self, complaint_service: ComplaintService):
        self._complaints = complaint_service

    def _statistics(self) -> ComplaintStatistics:
        return ComplaintStatistics(self._complaints.sla_calculator())

    async def status_for(
        self,
        actor: Actor,
        complaint_id: str,
        now: Optional[datetime] = None
    ) -> Tuple[Complaint, SLAStatusResult]:
        complaint = await self._complaints.get_for_actor(actor, complaint_id)
        result = self._complaints.sla_calculator().calculate(complaint.created_at, complaint.department, now)
        return complaint, result

    async def dashboard(self, actor: Actor, now: Optional[datetime] = None) -> DashboardStats:
        complaints = await self._complaints.visible_complaints(actor)
        stats = self._statistics().dashboard(complaints, now)

        logger.info(
            "Dashboard computed",
            extra={"actor": actor.username, "total": stats.total, "overdue": stats.overdue}
        )
        return stats

    async def analytics(self, actor: Actor, now: Optional[datetime] = None) -> AnalyticsReport:
        """
        Cross-department analytics.

        Raises:
            UnauthorizedException: If the actor is not the main admin
        """
        if not actor.is_main_admin:
            raise UnauthorizedException(
                actor.username,
                "all departments'",
                {"actor": actor.username, "view": "analytics"}
            )

        complaints = await self._complaints.visible_complaints(actor)
        return self._statistics().analytics(
            complaints, self._complaints.department_names(), now
        )
