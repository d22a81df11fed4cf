"""
SLA Application DTOs
====================

Response models for SLA status, the dashboard and analytics.
"""

from datetime import date
from typing import Dict, List

from pydantic import BaseModel, Field

from civicdesk.complaints.application.dto import ComplaintStatusStr, PriorityStr, SLAInfo
from civicdesk.complaints.domain import Complaint
from civicdesk.sla.application.services import AnalyticsReport, DashboardStats
from civicdesk.sla.domain import SLAStatusResult


class ComplaintSLAResponse(BaseModel):
    """SLA status for one complaint."""
    complaint_id: str
    department: str
    status: ComplaintStatusStr
    sla: SLAInfo

    @classmethod
    def from_domain(cls, complaint: Complaint, result: SLAStatusResult) -> "ComplaintSLAResponse":
        return cls(
            complaint_id=complaint.id,
            department=complaint.department,
            status=complaint.status.value,
            sla=SLAInfo.from_result(result),
        )


class DailyCount(BaseModel):
    day: date
    count: int


class MonthlyTrend(BaseModel):
    month: date = Field(..., description="First day of the UTC calendar month")
    created: int
    resolved: int = Field(..., description="Complaints filed that month which are now Completed")


class DashboardResponse(BaseModel):
    """Aggregates over the complaints visible to the caller."""
    total: int
    pending: int = Field(..., description="Neither Completed nor Closed")
    resolved_today: int = Field(..., description="Completed with a last update today (UTC)")
    overdue: int = Field(..., description="Pending and past the SLA deadline")
    approaching: int = Field(..., description="Pending and inside the warning window")
    avg_resolution_hours: float = Field(..., description="Mean filing-to-last-update time of Completed complaints")
    sla_compliance_percent: float
    by_status: Dict[str, int]
    by_priority: Dict[str, int]
    by_department: Dict[str, int]
    daily_created: List[DailyCount]

    @classmethod
    def from_stats(cls, stats: DashboardStats) -> "DashboardResponse":
        return cls(
            total=stats.total,
            pending=stats.pending,
            resolved_today=stats.resolved_today,
            overdue=stats.overdue,
            approaching=stats.approaching,
            avg_resolution_hours=stats.avg_resolution_hours,
            sla_compliance_percent=stats.sla_compliance_percent,
            by_status=stats.by_status,
            by_priority=stats.by_priority,
            by_department=stats.by_department,
            daily_created=[DailyCount(day=d, count=n) for d, n in stats.daily_created],
        )


class DepartmentAnalytics(BaseModel):
    department: str
    total: int
    resolved: int
    pending: int
    overdue: int
    avg_resolution_hours: float
    resolution_rate: float = Field(..., description="Completed / total, in percent")


class PriorityAnalytics(BaseModel):
    priority: PriorityStr
    total: int
    resolved: int
    pending: int
    overdue: int
    resolution_rate: float


class SLAPerformanceResponse(BaseModel):
    within_percent: float
    approaching: int
    breached: int


class LocationCount(BaseModel):
    location: str
    count: int


class AnalyticsResponse(BaseModel):
    """Cross-department analytics for the main admin."""
    departments: List[DepartmentAnalytics]
    priorities: List[PriorityAnalytics]
    sla_performance: SLAPerformanceResponse
    top_locations: List[LocationCount]
    daily_created: List[DailyCount]
    monthly_trend: List[MonthlyTrend]

    @classmethod
    def from_report(cls, report: AnalyticsReport) -> "AnalyticsResponse":
        return cls(
            departments=[
                DepartmentAnalytics(
                    department=d.department,
                    total=d.total,
                    resolved=d.resolved,
                    pending=d.pending,
                    overdue=d.overdue,
                    avg_resolution_hours=d.avg_resolution_hours,
                    resolution_rate=d.resolution_rate,
                )
                for d in report.departments
            ],
            priorities=[
                PriorityAnalytics(
                    priority=p.priority.value,
                    total=p.total,
                    resolved=p.resolved,
                    pending=p.pending,
                    overdue=p.overdue,
                    resolution_rate=p.resolution_rate,
                )
                for p in report.priorities
            ],
            sla_performance=SLAPerformanceResponse(
                within_percent=report.sla_performance.within_percent,
                approaching=report.sla_performance.approaching,
                breached=report.sla_performance.breached,
            ),
            top_locations=[LocationCount(location=loc, count=n) for loc, n in report.top_locations],
            daily_created=[DailyCount(day=d, count=n) for d, n in report.daily_created],
            monthly_trend=[
                MonthlyTrend(month=m, created=filed, resolved=done)
                for m, filed, done in report.monthly_trend
            ],
        )
