"""
SLA Application Layer
=====================

Contains:
- Services: Per-complaint SLA status, dashboard and analytics aggregation
- DTOs: Data transfer objects for API serialization
"""

from civicdesk.sla.application.services import (
    AnalyticsReport,
    ComplaintStatistics,
    DashboardStats,
    DepartmentStats,
    PriorityStats,
    SLAPerformance,
    SLAService,
)
from civicdesk.sla.application.dto import (
    AnalyticsResponse,
    ComplaintSLAResponse,
    DashboardResponse,
)

__all__ = [
    # DTOs
    "AnalyticsResponse",
    "ComplaintSLAResponse",
    "DashboardResponse",
    # Aggregates
    "AnalyticsReport",
    "DashboardStats",
    "DepartmentStats",
    "PriorityStats",
    "SLAPerformance",
    # Services
    "ComplaintStatistics",
    "SLAService",
]
