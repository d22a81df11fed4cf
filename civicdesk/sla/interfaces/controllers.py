"""
SLA Controllers (API Routes)
============================

FastAPI routes for SLA status, the dashboard and analytics.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from civicdesk.complaints.application import ComplaintService
from civicdesk.complaints.domain import Actor
from civicdesk.complaints.interfaces.auth import get_current_actor
from civicdesk.complaints.interfaces.controllers import get_complaint_service
from civicdesk.sla.application import (
    AnalyticsResponse,
    ComplaintSLAResponse,
    DashboardResponse,
    SLAService,
)
from civicdesk.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)
router = APIRouter(prefix="/sla", tags=["SLA Monitoring"])


# ========== Example payloads for Swagger ==========

DASHBOARD_RESPONSE_EXAMPLE = {
    "total": 12,
    "pending": 7,
    "resolved_today": 2,
    "overdue": 1,
    "approaching": 2,
    "avg_resolution_hours": 19.5,
    "sla_compliance_percent": 75.0,
    "by_status": {"New": 3, "Seen": 1, "Assigned": 1, "In Progress": 2, "Completed": 4, "Closed": 1},
    "by_priority": {"High": 3, "Medium": 5, "Low": 4},
    "by_department": {"Water": 5, "Roads": 7},
    "daily_created": [{"day": "2024-03-01", "count": 2}]
}


# ========== Dependencies ==========

async def get_sla_service(
    complaints: ComplaintService = Depends(get_complaint_service)
) -> SLAService:
    """Get SLA service instance."""
    return SLAService(complaints)


# ========== Route Handlers ==========

@router.get(
    "/complaints/{complaint_id}",
    response_model=ComplaintSLAResponse,
    summary="SLA status of one complaint",
    description="""
    Recomputed on every call from the filing time, the department's SLA
    hours and the current time:

    - **overdue**: no time left
    - **approaching**: inside the final quarter of the window
    - **within**: otherwise
    """
)
async def get_complaint_sla(
    complaint_id: str,
    actor: Actor = Depends(get_current_actor),
    service: SLAService = Depends(get_sla_service)
):
    complaint, result = await service.status_for(actor, complaint_id)
    return ComplaintSLAResponse.from_domain(complaint, result)


@router.get(
    "/dashboard",
    response_model=DashboardResponse,
    summary="Dashboard aggregates",
    description="Counts and SLA compliance over the complaints the caller can see.",
    responses={
        200: {
            "description": "Dashboard statistics",
            "content": {
                "application/json": {
                    "example": DASHBOARD_RESPONSE_EXAMPLE
                }
            }
        }
    }
)
async def get_dashboard(
    actor: Actor = Depends(get_current_actor),
    service: SLAService = Depends(get_sla_service)
):
    stats = await service.dashboard(actor, datetime.now(timezone.utc))
    return DashboardResponse.from_stats(stats)


@router.get(
    "/analytics",
    response_model=AnalyticsResponse,
    summary="Cross-department analytics",
    description="Per-department, per-priority, SLA performance and top locations. Main admin only.",
    responses={403: {"description": "Caller is not the main admin"}}
)
async def get_analytics(
    actor: Actor = Depends(get_current_actor),
    service: SLAService = Depends(get_sla_service)
):
    report = await service.analytics(actor, datetime.now(timezone.utc))
    return AnalyticsResponse.from_report(report)


# Export router for inclusion in main app
sla_router = router
