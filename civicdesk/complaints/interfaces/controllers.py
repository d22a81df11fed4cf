"""
Complaints Controllers (API Routes)
===================================

FastAPI routes for complaint intake, listing and status updates.

Controllers are thin - they delegate to application services. Domain
errors carried by service results are raised here and mapped to HTTP
status codes by the application exception handler.
"""

import time
from datetime import datetime, timezone
from enum import Enum
from typing import Optional, Type, TypeVar

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from civicdesk.complaints.application import (
    ComplaintCreateRequest,
    ComplaintListResponse,
    ComplaintResponse,
    ComplaintService,
    IComplaintRepository,
    IntakeService,
    StatusUpdateRequest,
)
from civicdesk.complaints.domain import Actor, ComplaintQuery
from civicdesk.complaints.infrastructure import SQLAlchemyComplaintRepository
from civicdesk.complaints.interfaces.auth import get_current_actor
from civicdesk.config import (
    ComplaintStatus,
    PhotoFilter,
    Priority,
    SLAStatus,
    SortKey,
    SortOrder,
)
from civicdesk.infrastructure.database import get_session
from civicdesk.routing.application import IDepartmentProvider
from civicdesk.routing.infrastructure import get_department_provider
from civicdesk.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)
router = APIRouter(prefix="/complaints", tags=["Complaints"])

E = TypeVar("E", bound=Enum)


# ========== Example payloads for Swagger ==========

COMPLAINT_RESPONSE_EXAMPLE = {
    "id": "3f1c2a9e-8d4b-4f5a-9c1e-2b7d6a0e5f11",
    "citizen_name": "Jane Smith",
    "department": "Water",
    "description": "Urgent gas leak near Market Square",
    "location": "Market Square",
    "priority": "High",
    "status": "New",
    "created_at": "2024-03-01T09:00:00Z",
    "updated_at": "2024-03-01T09:00:00Z",
    "photos": [],
    "assigned_worker": None,
    "worker_notes": None,
    "version": 1,
    "sla": {
        "status": "within",
        "hours_remaining": 48.0,
        "deadline_hours": 48,
        "deadline": "2024-03-03T09:00:00Z"
    },
    "next_statuses": ["Seen"]
}


# ========== Dependencies ==========

async def get_complaint_repository(
    session: AsyncSession = Depends(get_session)
) -> IComplaintRepository:
    return SQLAlchemyComplaintRepository(session)


async def get_complaint_service(
    repository: IComplaintRepository = Depends(get_complaint_repository),
    departments: IDepartmentProvider = Depends(get_department_provider)
) -> ComplaintService:
    """Get complaint service instance."""
    return ComplaintService(repository, departments)


async def get_intake_service(
    repository: IComplaintRepository = Depends(get_complaint_repository),
    departments: IDepartmentProvider = Depends(get_department_provider)
) -> IntakeService:
    """Get intake service instance."""
    return IntakeService(repository, departments)


def _optional_enum(enum_cls: Type[E], value: Optional[str], name: str) -> Optional[E]:
    """Map a query value to an enum member; empty and 'all' mean no filter."""
    if value is None or value == "" or value == "all":
        return None
    try:
        return enum_cls(value)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Invalid {name} '{value}'. Allowed: {[m.value for m in enum_cls]}"
        )


# ========== Route Handlers ==========

@router.post(
    "",
    response_model=ComplaintResponse,
    status_code=status.HTTP_201_CREATED,
    summary="File a complaint",
    description="""
    Intake path for a citizen complaint.

    The submission is rejected with **409** when a complaint with the same
    description and location (ignoring case, punctuation and spacing) is
    already on record. Otherwise it is routed to a department, given a
    priority and stored with status `New`.
    """,
    responses={
        201: {
            "description": "Complaint filed",
            "content": {
                "application/json": {
                    "example": COMPLAINT_RESPONSE_EXAMPLE
                }
            }
        },
        409: {"description": "Duplicate complaint"}
    }
)
async def create_complaint(
    request: ComplaintCreateRequest,
    intake: IntakeService = Depends(get_intake_service),
    complaints: ComplaintService = Depends(get_complaint_service)
):
    start_time = time.perf_counter()

    result = await intake.submit(
        citizen_name=request.citizen_name,
        description=request.description,
        location=request.location,
        photos=request.photos
    )
    complaint = result.unwrap()

    logger.info(
        "Intake complete",
        extra={
            "complaint_id": complaint.id,
            "processing_time_ms": int((time.perf_counter() - start_time) * 1000)
        }
    )
    sla = complaints.sla_calculator().calculate(complaint.created_at, complaint.department)
    return ComplaintResponse.from_domain(complaint, sla)


@router.get(
    "",
    response_model=ComplaintListResponse,
    summary="List complaints",
    description="""
    Role-scoped complaint listing.

    Sub-admins only ever see their own department. Filters are AND-combined;
    `all` or an empty value disables a filter. The `department` filter is
    honored for the main admin only.

    - `photo`: `all`, `with_photo`, `without_photo`
    - `sla`: `within`, `approaching`, `overdue`
    - `sort_by`: `created_at`, `updated_at`, `priority`
    - `sort_order`: `asc`, `desc`
    """
)
async def list_complaints(
    search: Optional[str] = Query(None, description="Substring of name, description, location or id"),
    complaint_status: Optional[str] = Query(None, alias="status", description="Filter by status"),
    department: Optional[str] = Query(None, description="Filter by department (main admin only)"),
    priority: Optional[str] = Query(None, description="Filter by priority"),
    photo: Optional[str] = Query(None, description="Attachment filter"),
    sla: Optional[str] = Query(None, description="Filter by SLA bucket"),
    sort_by: Optional[str] = Query(None, description="Sort key"),
    sort_order: Optional[str] = Query(None, description="Sort direction"),
    limit: int = Query(100, ge=1, le=1000, description="Results per page"),
    offset: int = Query(0, ge=0, description="Page offset"),
    actor: Actor = Depends(get_current_actor),
    service: ComplaintService = Depends(get_complaint_service)
):
    query = ComplaintQuery(
        search=search or None,
        status=_optional_enum(ComplaintStatus, complaint_status, "status"),
        department=None if department in (None, "", "all") else department,
        priority=_optional_enum(Priority, priority, "priority"),
        photo=_optional_enum(PhotoFilter, photo, "photo") or PhotoFilter.ALL,
        sla=_optional_enum(SLAStatus, sla, "sla"),
        sort_by=_optional_enum(SortKey, sort_by, "sort_by") or SortKey.CREATED_AT,
        sort_order=_optional_enum(SortOrder, sort_order, "sort_order") or SortOrder.DESC,
    )

    now = datetime.now(timezone.utc)
    page, total = await service.list_complaints(actor, query, limit=limit, offset=offset, now=now)
    calculator = service.sla_calculator()

    return ComplaintListResponse(
        complaints=[
            ComplaintResponse.from_domain(c, calculator.calculate(c.created_at, c.department, now))
            for c in page
        ],
        total_count=total,
        limit=limit,
        offset=offset
    )


@router.get(
    "/{complaint_id}",
    response_model=ComplaintResponse,
    summary="Get one complaint",
    responses={403: {"description": "Outside the actor's department"}, 404: {"description": "Not found"}}
)
async def get_complaint(
    complaint_id: str,
    actor: Actor = Depends(get_current_actor),
    service: ComplaintService = Depends(get_complaint_service)
):
    complaint = await service.get_for_actor(actor, complaint_id)
    sla = service.sla_calculator().calculate(complaint.created_at, complaint.department)
    return ComplaintResponse.from_domain(complaint, sla)


@router.patch(
    "/{complaint_id}/status",
    response_model=ComplaintResponse,
    summary="Advance a complaint's status",
    description="""
    Move a complaint one step along
    `New → Seen → Assigned → In Progress → Completed → Closed`.

    Only the sub-admin of the complaint's department may do this.

    - **400** requested status is not the next step
    - **403** actor may not edit this department
    - **404** complaint not found
    - **409** complaint changed since it was read
    """
)
async def update_complaint_status(
    complaint_id: str,
    request: StatusUpdateRequest,
    actor: Actor = Depends(get_current_actor),
    service: ComplaintService = Depends(get_complaint_service)
):
    result = await service.update_status(
        actor,
        complaint_id,
        ComplaintStatus(request.status),
        request.worker_notes
    )
    complaint = result.unwrap()
    sla = service.sla_calculator().calculate(complaint.created_at, complaint.department)
    return ComplaintResponse.from_domain(complaint, sla)


# Export router for inclusion in main app
complaints_router = router
