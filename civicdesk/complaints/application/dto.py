"""
Complaints Application DTOs
===========================

Data Transfer Objects for the complaints API layer.

These Pydantic models handle serialization/deserialization and validation
for API requests and responses.
"""

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

from civicdesk.complaints.domain import Complaint, ComplaintLifecycle
from civicdesk.sla.domain import SLAStatusResult


# ========== Type Aliases for Literals ==========
PriorityStr = Literal["High", "Medium", "Low"]
ComplaintStatusStr = Literal["New", "Seen", "Assigned", "In Progress", "Completed", "Closed"]
SLAStatusStr = Literal["within", "approaching", "overdue"]


# ========== Request DTOs ==========

class ComplaintCreateRequest(BaseModel):
    """Intake payload submitted by a citizen."""
    citizen_name: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1, max_length=5000)
    location: str = Field(..., min_length=1, max_length=500)
    photos: List[str] = Field(default_factory=list, description="Ordered image references")

    @field_validator("citizen_name", "description", "location")
    @classmethod
    def reject_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v


class StatusUpdateRequest(BaseModel):
    """Request to advance a complaint one step in the workflow."""
    status: ComplaintStatusStr = Field(..., description="Requested next status")
    worker_notes: Optional[str] = Field(
        None,
        max_length=2000,
        description="Replaces the current note when non-empty"
    )


# ========== Response DTOs ==========

class SLAInfo(BaseModel):
    """Derived SLA status, recomputed on every read."""
    status: SLAStatusStr
    hours_remaining: float
    deadline_hours: int
    deadline: datetime

    @classmethod
    def from_result(cls, result: SLAStatusResult) -> "SLAInfo":
        return cls(
            status=result.status.value,
            hours_remaining=round(result.hours_remaining, 2),
            deadline_hours=result.deadline_hours,
            deadline=result.deadline,
        )


class ComplaintResponse(BaseModel):
    """A complaint with its derived SLA status."""
    id: str
    citizen_name: str
    department: str
    description: str
    location: str
    priority: PriorityStr
    status: ComplaintStatusStr
    created_at: datetime
    updated_at: datetime
    photos: List[str] = Field(default_factory=list)
    assigned_worker: Optional[str] = None
    worker_notes: Optional[str] = None
    version: int
    sla: SLAInfo
    next_statuses: List[ComplaintStatusStr] = Field(
        default_factory=list,
        description="Statuses this complaint may move to next"
    )

    @classmethod
    def from_domain(cls, complaint: Complaint, sla: SLAStatusResult) -> "ComplaintResponse":
        return cls(
            id=complaint.id,
            citizen_name=complaint.citizen_name,
            department=complaint.department,
            description=complaint.description,
            location=complaint.location,
            priority=complaint.priority.value,
            status=complaint.status.value,
            created_at=complaint.created_at,
            updated_at=complaint.updated_at,
            photos=list(complaint.photos),
            assigned_worker=complaint.assigned_worker,
            worker_notes=complaint.worker_notes,
            version=complaint.version,
            sla=SLAInfo.from_result(sla),
            next_statuses=[s.value for s in ComplaintLifecycle.get_next_statuses(complaint.status)],
        )


class ComplaintListResponse(BaseModel):
    """Response model for complaint listings."""
    complaints: List[ComplaintResponse]
    total_count: int = Field(..., description="Matches before pagination")
    limit: int
    offset: int
