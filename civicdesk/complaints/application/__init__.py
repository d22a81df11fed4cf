"""
Complaints Application Layer
============================

Contains:
- Services: Intake and workflow orchestration
- DTOs: Data transfer objects for API serialization

This layer depends on the domain layer and repository interfaces,
but not on concrete infrastructure implementations.
"""

from civicdesk.complaints.application.dto import (
    ComplaintCreateRequest,
    StatusUpdateRequest,
    SLAInfo,
    ComplaintResponse,
    ComplaintListResponse,
)
from civicdesk.complaints.application.services import (
    IComplaintRepository,
    IntakeResult,
    IntakeService,
    ComplaintService,
)

__all__ = [
    # DTOs
    "ComplaintCreateRequest",
    "StatusUpdateRequest",
    "SLAInfo",
    "ComplaintResponse",
    "ComplaintListResponse",
    # Services
    "IntakeResult",
    "IntakeService",
    "ComplaintService",
    # Repository Interfaces
    "IComplaintRepository",
]
