"""
Complaints Domain Layer
=======================

Contains:
- Entities: Complaint, Actor
- Domain Services: ComplaintLifecycle, ComplaintQueryPipeline
- Value Objects: ComplaintQuery, TransitionResult

This layer has no dependencies on infrastructure - pure Python business logic.
"""

from civicdesk.complaints.domain.entities import Actor, Complaint
from civicdesk.complaints.domain.lifecycle import (
    WORKFLOW,
    ComplaintLifecycle,
    TransitionResult,
    get_next_statuses,
)
from civicdesk.complaints.domain.query import ComplaintQuery, ComplaintQueryPipeline

__all__ = [
    # Entities
    "Actor",
    "Complaint",
    # Lifecycle
    "WORKFLOW",
    "ComplaintLifecycle",
    "TransitionResult",
    "get_next_statuses",
    # Query
    "ComplaintQuery",
    "ComplaintQueryPipeline",
]
