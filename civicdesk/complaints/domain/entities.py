"""
Complaint Domain Entities
=========================

Pure Python domain entities for complaint tracking.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from civicdesk.config import ActorRole, ComplaintStatus, Priority, RESOLVED_STATUSES


@dataclass
class Complaint:
    """
    A citizen complaint as held by the complaint store.

    `status`, `worker_notes` and `updated_at` only change through the
    lifecycle state machine. `version` increases with every persisted
    status change.
    """

    id: str
    citizen_name: str
    department: str
    description: str
    location: str
    priority: Priority
    status: ComplaintStatus
    created_at: datetime
    updated_at: datetime

    photos: List[str] = field(default_factory=list)
    assigned_worker: Optional[str] = None
    worker_notes: Optional[str] = None
    version: int = 1

    def __post_init__(self):
        """Validate complaint on initialization."""
        self.priority = Priority(self.priority)
        self.status = ComplaintStatus(self.status)
        if self.updated_at < self.created_at:
            raise ValueError("updated_at cannot be before created_at")

    @property
    def has_photos(self) -> bool:
        return bool(self.photos)

    @property
    def is_resolved(self) -> bool:
        """Completed or Closed."""
        return self.status in RESOLVED_STATUSES

    @property
    def resolution_hours(self) -> float:
        """Hours between filing and the last update."""
        return (self.updated_at - self.created_at).total_seconds() / 3600


@dataclass(frozen=True)
class Actor:
    """
    The caller on whose behalf an operation runs.

    Passed explicitly into every lifecycle and query call instead of being
    read from process-wide session storage.
    """

    username: str
    role: ActorRole
    department: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "role", ActorRole(self.role))
        if self.role == ActorRole.SUB_ADMIN and not self.department:
            raise ValueError("sub_admin actors must belong to a department")

    @property
    def is_main_admin(self) -> bool:
        return self.role == ActorRole.MAIN_ADMIN

    @property
    def can_edit_department(self) -> Optional[str]:
        """
        Department whose complaints this actor may advance.

        Only a department's own sub-admin can move its complaints through
        the workflow; the main admin has read access everywhere.
        """
        if self.role == ActorRole.SUB_ADMIN:
            return self.department
        return None

    def can_view(self, complaint: Complaint) -> bool:
        return self.is_main_admin or complaint.department == self.department
