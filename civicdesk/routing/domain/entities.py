"""
Routing Domain Entities
=======================

Plain data produced by the classifier.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from civicdesk.config import ComplaintStatus, Priority


@dataclass(frozen=True)
class ClassificationResult:
    """
    Department and priority assigned to a description.

    `matched_keyword` / `priority_trigger` record which rule fired, which is
    what makes a routing decision explainable to department staff.
    """
    department: str
    priority: Priority
    matched_keyword: Optional[str] = None
    priority_trigger: Optional[str] = None

    @property
    def used_fallback(self) -> bool:
        """True when no department keyword matched."""
        return self.matched_keyword is None


@dataclass
class ComplaintDraft:
    """
    A classified complaint that has not been given an identity yet.

    The store assigns `id` when the draft is persisted.
    """
    citizen_name: str
    department: str
    description: str
    location: str
    priority: Priority
    created_at: datetime
    updated_at: datetime
    status: ComplaintStatus = ComplaintStatus.NEW
    photos: List[str] = field(default_factory=list)
