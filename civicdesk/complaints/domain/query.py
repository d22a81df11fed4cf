"""
Complaint Query Pipeline
========================

Role scoping, search, filters and sort over a complaint collection.

Steps run in a fixed order and are AND-combined:

1. role scoping (sub-admins see their own department only)
2. free-text search over citizen name, description, location and id
3. equality filters on status, department (main admin only) and priority
4. photo filter
5. SLA bucket filter
6. stable sort

A filter left at None is a no-op. The input collection is never mutated.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Iterable, List, Optional

from civicdesk.complaints.domain.entities import Actor, Complaint
from civicdesk.config import (
    ComplaintStatus,
    PhotoFilter,
    Priority,
    PRIORITY_RANK,
    SLAStatus,
    SortKey,
    SortOrder,
)
from civicdesk.sla.domain import SLACalculator


@dataclass(frozen=True)
class ComplaintQuery:
    """Filter and sort options for a complaint listing."""
    search: Optional[str] = None
    status: Optional[ComplaintStatus] = None
    department: Optional[str] = None
    priority: Optional[Priority] = None
    photo: PhotoFilter = PhotoFilter.ALL
    sla: Optional[SLAStatus] = None
    sort_by: SortKey = SortKey.CREATED_AT
    sort_order: SortOrder = SortOrder.DESC


_SORT_KEYS: dict[SortKey, Callable[[Complaint], float]] = {
    SortKey.CREATED_AT: lambda c: c.created_at.timestamp(),
    SortKey.UPDATED_AT: lambda c: c.updated_at.timestamp(),
    SortKey.PRIORITY: lambda c: PRIORITY_RANK[c.priority],
}


class ComplaintQueryPipeline:
    """
    Applies a ComplaintQuery for a given actor.

    The SLA filter evaluates every complaint against a single `now` so one
    listing never mixes instants.
    """

    def __init__(self, sla_calculator: Optional[SLACalculator] = None):
        self._sla = sla_calculator or SLACalculator()

    @staticmethod
    def scope_to_actor(complaints: Iterable[Complaint], actor: Actor) -> List[Complaint]:
        if actor.is_main_admin:
            return list(complaints)
        return [c for c in complaints if c.department == actor.department]

    @staticmethod
    def apply_search(complaints: List[Complaint], search: Optional[str]) -> List[Complaint]:
        if not search:
            return complaints
        term = search.lower()
        return [
            c for c in complaints
            if term in c.citizen_name.lower()
            or term in c.description.lower()
            or term in c.location.lower()
            or term in c.id.lower()
        ]

    @staticmethod
    def apply_filters(complaints: List[Complaint], query: ComplaintQuery, actor: Actor) -> List[Complaint]:
        result = complaints
        if query.status is not None:
            result = [c for c in result if c.status == query.status]
        # Sub-admins are already scoped; their department filter is ignored
        if query.department and actor.is_main_admin:
            result = [c for c in result if c.department == query.department]
        if query.priority is not None:
            result = [c for c in result if c.priority == query.priority]
        return result

    @staticmethod
    def apply_photo_filter(complaints: List[Complaint], photo: PhotoFilter) -> List[Complaint]:
        if photo == PhotoFilter.WITH_PHOTO:
            return [c for c in complaints if c.has_photos]
        if photo == PhotoFilter.WITHOUT_PHOTO:
            return [c for c in complaints if not c.has_photos]
        return complaints

    def apply_sla_filter(
        self,
        complaints: List[Complaint],
        sla: Optional[SLAStatus],
        now: datetime
    ) -> List[Complaint]:
        if sla is None:
            return complaints
        return [
            c for c in complaints
            if self._sla.calculate(c.created_at, c.department, now).status == sla
        ]

    @staticmethod
    def sort(complaints: List[Complaint], sort_by: SortKey, sort_order: SortOrder) -> List[Complaint]:
        """Stable sort; ties keep their input order in both directions."""
        return sorted(
            complaints,
            key=_SORT_KEYS[SortKey(sort_by)],
            reverse=SortOrder(sort_order) == SortOrder.DESC,
        )

    def run(
        self,
        complaints: Iterable[Complaint],
        actor: Actor,
        query: Optional[ComplaintQuery] = None,
        now: Optional[datetime] = None,
    ) -> List[Complaint]:
        query = query or ComplaintQuery()
        current_time = now or datetime.now(timezone.utc)

        result = self.scope_to_actor(complaints, actor)
        result = self.apply_search(result, query.search)
        result = self.apply_filters(result, query, actor)
        result = self.apply_photo_filter(result, query.photo)
        result = self.apply_sla_filter(result, query.sla, current_time)
        return self.sort(result, query.sort_by, query.sort_order)
