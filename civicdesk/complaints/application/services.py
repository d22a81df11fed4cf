"""
Complaints Application Services
===============================

Application services orchestrate the intake path, the status workflow and
listings, coordinating domain rules with the complaint store.

Following SOLID principles:
- Single Responsibility: Each service has one clear purpose
- Dependency Inversion: Depend on abstractions (repositories), not concrete implementations
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List, Optional, Sequence, Tuple

from civicdesk.complaints.domain import (
    Actor,
    Complaint,
    ComplaintLifecycle,
    ComplaintQuery,
    ComplaintQueryPipeline,
    TransitionResult,
)
from civicdesk.config import ComplaintStatus
from civicdesk.core import (
    ApplicationException,
    ConcurrentModificationException,
    DuplicateComplaintException,
    ResourceNotFoundException,
    UnauthorizedException,
    UnknownDepartmentException,
)
from civicdesk.routing.application import IDepartmentProvider
from civicdesk.routing.domain import ComplaintClassifier, ComplaintDraft, DuplicateDetector
from civicdesk.shared.infrastructure.logging import get_logger, log_latency
from civicdesk.sla.domain import SLACalculator

logger = get_logger(__name__)


# ========== Repository Interfaces (Dependency Inversion) ==========

class IComplaintRepository(ABC):
    """Interface for the complaint store."""

    @abstractmethod
    async def get_by_id(self, complaint_id: str) -> Optional[Complaint]:
        """Get complaint by ID."""

    @abstractmethod
    async def list_all(self) -> List[Complaint]:
        """List every complaint."""

    @abstractmethod
    async def list_by_department(self, department: str) -> List[Complaint]:
        """List complaints routed to one department."""

    @abstractmethod
    async def create(self, draft: ComplaintDraft) -> Complaint:
        """Persist a draft and assign its identity."""

    @abstractmethod
    async def update_status(self, complaint: Complaint, expected_version: int) -> Complaint:
        """
        Write status, notes, updated_at and version.

        Raises:
            ConcurrentModificationException: If the stored version differs
        """


# ========== Results ==========

@dataclass(frozen=True)
class IntakeResult:
    """Outcome of an intake request: the stored complaint or the rejection."""
    complaint: Optional[Complaint] = None
    error: Optional[ApplicationException] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Complaint:
        if self.error is not None:
            raise self.error
        return self.complaint


# ========== Application Services ==========

class IntakeService:
    """
    Accepts new complaints.

    Duplicate detection runs before classification so a resubmission never
    produces a record.
    """

    def __init__(self, repository: IComplaintRepository, department_provider: IDepartmentProvider):
        self._repo = repository
        self._departments = department_provider

    async def submit(
        self,
        citizen_name: str,
        description: str,
        location: str,
        photos: Optional[Sequence[str]] = None,
        now: Optional[datetime] = None,
    ) -> IntakeResult:
        existing = await self._repo.list_all()
        if DuplicateDetector.is_duplicate(existing, description, location):
            logger.info("Duplicate complaint rejected", extra={"location": location})
            return IntakeResult(error=DuplicateComplaintException(description, location))

        classifier = ComplaintClassifier(self._departments.get_config())
        draft = classifier.process_new_complaint(citizen_name, description, location, photos, now)
        complaint = await self._repo.create(draft)

        logger.info(
            "Complaint filed",
            extra={
                "complaint_id": complaint.id,
                "department": complaint.department,
                "priority": complaint.priority.value,
            }
        )
        return IntakeResult(complaint=complaint)


class ComplaintService:
    """Reads and status updates on behalf of an actor."""

    def __init__(self, repository: IComplaintRepository, department_provider: IDepartmentProvider):
        self._repo = repository
        self._departments = department_provider

    def sla_calculator(self) -> SLACalculator:
        return SLACalculator(self._departments.get_config())

    def department_names(self) -> List[str]:
        return self._departments.get_config().names

    async def visible_complaints(self, actor: Actor) -> List[Complaint]:
        """Complaints the actor may see, fetched with scoping pushed to the store."""
        if actor.is_main_admin:
            return await self._repo.list_all()
        return await self._repo.list_by_department(actor.department)

    async def get_for_actor(self, actor: Actor, complaint_id: str) -> Complaint:
        """
        Fetch one complaint.

        Raises:
            ResourceNotFoundException: If no complaint has this id
            UnauthorizedException: If the actor may not see it
        """
        complaint = await self._repo.get_by_id(complaint_id)
        if complaint is None:
            raise ResourceNotFoundException("Complaint", complaint_id)
        if not actor.can_view(complaint):
            raise UnauthorizedException(actor.username, complaint.department)
        self._warn_unknown_department(complaint)
        return complaint

    async def list_complaints(
        self,
        actor: Actor,
        query: Optional[ComplaintQuery] = None,
        limit: Optional[int] = None,
        offset: int = 0,
        now: Optional[datetime] = None,
    ) -> Tuple[List[Complaint], int]:
        """
        Run the query pipeline and paginate.

        Returns:
            (page of complaints, total matching before pagination)
        """
        pipeline = ComplaintQueryPipeline(self.sla_calculator())
        visible = await self.visible_complaints(actor)
        with log_latency(logger, "complaint_query", actor=actor.username, scanned=len(visible)):
            matches = pipeline.run(visible, actor, query, now)
        total = len(matches)
        end = offset + limit if limit is not None else None
        return matches[offset:end], total

    async def update_status(
        self,
        actor: Actor,
        complaint_id: str,
        requested_status: ComplaintStatus,
        worker_notes: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> TransitionResult:
        """
        Read, authorize, validate and write a status change.

        Every failure comes back inside the result; nothing is raised.
        """
        complaint = await self._repo.get_by_id(complaint_id)
        if complaint is None:
            return TransitionResult(error=ResourceNotFoundException("Complaint", complaint_id))

        result = ComplaintLifecycle.transition(
            actor, complaint, requested_status, worker_notes,
            now or datetime.now(timezone.utc)
        )
        if not result.ok:
            logger.info(
                "Status update rejected",
                extra={
                    "complaint_id": complaint_id,
                    "actor": actor.username,
                    "error_type": type(result.error).__name__,
                    "requested_status": str(getattr(requested_status, "value", requested_status)),
                }
            )
            return result

        try:
            stored = await self._repo.update_status(result.complaint, expected_version=complaint.version)
        except ConcurrentModificationException as e:
            logger.warning(
                "Concurrent status update detected",
                extra={"complaint_id": complaint_id, "expected_version": complaint.version}
            )
            return TransitionResult(error=e)

        logger.info(
            "Complaint status updated",
            extra={
                "complaint_id": complaint_id,
                "actor": actor.username,
                "from_status": complaint.status.value,
                "to_status": stored.status.value,
            }
        )
        return TransitionResult(complaint=stored)

    def _warn_unknown_department(self, complaint: Complaint) -> None:
        config = self._departments.get_config()
        if not config.has(complaint.department):
            fallback = UnknownDepartmentException(
                complaint.department, f"{config.default_sla_hours}h default SLA"
            )
            logger.warning(fallback.message, extra=fallback.details)
