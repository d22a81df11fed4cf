"""
Complaints Infrastructure Repositories
======================================

Concrete implementations of the complaint store interface.

This layer contains the data access logic - how we store and retrieve
complaints.
"""

from dataclasses import replace
from typing import Dict, List, Optional
from uuid import uuid4

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from civicdesk.complaints.application.services import IComplaintRepository
from civicdesk.complaints.domain import Complaint
from civicdesk.complaints.infrastructure.models import ComplaintModel
from civicdesk.core import ConcurrentModificationException
from civicdesk.routing.domain import ComplaintDraft
from civicdesk.sla.domain import as_utc


def _to_entity(model: ComplaintModel) -> Complaint:
    return Complaint(
        id=model.id,
        citizen_name=model.citizen_name,
        department=model.department,
        description=model.description,
        location=model.location,
        priority=model.priority,
        status=model.status,
        created_at=as_utc(model.created_at),
        updated_at=as_utc(model.updated_at),
        photos=list(model.photos or []),
        assigned_worker=model.assigned_worker,
        worker_notes=model.worker_notes,
        version=model.version,
    )


class SQLAlchemyComplaintRepository(IComplaintRepository):
    """
    SQLAlchemy implementation of the complaint store.

    Status writes are conditional on the version read by the caller.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    async def get_by_id(self, complaint_id: str) -> Optional[Complaint]:
        stmt = (
            select(ComplaintModel)
            .where(ComplaintModel.id == complaint_id)
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return _to_entity(model) if model else None

    async def list_all(self) -> List[Complaint]:
        stmt = select(ComplaintModel).order_by(ComplaintModel.created_at.desc())
        result = await self._session.execute(stmt)
        return [_to_entity(m) for m in result.scalars().all()]

    async def list_by_department(self, department: str) -> List[Complaint]:
        stmt = (
            select(ComplaintModel)
            .where(ComplaintModel.department == department)
            .order_by(ComplaintModel.created_at.desc())
        )
        result = await self._session.execute(stmt)
        return [_to_entity(m) for m in result.scalars().all()]

    async def create(self, draft: ComplaintDraft) -> Complaint:
        model = ComplaintModel(
            id=str(uuid4()),
            citizen_name=draft.citizen_name,
            department=draft.department,
            description=draft.description,
            location=draft.location,
            priority=draft.priority.value,
            status=draft.status.value,
            created_at=draft.created_at,
            updated_at=draft.updated_at,
            photos=list(draft.photos),
            version=1,
        )

        self._session.add(model)
        await self._session.flush()

        return _to_entity(model)

    async def update_status(self, complaint: Complaint, expected_version: int) -> Complaint:
        stmt = (
            update(ComplaintModel)
            .where(
                ComplaintModel.id == complaint.id,
                ComplaintModel.version == expected_version,
            )
            .values(
                status=complaint.status.value,
                worker_notes=complaint.worker_notes,
                updated_at=complaint.updated_at,
                version=expected_version + 1,
            )
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        if result.rowcount == 0:
            raise ConcurrentModificationException(complaint.id, expected_version)

        await self._session.flush()
        return replace(complaint, version=expected_version + 1)


class InMemoryComplaintRepository(IComplaintRepository):
    """
    Dict-backed complaint store.

    Used by scripts and tests that do not need a database.
    """

    def __init__(self, complaints: Optional[List[Complaint]] = None):
        self._items: Dict[str, Complaint] = {c.id: c for c in complaints or []}

    async def get_by_id(self, complaint_id: str) -> Optional[Complaint]:
        return self._items.get(complaint_id)

    async def list_all(self) -> List[Complaint]:
        return list(self._items.values())

    async def list_by_department(self, department: str) -> List[Complaint]:
        return [c for c in self._items.values() if c.department == department]

    async def create(self, draft: ComplaintDraft) -> Complaint:
        complaint = Complaint(
            id=str(uuid4()),
            citizen_name=draft.citizen_name,
            department=draft.department,
            description=draft.description,
            location=draft.location,
            priority=draft.priority,
            status=draft.status,
            created_at=draft.created_at,
            updated_at=draft.updated_at,
            photos=list(draft.photos),
        )
        self._items[complaint.id] = complaint
        return complaint

    async def update_status(self, complaint: Complaint, expected_version: int) -> Complaint:
        stored = self._items.get(complaint.id)
        if stored is None or stored.version != expected_version:
            raise ConcurrentModificationException(complaint.id, expected_version)
        updated = replace(complaint, version=expected_version + 1)
        self._items[complaint.id] = updated
        return updated
