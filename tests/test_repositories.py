"""Tests for the SQLAlchemy complaint store."""

from datetime import timedelta

import pytest

from civicdesk.complaints.domain import ComplaintLifecycle
from civicdesk.complaints.infrastructure import SQLAlchemyComplaintRepository
from civicdesk.config import ComplaintStatus, Priority
from civicdesk.core import ConcurrentModificationException
from civicdesk.routing.domain import ComplaintClassifier


class TestSQLAlchemyComplaintRepository:

    @pytest.mark.asyncio
    async def test_create_and_read_back(self, db_session, now):
        repo = SQLAlchemyComplaintRepository(db_session)
        draft = ComplaintClassifier().process_new_complaint(
            "Jane Smith", "Power outage on 3rd Avenue", "3rd Avenue", ["a.jpg", "b.jpg"], now
        )

        created = await repo.create(draft)
        loaded = await repo.get_by_id(created.id)

        assert loaded.department == "Electricity"
        assert loaded.priority == Priority.MEDIUM
        assert loaded.status == ComplaintStatus.NEW
        assert loaded.photos == ["a.jpg", "b.jpg"]
        assert loaded.created_at == now
        assert loaded.version == 1

    @pytest.mark.asyncio
    async def test_missing_id(self, db_session):
        assert await SQLAlchemyComplaintRepository(db_session).get_by_id("nope") is None

    @pytest.mark.asyncio
    async def test_list_by_department(self, db_session, now):
        repo = SQLAlchemyComplaintRepository(db_session)
        classifier = ComplaintClassifier()
        await repo.create(classifier.process_new_complaint("A", "Pothole", "Elm Road", now=now))
        await repo.create(classifier.process_new_complaint("B", "Burst pipe", "Oak Avenue", now=now))

        roads = await repo.list_by_department("Roads")

        assert [c.citizen_name for c in roads] == ["A"]
        assert len(await repo.list_all()) == 2

    @pytest.mark.asyncio
    async def test_conditional_status_write(self, db_session, now):
        repo = SQLAlchemyComplaintRepository(db_session)
        created = await repo.create(
            ComplaintClassifier().process_new_complaint("A", "Burst pipe", "Oak Avenue", now=now)
        )
        later = now + timedelta(hours=1)
        seen = ComplaintLifecycle.apply_transition(created, ComplaintStatus.SEEN, "crew booked", later)

        stored = await repo.update_status(seen, expected_version=created.version)
        reloaded = await repo.get_by_id(created.id)

        assert stored.version == 2
        assert reloaded.status == ComplaintStatus.SEEN
        assert reloaded.worker_notes == "crew booked"
        assert reloaded.updated_at == later
        assert reloaded.version == 2

    @pytest.mark.asyncio
    async def test_stale_version_rejected(self, db_session, now):
        repo = SQLAlchemyComplaintRepository(db_session)
        created = await repo.create(
            ComplaintClassifier().process_new_complaint("A", "Burst pipe", "Oak Avenue", now=now)
        )
        seen = ComplaintLifecycle.apply_transition(created, ComplaintStatus.SEEN, now=now)
        await repo.update_status(seen, expected_version=1)

        with pytest.raises(ConcurrentModificationException):
            await repo.update_status(seen, expected_version=1)
