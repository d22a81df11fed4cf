"""
Complaints Infrastructure Models
================================

SQLAlchemy ORM models for the complaint store.

These are the database representations of our domain entities.
They belong in the infrastructure layer, not the domain layer.
"""

from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import JSON, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from civicdesk.config import ComplaintStatus
from civicdesk.infrastructure.database import Base


class ComplaintModel(Base):
    """
    Database model for the Complaint entity.

    Maps to the 'complaints' table.
    """
    __tablename__ = "complaints"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)

    citizen_name: Mapped[str] = mapped_column(String(200), nullable=False)
    department: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    location: Mapped[str] = mapped_column(String(500), nullable=False)

    priority: Mapped[str] = mapped_column(String(20), nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default=ComplaintStatus.NEW.value, index=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    photos: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    assigned_worker: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    worker_notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Bumped on every status write; compared at write time
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
