"""
Complaints Infrastructure Layer
===============================

Infrastructure implementations for the complaint store:
- Models: SQLAlchemy ORM models
- Repositories: SQLAlchemy and in-memory stores
"""

from civicdesk.complaints.infrastructure.models import ComplaintModel
from civicdesk.complaints.infrastructure.repositories import (
    SQLAlchemyComplaintRepository,
    InMemoryComplaintRepository,
)

__all__ = [
    "ComplaintModel",
    "SQLAlchemyComplaintRepository",
    "InMemoryComplaintRepository",
]
