"""
Routing Domain Layer
====================

Contains:
- Entities: ClassificationResult, ComplaintDraft
- Value Objects: Department, DepartmentConfig
- Domain Services: ComplaintClassifier, DuplicateDetector

Pure Python business logic, no infrastructure dependencies.
"""

from civicdesk.routing.domain.entities import ClassificationResult, ComplaintDraft
from civicdesk.routing.domain.value_objects import (
    Department,
    DepartmentConfig,
    DEFAULT_DEPARTMENTS,
)
from civicdesk.routing.domain.classifier import (
    ComplaintClassifier,
    HIGH_PRIORITY_KEYWORDS,
    MEDIUM_PRIORITY_KEYWORDS,
    DEFAULT_MEDIUM_DEPARTMENTS,
    determine_department,
    determine_priority,
    process_new_complaint,
)
from civicdesk.routing.domain.duplicates import (
    DuplicateDetector,
    normalize_text,
    is_duplicate_complaint,
)

__all__ = [
    # Entities
    "ClassificationResult",
    "ComplaintDraft",
    # Value Objects
    "Department",
    "DepartmentConfig",
    "DEFAULT_DEPARTMENTS",
    # Domain Services
    "ComplaintClassifier",
    "HIGH_PRIORITY_KEYWORDS",
    "MEDIUM_PRIORITY_KEYWORDS",
    "DEFAULT_MEDIUM_DEPARTMENTS",
    "determine_department",
    "determine_priority",
    "process_new_complaint",
    "DuplicateDetector",
    "normalize_text",
    "is_duplicate_complaint",
]
