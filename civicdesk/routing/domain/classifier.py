"""
Complaint Classifier
====================

Keyword rule engine assigning a department and a priority tier.

Ordering is the contract here: departments are scanned in table order,
keywords in the order listed, and priority tiers High > Medium >
department default > Low. The first match wins at every level, so
reordering any list changes classification outcomes.
"""

from datetime import datetime, timezone
from typing import Iterable, List, Optional, Sequence, Tuple

from civicdesk.config import Priority
from civicdesk.routing.domain.entities import ClassificationResult, ComplaintDraft
from civicdesk.routing.domain.value_objects import DepartmentConfig

HIGH_PRIORITY_KEYWORDS: Tuple[str, ...] = (
    "emergency", "urgent", "dangerous", "accident", "fire", "flood", "outbreak",
    "broken wire", "gas leak", "major", "critical", "immediate", "unsafe",
)

MEDIUM_PRIORITY_KEYWORDS: Tuple[str, ...] = (
    "outage", "leakage", "pothole", "repair", "maintenance", "broken", "damaged",
)

# Sanitation and public health default to Medium when no trigger term fires
DEFAULT_MEDIUM_DEPARTMENTS: Tuple[str, ...] = ("Health", "Garbage")


def _first_match(text: str, keywords: Iterable[str]) -> Optional[str]:
    for keyword in keywords:
        if keyword in text:
            return keyword
    return None


class ComplaintClassifier:
    """
    Stateless classification rules bound to a department table.

    Every method is total: unmatched text falls back to the configured
    default department and to Low priority.
    """

    def __init__(self, config: Optional[DepartmentConfig] = None):
        self._config = config or DepartmentConfig()

    @property
    def config(self) -> DepartmentConfig:
        return self._config

    def match_department(self, description: str) -> Tuple[str, Optional[str]]:
        """Return (department name, matched keyword or None)."""
        text = description.lower()
        for department in self._config.departments:
            keyword = _first_match(text, department.keywords)
            if keyword is not None:
                return department.name, keyword
        return self._config.default_department, None

    def determine_department(self, description: str) -> str:
        """First department whose keyword occurs in the description."""
        return self.match_department(description)[0]

    def match_priority(self, description: str, department: str) -> Tuple[Priority, Optional[str]]:
        """Return (priority, trigger term or None)."""
        text = description.lower()

        trigger = _first_match(text, HIGH_PRIORITY_KEYWORDS)
        if trigger is not None:
            return Priority.HIGH, trigger

        trigger = _first_match(text, MEDIUM_PRIORITY_KEYWORDS)
        if trigger is not None:
            return Priority.MEDIUM, trigger

        if department in DEFAULT_MEDIUM_DEPARTMENTS:
            return Priority.MEDIUM, None

        return Priority.LOW, None

    def determine_priority(self, description: str, department: str) -> Priority:
        return self.match_priority(description, department)[0]

    def classify(self, description: str) -> ClassificationResult:
        """Department and priority with the rules that produced them."""
        department, keyword = self.match_department(description)
        priority, trigger = self.match_priority(description, department)
        return ClassificationResult(
            department=department,
            priority=priority,
            matched_keyword=keyword,
            priority_trigger=trigger,
        )

    def process_new_complaint(
        self,
        citizen_name: str,
        description: str,
        location: str,
        photos: Optional[Sequence[str]] = None,
        now: Optional[datetime] = None,
    ) -> ComplaintDraft:
        """
        Build a classified draft with status New.

        Both timestamps are set to the same instant.
        """
        result = self.classify(description)
        timestamp = now or datetime.now(timezone.utc)
        return ComplaintDraft(
            citizen_name=citizen_name,
            department=result.department,
            description=description,
            location=location,
            priority=result.priority,
            created_at=timestamp,
            updated_at=timestamp,
            photos=list(photos or []),
        )


_default_classifier = ComplaintClassifier()


def determine_department(description: str, config: Optional[DepartmentConfig] = None) -> str:
    classifier = ComplaintClassifier(config) if config else _default_classifier
    return classifier.determine_department(description)


def determine_priority(
    description: str,
    department: str,
    config: Optional[DepartmentConfig] = None,
) -> Priority:
    classifier = ComplaintClassifier(config) if config else _default_classifier
    return classifier.determine_priority(description, department)


def process_new_complaint(
    citizen_name: str,
    description: str,
    location: str,
    photos: Optional[List[str]] = None,
    config: Optional[DepartmentConfig] = None,
) -> ComplaintDraft:
    classifier = ComplaintClassifier(config) if config else _default_classifier
    return classifier.process_new_complaint(citizen_name, description, location, photos)
