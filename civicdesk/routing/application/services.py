"""
Routing Application Services
============================

Orchestrates classification against the current department table.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from civicdesk.routing.domain import (
    ClassificationResult,
    ComplaintClassifier,
    Department,
    DepartmentConfig,
)
from civicdesk.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)


# ========== Provider Interfaces ==========

class IDepartmentProvider(ABC):
    """Interface for department reference data access."""

    @abstractmethod
    def get_config(self) -> DepartmentConfig:
        """Get the current department table."""


class StaticDepartmentProvider(IDepartmentProvider):
    """Fixed in-memory department table."""

    def __init__(self, config: Optional[DepartmentConfig] = None):
        self._config = config or DepartmentConfig()

    def get_config(self) -> DepartmentConfig:
        return self._config


# ========== Application Services ==========

class RoutingService:
    """
    Classifies complaint text using whatever department table is current.

    The table is read on every call so a hot reload takes effect for the
    next request.
    """

    def __init__(self, department_provider: IDepartmentProvider):
        self._departments = department_provider

    def classifier(self) -> ComplaintClassifier:
        return ComplaintClassifier(self._departments.get_config())

    def classify(self, description: str) -> ClassificationResult:
        result = self.classifier().classify(description)
        logger.info(
            "Complaint classified",
            extra={
                "department": result.department,
                "priority": result.priority.value,
                "matched_keyword": result.matched_keyword,
                "priority_trigger": result.priority_trigger,
            }
        )
        if result.used_fallback:
            logger.info(
                "No department keyword matched, using default department",
                extra={"department": result.department}
            )
        return result

    def list_departments(self) -> List[Department]:
        return list(self._departments.get_config().departments)

    def sla_hours_for(self, department: str) -> int:
        return self._departments.get_config().get_sla_hours(department)
