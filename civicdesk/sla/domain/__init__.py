"""
SLA Domain Layer
================

Contains:
- Value Objects: SLAStatusResult
- Domain Services: SLACalculator

This layer has no dependencies on infrastructure - pure Python business logic.
"""

from civicdesk.sla.domain.value_objects import (
    SLACalculator,
    SLAStatusResult,
    as_utc,
    calculate_sla_status,
)

__all__ = [
    "SLACalculator",
    "SLAStatusResult",
    "as_utc",
    "calculate_sla_status",
]
