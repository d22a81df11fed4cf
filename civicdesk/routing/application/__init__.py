"""
Routing Application Layer
=========================

Contains:
- Services: Classification orchestration
- DTOs: Data transfer objects for API serialization
"""

from civicdesk.routing.application.dto import (
    ClassifyRequest,
    ClassificationResponse,
    DepartmentResponse,
    DepartmentListResponse,
)
from civicdesk.routing.application.services import (
    RoutingService,
    IDepartmentProvider,
    StaticDepartmentProvider,
)

__all__ = [
    # DTOs
    "ClassifyRequest",
    "ClassificationResponse",
    "DepartmentResponse",
    "DepartmentListResponse",
    # Services
    "RoutingService",
    # Provider Interfaces
    "IDepartmentProvider",
    "StaticDepartmentProvider",
]
