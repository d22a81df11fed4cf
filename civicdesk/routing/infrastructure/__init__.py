"""
Routing Infrastructure Layer
============================

- External: YAML department table with watchdog hot reload
"""

from civicdesk.routing.infrastructure.external import (
    DepartmentConfigManager,
    department_config_manager,
    get_department_provider,
)

__all__ = [
    "DepartmentConfigManager",
    "department_config_manager",
    "get_department_provider",
]
