"""
Core Exceptions
================

Custom exceptions for the complaint service.

Domain errors in this module are recoverable. The lifecycle and intake
services hand them back inside a typed result instead of raising them, and
the HTTP layer maps them to status codes at the boundary.
"""

from typing import Optional


class ApplicationException(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class DomainException(ApplicationException):
    """Base exception for domain logic violations."""


class RepositoryException(ApplicationException):
    """Base exception for repository/data access errors."""


class ValidationException(ApplicationException):
    """Exception for validation errors."""


class ConfigurationException(ApplicationException):
    """Exception for configuration errors."""


class ResourceNotFoundException(ApplicationException):
    """Exception when a requested resource is not found."""

    def __init__(
        self,
        resource_type: str,
        resource_id: Optional[str] = None,
        details: Optional[dict] = None
    ):
        self.resource_type = resource_type
        self.resource_id = resource_id
        message = f"{resource_type}"
        if resource_id:
            message += f" with id '{resource_id}'"
        message += " not found"
        super().__init__(message, details)


class InvalidTransitionException(DomainException):
    """Requested status is not the successor of the current status."""

    def __init__(
        self,
        complaint_id: str,
        current_status: str,
        requested_status: str,
        allowed: Optional[list] = None
    ):
        self.complaint_id = complaint_id
        self.current_status = current_status
        self.requested_status = requested_status
        self.allowed = allowed or []
        super().__init__(
            f"Cannot move complaint {complaint_id} from '{current_status}' to '{requested_status}'",
            {
                "complaint_id": complaint_id,
                "current_status": current_status,
                "requested_status": requested_status,
                "allowed": self.allowed,
            }
        )


class UnauthorizedException(DomainException):
    """Actor may not act on complaints of this department."""

    def __init__(self, actor: str, department: str, details: Optional[dict] = None):
        self.actor = actor
        self.department = department
        super().__init__(
            f"Actor '{actor}' is not allowed to act on {department} complaints",
            details or {"actor": actor, "department": department}
        )


class DuplicateComplaintException(DomainException):
    """Intake rejected because the same complaint is already on record."""

    def __init__(self, description: str, location: str):
        self.description = description
        self.location = location
        super().__init__(
            "A complaint with the same description and location already exists",
            {"description": description, "location": location}
        )


class UnknownDepartmentException(DomainException):
    """
    A complaint references a department missing from the reference table.

    Never raised by the engine: lookups fall back to defaults and this
    exception is only logged or reported.
    """

    def __init__(self, department: str, fallback: str):
        self.department = department
        self.fallback = fallback
        super().__init__(
            f"Unknown department '{department}', using {fallback}",
            {"department": department, "fallback": fallback}
        )


class ConcurrentModificationException(RepositoryException):
    """The stored complaint changed between read and write."""

    def __init__(self, complaint_id: str, expected_version: int):
        self.complaint_id = complaint_id
        self.expected_version = expected_version
        super().__init__(
            f"Complaint {complaint_id} was modified concurrently",
            {"complaint_id": complaint_id, "expected_version": expected_version}
        )
