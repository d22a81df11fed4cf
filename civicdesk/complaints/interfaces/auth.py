"""
Actor Resolution
================

Turns an incoming request into an explicit `Actor`.

Credential checking belongs to an external identity service; the shipped
authenticator trusts headers set by the gateway in front of this service.
"""

from abc import ABC, abstractmethod
from typing import Optional

from fastapi import Depends, HTTPException, Request, status

from civicdesk.complaints.domain import Actor
from civicdesk.config import ActorRole
from civicdesk.shared.infrastructure.logging import get_context_logger, get_logger

logger = get_logger(__name__)

USERNAME_HEADER = "X-Actor-Username"
ROLE_HEADER = "X-Actor-Role"
DEPARTMENT_HEADER = "X-Actor-Department"


class IAuthenticator(ABC):
    """Interface for resolving the calling actor."""

    @abstractmethod
    def authenticate(self, request: Request) -> Optional[Actor]:
        """Return the actor, or None when the request is anonymous or malformed."""


class HeaderAuthenticator(IAuthenticator):
    """Reads the actor from gateway-provided headers."""

    def authenticate(self, request: Request) -> Optional[Actor]:
        username = request.headers.get(USERNAME_HEADER)
        role = request.headers.get(ROLE_HEADER)
        department = request.headers.get(DEPARTMENT_HEADER) or None

        if not username or not role:
            return None

        try:
            return Actor(username=username, role=ActorRole(role), department=department)
        except ValueError as e:
            logger.info("Rejected actor headers", extra={"actor": username, "error": str(e)})
            return None


def get_authenticator() -> IAuthenticator:
    return HeaderAuthenticator()


def get_current_actor(
    request: Request,
    authenticator: IAuthenticator = Depends(get_authenticator)
) -> Actor:
    """FastAPI dependency resolving the actor or failing with 401."""
    actor = authenticator.authenticate(request)
    if actor is None:
        correlation_id = getattr(request.state, "correlation_id", None)
        get_context_logger(__name__, correlation_id).info("Request rejected without a valid actor")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Missing or invalid {USERNAME_HEADER}/{ROLE_HEADER} headers"
        )
    return actor
