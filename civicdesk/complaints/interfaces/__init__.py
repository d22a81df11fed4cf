"""
Complaints Interfaces Layer
===========================

Interface adapters for the complaints module.

Contains:
- Controllers: FastAPI route handlers
- Auth: Actor resolution from request headers
"""

from civicdesk.complaints.interfaces.controllers import complaints_router

__all__ = ["complaints_router"]
