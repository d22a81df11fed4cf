"""
Routing Interfaces Layer
========================

FastAPI route handlers for classification and department lookup.
"""

from civicdesk.routing.interfaces.controllers import routing_router

__all__ = ["routing_router"]
