"""
SLA Interfaces Layer
====================

FastAPI routes for the SLA context.
"""

from civicdesk.sla.interfaces.controllers import sla_router

__all__ = ["sla_router"]
