"""
Complaints Module
=================

Bounded Context for the complaint record and its workflow.

Responsibilities:
- Intake: duplicate check, classification, persistence
- Status updates through the lifecycle state machine
- Role-scoped listing with search, filters and sort
"""
