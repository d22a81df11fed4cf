"""
CivicDesk
=========

Municipal complaint intake service: routes citizen complaints to a
department, tracks them against per-department SLA windows and moves them
through a fixed resolution workflow.
"""

__version__ = "1.0.0"
