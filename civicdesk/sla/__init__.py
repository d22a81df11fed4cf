"""
SLA Monitoring Module
=====================

Bounded Context for per-department resolution windows.

Responsibilities:
- Compute remaining SLA time and urgency bucket for a complaint
- Aggregate dashboard and analytics figures over a complaint set
"""
