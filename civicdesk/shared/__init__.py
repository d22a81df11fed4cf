"""
Shared Kernel Module
====================

Shared infrastructure used across all bounded contexts (routing, SLA,
complaints).

DO NOT add routing, SLA or lifecycle rules to the shared kernel.
"""
