"""
Routing Module
==============

Bounded Context for turning a citizen's free-text complaint into a routed
work item.

Responsibilities:
- Hold the department reference table (keywords + SLA hours)
- Classify descriptions into a department and a priority tier
- Reject resubmissions of complaints already on record
"""
