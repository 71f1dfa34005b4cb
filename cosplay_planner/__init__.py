"""
Cosplay Planner - Core Package

Tracks cosplay builds: projects tied to an event date and budget,
their expenses and checklist tasks, milestone reminders before the
event, and spending statistics.

DESIGN PRINCIPLES:
1. Entities are immutable snapshots; derived values are computed on read
2. Forms validate, the store trusts
3. Storage and reminder failures never reach the user
4. Every side effect is auditable
5. Storage and reminder delivery are swappable
"""

__version__ = "1.0.0"
__author__ = "Cosplay Planner Team"
