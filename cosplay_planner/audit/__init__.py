"""Audit logging package."""

from cosplay_planner.audit.logger import AuditLogger

__all__ = ["AuditLogger"]
