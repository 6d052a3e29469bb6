"""Audit trail for identity changes and hook invocations."""

from .logger import AuditLogger

__all__ = ["AuditLogger"]
