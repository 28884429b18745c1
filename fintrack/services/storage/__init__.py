"""
Storage Services Package

Provides the audit sink interface and an in-memory implementation.
"""

from fintrack.services.storage.interface import AuditStorageInterface
from fintrack.services.storage.memory import InMemoryAuditStorage

__all__ = [
    # Interfaces
    "AuditStorageInterface",
    # In-memory implementation
    "InMemoryAuditStorage",
]
