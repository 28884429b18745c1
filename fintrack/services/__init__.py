"""
Services package.

The ledger lives in fintrack.services.ledger and is imported from there;
only the storage layer is re-exported here.
"""

from fintrack.services.storage import (
    AuditStorageInterface,
    InMemoryAuditStorage,
)

__all__ = [
    # Storage services
    "AuditStorageInterface",
    "InMemoryAuditStorage",
]
