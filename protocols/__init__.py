"""
Scrapman Protocols.

Defines the record shapes and the storage interface the engine works with.
"""

from scrapman.protocols.ledger import (
    AcquisitionItemRecord,
    AcquisitionRecord,
    DismantlingOutputRecord,
    DismantlingRecord,
    LedgerBackend,
    Ledgers,
    SaleItemRecord,
    SaleRecord,
    SnapshotRow,
)

__all__ = [
    "AcquisitionItemRecord",
    "AcquisitionRecord",
    "DismantlingOutputRecord",
    "DismantlingRecord",
    "LedgerBackend",
    "Ledgers",
    "SaleItemRecord",
    "SaleRecord",
    "SnapshotRow",
]
