"""
Scrapman Adapters.

Implementations of the LedgerBackend protocol.
"""

from scrapman.adapters.loader import get_ledger_backend, reset_ledger_backend
from scrapman.adapters.memory import InMemoryLedgerBackend

__all__ = [
    "get_ledger_backend",
    "reset_ledger_backend",
    "InMemoryLedgerBackend",
]
