"""
In-memory ledger backend — for development, tests and offline runs.

Holds ledgers and snapshots in dicts keyed by company id. Fill it from
store rows (e.g. a JSON export) with load_rows().

Usage in settings.py:
    SCRAPMAN = {
        "LEDGER_BACKEND": "scrapman.adapters.memory.InMemoryLedgerBackend",
    }

WARNING: Nothing is persisted. Every process starts empty.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Mapping, Sequence
from typing import Any

from scrapman.protocols.ledger import (
    AcquisitionRecord,
    DismantlingRecord,
    SaleRecord,
    SnapshotRow,
)


class InMemoryLedgerBackend:
    """
    LedgerBackend kept entirely in process memory.

    replace_snapshot() swaps the company's list in one assignment, so it
    is transactional.
    """

    transactional = True

    def __init__(self):
        self.acquisitions: dict[Any, list[AcquisitionRecord]] = defaultdict(list)
        self.sales: dict[Any, list[SaleRecord]] = defaultdict(list)
        self.dismantlings: dict[Any, list[DismantlingRecord]] = defaultdict(list)
        self.snapshots: dict[Any, list[SnapshotRow]] = {}

    def add(self, company_id, *records) -> None:
        """Append ledger records for a company."""
        for record in records:
            if isinstance(record, AcquisitionRecord):
                self.acquisitions[company_id].append(record)
            elif isinstance(record, SaleRecord):
                self.sales[company_id].append(record)
            elif isinstance(record, DismantlingRecord):
                self.dismantlings[company_id].append(record)
            else:
                raise TypeError(f"Not a ledger record: {type(record).__name__}")

    def load_rows(
        self,
        company_id,
        acquisitions: Sequence[Mapping[str, Any]] = (),
        sales: Sequence[Mapping[str, Any]] = (),
        dismantlings: Sequence[Mapping[str, Any]] = (),
    ) -> None:
        """Append ledger records built from store-shaped rows."""
        self.add(company_id, *(AcquisitionRecord.from_row(row) for row in acquisitions))
        self.add(company_id, *(SaleRecord.from_row(row) for row in sales))
        self.add(company_id, *(DismantlingRecord.from_row(row) for row in dismantlings))

    def fetch_acquisitions(self, company_id) -> list[AcquisitionRecord]:
        return list(self.acquisitions.get(company_id, ()))

    def fetch_sales(self, company_id) -> list[SaleRecord]:
        return list(self.sales.get(company_id, ()))

    def fetch_dismantlings(self, company_id) -> list[DismantlingRecord]:
        return list(self.dismantlings.get(company_id, ()))

    def current_snapshot(self, company_id) -> list[SnapshotRow]:
        return list(self.snapshots.get(company_id, ()))

    def replace_snapshot(self, company_id, rows: Sequence[SnapshotRow]) -> int:
        self.snapshots[company_id] = list(rows)
        return len(rows)
