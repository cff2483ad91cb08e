"""
Ledger Protocol — record shapes and the backend that reads/writes them.

Scrapman defines the records it folds and the interface it reads them
through. The Django ORM backend (scrapman.adapters.orm) implements it for
this app's own tables; any other store (REST, SQL dump, fixtures) only has
to produce the same records.

Quantities are whatever the store hands over (Decimal, float, int, str or
None); the reconciliation engine normalizes them.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Mapping, NamedTuple, Protocol, Sequence, runtime_checkable


@dataclass(frozen=True)
class AcquisitionItemRecord:
    """Acquisition line: +final_quantity of material_id."""

    material_id: Any
    final_quantity: Any = None


@dataclass(frozen=True)
class AcquisitionRecord:
    """Purchase with its items. location_type None means the yard."""

    id: Any
    location_type: str | None = None
    contract_id: Any = None
    items: tuple[AcquisitionItemRecord, ...] = ()

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> AcquisitionRecord:
        """Build from a store row shaped like `acquisitions` + `items`."""
        return cls(
            id=row.get('id'),
            location_type=row.get('location_type'),
            contract_id=row.get('contract_id'),
            items=tuple(
                AcquisitionItemRecord(
                    material_id=item.get('material_id'),
                    final_quantity=item.get('final_quantity'),
                )
                for item in row.get('items') or ()
            ),
        )


@dataclass(frozen=True)
class SaleItemRecord:
    """Sale line: -final_quantity of material_id."""

    material_id: Any
    final_quantity: Any = None


@dataclass(frozen=True)
class SaleRecord:
    """
    Sale with its items.

    attribution_* are carried for completeness only: sales deplete the yard
    whatever they are attributed to.
    """

    id: Any
    items: tuple[SaleItemRecord, ...] = ()
    attribution_type: str | None = None
    attribution_id: Any = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> SaleRecord:
        """Build from a store row shaped like `sales` + `items`."""
        return cls(
            id=row.get('id'),
            attribution_type=row.get('attribution_type'),
            attribution_id=row.get('attribution_id'),
            items=tuple(
                SaleItemRecord(
                    material_id=item.get('material_id'),
                    final_quantity=item.get('final_quantity'),
                )
                for item in row.get('items') or ()
            ),
        )


@dataclass(frozen=True)
class DismantlingOutputRecord:
    """Dismantling output: +quantity of material_id."""

    material_id: Any
    quantity: Any = None


@dataclass(frozen=True)
class DismantlingRecord:
    """Dismantling: -source_quantity of the source, +each output, same place."""

    id: Any
    source_material_id: Any
    source_quantity: Any = None
    location_type: str | None = None
    contract_id: Any = None
    outputs: tuple[DismantlingOutputRecord, ...] = ()

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> DismantlingRecord:
        """Build from a store row shaped like `dismantlings` + `outputs`."""
        return cls(
            id=row.get('id'),
            source_material_id=row.get('source_material_id'),
            source_quantity=row.get('source_quantity'),
            location_type=row.get('location_type'),
            contract_id=row.get('contract_id'),
            outputs=tuple(
                DismantlingOutputRecord(
                    material_id=output.get('material_id'),
                    quantity=output.get('quantity'),
                )
                for output in row.get('outputs') or ()
            ),
        )


class Ledgers(NamedTuple):
    """The three ledgers of one company, fully materialized."""

    acquisitions: Sequence[AcquisitionRecord]
    sales: Sequence[SaleRecord]
    dismantlings: Sequence[DismantlingRecord]


@dataclass(frozen=True)
class SnapshotRow:
    """One inventory row as stored: the output of a reconciliation run."""

    company_id: Any
    material_id: Any
    location_type: str
    contract_id: Any
    quantity: Decimal

    @property
    def key(self) -> tuple:
        return (self.material_id, self.location_type, self.contract_id)


@runtime_checkable
class LedgerBackend(Protocol):
    """
    Protocol for ledger storage.

    Implementations should provide:
    - The three ledger reads, scoped to one company, full history
    - The currently stored snapshot (for drift checks)
    - Snapshot replacement (delete all company rows, insert the new ones)

    `transactional` tells the caller whether replace_snapshot() is atomic.
    When it is not, a failure may have left the stored snapshot empty or
    partial, and the caller reports it as such.
    """

    transactional: bool

    def fetch_acquisitions(self, company_id: Any) -> Sequence[AcquisitionRecord]:
        """
        Read all acquisitions of a company, with their items.

        Raises:
            Any exception on store failure. Never return partial data.
        """
        ...

    def fetch_sales(self, company_id: Any) -> Sequence[SaleRecord]:
        """Read all sales of a company, with their items."""
        ...

    def fetch_dismantlings(self, company_id: Any) -> Sequence[DismantlingRecord]:
        """Read all dismantlings of a company, with their outputs."""
        ...

    def current_snapshot(self, company_id: Any) -> list[SnapshotRow]:
        """Return the inventory rows currently stored for a company."""
        ...

    def replace_snapshot(self, company_id: Any, rows: Sequence[SnapshotRow]) -> int:
        """
        Replace every inventory row of the company with `rows`.

        Returns:
            Number of rows written
        """
        ...
