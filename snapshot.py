"""
Snapshot — from reconciled totals to the exact inventory rows to store.

Rules, in order:
    1. Drop keys whose absolute net quantity is negligible
       (<= NEGLIGIBLE_QUANTITY, 0.001 kg by default)
    2. Round survivors to QUANTITY_DECIMAL_PLACES (2), half-up:
       12.345 -> 12.35, -12.345 -> -12.35
    3. Attach the company id

Rows come out sorted by key so two runs over the same ledgers produce
the same list.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from scrapman.conf import scrapman_settings
from scrapman.protocols.ledger import SnapshotRow
from scrapman.reconciliation import ZERO, InventoryKey


def round_quantity(quantity: Decimal, places: int | None = None) -> Decimal:
    """Round half-up (away from zero on ties) to `places` decimals."""
    if places is None:
        places = scrapman_settings.QUANTITY_DECIMAL_PLACES
    return quantity.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)


def is_negligible(quantity: Decimal, threshold: Decimal | None = None) -> bool:
    """Is this net quantity floating-point noise rather than stock?"""
    if threshold is None:
        threshold = scrapman_settings.negligible_quantity
    return abs(quantity) <= threshold


def row_sort_key(row: SnapshotRow) -> tuple:
    return (
        str(row.material_id),
        row.location_type,
        '' if row.contract_id is None else str(row.contract_id),
    )


def build_snapshot(
    totals: Mapping[InventoryKey, Decimal],
    company_id: Any,
    *,
    threshold: Decimal | None = None,
    places: int | None = None,
) -> list[SnapshotRow]:
    """
    Rows to write for a company, one per non-negligible key.

    Args:
        totals: Output of reconcile()
        company_id: Tenant the rows belong to
        threshold: Override NEGLIGIBLE_QUANTITY
        places: Override QUANTITY_DECIMAL_PLACES

    Returns:
        List of SnapshotRow, sorted by key
    """
    if threshold is None:
        threshold = scrapman_settings.negligible_quantity
    if places is None:
        places = scrapman_settings.QUANTITY_DECIMAL_PLACES

    rows = [
        SnapshotRow(
            company_id=company_id,
            material_id=key.material_id,
            location_type=key.location_type,
            contract_id=key.contract_id,
            quantity=round_quantity(quantity, places),
        )
        for key, quantity in totals.items()
        if not is_negligible(quantity, threshold)
    ]
    rows.sort(key=row_sort_key)
    return rows


@dataclass(frozen=True)
class SnapshotDrift:
    """A key whose stored quantity differs from the reconciled one."""

    key: InventoryKey
    stored: Decimal
    reconciled: Decimal

    @property
    def difference(self) -> Decimal:
        return self.reconciled - self.stored


def diff_snapshot(
    stored: Iterable[SnapshotRow],
    reconciled: Iterable[SnapshotRow],
    *,
    threshold: Decimal | None = None,
    places: int | None = None,
) -> list[SnapshotDrift]:
    """
    Compare two row sets key by key.

    Stored quantities go through the same rules as build_snapshot() first:
    negligible ones count as missing, the rest are rounded. Rows kept
    current by stock.post() hold unrounded sums and residues.

    A key missing on one side counts as zero there. Keys with equal
    quantities are left out.
    """
    if threshold is None:
        threshold = scrapman_settings.negligible_quantity
    if places is None:
        places = scrapman_settings.QUANTITY_DECIMAL_PLACES

    before = {
        InventoryKey(*row.key): round_quantity(row.quantity, places)
        for row in stored
        if not is_negligible(row.quantity, threshold)
    }
    after = {InventoryKey(*row.key): row.quantity for row in reconciled}

    drift = [
        SnapshotDrift(key, before.get(key, ZERO), after.get(key, ZERO))
        for key in before.keys() | after.keys()
        if before.get(key, ZERO) != after.get(key, ZERO)
    ]
    drift.sort(key=lambda d: (
        str(d.key.material_id),
        d.key.location_type,
        '' if d.key.contract_id is None else str(d.key.contract_id),
    ))
    return drift
