"""
Reconciliation — isolated, pure, reusable.

Turns ledger records into signed transaction lines and folds them into
net quantities per inventory key. No database access: records in,
totals out.

Sign and location rules:
    - Acquisition item:   +final_quantity at the acquisition's location
    - Sale item:          -final_quantity at the yard, always
    - Dismantling source: -source_quantity at the dismantling's location
    - Dismantling output: +quantity at the same location as the source

Location rules:
    - Missing location means the yard
    - contract_id is kept only when the location is CONTRACT

Examples:
    >>> totals = reconcile(acquisitions, sales, dismantlings)
    >>> totals[InventoryKey(cupru_id, 'curte', None)]
    Decimal('70.000')
"""

from collections.abc import Iterable, Iterator, Mapping
from decimal import Decimal, InvalidOperation
from typing import Any, NamedTuple

from scrapman.exceptions import ScrapError
from scrapman.enums import LocationType
from scrapman.protocols.ledger import (
    AcquisitionRecord,
    DismantlingRecord,
    Ledgers,
    SaleRecord,
)


ZERO = Decimal('0')


class InventoryKey(NamedTuple):
    """
    Composite inventory key.

    contract_id is None for every location but CONTRACT, so a missing
    contract reference and a present one never share a key.
    """

    material_id: Any
    location_type: str
    contract_id: Any = None


class TransactionLine(NamedTuple):
    """A signed quantity effect on one inventory key."""

    key: InventoryKey
    quantity: Decimal


class LineCounts(NamedTuple):
    """How many lines of each kind went into a fold."""

    acquisition_items: int
    sale_items: int
    dismantling_sources: int
    dismantling_outputs: int


YARD_LOCATION = (LocationType.YARD.value, None)


# ══════════════════════════════════════════════════════════════
# NORMALIZATION
# ══════════════════════════════════════════════════════════════


def to_quantity(value, *, source: str, record_id=None, field: str = 'quantity') -> Decimal:
    """
    Normalize a stored quantity to a non-negative Decimal.

    None counts as zero. Floats go through str() so 0.1 stays 0.1.

    Raises:
        ScrapError('MALFORMED_RECORD'): non-numeric, non-finite or negative
    """
    if value is None:
        return ZERO

    if isinstance(value, bool):
        quantity = None
    elif isinstance(value, Decimal):
        quantity = value
    elif isinstance(value, (int, float, str)):
        try:
            quantity = Decimal(str(value))
        except InvalidOperation:
            quantity = None
    else:
        quantity = None

    if quantity is None or not quantity.is_finite() or quantity < 0:
        raise ScrapError(
            'MALFORMED_RECORD',
            source=source,
            record_id=record_id,
            field=field,
            value=value,
        )
    return quantity


def resolve_location(location_type, contract_id, *, source: str, record_id=None) -> tuple[str, Any]:
    """
    Resolve (location_type, contract_id) for a record.

    Empty location means the yard; the contract reference only survives
    for CONTRACT locations.

    Raises:
        ScrapError('MALFORMED_RECORD'): unknown location value
    """
    if not location_type:
        return YARD_LOCATION

    try:
        location = LocationType(location_type).value
    except ValueError:
        raise ScrapError(
            'MALFORMED_RECORD',
            source=source,
            record_id=record_id,
            field='location_type',
            value=location_type,
        ) from None

    if location == LocationType.CONTRACT:
        return location, contract_id
    return location, None


def _material(material_id, *, source: str, record_id=None, field: str = 'material_id'):
    if material_id is None or material_id == '':
        raise ScrapError(
            'MALFORMED_RECORD',
            source=source,
            record_id=record_id,
            field=field,
        )
    return material_id


# ══════════════════════════════════════════════════════════════
# RECORD → LINES
# ══════════════════════════════════════════════════════════════


def acquisition_lines(acquisition: AcquisitionRecord) -> Iterator[TransactionLine]:
    """Each item adds its final quantity at the acquisition's location."""
    location, contract_id = resolve_location(
        acquisition.location_type, acquisition.contract_id,
        source='acquisitions', record_id=acquisition.id,
    )
    for item in acquisition.items:
        material_id = _material(item.material_id, source='acquisitions', record_id=acquisition.id)
        quantity = to_quantity(
            item.final_quantity, source='acquisitions',
            record_id=acquisition.id, field='final_quantity',
        )
        yield TransactionLine(InventoryKey(material_id, location, contract_id), quantity)


def sale_lines(sale: SaleRecord) -> Iterator[TransactionLine]:
    """Each item removes its final quantity from the yard."""
    location, contract_id = YARD_LOCATION
    for item in sale.items:
        material_id = _material(item.material_id, source='sales', record_id=sale.id)
        quantity = to_quantity(
            item.final_quantity, source='sales',
            record_id=sale.id, field='final_quantity',
        )
        yield TransactionLine(InventoryKey(material_id, location, contract_id), -quantity)


def dismantling_lines(dismantling: DismantlingRecord) -> Iterator[TransactionLine]:
    """Source leaves, outputs enter, all at the dismantling's location."""
    location, contract_id = resolve_location(
        dismantling.location_type, dismantling.contract_id,
        source='dismantlings', record_id=dismantling.id,
    )
    source_material = _material(
        dismantling.source_material_id, source='dismantlings',
        record_id=dismantling.id, field='source_material_id',
    )
    source_quantity = to_quantity(
        dismantling.source_quantity, source='dismantlings',
        record_id=dismantling.id, field='source_quantity',
    )
    yield TransactionLine(InventoryKey(source_material, location, contract_id), -source_quantity)

    for output in dismantling.outputs:
        material_id = _material(output.material_id, source='dismantlings', record_id=dismantling.id)
        quantity = to_quantity(
            output.quantity, source='dismantlings',
            record_id=dismantling.id, field='quantity',
        )
        yield TransactionLine(InventoryKey(material_id, location, contract_id), quantity)


def record_lines(record) -> list[TransactionLine]:
    """Lines of any single ledger record."""
    if isinstance(record, AcquisitionRecord):
        return list(acquisition_lines(record))
    if isinstance(record, SaleRecord):
        return list(sale_lines(record))
    if isinstance(record, DismantlingRecord):
        return list(dismantling_lines(record))
    raise TypeError(f"Not a ledger record: {type(record).__name__}")


# ══════════════════════════════════════════════════════════════
# FOLD
# ══════════════════════════════════════════════════════════════


def fold(lines: Iterable[TransactionLine]) -> dict[InventoryKey, Decimal]:
    """Sum signed lines per key into a new map. No rounding."""
    totals: dict[InventoryKey, Decimal] = {}
    for key, quantity in lines:
        totals[key] = totals.get(key, ZERO) + quantity
    return totals


def merge(*partials: Mapping[InventoryKey, Decimal]) -> dict[InventoryKey, Decimal]:
    """Combine partial folds by summing per key. Inputs are not modified."""
    totals: dict[InventoryKey, Decimal] = {}
    for partial in partials:
        for key, quantity in partial.items():
            totals[key] = totals.get(key, ZERO) + quantity
    return totals


def reconcile(
    acquisitions: Iterable[AcquisitionRecord],
    sales: Iterable[SaleRecord],
    dismantlings: Iterable[DismantlingRecord],
) -> dict[InventoryKey, Decimal]:
    """
    Net quantity per inventory key over the three ledgers.

    Each ledger is folded on its own and the three partial maps merged,
    so the result does not depend on row order or on how the ledgers were
    split.

    Raises:
        ScrapError('MALFORMED_RECORD'): any record that cannot be folded.
            Nothing is returned for a ledger with a bad line.
    """
    return merge(
        fold(line for acquisition in acquisitions for line in acquisition_lines(acquisition)),
        fold(line for sale in sales for line in sale_lines(sale)),
        fold(line for dismantling in dismantlings for line in dismantling_lines(dismantling)),
    )


def reconcile_ledgers(ledgers: Ledgers) -> dict[InventoryKey, Decimal]:
    """reconcile() over a Ledgers tuple."""
    return reconcile(ledgers.acquisitions, ledgers.sales, ledgers.dismantlings)


def count_lines(ledgers: Ledgers) -> LineCounts:
    return LineCounts(
        acquisition_items=sum(len(a.items) for a in ledgers.acquisitions),
        sale_items=sum(len(s.items) for s in ledgers.sales),
        dismantling_sources=len(ledgers.dismantlings),
        dismantling_outputs=sum(len(d.outputs) for d in ledgers.dismantlings),
    )
