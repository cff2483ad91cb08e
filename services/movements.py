"""
Inventory movements — keep the snapshot current as ledger records are saved.

Posting applies exactly the signed lines reconciliation would fold for the
record, so a recalculate() after any sequence of post()/reverse() calls
on saved records changes nothing; the dry-run comparison applies the
same rounding and negligible filter to the stored side.

All methods use transaction.atomic() with row locks.
"""

import logging
from decimal import Decimal

from django.db import transaction
from django.db.models import F
from django.utils import timezone

from scrapman.exceptions import ScrapError
from scrapman.models.inventory import Inventory
from scrapman.protocols.ledger import AcquisitionRecord, DismantlingRecord, SaleRecord
from scrapman.reconciliation import TransactionLine, fold, record_lines

logger = logging.getLogger('scrapman')

_RECORD_TYPES = (AcquisitionRecord, SaleRecord, DismantlingRecord)


def _as_record(record):
    if isinstance(record, _RECORD_TYPES):
        return record
    from scrapman.adapters.orm import to_record
    return to_record(record)


class InventoryMovements:
    """Incremental inventory updates."""

    @classmethod
    def post(cls, record, company_id=None) -> list[Inventory]:
        """
        Apply a saved record to inventory.

        Args:
            record: Acquisition, Sale or Dismantling (model or record)
            company_id: Required for plain records; models carry their own

        Returns:
            Inventory rows touched, refreshed

        Raises:
            ScrapError('COMPANY_REQUIRED'): plain record and no company_id
            ScrapError('MALFORMED_RECORD'): record cannot be folded

        Concurrency:
            - Runs under transaction.atomic()
            - Locks each touched Inventory row (select_for_update)
            - Quantity updated with F() expressions
        """
        company_id = cls._company_id(record, company_id)
        lines = record_lines(_as_record(record))
        rows = cls.apply(company_id, lines)
        logger.info(
            "inventory.post",
            extra={
                "company_id": str(company_id),
                "record": type(record).__name__,
                "record_id": str(getattr(record, 'id', getattr(record, 'pk', None))),
                "rows": len(rows),
            },
        )
        return rows

    @classmethod
    def reverse(cls, record, company_id=None) -> list[Inventory]:
        """
        Undo a record's effect, e.g. before deleting a sale.

        Call it while the record still has its items/outputs.
        """
        company_id = cls._company_id(record, company_id)
        lines = [
            TransactionLine(line.key, -line.quantity)
            for line in record_lines(_as_record(record))
        ]
        rows = cls.apply(company_id, lines)
        logger.info(
            "inventory.reverse",
            extra={
                "company_id": str(company_id),
                "record": type(record).__name__,
                "record_id": str(getattr(record, 'id', getattr(record, 'pk', None))),
                "rows": len(rows),
            },
        )
        return rows

    @classmethod
    def apply(cls, company_id, lines) -> list[Inventory]:
        """
        Add signed lines to the stored inventory of a company.

        Lines on the same key are combined first. Missing rows are created,
        and quantities may go negative (same as reconciliation).
        """
        deltas = fold(lines)
        touched = []

        with transaction.atomic():
            for key, delta in deltas.items():
                if delta == Decimal('0'):
                    continue

                row, _ = Inventory.objects.select_for_update().get_or_create(
                    company_id=company_id,
                    material_id=key.material_id,
                    location_type=key.location_type,
                    contract_id=key.contract_id,
                )
                Inventory.objects.filter(pk=row.pk).update(
                    quantity=F('quantity') + delta,
                    updated_at=timezone.now(),
                )
                row.refresh_from_db()
                touched.append(row)

        return touched

    @staticmethod
    def _company_id(record, company_id):
        if company_id is not None:
            return company_id
        company_id = getattr(record, 'company_id', None)
        if company_id is None:
            raise ScrapError('COMPANY_REQUIRED', record=type(record).__name__)
        return company_id
