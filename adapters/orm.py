"""
Django ORM ledger backend.

Reads the ledgers from this app's own tables and writes the snapshot to
Inventory. The snapshot replacement runs in a single transaction: readers
see either the previous snapshot or the new one, never an empty table.

Vocabulary mapping:
    Ledger record           →  Model
    ─────────────────────────────────────────
    AcquisitionRecord       →  Acquisition + items
    SaleRecord              →  Sale + items
    DismantlingRecord       →  Dismantling + outputs
    SnapshotRow             →  Inventory
"""

import logging

from django.db import transaction

from scrapman.conf import scrapman_settings
from scrapman.models import Acquisition, Dismantling, Inventory, Sale
from scrapman.protocols.ledger import (
    AcquisitionItemRecord,
    AcquisitionRecord,
    DismantlingOutputRecord,
    DismantlingRecord,
    SaleItemRecord,
    SaleRecord,
    SnapshotRow,
)

logger = logging.getLogger(__name__)


def acquisition_record(acquisition: Acquisition) -> AcquisitionRecord:
    """Map an Acquisition (items prefetched or not) to its record."""
    return AcquisitionRecord(
        id=acquisition.pk,
        location_type=acquisition.location_type,
        contract_id=acquisition.contract_id,
        items=tuple(
            AcquisitionItemRecord(item.material_id, item.final_quantity)
            for item in acquisition.items.all()
        ),
    )


def sale_record(sale: Sale) -> SaleRecord:
    """Map a Sale to its record."""
    return SaleRecord(
        id=sale.pk,
        attribution_type=sale.attribution_type,
        attribution_id=sale.attribution_id,
        items=tuple(
            SaleItemRecord(item.material_id, item.final_quantity)
            for item in sale.items.all()
        ),
    )


def dismantling_record(dismantling: Dismantling) -> DismantlingRecord:
    """Map a Dismantling to its record."""
    return DismantlingRecord(
        id=dismantling.pk,
        source_material_id=dismantling.source_material_id,
        source_quantity=dismantling.source_quantity,
        location_type=dismantling.location_type,
        contract_id=dismantling.contract_id,
        outputs=tuple(
            DismantlingOutputRecord(output.material_id, output.quantity)
            for output in dismantling.outputs.all()
        ),
    )


def to_record(instance):
    """Record for any ledger model instance."""
    if isinstance(instance, Acquisition):
        return acquisition_record(instance)
    if isinstance(instance, Sale):
        return sale_record(instance)
    if isinstance(instance, Dismantling):
        return dismantling_record(instance)
    raise TypeError(f"Not a ledger model: {type(instance).__name__}")


class DjangoLedgerBackend:
    """LedgerBackend over the scrapman tables."""

    transactional = True

    def fetch_acquisitions(self, company_id) -> list[AcquisitionRecord]:
        qs = Acquisition.objects.filter(company_id=company_id).prefetch_related('items')
        return [acquisition_record(a) for a in qs]

    def fetch_sales(self, company_id) -> list[SaleRecord]:
        qs = Sale.objects.filter(company_id=company_id).prefetch_related('items')
        return [sale_record(s) for s in qs]

    def fetch_dismantlings(self, company_id) -> list[DismantlingRecord]:
        qs = Dismantling.objects.filter(company_id=company_id).prefetch_related('outputs')
        return [dismantling_record(d) for d in qs]

    def current_snapshot(self, company_id) -> list[SnapshotRow]:
        return [
            SnapshotRow(
                company_id=row.company_id,
                material_id=row.material_id,
                location_type=row.location_type,
                contract_id=row.contract_id,
                quantity=row.quantity,
            )
            for row in Inventory.objects.for_company(company_id)
        ]

    def replace_snapshot(self, company_id, rows) -> int:
        """
        Delete all company rows and bulk insert the new ones.

        Concurrency:
            - Runs under transaction.atomic()
            - Any failure rolls the delete back
        """
        objs = [
            Inventory(
                company_id=company_id,
                material_id=row.material_id,
                location_type=row.location_type,
                contract_id=row.contract_id,
                quantity=row.quantity,
            )
            for row in rows
        ]

        with transaction.atomic():
            deleted, _ = Inventory.objects.for_company(company_id).delete()
            Inventory.objects.bulk_create(objs, batch_size=scrapman_settings.INSERT_BATCH_SIZE)

        logger.debug(
            "inventory.snapshot.orm_replace",
            extra={"company_id": str(company_id), "deleted": deleted, "inserted": len(objs)},
        )
        return len(objs)
