"""
Inventory reconciliation — rebuild a company's inventory from its ledgers.

    read (3 ledgers) → reconcile (pure fold) → build_snapshot → replace

A run either writes the complete snapshot or fails before writing and
leaves the stored one untouched. The one exception is a backend whose
replace_snapshot() is not transactional failing half-way; that is
reported as SNAPSHOT_WRITE_PARTIAL.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any

from django.db import connections

from scrapman.adapters.loader import get_ledger_backend
from scrapman.conf import scrapman_settings
from scrapman.exceptions import ScrapError
from scrapman.protocols.ledger import Ledgers, SnapshotRow
from scrapman.reconciliation import LineCounts, count_lines, reconcile_ledgers
from scrapman.snapshot import SnapshotDrift, build_snapshot, diff_snapshot

logger = logging.getLogger('scrapman')


@dataclass
class ReconciliationResult:
    """Outcome of one recalculate() run."""

    company_id: Any
    rows: list[SnapshotRow]
    counts: LineCounts
    written: bool = False
    drift: list[SnapshotDrift] = field(default_factory=list)

    @property
    def negative(self) -> list[SnapshotRow]:
        """Rows below zero: sales or dismantlings without matching stock."""
        return [row for row in self.rows if row.quantity < 0]

    def top(self, limit: int) -> list[SnapshotRow]:
        """Largest stock rows first."""
        return sorted(self.rows, key=lambda row: row.quantity, reverse=True)[:limit]


def _read(source: str, fetch, company_id) -> list:
    try:
        records = list(fetch(company_id))
    except Exception as exc:
        logger.error(
            "inventory.ledger.read_failed",
            extra={"source": source, "company_id": str(company_id), "error": str(exc)},
        )
        raise ScrapError(
            'LEDGER_READ_FAILED',
            source=source,
            company_id=str(company_id),
            error=str(exc),
        ) from exc

    logger.info(
        "inventory.ledger.read",
        extra={"source": source, "company_id": str(company_id), "count": len(records)},
    )
    return records


def _read_in_thread(source: str, fetch, company_id) -> list:
    # Worker threads get their own DB connections; close them on the way out.
    try:
        return _read(source, fetch, company_id)
    finally:
        connections.close_all()


class InventoryReconciliation:
    """Snapshot rebuild methods."""

    @classmethod
    def read_ledgers(cls, company_id, backend=None, parallel: bool | None = None) -> Ledgers:
        """
        Read the three ledgers of a company.

        Args:
            company_id: Tenant to read
            backend: LedgerBackend (None = configured backend)
            parallel: Read on a thread pool (None = PARALLEL_READS setting)

        Raises:
            ScrapError('LEDGER_READ_FAILED'): If any of the reads fails.
                No partial Ledgers is ever returned.
        """
        backend = backend or get_ledger_backend()
        if parallel is None:
            parallel = scrapman_settings.PARALLEL_READS

        readers = {
            'acquisitions': backend.fetch_acquisitions,
            'sales': backend.fetch_sales,
            'dismantlings': backend.fetch_dismantlings,
        }

        if parallel:
            with ThreadPoolExecutor(max_workers=len(readers), thread_name_prefix='scrapman-ledger') as pool:
                futures = {
                    source: pool.submit(_read_in_thread, source, fetch, company_id)
                    for source, fetch in readers.items()
                }
            # Pool has joined: every read finished or failed.
            results = {source: future.result() for source, future in futures.items()}
        else:
            results = {
                source: _read(source, fetch, company_id)
                for source, fetch in readers.items()
            }

        return Ledgers(**results)

    @classmethod
    def compute(cls, ledgers: Ledgers, company_id) -> list[SnapshotRow]:
        """Rows the snapshot of `company_id` should hold for these ledgers."""
        return build_snapshot(reconcile_ledgers(ledgers), company_id)

    @classmethod
    def recalculate(cls, company_id, backend=None, dry_run: bool = False,
                    parallel: bool | None = None) -> ReconciliationResult:
        """
        Rebuild the inventory snapshot of a company from its ledgers.

        Args:
            company_id: Tenant to rebuild
            backend: LedgerBackend (None = configured backend)
            dry_run: Compute and compare with the stored snapshot, write nothing
            parallel: Read ledgers concurrently (None = PARALLEL_READS setting)

        Returns:
            ReconciliationResult (drift filled only on dry_run)

        Raises:
            ScrapError('LEDGER_READ_FAILED'): A ledger could not be read.
                Nothing was written.
            ScrapError('MALFORMED_RECORD'): A record cannot be folded.
                Nothing was written.
            ScrapError('SNAPSHOT_WRITE_FAILED'): Transactional write failed,
                previous snapshot kept.
            ScrapError('SNAPSHOT_WRITE_PARTIAL'): Non-transactional write
                failed, stored snapshot may be empty or partial.
        """
        backend = backend or get_ledger_backend()

        ledgers = cls.read_ledgers(company_id, backend=backend, parallel=parallel)
        rows = cls.compute(ledgers, company_id)
        result = ReconciliationResult(company_id=company_id, rows=rows, counts=count_lines(ledgers))

        logger.info(
            "inventory.reconciled",
            extra={
                "company_id": str(company_id),
                "acquisition_items": result.counts.acquisition_items,
                "sale_items": result.counts.sale_items,
                "dismantling_sources": result.counts.dismantling_sources,
                "dismantling_outputs": result.counts.dismantling_outputs,
                "rows": len(rows),
                "dry_run": dry_run,
            },
        )

        if dry_run:
            stored = _read('inventory', backend.current_snapshot, company_id)
            result.drift = diff_snapshot(stored, rows)
        else:
            cls._replace(backend, company_id, rows)
            result.written = True

        for row in result.negative:
            logger.warning(
                "inventory.negative_stock",
                extra={
                    "company_id": str(company_id),
                    "material_id": str(row.material_id),
                    "location_type": row.location_type,
                    "contract_id": str(row.contract_id) if row.contract_id else None,
                    "quantity": str(row.quantity),
                },
            )

        return result

    @classmethod
    def _replace(cls, backend, company_id, rows: list[SnapshotRow]) -> None:
        transactional = getattr(backend, 'transactional', False)
        try:
            written = backend.replace_snapshot(company_id, rows)
        except Exception as exc:
            code = 'SNAPSHOT_WRITE_FAILED' if transactional else 'SNAPSHOT_WRITE_PARTIAL'
            logger.error(
                "inventory.snapshot.write_failed",
                extra={"company_id": str(company_id), "code": code, "error": str(exc)},
            )
            raise ScrapError(
                code,
                company_id=str(company_id),
                rows=len(rows),
                error=str(exc),
            ) from exc

        logger.info(
            "inventory.snapshot.replaced",
            extra={"company_id": str(company_id), "rows": written},
        )
