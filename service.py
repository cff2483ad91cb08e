"""
Stock Service — the single public interface for inventory operations.

Usage:
    from scrapman import stock, ScrapError

    stock.post(acquisition)                 # keep inventory current
    stock.reverse(sale)                     # before deleting a sale
    result = stock.recalculate(company_id)  # rebuild from the ledgers
    stock.quantity(company_id, cupru)       # Decimal('70.00')
"""

from scrapman.services.movements import InventoryMovements
from scrapman.services.queries import InventoryQueries
from scrapman.services.reconcile import InventoryReconciliation


class Stock(InventoryQueries, InventoryMovements, InventoryReconciliation):
    """
    Single interface for all inventory operations.

    - Queries: quantity(), total(), list_rows(), negative()
    - Movements: post(), reverse(), apply()
    - Reconciliation: read_ledgers(), compute(), recalculate()

    Inventory is derived data. post()/reverse() keep it current between
    runs; recalculate() is the authoritative rebuild and the fix for any
    drift.
    """
