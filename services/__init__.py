"""
Inventory services — modular organization of inventory operations.

    from scrapman.services import InventoryQueries, InventoryMovements, InventoryReconciliation
"""

from scrapman.services.movements import InventoryMovements
from scrapman.services.queries import InventoryQueries
from scrapman.services.reconcile import InventoryReconciliation, ReconciliationResult

__all__ = [
    'InventoryQueries',
    'InventoryMovements',
    'InventoryReconciliation',
    'ReconciliationResult',
]
