"""
Scrapman Models.

Ledgers (read by reconciliation):
- Acquisition / AcquisitionItem: purchases, add stock
- Sale / SaleItem: deliveries, remove yard stock
- Dismantling / DismantlingOutput: material transformed in place

Derived:
- Inventory: stock per (company, material, location, contract)

Reference data: Company (tenant), Material, Contract.
"""

from scrapman.models.acquisition import Acquisition, AcquisitionItem
from scrapman.models.company import Company
from scrapman.models.contract import Contract
from scrapman.models.dismantling import Dismantling, DismantlingOutput
from scrapman.enums import AttributionType, LocationType, MaterialCategory
from scrapman.models.inventory import Inventory
from scrapman.models.material import Material
from scrapman.models.sale import Sale, SaleItem

__all__ = [
    'LocationType',
    'MaterialCategory',
    'AttributionType',
    'Company',
    'Material',
    'Contract',
    'Acquisition',
    'AcquisitionItem',
    'Sale',
    'SaleItem',
    'Dismantling',
    'DismantlingOutput',
    'Inventory',
]
