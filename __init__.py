"""
Scrapman — stock engine for a scrap-metal yard.

Folds acquisitions, sales and dismantlings into the per-location
inventory snapshot of a company.

Usage:
    from scrapman import stock, ScrapError

    result = stock.recalculate(company_id)
    stock.quantity(company_id, cupru)  # Decimal('70.00')
"""


def __getattr__(name):
    """Lazy import to avoid circular imports during app loading."""
    if name == 'stock':
        from scrapman.service import Stock
        return Stock
    elif name == 'ScrapError':
        from scrapman.exceptions import ScrapError
        return ScrapError
    elif name == 'reconcile':
        from scrapman.reconciliation import reconcile
        return reconcile
    elif name == 'build_snapshot':
        from scrapman.snapshot import build_snapshot
        return build_snapshot
    elif name == 'LocationType':
        from scrapman.enums import LocationType
        return LocationType
    elif name == 'Inventory':
        from scrapman.models.inventory import Inventory
        return Inventory
    elif name == 'Material':
        from scrapman.models.material import Material
        return Material
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    'stock',
    'ScrapError',
    'reconcile',
    'build_snapshot',
    'LocationType',
    'Inventory',
    'Material',
]

__version__ = '0.1.0'
