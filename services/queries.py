"""
Inventory queries — read-only operations.

All methods are classmethod on Stock and use no locking.
"""

from decimal import Decimal

from django.db.models import Sum
from django.db.models.functions import Coalesce

from scrapman.enums import LocationType
from scrapman.models.inventory import Inventory


def _pk(obj):
    return getattr(obj, 'pk', obj)


class InventoryQueries:
    """Read-only inventory query methods."""

    @classmethod
    def quantity(cls, company_id, material, location_type: str = LocationType.YARD,
                 contract=None) -> Decimal:
        """
        Stored quantity of a material at one location.

        Args:
            company_id: Tenant
            material: Material or material id
            location_type: LocationType (default yard)
            contract: Contract or id, only used for CONTRACT locations

        Returns:
            Decimal (0 when no row exists)
        """
        qs = Inventory.objects.for_company(company_id).filter(
            material_id=_pk(material),
        ).at_location(location_type, _pk(contract))
        return qs.aggregate(
            t=Coalesce(Sum('quantity'), Decimal('0'))
        )['t']

    @classmethod
    def total(cls, company_id, material) -> Decimal:
        """Quantity of a material over every location."""
        return Inventory.objects.for_company(company_id).filter(
            material_id=_pk(material),
        ).aggregate(
            t=Coalesce(Sum('quantity'), Decimal('0'))
        )['t']

    @classmethod
    def list_rows(cls, company_id, location_type: str | None = None,
                  include_empty: bool = False):
        """Inventory rows with material and contract loaded, newest first."""
        qs = Inventory.objects.for_company(company_id).select_related('material', 'contract')

        if location_type is not None:
            qs = qs.filter(location_type=location_type)

        if not include_empty:
            qs = qs.in_stock()

        return qs.order_by('-updated_at')

    @classmethod
    def negative(cls, company_id):
        """Rows below zero, i.e. stock consumed that was never recorded in."""
        return Inventory.objects.for_company(company_id).negative().select_related('material')
