"""
Inventory model — derived stock per (material, location, contract).
"""

import uuid
from decimal import Decimal

from django.db import models
from django.db.models import Q
from django.utils.translation import gettext_lazy as _

from scrapman.enums import LocationType


class InventoryQuerySet(models.QuerySet):
    """QuerySet with helper filters for Inventory rows."""

    def for_company(self, company_id):
        return self.filter(company_id=company_id)

    def at_location(self, location_type, contract_id=None):
        """Filter by location. contract_id is only meaningful for CONTRACT."""
        qs = self.filter(location_type=location_type)
        if location_type == LocationType.CONTRACT:
            if contract_id is None:
                return qs.filter(contract__isnull=True)
            return qs.filter(contract_id=contract_id)
        return qs

    def in_stock(self):
        """Rows with positive quantity (what the inventory page lists)."""
        return self.filter(quantity__gt=0)

    def negative(self):
        """Rows below zero. Always a data error upstream."""
        return self.filter(quantity__lt=0)


class Inventory(models.Model):
    """
    Quantity of a material at one location of one company.

    This table is a derived view of the acquisition, sale and dismantling
    ledgers; it has no data of its own:
    - stock.post()/stock.reverse() keep it current as records are saved
    - stock.recalculate() rebuilds the whole company snapshot from the ledgers

    Key: (company, material, location_type, contract). contract is set
    only when location_type is CONTRACT.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    company = models.ForeignKey(
        'scrapman.Company',
        on_delete=models.CASCADE,
        related_name='inventory',
        verbose_name=_('Firma'),
    )
    material = models.ForeignKey(
        'scrapman.Material',
        on_delete=models.PROTECT,
        related_name='inventory',
        verbose_name=_('Material'),
    )
    location_type = models.CharField(
        max_length=20,
        choices=LocationType.choices,
        default=LocationType.YARD,
        verbose_name=_('Locatie'),
    )
    contract = models.ForeignKey(
        'scrapman.Contract',
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='inventory',
        verbose_name=_('Contract'),
    )
    quantity = models.DecimalField(
        max_digits=14,
        decimal_places=3,
        default=Decimal('0'),
        verbose_name=_('Cantitate (kg)'),
    )

    updated_at = models.DateTimeField(auto_now=True)

    objects = InventoryQuerySet.as_manager()

    class Meta:
        verbose_name = _('Stoc')
        verbose_name_plural = _('Stocuri')
        constraints = [
            models.UniqueConstraint(
                fields=['company', 'material', 'location_type', 'contract'],
                condition=Q(contract__isnull=False),
                name='unique_inventory_contract_key',
            ),
            models.UniqueConstraint(
                fields=['company', 'material', 'location_type'],
                condition=Q(contract__isnull=True),
                name='unique_inventory_key',
            ),
        ]
        indexes = [
            models.Index(fields=['company', 'material'], name='scrapman_in_company_2b7e9f_idx'),
        ]

    @property
    def key(self) -> tuple:
        """Structural key, same shape as reconciliation.InventoryKey."""
        from scrapman.reconciliation import InventoryKey
        return InventoryKey(self.material_id, self.location_type, self.contract_id)

    def __str__(self) -> str:
        where = f"contract {self.contract_id}" if self.contract_id else self.location_type
        return f"{self.material} [{where}]: {self.quantity}"
