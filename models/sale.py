"""
Sale models — deliveries to clients, the ledger that removes yard stock.
"""

import uuid
from decimal import Decimal

from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from scrapman.enums import AttributionType


class Sale(models.Model):
    """
    A sale to a client.

    Sales always leave from the yard. attribution_type/attribution_id only
    say which contract the revenue is reported against; they never
    change which stock is depleted.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    company = models.ForeignKey(
        'scrapman.Company',
        on_delete=models.CASCADE,
        related_name='sales',
        verbose_name=_('Firma'),
    )
    date = models.DateField(default=timezone.localdate, verbose_name=_('Data'))
    attribution_type = models.CharField(
        max_length=20,
        choices=AttributionType.choices,
        null=True,
        blank=True,
        verbose_name=_('Atribuire'),
    )
    attribution_id = models.UUIDField(null=True, blank=True, verbose_name=_('ID atribuire'))
    status = models.CharField(max_length=20, default='pending', verbose_name=_('Status'))
    total_amount = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        default=Decimal('0'),
        verbose_name=_('Total'),
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _('Vanzare')
        verbose_name_plural = _('Vanzari')
        ordering = ['-date', '-created_at']
        indexes = [
            models.Index(fields=['company', 'date'], name='scrapman_sa_company_8c3d4e_idx'),
        ]

    def __str__(self) -> str:
        return f"Vanzare {self.pk} ({self.date})"


class SaleItem(models.Model):
    """One material line of a sale."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    sale = models.ForeignKey(
        Sale,
        on_delete=models.CASCADE,
        related_name='items',
        verbose_name=_('Vanzare'),
    )
    material = models.ForeignKey(
        'scrapman.Material',
        on_delete=models.PROTECT,
        related_name='+',
        verbose_name=_('Material'),
    )
    quantity = models.DecimalField(max_digits=12, decimal_places=3, verbose_name=_('Cantitate bruta'))
    impurities_percent = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        default=Decimal('0'),
        verbose_name=_('Impuritati (%)'),
    )
    final_quantity = models.DecimalField(
        max_digits=12,
        decimal_places=3,
        verbose_name=_('Cantitate finala'),
    )
    price_per_kg_ron = models.DecimalField(
        max_digits=12,
        decimal_places=4,
        default=Decimal('0'),
        verbose_name=_('Pret/kg (RON)'),
    )

    class Meta:
        verbose_name = _('Linie vanzare')
        verbose_name_plural = _('Linii vanzare')

    def __str__(self) -> str:
        return f"{self.material} -{self.final_quantity}"
