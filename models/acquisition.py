"""
Acquisition models — purchases of scrap, the ledger that adds stock.
"""

import uuid
from decimal import Decimal

from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from scrapman.enums import LocationType


class Acquisition(models.Model):
    """
    A purchase from a supplier.

    Every item adds its final (impurity-adjusted) quantity to stock at the
    acquisition's location: the yard, or the contract when
    location_type is CONTRACT.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    company = models.ForeignKey(
        'scrapman.Company',
        on_delete=models.CASCADE,
        related_name='acquisitions',
        verbose_name=_('Firma'),
    )
    date = models.DateField(default=timezone.localdate, verbose_name=_('Data'))
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
        related_name='acquisitions',
        verbose_name=_('Contract'),
    )
    receipt_number = models.CharField(max_length=50, blank=True, default='', verbose_name=_('Numar bon'))
    total_amount = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        default=Decimal('0'),
        verbose_name=_('Total'),
    )
    notes = models.TextField(blank=True, default='', verbose_name=_('Observatii'))

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _('Achizitie')
        verbose_name_plural = _('Achizitii')
        ordering = ['-date', '-created_at']
        indexes = [
            models.Index(fields=['company', 'date'], name='scrapman_ac_company_5f1a2b_idx'),
        ]

    def __str__(self) -> str:
        return f"Achizitie {self.receipt_number or self.pk} ({self.date})"


class AcquisitionItem(models.Model):
    """One material line of an acquisition."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    acquisition = models.ForeignKey(
        Acquisition,
        on_delete=models.CASCADE,
        related_name='items',
        verbose_name=_('Achizitie'),
    )
    material = models.ForeignKey(
        'scrapman.Material',
        on_delete=models.PROTECT,
        related_name='+',
        verbose_name=_('Material'),
    )
    quantity = models.DecimalField(
        max_digits=12,
        decimal_places=3,
        verbose_name=_('Cantitate bruta'),
    )
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
        help_text=_('Cantitatea intrata in stoc, dupa scaderea impuritatilor'),
    )
    price_per_kg = models.DecimalField(
        max_digits=12,
        decimal_places=4,
        default=Decimal('0'),
        verbose_name=_('Pret/kg'),
    )

    class Meta:
        verbose_name = _('Linie achizitie')
        verbose_name_plural = _('Linii achizitie')

    def __str__(self) -> str:
        return f"{self.material} +{self.final_quantity}"
