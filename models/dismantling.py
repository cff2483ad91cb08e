"""
Dismantling models — one material broken down into others, in place.
"""

import uuid

from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from scrapman.enums import LocationType


class Dismantling(models.Model):
    """
    Breaking down a quantity of a source material into output materials.

    The source quantity leaves stock and the outputs enter stock at the
    same location: dismantling changes what the material is, never where
    it is.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    company = models.ForeignKey(
        'scrapman.Company',
        on_delete=models.CASCADE,
        related_name='dismantlings',
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
        related_name='dismantlings',
        verbose_name=_('Contract'),
    )
    source_material = models.ForeignKey(
        'scrapman.Material',
        on_delete=models.PROTECT,
        related_name='+',
        verbose_name=_('Material sursa'),
    )
    source_quantity = models.DecimalField(
        max_digits=12,
        decimal_places=3,
        verbose_name=_('Cantitate sursa'),
    )
    notes = models.TextField(blank=True, default='', verbose_name=_('Observatii'))

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _('Dezmembrare')
        verbose_name_plural = _('Dezmembrari')
        ordering = ['-date', '-created_at']

    def __str__(self) -> str:
        return f"Dezmembrare {self.source_material} {self.source_quantity} ({self.date})"


class DismantlingOutput(models.Model):
    """One material produced by a dismantling."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    dismantling = models.ForeignKey(
        Dismantling,
        on_delete=models.CASCADE,
        related_name='outputs',
        verbose_name=_('Dezmembrare'),
    )
    material = models.ForeignKey(
        'scrapman.Material',
        on_delete=models.PROTECT,
        related_name='+',
        verbose_name=_('Material'),
    )
    quantity = models.DecimalField(max_digits=12, decimal_places=3, verbose_name=_('Cantitate'))
    notes = models.TextField(blank=True, default='', verbose_name=_('Observatii'))

    class Meta:
        verbose_name = _('Material rezultat')
        verbose_name_plural = _('Materiale rezultate')

    def __str__(self) -> str:
        return f"{self.material} +{self.quantity}"
