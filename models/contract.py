"""
Contract model — supplier contract that holds its own stock location.
"""

import uuid

from django.db import models
from django.utils.translation import gettext_lazy as _


class Contract(models.Model):
    """
    Supplier contract.

    Acquisitions and dismantlings recorded against a contract keep their
    material in a separate inventory location, one per contract.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    company = models.ForeignKey(
        'scrapman.Company',
        on_delete=models.CASCADE,
        related_name='contracts',
        verbose_name=_('Firma'),
    )
    contract_number = models.CharField(max_length=50, verbose_name=_('Numar contract'))
    status = models.CharField(max_length=20, default='active', verbose_name=_('Status'))
    start_date = models.DateField(null=True, blank=True, verbose_name=_('Data inceput'))
    end_date = models.DateField(null=True, blank=True, verbose_name=_('Data sfarsit'))

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _('Contract')
        verbose_name_plural = _('Contracte')
        ordering = ['contract_number']

    def __str__(self) -> str:
        return self.contract_number
