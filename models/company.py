"""
Company model — the tenant every ledger row belongs to.
"""

import uuid

from django.db import models
from django.utils.translation import gettext_lazy as _


class Company(models.Model):
    """A company operating one or more yards. Inventory is kept per company."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=200, verbose_name=_('Nume'))
    cui = models.CharField(
        max_length=20,
        blank=True,
        default='',
        verbose_name=_('CUI'),
        help_text=_('Cod unic de inregistrare'),
    )
    is_active = models.BooleanField(default=True, verbose_name=_('Activa'))

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _('Firma')
        verbose_name_plural = _('Firme')
        ordering = ['name']

    def __str__(self) -> str:
        return self.name
