"""
Enums shared by the models and the reconciliation engine.
"""

from django.db import models
from django.utils.translation import gettext_lazy as _


class LocationType(models.TextChoices):
    """
    Where a quantity of material sits.

    YARD:     The company's own yard. Default for every ledger, and the only
              location sales ever deplete.
    CONTRACT: Material held under a supplier contract, tracked per contract.
    DEEE:     Waste electrical and electronic equipment area. Valid value,
              no ledger currently produces it.
    """
    YARD = 'curte', _('Curte')
    CONTRACT = 'contract', _('Contract')
    DEEE = 'deee', _('DEEE')


class MaterialCategory(models.TextChoices):
    """Material families handled by the yard."""
    FERROUS = 'feros', _('Feros')
    NON_FERROUS = 'neferos', _('Neferos')
    DEEE = 'deee', _('DEEE')
    OTHER = 'altele', _('Altele')


class AttributionType(models.TextChoices):
    """Where a sale is attributed for reporting. Never moves stock."""
    YARD = 'curte', _('Curte')
    CONTRACT = 'contract', _('Contract')
