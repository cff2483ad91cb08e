"""
Material model — what is bought, dismantled and sold.
"""

import uuid

from django.db import models
from django.utils.translation import gettext_lazy as _

from scrapman.enums import MaterialCategory


class Material(models.Model):
    """
    A tradeable material (cupru, aluminiu, fier...).

    Materials are shared by all companies; quantities are always kilograms
    unless `unit` says otherwise.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=100, verbose_name=_('Denumire'))
    category = models.CharField(
        max_length=20,
        choices=MaterialCategory.choices,
        null=True,
        blank=True,
        verbose_name=_('Categorie'),
    )
    unit = models.CharField(max_length=10, default='kg', verbose_name=_('Unitate'))
    is_active = models.BooleanField(default=True, verbose_name=_('Activ'))

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _('Material')
        verbose_name_plural = _('Materiale')
        ordering = ['name']

    def __str__(self) -> str:
        return self.name
