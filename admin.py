"""
Scrapman Admin.

Provides views for production debugging:
- Company: list + "recalculate inventory" action
- Material, Contract: list + edit
- Acquisition / Sale / Dismantling: edit with inline lines
- Inventory: read-only (derived, only changes via the Stock service)
"""

import logging

from django.contrib import admin, messages
from django.utils.translation import gettext_lazy as _

from scrapman.exceptions import ScrapError
from scrapman.models import (
    Acquisition,
    AcquisitionItem,
    Company,
    Contract,
    Dismantling,
    DismantlingOutput,
    Inventory,
    Material,
    Sale,
    SaleItem,
)

logger = logging.getLogger(__name__)


# =========================================================================
# COMPANY ADMIN (with recalculate action)
# =========================================================================

@admin.register(Company)
class CompanyAdmin(admin.ModelAdmin):
    """Company admin — editable, can rebuild inventory."""

    list_display = ['name', 'cui', 'is_active']
    list_filter = ['is_active']
    search_fields = ['name', 'cui']
    readonly_fields = ['created_at', 'updated_at']
    actions = ['recalculate_inventory']

    @admin.action(description=_('Recalculeaza stocurile'))
    def recalculate_inventory(self, request, queryset):
        from scrapman import stock

        for company in queryset:
            try:
                result = stock.recalculate(company.pk)
            except ScrapError as exc:
                logger.warning("recalculate_inventory: %s failed: %s", company.pk, exc)
                self.message_user(request, f'{company}: {exc.message}', level=messages.ERROR)
                continue

            self.message_user(
                request,
                _('{company}: {rows} inregistrari, {negative} negative.').format(
                    company=company, rows=len(result.rows), negative=len(result.negative),
                ),
            )


# =========================================================================
# REFERENCE DATA
# =========================================================================

@admin.register(Material)
class MaterialAdmin(admin.ModelAdmin):
    list_display = ['name', 'category', 'unit', 'is_active']
    list_filter = ['category', 'is_active']
    search_fields = ['name']


@admin.register(Contract)
class ContractAdmin(admin.ModelAdmin):
    list_display = ['contract_number', 'company', 'status', 'start_date', 'end_date']
    list_filter = ['status', 'company']
    search_fields = ['contract_number']


# =========================================================================
# LEDGERS
# =========================================================================

class AcquisitionItemInline(admin.TabularInline):
    model = AcquisitionItem
    extra = 0


@admin.register(Acquisition)
class AcquisitionAdmin(admin.ModelAdmin):
    list_display = ['date', 'receipt_number', 'company', 'location_type', 'contract', 'total_amount']
    list_filter = ['location_type', 'company']
    date_hierarchy = 'date'
    inlines = [AcquisitionItemInline]


class SaleItemInline(admin.TabularInline):
    model = SaleItem
    extra = 0


@admin.register(Sale)
class SaleAdmin(admin.ModelAdmin):
    list_display = ['date', 'company', 'status', 'attribution_type', 'total_amount']
    list_filter = ['status', 'company']
    date_hierarchy = 'date'
    inlines = [SaleItemInline]


class DismantlingOutputInline(admin.TabularInline):
    model = DismantlingOutput
    extra = 0


@admin.register(Dismantling)
class DismantlingAdmin(admin.ModelAdmin):
    list_display = ['date', 'company', 'source_material', 'source_quantity', 'location_type', 'contract']
    list_filter = ['location_type', 'company']
    date_hierarchy = 'date'
    inlines = [DismantlingOutputInline]


# =========================================================================
# INVENTORY ADMIN (read-only)
# =========================================================================

@admin.register(Inventory)
class InventoryAdmin(admin.ModelAdmin):
    """Inventory admin — read-only. Rebuilt by stock.recalculate()."""

    list_display = ['material', 'company', 'location_type', 'contract', 'quantity', 'updated_at']
    list_filter = ['location_type', 'company']
    search_fields = ['material__name']
    readonly_fields = ['company', 'material', 'location_type', 'contract', 'quantity', 'updated_at']
    ordering = ['material__name', 'location_type']

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
