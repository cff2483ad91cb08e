"""
Scrapman configuration.

Usage in settings.py:
    SCRAPMAN = {
        "LEDGER_BACKEND": "scrapman.adapters.orm.DjangoLedgerBackend",
        "NEGLIGIBLE_QUANTITY": "0.001",
        "QUANTITY_DECIMAL_PLACES": 2,
        "INSERT_BATCH_SIZE": 100,
        "PARALLEL_READS": False,
        "SUMMARY_TOP": 20,
    }
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from django.conf import settings


@dataclass
class ScrapmanSettings:
    """Scrapman configuration settings."""

    # Ledger reader/snapshot writer backend (dotted path)
    LEDGER_BACKEND: str = "scrapman.adapters.orm.DjangoLedgerBackend"

    # Net quantities whose absolute value is at or below this are dropped (kg)
    NEGLIGIBLE_QUANTITY: str = "0.001"

    # Precision of stored snapshot quantities
    QUANTITY_DECIMAL_PLACES: int = 2

    # Rows per INSERT when replacing the snapshot
    INSERT_BATCH_SIZE: int = 100

    # Read the three ledgers on a thread pool (for remote readers)
    PARALLEL_READS: bool = False

    # Rows listed by the recalculate_inventory summary
    SUMMARY_TOP: int = 20

    @property
    def negligible_quantity(self) -> Decimal:
        return Decimal(str(self.NEGLIGIBLE_QUANTITY))


def get_scrapman_settings() -> ScrapmanSettings:
    """Load settings from Django settings."""
    user_settings: dict[str, Any] = getattr(settings, "SCRAPMAN", {})
    return ScrapmanSettings(**{
        k: v for k, v in user_settings.items()
        if k in ScrapmanSettings.__dataclass_fields__
    })


class _LazySettings:
    """Lazy proxy that re-reads settings on every attribute access."""

    def __getattr__(self, name):
        return getattr(get_scrapman_settings(), name)


scrapman_settings = _LazySettings()
