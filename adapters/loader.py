"""
Ledger backend loader.

Loads the configured LedgerBackend from settings.

Usage:
    from scrapman.adapters import get_ledger_backend

    backend = get_ledger_backend()
    backend.fetch_sales(company_id)

Settings:
    SCRAPMAN = {
        "LEDGER_BACKEND": "scrapman.adapters.orm.DjangoLedgerBackend",
    }
"""

from __future__ import annotations

import logging
import threading

from django.core.exceptions import ImproperlyConfigured
from django.utils.module_loading import import_string

from scrapman.conf import scrapman_settings
from scrapman.protocols.ledger import LedgerBackend

logger = logging.getLogger(__name__)


# Cached backend instance
_lock = threading.Lock()
_ledger_backend: LedgerBackend | None = None


def get_ledger_backend() -> LedgerBackend:
    """
    Return the configured ledger backend.

    Returns:
        LedgerBackend instance

    Raises:
        ImproperlyConfigured: If LEDGER_BACKEND is empty or import fails
    """
    global _ledger_backend

    if _ledger_backend is None:
        with _lock:
            if _ledger_backend is None:  # double-checked
                backend_path = scrapman_settings.LEDGER_BACKEND

                if not backend_path:
                    raise ImproperlyConfigured(
                        "SCRAPMAN['LEDGER_BACKEND'] must be configured. "
                        "Example: 'scrapman.adapters.orm.DjangoLedgerBackend'"
                    )

                try:
                    backend_class = import_string(backend_path)
                except ImportError as e:
                    raise ImproperlyConfigured(
                        f"Failed to import ledger backend '{backend_path}': {e}"
                    ) from e

                _ledger_backend = backend_class()
                logger.debug("Loaded ledger backend: %s", backend_path)

    return _ledger_backend


def reset_ledger_backend() -> None:
    """Reset the cached backend. Useful for testing."""
    global _ledger_backend
    _ledger_backend = None
