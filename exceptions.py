"""
Exceptions for Scrapman.

All errors are ScrapError with a structured code for programmatic handling.
"""

from decimal import Decimal
from typing import Any


class ScrapError(Exception):
    """
    Structured exception for inventory operations.

    Usage:
        try:
            stock.recalculate(company_id)
        except ScrapError as e:
            if e.code == 'SNAPSHOT_WRITE_PARTIAL':
                print("Rulati din nou recalcularea")

    Attributes:
        code: Error code for programmatic handling
        message: Human-readable message
        data: Additional context data
    """

    _default_messages = {
        'LEDGER_READ_FAILED': 'Eroare la citirea registrelor; inventarul nu a fost modificat',
        'MALFORMED_RECORD': 'Inregistrare invalida in registre; recalcularea a fost oprita',
        'SNAPSHOT_WRITE_FAILED': 'Scrierea inventarului a esuat; inventarul anterior a fost pastrat',
        'SNAPSHOT_WRITE_PARTIAL': 'Scrierea inventarului a esuat partial; rulati din nou recalcularea',
        'COMPANY_REQUIRED': 'company_id e obligatoriu pentru inregistrari fara firma',
    }

    def __init__(self, code: str, message: str | None = None, **data: Any):
        self.code = code
        self.message = message or self._default_messages.get(code, code)
        self.data = data
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.data:
            details = ', '.join(f'{k}={v}' for k, v in self.data.items())
            return f'[{self.code}] {self.message} ({details})'
        return f'[{self.code}] {self.message}'

    def __repr__(self) -> str:
        return f'ScrapError({self.code!r}, {self.message!r})'

    @property
    def source(self) -> str | None:
        """Shortcut for data['source'] (which ledger failed)."""
        return self.data.get('source')

    def as_dict(self) -> dict[str, Any]:
        """Serialize to dict (useful for APIs)."""
        return {
            'code': self.code,
            'message': self.message,
            'data': {
                k: str(v) if isinstance(v, Decimal) else v
                for k, v in self.data.items()
            }
        }
