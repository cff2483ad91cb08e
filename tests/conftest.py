"""
Pytest fixtures for Scrapman tests.
"""

from decimal import Decimal

import pytest

from scrapman.adapters import InMemoryLedgerBackend, reset_ledger_backend
from scrapman.models import Company, Contract, LocationType, Material


@pytest.fixture(autouse=True)
def _fresh_ledger_backend():
    """Never leak a cached backend between tests."""
    reset_ledger_backend()
    yield
    reset_ledger_backend()


@pytest.fixture
def company(db):
    """Create a test company."""
    return Company.objects.create(name='Fier Vechi SRL', cui='RO123456')


@pytest.fixture
def other_company(db):
    """A second tenant, to check runs stay scoped."""
    return Company.objects.create(name='Metal Recycling SRL', cui='RO654321')


@pytest.fixture
def cupru(db):
    return Material.objects.create(name='Cupru', category='neferos')


@pytest.fixture
def aluminiu(db):
    return Material.objects.create(name='Aluminiu', category='neferos')


@pytest.fixture
def fier(db):
    return Material.objects.create(name='Fier', category='feros')


@pytest.fixture
def contract(db, company):
    """Create a supplier contract for the test company."""
    return Contract.objects.create(company=company, contract_number='CTR-001')


@pytest.fixture
def make_acquisition(company):
    """Create an acquisition with items: make_acquisition((cupru, 100), ...)."""
    def _make(*items, location_type=LocationType.YARD, contract=None, company=company):
        acquisition = company.acquisitions.create(location_type=location_type, contract=contract)
        for material, quantity in items:
            acquisition.items.create(
                material=material,
                quantity=Decimal(str(quantity)),
                final_quantity=Decimal(str(quantity)),
            )
        return acquisition
    return _make


@pytest.fixture
def make_sale(company):
    """Create a sale with items: make_sale((cupru, 40), ...)."""
    def _make(*items, company=company, **fields):
        sale = company.sales.create(**fields)
        for material, quantity in items:
            sale.items.create(
                material=material,
                quantity=Decimal(str(quantity)),
                final_quantity=Decimal(str(quantity)),
            )
        return sale
    return _make


@pytest.fixture
def make_dismantling(company):
    """Create a dismantling: make_dismantling(source, qty, (output, qty), ...)."""
    def _make(source, source_quantity, *outputs, location_type=LocationType.YARD,
              contract=None, company=company):
        dismantling = company.dismantlings.create(
            source_material=source,
            source_quantity=Decimal(str(source_quantity)),
            location_type=location_type,
            contract=contract,
        )
        for material, quantity in outputs:
            dismantling.outputs.create(material=material, quantity=Decimal(str(quantity)))
        return dismantling
    return _make


@pytest.fixture
def memory_backend():
    """Empty in-memory ledger backend."""
    return InMemoryLedgerBackend()
