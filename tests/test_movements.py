"""
Tests for incremental posting and inventory queries.
"""

from decimal import Decimal

import pytest

from scrapman import ScrapError, stock
from scrapman.models import Inventory, LocationType
from scrapman.protocols import SaleItemRecord, SaleRecord


pytestmark = pytest.mark.django_db


class TestPost:
    """Tests for stock.post()."""

    def test_acquisition_adds(self, company, cupru, make_acquisition):
        acquisition = make_acquisition((cupru, 100))

        rows = stock.post(acquisition)

        assert len(rows) == 1
        assert rows[0].quantity == Decimal('100')
        assert stock.quantity(company.pk, cupru) == Decimal('100')

    def test_posts_accumulate(self, company, cupru, make_acquisition, make_sale):
        stock.post(make_acquisition((cupru, 100)))
        stock.post(make_acquisition((cupru, '2.5')))
        stock.post(make_sale((cupru, 40)))

        assert stock.quantity(company.pk, cupru) == Decimal('62.5')

    def test_contract_location(self, company, cupru, contract, make_acquisition):
        stock.post(make_acquisition((cupru, 100), location_type=LocationType.CONTRACT, contract=contract))

        assert stock.quantity(company.pk, cupru, LocationType.CONTRACT, contract) == Decimal('100')
        assert stock.quantity(company.pk, cupru) == Decimal('0')

    def test_sale_can_go_negative(self, company, cupru, make_sale):
        """Same as reconciliation: the row is written below zero."""
        stock.post(make_sale((cupru, 40)))

        assert stock.quantity(company.pk, cupru) == Decimal('-40')
        assert [row.material_id for row in stock.negative(company.pk)] == [cupru.pk]

    def test_dismantling_combines_same_key(self, company, cupru, make_dismantling):
        """Source and output of the same material touch one row once."""
        rows = stock.post(make_dismantling(cupru, 50, (cupru, 45)))

        assert len(rows) == 1
        assert stock.quantity(company.pk, cupru) == Decimal('-5')

    def test_plain_record_needs_company(self, company, cupru):
        record = SaleRecord('s1', items=(SaleItemRecord(cupru.pk, 1),))

        with pytest.raises(ScrapError) as exc:
            stock.post(record)

        assert exc.value.code == 'COMPANY_REQUIRED'
        assert exc.value.data['record'] == 'SaleRecord'
        assert not Inventory.objects.for_company(company.pk).exists()

        stock.post(record, company_id=company.pk)
        assert stock.quantity(company.pk, cupru) == Decimal('-1')

    def test_agrees_with_recalculate(self, company, cupru, aluminiu, fier, contract,
                                     make_acquisition, make_sale, make_dismantling):
        """Posting every saved record leaves nothing for recalculate() to fix."""
        records = [
            make_acquisition((cupru, 100), (fier, '3.33')),
            make_acquisition((aluminiu, 80), location_type=LocationType.CONTRACT, contract=contract),
            make_sale((cupru, 40)),
            make_dismantling(aluminiu, 30, (cupru, 10), (fier, 15),
                             location_type=LocationType.CONTRACT, contract=contract),
        ]
        for record in records:
            stock.post(record)

        assert stock.recalculate(company.pk, dry_run=True).drift == []

    def test_unrounded_post_is_not_drift(self, company, cupru, make_acquisition):
        """Posted 12.345 is stored as is; the rebuild would write 12.35."""
        stock.post(make_acquisition((cupru, '12.345')))

        assert stock.quantity(company.pk, cupru) == Decimal('12.345')
        assert stock.recalculate(company.pk, dry_run=True).drift == []

    def test_residue_after_post_is_not_drift(self, company, cupru, make_acquisition, make_sale):
        """1.001 in, 1 out leaves a 0.001 row the rebuild would drop."""
        stock.post(make_acquisition((cupru, '1.001')))
        stock.post(make_sale((cupru, 1)))

        assert stock.quantity(company.pk, cupru) == Decimal('0.001')
        assert stock.recalculate(company.pk, dry_run=True).drift == []


class TestReverse:
    """Tests for stock.reverse()."""

    def test_reverse_undoes_post(self, company, cupru, fier, make_acquisition, make_sale):
        stock.post(make_acquisition((cupru, 100), (fier, 20)))
        sale = make_sale((cupru, 40), (fier, 5))
        stock.post(sale)

        stock.reverse(sale)

        assert stock.quantity(company.pk, cupru) == Decimal('100')
        assert stock.quantity(company.pk, fier) == Decimal('20')

    def test_reverse_dismantling(self, company, cupru, aluminiu, make_dismantling):
        dismantling = make_dismantling(aluminiu, 30, (cupru, 10))
        stock.post(dismantling)

        stock.reverse(dismantling)

        assert stock.quantity(company.pk, aluminiu) == Decimal('0')
        assert stock.quantity(company.pk, cupru) == Decimal('0')


class TestQueries:
    """Tests for the read-only inventory queries."""

    def test_quantity_without_row(self, company, cupru):
        assert stock.quantity(company.pk, cupru) == Decimal('0')

    def test_total_over_locations(self, company, cupru, contract, make_acquisition):
        stock.post(make_acquisition((cupru, 100)))
        stock.post(make_acquisition((cupru, 25), location_type=LocationType.CONTRACT, contract=contract))

        assert stock.total(company.pk, cupru) == Decimal('125')

    def test_list_rows_hides_empty_and_negative(self, company, cupru, aluminiu, fier,
                                                make_acquisition, make_sale):
        stock.post(make_acquisition((cupru, 100), (fier, 5)))
        stock.post(make_sale((fier, 5), (aluminiu, 3)))

        listed = stock.list_rows(company.pk)

        assert [row.material for row in listed] == [cupru]
        assert {row.material for row in stock.list_rows(company.pk, include_empty=True)} == {
            cupru, fier, aluminiu,
        }

    def test_list_rows_by_location(self, company, cupru, contract, make_acquisition):
        stock.post(make_acquisition((cupru, 100)))
        stock.post(make_acquisition((cupru, 25), location_type=LocationType.CONTRACT, contract=contract))

        rows = stock.list_rows(company.pk, location_type=LocationType.CONTRACT)

        assert [(row.contract, row.quantity) for row in rows] == [(contract, Decimal('25'))]

    def test_scoped_to_company(self, company, other_company, cupru, make_acquisition):
        stock.post(make_acquisition((cupru, 100), company=other_company))

        assert stock.quantity(company.pk, cupru) == Decimal('0')
        assert stock.quantity(other_company.pk, cupru) == Decimal('100')

    def test_inventory_key(self, company, cupru, contract):
        row = Inventory.objects.create(
            company=company, material=cupru, location_type=LocationType.CONTRACT,
            contract=contract, quantity=Decimal('1'),
        )

        assert row.key == (cupru.pk, 'contract', contract.pk)
