"""
Tests for the reconciliation engine (pure, no database).
"""

import os
import subprocess
import sys
from decimal import Decimal

import pytest

from scrapman import ScrapError
from scrapman.protocols import (
    AcquisitionItemRecord,
    AcquisitionRecord,
    DismantlingOutputRecord,
    DismantlingRecord,
    SaleItemRecord,
    SaleRecord,
)
from scrapman.reconciliation import (
    InventoryKey,
    TransactionLine,
    acquisition_lines,
    dismantling_lines,
    fold,
    merge,
    reconcile,
    record_lines,
    resolve_location,
    sale_lines,
    to_quantity,
)


YARD = 'curte'
CONTRACT = 'contract'


def acq(id, *items, location_type=YARD, contract_id=None):
    return AcquisitionRecord(
        id=id,
        location_type=location_type,
        contract_id=contract_id,
        items=tuple(AcquisitionItemRecord(m, q) for m, q in items),
    )


def sale(id, *items, **fields):
    return SaleRecord(id=id, items=tuple(SaleItemRecord(m, q) for m, q in items), **fields)


def dism(id, source, quantity, *outputs, location_type=YARD, contract_id=None):
    return DismantlingRecord(
        id=id,
        source_material_id=source,
        source_quantity=quantity,
        location_type=location_type,
        contract_id=contract_id,
        outputs=tuple(DismantlingOutputRecord(m, q) for m, q in outputs),
    )


class TestNormalization:
    """Tests for to_quantity() and resolve_location()."""

    def test_none_quantity_is_zero(self):
        """Missing quantity counts as zero, not an error."""
        assert to_quantity(None, source='sales') == Decimal('0')

    def test_float_goes_through_str(self):
        """0.1 stays 0.1, not its binary expansion."""
        assert to_quantity(0.1, source='sales') == Decimal('0.1')

    def test_int_and_str_accepted(self):
        assert to_quantity(12, source='sales') == Decimal('12')
        assert to_quantity('12.5', source='sales') == Decimal('12.5')

    @pytest.mark.parametrize('value', [-1, Decimal('-0.01'), 'abc', '', True, float('nan'), [1]])
    def test_bad_quantity_rejected(self, value):
        """Negative, non-numeric or non-finite quantities fail closed."""
        with pytest.raises(ScrapError) as exc:
            to_quantity(value, source='acquisitions', record_id='a1', field='final_quantity')

        assert exc.value.code == 'MALFORMED_RECORD'
        assert exc.value.data['field'] == 'final_quantity'
        assert exc.value.source == 'acquisitions'

    @pytest.mark.parametrize('location_type', [None, ''])
    def test_missing_location_is_yard(self, location_type):
        assert resolve_location(location_type, 'K1', source='acquisitions') == (YARD, None)

    def test_contract_kept_only_for_contract_location(self):
        assert resolve_location(CONTRACT, 'K1', source='acquisitions') == (CONTRACT, 'K1')
        assert resolve_location(YARD, 'K1', source='acquisitions') == (YARD, None)

    def test_deee_is_a_valid_location(self):
        """DEEE has no special rule: no contract, its own key."""
        assert resolve_location('deee', 'K1', source='dismantlings') == ('deee', None)

    def test_unknown_location_rejected(self):
        with pytest.raises(ScrapError) as exc:
            resolve_location('depozit', None, source='acquisitions', record_id='a1')

        assert exc.value.code == 'MALFORMED_RECORD'
        assert exc.value.data['field'] == 'location_type'

    def test_location_is_plain_string(self):
        """Keys hash like the stored value, whatever enum came in."""
        from scrapman.enums import LocationType

        location, _ = resolve_location(LocationType.CONTRACT, 'K1', source='acquisitions')
        assert type(location) is str
        assert {InventoryKey('M1', location, 'K1'): 1}[InventoryKey('M1', 'contract', 'K1')] == 1


class TestRecordLines:
    """Tests for the per-ledger sign and location rules."""

    def test_acquisition_adds_at_its_location(self):
        lines = list(acquisition_lines(acq('a1', ('M1', 100), ('M2', 5), location_type=CONTRACT, contract_id='K1')))

        assert lines == [
            TransactionLine(InventoryKey('M1', CONTRACT, 'K1'), Decimal('100')),
            TransactionLine(InventoryKey('M2', CONTRACT, 'K1'), Decimal('5')),
        ]

    def test_sale_subtracts_from_yard(self):
        lines = list(sale_lines(sale('s1', ('M1', 30))))

        assert lines == [TransactionLine(InventoryKey('M1', YARD, None), Decimal('-30'))]

    def test_dismantling_source_out_outputs_in(self):
        lines = list(dismantling_lines(dism('d1', 'S', 50, ('O1', 20), ('O2', 25))))

        assert lines == [
            TransactionLine(InventoryKey('S', YARD, None), Decimal('-50')),
            TransactionLine(InventoryKey('O1', YARD, None), Decimal('20')),
            TransactionLine(InventoryKey('O2', YARD, None), Decimal('25')),
        ]

    def test_dismantling_without_outputs(self):
        lines = list(dismantling_lines(dism('d1', 'S', 50)))

        assert lines == [TransactionLine(InventoryKey('S', YARD, None), Decimal('-50'))]

    def test_missing_material_rejected(self):
        """A line without material would silently vanish: fail instead."""
        with pytest.raises(ScrapError) as exc:
            list(sale_lines(sale('s1', (None, 30))))

        assert exc.value.code == 'MALFORMED_RECORD'
        assert exc.value.data['record_id'] == 's1'

    def test_missing_source_material_rejected(self):
        with pytest.raises(ScrapError) as exc:
            list(dismantling_lines(dism('d1', None, 50)))

        assert exc.value.data['field'] == 'source_material_id'

    def test_record_lines_dispatches(self):
        assert record_lines(sale('s1', ('M1', 1)))[0].quantity == Decimal('-1')
        assert record_lines(acq('a1', ('M1', 1)))[0].quantity == Decimal('1')

    def test_record_lines_rejects_other_objects(self):
        with pytest.raises(TypeError):
            record_lines({'id': 'a1'})


class TestFoldAndMerge:
    """Tests for fold() and merge()."""

    def test_fold_sums_per_key(self):
        key = InventoryKey('M1', YARD, None)
        totals = fold([TransactionLine(key, Decimal('1.5')), TransactionLine(key, Decimal('-0.5'))])

        assert totals == {key: Decimal('1.0')}

    def test_merge_does_not_modify_inputs(self):
        key = InventoryKey('M1', YARD, None)
        left = {key: Decimal('1')}
        right = {key: Decimal('2')}

        assert merge(left, right) == {key: Decimal('3')}
        assert left == {key: Decimal('1')}
        assert right == {key: Decimal('2')}


class TestReconcile:
    """Tests for reconcile()."""

    def test_acquisition_only(self):
        """100 kg bought at the yard is 100 kg at the yard."""
        totals = reconcile([acq('a1', ('M', 100))], [], [])

        assert totals == {InventoryKey('M', YARD, None): Decimal('100')}

    def test_sale_ignores_attribution(self):
        """A sale attributed to a contract still depletes the yard."""
        totals = reconcile(
            [acq('a1', ('M', 100), location_type=CONTRACT, contract_id='K1')],
            [sale('s1', ('M', 30), attribution_type=CONTRACT, attribution_id='K1')],
            [],
        )

        assert totals == {
            InventoryKey('M', CONTRACT, 'K1'): Decimal('100'),
            InventoryKey('M', YARD, None): Decimal('-30'),
        }

    def test_dismantling_keeps_location(self):
        """Source and outputs all land on the contract key, none on the yard."""
        totals = reconcile([], [], [
            dism('d1', 'S', 50, ('O1', 20), ('O2', 25), location_type=CONTRACT, contract_id='K1'),
        ])

        assert totals == {
            InventoryKey('S', CONTRACT, 'K1'): Decimal('-50'),
            InventoryKey('O1', CONTRACT, 'K1'): Decimal('20'),
            InventoryKey('O2', CONTRACT, 'K1'): Decimal('25'),
        }
        assert all(key.location_type == CONTRACT for key in totals)

    def test_missing_and_present_contract_do_not_collide(self):
        totals = reconcile(
            [
                acq('a1', ('M', 10), location_type=CONTRACT, contract_id=None),
                acq('a2', ('M', 20), location_type=CONTRACT, contract_id='K1'),
            ],
            [],
            [],
        )

        assert totals[InventoryKey('M', CONTRACT, None)] == Decimal('10')
        assert totals[InventoryKey('M', CONTRACT, 'K1')] == Decimal('20')

    def test_source_and_output_same_material_net_out(self):
        totals = reconcile([], [], [dism('d1', 'M', 50, ('M', 50))])

        assert totals == {InventoryKey('M', YARD, None): Decimal('0')}

    def test_null_quantities_count_as_zero(self):
        totals = reconcile([acq('a1', ('M', None))], [sale('s1', ('M', None))], [])

        assert totals == {InventoryKey('M', YARD, None): Decimal('0')}

    def test_worked_scenario(self):
        """Buy 100 M1, sell 40 M1, dismantle 30 M2 into 10 M1 + 15 M3."""
        totals = reconcile(
            [acq('a1', ('M1', 100))],
            [sale('s1', ('M1', 40))],
            [dism('d1', 'M2', 30, ('M1', 10), ('M3', 15))],
        )

        assert totals == {
            InventoryKey('M1', YARD, None): Decimal('70'),
            InventoryKey('M2', YARD, None): Decimal('-30'),
            InventoryKey('M3', YARD, None): Decimal('15'),
        }

    def test_order_independent(self):
        acquisitions = [acq(f'a{i}', ('M1', 0.1), ('M2', 1.25)) for i in range(10)]
        sales = [sale(f's{i}', ('M1', 0.3)) for i in range(3)]

        forward = reconcile(acquisitions, sales, [])
        backward = reconcile(list(reversed(acquisitions)), list(reversed(sales)), [])

        assert forward == backward
        assert forward[InventoryKey('M1', YARD, None)] == Decimal('0.1')

    @pytest.mark.parametrize('split', [0, 1, 3, 5])
    def test_partitioned_ledgers_merge_to_whole(self, split):
        """Reconciling two halves and merging equals reconciling everything."""
        acquisitions = [
            acq('a1', ('M1', 100)),
            acq('a2', ('M2', 12.345), location_type=CONTRACT, contract_id='K1'),
            acq('a3', ('M1', 0.1), ('M3', 7)),
            acq('a4', ('M3', None)),
            acq('a5', ('M2', 3), location_type='deee'),
        ]
        sales = [sale('s1', ('M1', 40)), sale('s2', ('M3', 2.2)), sale('s3', ('M2', 1))]
        dismantlings = [
            dism('d1', 'M2', 5, ('M1', 2), ('M3', 2.9), location_type=CONTRACT, contract_id='K1'),
            dism('d2', 'M1', 10, ('M3', 9.99)),
        ]

        whole = reconcile(acquisitions, sales, dismantlings)
        halves = merge(
            reconcile(acquisitions[:split], sales[:split], dismantlings[:split]),
            reconcile(acquisitions[split:], sales[split:], dismantlings[split:]),
        )

        assert halves == whole

    def test_one_bad_record_rejects_the_run(self):
        with pytest.raises(ScrapError) as exc:
            reconcile(
                [acq('a1', ('M1', 100))],
                [sale('s1', ('M1', 40)), sale('s2', ('M1', -1))],
                [],
            )

        assert exc.value.code == 'MALFORMED_RECORD'
        assert exc.value.data['record_id'] == 's2'

    def test_rows_from_store_shape(self):
        """Records built from store rows reconcile the same way."""
        acquisition = AcquisitionRecord.from_row({
            'id': 'a1', 'location_type': 'curte', 'contract_id': None,
            'items': [{'material_id': 'M1', 'final_quantity': 100}],
        })
        sold = SaleRecord.from_row({
            'id': 's1', 'items': [{'material_id': 'M1', 'final_quantity': 40.5}],
        })
        dismantled = DismantlingRecord.from_row({
            'id': 'd1', 'location_type': None, 'contract_id': None,
            'source_material_id': 'M1', 'source_quantity': 9.5, 'outputs': None,
        })

        totals = reconcile([acquisition], [sold], [dismantled])

        assert totals == {InventoryKey('M1', YARD, None): Decimal('50.0')}


class TestEngineImport:
    """The engine needs no configured Django project."""

    def test_imports_without_app_registry(self):
        code = (
            "import sys\n"
            "from scrapman.protocols import AcquisitionItemRecord, AcquisitionRecord\n"
            "from scrapman.reconciliation import InventoryKey, reconcile\n"
            "assert 'scrapman.models' not in sys.modules, 'models loaded'\n"
            "record = AcquisitionRecord('a1', location_type='contract', contract_id='K1',\n"
            "                           items=(AcquisitionItemRecord('M1', 5),))\n"
            "totals = reconcile([record], [], [])\n"
            "assert totals == {InventoryKey('M1', 'contract', 'K1'): 5}, totals\n"
        )
        env = {k: v for k, v in os.environ.items() if k != 'DJANGO_SETTINGS_MODULE'}

        result = subprocess.run([sys.executable, '-c', code], env=env, capture_output=True, text=True)

        assert result.returncode == 0, result.stderr
