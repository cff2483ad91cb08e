"""
Management command to rebuild inventory from the ledgers.

Usage:
    python manage.py recalculate_inventory --company <uuid>
    python manage.py recalculate_inventory --all
    python manage.py recalculate_inventory --company <uuid> --dry-run
"""

from django.core.management.base import BaseCommand, CommandError

from scrapman import stock
from scrapman.conf import scrapman_settings
from scrapman.exceptions import ScrapError
from scrapman.models import Company, LocationType, Material


class Command(BaseCommand):
    """Recalculate inventory command."""

    help = 'Recalculeaza stocurile din achizitii, vanzari si dezmembrari'

    def add_arguments(self, parser):
        parser.add_argument(
            '--company',
            action='append',
            default=[],
            help='ID-ul firmei (se poate repeta)'
        )
        parser.add_argument(
            '--all',
            action='store_true',
            help='Toate firmele active'
        )
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Arata diferentele fata de inventarul salvat, fara a scrie'
        )
        parser.add_argument(
            '--top',
            type=int,
            default=None,
            help='Cate materiale sa afiseze in sumar'
        )

    def handle(self, *args, **options):
        if options['all']:
            company_ids = list(Company.objects.filter(is_active=True).values_list('pk', flat=True))
        else:
            company_ids = options['company']

        if not company_ids:
            raise CommandError('Specificati --company <id> sau --all')

        top = options['top'] if options['top'] is not None else scrapman_settings.SUMMARY_TOP

        for company_id in company_ids:
            self.stdout.write(f'=== Recalculare stocuri: {company_id} ===')
            try:
                result = stock.recalculate(company_id, dry_run=options['dry_run'])
            except ScrapError as e:
                raise CommandError(str(e)) from e

            self._write_summary(result, top, options['dry_run'])

    def _write_summary(self, result, top, dry_run):
        counts = result.counts
        self.stdout.write(f'Linii achizitii: {counts.acquisition_items}')
        self.stdout.write(f'Linii vanzari: {counts.sale_items}')
        self.stdout.write(
            f'Dezmembrari: {counts.dismantling_sources} materiale sursa, '
            f'{counts.dismantling_outputs} materiale rezultate'
        )

        names = dict(
            Material.objects.filter(
                pk__in={row.material_id for row in result.rows}
            ).values_list('pk', 'name')
        )

        if top:
            self.stdout.write(f'Top {top} materiale in stoc:')
            for row in result.top(top):
                self.stdout.write(f'  {self._describe(row, names)}')

        if result.negative:
            self.stdout.write(self.style.WARNING('Stoc negativ (erori de date):'))
            for row in result.negative:
                self.stdout.write(self.style.WARNING(f'  {self._describe(row, names)}'))

        if dry_run:
            if result.drift:
                self.stdout.write(f'{len(result.drift)} diferenta(e) fata de inventarul salvat:')
                for drift in result.drift:
                    name = names.get(drift.key.material_id, drift.key.material_id)
                    self.stdout.write(
                        f'  {name} [{drift.key.location_type}]: '
                        f'{drift.stored} -> {drift.reconciled} ({drift.difference:+})'
                    )
            else:
                self.stdout.write(self.style.SUCCESS('Inventarul salvat este la zi'))
        else:
            self.stdout.write(
                self.style.SUCCESS(f'{len(result.rows)} inregistrari inventar scrise')
            )

    @staticmethod
    def _describe(row, names):
        name = names.get(row.material_id, 'Necunoscut')
        if row.location_type == LocationType.CONTRACT:
            location = f'Contract {str(row.contract_id)[:8]}'
        else:
            location = row.location_type
        return f'{name}: {row.quantity:.2f} kg ({location})'
