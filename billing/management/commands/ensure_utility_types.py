# billing/management/commands/ensure_utility_types.py

from django.core.management.base import BaseCommand

from billing.models import UtilityType
from billing.services.rates import ensure_utility_types


class Command(BaseCommand):
    help = 'Makes sure the electric and water utility types exist.'

    def handle(self, *args, **options):
        existing = set(UtilityType.objects.values_list("code", flat=True))
        created = [ut for ut in ensure_utility_types() if ut.code not in existing]

        if not created:
            self.stdout.write(self.style.SUCCESS('All utility types already exist.'))
            return

        for ut in created:
            self.stdout.write(f'  - Created utility type: {ut.code} ({ut.name_th})')
        self.stdout.write(self.style.SUCCESS(f'\nDone. Created {len(created)} utility types.'))
