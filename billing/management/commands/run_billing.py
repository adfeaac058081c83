# billing/management/commands/run_billing.py
from decimal import Decimal, InvalidOperation

from django.core.management.base import BaseCommand, CommandError

from billing.services.bills import run_billing


class Command(BaseCommand):
    help = "Bill every active contract with meter readings for a cycle (year in the Buddhist era)."

    def add_arguments(self, parser):
        parser.add_argument("--year", type=int, required=True, help="Buddhist-era year, e.g. 2568")
        parser.add_argument("--month", type=int, required=True, help="1-12")
        parser.add_argument("--maintenance-fee", dest="maintenance_fee", default=None)

    def handle(self, *args, **opts):
        if not 1 <= opts["month"] <= 12:
            raise CommandError("Invalid --month. Use 1-12.")
        fee = None
        if opts["maintenance_fee"] is not None:
            try:
                fee = Decimal(opts["maintenance_fee"])
            except InvalidOperation:
                raise CommandError("Invalid --maintenance-fee.")
            if not fee.is_finite() or fee < 0:
                raise CommandError("Invalid --maintenance-fee. Use a non-negative amount.")

        created = run_billing(opts["year"], opts["month"], fee)
        self.stdout.write(self.style.SUCCESS(f"Bills created: {created}"))
