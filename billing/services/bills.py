# billing/services/bills.py
from __future__ import annotations
import logging
from decimal import Decimal, InvalidOperation

from django.core.exceptions import ValidationError
from django.db import DatabaseError, IntegrityError, transaction

from billing.exceptions import AmountOutOfRange, BillConflict, BillingError, InvalidBillStatus, MeterReadingsMissing
from billing.models import Bill, BillingCycle, MeterReading
from billing.services.allocation import allocate
from billing.services.cycles import get_or_create_cycle
from billing.services.readings import has_readings
from dorm.models import Contract

logger = logging.getLogger(__name__)


def exists_bill(contract_id: int, cycle_id: int) -> bool:
    return Bill.objects.filter(contract_id=contract_id, cycle_id=cycle_id).exists()


def count_bills(contract_id: int, cycle_id: int) -> int:
    return Bill.objects.filter(contract_id=contract_id, cycle_id=cycle_id).count()


def _check_amounts(allocation) -> None:
    field = Bill._meta.get_field("total_amount")
    limit = Decimal(10) ** (field.max_digits - field.decimal_places)
    for amount in (allocation.maintenance_fee, allocation.electric_amount, allocation.water_amount, allocation.total_amount):
        if not amount.is_finite() or abs(amount) >= limit:
            raise AmountOutOfRange(
                f"Amount {amount} for room {allocation.room_id} does not fit a bill (limit {limit})."
            )


def _insert_bill(contract: Contract, cycle: BillingCycle, maintenance_fee: Decimal | None, status: str) -> Bill:
    allocation = allocate(contract.room_id, cycle, maintenance_fee)
    _check_amounts(allocation)
    try:
        with transaction.atomic():
            bill = Bill.objects.create(
                contract=contract,
                cycle=cycle,
                maintenance_fee=allocation.maintenance_fee,
                electric_amount=allocation.electric_amount,
                water_amount=allocation.water_amount,
                total_amount=allocation.total_amount,
                tenant_count=allocation.tenant_count,
                rate_missing=allocation.rate_missing,
                status=status,
            )
    except IntegrityError:
        # lost the race against another insert for the same pair
        raise BillConflict(contract.pk, cycle.pk)
    logger.info(
        "Created bill %s for contract %s cycle %s: total %s",
        bill.pk, contract.pk, cycle, bill.total_amount,
    )
    return bill


def create_bill(
    contract_id: int,
    cycle_id: int,
    maintenance_fee: Decimal | None = None,
    status: str = Bill.Status.DRAFT,
) -> Bill:
    """
    Bill a single contract for a cycle.

    Raises BillConflict when the contract is already billed for the cycle
    and MeterReadingsMissing when the room has no reading for the cycle.
    """
    if status not in Bill.Status.values:
        raise InvalidBillStatus(f"Unknown bill status {status!r}.")
    contract = Contract.objects.select_related("room").get(pk=contract_id)
    cycle = BillingCycle.objects.get(pk=cycle_id)

    if exists_bill(contract.pk, cycle.pk):
        raise BillConflict(contract.pk, cycle.pk)
    if not has_readings(contract.room_id, cycle.pk):
        raise MeterReadingsMissing(contract.room, cycle)
    return _insert_bill(contract, cycle, maintenance_fee, status)


def billable_contracts(cycle: BillingCycle):
    rooms_with_readings = MeterReading.objects.filter(cycle=cycle).values("room_id")
    return (
        Contract.objects.active()
        .filter(room_id__in=rooms_with_readings)
        .select_related("room", "tenant")
        .order_by("room_id", "id")
    )


def run_billing(year: int, month: int, maintenance_fee: Decimal | None = None) -> int:
    """
    Bill every active contract whose room has readings for the cycle.

    Contracts already billed are skipped, so re-running creates nothing new.
    A failing contract is logged and skipped; the rest are still billed.
    Returns the number of bills created.
    """
    cycle = get_or_create_cycle(year, month)
    created = 0
    skipped = 0
    for contract in billable_contracts(cycle):
        if exists_bill(contract.pk, cycle.pk):
            skipped += 1
            continue
        try:
            with transaction.atomic():
                _insert_bill(contract, cycle, maintenance_fee, Bill.Status.DRAFT)
        except BillConflict:
            skipped += 1
        except (BillingError, DatabaseError, ValidationError, InvalidOperation) as exc:
            skipped += 1
            logger.warning("Skipped contract %s in cycle %s: %s", contract.pk, cycle, exc)
        else:
            created += 1
    logger.info("Billing run %s: %s created, %s skipped", cycle, created, skipped)
    return created


def update_bill_status(bill: Bill, status: str) -> Bill:
    if status not in Bill.Status.values:
        raise InvalidBillStatus(f"Unknown bill status {status!r}.")
    if bill.status != status:
        bill.status = status
        bill.save(update_fields=["status", "updated_at"])
        logger.info("Bill %s status -> %s", bill.pk, status)
    return bill
