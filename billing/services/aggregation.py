# billing/services/aggregation.py
from __future__ import annotations
from decimal import Decimal

from billing.models import Bill, BillingCycle
from billing.services.allocation import Allocation, allocate
from dorm.models import Contract


def _shape(contract: Contract, cycle: BillingCycle, allocation: Allocation, bill: Bill | None) -> dict:
    room = contract.room
    tenant = contract.tenant
    return {
        "bill_id": bill.pk if bill else None,
        "contract_id": contract.pk,
        "cycle_id": cycle.pk,
        "billing_year": cycle.billing_year,
        "billing_month": cycle.billing_month,
        "start_date": cycle.start_date,
        "end_date": cycle.end_date,
        "due_date": cycle.due_date,
        "status": bill.status if bill else None,
        "room": {
            "room_id": room.pk,
            "room_number": room.room_number,
            "floor_no": room.floor_no,
            "building_name": room.building.name_th,
        },
        "tenant": {
            "tenant_id": tenant.pk,
            "first_name": tenant.first_name_th,
            "last_name": tenant.last_name_th,
            "email": tenant.email,
            "phone": tenant.phone,
        },
        "tenant_count": allocation.tenant_count,
        "maintenance_fee": allocation.maintenance_fee,
        "electric": allocation.electric.as_dict(),
        "water": allocation.water.as_dict(),
        "total_amount": allocation.total_amount,
        "stored_total_amount": bill.total_amount if bill else None,
        "warnings": allocation.warnings,
    }


def _fee_for(bill: Bill | None) -> Decimal | None:
    # fee is fixed at billing time
    return bill.maintenance_fee if bill else None


def reconstruct(contract_id: int, cycle_id: int) -> dict:
    """
    Recompute what a contract owes for a cycle from the current readings,
    rates and occupancy, ignoring the amounts stored on the Bill row.
    """
    contract = Contract.objects.select_related("room__building", "tenant").get(pk=contract_id)
    cycle = BillingCycle.objects.get(pk=cycle_id)
    bill = Bill.objects.filter(contract=contract, cycle=cycle).first()
    allocation = allocate(contract.room_id, cycle, _fee_for(bill))
    return _shape(contract, cycle, allocation, bill)


def reconstruct_cycle(year: int, month: int, room_id: int | None = None) -> list[dict]:
    """Reconstructed view of every bill in a cycle, ordered by room then tenant."""
    cycle = BillingCycle.objects.filter(billing_year=year, billing_month=month).first()
    if cycle is None:
        return []
    bills = (
        Bill.objects.filter(cycle=cycle)
        .select_related("contract__room__building", "contract__tenant")
        .order_by("contract__room__building__name_th", "contract__room__room_number", "contract__tenant_id")
    )
    if room_id:
        bills = bills.filter(contract__room_id=room_id)

    allocations: dict[tuple, Allocation] = {}
    result = []
    for bill in bills:
        key = (bill.contract.room_id, bill.maintenance_fee)
        if key not in allocations:
            allocations[key] = allocate(bill.contract.room_id, cycle, bill.maintenance_fee)
        result.append(_shape(bill.contract, cycle, allocations[key], bill))
    return result
