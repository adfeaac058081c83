# billing/services/allocation.py
from __future__ import annotations
import logging
from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP

from django.conf import settings

from billing.models import BillingCycle, MeterReading, UtilityType
from billing.services.rates import reference_date, resolve_rate
from billing.services.readings import readings_for
from billing.services.usage import compute_usage
from dorm.models import Contract

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")
UTILITIES = (UtilityType.ELECTRIC, UtilityType.WATER)


def money(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


@dataclass
class UtilityCharge:
    meter_start: int | None = None
    meter_end: int | None = None
    usage: int | None = None
    rate: Decimal = Decimal("0")
    room_amount: Decimal = Decimal("0")
    amount: Decimal = Decimal("0")

    @property
    def recorded(self) -> bool:
        return self.usage is not None

    def as_dict(self) -> dict:
        return {
            "meter_start": self.meter_start,
            "meter_end": self.meter_end,
            "usage": self.usage,
            "rate": self.rate,
            "room_amount": self.room_amount,
            "amount": self.amount,
        }


@dataclass
class Allocation:
    """One tenant's share of a room's charges for a cycle."""
    room_id: int
    cycle_id: int
    tenant_count: int
    maintenance_fee: Decimal
    electric: UtilityCharge = field(default_factory=UtilityCharge)
    water: UtilityCharge = field(default_factory=UtilityCharge)

    @property
    def electric_amount(self) -> Decimal:
        return self.electric.amount

    @property
    def water_amount(self) -> Decimal:
        return self.water.amount

    @property
    def total_amount(self) -> Decimal:
        return self.maintenance_fee + self.electric.amount + self.water.amount

    @property
    def rate_missing(self) -> bool:
        return any(c.recorded and c.rate == 0 for c in (self.electric, self.water))

    @property
    def warnings(self) -> list[str]:
        out = []
        for code in UTILITIES:
            charge = getattr(self, code)
            if charge.recorded and charge.rate == 0:
                out.append(f"no {code} rate in effect; billed at 0")
            if charge.recorded and charge.usage < 0:
                out.append(f"negative {code} usage ({charge.usage}); check the meter reading")
        return out


def default_maintenance_fee() -> Decimal:
    return money(Decimal(settings.DORM_MAINTENANCE_FEE))


def tenant_count(room_id: int) -> int:
    """Active contracts on the room right now, never less than 1."""
    return max(1, Contract.objects.active().filter(room_id=room_id).count())


def charge_for(reading: MeterReading, cycle: BillingCycle, tenants: int) -> UtilityCharge:
    code = reading.utility_type.code
    usage = compute_usage(reading.meter_start, reading.meter_end, code)
    rate = resolve_rate(code, reference_date(cycle))
    room_amount = usage * rate
    return UtilityCharge(
        meter_start=reading.meter_start,
        meter_end=reading.meter_end,
        usage=usage,
        rate=rate,
        room_amount=money(room_amount),
        amount=money(room_amount / tenants),
    )


def allocate(room_id: int, cycle: BillingCycle | int, maintenance_fee: Decimal | None = None) -> Allocation:
    """
    Per-tenant charges for a room in a cycle.

    Utility cost (usage x rate at the cycle's end date) is split evenly over
    the room's active tenants; the maintenance fee is charged in full to each
    of them. A utility without a reading contributes 0.
    """
    if not isinstance(cycle, BillingCycle):
        cycle = BillingCycle.objects.get(pk=cycle)
    fee = default_maintenance_fee() if maintenance_fee is None else money(Decimal(maintenance_fee))
    tenants = tenant_count(room_id)

    allocation = Allocation(room_id=room_id, cycle_id=cycle.pk, tenant_count=tenants, maintenance_fee=fee)
    readings = readings_for(room_id, cycle.pk)
    for code in UTILITIES:
        reading = readings.get(code)
        if reading is not None:
            setattr(allocation, code, charge_for(reading, cycle, tenants))

    for warning in allocation.warnings:
        logger.warning("Room %s cycle %s: %s", room_id, cycle, warning)
    return allocation
