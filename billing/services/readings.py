# billing/services/readings.py
from __future__ import annotations
import logging

from django.db import transaction

from billing.models import BillingCycle, MeterReading, UtilityType
from billing.services.rates import get_utility_type
from dorm.models import Room

logger = logging.getLogger(__name__)


@transaction.atomic
def record_reading(room: Room, cycle: BillingCycle, utility_type: str, meter_start: int, meter_end: int) -> MeterReading:
    """
    Store the single reading for (room, cycle, utility); recording again
    replaces the start/end values. Bills already created keep their amounts.
    """
    ut = get_utility_type(utility_type)
    if utility_type == UtilityType.WATER and meter_end < meter_start:
        logger.warning(
            "Water reading for room %s cycle %s goes backwards (%s -> %s); usage will be negative",
            room, cycle, meter_start, meter_end,
        )
    reading, created = MeterReading.objects.update_or_create(
        room=room,
        cycle=cycle,
        utility_type=ut,
        defaults={"meter_start": meter_start, "meter_end": meter_end},
    )
    logger.info(
        "%s %s reading for room %s cycle %s: %s -> %s",
        "Recorded" if created else "Updated", utility_type, room, cycle, meter_start, meter_end,
    )
    return reading


def readings_for(room_id: int, cycle_id: int) -> dict[str, MeterReading]:
    qs = MeterReading.objects.filter(room_id=room_id, cycle_id=cycle_id).select_related("utility_type")
    return {r.utility_type.code: r for r in qs}


def has_readings(room_id: int, cycle_id: int) -> bool:
    return MeterReading.objects.filter(room_id=room_id, cycle_id=cycle_id).exists()


def latest_readings(room: Room) -> dict[str, int | None]:
    """Most recent meter_end per utility, used to pre-fill the next cycle's start."""
    latest: dict[str, int | None] = {UtilityType.ELECTRIC: None, UtilityType.WATER: None}
    qs = (
        MeterReading.objects
        .filter(room=room)
        .select_related("utility_type")
        .order_by("-cycle__billing_year", "-cycle__billing_month")
    )
    for reading in qs:
        code = reading.utility_type.code
        if code in latest and latest[code] is None:
            latest[code] = reading.meter_end
        if all(v is not None for v in latest.values()):
            break
    return latest
