# billing/services/usage.py
from __future__ import annotations
from django.conf import settings

from billing.models import UtilityType


def electric_modulus() -> int:
    return int(getattr(settings, "DORM_ELECTRIC_METER_MODULUS", 10000))


def compute_usage(meter_start: int, meter_end: int, utility_type: str) -> int:
    """
    Units consumed between two readings. Every caller that needs consumption
    goes through here.

    Electric meters are 4-digit odometers: an end value below the start value
    means the meter wrapped past zero (9823 -> 173 is 350 units). Water has
    no wraparound and a negative result is passed through unchanged.
    """
    if utility_type == UtilityType.ELECTRIC:
        if meter_end >= meter_start:
            return meter_end - meter_start
        return (electric_modulus() - meter_start) + meter_end
    if utility_type == UtilityType.WATER:
        return meter_end - meter_start
    raise ValueError(f"unknown utility type {utility_type!r}")
