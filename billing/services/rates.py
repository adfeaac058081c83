# billing/services/rates.py
from __future__ import annotations
import logging
from datetime import date
from decimal import Decimal

from django.utils import timezone

from billing.models import BillingCycle, UtilityRate, UtilityType

logger = logging.getLogger(__name__)

UTILITY_NAMES = dict(UtilityType.CODE_CHOICES)


def get_utility_type(code: str) -> UtilityType:
    if code not in UTILITY_NAMES:
        raise ValueError(f"unknown utility type {code!r}")
    utility_type, _ = UtilityType.objects.get_or_create(code=code, defaults={"name_th": UTILITY_NAMES[code]})
    return utility_type


def reference_date(cycle: BillingCycle) -> date:
    return cycle.end_date or timezone.localdate()


def resolve_rate(utility_type: str, ref_date: date) -> Decimal:
    """
    Price per unit in effect on ``ref_date``: the latest rate whose
    effective date is on or before it. ``Decimal("0")`` when none applies.
    """
    rate = (
        UtilityRate.objects
        .filter(utility_type__code=utility_type, effective_date__lte=ref_date)
        .order_by("-effective_date", "-id")
        .values_list("rate_per_unit", flat=True)
        .first()
    )
    if rate is None:
        logger.warning("No %s rate in effect on %s, using 0", utility_type, ref_date)
        return Decimal("0")
    return rate


def ensure_utility_types() -> list[UtilityType]:
    return [get_utility_type(code) for code in UTILITY_NAMES]
