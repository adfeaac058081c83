# billing/services/cycles.py
from __future__ import annotations
import calendar
import logging
from datetime import date, timedelta

from django.conf import settings

from billing.models import BillingCycle

logger = logging.getLogger(__name__)


def _offset() -> int:
    return int(getattr(settings, "DORM_BUDDHIST_YEAR_OFFSET", 543))


def to_gregorian_year(buddhist_year: int) -> int:
    return buddhist_year - _offset()


def to_buddhist_year(gregorian_year: int) -> int:
    return gregorian_year + _offset()


def cycle_bounds(year: int, month: int) -> dict:
    """
    Default dates of the cycle (year is Buddhist era): the calendar month,
    with payment due a fixed number of days after the month ends.
    """
    if not 1 <= month <= 12:
        raise ValueError("month must be between 1 and 12")
    g_year = to_gregorian_year(year)
    start = date(g_year, month, 1)
    end = date(g_year, month, calendar.monthrange(g_year, month)[1])
    return {
        "start_date": start,
        "end_date": end,
        "due_date": end + timedelta(days=settings.DORM_DUE_DAYS),
    }


def get_or_create_cycle(
    year: int,
    month: int,
    start_date: date | None = None,
    end_date: date | None = None,
    due_date: date | None = None,
) -> BillingCycle:
    """
    Fetch the cycle for (year, month), creating it on first access.

    Explicit dates only matter when the cycle does not exist yet. A
    concurrent insert of the same (year, month) trips the unique
    constraint and get_or_create re-reads the winner's row.
    """
    defaults = cycle_bounds(year, month)
    if start_date:
        defaults["start_date"] = start_date
    if end_date:
        defaults["end_date"] = end_date
    if due_date:
        defaults["due_date"] = due_date
    elif end_date:
        defaults["due_date"] = end_date + timedelta(days=settings.DORM_DUE_DAYS)

    cycle, created = BillingCycle.objects.get_or_create(
        billing_year=year,
        billing_month=month,
        defaults=defaults,
    )
    if created:
        logger.info("Created billing cycle %s (id=%s)", cycle, cycle.pk)
    return cycle
