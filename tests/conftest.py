from datetime import date
from decimal import Decimal

import pytest
from rest_framework.test import APIClient

from billing.models import UtilityRate
from billing.services.cycles import get_or_create_cycle
from billing.services.rates import get_utility_type
from billing.services.readings import record_reading
from dorm.models import Building, Contract, Room, Tenant


@pytest.fixture
def building(db):
    return Building.objects.create(name_th="อาคาร 1", name_en="Building 1")


@pytest.fixture
def room(building):
    return Room.objects.create(building=building, room_number="101", floor_no=1, status="occupied")


@pytest.fixture
def other_room(building):
    return Room.objects.create(building=building, room_number="102", floor_no=1, status="occupied")


@pytest.fixture
def make_contract(db):
    counter = {"n": 0}

    def _make(room, status=Contract.Status.ACTIVE, start_date=date(2025, 1, 1)):
        counter["n"] += 1
        tenant = Tenant.objects.create(
            first_name_th=f"ผู้เช่า{counter['n']}",
            last_name_th="ทดสอบ",
            phone=f"08000000{counter['n']:02d}",
        )
        return Contract.objects.create(tenant=tenant, room=room, start_date=start_date, status=status)
    return _make


@pytest.fixture
def cycle(db):
    # October 2025
    return get_or_create_cycle(2568, 10)


@pytest.fixture
def add_rate(db):
    def _add(code, rate, effective_date):
        return UtilityRate.objects.create(
            utility_type=get_utility_type(code),
            rate_per_unit=Decimal(str(rate)),
            effective_date=effective_date,
        )
    return _add


@pytest.fixture
def rates(add_rate):
    """Electric 6 and water 10 per unit, in effect for the whole of 2025."""
    return [
        add_rate("electric", "6.00", date(2025, 1, 1)),
        add_rate("water", "10.00", date(2025, 1, 1)),
    ]


@pytest.fixture
def read_meter(db):
    def _read(room, cycle, code, start, end):
        return record_reading(room, cycle, code, start, end)
    return _read


@pytest.fixture
def staff_user(db, django_user_model):
    return django_user_model.objects.create_user(username="staff", password="secret123", is_staff=True)


@pytest.fixture
def api(staff_user):
    client = APIClient()
    client.force_authenticate(user=staff_user)
    return client
