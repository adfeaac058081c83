from datetime import date
from decimal import Decimal

from billing.services.allocation import allocate, tenant_count
from dorm.models import Contract


def test_shared_room_splits_utilities_not_maintenance(room, cycle, rates, make_contract, read_meter):
    make_contract(room)
    make_contract(room)
    read_meter(room, cycle, "electric", 1000, 1100)

    allocation = allocate(room.pk, cycle)

    assert allocation.tenant_count == 2
    assert allocation.electric.usage == 100
    assert allocation.electric.room_amount == Decimal("600.00")
    assert allocation.electric_amount == Decimal("300.00")
    assert allocation.maintenance_fee == Decimal("1000.00")
    assert allocation.total_amount == Decimal("1300.00")


def test_both_utilities(room, cycle, rates, make_contract, read_meter):
    make_contract(room)
    read_meter(room, cycle, "electric", 9823, 173)
    read_meter(room, cycle, "water", 20, 32)

    allocation = allocate(room.pk, cycle.pk)

    assert allocation.electric.usage == 350
    assert allocation.electric_amount == Decimal("2100.00")
    assert allocation.water_amount == Decimal("120.00")
    assert allocation.total_amount == Decimal("3220.00")
    assert allocation.warnings == []


def test_missing_reading_contributes_zero(room, cycle, rates, make_contract, read_meter):
    make_contract(room)
    read_meter(room, cycle, "water", 0, 5)

    allocation = allocate(room.pk, cycle)

    assert allocation.electric.usage is None
    assert allocation.electric_amount == 0
    assert allocation.water_amount == Decimal("50.00")


def test_empty_room_counts_as_one_tenant(room, cycle, rates, read_meter):
    read_meter(room, cycle, "electric", 0, 10)
    assert tenant_count(room.pk) == 1
    assert allocate(room.pk, cycle).electric_amount == Decimal("60.00")


def test_ended_contracts_do_not_share(room, cycle, rates, make_contract, read_meter):
    make_contract(room)
    make_contract(room).end(date(2025, 9, 30))
    assert tenant_count(room.pk) == 1
    assert Contract.objects.filter(room=room).count() == 2


def test_three_way_split_rounds_to_cents(room, cycle, rates, make_contract, read_meter):
    for _ in range(3):
        make_contract(room)
    read_meter(room, cycle, "electric", 0, 10)

    allocation = allocate(room.pk, cycle)

    assert allocation.electric_amount == Decimal("20.00")
    read_meter(room, cycle, "electric", 0, 11)
    assert allocate(room.pk, cycle).electric_amount == Decimal("22.00")
    read_meter(room, cycle, "water", 0, 1)
    assert allocate(room.pk, cycle).water_amount == Decimal("3.33")


def test_zero_rate_is_flagged(room, cycle, make_contract, read_meter):
    make_contract(room)
    read_meter(room, cycle, "electric", 0, 100)

    allocation = allocate(room.pk, cycle)

    assert allocation.electric.rate == 0
    assert allocation.electric_amount == 0
    assert allocation.rate_missing is True
    assert any("no electric rate" in w for w in allocation.warnings)


def test_negative_water_usage_passes_through(room, cycle, rates, make_contract, read_meter):
    make_contract(room)
    read_meter(room, cycle, "water", 500, 100)

    allocation = allocate(room.pk, cycle)

    assert allocation.water.usage == -400
    assert allocation.water_amount == Decimal("-4000.00")
    assert any("negative water usage" in w for w in allocation.warnings)


def test_rate_is_resolved_at_cycle_end(room, cycle, add_rate, make_contract, read_meter):
    add_rate("electric", "5.00", date(2025, 1, 1))
    add_rate("electric", "7.00", date(2025, 10, 31))
    add_rate("electric", "9.00", date(2025, 11, 1))
    make_contract(room)
    read_meter(room, cycle, "electric", 0, 10)

    assert allocate(room.pk, cycle).electric.rate == Decimal("7.00")


def test_custom_maintenance_fee(room, cycle, rates, make_contract, read_meter):
    make_contract(room)
    read_meter(room, cycle, "electric", 0, 10)
    allocation = allocate(room.pk, cycle, Decimal("850"))
    assert allocation.maintenance_fee == Decimal("850.00")
    assert allocation.total_amount == Decimal("910.00")
