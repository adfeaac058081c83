from datetime import date
from decimal import Decimal

import pytest

from billing.services.aggregation import reconstruct, reconstruct_cycle
from billing.services.allocation import allocate
from billing.services.bills import create_bill, run_billing


@pytest.fixture
def billed_room(room, cycle, rates, make_contract, read_meter):
    contracts = [make_contract(room), make_contract(room)]
    read_meter(room, cycle, "electric", 9823, 173)
    read_meter(room, cycle, "water", 100, 133)
    run_billing(2568, 10)
    return contracts


def test_reconstruction_matches_stored_bill(billed_room, cycle):
    contract = billed_room[0]
    bill = contract.bills.get(cycle=cycle)

    view = reconstruct(contract.pk, cycle.pk)

    assert view["bill_id"] == bill.pk
    assert view["total_amount"] == bill.total_amount
    assert view["electric"]["amount"] == bill.electric_amount
    assert view["water"]["amount"] == bill.water_amount
    assert view["maintenance_fee"] == bill.maintenance_fee


def test_reconstruction_equals_fresh_generation(billed_room, cycle):
    contract = billed_room[1]
    fresh = allocate(contract.room_id, cycle)
    assert reconstruct(contract.pk, cycle.pk)["total_amount"] == fresh.total_amount


def test_reconstruction_shape(billed_room, cycle, room):
    view = reconstruct(billed_room[0].pk, cycle.pk)

    assert view["room"]["room_number"] == room.room_number
    assert view["room"]["building_name"] == "อาคาร 1"
    assert view["tenant"]["tenant_id"] == billed_room[0].tenant_id
    assert view["tenant_count"] == 2
    assert view["electric"] == {
        "meter_start": 9823,
        "meter_end": 173,
        "usage": 350,
        "rate": Decimal("6.0000"),
        "room_amount": Decimal("2100.00"),
        "amount": Decimal("1050.00"),
    }
    assert view["water"]["usage"] == 33
    assert view["water"]["amount"] == Decimal("165.00")
    assert view["total_amount"] == Decimal("2215.00")
    assert view["due_date"] == date(2025, 11, 15)
    assert view["warnings"] == []


def test_corrected_reading_changes_view_not_stored_bill(billed_room, cycle, room, read_meter):
    contract = billed_room[0]
    bill = contract.bills.get(cycle=cycle)
    read_meter(room, cycle, "water", 100, 113)

    view = reconstruct(contract.pk, cycle.pk)

    assert view["water"]["amount"] == Decimal("65.00")
    assert view["total_amount"] == bill.total_amount - Decimal("100.00")
    bill.refresh_from_db()
    assert bill.water_amount == Decimal("165.00")
    assert view["stored_total_amount"] == bill.total_amount


def test_corrected_rate_changes_view(billed_room, cycle, add_rate):
    add_rate("electric", "8.00", date(2025, 10, 15))

    view = reconstruct(billed_room[0].pk, cycle.pk)

    assert view["electric"]["rate"] == Decimal("8.00")
    assert view["electric"]["amount"] == Decimal("1400.00")


def test_custom_fee_carried_into_view(room, cycle, rates, make_contract, read_meter):
    contract = make_contract(room)
    read_meter(room, cycle, "electric", 0, 10)
    bill = create_bill(contract.pk, cycle.pk, maintenance_fee=Decimal("500"))

    assert reconstruct(contract.pk, cycle.pk)["total_amount"] == bill.total_amount == Decimal("560.00")


def test_cycle_listing(billed_room, other_room, cycle, make_contract, read_meter):
    make_contract(other_room)
    read_meter(other_room, cycle, "electric", 0, 10)
    run_billing(2568, 10)

    rows = reconstruct_cycle(2568, 10)

    assert [r["room"]["room_number"] for r in rows] == ["101", "101", "102"]
    assert len(reconstruct_cycle(2568, 10, room_id=other_room.pk)) == 1


def test_cycle_listing_for_unknown_cycle_is_empty(db):
    assert reconstruct_cycle(2568, 1) == []
