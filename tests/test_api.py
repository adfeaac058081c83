from decimal import Decimal

import pytest
from rest_framework.test import APIClient

from billing.models import Bill, MeterReading, UtilityRate, UtilityType
from dorm.models import Contract


@pytest.fixture
def metered_room(room, cycle, rates, make_contract, read_meter):
    contract = make_contract(room)
    read_meter(room, cycle, "electric", 0, 100)
    return contract


def test_requires_staff(db, cycle):
    response = APIClient().post("/api/bills/run/", {"year": 2568, "month": 10}, format="json")
    assert response.status_code in (401, 403)


def test_get_or_create_cycle(api):
    first = api.post("/api/billing-cycles/get-or-create/", {"year": 2568, "month": 10}, format="json")
    second = api.post("/api/billing-cycles/get-or-create/", {"year": 2568, "month": 10}, format="json")

    assert first.status_code == 200
    assert first.data["id"] == second.data["id"]
    assert first.data["end_date"] == "2025-10-31"
    assert first.data["due_date"] == "2025-11-15"


def test_get_or_create_cycle_validates_month(api):
    response = api.post("/api/billing-cycles/get-or-create/", {"year": 2568, "month": 0}, format="json")
    assert response.status_code == 400


def test_record_readings(api, room, cycle):
    response = api.post(
        "/api/meter-readings/",
        {"room": room.pk, "cycle": cycle.pk, "electric": {"start": 9823, "end": 173}, "water": {"start": 5, "end": 9}},
        format="json",
    )

    assert response.status_code == 201
    assert {r["utility_type"] for r in response.data} == {"electric", "water"}
    assert MeterReading.objects.filter(room=room, cycle=cycle).count() == 2


def test_record_readings_rejects_five_digit_electric(api, room, cycle):
    response = api.post(
        "/api/meter-readings/",
        {"room": room.pk, "cycle": cycle.pk, "electric": {"start": 9900, "end": 10010}},
        format="json",
    )
    assert response.status_code == 400
    assert not MeterReading.objects.exists()


def test_record_readings_rejects_non_numeric(api, room, cycle):
    response = api.post(
        "/api/meter-readings/",
        {"room": room.pk, "cycle": cycle.pk, "water": {"start": "abc", "end": 9}},
        format="json",
    )
    assert response.status_code == 400


def test_latest_readings(api, metered_room, room):
    response = api.get("/api/meter-readings/latest/", {"room_id": room.pk})
    assert response.status_code == 200
    assert response.data == {"electric": 100, "water": None}


def test_latest_readings_rejects_bad_room_id(api, db):
    assert api.get("/api/meter-readings/latest/", {"room_id": "abc"}).status_code == 400
    assert api.get("/api/meter-readings/latest/").status_code == 400


def test_record_readings_rejects_out_of_range_water(api, room, cycle):
    response = api.post(
        "/api/meter-readings/",
        {"room": room.pk, "cycle": cycle.pk, "water": {"start": 0, "end": 3_000_000_000}},
        format="json",
    )
    assert response.status_code == 400
    assert not MeterReading.objects.exists()


def test_utility_types_are_seeded(db):
    response = APIClient().get("/api/utility-types/")
    assert response.status_code == 200
    assert {t["code"] for t in response.data} == {"electric", "water"}


def test_listing_utility_types_does_not_write(db):
    UtilityType.objects.all().delete()

    response = APIClient().get("/api/utility-types/")

    assert response.data == []
    assert not UtilityType.objects.exists()


def test_create_bill_then_conflict(api, metered_room, cycle):
    payload = {"contract": metered_room.pk, "cycle": cycle.pk}

    first = api.post("/api/bills/", payload, format="json")
    second = api.post("/api/bills/", payload, format="json")

    assert first.status_code == 201
    assert Decimal(first.data["total_amount"]) == Decimal("1600.00")
    assert second.status_code == 409
    assert Bill.objects.filter(contract=metered_room, cycle=cycle).count() == 1


def test_create_bill_without_readings(api, other_room, cycle, make_contract):
    contract = make_contract(other_room)
    response = api.post("/api/bills/", {"contract": contract.pk, "cycle": cycle.pk}, format="json")
    assert response.status_code == 412
    assert "meter readings" in response.data["detail"]


def test_run_billing_twice(api, metered_room):
    first = api.post("/api/bills/run/", {"year": 2568, "month": 10}, format="json")
    second = api.post("/api/bills/run/", {"year": 2568, "month": 10}, format="json")

    assert first.data["bills_created"] == 1
    assert second.data["bills_created"] == 0
    assert Bill.objects.count() == 1


def test_list_bills_by_period(api, metered_room):
    api.post("/api/bills/run/", {"year": 2568, "month": 10}, format="json")

    response = api.get("/api/bills/", {"year": 2568, "month": 10})
    empty = api.get("/api/bills/", {"year": 2568, "month": 9})

    assert response.data["count"] == 1
    assert response.data["results"][0]["room_number"] == "101"
    assert empty.data["count"] == 0


def test_status_is_the_only_editable_field(api, metered_room):
    api.post("/api/bills/run/", {"year": 2568, "month": 10}, format="json")
    bill = Bill.objects.get()

    response = api.patch(f"/api/bills/{bill.pk}/", {"status": "sent", "total_amount": "1"}, format="json")

    assert response.status_code == 200
    bill.refresh_from_db()
    assert bill.status == Bill.Status.SENT
    assert bill.total_amount == Decimal("1600.00")


def test_bill_cannot_be_deleted(api, metered_room):
    api.post("/api/bills/run/", {"year": 2568, "month": 10}, format="json")
    bill = Bill.objects.get()
    assert api.delete(f"/api/bills/{bill.pk}/").status_code == 405


def test_detailed_and_reconstruct(api, metered_room):
    api.post("/api/bills/run/", {"year": 2568, "month": 10}, format="json")
    bill = Bill.objects.get()

    listing = api.get("/api/bills/detailed/", {"year": 2568, "month": 10})
    single = api.get(f"/api/bills/{bill.pk}/reconstruct/")

    assert listing.status_code == 200
    assert len(listing.data) == 1
    assert single.data["electric"]["usage"] == 100
    assert Decimal(str(single.data["total_amount"])) == bill.total_amount


def test_rates_are_append_only(api, db):
    created = api.post(
        "/api/utility-rates/",
        {"utility_type": "water", "rate_per_unit": "18.00", "effective_date": "2025-11-01"},
        format="json",
    )
    assert created.status_code == 201

    rate = UtilityRate.objects.get(pk=created.data["id"])
    assert api.patch(f"/api/utility-rates/{rate.pk}/", {"rate_per_unit": "1"}, format="json").status_code == 405


def test_end_contract(api, metered_room):
    response = api.post(f"/api/contracts/{metered_room.pk}/end/", {"end_date": "2025-10-31"}, format="json")

    assert response.status_code == 200
    metered_room.refresh_from_db()
    assert metered_room.status == Contract.Status.ENDED
    assert str(metered_room.end_date) == "2025-10-31"
