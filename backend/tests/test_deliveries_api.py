"""API tests for the reservation-to-handoff workflow."""

from __future__ import annotations

import uuid

import pytest

pytestmark = pytest.mark.asyncio


async def _staff_and_client(api_client) -> tuple[str, str, str]:
    driver = await api_client.post(
        "/api/v1/users",
        json={"name": "Rita Route", "email": "rita@example.com", "role": "driver"},
    )
    assert driver.status_code == 201, driver.text
    helper = await api_client.post(
        "/api/v1/users",
        json={"name": "Hugo Helper", "email": "hugo@example.com"},
    )
    client = await api_client.post(
        "/api/v1/clients",
        json={"name": "Festival Co", "email": "ops@festival.example"},
    )
    assert client.status_code == 201, client.text
    return driver.json()["id"], helper.json()["id"], client.json()["id"]


async def test_reservation_to_completed_delivery(rental, api_client) -> None:
    driver_id, helper_id, client_id = await _staff_and_client(api_client)

    reservation = await api_client.post(
        "/api/v1/reservations",
        json={
            "client_id": client_id,
            "start_date": "2026-06-01",
            "end_date": "2026-06-08",
            "delivery_address": "Parque 1",
            "delivery_city": "Sao Paulo",
            "delivery_state": "SP",
            "delivery_postal_code": "04000-000",
            "delivery_country": "BR",
            "items": [{"product_id": str(rental["product_id"])}],
        },
    )
    assert reservation.status_code == 201, reservation.text
    reservation_body = reservation.json()
    assert reservation_body["total_value"] == "560.00"
    reservation_id = reservation_body["id"]

    created = await api_client.post(f"/api/v1/reservations/{reservation_id}/deliveries")
    assert created.status_code == 201, created.text
    records = created.json()
    assert [record["type"] for record in records] == ["delivery", "pickup"]
    assert records[0]["client"]["name"] == "Festival Co"
    delivery_id = records[0]["id"]

    again = await api_client.post(f"/api/v1/reservations/{reservation_id}/deliveries")
    assert again.status_code == 400

    assign = await api_client.post(
        f"/api/v1/deliveries/{delivery_id}/assign", json={"staff_id": driver_id}
    )
    assert assign.status_code == 200
    assert assign.json()["status"] == "assigned"

    wrong_staff = await api_client.post(
        f"/api/v1/deliveries/{delivery_id}/start", json={"staff_id": helper_id}
    )
    assert wrong_staff.status_code == 409

    start = await api_client.post(
        f"/api/v1/deliveries/{delivery_id}/start",
        json={"staff_id": driver_id, "latitude": -23.6, "longitude": -46.7},
    )
    assert start.status_code == 200
    assert start.json()["status"] == "in_progress"

    scan = await api_client.post(
        f"/api/v1/deliveries/{delivery_id}/scan-storage",
        json={
            "unit_id": str(rental["unit_a_id"]),
            "storage_id": str(rental["main_storage_id"]),
            "user_id": driver_id,
        },
    )
    assert scan.status_code == 201, scan.text
    assert scan.json()["type"] == "scanned_at_storage_delivery"

    handover = await api_client.post(
        f"/api/v1/deliveries/{delivery_id}/scan-location",
        json={"unit_id": str(rental["unit_a_id"]), "user_id": driver_id},
    )
    assert handover.status_code == 201

    complete = await api_client.post(
        f"/api/v1/deliveries/{delivery_id}/complete", json={"staff_id": driver_id}
    )
    assert complete.status_code == 200
    assert complete.json()["status"] == "completed"

    detail = await api_client.get(f"/api/v1/deliveries/{delivery_id}")
    assert detail.json()["product_unit"]["unit_code"] == "GEN-0001"
    assert detail.json()["product_unit"]["status"] == "rented"

    events = await api_client.get(f"/api/v1/deliveries/{delivery_id}/events")
    assert [event["type"] for event in events.json()] == [
        "assigned",
        "started",
        "scanned_at_storage_delivery",
        "scanned_at_delivery",
        "completed",
    ]

    cancel = await api_client.post(
        f"/api/v1/deliveries/{delivery_id}/cancel", json={"user_id": driver_id}
    )
    assert cancel.status_code == 409


async def test_delivery_filters_and_not_found(rental, api_client) -> None:
    created = await api_client.post(
        f"/api/v1/reservations/{rental['reservation_id']}/deliveries"
    )
    assert created.status_code == 201

    pickups = await api_client.get("/api/v1/deliveries", params={"type": "pickup"})
    assert [record["type"] for record in pickups.json()] == ["pickup"]

    pending = await api_client.get("/api/v1/deliveries", params={"status": "pending"})
    assert len(pending.json()) == 2

    missing = await api_client.get(f"/api/v1/deliveries/{uuid.uuid4()}")
    assert missing.status_code == 404

    assign_missing = await api_client.post(
        f"/api/v1/deliveries/{uuid.uuid4()}/assign",
        json={"staff_id": str(rental["driver_id"])},
    )
    assert assign_missing.status_code == 404

    reservation_missing = await api_client.get(f"/api/v1/reservations/{uuid.uuid4()}")
    assert reservation_missing.status_code == 404
