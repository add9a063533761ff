"""Tests for the cleaner portal: logging jobs, transport edits, salary."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from dustfree_api.errors import ValidationFailed
from dustfree_api.services import cleaning_service
from dustfree_api.services.cleaning_service import (
    MediaRef,
    rebase_amount,
    sum_transport,
)
from tests.conftest import CLEANER_ID, PROPERTY_ID

NOW = datetime(2024, 6, 10, 8, 0, tzinfo=timezone.utc)


def test_sum_transport_ignores_blanks_and_negatives():
    assert sum_transport([None, 120, -30, "45.5"]) == 165.5
    assert sum_transport([]) == 0.0


def test_rebase_amount_keeps_cleaning_fee():
    assert rebase_amount(950, 150, 200) == 1000
    assert rebase_amount(None, None, 80) == 80


def test_log_cleaning_amount_and_duration(db, sample_cleaner, sample_property):
    db.load(properties=[sample_property])
    row = cleaning_service.log_cleaning(
        sample_cleaner,
        property_id=PROPERTY_ID,
        transport_costs=[100, 50],
        media=[MediaRef("s.jpg", "start"), MediaRef("a.jpg", "after")],
        started_at=NOW - timedelta(minutes=135),
        now=NOW,
    )
    assert row["amount"] == 950.0
    assert row["transport_cost"] == 150.0
    assert row["duration_hours"] == 2.25
    assert row["status"] == "completed"
    assert row["completed_at"] == NOW.isoformat()
    assert [m["category"] for m in row["media"]] == ["start", "after"]

    inserted = db.table("cleanings").insert.call_args[0][0]
    assert inserted["cleaner_id"] == CLEANER_ID


def test_log_cleaning_uses_flat_rate_without_property_rate(db, sample_cleaner, sample_property):
    db.load(properties=[{**sample_property, "cleaner_rate_baht": 0}])
    row = cleaning_service.log_cleaning(
        sample_cleaner,
        property_id=PROPERTY_ID,
        transport_costs=[None, None],
        media=[MediaRef("a.jpg", "after")],
        started_at=NOW + timedelta(minutes=5),
        now=NOW,
    )
    assert row["amount"] == 700.0
    assert row["duration_hours"] == 0.0


def test_log_cleaning_requires_after_photo(db, sample_cleaner):
    with pytest.raises(ValidationFailed):
        cleaning_service.log_cleaning(
            sample_cleaner,
            property_id=PROPERTY_ID,
            transport_costs=[],
            media=[MediaRef("s.jpg", "start")],
            now=NOW,
        )
    db.table("cleanings").insert.assert_not_called()


def test_me(client, db, cleaner_headers, sample_cleaner, sample_property):
    db.load(cleaners=[sample_cleaner], properties=[{**sample_property, "cleaner_rate_baht": None}])
    response = client.get("/v1/cleaner/me", headers=cleaner_headers)
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["cleaner"]["id"] == CLEANER_ID
    assert data["properties"][0]["rate"] == 700.0


def test_log_cleaning_endpoint(client, db, cleaner_headers, sample_cleaner, sample_property):
    db.load(cleaners=[sample_cleaner], properties=[sample_property])
    started = (datetime.now(timezone.utc) - timedelta(hours=2)).isoformat()
    response = client.post(
        "/v1/cleaner/cleanings",
        json={
            "property_id": PROPERTY_ID,
            "start_photo": {"media_url": "https://cdn.example.com/s.jpg", "captured_at": started},
            "after_photo": {"media_url": "https://cdn.example.com/a.jpg"},
            "transport_cost_1": 60,
            "receipt_main": {"media_url": "https://cdn.example.com/r.jpg"},
        },
        headers=cleaner_headers,
    )
    assert response.status_code == 201
    data = response.json()["data"]
    assert data["amount"] == 860.0
    assert data["duration_hours"] == pytest.approx(2.0, abs=0.01)
    media = db.table("cleaning_media").insert.call_args[0][0]
    assert {m["category"] for m in media} == {"start", "after", "receipt_main"}


def test_log_cleaning_endpoint_without_after_photo(client, db, cleaner_headers, sample_cleaner):
    db.load(cleaners=[sample_cleaner])
    response = client.post(
        "/v1/cleaner/cleanings",
        json={"property_id": PROPERTY_ID, "start_photo": {"media_url": "s.jpg"}},
        headers=cleaner_headers,
    )
    assert response.status_code == 422
    assert response.json()["error"]["message"] == "After photo is required"


def test_log_cleaning_rejects_negative_transport(client, db, cleaner_headers, sample_cleaner):
    db.load(cleaners=[sample_cleaner])
    response = client.post(
        "/v1/cleaner/cleanings",
        json={"property_id": PROPERTY_ID, "after_photo": {"media_url": "a.jpg"}, "transport_cost_1": -1},
        headers=cleaner_headers,
    )
    assert response.status_code == 422


def test_log_cleaning_at_other_hosts_property_is_404(client, db, cleaner_headers, sample_cleaner):
    db.load(cleaners=[sample_cleaner])
    response = client.post(
        "/v1/cleaner/cleanings",
        json={"property_id": str(uuid4()), "after_photo": {"media_url": "a.jpg"}},
        headers=cleaner_headers,
    )
    assert response.status_code == 404


def test_update_transport(client, db, cleaner_headers, sample_cleaner, sample_cleaning):
    db.load(cleaners=[sample_cleaner], cleanings=[sample_cleaning])
    response = client.patch(
        f"/v1/cleaner/cleanings/{sample_cleaning['id']}/transport",
        json={"transport_cost_1": 120, "transport_cost_2": 80, "receipt_extra": {"media_url": "r2.jpg"}},
        headers=cleaner_headers,
    )
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["transport_cost"] == 200.0
    assert data["amount"] == 1000.0
    assert [r["category"] for r in data["receipts"]] == ["receipt_extra"]
    db.table("cleanings").update.assert_called_once_with({"transport_cost": 200.0, "amount": 1000.0})


def test_update_transport_rejects_non_receipt_media(db, sample_cleaning):
    db.load(cleanings=[sample_cleaning])
    with pytest.raises(ValidationFailed):
        cleaning_service.update_transport(
            CLEANER_ID,
            sample_cleaning["id"],
            transport_costs=[10],
            receipts=[MediaRef("a.jpg", "after")],
        )


def test_salary(client, db, cleaner_headers, sample_cleaner, sample_cleaning):
    db.load(cleaners=[sample_cleaner], cleanings=[sample_cleaning])
    response = client.get("/v1/cleaner/salary", headers=cleaner_headers)
    data = response.json()["data"]
    assert data["pending"] == 950.0
    assert data["paid"] == 0
    assert data["cleanings"][0]["paid"] is False


def test_payment_details(client, db, cleaner_headers, sample_cleaner):
    db.load(cleaners=[sample_cleaner])
    response = client.put(
        "/v1/cleaner/payment-details",
        json={"payment_details_image": "https://cdn.example.com/qr.png"},
        headers=cleaner_headers,
    )
    assert response.status_code == 200
    db.table("cleaners").update.assert_called_once_with(
        {"payment_details_image": "https://cdn.example.com/qr.png"}
    )


def test_tasks_for_other_hosts_property_are_hidden(client, db, cleaner_headers, sample_cleaner):
    db.load(cleaners=[sample_cleaner])
    response = client.get(f"/v1/cleaner/properties/{uuid4()}/tasks", headers=cleaner_headers)
    assert response.status_code == 404


def test_log_cleaning_treats_naive_start_as_utc(db, sample_cleaner, sample_property):
    db.load(properties=[sample_property])
    row = cleaning_service.log_cleaning(
        sample_cleaner,
        property_id=PROPERTY_ID,
        transport_costs=[],
        media=[MediaRef("a.jpg", "after", captured_at=datetime(2024, 6, 10, 7, 30))],
        started_at=datetime(2024, 6, 10, 6, 0),
        now=NOW,
    )
    assert row["duration_hours"] == 2.0
    assert row["media"][0]["captured_at"] == "2024-06-10T07:30:00+00:00"


def test_log_cleaning_endpoint_accepts_timestamp_without_offset(
    client, db, cleaner_headers, sample_cleaner, sample_property
):
    db.load(cleaners=[sample_cleaner], properties=[sample_property])
    started = (datetime.now(timezone.utc) - timedelta(hours=3)).replace(tzinfo=None)
    response = client.post(
        "/v1/cleaner/cleanings",
        json={
            "property_id": PROPERTY_ID,
            "start_photo": {"media_url": "s.jpg", "captured_at": started.isoformat()},
            "after_photo": {"media_url": "a.jpg"},
        },
        headers=cleaner_headers,
    )
    assert response.status_code == 201
    assert response.json()["data"]["duration_hours"] == pytest.approx(3.0, abs=0.01)
    start = next(m for m in response.json()["data"]["media"] if m["category"] == "start")
    assert start["captured_at"].endswith("+00:00")


def test_toggle_task_on_hosts_property(client, db, cleaner_headers, sample_cleaner, sample_property):
    task = {"id": str(uuid4()), "property_id": PROPERTY_ID, "task": "Mop", "completed": False}
    db.load(cleaners=[sample_cleaner], properties=[sample_property], property_tasks=[task])
    response = client.patch(
        f"/v1/cleaner/properties/{PROPERTY_ID}/tasks/{task['id']}",
        json={"completed": True},
        headers=cleaner_headers,
    )
    assert response.status_code == 200
    assert response.json()["data"]["completed"] is True
    db.table("property_tasks").update.assert_called_once_with({"completed": True})
