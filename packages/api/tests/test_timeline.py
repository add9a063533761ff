"""Tests for the timeline grid."""

from __future__ import annotations

from datetime import date

from dustfree_shared.constants import COLOR_PALETTE
from dustfree_api.services.timeline_service import TOTAL_ROW_ID, build_timeline, cleaner_color

TZ = "Asia/Bangkok"

PROPERTIES = [
    {"id": "p2", "name": "Sathorn Suites", "floor": None, "room_number": None},
    {"id": "p1", "name": "Riverside Condo", "floor": "3", "room_number": "301"},
]


def _cleaning(cid, property_id, completed_at, amount=900, transport=100, cleaner="c1", status="completed"):
    name = {"p1": "Riverside Condo", "p2": "Sathorn Suites"}[property_id]
    return {
        "id": cid,
        "property_id": property_id,
        "cleaner_id": cleaner,
        "status": status,
        "completed_at": completed_at,
        "amount": amount,
        "transport_cost": transport,
        "property": {"id": property_id, "name": name},
        "cleaner": {"id": cleaner, "name": cleaner.upper()},
    }


def test_cleaner_color_is_stable_and_from_palette():
    assert cleaner_color("a") == COLOR_PALETTE[7]
    assert cleaner_color("ab") == COLOR_PALETTE[5]
    some_id = "3f1c6a2e-5d0b-4c11-9b7e-2a9d8c7f6e51"
    assert cleaner_color(some_id) == cleaner_color(some_id)
    assert cleaner_color(some_id) in COLOR_PALETTE


def test_rows_sorted_with_total_first():
    grid = build_timeline(PROPERTIES, [], start=date(2024, 6, 1), end=date(2024, 6, 7), tz=TZ)
    assert [r["id"] for r in grid["rows"]] == [TOTAL_ROW_ID, "p1", "p2"]
    assert grid["rows"][1]["subtitle"] == "3 • 301"
    assert grid["rows"][2]["subtitle"] == "-"
    assert grid["days"][0] == "2024-06-01" and grid["days"][-1] == "2024-06-07"


def test_cells_use_local_day():
    # 18:30 UTC is 01:30 the next morning in Bangkok
    late = _cleaning("x", "p1", "2024-06-10T18:30:00+00:00")
    grid = build_timeline(PROPERTIES, [late], start=date(2024, 6, 1), end=date(2024, 6, 30), tz=TZ)
    row = grid["rows"][1]
    assert list(row["days"]) == ["2024-06-11"]
    item = row["days"]["2024-06-11"][0]
    assert item["cleaner_name"] == "C1"
    assert item["color"] == cleaner_color("c1")


def test_totals_split_fee_and_transport():
    cleanings = [
        _cleaning("x", "p1", "2024-06-10T05:00:00+00:00", amount=900, transport=100),
        _cleaning("y", "p2", "2024-06-10T07:00:00+00:00", amount=50, transport=80),
    ]
    grid = build_timeline(PROPERTIES, cleanings, start=date(2024, 6, 1), end=date(2024, 6, 30), tz=TZ)
    total = grid["rows"][0]
    assert total["count"] == 2
    # fee never goes negative when transport exceeds the amount
    assert total["totals"] == {"cleaning": 800.0, "transport": 180.0, "other": 0.0, "total": 980.0}
    assert total["days"]["2024-06-10"] == {"amount": 950.0, "transport": 180.0}


def test_window_and_status_filters():
    cleanings = [
        _cleaning("in", "p1", "2024-06-30T16:59:00+00:00"),
        _cleaning("after", "p1", "2024-06-30T17:00:00+00:00"),
        _cleaning("before", "p1", "2024-05-31T16:59:00+00:00"),
        _cleaning("open", "p1", "2024-06-10T05:00:00+00:00", status="scheduled"),
    ]
    grid = build_timeline(PROPERTIES, cleanings, start=date(2024, 6, 1), end=date(2024, 6, 30), tz=TZ)
    assert grid["rows"][0]["count"] == 1
    assert grid["rows"][1]["days"]["2024-06-30"][0]["id"] == "in"


def test_cleaner_and_building_filters():
    cleanings = [
        _cleaning("x", "p1", "2024-06-10T05:00:00+00:00", cleaner="c1"),
        _cleaning("y", "p1", "2024-06-11T05:00:00+00:00", cleaner="c2"),
        _cleaning("z", "p2", "2024-06-12T05:00:00+00:00", cleaner="c1"),
    ]
    grid = build_timeline(
        PROPERTIES,
        cleanings,
        start=date(2024, 6, 1),
        end=date(2024, 6, 30),
        tz=TZ,
        cleaner_id="c1",
        buildings=["Riverside Condo"],
    )
    assert [r["id"] for r in grid["rows"]] == [TOTAL_ROW_ID, "p1"]
    assert grid["rows"][0]["count"] == 1
    assert grid["buildings"] == ["Riverside Condo", "Sathorn Suites"]


def test_properties_fall_back_to_embedded_rows():
    cleanings = [
        _cleaning("x", "p1", "2024-06-10T05:00:00+00:00"),
        _cleaning("y", "p1", "2024-06-11T05:00:00+00:00"),
    ]
    grid = build_timeline([], cleanings, start=date(2024, 6, 1), end=date(2024, 6, 30), tz=TZ)
    assert [r["id"] for r in grid["rows"]] == [TOTAL_ROW_ID, "p1"]
    assert grid["rows"][1]["count"] == 2


def test_cleaner_color_wraps_like_a_32bit_hash():
    # "cleaner" overflows int32 on its 6th character; wrapped hash is 856773814
    assert cleaner_color("cleaner") == "#7c3aed"
