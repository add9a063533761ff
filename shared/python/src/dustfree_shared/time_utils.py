"""
time_utils.py — Timestamp parsing and calendar helpers.

Supabase returns timestamptz columns as ISO strings ("2024-06-01T10:00:00+00:00",
"2024-06-01T10:00:00.123456Z", occasionally a bare date). Every view in the
service buckets cleanings by the *local* calendar day of the configured
timezone, so parsing and bucketing live together here.

Usage:
    from dustfree_shared.time_utils import parse_timestamp, local_day, date_presets

    ts = parse_timestamp("2024-06-01T10:00:00Z")       # aware datetime (UTC)
    day = local_day(ts, "Asia/Bangkok")                 # date(2024, 6, 1)
    presets = date_presets(date(2024, 6, 15))           # named (from, to) ranges
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from typing import Any
from zoneinfo import ZoneInfo

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta


def parse_timestamp(raw: Any) -> datetime | None:
    """
    Parse a Supabase timestamp into an aware datetime.

    Naive values are assumed to be UTC. Returns None for empty or
    unparseable input.
    """
    if raw is None or raw == "":
        return None
    if isinstance(raw, datetime):
        dt = raw
    elif isinstance(raw, date):
        dt = datetime.combine(raw, time.min)
    else:
        try:
            dt = date_parser.isoparse(str(raw).strip())
        except (ValueError, OverflowError):
            return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def event_time(row: dict[str, Any]) -> datetime | None:
    """When a cleaning happened: completion time, falling back to schedule."""
    return parse_timestamp(row.get("completed_at")) or parse_timestamp(
        row.get("scheduled_date")
    )


def local_day(dt: datetime, tz: str) -> date:
    return dt.astimezone(ZoneInfo(tz)).date()


def today_in(tz: str) -> date:
    return utc_now().astimezone(ZoneInfo(tz)).date()


def day_bounds(start: date, end: date, tz: str) -> tuple[datetime, datetime]:
    """Aware datetimes covering [start 00:00, end 23:59:59.999999] locally."""
    zone = ZoneInfo(tz)
    lower = datetime.combine(start, time.min, tzinfo=zone)
    upper = datetime.combine(end, time.max, tzinfo=zone)
    return lower, upper


def each_day(start: date, end: date) -> list[date]:
    """All calendar days from start to end inclusive (empty if end < start)."""
    return [start + timedelta(days=i) for i in range((end - start).days + 1)]


def duration_hours(start: datetime, end: datetime) -> float:
    """Elapsed hours between two instants, 2 decimals, never negative."""
    hours = (end - start).total_seconds() / 3600
    return max(0.0, round(hours, 2))


# ---------------------------------------------------------------------------
# Months
# ---------------------------------------------------------------------------


def month_start(d: date) -> date:
    return date(d.year, d.month, 1)


def month_end(d: date) -> date:
    return month_start(d) + relativedelta(months=1) - timedelta(days=1)


def trailing_months(today: date, count: int) -> list[date]:
    """First days of the `count` months ending with today's month, oldest first."""
    first = month_start(today) - relativedelta(months=count - 1)
    return [first + relativedelta(months=i) for i in range(count)]


# ---------------------------------------------------------------------------
# Named date ranges for the timeline picker
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DatePreset:
    label: str
    start: date
    end: date

    def to_dict(self) -> dict[str, str]:
        return {
            "label": self.label,
            "from": self.start.isoformat(),
            "to": self.end.isoformat(),
        }


def date_presets(today: date) -> list[DatePreset]:
    last_month = today - relativedelta(months=1)
    last_year = today - relativedelta(years=1)
    return [
        DatePreset("Today", today, today),
        DatePreset("Yesterday", today - timedelta(days=1), today - timedelta(days=1)),
        DatePreset("Last 7 days", today - timedelta(days=6), today),
        DatePreset("Last 30 days", today - timedelta(days=29), today),
        DatePreset("Last 90 days", today - timedelta(days=89), today),
        DatePreset("This month", month_start(today), today),
        DatePreset("Last month", month_start(last_month), month_end(last_month)),
        DatePreset("YTD (Year to date)", date(today.year, 1, 1), today),
        DatePreset(
            "This month last year", month_start(last_year), month_end(last_year)
        ),
    ]
