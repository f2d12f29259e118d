# tests/test_lease_days_left_rounding.py
from __future__ import annotations

import math
from datetime import datetime, timedelta, timezone

from pm_console.domain.entities import FacetContext, LEASES
from pm_console.domain.status import days_left, days_left_label, is_expiring_soon, parse_instant
from pm_console.schemas import LeaseRecord

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


def _iso(dt: datetime) -> str:
    return dt.isoformat()


def test_partial_day_rounds_up_to_one_day():
    d = days_left(_iso(NOW + timedelta(hours=23)), now=NOW)
    assert d == 1
    assert days_left_label(d) == "1 days"


def test_just_ended_lease_is_expired():
    d = days_left(_iso(NOW - timedelta(minutes=1)), now=NOW)
    assert d <= 0
    assert days_left_label(d) == "Expired"


def test_date_only_end_is_midnight_utc():
    # 2026-10-20T00:00Z is 12h after NOW
    assert days_left("2026-10-20", now=NOW) == 1
    assert days_left("2026-10-19", now=NOW) == 0


def test_zulu_and_naive_timestamps_parse_as_utc():
    assert parse_instant("2026-10-20T00:00:00Z") == datetime(2026, 10, 20, tzinfo=timezone.utc)
    assert parse_instant("2026-10-20T00:00:00") == datetime(2026, 10, 20, tzinfo=timezone.utc)


def test_malformed_or_missing_end_date_is_nan_not_an_error():
    for bad in ("not-a-date", "", None, "2026-13-45"):
        d = days_left(bad, now=NOW)
        assert math.isnan(d)
        assert days_left_label(d) == "—"
        assert is_expiring_soon(d, "active") is False


def test_expiring_soon_boundaries():
    at_30 = days_left(_iso(NOW + timedelta(days=30)), now=NOW)
    at_31 = days_left(_iso(NOW + timedelta(days=31)), now=NOW)
    assert at_30 == 30
    assert at_31 == 31

    assert is_expiring_soon(at_30, "active") is True
    assert is_expiring_soon(at_31, "active") is False
    assert is_expiring_soon(0, "active") is False
    assert is_expiring_soon(-3, "active") is False

    for status in ("pending", "terminated", "Active", ""):
        assert is_expiring_soon(10, status) is False


def test_lease_derive_labels_and_badges():
    ctx = FacetContext(now=NOW)

    soon = LeaseRecord(id="1", status="active", end_date=_iso(NOW + timedelta(days=5)))
    d = LEASES.derive(soon, ctx)
    assert d.days_left == 5
    assert d.expiring_soon is True
    assert d.show_expiry_alert is True
    assert d.status_label == "Expiring Soon"
    assert "yellow" in d.status_badge_class

    far = LeaseRecord(id="2", status="active", end_date=_iso(NOW + timedelta(days=200)))
    d = LEASES.derive(far, ctx)
    assert d.status_label == "Active"
    assert "green" in d.status_badge_class

    ended = LeaseRecord(id="3", status="terminated", end_date=_iso(NOW - timedelta(days=2)))
    d = LEASES.derive(ended, ctx)
    assert d.days_left_label == "Expired"
    assert d.status_label == "Terminated"
    assert "gray" in d.status_badge_class
    assert d.tenant_name == "Unknown Tenant"
    assert d.unit_display == "N/A"


def test_end_dates_at_the_edge_of_the_calendar_are_nan():
    # UTC conversion of these offsets falls outside the datetime range
    for edge in ("0001-01-01T00:00:00+05:00", "9999-12-31T23:59:00-05:00"):
        d = days_left(edge, now=NOW)
        assert math.isnan(d)
        assert days_left_label(d) == "—"

    lease = LeaseRecord(id="9", status="active", end_date="0001-01-01T00:00:00+05:00")
    d = LEASES.derive(lease, FacetContext(now=NOW))
    assert d.end_date_display == "—"
    assert d.expiring_soon is False
