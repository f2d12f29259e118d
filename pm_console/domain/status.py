# pm_console/domain/status.py
"""
Derived, display-only fields for list rows.

Everything here is pure and total: a missing or unparseable date yields NaN
days-left and the "—" fallback label, never an exception.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import Any, Optional

MS_PER_DAY = 86_400_000
UNKNOWN = "—"
NOT_AVAILABLE = "N/A"

BADGE_CLASSES: dict[str, str] = {
    "red": "bg-red-500/10 text-red-700",
    "yellow": "bg-yellow-500/10 text-yellow-700",
    "green": "bg-green-500/10 text-green-700",
    "blue": "bg-blue-500/10 text-blue-700",
    "gray": "bg-gray-500/10 text-gray-700",
}
NEUTRAL_BADGE = BADGE_CLASSES["gray"]

PRIORITY_TONES: dict[str, str] = {
    "urgent": "red",
    "high": "red",
    "medium": "yellow",
    "low": "green",
}

MAINTENANCE_STATUS_TONES: dict[str, str] = {
    "completed": "green",
    "in_progress": "blue",
}


def as_utc(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def parse_instant(v: Any) -> Optional[datetime]:
    """
    ISO-8601 string / date / datetime -> aware UTC datetime.
    Date-only values are midnight UTC; naive datetimes are taken as UTC.
    """
    if v is None:
        return None
    if isinstance(v, datetime):
        try:
            return as_utc(v)
        except OverflowError:
            return None
    if isinstance(v, date):
        return datetime(v.year, v.month, v.day, tzinfo=timezone.utc)

    s = str(v).strip()
    if not s:
        return None
    if s.endswith(("Z", "z")):
        s = s[:-1] + "+00:00"
    try:
        return as_utc(datetime.fromisoformat(s))
    except (ValueError, OverflowError):
        # offsets at the edges of the datetime range overflow on UTC conversion
        return None


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def days_left(end_date: Any, *, now: Optional[datetime] = None) -> float:
    """
    ceil((end - now) / 1 day). Partial days round UP, so a lease ending in
    23 hours has 1 day left. Returns NaN when end_date cannot be parsed.
    """
    end = parse_instant(end_date)
    if end is None:
        return math.nan
    ref = as_utc(now) if now is not None else utc_now()
    return math.ceil((end - ref) / timedelta(milliseconds=1) / MS_PER_DAY)


def days_left_label(d: float) -> str:
    if math.isnan(d):
        return UNKNOWN
    return f"{int(d)} days" if d > 0 else "Expired"


def is_expiring_soon(d: float, status: Optional[str], *, window_days: int = 30) -> bool:
    # NaN fails both comparisons, but be explicit: unknown is never "soon"
    if math.isnan(d):
        return False
    return 0 < d <= window_days and status == "active"


def capitalize_first(s: Optional[str]) -> str:
    s = s or ""
    return s[:1].upper() + s[1:]


def lease_status_label(status: Optional[str], expiring_soon: bool) -> str:
    if status == "active":
        return "Expiring Soon" if expiring_soon else "Active"
    return capitalize_first(status)


def lease_status_badge_class(status: Optional[str], expiring_soon: bool) -> str:
    if status == "active":
        return BADGE_CLASSES["yellow"] if expiring_soon else BADGE_CLASSES["green"]
    return NEUTRAL_BADGE


def priority_badge_class(priority: Optional[str]) -> str:
    tone = PRIORITY_TONES.get(priority or "")
    return BADGE_CLASSES[tone] if tone else NEUTRAL_BADGE


def maintenance_status_badge_class(status: Optional[str]) -> str:
    tone = MAINTENANCE_STATUS_TONES.get(status or "")
    return BADGE_CLASSES[tone] if tone else NEUTRAL_BADGE


def maintenance_status_label(status: Optional[str]) -> str:
    return (status or "").replace("_", " ", 1)


def display_date(v: Any) -> str:
    dt = parse_instant(v)
    return dt.date().isoformat() if dt is not None else UNKNOWN


def or_na(v: Optional[str]) -> str:
    return v if v else NOT_AVAILABLE


@dataclass(frozen=True)
class TenantDerived:
    full_name: str
    email_display: str
    phone_display: str
    address_display: str
    inactive: bool


@dataclass(frozen=True)
class LeaseDerived:
    tenant_name: str
    unit_display: str
    start_date_display: str
    end_date_display: str
    days_left: float
    days_left_label: str
    expiring_soon: bool
    status_label: str
    status_badge_class: str
    show_expiry_alert: bool


@dataclass(frozen=True)
class MaintenanceDerived:
    tenant_name: str
    priority_label: str
    priority_badge_class: str
    status_label: str
    status_badge_class: str
    status_icon: str
    reported_display: str
