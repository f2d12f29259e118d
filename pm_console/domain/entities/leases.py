# pm_console/domain/entities/leases.py
from __future__ import annotations

from datetime import timedelta
from typing import Iterable, Optional

from ...schemas import LeaseRecord
from ..status import (
    LeaseDerived,
    as_utc,
    days_left,
    days_left_label,
    display_date,
    is_expiring_soon,
    lease_status_badge_class,
    lease_status_label,
    or_na,
    parse_instant,
)
from .base import EntityAdapter, FacetContext, Separator, TabDef, tenant_ref_name

NO_TENANT = "Unknown Tenant"

TABS = (
    TabDef("All Leases", "file-text"),
    TabDef("Active", "check-circle"),
    TabDef("Expiring Soon", "clock"),
    Separator(),
    TabDef("Renewals", "bell"),
)


def lease_is_active(lease: LeaseRecord, _ctx: FacetContext) -> bool:
    return lease.status == "active"


def lease_ends_within_window(lease: LeaseRecord, ctx: FacetContext) -> bool:
    """
    Active leases whose end date is on or before now + window. Already-ended
    leases still flagged active are included so they surface for follow-up;
    an unparseable end date never matches.
    """
    if lease.status != "active":
        return False
    end = parse_instant(lease.end_date)
    if end is None:
        return False
    return end <= as_utc(ctx.now) + timedelta(days=ctx.expiring_soon_days)


def search_fields(lease: LeaseRecord) -> Iterable[Optional[str]]:
    return (tenant_ref_name(lease.tenants, NO_TENANT), lease.unit_number)


def derive(lease: LeaseRecord, ctx: FacetContext) -> LeaseDerived:
    d = days_left(lease.end_date, now=ctx.now)
    soon = is_expiring_soon(d, lease.status, window_days=ctx.expiring_soon_days)
    return LeaseDerived(
        tenant_name=tenant_ref_name(lease.tenants, NO_TENANT),
        unit_display=or_na(lease.unit_number),
        start_date_display=display_date(lease.start_date),
        end_date_display=display_date(lease.end_date),
        days_left=d,
        days_left_label=days_left_label(d),
        expiring_soon=soon,
        status_label=lease_status_label(lease.status, soon),
        status_badge_class=lease_status_badge_class(lease.status, soon),
        show_expiry_alert=soon,
    )


LEASES = EntityAdapter(
    key="leases",
    noun="lease",
    plural="leases",
    model=LeaseRecord,
    tabs=TABS,
    search_fields=search_fields,
    derive=derive,
    tab_predicates={1: lease_is_active, 2: lease_ends_within_window},
)
