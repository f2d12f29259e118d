# pm_console/domain/entities/maintenance.py
from __future__ import annotations

from typing import Iterable, Optional

from ...schemas import MaintenanceRecord
from ..status import (
    MaintenanceDerived,
    NOT_AVAILABLE,
    capitalize_first,
    display_date,
    maintenance_status_badge_class,
    maintenance_status_label,
    priority_badge_class,
)
from .base import EntityAdapter, FacetContext, Separator, TabDef, TabPredicate, tenant_ref_name

NO_TENANT = "No Tenant Assigned"

TABS = (
    TabDef("All Issues", "wrench"),
    TabDef("Pending", "clock"),
    TabDef("In Progress", "alert-triangle"),
    TabDef("Completed", "check-circle"),
    Separator(),
    TabDef("Schedule", "bell"),
)


def status_is(status: str) -> TabPredicate:
    def _pred(item: MaintenanceRecord, _ctx: FacetContext) -> bool:
        return item.status == status

    return _pred


def search_fields(item: MaintenanceRecord) -> Iterable[Optional[str]]:
    return (
        item.title,
        tenant_ref_name(item.tenants, NO_TENANT),
        item.unit_number,
        item.category,
    )


def derive(item: MaintenanceRecord, ctx: FacetContext) -> MaintenanceDerived:
    # the tenant column shows N/A; the search facet uses NO_TENANT instead
    return MaintenanceDerived(
        tenant_name=tenant_ref_name(item.tenants, NOT_AVAILABLE),
        priority_label=capitalize_first(item.priority),
        priority_badge_class=priority_badge_class(item.priority),
        status_label=maintenance_status_label(item.status),
        status_badge_class=maintenance_status_badge_class(item.status),
        status_icon="check-circle-2" if item.status == "completed" else "clock",
        reported_display=display_date(item.created_at),
    )


MAINTENANCE = EntityAdapter(
    key="maintenance",
    noun="maintenance request",
    plural="maintenance requests",
    model=MaintenanceRecord,
    tabs=TABS,
    search_fields=search_fields,
    derive=derive,
    tab_predicates={
        1: status_is("open"),
        2: status_is("in_progress"),
        3: status_is("completed"),
    },
)
