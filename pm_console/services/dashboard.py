# pm_console/services/dashboard.py
from __future__ import annotations

import logging
from typing import Mapping, Optional

from ..domain.entities import LEASES, MAINTENANCE, TENANTS, Separator, TabDef
from ..domain.entities.base import TabEntry
from ..domain.facets import apply_tab
from ..schemas import DashboardSummaryOut
from .collection_store import CollectionStore, StoreState

log = logging.getLogger(__name__)

TABS: tuple[TabEntry, ...] = (
    TabDef("Overview", "home"),
    TabDef("Tenants", "users"),
    TabDef("Leases", "file-text"),
    TabDef("Maintenance", "wrench"),
    TabDef("Analytics", "bar-chart-3"),
    Separator(),
    TabDef("Settings", "settings"),
)

QUICK_ACTIONS: dict[str, str] = {
    "tenant": "/tenants",
    "lease": "/leases",
    "maintenance": "/maintenance",
}


def quick_action_path(action: str) -> Optional[str]:
    return QUICK_ACTIONS.get((action or "").strip().lower())


def _count_tab(store: CollectionStore, index: int) -> int:
    return len(apply_tab(store.collection, index, adapter=store.adapter, ctx=store.context()))


def portfolio_summary(stores: Mapping[str, CollectionStore]) -> DashboardSummaryOut:
    """
    Top-of-dashboard counts, computed with the same tab predicates and
    derivations the list screens use so the numbers always agree with what
    a user sees after clicking through.

    Each store is fetched if it has not been yet. A store that fails
    contributes zeros and its error message under `errors`.
    """
    errors: dict[str, str] = {}
    for key, store in stores.items():
        if store.state is StoreState.IDLE:
            store.fetch()
        if store.state is StoreState.FAILED:
            errors[key] = store.error or "An error occurred"

    tenants = stores[TENANTS.key]
    leases = stores[LEASES.key]
    maintenance = stores[MAINTENANCE.key]

    lease_ctx = leases.context()
    expiring = sum(1 for l in leases.collection if LEASES.derive(l, lease_ctx).expiring_soon)
    urgent = sum(1 for m in maintenance.collection if getattr(m, "priority", None) == "urgent")

    summary = DashboardSummaryOut(
        tenants_total=len(tenants.collection),
        tenants_inactive=_count_tab(tenants, 2),
        leases_total=len(leases.collection),
        leases_active=_count_tab(leases, 1),
        leases_expiring_soon=expiring,
        maintenance_total=len(maintenance.collection),
        maintenance_open=_count_tab(maintenance, 1),
        maintenance_in_progress=_count_tab(maintenance, 2),
        maintenance_urgent=urgent,
        errors=errors,
    )
    if errors:
        log.warning("dashboard summary partial", extra={"error": errors})
    return summary
