# pm_console/domain/entities/tenants.py
from __future__ import annotations

from functools import partial
from typing import Iterable, Optional

from ...schemas import TenantRecord
from ..status import TenantDerived, or_na
from .base import EntityAdapter, FacetContext, Separator, TabDef, TabPredicate, person_name

TABS = (
    TabDef("All Tenants", "users"),
    TabDef("Active", "user-check"),
    TabDef("Inactive", "user-x"),
    Separator(),
    TabDef("Notifications", "bell"),
)


# Placeholder heuristics: the records service has no tenant lifecycle field
# yet. "Active" is everyone; "Inactive" is anyone we cannot contact.
def tenant_is_active(t: TenantRecord, _ctx: FacetContext) -> bool:
    return True


def tenant_is_inactive(t: TenantRecord, _ctx: FacetContext) -> bool:
    return not t.email and not t.phone


def search_fields(t: TenantRecord) -> Iterable[Optional[str]]:
    return (person_name(t.first_name, t.last_name), t.email)


def derive(t: TenantRecord, ctx: FacetContext, *, inactive: TabPredicate = tenant_is_inactive) -> TenantDerived:
    return TenantDerived(
        full_name=person_name(t.first_name, t.last_name),
        email_display=or_na(t.email),
        phone_display=or_na(t.phone),
        address_display=or_na(t.current_address),
        inactive=inactive(t, ctx),
    )


def tenant_adapter(
    *,
    active: TabPredicate = tenant_is_active,
    inactive: TabPredicate = tenant_is_inactive,
) -> EntityAdapter:
    return EntityAdapter(
        key="tenants",
        noun="tenant",
        plural="tenants",
        model=TenantRecord,
        tabs=TABS,
        search_fields=search_fields,
        derive=partial(derive, inactive=inactive),
        tab_predicates={1: active, 2: inactive},
    )


TENANTS = tenant_adapter()
