# pm_console/domain/entities/__init__.py
from .base import EntityAdapter, FacetContext, Separator, TabDef
from .leases import LEASES
from .maintenance import MAINTENANCE
from .tenants import TENANTS, tenant_adapter

ADAPTERS: dict[str, EntityAdapter] = {a.key: a for a in (TENANTS, LEASES, MAINTENANCE)}

__all__ = [
    "ADAPTERS",
    "EntityAdapter",
    "FacetContext",
    "LEASES",
    "MAINTENANCE",
    "Separator",
    "TENANTS",
    "TabDef",
    "tenant_adapter",
]
