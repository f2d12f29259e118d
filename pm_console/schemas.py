# pm_console/schemas.py
from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# -------------------- Records (as served by the records service) --------------------

class RecordBase(BaseModel):
    """
    Records keep unknown service fields (extra="allow") and keep dates as the
    raw strings the service sent; parsing happens in domain.status so that a
    bad date degrades a single derived field instead of rejecting the row.
    """

    id: str
    created_at: Optional[str] = None

    model_config = ConfigDict(extra="allow")

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_str(cls, v: Any) -> Any:
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v


class TenantRef(BaseModel):
    """The `tenants` relation embedded in leases and maintenance issues."""

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    name: Optional[str] = None
    email: Optional[str] = None

    model_config = ConfigDict(extra="allow")


class TenantRecord(RecordBase):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    current_address: Optional[str] = None
    employment_status: Optional[str] = None


class LeaseRecord(RecordBase):
    tenant_id: Optional[str] = None
    property_id: Optional[str] = None
    unit_number: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    monthly_rent: Optional[float] = None
    security_deposit: Optional[float] = None
    status: Optional[str] = None
    tenants: Optional[TenantRef] = None

    @field_validator("tenant_id", "property_id", "unit_number", mode="before")
    @classmethod
    def _ref_as_str(cls, v: Any) -> Any:
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v


class MaintenanceRecord(RecordBase):
    property_id: Optional[str] = None
    tenant_id: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    priority: Optional[str] = None
    status: Optional[str] = None
    scheduled_date: Optional[str] = None
    estimated_cost: Optional[float] = None
    actual_cost: Optional[float] = None
    unit_number: Optional[str] = None
    tenants: Optional[TenantRef] = None

    @field_validator("tenant_id", "property_id", "unit_number", mode="before")
    @classmethod
    def _ref_as_str(cls, v: Any) -> Any:
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v


# -------------------- Screen view (consumed by the renderer) --------------------

class TabOut(BaseModel):
    type: Literal["tab", "separator"] = "tab"
    index: Optional[int] = None
    title: Optional[str] = None
    icon: Optional[str] = None


class RowOut(BaseModel):
    id: str
    record: dict[str, Any]
    derived: dict[str, Any]


class ScreenOut(BaseModel):
    entity: str
    state: Literal["idle", "loading", "ready", "failed"]
    error: Optional[str] = None
    tabs: list[TabOut]
    active_tab: int = 0
    search: str = ""
    total: int = 0
    rows: list[RowOut] = Field(default_factory=list)
    empty_message: str
    loading_message: str


class DeleteOut(BaseModel):
    outcome: Literal["declined", "failed", "deleted"]
    error: Optional[str] = None
    messages: list[str] = Field(default_factory=list)
    screen: ScreenOut


# -------------------- Dashboard --------------------

class DashboardSummaryOut(BaseModel):
    tenants_total: int
    tenants_inactive: int
    leases_total: int
    leases_active: int
    leases_expiring_soon: int
    maintenance_total: int
    maintenance_open: int
    maintenance_in_progress: int
    maintenance_urgent: int
    errors: dict[str, str] = Field(default_factory=dict)


class QuickActionOut(BaseModel):
    action: str
    path: str
