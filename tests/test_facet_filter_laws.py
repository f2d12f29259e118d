# tests/test_facet_filter_laws.py
from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from pm_console.domain.entities import ADAPTERS, FacetContext, LEASES, MAINTENANCE, Separator, TENANTS
from pm_console.domain.facets import apply_search, apply_tab, filter_collection
from pm_console.schemas import LeaseRecord, MaintenanceRecord, TenantRecord

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)
CTX = FacetContext(now=NOW)


def _end(days: float) -> str:
    return (NOW + timedelta(days=days)).isoformat()


TENANT_ROWS = [
    TenantRecord(id="t1", first_name="John", last_name="Smith", email="john@example.com"),
    TenantRecord(id="t2", first_name="Maria", last_name="Lopez", phone="555-0101"),
    TenantRecord(id="t3", first_name="Ghost", last_name="Resident"),
    TenantRecord(id="t4", first_name="Sam", last_name="Smalls"),
]

LEASE_ROWS = [
    LeaseRecord(id="l1", status="active", unit_number="A101", end_date=_end(10),
                tenants={"first_name": "John", "last_name": "Smith"}),
    LeaseRecord(id="l2", status="active", unit_number="B202", end_date=_end(90),
                tenants={"first_name": "Maria", "last_name": "Lopez"}),
    LeaseRecord(id="l3", status="active", unit_number="C303", end_date=_end(-5)),
    LeaseRecord(id="l4", status="pending", unit_number="A104", end_date=_end(3),
                tenants={"first_name": "Sam", "last_name": "Smalls"}),
    LeaseRecord(id="l5", status="active", unit_number="D404", end_date="someday"),
]

ISSUE_ROWS = [
    MaintenanceRecord(id="m1", title="Broken heater", status="open", priority="urgent",
                      category="HVAC", unit_number="A101",
                      tenants={"first_name": "John", "last_name": "Smith"}),
    MaintenanceRecord(id="m2", title="Paint hallway", status="in_progress", priority="low",
                      category="Cosmetic"),
    MaintenanceRecord(id="m3", title="Replace lock", status="completed", priority="high",
                      category="Security", unit_number="B202"),
    MaintenanceRecord(id="m4", title="Noise complaint", status="on_hold", priority="other"),
]

CASES = [
    (TENANTS, TENANT_ROWS),
    (LEASES, LEASE_ROWS),
    (MAINTENANCE, ISSUE_ROWS),
]


def _ids(rows) -> list[str]:
    return [r.id for r in rows]


@pytest.mark.parametrize("adapter,rows", CASES)
def test_tab_zero_is_everything(adapter, rows):
    assert _ids(filter_collection(rows, 0, "", adapter=adapter, ctx=CTX)) == _ids(rows)


@pytest.mark.parametrize("adapter,rows", CASES)
@pytest.mark.parametrize("term", ["", "sm", "a1", "HEATER", "zzz"])
def test_composition_idempotence_and_order(adapter, rows, term):
    for tab in range(len(adapter.tabs) + 1):
        out = filter_collection(rows, tab, term, adapter=adapter, ctx=CTX)

        tab_first = apply_search(apply_tab(rows, tab, adapter=adapter, ctx=CTX), term, adapter=adapter)
        search_first = apply_tab(apply_search(rows, term, adapter=adapter), tab, adapter=adapter, ctx=CTX)
        assert _ids(out) == _ids(tab_first) == _ids(search_first)

        again = filter_collection(out, tab, term, adapter=adapter, ctx=CTX)
        assert _ids(again) == _ids(out)

        # subset keeps the input order
        positions = [_ids(rows).index(i) for i in _ids(out)]
        assert positions == sorted(positions)


@pytest.mark.parametrize("adapter,rows", CASES)
def test_unknown_tab_index_is_identity(adapter, rows):
    sep_index = next(i for i, t in enumerate(adapter.tabs) if isinstance(t, Separator))
    for idx in (sep_index, 99, -1, None):
        assert _ids(apply_tab(rows, idx, adapter=adapter, ctx=CTX)) == _ids(rows)


def test_widening_tab_restores_rows_hidden_only_by_tab():
    narrow = filter_collection(ISSUE_ROWS, 3, "", adapter=MAINTENANCE, ctx=CTX)
    assert _ids(narrow) == ["m3"]
    wide = filter_collection(ISSUE_ROWS, 0, "", adapter=MAINTENANCE, ctx=CTX)
    assert _ids(wide) == _ids(ISSUE_ROWS)


def test_every_screen_is_registered():
    assert set(ADAPTERS) == {"tenants", "leases", "maintenance"}
