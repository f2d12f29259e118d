# tests/test_collection_store_delete_refresh.py
from __future__ import annotations

from datetime import datetime, timedelta, timezone

from pm_console.clients.records_api import DeleteResult, ListResult
from pm_console.domain.entities import LEASES
from pm_console.services.collection_store import CollectionStore, DeleteOutcome, StoreState

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


def _lease(lid: str, status: str = "active", days: int = 60) -> dict:
    return {"id": lid, "status": status, "end_date": (NOW + timedelta(days=days)).isoformat()}


class ServerApi:
    """In-memory records service: delete really removes, list returns what is left."""

    def __init__(self, rows, *, delete_error=None, delete_raises=None, fail_list_after_delete=False):
        self.rows = list(rows)
        self.delete_error = delete_error
        self.delete_raises = delete_raises
        self.fail_list_after_delete = fail_list_after_delete
        self.list_calls = 0
        self.delete_calls: list[str] = []

    def list(self):
        self.list_calls += 1
        if self.fail_list_after_delete and self.delete_calls:
            return ListResult(error="refresh failed")
        return ListResult(data=list(self.rows))

    def delete(self, record_id):
        self.delete_calls.append(record_id)
        if self.delete_raises is not None:
            raise self.delete_raises
        if self.delete_error:
            return DeleteResult(error=self.delete_error)
        self.rows = [r for r in self.rows if r["id"] != record_id]
        return DeleteResult()


def _store(api, *, answer=True):
    prompts: list[str] = []
    notes: list[str] = []

    def confirm(prompt: str) -> bool:
        prompts.append(prompt)
        return answer

    s = CollectionStore(LEASES, api, confirm=confirm, notify=notes.append, clock=lambda: NOW)
    s.initialize(True)
    return s, prompts, notes


def _ids(rows) -> list[str]:
    return [r.id for r in rows]


def test_confirmed_delete_refetches_and_drops_record():
    api = ServerApi([_lease("A"), _lease("B"), _lease("C", status="pending")])
    s, prompts, notes = _store(api)
    s.set_tab(1)
    assert _ids(s.displayed) == ["A", "B"]

    report = s.delete("B")

    assert report.outcome is DeleteOutcome.DELETED
    assert prompts == ["Are you sure you want to delete this lease? This action cannot be undone."]
    assert api.delete_calls == ["B"]
    assert api.list_calls == 2
    assert _ids(s.collection) == ["A", "C"]
    # still on the "Active" tab
    assert s.tab_index == 1
    assert _ids(s.displayed) == ["A"]
    assert notes == ["Lease deleted successfully"]


def test_rejected_delete_keeps_collection_and_skips_refetch():
    api = ServerApi([_lease("A"), _lease("B"), _lease("C")], delete_error="lease has open balance")
    s, _prompts, notes = _store(api)

    report = s.delete("B")

    assert report.outcome is DeleteOutcome.FAILED
    assert report.error == "lease has open balance"
    assert api.list_calls == 1
    assert _ids(s.collection) == ["A", "B", "C"]
    assert s.state is StoreState.READY
    assert notes == ["Failed to delete lease: lease has open balance"]


def test_declined_delete_makes_no_call():
    api = ServerApi([_lease("A"), _lease("B")])
    s, prompts, notes = _store(api, answer=False)

    report = s.delete("A")

    assert report.outcome is DeleteOutcome.DECLINED
    assert len(prompts) == 1
    assert api.delete_calls == []
    assert api.list_calls == 1
    assert notes == []
    assert _ids(s.collection) == ["A", "B"]


def test_delete_transport_exception_is_reported_not_raised():
    api = ServerApi([_lease("A")], delete_raises=ConnectionError("reset by peer"))
    s, _prompts, notes = _store(api)

    report = s.delete("A")

    assert report.outcome is DeleteOutcome.FAILED
    assert notes == ["An error occurred while deleting the lease"]
    assert api.list_calls == 1
    assert _ids(s.collection) == ["A"]


def test_failed_refresh_after_delete_keeps_prior_collection():
    api = ServerApi([_lease("A"), _lease("B")], fail_list_after_delete=True)
    s, _prompts, notes = _store(api)

    report = s.delete("A")

    assert report.outcome is DeleteOutcome.DELETED
    assert s.state is StoreState.FAILED
    assert s.error == "refresh failed"
    assert _ids(s.collection) == ["A", "B"]
    assert notes == ["Lease deleted successfully"]


def test_default_confirmation_declines():
    api = ServerApi([_lease("A")])
    s = CollectionStore(LEASES, api, clock=lambda: NOW)
    s.initialize(True)
    assert s.delete("A").outcome is DeleteOutcome.DECLINED
    assert api.delete_calls == []
