# pm_console/services/collection_store.py
from __future__ import annotations

import logging
import math
from dataclasses import asdict, dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Optional

from pydantic import ValidationError

from ..clients.records_api import RecordsApi
from ..config import settings
from ..domain.entities.base import EntityAdapter, FacetContext, Separator
from ..domain.facets import filter_collection
from ..domain.status import utc_now
from ..schemas import RecordBase, RowOut, ScreenOut, TabOut

log = logging.getLogger(__name__)

Confirm = Callable[[str], bool]
Notify = Callable[[str], None]


class StoreState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


class DeleteOutcome(str, Enum):
    DECLINED = "declined"
    FAILED = "failed"
    DELETED = "deleted"


@dataclass(frozen=True)
class DeleteReport:
    outcome: DeleteOutcome
    error: Optional[str] = None
    messages: list[str] = field(default_factory=list)


def never_confirm(_prompt: str) -> bool:
    return False


def _json_safe(v: Any) -> Any:
    # NaN (unknown days-left) is not valid JSON
    if isinstance(v, float) and math.isnan(v):
        return None
    return v


class CollectionStore:
    """
    List-view engine for one entity screen.

    Owns the authoritative collection (replaced wholesale on every
    successful fetch) and the two facets; `displayed` is always
    filter(collection, tab, search) under the store's clock.

    Lifecycle: idle -> loading -> ready | failed, and back through loading
    on every refresh. A failed fetch keeps the previous collection and
    displayed subset; only `state` and `error` change.

    Deletes are confirm -> server delete -> full refetch. Nothing is removed
    locally; the server is the source of truth after every mutation.
    """

    def __init__(
        self,
        adapter: EntityAdapter,
        api: RecordsApi,
        *,
        confirm: Confirm = never_confirm,
        notify: Optional[Notify] = None,
        clock: Callable[[], datetime] = utc_now,
        expiring_soon_days: Optional[int] = None,
    ) -> None:
        self.adapter = adapter
        self.api = api
        self.confirm = confirm
        self.notify = notify
        self.clock = clock
        self.expiring_soon_days = expiring_soon_days or settings.expiring_soon_days

        self.state = StoreState.IDLE
        self.error: Optional[str] = None
        self.collection: list[RecordBase] = []
        self.displayed: list[RecordBase] = []
        self.tab_index: int = 0
        self.search: str = ""
        self.fetch_count = 0

    # ---------------- facets ----------------

    def context(self) -> FacetContext:
        return FacetContext(now=self.clock(), expiring_soon_days=self.expiring_soon_days)

    def recompute(self) -> list[RecordBase]:
        self.displayed = filter_collection(
            self.collection,
            self.tab_index,
            self.search,
            adapter=self.adapter,
            ctx=self.context(),
        )
        return self.displayed

    def set_tab(self, index: int) -> list[RecordBase]:
        self.tab_index = int(index)
        return self.recompute()

    def set_search(self, term: Optional[str]) -> list[RecordBase]:
        self.search = term or ""
        return self.recompute()

    # ---------------- fetch ----------------

    def initialize(self, session_present: bool) -> bool:
        """
        First call with a session issues the initial fetch; calls without one,
        and any call after the first fetch, do nothing. Returns True when a
        fetch was issued.
        """
        if not session_present or self.state is not StoreState.IDLE:
            return False
        self.fetch()
        return True

    def _parse(self, raw: list[Any]) -> list[RecordBase]:
        rows = [self.adapter.parse(r) for r in raw]
        seen: set[str] = set()
        for r in rows:
            if r.id in seen:
                log.warning(
                    "duplicate record id in fetched collection",
                    extra={"entity": self.adapter.key, "record_id": r.id},
                )
            seen.add(r.id)
        return rows

    def fetch(self) -> StoreState:
        self.state = StoreState.LOADING
        self.fetch_count += 1

        try:
            result = self.api.list()
        except Exception as e:
            log.exception("list call raised", extra={"entity": self.adapter.key})
            return self._fail(str(e) or "An error occurred")

        if result.error is not None:
            return self._fail(result.error)

        try:
            rows = self._parse(result.data or [])
        except ValidationError as e:
            return self._fail(f"invalid {self.adapter.noun} record: {e.errors()[0].get('msg', 'validation error')}")

        self.collection = rows
        self.error = None
        self.state = StoreState.READY
        self.recompute()
        log.info(
            "collection loaded",
            extra={"entity": self.adapter.key, "count": len(rows), "state": self.state.value},
        )
        return self.state

    refresh = fetch

    def _fail(self, message: str) -> StoreState:
        self.error = message
        self.state = StoreState.FAILED
        log.warning(
            "collection fetch failed",
            extra={"entity": self.adapter.key, "error": message, "state": self.state.value},
        )
        return self.state

    # ---------------- delete ----------------

    def _say(self, messages: list[str], msg: str) -> None:
        messages.append(msg)
        if self.notify is not None:
            self.notify(msg)

    def delete(self, record_id: str) -> DeleteReport:
        noun = self.adapter.noun
        prompt = f"Are you sure you want to delete this {noun}? This action cannot be undone."
        if not self.confirm(prompt):
            log.info("delete declined", extra={"entity": self.adapter.key, "record_id": record_id})
            return DeleteReport(outcome=DeleteOutcome.DECLINED)

        messages: list[str] = []
        try:
            result = self.api.delete(record_id)
        except Exception:
            log.exception("delete call raised", extra={"entity": self.adapter.key, "record_id": record_id})
            msg = f"An error occurred while deleting the {noun}"
            self._say(messages, msg)
            return DeleteReport(outcome=DeleteOutcome.FAILED, error=msg, messages=messages)

        if result.error:
            log.warning(
                "delete rejected",
                extra={"entity": self.adapter.key, "record_id": record_id, "error": result.error},
            )
            self._say(messages, f"Failed to delete {noun}: {result.error}")
            return DeleteReport(outcome=DeleteOutcome.FAILED, error=result.error, messages=messages)

        # server confirmed; resync from it whatever the refetch outcome
        self.fetch()
        self._say(messages, f"{self.adapter.title} deleted successfully")
        log.info("record deleted", extra={"entity": self.adapter.key, "record_id": record_id})
        return DeleteReport(outcome=DeleteOutcome.DELETED, messages=messages)

    # ---------------- rendering ----------------

    def tabs(self) -> list[TabOut]:
        out: list[TabOut] = []
        for i, t in enumerate(self.adapter.tabs):
            if isinstance(t, Separator):
                out.append(TabOut(type="separator"))
            else:
                out.append(TabOut(index=i, title=t.title, icon=t.icon))
        return out

    def rows(self) -> list[RowOut]:
        ctx = self.context()
        out: list[RowOut] = []
        for r in self.displayed:
            derived = {k: _json_safe(v) for k, v in asdict(self.adapter.derive(r, ctx)).items()}
            out.append(RowOut(id=r.id, record=r.model_dump(), derived=derived))
        return out

    def view(self) -> ScreenOut:
        return ScreenOut(
            entity=self.adapter.key,
            state=self.state.value,
            error=self.error,
            tabs=self.tabs(),
            active_tab=self.tab_index,
            search=self.search,
            total=len(self.collection),
            rows=self.rows(),
            empty_message=self.adapter.empty_message,
            loading_message=self.adapter.loading_message,
        )
