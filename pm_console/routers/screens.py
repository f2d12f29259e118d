# pm_console/routers/screens.py
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ..auth import ConsoleSession, require_session
from ..domain.entities import ADAPTERS
from ..schemas import DeleteOut, ScreenOut
from ..services.collection_store import CollectionStore
from ..services.stores import ApiFactory, get_api_factory, open_store

router = APIRouter(prefix="/screens", tags=["screens"])


def _must_open(
    entity: str,
    session: ConsoleSession,
    api_factory: ApiFactory,
    *,
    confirm: bool = False,
) -> CollectionStore:
    if entity not in ADAPTERS:
        raise HTTPException(status_code=404, detail=f"Unknown screen: {entity}")
    return open_store(entity, session, api_factory=api_factory, confirm=lambda _prompt: confirm)


@router.get("/{entity}", response_model=ScreenOut)
def get_screen(
    entity: str,
    tab: int = Query(default=0, description="index into the screen's tab list"),
    search: Optional[str] = Query(default=None),
    session: ConsoleSession = Depends(require_session),
    api_factory: ApiFactory = Depends(get_api_factory),
):
    """
    One render of a list screen: fetch, apply the tab then the search facet,
    and return rows with their derived fields. A fetch failure is reported
    in `state`/`error` (HTTP 200) so the client can show its inline panel.
    """
    store = _must_open(entity, session, api_factory)
    store.set_tab(tab)
    store.set_search(search)
    return store.view()


@router.delete("/{entity}/{record_id}", response_model=DeleteOut)
def delete_record(
    entity: str,
    record_id: str,
    confirm: bool = Query(default=False, description="the user's answer to the delete prompt"),
    tab: int = Query(default=0),
    search: Optional[str] = Query(default=None),
    session: ConsoleSession = Depends(require_session),
    api_factory: ApiFactory = Depends(get_api_factory),
):
    store = _must_open(entity, session, api_factory, confirm=confirm)
    store.set_tab(tab)
    store.set_search(search)

    report = store.delete(record_id)
    return DeleteOut(
        outcome=report.outcome.value,
        error=report.error,
        messages=report.messages,
        screen=store.view(),
    )
