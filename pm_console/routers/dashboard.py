# pm_console/routers/dashboard.py
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from ..auth import ConsoleSession, require_session
from ..domain.entities import ADAPTERS, Separator
from ..schemas import DashboardSummaryOut, QuickActionOut, TabOut
from ..services.dashboard import TABS, portfolio_summary, quick_action_path
from ..services.stores import ApiFactory, get_api_factory, open_store

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/tabs", response_model=list[TabOut])
def dashboard_tabs():
    return [
        TabOut(type="separator") if isinstance(t, Separator) else TabOut(index=i, title=t.title, icon=t.icon)
        for i, t in enumerate(TABS)
    ]


@router.get("/summary", response_model=DashboardSummaryOut)
def dashboard_summary(
    session: ConsoleSession = Depends(require_session),
    api_factory: ApiFactory = Depends(get_api_factory),
):
    """
    Portfolio cards. Partial results are returned when one collection fails;
    see `errors`.
    """
    stores = {key: open_store(key, session, api_factory=api_factory) for key in ADAPTERS}
    return portfolio_summary(stores)


@router.get("/quick-actions/{action}", response_model=QuickActionOut)
def quick_action(action: str):
    path = quick_action_path(action)
    if path is None:
        raise HTTPException(status_code=404, detail=f"Unknown quick action: {action}")
    return QuickActionOut(action=action, path=path)
