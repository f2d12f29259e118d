# pm_console/services/stores.py
from __future__ import annotations

from typing import Callable, Optional

from ..auth import ConsoleSession
from ..clients.records_api import RecordsApi, RecordsApiClient
from ..config import settings
from ..domain.entities import ADAPTERS, EntityAdapter
from .collection_store import CollectionStore, Confirm, Notify, never_confirm

ApiFactory = Callable[[EntityAdapter, ConsoleSession], RecordsApi]


def resource_for(adapter: EntityAdapter) -> str:
    return {
        "tenants": settings.tenants_resource,
        "leases": settings.leases_resource,
        "maintenance": settings.maintenance_resource,
    }.get(adapter.key, adapter.key)


def http_api_factory(adapter: EntityAdapter, session: ConsoleSession) -> RecordsApi:
    return RecordsApiClient(resource_for(adapter), token=session.token)


def get_api_factory() -> ApiFactory:
    # FastAPI dependency; tests override it with in-memory fakes
    return http_api_factory


def open_store(
    key: str,
    session: ConsoleSession,
    *,
    api_factory: ApiFactory = http_api_factory,
    confirm: Confirm = never_confirm,
    notify: Optional[Notify] = None,
) -> CollectionStore:
    """
    Build the store for one authenticated screen and run its initial fetch.
    Raises KeyError for an unknown entity key.
    """
    adapter = ADAPTERS[key]
    store = CollectionStore(
        adapter,
        api_factory(adapter, session),
        confirm=confirm,
        notify=notify,
    )
    store.initialize(session_present=True)
    return store
