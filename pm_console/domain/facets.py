# pm_console/domain/facets.py
"""
Facet filter: tab facet AND search facet over an entity collection.

Both facets are pure membership tests, so the result keeps the input order
and re-filtering an already filtered list changes nothing. Callers always
pass the full authoritative collection, never a previously filtered subset.
"""
from __future__ import annotations

from typing import Any, Iterable, Optional, Sequence

from .entities.base import EntityAdapter, FacetContext


def apply_tab(
    collection: Iterable[Any],
    tab_index: Optional[int],
    *,
    adapter: EntityAdapter,
    ctx: FacetContext,
) -> list[Any]:
    pred = adapter.tab_predicate(tab_index)
    return [r for r in collection if pred(r, ctx)]


def matches_search(record: Any, term: str, *, adapter: EntityAdapter) -> bool:
    if not term:
        return True
    needle = term.lower()
    for value in adapter.search_fields(record):
        if value and needle in value.lower():
            return True
    return False


def apply_search(collection: Iterable[Any], term: str, *, adapter: EntityAdapter) -> list[Any]:
    return [r for r in collection if matches_search(r, term, adapter=adapter)]


def filter_collection(
    collection: Sequence[Any],
    tab_index: Optional[int],
    search_term: str,
    *,
    adapter: EntityAdapter,
    ctx: FacetContext,
) -> list[Any]:
    return apply_search(
        apply_tab(collection, tab_index, adapter=adapter, ctx=ctx),
        search_term or "",
        adapter=adapter,
    )
