# pm_console/domain/entities/base.py
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Iterable, Mapping, Optional, Union

from ...schemas import RecordBase, TenantRef


@dataclass(frozen=True)
class TabDef:
    title: str
    icon: str


@dataclass(frozen=True)
class Separator:
    pass


TabEntry = Union[TabDef, Separator]


@dataclass(frozen=True)
class FacetContext:
    """Inputs a predicate may need besides the record itself."""

    now: datetime
    expiring_soon_days: int = 30


TabPredicate = Callable[[Any, FacetContext], bool]


def match_all(_record: Any, _ctx: FacetContext) -> bool:
    return True


@dataclass(frozen=True)
class EntityAdapter:
    """
    Everything entity-specific the generic list engine needs.

    tab_predicates is keyed by the tab's position in `tabs` (separators
    count as positions). Any index missing from the table falls back to
    match_all, which is also how index 0 ("All ...") behaves.
    """

    key: str
    noun: str
    plural: str
    model: type[RecordBase]
    tabs: tuple[TabEntry, ...]
    search_fields: Callable[[Any], Iterable[Optional[str]]]
    derive: Callable[[Any, FacetContext], Any]
    tab_predicates: Mapping[int, TabPredicate] = field(default_factory=dict)

    @property
    def title(self) -> str:
        return self.noun[:1].upper() + self.noun[1:]

    @property
    def empty_message(self) -> str:
        return f"No {self.plural} found"

    @property
    def loading_message(self) -> str:
        return f"Loading {self.plural}..."

    def parse(self, raw: Any) -> RecordBase:
        if isinstance(raw, self.model):
            return raw
        return self.model.model_validate(raw)

    def tab_predicate(self, index: Optional[int]) -> TabPredicate:
        if index is None:
            return match_all
        return self.tab_predicates.get(index, match_all)


def person_name(first: Optional[str], last: Optional[str]) -> str:
    return f"{first or ''} {last or ''}".strip()


def tenant_ref_name(ref: Optional[TenantRef], placeholder: str) -> str:
    if ref is None:
        return placeholder
    return person_name(ref.first_name, ref.last_name) or (ref.name or "")
