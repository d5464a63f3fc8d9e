# studio_core/clients/projection.py
from __future__ import annotations

import unicodedata
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Iterable, Iterator, List, Optional, Sequence

from studio_core.clients.metrics import ClientWithMetrics
from studio_core.iam.capabilities import CapabilitySet

VIP_SPEND_THRESHOLD = Decimal("1000")
NEW_MAX_VISITS = 5


class ClientFilter(str, Enum):
    ALL = "all"
    VIP = "vip"
    NEW = "new"


class ClientSort(str, Enum):
    NAME = "name"
    VISITS = "visits"
    SPEND = "spent"
    RECENT = "recent"


@dataclass(frozen=True)
class ClientListActions:
    can_add: bool = False
    can_edit: bool = False
    can_view_profile: bool = False

    @classmethod
    def from_capabilities(cls, caps: CapabilitySet) -> "ClientListActions":
        return cls(
            can_add=caps.can_add_client,
            can_edit=caps.can_edit_client,
            can_view_profile=caps.can_view_client_profile,
        )

    def as_dict(self) -> dict:
        return {
            "can_add": self.can_add,
            "can_edit": self.can_edit,
            "can_view_profile": self.can_view_profile,
        }


@dataclass(frozen=True)
class ClientListProjection:
    rows: List[ClientWithMetrics] = field(default_factory=list)
    actions: ClientListActions = field(default_factory=ClientListActions)

    def __iter__(self) -> Iterator[ClientWithMetrics]:
        return iter(self.rows)

    def __len__(self) -> int:
        return len(self.rows)


def name_key(name: str) -> str:
    """
    Accent- and case-insensitive collation key ("Élia" sorts with "elia").
    """
    decomposed = unicodedata.normalize("NFKD", name or "")
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return stripped.casefold()


def _matches(record: ClientWithMetrics, needle: str) -> bool:
    return needle in (record.name or "").casefold() or needle in (record.email or "").casefold()


def search(records: Iterable[ClientWithMetrics], term: Optional[str]) -> List[ClientWithMetrics]:
    needle = (term or "").strip().casefold()
    if not needle:
        return list(records)
    return [r for r in records if _matches(r, needle)]


def apply_filter(
    records: Iterable[ClientWithMetrics],
    choice: ClientFilter,
    *,
    vip_threshold: Decimal = VIP_SPEND_THRESHOLD,
    new_max_visits: int = NEW_MAX_VISITS,
) -> List[ClientWithMetrics]:
    if choice == ClientFilter.VIP:
        return [r for r in records if r.total_spent > vip_threshold]
    if choice == ClientFilter.NEW:
        return [r for r in records if r.total_visits <= new_max_visits]
    return list(records)


def apply_sort(records: Sequence[ClientWithMetrics], choice: ClientSort) -> List[ClientWithMetrics]:
    # sorted() is stable, including with reverse=True
    if choice == ClientSort.VISITS:
        return sorted(records, key=lambda r: r.total_visits, reverse=True)
    if choice == ClientSort.SPEND:
        return sorted(records, key=lambda r: r.total_spent, reverse=True)
    if choice == ClientSort.RECENT:
        # undated rows compare lowest, so they land after every dated row
        return sorted(
            records,
            key=lambda r: (r.last_visit is not None, r.last_visit.toordinal() if r.last_visit else 0),
            reverse=True,
        )
    return sorted(records, key=lambda r: name_key(r.name))


def project(
    records: Iterable[ClientWithMetrics],
    search_term: Optional[str] = "",
    filter: ClientFilter = ClientFilter.ALL,
    sort: ClientSort = ClientSort.NAME,
    capabilities: Optional[CapabilitySet] = None,
    *,
    vip_threshold: Decimal = VIP_SPEND_THRESHOLD,
    new_max_visits: int = NEW_MAX_VISITS,
) -> ClientListProjection:
    """
    search -> filter -> sort over already-aggregated client rows.

    Capabilities only decide which actions the caller gets on the list;
    they never remove rows (tenant scoping already bounds the set).
    """
    rows = search(records, search_term)
    rows = apply_filter(
        rows,
        ClientFilter(filter),
        vip_threshold=vip_threshold,
        new_max_visits=new_max_visits,
    )
    rows = apply_sort(rows, ClientSort(sort))

    actions = ClientListActions.from_capabilities(capabilities) if capabilities else ClientListActions()
    return ClientListProjection(rows=rows, actions=actions)
