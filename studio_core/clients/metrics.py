# studio_core/clients/metrics.py
from __future__ import annotations

import asyncio
import logging
import re
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Iterable, List, Optional, Tuple
from uuid import UUID

from studio_core.common.store import ClientRecord, StoreUnavailable, StudioStore, VisitRecord

logger = logging.getLogger(__name__)

ZERO = Decimal("0")

# Visit.price is max_digits=12, decimal_places=2
PRICE_LIMIT = Decimal("1e10")
CENT = Decimal("0.01")

_NUMERIC_PREFIX = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


@dataclass(frozen=True)
class ClientMetrics:
    total_visits: int = 0
    total_spent: Decimal = ZERO
    last_visit: Optional[date] = None


NO_METRICS = ClientMetrics()


@dataclass(frozen=True)
class ClientWithMetrics:
    """
    A client record merged with the metrics folded from its visits.
    """
    client: ClientRecord
    metrics: ClientMetrics = NO_METRICS

    @property
    def id(self) -> UUID:
        return self.client.id

    @property
    def name(self) -> str:
        return self.client.full_name

    @property
    def email(self) -> str:
        return self.client.email

    @property
    def phone(self) -> str:
        return self.client.phone

    @property
    def total_visits(self) -> int:
        return self.metrics.total_visits

    @property
    def total_spent(self) -> Decimal:
        return self.metrics.total_spent

    @property
    def last_visit(self) -> Optional[date]:
        return self.metrics.last_visit


@dataclass(frozen=True)
class AggregationResult:
    records: List[ClientWithMetrics] = field(default_factory=list)
    error: Optional[StoreUnavailable] = None
    # visits could not be read; every client carries zero metrics
    visits_degraded: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None


# -------------------------------------------------------------------
# field parsing (malformed values never abort a fold)
# -------------------------------------------------------------------

def parse_price(value: Any) -> Decimal:
    """
    Visit price as Decimal, read from the leading numeric prefix
    ("30abc" -> 30, "12,5" -> 12).

    No numeric prefix, or a magnitude the price column cannot hold -> 0.
    """
    if value is None or isinstance(value, bool):
        return ZERO
    match = _NUMERIC_PREFIX.match(str(value).strip())
    if match is None:
        return ZERO
    try:
        price = Decimal(match.group(0))
    except InvalidOperation:
        return ZERO
    if not price.is_finite() or abs(price) >= PRICE_LIMIT:
        return ZERO
    return price.quantize(CENT)


def parse_visit_date(value: Any) -> Optional[date]:
    """
    date / datetime / ISO-8601 string -> date. Anything else -> None.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        raw = value.strip()
        if not raw:
            return None
        try:
            return datetime.fromisoformat(raw.replace("Z", "+00:00")).date()
        except ValueError:
            pass
        try:
            return date.fromisoformat(raw[:10])
        except ValueError:
            return None
    return None


def visit_date(visit: VisitRecord) -> Optional[date]:
    """
    Canonical visit date: performed date, else created date.
    Used by every metrics path (list and single-client profile).
    """
    performed = parse_visit_date(visit.performed_date)
    if performed is not None:
        return performed
    return parse_visit_date(visit.created_at)


# -------------------------------------------------------------------
# fold + merge
# -------------------------------------------------------------------

class _Running:
    __slots__ = ("count", "total", "latest")

    def __init__(self) -> None:
        self.count = 0
        self.total = ZERO
        self.latest: Optional[date] = None

    def add(self, visit: VisitRecord) -> None:
        self.count += 1
        self.total += parse_price(visit.price)
        when = visit_date(visit)
        if when is not None and (self.latest is None or when > self.latest):
            self.latest = when

    def freeze(self) -> ClientMetrics:
        return ClientMetrics(total_visits=self.count, total_spent=self.total, last_visit=self.latest)


def fold_visits(visits: Iterable[VisitRecord]) -> Dict[str, ClientMetrics]:
    """
    client id (str) -> metrics. Visits without a client id are skipped.
    """
    running: Dict[str, _Running] = {}
    for visit in visits:
        if visit.client_id is None:
            continue
        key = str(visit.client_id)
        acc = running.get(key)
        if acc is None:
            acc = running[key] = _Running()
        acc.add(visit)
    return {k: acc.freeze() for k, acc in running.items()}


def merge_metrics(
    clients: Iterable[ClientRecord],
    folded: Dict[str, ClientMetrics],
) -> List[ClientWithMetrics]:
    """
    Left join: one output row per client, zero metrics when no visits matched.
    """
    return [ClientWithMetrics(client=c, metrics=folded.get(str(c.id), NO_METRICS)) for c in clients]


def metrics_for_client(client: ClientRecord, visits: Iterable[VisitRecord]) -> ClientWithMetrics:
    """
    Single-client profile fetch; same fold as the list.
    """
    own = [v for v in visits if v.client_id is not None and str(v.client_id) == str(client.id)]
    return merge_metrics([client], fold_visits(own))[0]


class ClientMetricsAggregator:
    """
    aggregate(tenant_id): read clients and visits concurrently, fold visits
    into per-client metrics, left-join onto clients.

    - clients read fails -> empty result with error (callers may retry)
    - visits read fails  -> clients with zero metrics, visits_degraded=True
    Nothing is cached between calls.
    """

    def __init__(self, store: StudioStore):
        self.store = store

    async def _read_pair(self, tenant_id: UUID) -> Tuple[Any, Any]:
        clients_task = asyncio.ensure_future(self.store.list_clients(tenant_id))
        visits_task = asyncio.ensure_future(self.store.list_visits(tenant_id))
        clients, visits = await asyncio.gather(clients_task, visits_task, return_exceptions=True)
        return clients, visits

    async def aggregate(self, tenant_id: UUID) -> AggregationResult:
        clients, visits = await self._read_pair(tenant_id)

        if isinstance(clients, BaseException):
            if not isinstance(clients, StoreUnavailable):
                if not isinstance(clients, Exception):
                    raise clients
                clients = StoreUnavailable("list_clients", tenant_id, clients)
            logger.error("client read failed for studio %s: %s", tenant_id, clients)
            return AggregationResult(records=[], error=clients)

        degraded = False
        if isinstance(visits, BaseException):
            if not isinstance(visits, Exception):
                raise visits
            logger.warning("visit read failed for studio %s, metrics zeroed: %s", tenant_id, visits)
            visits = []
            degraded = True

        return AggregationResult(
            records=merge_metrics(clients, fold_visits(visits)),
            visits_degraded=degraded,
        )
