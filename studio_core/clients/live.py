# studio_core/clients/live.py
from __future__ import annotations

import logging
import threading
from typing import Optional
from uuid import UUID

from studio_core.clients.metrics import AggregationResult, ClientMetricsAggregator
from studio_core.clients.projection import ClientFilter, ClientListProjection, ClientSort, project
from studio_core.common import events
from studio_core.common.events import TenantInvalidation
from studio_core.iam.capabilities import CapabilitySet

logger = logging.getLogger(__name__)


class ClientListModel:
    """
    A long-lived client list bound to one studio.

    Subscribes to that studio's invalidations only; an invalidation marks the
    list stale and the next read re-aggregates. Call close() when done.
    """

    def __init__(
        self,
        aggregator: ClientMetricsAggregator,
        tenant_id: UUID,
        channel: Optional[TenantInvalidation] = None,
    ):
        self.aggregator = aggregator
        self.tenant_id = UUID(str(tenant_id))
        self._lock = threading.Lock()
        self._stale = True
        self._result: Optional[AggregationResult] = None
        self.refresh_count = 0
        self._unsubscribe = (channel or events.channel).subscribe(self.tenant_id, self._on_invalidated)

    def _on_invalidated(self, tenant_id: UUID) -> None:
        with self._lock:
            self._stale = True

    @property
    def stale(self) -> bool:
        return self._stale

    async def refresh(self) -> AggregationResult:
        with self._lock:
            self._stale = False
        result = await self.aggregator.aggregate(self.tenant_id)
        if not result.ok:
            # keep retrying on the next read
            with self._lock:
                self._stale = True
        self._result = result
        self.refresh_count += 1
        return result

    async def result(self) -> AggregationResult:
        if self._stale or self._result is None:
            return await self.refresh()
        return self._result

    async def rows(
        self,
        search_term: str = "",
        filter: ClientFilter = ClientFilter.ALL,
        sort: ClientSort = ClientSort.NAME,
        capabilities: Optional[CapabilitySet] = None,
        **thresholds,
    ) -> ClientListProjection:
        result = await self.result()
        return project(result.records, search_term, filter, sort, capabilities, **thresholds)

    def close(self) -> None:
        self._unsubscribe()
        logger.debug("client list for studio %s closed", self.tenant_id)
