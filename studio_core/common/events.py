# studio_core/common/events.py
from __future__ import annotations

import logging
import threading
from collections import defaultdict
from typing import Callable, Dict, List
from uuid import UUID

logger = logging.getLogger(__name__)

Listener = Callable[[UUID], None]


class TenantInvalidation:
    """
    Tenant-scoped invalidation channel.

    Listeners subscribe to one studio and are only told when *that* studio's
    client/visit data changed. Payloads are just the tenant id; listeners
    re-read through the store.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._listeners: Dict[UUID, List[Listener]] = defaultdict(list)

    def subscribe(self, tenant_id: UUID, listener: Listener) -> Callable[[], None]:
        """
        Register a listener for one tenant. Returns an unsubscribe callable
        (safe to call more than once).
        """
        key = UUID(str(tenant_id))
        with self._lock:
            self._listeners[key].append(listener)

        def _unsubscribe() -> None:
            with self._lock:
                listeners = self._listeners.get(key)
                if listeners and listener in listeners:
                    listeners.remove(listener)
                if not listeners:
                    self._listeners.pop(key, None)

        return _unsubscribe

    def invalidate(self, tenant_id: UUID) -> int:
        """
        Notify the tenant's listeners. Returns how many were notified.
        """
        key = UUID(str(tenant_id))
        with self._lock:
            listeners = list(self._listeners.get(key, ()))

        for listener in listeners:
            listener(key)

        logger.debug("tenant %s invalidated (%d listeners)", key, len(listeners))
        return len(listeners)

    def listener_count(self, tenant_id: UUID) -> int:
        with self._lock:
            return len(self._listeners.get(UUID(str(tenant_id)), ()))


# Default channel used by services and live views.
channel = TenantInvalidation()


def subscribe(tenant_id: UUID, listener: Listener) -> Callable[[], None]:
    """
    Usage:
        unsubscribe = subscribe(studio.id, lambda tenant_id: ...)
    """
    return channel.subscribe(tenant_id, listener)


def invalidate(tenant_id: UUID) -> int:
    return channel.invalidate(tenant_id)
