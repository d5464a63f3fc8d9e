# studio_core/tests/helpers.py
from __future__ import annotations

from typing import Any, Dict, List, Optional
from uuid import UUID

from studio_core.common.store import ClientRecord, MembershipRecord, StoreUnavailable, VisitRecord


def scoped(studio):
    return {"HTTP_X_STUDIO_ID": str(studio.id)}


class InMemoryStudioStore:
    """
    StudioStore backed by plain lists. fail_clients / fail_visits make the
    corresponding read raise StoreUnavailable.
    """

    def __init__(
        self,
        clients: Optional[List[ClientRecord]] = None,
        visits: Optional[List[VisitRecord]] = None,
        memberships: Optional[List[MembershipRecord]] = None,
    ):
        self.clients = list(clients or [])
        self.visits = list(visits or [])
        self.memberships = list(memberships or [])
        self.fail_clients = False
        self.fail_visits = False
        self.calls: Dict[str, int] = {"list_clients": 0, "list_visits": 0, "list_tenants_for_identity": 0}

    async def list_clients(self, tenant_id: UUID) -> List[ClientRecord]:
        self.calls["list_clients"] += 1
        if self.fail_clients:
            raise StoreUnavailable("list_clients", tenant_id, ConnectionError("down"))
        return [c for c in self.clients if c.tenant_id == tenant_id]

    async def list_visits(self, tenant_id: UUID) -> List[VisitRecord]:
        self.calls["list_visits"] += 1
        if self.fail_visits:
            raise StoreUnavailable("list_visits", tenant_id, ConnectionError("down"))
        return [v for v in self.visits if v.tenant_id == tenant_id]

    async def list_tenants_for_identity(self, identity_id: Any) -> List[MembershipRecord]:
        self.calls["list_tenants_for_identity"] += 1
        return [m for m in self.memberships if str(m.identity_id) == str(identity_id)]
