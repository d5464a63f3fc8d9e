# studio_core/common/store.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol
from uuid import UUID

from asgiref.sync import sync_to_async
from django.db import DatabaseError

logger = logging.getLogger(__name__)


class StoreUnavailable(Exception):
    """
    A read against the data store failed outright.
    """

    def __init__(self, operation: str, tenant_id: Any = None, cause: Optional[BaseException] = None):
        self.operation = operation
        self.tenant_id = tenant_id
        self.cause = cause
        super().__init__(f"{operation} failed for {tenant_id}: {cause}")


@dataclass(frozen=True)
class ClientRecord:
    id: UUID
    tenant_id: UUID
    full_name: str
    email: str = ""
    phone: str = ""
    # birth_date, cpf, rg, profession, instagram, address, avatar_url ...
    profile: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class VisitRecord:
    """
    One billable service event. price/performed_date/created_at are kept
    raw; the aggregator is responsible for parsing them.
    """
    id: UUID
    tenant_id: UUID
    client_id: Optional[UUID]
    price: Any = None
    performed_date: Any = None
    created_at: Any = None


@dataclass(frozen=True)
class MembershipRecord:
    identity_id: Any
    tenant_id: UUID
    role: str
    studio_name: str = ""


class StudioStore(Protocol):
    async def list_clients(self, tenant_id: UUID) -> List[ClientRecord]: ...

    async def list_visits(self, tenant_id: UUID) -> List[VisitRecord]: ...

    async def list_tenants_for_identity(self, identity_id: Any) -> List[MembershipRecord]: ...


# -------------------------------------------------------------------
# ORM-backed implementation
# -------------------------------------------------------------------

def client_record(obj) -> ClientRecord:
    return ClientRecord(
        id=obj.id,
        tenant_id=obj.tenant_id,
        full_name=obj.full_name,
        email=obj.email or "",
        phone=obj.phone or "",
        profile=obj.profile_fields(),
    )


def visit_record(row: dict) -> VisitRecord:
    return VisitRecord(
        id=row["id"],
        tenant_id=row["tenant_id"],
        client_id=row["client_id"],
        price=row["price"],
        performed_date=row["performed_date"],
        created_at=row["created_at"],
    )


def _read_clients(tenant_id: UUID) -> List[ClientRecord]:
    from studio_core.clients.selectors import client_qs

    return [client_record(c) for c in client_qs(tenant_id=tenant_id)]


def _read_visits(tenant_id: UUID) -> List[VisitRecord]:
    from studio_core.visits.selectors import visit_rows_for_metrics

    return [visit_record(r) for r in visit_rows_for_metrics(tenant_id=tenant_id)]


def _read_memberships(identity_id: Any) -> List[MembershipRecord]:
    from studio_core.iam.services.membership import list_user_studios

    return [
        MembershipRecord(
            identity_id=identity_id,
            tenant_id=UUID(m["studio_id"]),
            role=m["role"],
            studio_name=m["studio_name"] or "",
        )
        for m in list_user_studios(identity_id)
    ]


class DjangoStudioStore:
    """
    StudioStore over the Django ORM. Reads run in Django's thread-sensitive
    executor so they share the request's connection/transaction.
    """

    async def _run(self, operation: str, key: Any, fn, *args):
        try:
            return await sync_to_async(fn, thread_sensitive=True)(*args)
        except DatabaseError as exc:
            logger.error("store read %s failed for %s: %s", operation, key, exc)
            raise StoreUnavailable(operation, key, exc) from exc

    async def list_clients(self, tenant_id: UUID) -> List[ClientRecord]:
        return await self._run("list_clients", tenant_id, _read_clients, tenant_id)

    async def list_visits(self, tenant_id: UUID) -> List[VisitRecord]:
        return await self._run("list_visits", tenant_id, _read_visits, tenant_id)

    async def list_tenants_for_identity(self, identity_id: Any) -> List[MembershipRecord]:
        return await self._run("list_tenants_for_identity", identity_id, _read_memberships, identity_id)
