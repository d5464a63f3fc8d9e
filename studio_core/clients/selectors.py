# studio_core/clients/selectors.py
from __future__ import annotations

from uuid import UUID

from django.db.models import QuerySet

from studio_core.clients.models import Client


def client_qs(*, tenant_id: UUID) -> QuerySet[Client]:
    return Client.objects.filter(tenant_id=tenant_id).order_by("-created_at")


def get_client(*, tenant_id: UUID, client_id: UUID) -> Client:
    return Client.objects.get(id=client_id, tenant_id=tenant_id)
