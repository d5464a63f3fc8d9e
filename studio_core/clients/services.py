# studio_core/clients/services.py
from __future__ import annotations

from uuid import UUID

from django.db import transaction
from rest_framework.exceptions import ValidationError

from studio_core.audit.services import AuditService
from studio_core.clients.models import Client
from studio_core.common.events import invalidate

PROFILE_FIELDS = {
    "full_name",
    "first_name",
    "last_name",
    "email",
    "phone",
    "birth_date",
    "cpf",
    "rg",
    "profession",
    "instagram",
    "address",
    "avatar_url",
}


def _full_name(first_name: str, last_name: str, full_name: str = "") -> str:
    name = (full_name or "").strip()
    if name:
        return name
    return f"{(first_name or '').strip()} {(last_name or '').strip()}".strip()


class ClientService:
    """
    Client enrollment and profile edits (write-model boundary).
    Every write invalidates the studio's client list after commit.
    """

    @staticmethod
    @transaction.atomic
    def create_client(
        *,
        tenant_id: UUID,
        actor_user_id: int | None,
        first_name: str = "",
        last_name: str = "",
        full_name: str = "",
        **profile,
    ) -> Client:
        name = _full_name(first_name, last_name, full_name)
        if not name:
            raise ValidationError({"full_name": "A client name is required."})

        unknown = set(profile) - PROFILE_FIELDS
        if unknown:
            raise ValidationError({"detail": f"Unknown client fields: {sorted(unknown)}"})

        client = Client.objects.create(
            tenant_id=tenant_id,
            full_name=name,
            first_name=(first_name or "").strip(),
            last_name=(last_name or "").strip(),
            email=profile.get("email") or "",
            phone=profile.get("phone") or "",
            birth_date=profile.get("birth_date"),
            cpf=profile.get("cpf") or "",
            rg=profile.get("rg") or "",
            profession=profile.get("profession") or "",
            instagram=profile.get("instagram") or "",
            address=profile.get("address") or {},
            avatar_url=profile.get("avatar_url") or "",
        )

        AuditService.log(
            event_code="client.created",
            entity_type="Client",
            entity_id=client.id,
            tenant_id=tenant_id,
            actor_user_id=actor_user_id,
            metadata={"full_name": client.full_name},
        )
        transaction.on_commit(lambda: invalidate(tenant_id))
        return client

    @staticmethod
    @transaction.atomic
    def update_client(
        *,
        tenant_id: UUID,
        actor_user_id: int | None,
        client_id: UUID,
        data: dict,
    ) -> Client:
        client = Client.objects.select_for_update().get(id=client_id, tenant_id=tenant_id)

        updates = {k: v for k, v in (data or {}).items() if k in PROFILE_FIELDS}
        if "full_name" in updates and not (updates["full_name"] or "").strip():
            raise ValidationError({"full_name": "A client name is required."})

        for k, v in updates.items():
            if k == "address":
                # partial address edits merge into the stored address
                merged = dict(client.address or {})
                merged.update(v or {})
                v = merged
            setattr(client, k, v)

        if "full_name" not in updates and ({"first_name", "last_name"} & updates.keys()):
            # an emptied name keeps the previous display name
            client.full_name = _full_name(client.first_name, client.last_name) or client.full_name

        client.save()

        AuditService.log(
            event_code="client.updated",
            entity_type="Client",
            entity_id=client.id,
            tenant_id=tenant_id,
            actor_user_id=actor_user_id,
            metadata={"updated_fields": sorted(updates.keys())},
        )
        transaction.on_commit(lambda: invalidate(tenant_id))
        return client
