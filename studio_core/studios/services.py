# studio_core/studios/services.py
from __future__ import annotations

from uuid import UUID

from django.db import transaction
from rest_framework.exceptions import ValidationError

from studio_core.audit.services import AuditService
from studio_core.studios.models import Studio

SETTINGS_FIELDS = ("name", "contact_email", "logo_url", "loyalty_config")


class StudioService:
    """
    Studio settings edits (write-model boundary).
    """

    @staticmethod
    @transaction.atomic
    def update_settings(*, studio_id: UUID, actor_user_id: int | None, data: dict) -> Studio:
        updates = {k: v for k, v in (data or {}).items() if k in SETTINGS_FIELDS}
        if not updates:
            raise ValidationError({"detail": "No editable settings provided."})

        if "name" in updates:
            updates["name"] = (updates["name"] or "").strip()
            if not updates["name"]:
                raise ValidationError({"name": "This field is required."})

        if "loyalty_config" in updates and not isinstance(updates["loyalty_config"], dict):
            raise ValidationError({"loyalty_config": "Must be a JSON object."})

        studio = Studio.objects.select_for_update().get(id=studio_id)
        for k, v in updates.items():
            setattr(studio, k, v)
        studio.save(update_fields=[*updates.keys(), "updated_at"])

        AuditService.log(
            event_code="studio.settings_updated",
            entity_type="Studio",
            entity_id=studio.id,
            tenant_id=studio.id,
            actor_user_id=actor_user_id,
            metadata={"updated_fields": sorted(updates.keys())},
        )
        return studio
