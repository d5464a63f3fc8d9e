# studio_core/visits/services.py
from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional
from uuid import UUID

from django.db import transaction
from django.utils import timezone
from rest_framework.exceptions import ValidationError

from studio_core.audit.services import AuditService
from studio_core.clients.models import Client
from studio_core.common.events import invalidate
from studio_core.iam.services.membership import is_user_member_of_studio
from studio_core.visits.models import ServiceType, Visit, VisitStatus


class VisitService:
    """
    Records service sessions. Each write invalidates the studio's
    client list (visit counts and spend change) after commit.
    """

    @staticmethod
    @transaction.atomic
    def record_visit(
        *,
        tenant_id: UUID,
        actor_user_id: int | None,
        client_id: UUID,
        professional_id: int | None = None,
        title: str = "",
        description: str = "",
        service_type: str = ServiceType.TATTOO,
        body_location: str = "",
        price: Optional[Decimal] = None,
        performed_date: Optional[date] = None,
    ) -> Visit:
        client = Client.objects.filter(id=client_id, tenant_id=tenant_id).first()
        if client is None:
            raise ValidationError({"client_id": "Client not found in this studio."})

        if professional_id is None:
            professional_id = actor_user_id
        if professional_id is not None and not is_user_member_of_studio(
            user_id=professional_id, tenant_id=tenant_id
        ):
            raise ValidationError({"professional_id": "Professional is not a member of this studio."})

        if service_type not in ServiceType.values:
            service_type = ServiceType.TATTOO

        visit = Visit.objects.create(
            tenant_id=tenant_id,
            client=client,
            professional_id=professional_id,
            title=(title or "").strip() or service_type,
            description=description or "",
            service_type=service_type,
            status=VisitStatus.DRAFT,
            body_location=body_location or "",
            price=price,
            performed_date=performed_date or timezone.localdate(),
        )

        AuditService.log(
            event_code="visit.recorded",
            entity_type="Visit",
            entity_id=visit.id,
            tenant_id=tenant_id,
            actor_user_id=actor_user_id,
            metadata={
                "client_id": str(client.id),
                "price": str(price) if price is not None else None,
            },
        )
        transaction.on_commit(lambda: invalidate(tenant_id))
        return visit
