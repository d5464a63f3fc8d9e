# studio_core/marketing/services.py
from __future__ import annotations

from uuid import UUID

from django.db import transaction
from rest_framework.exceptions import ValidationError

from studio_core.audit.services import AuditService
from studio_core.marketing.models import Campaign, CampaignChannel, CampaignStatus, CampaignType


class CampaignService:
    @staticmethod
    @transaction.atomic
    def create_campaign(
        *,
        tenant_id: UUID,
        actor_user_id: int | None,
        name: str,
        campaign_type: str = CampaignType.CUSTOM,
        status: str = CampaignStatus.DRAFT,
        channel: str = "",
        audience_count: int = 0,
    ) -> Campaign:
        name = (name or "").strip()
        if not name:
            raise ValidationError({"name": "A campaign name is required."})
        if status != CampaignStatus.DRAFT and not channel:
            # scheduled/sent campaigns must say where they go
            raise ValidationError({"channel": f"Required for {status} campaigns."})
        if channel and channel not in CampaignChannel.values:
            raise ValidationError({"channel": "Unknown channel."})

        campaign = Campaign.objects.create(
            tenant_id=tenant_id,
            name=name,
            campaign_type=campaign_type,
            status=status,
            channel=channel or "",
            audience_count=audience_count,
        )

        AuditService.log(
            event_code="campaign.created",
            entity_type="Campaign",
            entity_id=campaign.id,
            tenant_id=tenant_id,
            actor_user_id=actor_user_id,
            metadata={"campaign_type": campaign.campaign_type, "status": campaign.status},
        )
        return campaign
