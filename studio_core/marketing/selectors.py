# studio_core/marketing/selectors.py
from __future__ import annotations

from uuid import UUID

from django.db.models import QuerySet

from studio_core.marketing.models import Campaign


def campaign_qs(*, tenant_id: UUID) -> QuerySet[Campaign]:
    return Campaign.objects.filter(tenant_id=tenant_id).order_by("-created_at")
