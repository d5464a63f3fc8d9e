# studio_core/studios/selectors.py
from __future__ import annotations

from datetime import date
from typing import Optional
from uuid import UUID

from django.db.models import QuerySet

from studio_core.clients.models import Client
from studio_core.common.store import visit_record
from studio_core.studios.dashboard import DashboardStats, build_stats
from studio_core.studios.models import Studio
from studio_core.visits.models import Visit
from studio_core.visits.selectors import visit_rows_for_metrics

UPCOMING_LIMIT = 3


def get_studio(*, studio_id: UUID) -> Studio:
    return Studio.objects.get(id=studio_id)


def get_studio_or_none(*, studio_id: UUID) -> Optional[Studio]:
    return Studio.objects.filter(id=studio_id).first()


def dashboard_stats(*, tenant_id: UUID, year: int) -> DashboardStats:
    return build_stats(
        year=year,
        total_clients=Client.objects.filter(tenant_id=tenant_id).count(),
        visits=(visit_record(row) for row in visit_rows_for_metrics(tenant_id=tenant_id)),
    )


def upcoming_visits(
    *,
    tenant_id: UUID,
    today: date,
    professional_id: int | None = None,
    limit: int = UPCOMING_LIMIT,
) -> QuerySet[Visit]:
    """
    Next visits scheduled from `today` on, soonest first.
    """
    qs = Visit.objects.filter(tenant_id=tenant_id, performed_date__gte=today).select_related("client")
    if professional_id is not None:
        qs = qs.filter(professional_id=professional_id)
    return qs.order_by("performed_date", "created_at")[:limit]
