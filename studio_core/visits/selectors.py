# studio_core/visits/selectors.py
from __future__ import annotations

from uuid import UUID

from django.db.models import QuerySet

from studio_core.visits.models import Visit

METRIC_COLUMNS = ("id", "tenant_id", "client_id", "price", "performed_date", "created_at")


def visit_qs(*, tenant_id: UUID, professional_id: int | None = None) -> QuerySet[Visit]:
    qs = Visit.objects.filter(tenant_id=tenant_id).select_related("client", "professional")
    if professional_id is not None:
        qs = qs.filter(professional_id=professional_id)
    return qs.order_by("-performed_date", "-created_at")


def visit_rows_for_metrics(*, tenant_id: UUID) -> QuerySet:
    """
    Flat rows for the metrics fold. Rows without a client are kept; the
    aggregator decides what to do with them.
    """
    return Visit.objects.filter(tenant_id=tenant_id).values(*METRIC_COLUMNS)
