# studio_core/iam/services/membership.py
from __future__ import annotations

from uuid import UUID

from studio_core.iam.models import StudioMembership
from studio_core.studios.models import StudioStatus


def _active_memberships(user_id: int):
    return (
        StudioMembership.objects.select_related("studio")
        .filter(user_id=user_id, is_active=True)
        .exclude(studio__status=StudioStatus.SUSPENDED)
    )


def list_user_studios(user_id: int) -> list[dict]:
    """
    Return studio memberships for session bootstrap / studio selection.

    Membership graph:
      auth_user -> StudioMembership -> Studio
    """
    qs = _active_memberships(user_id).order_by("studio__name", "studio__id")

    items: list[dict] = []
    for m in qs:
        s = m.studio
        items.append(
            {
                "studio_id": str(s.id),
                "studio_name": s.name,
                "studio_slug": s.slug,
                "logo_url": s.logo_url or None,
                "role": m.role,
            }
        )
    return items


def is_user_member_of_studio(*, user_id: int, tenant_id: UUID) -> bool:
    """
    Used to validate the professional on a recorded visit.
    """
    return _active_memberships(user_id).filter(studio_id=tenant_id).exists()
