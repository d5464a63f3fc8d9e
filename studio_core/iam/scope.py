# studio_core/iam/scope.py
from __future__ import annotations

from typing import Optional
from uuid import UUID

from asgiref.sync import async_to_sync
from rest_framework.exceptions import ValidationError

from studio_core.common.store import DjangoStudioStore
from studio_core.iam.services.selector import TenantSelector
from studio_core.iam.session import SessionContext

HDR_STUDIO = "X-Studio-Id"

MISSING_STUDIO_MSG = "No studio selected. Provide the X-Studio-Id header."
INVALID_STUDIO_MSG = "Invalid X-Studio-Id header. Provide a valid UUID."


def _get_header(request, name: str) -> Optional[str]:
    """
    request.headers is case-insensitive; fallback to META for pytest/client.
    """
    headers = getattr(request, "headers", None)
    if headers is not None:
        v = headers.get(name)
        if v:
            return v

    meta_key = "HTTP_" + name.upper().replace("-", "_")
    return request.META.get(meta_key)


def resolve_studio_id_from_headers(request) -> Optional[UUID]:
    """
    Returns the requested studio id, None when the header is absent.
    Raises 400 ValidationError when present but not a UUID.
    """
    raw = _get_header(request, HDR_STUDIO)
    if not raw:
        return None
    try:
        return UUID(str(raw).strip())
    except ValueError:
        raise ValidationError({HDR_STUDIO: INVALID_STUDIO_MSG})


def default_selector() -> TenantSelector:
    return TenantSelector(DjangoStudioStore())


def get_session_context(request, *, selector: Optional[TenantSelector] = None) -> SessionContext:
    """
    Build (once per request) the SessionContext for request.user.

    If X-Studio-Id is present:
      - validates it is a UUID (400 otherwise)
      - verifies membership and binds the membership role (403 otherwise)
    If absent the context stays UNSELECTED.

    Attaches request.studio_session and request.tenant_id.
    """
    cached = getattr(request, "studio_session", None)
    if cached is not None:
        return cached

    ctx = SessionContext(identity_id=request.user.id)

    studio_id = resolve_studio_id_from_headers(request)
    if studio_id is not None:
        sel = selector or default_selector()
        async_to_sync(sel.select)(ctx, studio_id)

    request.studio_session = ctx
    request.tenant_id = ctx.tenant_id
    return ctx
