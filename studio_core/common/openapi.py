# studio_core/common/openapi.py
from __future__ import annotations

from drf_spectacular.openapi import AutoSchema
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter

from studio_core.iam.scope import HDR_STUDIO


class StudioAutoSchema(AutoSchema):
    """
    Adds the studio scope header (X-Studio-Id) to every scoped endpoint.
    Session endpoints and the schema/docs views are unscoped.
    """

    STUDIO_HEADER = OpenApiParameter(
        name=HDR_STUDIO,
        type=OpenApiTypes.UUID,
        location=OpenApiParameter.HEADER,
        required=True,
        description="Active studio UUID (required for scoped endpoints).",
    )

    def _is_unscoped_endpoint(self) -> bool:
        view = getattr(self, "view", None)
        if view is None:
            return False

        if view.__class__.__name__ in {"SpectacularAPIView", "SpectacularSwaggerView"}:
            return True

        module = view.__class__.__module__ or ""
        return module.startswith("studio_core.iam.api.")

    def get_override_parameters(self):
        params = list(super().get_override_parameters() or [])

        if not self._is_unscoped_endpoint():
            if not any(p.name.lower() == HDR_STUDIO.lower() for p in params):
                params.append(self.STUDIO_HEADER)

        return params
