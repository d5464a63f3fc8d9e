# studio_core/visits/api/views.py
from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework import mixins, status, viewsets
from rest_framework.exceptions import PermissionDenied
from rest_framework.response import Response

from studio_core.common.permissions import VisitPermission
from studio_core.iam.scope import get_session_context
from studio_core.visits.api.serializers import VisitCreateSerializer, VisitSerializer
from studio_core.visits.filters import VisitFilter
from studio_core.visits.models import Visit
from studio_core.visits.selectors import visit_qs
from studio_core.visits.services import VisitService


class VisitViewSet(mixins.ListModelMixin, viewsets.GenericViewSet):
    """
    Service sessions of the active studio.
    Members without can_view_all_sessions only see sessions they performed.
    Filtering by professional needs can_filter_by_professional.
    """
    permission_classes = [VisitPermission]
    serializer_class = VisitSerializer
    queryset = Visit.objects.none()
    filterset_class = VisitFilter

    def get_queryset(self):
        if getattr(self, "swagger_fake_view", False):
            return Visit.objects.none()
        ctx = get_session_context(self.request)
        caps = ctx.capabilities()
        if "professional" in self.request.query_params and not caps.can_filter_by_professional:
            raise PermissionDenied("Your role cannot filter sessions by professional.")
        if caps.can_view_all_sessions:
            return visit_qs(tenant_id=ctx.tenant_id)
        return visit_qs(tenant_id=ctx.tenant_id, professional_id=self.request.user.id)

    @extend_schema(request=VisitCreateSerializer, responses={201: VisitSerializer})
    def create(self, request):
        ctx = get_session_context(request)

        ser = VisitCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        visit = VisitService.record_visit(
            tenant_id=ctx.tenant_id,
            actor_user_id=request.user.id,
            **ser.validated_data,
        )
        return Response(VisitSerializer(visit).data, status=status.HTTP_201_CREATED)
