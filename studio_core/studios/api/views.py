# studio_core/studios/api/views.py
from __future__ import annotations

from django.utils import timezone
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from studio_core.common.permissions import (
    CapabilityPermission,
    DashboardStatsPermission,
    LoyaltyPermission,
    StudioSettingsPermission,
)
from studio_core.iam.scope import get_session_context
from studio_core.studios.api.serializers import (
    DashboardQuerySerializer,
    DashboardStatsSerializer,
    LoyaltyConfigSerializer,
    StudioSettingsSerializer,
    StudioSettingsUpdateSerializer,
    UpcomingVisitSerializer,
    loyalty_json,
)
from studio_core.studios.selectors import dashboard_stats, get_studio, upcoming_visits
from studio_core.studios.services import StudioService


class StudioSettingsView(APIView):
    """
    Settings of the active studio (MASTER only via can_access_settings).
    """
    permission_classes = [StudioSettingsPermission]

    @extend_schema(tags=["Studio"], responses={200: StudioSettingsSerializer})
    def get(self, request):
        ctx = get_session_context(request)
        studio = get_studio(studio_id=ctx.tenant_id)
        return Response(StudioSettingsSerializer(studio).data, status=status.HTTP_200_OK)

    @extend_schema(tags=["Studio"], request=StudioSettingsUpdateSerializer, responses={200: StudioSettingsSerializer})
    def patch(self, request):
        ctx = get_session_context(request)

        ser = StudioSettingsUpdateSerializer(data=request.data, partial=True)
        ser.is_valid(raise_exception=True)

        studio = StudioService.update_settings(
            studio_id=ctx.tenant_id,
            actor_user_id=request.user.id,
            data=ser.validated_data,
        )
        return Response(StudioSettingsSerializer(studio).data, status=status.HTTP_200_OK)


class DashboardStatsView(APIView):
    """
    Clients, visits and revenue of the active studio (can_view_financials).
    `year` picks the monthly breakdown; defaults to the current year.
    """
    permission_classes = [DashboardStatsPermission]

    @extend_schema(
        tags=["Studio"],
        parameters=[OpenApiParameter("year", OpenApiTypes.INT, OpenApiParameter.QUERY)],
        responses={200: DashboardStatsSerializer},
    )
    def get(self, request):
        ctx = get_session_context(request)

        query = DashboardQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        year = query.validated_data.get("year") or timezone.localdate().year

        stats = dashboard_stats(tenant_id=ctx.tenant_id, year=year)
        return Response(DashboardStatsSerializer(stats).data, status=status.HTTP_200_OK)


class UpcomingVisitsView(APIView):
    """
    Next scheduled visits. Members without can_view_all_appointments only
    get the ones they perform.
    """
    permission_classes = [CapabilityPermission]

    @extend_schema(tags=["Studio"], responses={200: UpcomingVisitSerializer(many=True)})
    def get(self, request):
        ctx = get_session_context(request)
        own_only = not ctx.capabilities().can_view_all_appointments

        qs = upcoming_visits(
            tenant_id=ctx.tenant_id,
            today=timezone.localdate(),
            professional_id=request.user.id if own_only else None,
        )
        return Response(UpcomingVisitSerializer(qs, many=True).data, status=status.HTTP_200_OK)


class LoyaltyConfigView(APIView):
    """
    Loyalty program of the active studio (can_access_loyalty).
    PATCH replaces the whole program config.
    """
    permission_classes = [LoyaltyPermission]

    @extend_schema(tags=["Studio"], responses={200: LoyaltyConfigSerializer})
    def get(self, request):
        ctx = get_session_context(request)
        studio = get_studio(studio_id=ctx.tenant_id)
        return Response(studio.loyalty_config or {}, status=status.HTTP_200_OK)

    @extend_schema(tags=["Studio"], request=LoyaltyConfigSerializer, responses={200: LoyaltyConfigSerializer})
    def patch(self, request):
        ctx = get_session_context(request)

        ser = LoyaltyConfigSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        studio = StudioService.update_settings(
            studio_id=ctx.tenant_id,
            actor_user_id=request.user.id,
            data={"loyalty_config": loyalty_json(ser.validated_data)},
        )
        return Response(studio.loyalty_config, status=status.HTTP_200_OK)
