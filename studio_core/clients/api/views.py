# studio_core/clients/api/views.py
from __future__ import annotations

from uuid import UUID

from asgiref.sync import async_to_sync
from django.conf import settings
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status, viewsets
from rest_framework.exceptions import NotFound
from rest_framework.response import Response

from studio_core.clients.api.serializers import (
    ClientCreateSerializer,
    ClientDetailSerializer,
    ClientListQuerySerializer,
    ClientListResponseSerializer,
    ClientRowSerializer,
    ClientSerializer,
    ClientUpdateSerializer,
)
from studio_core.clients.metrics import ClientMetricsAggregator, metrics_for_client
from studio_core.clients.models import Client
from studio_core.clients.projection import project
from studio_core.clients.selectors import get_client
from studio_core.clients.services import ClientService
from studio_core.common.api.exceptions import StoreUnavailableError
from studio_core.common.permissions import ClientPermission
from studio_core.common.store import DjangoStudioStore, client_record, visit_record
from studio_core.iam.scope import get_session_context
from studio_core.visits.selectors import visit_rows_for_metrics


def client_aggregator() -> ClientMetricsAggregator:
    return ClientMetricsAggregator(DjangoStudioStore())


class ClientViewSet(viewsets.ViewSet):
    permission_classes = [ClientPermission]
    serializer_class = ClientSerializer
    queryset = Client.objects.none()

    def get_object(self, request, pk) -> Client:
        ctx = get_session_context(request)
        try:
            return get_client(tenant_id=ctx.tenant_id, client_id=UUID(str(pk)))
        except (ValueError, Client.DoesNotExist):
            raise NotFound("Client not found.")

    @extend_schema(
        parameters=[
            OpenApiParameter("q", OpenApiTypes.STR, OpenApiParameter.QUERY),
            OpenApiParameter("filter", OpenApiTypes.STR, OpenApiParameter.QUERY, enum=["all", "vip", "new"]),
            OpenApiParameter("sort", OpenApiTypes.STR, OpenApiParameter.QUERY, enum=["name", "visits", "spent", "recent"]),
        ],
        responses={200: ClientListResponseSerializer},
    )
    def list(self, request):
        ctx = get_session_context(request)

        query = ClientListQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        result = async_to_sync(client_aggregator().aggregate)(ctx.tenant_id)
        if not result.ok:
            raise StoreUnavailableError()

        projection = project(
            result.records,
            query.validated_data["q"],
            query.validated_data["filter"],
            query.validated_data["sort"],
            ctx.capabilities(),
            vip_threshold=settings.CLIENTS_VIP_SPEND_THRESHOLD,
            new_max_visits=settings.CLIENTS_NEW_MAX_VISITS,
        )

        return Response(
            {
                "results": ClientRowSerializer(projection.rows, many=True).data,
                "count": len(projection),
                "actions": projection.actions.as_dict(),
                "degraded": result.visits_degraded,
            },
            status=status.HTTP_200_OK,
        )

    @extend_schema(responses={200: ClientDetailSerializer})
    def retrieve(self, request, pk=None):
        client = self.get_object(request, pk)

        visits = [visit_record(r) for r in visit_rows_for_metrics(tenant_id=client.tenant_id).filter(client_id=client.id)]
        client.metrics = metrics_for_client(client_record(client), visits).metrics

        return Response(ClientDetailSerializer(client).data, status=status.HTTP_200_OK)

    @extend_schema(request=ClientCreateSerializer, responses={201: ClientSerializer})
    def create(self, request):
        ctx = get_session_context(request)

        ser = ClientCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        client = ClientService.create_client(
            tenant_id=ctx.tenant_id,
            actor_user_id=request.user.id,
            **ser.validated_data,
        )
        return Response(ClientSerializer(client).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=ClientUpdateSerializer, responses={200: ClientSerializer})
    def partial_update(self, request, pk=None):
        client = self.get_object(request, pk)

        ser = ClientUpdateSerializer(data=request.data, partial=True)
        ser.is_valid(raise_exception=True)

        client = ClientService.update_client(
            tenant_id=client.tenant_id,
            actor_user_id=request.user.id,
            client_id=client.id,
            data=ser.validated_data,
        )
        return Response(ClientSerializer(client).data, status=status.HTTP_200_OK)
