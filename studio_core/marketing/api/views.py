# studio_core/marketing/api/views.py
from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework import status, viewsets
from rest_framework.response import Response

from studio_core.common.permissions import CampaignPermission
from studio_core.iam.scope import get_session_context
from studio_core.marketing.api.serializers import CampaignCreateSerializer, CampaignSerializer
from studio_core.marketing.models import Campaign
from studio_core.marketing.selectors import campaign_qs
from studio_core.marketing.services import CampaignService


class CampaignViewSet(viewsets.ViewSet):
    """
    Marketing campaigns of the active studio, newest first.
    """
    permission_classes = [CampaignPermission]
    serializer_class = CampaignSerializer
    queryset = Campaign.objects.none()

    @extend_schema(responses={200: CampaignSerializer(many=True)})
    def list(self, request):
        ctx = get_session_context(request)
        return Response(CampaignSerializer(campaign_qs(tenant_id=ctx.tenant_id), many=True).data)

    @extend_schema(request=CampaignCreateSerializer, responses={201: CampaignSerializer})
    def create(self, request):
        ctx = get_session_context(request)

        ser = CampaignCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        campaign = CampaignService.create_campaign(
            tenant_id=ctx.tenant_id,
            actor_user_id=request.user.id,
            **ser.validated_data,
        )
        return Response(CampaignSerializer(campaign).data, status=status.HTTP_201_CREATED)
