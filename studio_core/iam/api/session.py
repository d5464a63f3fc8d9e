# studio_core/iam/api/session.py

from __future__ import annotations

import logging

from asgiref.sync import async_to_sync
from django.conf import settings
from django.utils import timezone
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from studio_core.iam.api.schema_serializers import (
    MembershipSerializer,
    SessionBootstrapResponseSerializer,
    SignOutResponseSerializer,
    StudioSelectRequestSerializer,
    StudioSelectResponseSerializer,
)
from studio_core.iam.scope import HDR_STUDIO, default_selector, get_session_context
from studio_core.iam.services.selector import TenantSelector
from studio_core.iam.session import SessionContext

logger = logging.getLogger(__name__)

API_VERSION = "0.1.0"


def _clear_auth_cookies(response: Response) -> None:
    jwt_cfg = getattr(settings, "SIMPLE_JWT", {}) or {}
    access_name = jwt_cfg.get("AUTH_COOKIE", "studio_access")
    refresh_name = jwt_cfg.get("AUTH_COOKIE_REFRESH", "studio_refresh")
    response.delete_cookie(access_name, path="/")
    response.delete_cookie(refresh_name, path="/")


class SessionBootstrapView(APIView):
    """
    Frontend bootstrap endpoint.

    - Requires auth (cookie or header JWT).
    - X-Studio-Id OPTIONAL.
      - If provided -> validated + membership enforced.
      - If not provided -> the first membership (by studio name) becomes active;
        an identity with no memberships stays UNSELECTED.
    - Returns everything needed for UI initialization.
    """
    permission_classes = [IsAuthenticated]

    @extend_schema(
        responses={200: SessionBootstrapResponseSerializer},
        tags=["IAM"],
        parameters=[
            OpenApiParameter(name=HDR_STUDIO, location=OpenApiParameter.HEADER, required=False, type=str),
        ],
    )
    def get(self, request):
        selector = default_selector()

        # 1) memberships
        memberships = async_to_sync(selector.available)(request.user.id)

        # 2) active studio: header wins, otherwise the default membership
        ctx = get_session_context(request, selector=selector)
        if ctx.active is None:
            chosen = TenantSelector.choose_default(memberships)
            if chosen is not None:
                ctx.activate(chosen)

        return Response(
            {
                "user": {
                    "id": request.user.id,
                    "username": getattr(request.user, "username", None),
                    "email": getattr(request.user, "email", None),
                },
                "memberships": MembershipSerializer(memberships, many=True).data,
                "session": ctx.snapshot(),
                "capabilities": ctx.capabilities().as_dict(),
                "server_time": timezone.now(),
                "api_version": API_VERSION,
            }
        )


class SessionSelectView(APIView):
    """
    Validate a studio choice for the caller and return the resulting
    context. The client then sends the studio id as X-Studio-Id.
    """
    permission_classes = [IsAuthenticated]

    @extend_schema(
        request=StudioSelectRequestSerializer,
        responses={200: StudioSelectResponseSerializer},
        tags=["IAM"],
    )
    def post(self, request):
        ser = StudioSelectRequestSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        ctx = SessionContext(identity_id=request.user.id)
        async_to_sync(default_selector().select)(ctx, ser.validated_data["studio_id"])

        return Response(
            {
                "message": "Studio selected.",
                "session": ctx.snapshot(),
                "capabilities": ctx.capabilities().as_dict(),
            },
            status=status.HTTP_200_OK,
        )


class SignOutView(APIView):
    """
    Ends the request's session (terminal) and clears the auth cookies.
    """
    permission_classes = [IsAuthenticated]

    @extend_schema(request=None, responses={200: SignOutResponseSerializer}, tags=["IAM"])
    def post(self, request):
        ctx = get_session_context(request)
        ctx.sign_out()
        logger.info("user %s signed out", request.user.id)

        res = Response({"detail": "signed out", "session": ctx.snapshot()}, status=status.HTTP_200_OK)
        _clear_auth_cookies(res)
        return res
