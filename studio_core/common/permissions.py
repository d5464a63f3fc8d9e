# studio_core/common/permissions.py

from __future__ import annotations

from typing import Dict, Optional

from rest_framework.permissions import BasePermission, SAFE_METHODS

from studio_core.iam.scope import MISSING_STUDIO_MSG, get_session_context

# Marker for actions any member of the active studio may perform.
ANY_MEMBER = None


class CapabilityPermission(BasePermission):
    """
    Capability-based access control for studio-scoped endpoints.

    Key behavior:
    - Requires authentication and an ACTIVE session context (X-Studio-Id).
    - required_capability_per_action maps action -> capability name
      (or ANY_MEMBER). Capabilities come from the role the user holds in
      the selected studio, never from a global user attribute.
    - If action is unknown and request is SAFE, fall back to list/retrieve.
    - Unknown unsafe actions are denied.
    """
    message = "You do not have permission to perform this action."

    # Override in subclasses
    required_capability_per_action: Dict[str, Optional[str]] = {
        "list": ANY_MEMBER,
        "retrieve": ANY_MEMBER,
    }

    def _infer_action(self, request, view) -> str | None:
        action = getattr(view, "action", None)
        if action:
            return action

        kwargs = getattr(view, "kwargs", {}) or {}
        is_detail = "pk" in kwargs or "id" in kwargs

        method = request.method.upper()
        if method in ("GET", "HEAD", "OPTIONS"):
            return "retrieve" if is_detail else "list"
        if method == "POST":
            return "create"
        if method == "PUT":
            return "update"
        if method == "PATCH":
            return "partial_update"
        if method == "DELETE":
            return "destroy"
        return None

    def has_permission(self, request, view) -> bool:
        user = request.user
        if not user or not getattr(user, "is_authenticated", False):
            return False

        ctx = get_session_context(request)
        if ctx.active is None:
            self.message = MISSING_STUDIO_MSG
            return False

        action = self._infer_action(request, view)
        mapping = self.required_capability_per_action

        if action not in mapping and request.method in SAFE_METHODS:
            kwargs = getattr(view, "kwargs", {}) or {}
            action = "retrieve" if ("pk" in kwargs or "id" in kwargs) else "list"

        if action not in mapping:
            return False

        required = mapping[action]
        if required is ANY_MEMBER:
            return True
        return ctx.capabilities().allows(required)

    def has_object_permission(self, request, view, obj) -> bool:
        # objects are always read through the active tenant, so scope is already enforced
        return self.has_permission(request, view)


class ClientPermission(CapabilityPermission):
    """Client directory: everyone in the studio sees the list; actions are gated."""
    required_capability_per_action = {
        "list": ANY_MEMBER,
        "retrieve": "can_view_client_profile",
        "create": "can_add_client",
        "partial_update": "can_edit_client",
    }


class VisitPermission(CapabilityPermission):
    """Visits (service sessions)."""
    required_capability_per_action = {
        "list": ANY_MEMBER,
        "create": "can_create_session",
    }


class StudioSettingsPermission(CapabilityPermission):
    # plain APIView without pk: GET infers "list"
    required_capability_per_action = {
        "list": "can_access_settings",
        "partial_update": "can_access_settings",
    }


class DashboardStatsPermission(CapabilityPermission):
    required_capability_per_action = {
        "list": "can_view_financials",
    }


class LoyaltyPermission(CapabilityPermission):
    required_capability_per_action = {
        "list": "can_access_loyalty",
        "partial_update": "can_access_loyalty",
    }


class CampaignPermission(CapabilityPermission):
    """Marketing campaigns: the whole page is gated."""
    required_capability_per_action = {
        "list": "can_access_marketing",
        "create": "can_access_marketing",
    }
