# studio_core/iam/api/schema_serializers.py
from __future__ import annotations

from rest_framework import serializers

from studio_core.iam.capabilities import CAPABILITY_NAMES


class MeUserSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    username = serializers.CharField(allow_null=True, required=False)
    email = serializers.EmailField(allow_null=True, required=False)


class MembershipSerializer(serializers.Serializer):
    studio_id = serializers.UUIDField(source="tenant_id")
    studio_name = serializers.CharField(allow_blank=True)
    role = serializers.CharField()


class SessionSnapshotSerializer(serializers.Serializer):
    state = serializers.ChoiceField(choices=["UNSELECTED", "ACTIVE", "SIGNED_OUT"])
    tenant_id = serializers.UUIDField(allow_null=True)
    role = serializers.CharField(allow_null=True)
    studio_name = serializers.CharField(allow_null=True)


class CapabilitiesSerializer(serializers.Serializer):
    def get_fields(self):
        return {name: serializers.BooleanField() for name in CAPABILITY_NAMES}


class SessionBootstrapResponseSerializer(serializers.Serializer):
    user = MeUserSerializer()
    memberships = MembershipSerializer(many=True)
    session = SessionSnapshotSerializer()

    # Capability map for UI gating (menus/buttons)
    capabilities = CapabilitiesSerializer()

    server_time = serializers.DateTimeField(required=False)
    api_version = serializers.CharField(required=False)


class StudioSelectRequestSerializer(serializers.Serializer):
    studio_id = serializers.UUIDField()


class StudioSelectResponseSerializer(serializers.Serializer):
    message = serializers.CharField()
    session = SessionSnapshotSerializer()
    capabilities = CapabilitiesSerializer()


class SignOutResponseSerializer(serializers.Serializer):
    detail = serializers.CharField()
    session = SessionSnapshotSerializer()
