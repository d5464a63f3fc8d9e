# studio_core/clients/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from studio_core.clients.models import Client
from studio_core.clients.projection import ClientFilter, ClientSort


class AddressSerializer(serializers.Serializer):
    zip_code = serializers.CharField(max_length=16, required=False, allow_blank=True)
    street = serializers.CharField(max_length=255, required=False, allow_blank=True)
    number = serializers.CharField(max_length=16, required=False, allow_blank=True)
    neighborhood = serializers.CharField(max_length=128, required=False, allow_blank=True)
    city = serializers.CharField(max_length=128, required=False, allow_blank=True)
    state = serializers.CharField(max_length=64, required=False, allow_blank=True)


class ClientCreateSerializer(serializers.Serializer):
    full_name = serializers.CharField(max_length=255, required=False, allow_blank=True, default="")
    first_name = serializers.CharField(max_length=128, required=False, allow_blank=True, default="")
    last_name = serializers.CharField(max_length=128, required=False, allow_blank=True, default="")
    email = serializers.EmailField(required=False, allow_blank=True, default="")
    phone = serializers.CharField(max_length=32, required=False, allow_blank=True, default="")
    birth_date = serializers.DateField(required=False, allow_null=True)
    cpf = serializers.CharField(max_length=14, required=False, allow_blank=True, default="")
    rg = serializers.CharField(max_length=32, required=False, allow_blank=True, default="")
    profession = serializers.CharField(max_length=128, required=False, allow_blank=True, default="")
    instagram = serializers.CharField(max_length=128, required=False, allow_blank=True, default="")
    address = AddressSerializer(required=False)
    avatar_url = serializers.URLField(required=False, allow_blank=True, default="")

    def validate(self, attrs):
        name = (attrs.get("full_name") or "").strip()
        if not name and not (attrs.get("first_name") or "").strip():
            raise serializers.ValidationError({"full_name": "Provide full_name or first_name."})
        return attrs


class ClientUpdateSerializer(serializers.Serializer):
    """
    Partial update contract (PATCH).
    """
    full_name = serializers.CharField(max_length=255, required=False)
    first_name = serializers.CharField(max_length=128, required=False, allow_blank=True)
    last_name = serializers.CharField(max_length=128, required=False, allow_blank=True)
    email = serializers.EmailField(required=False, allow_blank=True)
    phone = serializers.CharField(max_length=32, required=False, allow_blank=True)
    birth_date = serializers.DateField(required=False, allow_null=True)
    cpf = serializers.CharField(max_length=14, required=False, allow_blank=True)
    rg = serializers.CharField(max_length=32, required=False, allow_blank=True)
    profession = serializers.CharField(max_length=128, required=False, allow_blank=True)
    instagram = serializers.CharField(max_length=128, required=False, allow_blank=True)
    address = AddressSerializer(required=False)
    avatar_url = serializers.URLField(required=False, allow_blank=True)

    def validate(self, attrs):
        if not attrs:
            raise serializers.ValidationError("At least one field is required.")
        return attrs


class ClientSerializer(serializers.ModelSerializer):
    class Meta:
        model = Client
        fields = [
            "id",
            "tenant_id",
            "full_name",
            "first_name",
            "last_name",
            "email",
            "phone",
            "birth_date",
            "cpf",
            "rg",
            "profession",
            "instagram",
            "address",
            "avatar_url",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class ClientListQuerySerializer(serializers.Serializer):
    q = serializers.CharField(required=False, allow_blank=True, default="")
    filter = serializers.ChoiceField(choices=[c.value for c in ClientFilter], required=False, default=ClientFilter.ALL.value)
    sort = serializers.ChoiceField(choices=[s.value for s in ClientSort], required=False, default=ClientSort.NAME.value)


class ClientMetricsSerializer(serializers.Serializer):
    total_visits = serializers.IntegerField()
    total_spent = serializers.DecimalField(max_digits=14, decimal_places=2)
    last_visit = serializers.DateField(allow_null=True)


class ClientRowSerializer(serializers.Serializer):
    """
    One row of the client list (ClientWithMetrics).
    """
    id = serializers.UUIDField()
    full_name = serializers.CharField(source="name")
    email = serializers.CharField()
    phone = serializers.CharField()
    avatar_url = serializers.SerializerMethodField()
    total_visits = serializers.IntegerField()
    total_spent = serializers.DecimalField(max_digits=14, decimal_places=2)
    last_visit = serializers.DateField(allow_null=True)

    def get_avatar_url(self, obj) -> str:
        return obj.client.profile.get("avatar_url") or ""


class ClientListActionsSerializer(serializers.Serializer):
    can_add = serializers.BooleanField()
    can_edit = serializers.BooleanField()
    can_view_profile = serializers.BooleanField()


class ClientListResponseSerializer(serializers.Serializer):
    results = ClientRowSerializer(many=True)
    count = serializers.IntegerField()
    actions = ClientListActionsSerializer()
    degraded = serializers.BooleanField()


class ClientDetailSerializer(ClientSerializer):
    metrics = ClientMetricsSerializer(read_only=True)

    class Meta(ClientSerializer.Meta):
        fields = ClientSerializer.Meta.fields + ["metrics"]
        read_only_fields = fields
