# studio_core/visits/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from studio_core.visits.models import ServiceType, Visit


class VisitCreateSerializer(serializers.Serializer):
    client_id = serializers.UUIDField()
    professional_id = serializers.IntegerField(required=False, allow_null=True)
    title = serializers.CharField(max_length=255, required=False, allow_blank=True, default="")
    description = serializers.CharField(required=False, allow_blank=True, default="")
    service_type = serializers.ChoiceField(choices=ServiceType.choices, required=False, default=ServiceType.TATTOO)
    body_location = serializers.CharField(max_length=128, required=False, allow_blank=True, default="")
    price = serializers.DecimalField(max_digits=12, decimal_places=2, required=False, allow_null=True, min_value=0)
    performed_date = serializers.DateField(required=False, allow_null=True)


class VisitSerializer(serializers.ModelSerializer):
    client_name = serializers.CharField(source="client.full_name", read_only=True, default=None)

    class Meta:
        model = Visit
        fields = [
            "id",
            "tenant_id",
            "client_id",
            "client_name",
            "professional_id",
            "title",
            "description",
            "service_type",
            "status",
            "body_location",
            "price",
            "performed_date",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
