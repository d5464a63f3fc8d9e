# studio_core/studios/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from studio_core.studios.models import Studio


class LoyaltyConfigSerializer(serializers.Serializer):
    is_active = serializers.BooleanField(required=False, default=False)
    reward_type = serializers.ChoiceField(choices=["percentage", "fixed"], required=False, default="percentage")
    reward_value = serializers.DecimalField(max_digits=10, decimal_places=2, required=False, min_value=0, coerce_to_string=True)
    min_purchase = serializers.DecimalField(max_digits=12, decimal_places=2, required=False, min_value=0, coerce_to_string=True)
    expiration_days = serializers.IntegerField(required=False, min_value=0)


def loyalty_json(value) -> dict:
    # stored as plain JSON; decimals as strings
    return {k: (str(v) if not isinstance(v, (bool, int, str)) else v) for k, v in dict(value).items()}


class StudioSettingsSerializer(serializers.ModelSerializer):
    class Meta:
        model = Studio
        fields = [
            "id",
            "name",
            "slug",
            "status",
            "contact_email",
            "logo_url",
            "loyalty_config",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class StudioSettingsUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255, required=False)
    contact_email = serializers.EmailField(required=False, allow_blank=True)
    logo_url = serializers.URLField(required=False, allow_blank=True)
    loyalty_config = LoyaltyConfigSerializer(required=False)

    def validate_loyalty_config(self, value):
        return loyalty_json(value)

    def validate(self, attrs):
        if not attrs:
            raise serializers.ValidationError("At least one field is required.")
        return attrs


class DashboardQuerySerializer(serializers.Serializer):
    year = serializers.IntegerField(required=False, min_value=1900, max_value=9999)


class MonthlyRevenueSerializer(serializers.Serializer):
    month = serializers.IntegerField()
    revenue = serializers.DecimalField(max_digits=16, decimal_places=2)


class DashboardStatsSerializer(serializers.Serializer):
    year = serializers.IntegerField()
    total_clients = serializers.IntegerField()
    total_visits = serializers.IntegerField()
    total_revenue = serializers.DecimalField(max_digits=16, decimal_places=2)
    revenue_by_month = MonthlyRevenueSerializer(many=True)


class UpcomingVisitSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    client_name = serializers.CharField(source="client.full_name", default=None)
    title = serializers.CharField()
    service_type = serializers.CharField()
    body_location = serializers.CharField()
    performed_date = serializers.DateField()
    professional_id = serializers.IntegerField(allow_null=True)
