from __future__ import annotations

from rest_framework import serializers

from studio_core.marketing.models import Campaign, CampaignChannel, CampaignStatus, CampaignType


class CampaignCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    type = serializers.ChoiceField(choices=CampaignType.choices, default=CampaignType.CUSTOM, source="campaign_type")
    status = serializers.ChoiceField(choices=CampaignStatus.choices, default=CampaignStatus.DRAFT)
    channel = serializers.ChoiceField(choices=CampaignChannel.choices, required=False, allow_blank=True, default="")
    audience_count = serializers.IntegerField(min_value=0, required=False, default=0)


class CampaignSerializer(serializers.ModelSerializer):
    type = serializers.CharField(source="campaign_type", read_only=True)

    class Meta:
        model = Campaign
        fields = [
            "id",
            "tenant_id",
            "name",
            "type",
            "status",
            "channel",
            "audience_count",
            "created_at",
        ]
        read_only_fields = fields
