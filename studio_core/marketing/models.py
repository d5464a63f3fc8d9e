from django.db import models

from studio_core.common.models import ScopedModel


class CampaignType(models.TextChoices):
    BIRTHDAY = "birthday", "Birthday"
    WINBACK = "winback", "Win-back"
    RETURN = "return", "Return"
    CUSTOM = "custom", "Custom"


class CampaignStatus(models.TextChoices):
    DRAFT = "draft", "Draft"
    SCHEDULED = "scheduled", "Scheduled"
    SENT = "sent", "Sent"


class CampaignChannel(models.TextChoices):
    WHATSAPP = "whatsapp", "WhatsApp"
    EMAIL = "email", "Email"


class Campaign(ScopedModel):
    name = models.CharField(max_length=255)
    campaign_type = models.CharField(max_length=16, choices=CampaignType.choices, default=CampaignType.CUSTOM)
    status = models.CharField(max_length=16, choices=CampaignStatus.choices, default=CampaignStatus.DRAFT)
    channel = models.CharField(max_length=16, choices=CampaignChannel.choices, blank=True)
    audience_count = models.PositiveIntegerField(default=0)

    class Meta:
        db_table = "marketing_campaign"
        indexes = [
            models.Index(fields=["tenant_id", "created_at"]),
        ]

    def __str__(self) -> str:
        return self.name
