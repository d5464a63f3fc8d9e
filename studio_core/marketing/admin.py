from django.contrib import admin

from studio_core.marketing.models import Campaign


@admin.register(Campaign)
class CampaignAdmin(admin.ModelAdmin):
    list_display = ("name", "campaign_type", "status", "channel", "audience_count", "tenant_id")
    list_filter = ("campaign_type", "status", "channel")
    search_fields = ("name",)
    readonly_fields = ("created_at", "updated_at")
