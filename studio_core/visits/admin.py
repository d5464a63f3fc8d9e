from django.contrib import admin

from studio_core.visits.models import Visit


@admin.register(Visit)
class VisitAdmin(admin.ModelAdmin):
    list_display = ("title", "service_type", "status", "price", "performed_date", "tenant_id")
    list_filter = ("service_type", "status")
    search_fields = ("title", "client__full_name")
    readonly_fields = ("created_at", "updated_at")
    ordering = ("-performed_date", "-created_at")
