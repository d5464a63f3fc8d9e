from django.contrib import admin

from studio_core.studios.models import Studio


@admin.register(Studio)
class StudioAdmin(admin.ModelAdmin):
    list_display = ("name", "slug", "status", "contact_email", "created_at")
    list_filter = ("status",)
    search_fields = ("name", "slug", "contact_email")
    ordering = ("name",)
    readonly_fields = ("id", "created_at", "updated_at")
