# studio_core/iam/admin.py
from __future__ import annotations

from django.contrib import admin

from studio_core.iam.models import StudioMembership


@admin.register(StudioMembership)
class StudioMembershipAdmin(admin.ModelAdmin):
    list_display = ("studio", "user", "role", "is_active", "created_at")
    list_filter = ("studio", "role", "is_active")
    search_fields = ("studio__name", "studio__slug", "user__username", "user__email")
    ordering = ("studio", "role")

    def get_readonly_fields(self, request, obj=None):
        # role is immutable once the membership exists
        if obj is not None:
            return ("role", "created_at", "updated_at")
        return ("created_at", "updated_at")
