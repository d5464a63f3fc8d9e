from django.contrib import admin

from studio_core.clients.models import Client


@admin.register(Client)
class ClientAdmin(admin.ModelAdmin):
    list_display = ("full_name", "email", "phone", "tenant_id", "created_at")
    list_filter = ("tenant_id",)
    search_fields = ("full_name", "email", "phone", "cpf")
    readonly_fields = ("created_at", "updated_at")
    ordering = ("-created_at",)
