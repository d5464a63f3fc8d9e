# studio_core/studios/models.py
import uuid
from django.db import models


class StudioStatus(models.TextChoices):
    ACTIVE = "ACTIVE", "Active"
    INACTIVE = "INACTIVE", "Inactive"
    SUSPENDED = "SUSPENDED", "Suspended"


class Studio(models.Model):
    """
    A studio is the tenant: root of all scoping in the system.
    Client and visit rows carry its id as tenant_id.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    name = models.CharField(max_length=255)
    slug = models.SlugField(max_length=64, unique=True)  # public booking link

    status = models.CharField(
        max_length=16,
        choices=StudioStatus.choices,
        default=StudioStatus.ACTIVE,
        db_index=True,
    )

    contact_email = models.EmailField(blank=True)
    logo_url = models.URLField(blank=True)

    # cashback program settings: is_active, reward_type, reward_value, ...
    loyalty_config = models.JSONField(default=dict, blank=True)
    metadata = models.JSONField(default=dict, blank=True)

    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "studios_studio"
        indexes = [
            models.Index(fields=["status"]),
        ]

    def __str__(self) -> str:
        return f"{self.name} ({self.slug})"
