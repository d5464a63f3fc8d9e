# studio_core/visits/models.py
from django.conf import settings
from django.db import models

from studio_core.common.models import ScopedModel


class ServiceType(models.TextChoices):
    TATTOO = "tattoo", "Tattoo"
    PIERCING = "piercing", "Piercing"


class VisitStatus(models.TextChoices):
    DRAFT = "draft", "Draft"
    IN_PROGRESS = "in_progress", "In progress"
    COMPLETED = "completed", "Completed"
    CANCELLED = "cancelled", "Cancelled"


class Visit(ScopedModel):
    """
    One billable service session for a client.
    price / performed_date may be missing; metrics treat them as 0 / undated.
    """
    client = models.ForeignKey(
        "clients.Client",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="visits",
    )
    professional = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="performed_visits",
    )

    title = models.CharField(max_length=255, blank=True)
    description = models.TextField(blank=True)
    service_type = models.CharField(max_length=16, choices=ServiceType.choices, default=ServiceType.TATTOO)
    status = models.CharField(max_length=16, choices=VisitStatus.choices, default=VisitStatus.DRAFT)

    body_location = models.CharField(max_length=128, blank=True)
    price = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    performed_date = models.DateField(null=True, blank=True)

    class Meta:
        db_table = "visits_visit"
        indexes = [
            models.Index(fields=["tenant_id", "client"]),
            models.Index(fields=["tenant_id", "professional"]),
            models.Index(fields=["tenant_id", "performed_date"]),
        ]

    def __str__(self) -> str:
        return self.title or f"Visit {self.id}"
