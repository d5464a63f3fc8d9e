# studio_core/iam/models.py
import uuid
from django.conf import settings
from django.db import models

from studio_core.common.api.exceptions import ConflictError
from studio_core.studios.models import Studio


class Role(models.TextChoices):
    """
    Closed set of studio roles. A role belongs to a membership, not to the user.
    """
    MASTER = "MASTER", "Master"
    ARTIST = "ARTIST", "Artist"
    PIERCER = "PIERCER", "Piercer"
    RECEPTIONIST = "RECEPTIONIST", "Receptionist"
    CLIENT = "CLIENT", "Client"


class StudioMembership(models.Model):
    """
    Assigns a user to a studio with a role.
    This is the source of truth for (identity, studio) -> role.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    studio = models.ForeignKey(Studio, on_delete=models.PROTECT, related_name="memberships")
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="studio_memberships")

    role = models.CharField(max_length=16, choices=Role.choices)

    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "iam_studio_membership"
        constraints = [
            models.UniqueConstraint(fields=["studio", "user"], name="uq_studio_user_membership"),
        ]
        indexes = [
            models.Index(fields=["user", "is_active"]),
            models.Index(fields=["studio", "role"]),
        ]

    def __str__(self) -> str:
        return f"{self.user_id} @ {self.studio_id} ({self.role})"

    def save(self, *args, **kwargs):
        # Role is fixed for the lifetime of a membership.
        if not self._state.adding:
            stored = type(self).objects.filter(pk=self.pk).values_list("role", flat=True).first()
            if stored is not None and stored != self.role:
                raise ConflictError("Membership role cannot be changed; create a new membership instead.")
        super().save(*args, **kwargs)
