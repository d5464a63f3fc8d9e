# studio_core/clients/models.py
from django.db import models

from studio_core.common.models import ScopedModel


class Client(ScopedModel):
    """
    Studio client. Created by enrollment, updated by profile edits,
    never hard-deleted here.
    """
    full_name = models.CharField(max_length=255)
    first_name = models.CharField(max_length=128, blank=True)
    last_name = models.CharField(max_length=128, blank=True)

    email = models.EmailField(blank=True)
    phone = models.CharField(max_length=32, blank=True)

    birth_date = models.DateField(null=True, blank=True)
    cpf = models.CharField(max_length=14, blank=True)
    rg = models.CharField(max_length=32, blank=True)  # rg or passport
    profession = models.CharField(max_length=128, blank=True)
    instagram = models.CharField(max_length=128, blank=True)

    # zip_code, street, number, neighborhood, city, state
    address = models.JSONField(default=dict, blank=True)
    avatar_url = models.URLField(blank=True)

    class Meta:
        db_table = "clients_client"
        indexes = [
            models.Index(fields=["tenant_id", "full_name"]),
            models.Index(fields=["tenant_id", "email"]),
        ]

    def __str__(self) -> str:
        return self.full_name

    def profile_fields(self) -> dict:
        return {
            "first_name": self.first_name,
            "last_name": self.last_name,
            "birth_date": self.birth_date,
            "cpf": self.cpf,
            "rg": self.rg,
            "profession": self.profession,
            "instagram": self.instagram,
            "address": dict(self.address or {}),
            "avatar_url": self.avatar_url,
        }
