# studio_core/conftest.py
import pytest
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient

from studio_core.clients.models import Client
from studio_core.iam.models import Role, StudioMembership
from studio_core.studios.models import Studio


@pytest.fixture(autouse=True)
def _fresh_invalidation_channel(monkeypatch):
    """
    Each test gets its own invalidation registry so listeners never leak.
    """
    from studio_core.common import events

    monkeypatch.setattr(events, "channel", events.TenantInvalidation())


@pytest.fixture
def studio(db):
    return Studio.objects.create(name="Black Ink", slug="black-ink")


@pytest.fixture
def other_studio(db):
    return Studio.objects.create(name="Red Needle", slug="red-needle")


@pytest.fixture
def make_member(db, studio):
    """
    make_member(Role.ARTIST) -> user holding that role in `studio`.
    """
    User = get_user_model()
    counter = {"n": 0}

    def _make(role=Role.MASTER, *, target=None, username=None):
        counter["n"] += 1
        u = User.objects.create_user(
            username=username or f"{str(role).lower()}-{counter['n']}",
            password="testpass",
            is_active=True,
        )
        StudioMembership.objects.create(studio=target or studio, user=u, role=role, is_active=True)
        return u

    return _make


@pytest.fixture
def user(make_member):
    """
    Studio owner (MASTER membership in `studio`).
    """
    return make_member(Role.MASTER, username="owner")


@pytest.fixture
def api_client(user):
    c = APIClient()
    c.force_authenticate(user=user)
    return c


@pytest.fixture
def client_as(make_member):
    """
    client_as(Role.RECEPTIONIST) -> (APIClient, user) for a fresh member.
    """

    def _client(role):
        u = make_member(role)
        c = APIClient()
        c.force_authenticate(user=u)
        return c, u

    return _client


@pytest.fixture
def tattoo_client(studio):
    return Client.objects.create(
        tenant_id=studio.id,
        full_name="Ana Souza",
        email="ana@example.com",
        phone="+55 11 99999-0000",
    )
