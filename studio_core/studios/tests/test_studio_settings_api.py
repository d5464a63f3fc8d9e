# studio_core/studios/tests/test_studio_settings_api.py
import pytest

from studio_core.audit.models import AuditEvent
from studio_core.iam.models import Role
from studio_core.tests.helpers import scoped

pytestmark = pytest.mark.django_db

URL = "/api/v1/studio/settings/"


def test_master_reads_settings(api_client, studio):
    res = api_client.get(URL, **scoped(studio))
    assert res.status_code == 200
    assert res.json()["slug"] == "black-ink"


@pytest.mark.parametrize("role", [Role.ARTIST, Role.PIERCER, Role.RECEPTIONIST, Role.CLIENT])
def test_only_master_can_access_settings(client_as, studio, role):
    c, _ = client_as(role)
    assert c.get(URL, **scoped(studio)).status_code == 403
    assert c.patch(URL, {"name": "Hijacked"}, format="json", **scoped(studio)).status_code == 403


def test_master_updates_settings_and_loyalty(api_client, user, studio):
    res = api_client.patch(
        URL,
        {
            "name": "Black Ink Tattoo",
            "loyalty_config": {"is_active": True, "reward_type": "percentage", "reward_value": "5.00"},
        },
        format="json",
        **scoped(studio),
    )
    assert res.status_code == 200

    studio.refresh_from_db()
    assert studio.name == "Black Ink Tattoo"
    assert studio.loyalty_config["is_active"] is True
    assert studio.loyalty_config["reward_value"] == "5.00"

    event = AuditEvent.objects.get(event_code="studio.settings_updated")
    assert event.actor_user_id == user.id
    assert event.metadata["updated_fields"] == ["loyalty_config", "name"]


def test_blank_name_is_rejected(api_client, studio):
    res = api_client.patch(URL, {"name": "   "}, format="json", **scoped(studio))
    assert res.status_code == 400


def test_settings_are_per_active_studio(make_member, studio, other_studio):
    from rest_framework.test import APIClient

    from studio_core.iam.models import StudioMembership

    u = make_member(Role.ARTIST)
    StudioMembership.objects.create(studio=other_studio, user=u, role=Role.MASTER)
    c = APIClient()
    c.force_authenticate(user=u)

    assert c.get(URL, **scoped(studio)).status_code == 403
    assert c.get(URL, **scoped(other_studio)).json()["name"] == "Red Needle"
