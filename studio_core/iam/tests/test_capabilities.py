# studio_core/iam/tests/test_capabilities.py
import pytest

from studio_core.iam.capabilities import CAPABILITY_NAMES, CAPABILITY_TABLE, CapabilitySet, resolve
from studio_core.iam.models import Role


@pytest.mark.parametrize("role", list(Role))
def test_every_role_defines_every_capability(role):
    caps = resolve(role)
    assert isinstance(caps, CapabilitySet)
    assert set(caps.as_dict()) == set(CAPABILITY_NAMES)
    assert all(isinstance(v, bool) for v in caps.as_dict().values())


@pytest.mark.parametrize("value", [None, "", "OWNER", "admin", 42, object(), "  "])
def test_unknown_role_degrades_to_client(value):
    assert resolve(value) == resolve(Role.CLIENT)


def test_role_value_is_case_insensitive():
    assert resolve("master") == resolve(Role.MASTER)
    assert resolve(" receptionist ") == resolve(Role.RECEPTIONIST)


def test_master_allows_everything_client_nothing():
    assert all(resolve(Role.MASTER).as_dict().values())
    assert not any(resolve(Role.CLIENT).as_dict().values())


def test_artist_and_piercer_share_a_row_but_not_an_instance():
    artist = resolve(Role.ARTIST)
    piercer = resolve(Role.PIERCER)

    assert artist == piercer
    assert artist is not piercer
    assert resolve(Role.ARTIST) is not artist


def test_artist_row():
    caps = resolve(Role.ARTIST)
    assert caps.can_create_session
    assert caps.can_add_client
    assert not caps.can_edit_client
    assert not caps.can_view_client_profile
    assert not caps.can_view_all_sessions
    assert not caps.can_access_settings


def test_receptionist_row():
    caps = resolve(Role.RECEPTIONIST)
    assert caps.can_view_all_agenda
    assert caps.can_view_all_sessions
    assert caps.can_filter_by_professional
    assert caps.can_add_client
    assert caps.can_access_marketing
    assert caps.can_access_loyalty

    assert not caps.can_create_session
    assert not caps.can_view_financials
    assert not caps.can_edit_client
    assert not caps.can_access_settings


def test_capability_set_is_immutable():
    caps = resolve(Role.MASTER)
    with pytest.raises(Exception):
        caps.can_edit_client = False  # type: ignore[misc]


def test_allows_rejects_unknown_names():
    caps = resolve(Role.MASTER)
    assert caps.allows("can_edit_client")
    assert not caps.allows("can_launch_rockets")


def test_table_covers_all_roles():
    assert set(CAPABILITY_TABLE) == set(Role)
