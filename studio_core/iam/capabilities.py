# studio_core/iam/capabilities.py
from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Any, Dict

from django.core.exceptions import ImproperlyConfigured

from studio_core.iam.models import Role


@dataclass(frozen=True)
class CapabilitySet:
    """
    Resolved permissions for one role. Never persisted; derive it with resolve().
    """
    # Dashboard
    can_view_financials: bool
    can_view_all_appointments: bool

    # Agenda
    can_view_all_agenda: bool

    # Sessions (visits)
    can_view_all_sessions: bool
    can_create_session: bool
    can_filter_by_professional: bool

    # Clients
    can_view_client_profile: bool
    can_edit_client: bool
    can_add_client: bool

    # Whole pages
    can_access_marketing: bool
    can_access_loyalty: bool
    can_access_settings: bool

    def as_dict(self) -> Dict[str, bool]:
        return asdict(self)

    def allows(self, name: str) -> bool:
        if name not in CAPABILITY_NAMES:
            return False
        return bool(getattr(self, name))


CAPABILITY_NAMES = tuple(f.name for f in fields(CapabilitySet))

# Most restrictive role; also the fallback for anything unrecognised.
DEFAULT_ROLE = Role.CLIENT

_ARTIST_ROW = {
    "can_view_financials": False,
    "can_view_all_appointments": False,  # own appointments only
    "can_view_all_agenda": False,  # own agenda only
    "can_view_all_sessions": False,  # own sessions only
    "can_create_session": True,
    "can_filter_by_professional": False,
    "can_view_client_profile": False,
    "can_edit_client": False,
    "can_add_client": True,
    "can_access_marketing": False,
    "can_access_loyalty": False,
    "can_access_settings": False,
}

CAPABILITY_TABLE: Dict[Role, Dict[str, bool]] = {
    Role.MASTER: {name: True for name in CAPABILITY_NAMES},
    Role.ARTIST: _ARTIST_ROW,
    Role.PIERCER: _ARTIST_ROW,
    Role.RECEPTIONIST: {
        "can_view_financials": False,
        "can_view_all_appointments": False,
        "can_view_all_agenda": True,
        "can_view_all_sessions": True,
        "can_create_session": False,
        "can_filter_by_professional": True,
        "can_view_client_profile": False,
        "can_edit_client": False,
        "can_add_client": True,
        "can_access_marketing": True,
        "can_access_loyalty": True,
        "can_access_settings": False,
    },
    Role.CLIENT: {name: False for name in CAPABILITY_NAMES},
}


def _check_table() -> None:
    missing_roles = set(Role) - set(CAPABILITY_TABLE)
    if missing_roles:
        raise ImproperlyConfigured(f"Capability table has no row for: {sorted(missing_roles)}")

    expected = set(CAPABILITY_NAMES)
    for role, row in CAPABILITY_TABLE.items():
        if set(row) != expected:
            raise ImproperlyConfigured(
                f"Capability row for {role} must define exactly {sorted(expected)}; got {sorted(row)}"
            )


_check_table()


def coerce_role(value: Any) -> Role:
    """
    Map a Role, its value (any case) or anything else onto a Role.
    Unknown input degrades to the most restrictive role.
    """
    if isinstance(value, Role):
        return value
    try:
        return Role(str(value).strip().upper())
    except ValueError:
        return DEFAULT_ROLE


def resolve(role: Any) -> CapabilitySet:
    """
    Total, pure role -> capabilities lookup. Never raises.
    Every call returns a fresh CapabilitySet.
    """
    return CapabilitySet(**CAPABILITY_TABLE[coerce_role(role)])
