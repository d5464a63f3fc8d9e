# studio_core/iam/session.py
from __future__ import annotations

import threading
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional
from uuid import UUID

from studio_core.common.store import MembershipRecord
from studio_core.iam.capabilities import DEFAULT_ROLE, CapabilitySet, coerce_role, resolve
from studio_core.iam.models import Role


class SessionState(str, Enum):
    UNSELECTED = "UNSELECTED"
    ACTIVE = "ACTIVE"
    SIGNED_OUT = "SIGNED_OUT"


class InvalidSessionTransition(RuntimeError):
    """
    Programming error: the requested transition is not allowed from the
    current state (e.g. selecting a studio after sign-out).
    """


@dataclass(frozen=True)
class ActiveStudio:
    """
    Tenant and role travel together; there is no way to hold one without the other.
    """
    tenant_id: UUID
    role: Role
    studio_name: str = ""


class SessionContext:
    """
    Current identity + active studio + role within that studio.

    States:
      UNSELECTED --activate--> ACTIVE --activate (re-selection)--> ACTIVE
      any --sign_out--> SIGNED_OUT (terminal)

    The (tenant, role) pair is one immutable value swapped under a lock, so
    concurrent readers see either the old pair or the new pair.
    """

    def __init__(self, identity_id: Any):
        self.identity_id = identity_id
        self._lock = threading.Lock()
        self._active: Optional[ActiveStudio] = None
        self._signed_out = False

    def __repr__(self) -> str:
        return f"<SessionContext identity={self.identity_id} state={self.state.value}>"

    # ---------------------------------------------------------------
    # reads
    # ---------------------------------------------------------------

    @property
    def active(self) -> Optional[ActiveStudio]:
        return self._active

    @property
    def state(self) -> SessionState:
        if self._signed_out:
            return SessionState.SIGNED_OUT
        if self._active is None:
            return SessionState.UNSELECTED
        return SessionState.ACTIVE

    @property
    def tenant_id(self) -> Optional[UUID]:
        active = self._active
        return active.tenant_id if active else None

    @property
    def role(self) -> Role:
        # No studio chosen -> most restrictive role, never an error.
        active = self._active
        return active.role if active else DEFAULT_ROLE

    def capabilities(self) -> CapabilitySet:
        return resolve(self.role)

    # ---------------------------------------------------------------
    # transitions
    # ---------------------------------------------------------------

    def activate(self, membership: MembershipRecord) -> ActiveStudio:
        """
        Bind the studio and the role the identity holds there.
        Switching studios goes through here too; the role is always
        re-derived from the new membership.
        """
        if str(membership.identity_id) != str(self.identity_id):
            raise InvalidSessionTransition("Membership belongs to a different identity.")

        active = ActiveStudio(
            tenant_id=UUID(str(membership.tenant_id)),
            role=coerce_role(membership.role),
            studio_name=membership.studio_name,
        )
        with self._lock:
            if self._signed_out:
                raise InvalidSessionTransition("Session is signed out; start a new session.")
            self._active = active
        return active

    def sign_out(self) -> None:
        with self._lock:
            self._active = None
            self._signed_out = True

    def snapshot(self) -> dict:
        with self._lock:
            active = self._active
            state = self.state
        return {
            "state": state.value,
            "tenant_id": str(active.tenant_id) if active else None,
            "role": active.role.value if active else None,
            "studio_name": active.studio_name if active else None,
        }
