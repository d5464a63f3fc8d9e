# studio_core/iam/tests/test_session_context.py
import threading
import uuid

import pytest

from studio_core.common.store import MembershipRecord
from studio_core.iam.capabilities import resolve
from studio_core.iam.models import Role
from studio_core.iam.session import InvalidSessionTransition, SessionContext, SessionState

IDENTITY = 7
STUDIO_A = uuid.UUID("00000000-0000-0000-0000-00000000000a")
STUDIO_B = uuid.UUID("00000000-0000-0000-0000-00000000000b")


def _membership(tenant_id, role, identity=IDENTITY):
    return MembershipRecord(identity_id=identity, tenant_id=tenant_id, role=role, studio_name=str(tenant_id)[-1])


def _consistent(ctx: SessionContext) -> bool:
    snap = ctx.snapshot()
    return (snap["tenant_id"] is None) == (snap["role"] is None)


def test_new_context_is_unselected_with_most_restrictive_role():
    ctx = SessionContext(identity_id=IDENTITY)

    assert ctx.state == SessionState.UNSELECTED
    assert ctx.tenant_id is None
    assert ctx.role == Role.CLIENT
    assert ctx.capabilities() == resolve(Role.CLIENT)
    assert _consistent(ctx)


def test_activate_binds_tenant_and_role_together():
    ctx = SessionContext(identity_id=IDENTITY)
    ctx.activate(_membership(STUDIO_A, "MASTER"))

    assert ctx.state == SessionState.ACTIVE
    assert ctx.tenant_id == STUDIO_A
    assert ctx.role == Role.MASTER
    assert ctx.snapshot() == {
        "state": "ACTIVE",
        "tenant_id": str(STUDIO_A),
        "role": "MASTER",
        "studio_name": "a",
    }


def test_switching_studio_rederives_role():
    ctx = SessionContext(identity_id=IDENTITY)
    ctx.activate(_membership(STUDIO_A, "MASTER"))
    ctx.activate(_membership(STUDIO_B, "ARTIST"))

    assert ctx.tenant_id == STUDIO_B
    assert ctx.role == Role.ARTIST
    assert not ctx.capabilities().can_edit_client


def test_unknown_membership_role_degrades():
    ctx = SessionContext(identity_id=IDENTITY)
    ctx.activate(_membership(STUDIO_A, "OWNER"))
    assert ctx.role == Role.CLIENT


def test_sign_out_is_terminal():
    ctx = SessionContext(identity_id=IDENTITY)
    ctx.activate(_membership(STUDIO_A, "MASTER"))
    ctx.sign_out()

    assert ctx.state == SessionState.SIGNED_OUT
    assert ctx.tenant_id is None
    assert ctx.role == Role.CLIENT
    assert _consistent(ctx)

    with pytest.raises(InvalidSessionTransition):
        ctx.activate(_membership(STUDIO_B, "MASTER"))
    assert ctx.tenant_id is None


def test_sign_out_from_unselected():
    ctx = SessionContext(identity_id=IDENTITY)
    ctx.sign_out()
    assert ctx.state == SessionState.SIGNED_OUT


def test_membership_of_another_identity_is_rejected():
    ctx = SessionContext(identity_id=IDENTITY)
    with pytest.raises(InvalidSessionTransition):
        ctx.activate(_membership(STUDIO_A, "MASTER", identity=99))
    assert ctx.state == SessionState.UNSELECTED


def test_tenant_and_role_never_observed_apart_under_concurrent_switching():
    ctx = SessionContext(identity_id=IDENTITY)
    pairs = {
        (str(STUDIO_A), "MASTER"),
        (str(STUDIO_B), "ARTIST"),
    }
    stop = threading.Event()
    bad = []

    def writer():
        a = _membership(STUDIO_A, "MASTER")
        b = _membership(STUDIO_B, "ARTIST")
        while not stop.is_set():
            ctx.activate(a)
            ctx.activate(b)

    def reader():
        for _ in range(5000):
            active = ctx.active
            if active is None:
                continue
            pair = (str(active.tenant_id), active.role.value)
            if pair not in pairs:
                bad.append(pair)
            if not _consistent(ctx):
                bad.append(ctx.snapshot())

    w = threading.Thread(target=writer)
    w.start()
    readers = [threading.Thread(target=reader) for _ in range(4)]
    for r in readers:
        r.start()
    for r in readers:
        r.join()
    stop.set()
    w.join()

    assert bad == []
