# studio_core/common/tests/test_events.py
import uuid

from studio_core.common.events import TenantInvalidation

STUDIO_A = uuid.uuid4()
STUDIO_B = uuid.uuid4()


def test_invalidate_only_notifies_that_tenant():
    channel = TenantInvalidation()
    seen_a, seen_b = [], []
    channel.subscribe(STUDIO_A, seen_a.append)
    channel.subscribe(STUDIO_B, seen_b.append)

    assert channel.invalidate(STUDIO_A) == 1

    assert seen_a == [STUDIO_A]
    assert seen_b == []


def test_string_and_uuid_ids_are_the_same_tenant():
    channel = TenantInvalidation()
    seen = []
    channel.subscribe(str(STUDIO_A), seen.append)

    channel.invalidate(STUDIO_A)
    assert seen == [STUDIO_A]


def test_unsubscribe_is_idempotent():
    channel = TenantInvalidation()
    seen = []
    unsubscribe = channel.subscribe(STUDIO_A, seen.append)

    unsubscribe()
    unsubscribe()

    assert channel.invalidate(STUDIO_A) == 0
    assert channel.listener_count(STUDIO_A) == 0
    assert seen == []


def test_listener_may_unsubscribe_while_being_notified():
    channel = TenantInvalidation()
    calls = []
    holder = {}

    def once(tenant_id):
        calls.append(tenant_id)
        holder["unsubscribe"]()

    holder["unsubscribe"] = channel.subscribe(STUDIO_A, once)

    channel.invalidate(STUDIO_A)
    channel.invalidate(STUDIO_A)
    assert calls == [STUDIO_A]
