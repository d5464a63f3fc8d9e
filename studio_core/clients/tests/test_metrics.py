# studio_core/clients/tests/test_metrics.py
import asyncio
import logging
import uuid
from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from studio_core.clients.metrics import (
    ClientMetricsAggregator,
    metrics_for_client,
    parse_price,
    parse_visit_date,
)
from studio_core.common.store import ClientRecord, StoreUnavailable, VisitRecord
from studio_core.tests.helpers import InMemoryStudioStore

TENANT = uuid.UUID("11111111-1111-1111-1111-111111111111")
OTHER = uuid.UUID("22222222-2222-2222-2222-222222222222")


def _client(name, tenant=TENANT, email=""):
    return ClientRecord(id=uuid.uuid4(), tenant_id=tenant, full_name=name, email=email)


def _visit(client, price=None, performed=None, created=None, tenant=TENANT):
    return VisitRecord(
        id=uuid.uuid4(),
        tenant_id=tenant,
        client_id=client.id if client is not None else None,
        price=price,
        performed_date=performed,
        created_at=created,
    )


def _aggregate(store, tenant=TENANT):
    return asyncio.run(ClientMetricsAggregator(store).aggregate(tenant))


def _by_name(result):
    return {r.name: r for r in result.records}


def test_sum_and_count_with_malformed_price():
    a, b = _client("A"), _client("B")
    store = InMemoryStudioStore(
        clients=[a, b],
        visits=[_visit(a, "30"), _visit(a, "bad"), _visit(b, "10")],
    )

    rows = _by_name(_aggregate(store))

    assert rows["A"].total_visits == 2
    assert rows["A"].total_spent == Decimal("30")
    assert rows["B"].total_visits == 1
    assert rows["B"].total_spent == Decimal("10")


def test_left_join_one_row_per_client():
    a, b, c = _client("A"), _client("B"), _client("C")
    store = InMemoryStudioStore(
        clients=[a, b, c],
        visits=[_visit(a, 1), _visit(a, 2), _visit(a, 3), _visit(b, 4)],
    )

    result = _aggregate(store)

    assert result.ok
    assert sorted(r.id for r in result.records) == sorted([a.id, b.id, c.id])
    assert _by_name(result)["C"].total_visits == 0
    assert _by_name(result)["C"].total_spent == Decimal("0")
    assert _by_name(result)["C"].last_visit is None


def test_recency_takes_latest_date_and_ignores_undated():
    a = _client("A")
    store = InMemoryStudioStore(
        clients=[a],
        visits=[
            _visit(a, 10, performed="2024-01-01"),
            _visit(a, 10, performed="2024-03-01"),
            _visit(a, 10),
        ],
    )

    row = _aggregate(store).records[0]
    assert row.last_visit == date(2024, 3, 1)
    assert row.total_visits == 3


def test_missing_performed_date_falls_back_to_created_date():
    a = _client("A")
    store = InMemoryStudioStore(
        clients=[a],
        visits=[
            _visit(a, performed=date(2024, 1, 5)),
            _visit(a, created=datetime(2024, 2, 10, 15, 30, tzinfo=timezone.utc)),
        ],
    )

    assert _aggregate(store).records[0].last_visit == date(2024, 2, 10)


def test_malformed_performed_date_falls_back_to_created_date():
    a = _client("A")
    store = InMemoryStudioStore(clients=[a], visits=[_visit(a, performed="someday", created="2023-12-24T10:00:00Z")])
    assert _aggregate(store).records[0].last_visit == date(2023, 12, 24)


def test_visits_without_client_are_excluded():
    a = _client("A")
    store = InMemoryStudioStore(clients=[a], visits=[_visit(a, "5"), _visit(None, "500")])

    row = _aggregate(store).records[0]
    assert row.total_visits == 1
    assert row.total_spent == Decimal("5")


def test_visits_for_unknown_clients_do_not_create_rows():
    a, ghost = _client("A"), _client("Ghost")
    store = InMemoryStudioStore(clients=[a], visits=[_visit(ghost, "100")])

    result = _aggregate(store)
    assert [r.name for r in result.records] == ["A"]


def test_tenant_isolation():
    a, foreign = _client("A"), _client("Foreign", tenant=OTHER)
    store = InMemoryStudioStore(
        clients=[a, foreign],
        visits=[_visit(a, "1"), _visit(foreign, "999", tenant=OTHER)],
    )

    result = _aggregate(store)
    assert [r.name for r in result.records] == ["A"]
    assert result.records[0].total_spent == Decimal("1")


def test_aggregate_is_idempotent():
    a, b = _client("A"), _client("B")
    store = InMemoryStudioStore(
        clients=[a, b],
        visits=[_visit(a, "12.50", performed="2024-05-01"), _visit(b, None, created="2024-01-01")],
    )

    first = _aggregate(store)
    second = _aggregate(store)
    assert first == second
    assert first.records is not second.records


def test_client_read_failure_returns_empty_failed_result(caplog):
    store = InMemoryStudioStore(clients=[_client("A")])
    store.fail_clients = True

    with caplog.at_level(logging.ERROR, logger="studio_core.clients.metrics"):
        result = _aggregate(store)

    assert not result.ok
    assert isinstance(result.error, StoreUnavailable)
    assert result.records == []
    assert "client read failed" in caplog.text


def test_unexpected_client_read_error_is_wrapped():
    class Broken(InMemoryStudioStore):
        async def list_clients(self, tenant_id):
            raise ConnectionResetError("peer")

    result = _aggregate(Broken())
    assert isinstance(result.error, StoreUnavailable)
    assert isinstance(result.error.cause, ConnectionResetError)


def test_visit_read_failure_degrades_to_zero_metrics(caplog):
    a, b = _client("A"), _client("B")
    store = InMemoryStudioStore(clients=[a, b], visits=[_visit(a, "30")])
    store.fail_visits = True

    with caplog.at_level(logging.WARNING, logger="studio_core.clients.metrics"):
        result = _aggregate(store)

    assert result.ok
    assert result.visits_degraded
    assert len(result.records) == 2
    assert all(r.total_visits == 0 and r.total_spent == 0 and r.last_visit is None for r in result.records)
    assert "visit read failed" in caplog.text


def test_reads_run_concurrently():
    started = []

    class Slow(InMemoryStudioStore):
        async def list_clients(self, tenant_id):
            started.append("clients")
            await asyncio.sleep(0.01)
            assert "visits" in started
            return await super().list_clients(tenant_id)

        async def list_visits(self, tenant_id):
            started.append("visits")
            await asyncio.sleep(0.01)
            return await super().list_visits(tenant_id)

    result = _aggregate(Slow(clients=[_client("A")]))
    assert result.ok


def test_metrics_for_client_uses_the_same_rules():
    a, b = _client("A"), _client("B")
    visits = [
        _visit(a, "20", performed="2024-04-02"),
        _visit(a, "x", created="2024-06-01T09:00:00"),
        _visit(b, "50", performed="2025-01-01"),
    ]

    row = metrics_for_client(a, visits)
    store_row = _by_name(_aggregate(InMemoryStudioStore(clients=[a, b], visits=visits)))["A"]

    assert row == store_row
    assert row.total_visits == 2
    assert row.total_spent == Decimal("20")
    assert row.last_visit == date(2024, 6, 1)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("30", Decimal("30")),
        (" 12.5 ", Decimal("12.5")),
        (15, Decimal("15")),
        (Decimal("7.25"), Decimal("7.25")),
        (None, Decimal("0")),
        ("", Decimal("0")),
        ("bad", Decimal("0")),
        ("30abc", Decimal("30")),
        ("12,5", Decimal("12")),
        (".5", Decimal("0.50")),
        ("1e3", Decimal("1000")),
        ("abc30", Decimal("0")),
        ("1e999999999", Decimal("0")),
        ("10000000000", Decimal("0")),
        (1e308, Decimal("0")),
        ("9999999999.99", Decimal("9999999999.99")),
        ("NaN", Decimal("0")),
        ("Infinity", Decimal("0")),
        (True, Decimal("0")),
    ],
)
def test_parse_price(raw, expected):
    assert parse_price(raw) == expected


@pytest.mark.parametrize(
    "raw, expected",
    [
        (date(2024, 1, 2), date(2024, 1, 2)),
        (datetime(2024, 1, 2, 23, 59), date(2024, 1, 2)),
        ("2024-01-02", date(2024, 1, 2)),
        ("2024-01-02T08:00:00Z", date(2024, 1, 2)),
        ("2024-01-02T08:00:00.123456+00:00", date(2024, 1, 2)),
        ("", None),
        ("soon", None),
        (None, None),
        (20240102, None),
    ],
)
def test_parse_visit_date(raw, expected):
    assert parse_visit_date(raw) == expected


def test_oversized_price_counts_as_zero_and_keeps_the_fold_going():
    a = _client("A")
    visits = [_visit(a, "1e999999999"), _visit(a, "10")]

    result = _aggregate(InMemoryStudioStore(clients=[a], visits=visits))

    assert result.ok
    row = _by_name(result)["A"]
    assert row.total_visits == 2
    assert row.total_spent == Decimal("10")


def test_price_with_trailing_garbage_counts_its_numeric_prefix():
    a = _client("A")
    visits = [_visit(a, "30abc"), _visit(a, "12,5")]

    row = _by_name(_aggregate(InMemoryStudioStore(clients=[a], visits=visits)))["A"]

    assert row.total_spent == Decimal("42")
