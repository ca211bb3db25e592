"""Tests for the in-memory audit log repository."""

from __future__ import annotations

from datetime import date, datetime, timedelta

import pytest

from wallet_secure.repositories.audit_repository import AuditRepository, period_bounds
from wallet_secure.repositories.memory_store import MemoryStore


class FakeClock:
    def __init__(self, current: datetime):
        self.current = current

    def __call__(self) -> datetime:
        return self.current


def test_list_logs_filters_and_orders_newest_first() -> None:
    clock = FakeClock(datetime(2026, 1, 10, 9, 0))
    repo = AuditRepository(MemoryStore(now=clock))

    repo.add_log("CREATE", "insurance", "1", "insurance created Mapfre")
    clock.current = datetime(2026, 1, 12, 9, 0)
    repo.add_log("LOGIN", "account", "d***@walletsecure.com", "login succeeded")
    repo.add_log("DELETE", "insurance", "1", "insurance deleted MAPFRE")

    assert [log["action"] for log in repo.list_logs()] == ["DELETE", "LOGIN", "CREATE"]
    assert [log["action"] for log in repo.list_logs(entity="insurance")] == ["DELETE", "CREATE"]
    assert [log["action"] for log in repo.list_logs(keyword="mapfre")] == ["DELETE", "CREATE"]
    assert [log["action"] for log in repo.list_logs(date_from="2026-01-11")] == [
        "DELETE",
        "LOGIN",
    ]
    assert [log["action"] for log in repo.list_logs(date_to="2026-01-10")] == ["CREATE"]
    assert [log["action"] for log in repo.list_logs(limit=1, offset=1)] == ["LOGIN"]


def test_cleanup_old_logs() -> None:
    clock = FakeClock(datetime(2026, 1, 1))
    store = MemoryStore(now=clock)
    repo = AuditRepository(store)

    repo.add_log("CREATE", "insurance", "1", "old")
    clock.current = datetime(2026, 1, 1) + timedelta(days=40)
    repo.add_log("CREATE", "insurance", "2", "recent")

    removed = repo.cleanup_old_logs(retention_days=30)

    assert removed == 1
    assert [log["detail"] for log in repo.list_logs()] == ["recent"]


def test_purge_all_logs() -> None:
    repo = AuditRepository(MemoryStore())
    repo.add_log("READ", "insurance", "1", "insurance read")

    repo.purge_all_logs()

    assert repo.list_logs() == []


def test_period_bounds() -> None:
    today = date(2026, 3, 15)

    assert period_bounds("all", today) == (None, None)
    assert period_bounds("today", today) == ("2026-03-15", "2026-03-15")
    assert period_bounds("7d", today) == ("2026-03-09", "2026-03-15")
    assert period_bounds("30d", today) == ("2026-02-14", "2026-03-15")
    with pytest.raises(ValueError):
        period_bounds("yesterday", today)


def test_period_bounds_feed_list_logs() -> None:
    clock = FakeClock(datetime(2026, 3, 1, 10, 0))
    repo = AuditRepository(MemoryStore(now=clock))
    repo.add_log("CREATE", "insurance", "1", "early")
    clock.current = datetime(2026, 3, 14, 10, 0)
    repo.add_log("UPDATE", "insurance", "1", "recent")

    date_from, date_to = period_bounds("7d", date(2026, 3, 15))

    assert [log["detail"] for log in repo.list_logs(date_from=date_from, date_to=date_to)] == [
        "recent"
    ]
