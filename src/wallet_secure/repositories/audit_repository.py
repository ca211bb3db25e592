"""Audit log repository."""

from __future__ import annotations

from datetime import date, timedelta
from typing import Any

from wallet_secure.repositories.memory_store import MemoryStore

AUDIT_ACTIONS = [
    "CREATE",
    "READ",
    "UPDATE",
    "DELETE",
    "LOGIN",
    "LOGIN_FAILED",
    "REGISTER",
    "REGISTER_FAILED",
    "LOGOUT",
]


class AuditRepository:
    """Keeps and manages CRUD and auth audit logs."""

    def __init__(self, store: MemoryStore):
        self._store = store

    def add_log(self, action: str, entity: str, entity_id: str | None, detail: str) -> int:
        """Append an audit log record and return its id."""
        log_id = self._store.next_audit_id()
        self._store.audit_logs.append(
            {
                "id": log_id,
                "action": action,
                "entity": entity,
                "entity_id": entity_id,
                "detail": detail,
                "created_at": self._store.now(),
            }
        )
        return log_id

    def cleanup_old_logs(self, retention_days: int) -> int:
        """Delete logs older than retention_days and return removed row count."""
        cutoff = self._store.now() - timedelta(days=retention_days)
        kept = [row for row in self._store.audit_logs if row["created_at"] >= cutoff]
        removed = len(self._store.audit_logs) - len(kept)
        self._store.audit_logs[:] = kept
        return removed

    def list_logs(
        self,
        limit: int = 200,
        offset: int = 0,
        action: str | None = None,
        entity: str | None = None,
        keyword: str | None = None,
        date_from: str | None = None,
        date_to: str | None = None,
    ) -> list[dict[str, Any]]:
        """List audit logs newest first with optional filters."""
        rows = self._store.audit_logs
        if action:
            rows = [row for row in rows if row["action"] == action]
        if entity:
            rows = [row for row in rows if row["entity"] == entity]
        if keyword:
            needle = keyword.strip().casefold()
            rows = [row for row in rows if needle in (row["detail"] or "").casefold()]
        if date_from:
            start = date.fromisoformat(date_from.strip())
            rows = [row for row in rows if row["created_at"].date() >= start]
        if date_to:
            end = date.fromisoformat(date_to.strip())
            rows = [row for row in rows if row["created_at"].date() <= end]

        ordered = sorted(rows, key=lambda row: row["id"], reverse=True)
        return [dict(row) for row in ordered[offset : offset + limit]]

    def purge_all_logs(self) -> None:
        """Delete all audit logs."""
        self._store.audit_logs.clear()


def period_bounds(period: str, today: date) -> tuple[str | None, str | None]:
    """Return (date_from, date_to) for a history period: all, today, 7d or 30d."""
    if period == "today":
        day = today.isoformat()
        return day, day
    if period == "7d":
        return (today - timedelta(days=6)).isoformat(), today.isoformat()
    if period == "30d":
        return (today - timedelta(days=29)).isoformat(), today.isoformat()
    if period == "all":
        return None, None
    raise ValueError(f"Unknown period: {period}")
