"""Process-wide in-memory state holder."""

from __future__ import annotations

import time
from datetime import datetime
from typing import Any, Callable

from wallet_secure.models.account import Account


class MemoryStore:
    """Hold accounts, insurance rows, audit logs, and the session for one process.

    Built once by the container and handed to every repository; nothing is
    written to disk and everything is lost when the process exits.
    """

    def __init__(
        self,
        clock: Callable[[], float] = time.time,
        now: Callable[[], datetime] = datetime.now,
    ):
        self._clock = clock
        self._now = now
        self.accounts: list[Account] = []
        self.insurances: list[dict[str, Any]] = []
        self.audit_logs: list[dict[str, Any]] = []
        self.session: Account | None = None
        self._last_insurance_id = 0
        self._last_audit_id = 0

    def next_insurance_id(self) -> str:
        """Return a fresh epoch-millisecond id, strictly increasing and unused."""
        candidate = max(int(self._clock() * 1000), self._last_insurance_id + 1)
        taken = {row["id"] for row in self.insurances}
        while str(candidate) in taken:
            candidate += 1
        self._last_insurance_id = candidate
        return str(candidate)

    def next_audit_id(self) -> int:
        self._last_audit_id += 1
        return self._last_audit_id

    def now(self) -> datetime:
        return self._now()

    def clear(self) -> None:
        """Drop every record and the session."""
        self.accounts.clear()
        self.insurances.clear()
        self.audit_logs.clear()
        self.session = None
