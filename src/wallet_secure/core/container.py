"""Application dependency container."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from wallet_secure.core.config import AppConfig, load_config
from wallet_secure.core.crypto import PasswordHasher
from wallet_secure.repositories.account_repository import AccountRepository
from wallet_secure.repositories.audit_repository import AuditRepository
from wallet_secure.repositories.insurance_repository import InsuranceRepository
from wallet_secure.repositories.memory_store import MemoryStore
from wallet_secure.repositories.seed import seed_demo_data
from wallet_secure.services.auth_service import AuthService
from wallet_secure.services.insurance_service import InsuranceService

logger = logging.getLogger(__name__)


@dataclass
class ServiceContainer:
    """Wires the store, repositories, and services."""

    config: AppConfig
    store: MemoryStore
    auth_service: AuthService
    insurance_service: InsuranceService
    audit_repo: AuditRepository

    def prune_audit_logs(self) -> int:
        """Drop audit logs older than the configured retention."""
        removed = self.audit_repo.cleanup_old_logs(self.config.logging.retention_days)
        if removed:
            logger.info("Cleaned old audit logs: %d", removed)
        return removed

    def close(self) -> None:
        """Drop all in-memory state at shutdown."""
        self.store.clear()


def build_container(
    config: AppConfig | None = None,
    store: MemoryStore | None = None,
    hasher: PasswordHasher | None = None,
) -> ServiceContainer:
    """Build dependencies and load demo data."""
    config = config or load_config()
    store = store or MemoryStore()
    hasher = hasher or PasswordHasher()

    if config.store.seed_demo_data:
        seed_demo_data(store, hasher)

    audit_repo = AuditRepository(store)
    account_repo = AccountRepository(store)
    insurance_repo = InsuranceRepository(store)

    return ServiceContainer(
        config=config,
        store=store,
        auth_service=AuthService(store, account_repo, audit_repo, hasher),
        insurance_service=InsuranceService(insurance_repo, audit_repo),
        audit_repo=audit_repo,
    )
