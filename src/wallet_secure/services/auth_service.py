"""Authentication service holding the current session."""

from __future__ import annotations

import logging

from wallet_secure.core.crypto import PasswordHasher, mask_email
from wallet_secure.models.account import Account
from wallet_secure.repositories.account_repository import AccountRepository
from wallet_secure.repositories.audit_repository import AuditRepository
from wallet_secure.repositories.memory_store import MemoryStore

logger = logging.getLogger(__name__)


class AuthService:
    """Coordinates login, registration, and logout.

    Failures are reported as False without further detail. The session lives
    on the shared store so every consumer sees the same account.
    """

    def __init__(
        self,
        store: MemoryStore,
        account_repo: AccountRepository,
        audit_repo: AuditRepository,
        hasher: PasswordHasher,
    ):
        self._store = store
        self._account_repo = account_repo
        self._audit_repo = audit_repo
        self._hasher = hasher

    @property
    def current_account(self) -> Account | None:
        return self._store.session

    @property
    def is_authenticated(self) -> bool:
        return self._store.session is not None

    def login(self, email: str, password: str) -> bool:
        """Start a session when email and password match an account exactly."""
        account = self._account_repo.get_by_email(email)
        if account is None or not self._hasher.verify_password(password, account.password_hash):
            self._audit_repo.add_log("LOGIN_FAILED", "account", mask_email(email), "login rejected")
            logger.info("Login rejected for %s", mask_email(email))
            return False

        self._store.session = account
        self._audit_repo.add_log("LOGIN", "account", mask_email(email), "login succeeded")
        logger.info("Login succeeded for %s", mask_email(email))
        return True

    def register(self, email: str, password: str, name: str) -> bool:
        """Create an account and log it in, unless the email is taken."""
        if self._account_repo.exists_email(email):
            self._audit_repo.add_log(
                "REGISTER_FAILED", "account", mask_email(email), "email already registered"
            )
            logger.info("Registration rejected, email taken: %s", mask_email(email))
            return False

        account = Account(
            email=email,
            password_hash=self._hasher.hash_password(password),
            name=name,
        )
        self._account_repo.create_account(account)
        self._store.session = account
        self._audit_repo.add_log("REGISTER", "account", mask_email(email), "account registered")
        logger.info("Account registered: %s", mask_email(email))
        return True

    def logout(self) -> None:
        """Clear the session. Calling it while logged out does nothing."""
        account = self._store.session
        if account is None:
            return
        self._store.session = None
        self._audit_repo.add_log("LOGOUT", "account", mask_email(account.email), "logout")
        logger.info("Logout: %s", mask_email(account.email))
