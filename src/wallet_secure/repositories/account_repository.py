"""Account repository."""

from __future__ import annotations

from wallet_secure.models.account import Account
from wallet_secure.repositories.memory_store import MemoryStore


class AccountRepository:
    """Handles registered accounts. Emails are unique and case-sensitive."""

    def __init__(self, store: MemoryStore):
        self._store = store

    def create_account(self, account: Account) -> None:
        """Append an account, refusing duplicate emails."""
        if self.exists_email(account.email):
            raise ValueError("Ya existe una cuenta con ese correo.")
        self._store.accounts.append(account)

    def get_by_email(self, email: str) -> Account | None:
        for account in self._store.accounts:
            if account.email == email:
                return account
        return None

    def exists_email(self, email: str) -> bool:
        return self.get_by_email(email) is not None

    def count_accounts(self) -> int:
        return len(self._store.accounts)
