"""Insurance repository."""

from __future__ import annotations

from typing import Any

from wallet_secure.models.insurance import InsuranceCategory, InsuranceCreate
from wallet_secure.repositories.memory_store import MemoryStore


class InsuranceRepository:
    """Handles insurance rows in the memory store."""

    def __init__(self, store: MemoryStore):
        self._store = store

    @staticmethod
    def _fields(payload: InsuranceCreate) -> dict[str, Any]:
        return {
            "title": payload.title,
            "company": payload.company,
            "policy_number": payload.policy_number,
            "category": InsuranceCategory(payload.category),
            "expiry_date": payload.expiry_date,
            "phone_number": payload.phone_number or "",
            "image_url": payload.image_url or "",
        }

    def _find_index(self, insurance_id: str) -> int | None:
        for index, row in enumerate(self._store.insurances):
            if row["id"] == insurance_id:
                return index
        return None

    def create_insurance(self, payload: InsuranceCreate, insurance_id: str | None = None) -> str:
        """Append insurance and return its id. A fresh id is issued unless one is given."""
        fields = self._fields(payload)
        if insurance_id is None:
            insurance_id = self._store.next_insurance_id()
        elif self._find_index(insurance_id) is not None:
            raise ValueError(f"Insurance id already exists: {insurance_id}")

        self._store.insurances.append({"id": insurance_id, **fields})
        return insurance_id

    def get_insurance(self, insurance_id: str) -> dict[str, Any] | None:
        """Fetch one insurance row."""
        index = self._find_index(insurance_id)
        if index is None:
            return None
        return dict(self._store.insurances[index])

    def list_insurances(self) -> list[dict[str, Any]]:
        """List insurance rows in insertion order."""
        return [dict(row) for row in self._store.insurances]

    def count_insurances(self) -> int:
        return len(self._store.insurances)

    def update_insurance(self, insurance_id: str, payload: InsuranceCreate) -> int:
        """Replace insurance fields in place and return affected row count."""
        index = self._find_index(insurance_id)
        if index is None:
            return 0
        self._store.insurances[index] = {"id": insurance_id, **self._fields(payload)}
        return 1

    def delete_insurance(self, insurance_id: str) -> int:
        """Remove insurance and return affected row count."""
        index = self._find_index(insurance_id)
        if index is None:
            return 0
        del self._store.insurances[index]
        return 1
