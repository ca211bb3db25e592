"""Insurance service."""

from __future__ import annotations

import json
import logging

from wallet_secure.core.images import is_data_uri
from wallet_secure.models.insurance import InsuranceCreate, InsuranceView
from wallet_secure.repositories.audit_repository import AuditRepository
from wallet_secure.repositories.insurance_repository import InsuranceRepository

logger = logging.getLogger(__name__)


class InsuranceService:
    """Coordinates insurance use cases.

    Field values are taken as given; form checks belong to the caller.
    Update and delete report a missing id by returning False and leave the
    store untouched.
    """

    def __init__(self, insurance_repo: InsuranceRepository, audit_repo: AuditRepository):
        self._insurance_repo = insurance_repo
        self._audit_repo = audit_repo

    @staticmethod
    def _to_view(row: dict) -> InsuranceView:
        return InsuranceView(
            id=row["id"],
            title=row["title"],
            company=row["company"],
            policy_number=row["policy_number"],
            category=row["category"],
            expiry_date=row["expiry_date"],
            phone_number=row["phone_number"],
            image_url=row["image_url"],
        )

    def create_insurance(self, payload: InsuranceCreate) -> str:
        """Store a new insurance, audit it, and return the assigned id."""
        insurance_id = self._insurance_repo.create_insurance(payload)
        after = self._snapshot(insurance_id)
        self._audit_repo.add_log(
            "CREATE",
            "insurance",
            insurance_id,
            json.dumps({"event": "insurance created", "after": after}, ensure_ascii=False),
        )
        logger.info("Insurance created id=%s", insurance_id)
        return insurance_id

    def get_insurance(self, insurance_id: str) -> InsuranceView | None:
        """Fetch one insurance by id."""
        row = self._insurance_repo.get_insurance(insurance_id)
        if not row:
            return None
        self._audit_repo.add_log("READ", "insurance", insurance_id, "insurance read")
        return self._to_view(row)

    def list_insurances(self) -> list[InsuranceView]:
        """List every insurance in insertion order."""
        return [self._to_view(row) for row in self._insurance_repo.list_insurances()]

    def update_insurance(self, insurance_id: str, payload: InsuranceCreate) -> bool:
        """Replace one insurance's fields, keeping its id."""
        before = self._snapshot(insurance_id)
        updated = self._insurance_repo.update_insurance(insurance_id, payload)
        if updated == 0:
            logger.warning("Update skipped, insurance not found id=%s", insurance_id)
            return False
        after = self._snapshot(insurance_id)
        self._audit_repo.add_log(
            "UPDATE",
            "insurance",
            insurance_id,
            json.dumps(
                {
                    "event": "insurance updated",
                    "changes": self._diff(before, after),
                },
                ensure_ascii=False,
            ),
        )
        logger.info("Insurance updated id=%s", insurance_id)
        return True

    def delete_insurance(self, insurance_id: str) -> bool:
        """Remove one insurance."""
        before = self._snapshot(insurance_id)
        deleted = self._insurance_repo.delete_insurance(insurance_id)
        if deleted == 0:
            logger.warning("Delete skipped, insurance not found id=%s", insurance_id)
            return False
        self._audit_repo.add_log(
            "DELETE",
            "insurance",
            insurance_id,
            json.dumps({"event": "insurance deleted", "before": before}, ensure_ascii=False),
        )
        logger.info("Insurance deleted id=%s", insurance_id)
        return True

    def _snapshot(self, insurance_id: str) -> dict[str, str]:
        """Build a snapshot for insurance audit logs."""
        row = self._insurance_repo.get_insurance(insurance_id)
        if not row:
            return {}
        return {
            "title": row["title"] or "",
            "company": row["company"] or "",
            "policy_number": row["policy_number"] or "",
            "category": row["category"].value,
            "expiry_date": row["expiry_date"].isoformat(),
            "phone_number": row["phone_number"] or "",
            "image_url": "<embedded>" if is_data_uri(row["image_url"]) else row["image_url"],
        }

    @staticmethod
    def _diff(before: dict[str, str], after: dict[str, str]) -> dict[str, dict[str, str]]:
        """Return changed fields for audit logs."""
        changes: dict[str, dict[str, str]] = {}
        for key in sorted(set(before) | set(after)):
            old = before.get(key, "")
            new = after.get(key, "")
            if old != new:
                changes[key] = {"before": old, "after": new}
        return changes
