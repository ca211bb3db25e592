"""Demo data loaded into a fresh store."""

from __future__ import annotations

import logging
from datetime import date

from wallet_secure.core.crypto import PasswordHasher
from wallet_secure.models.account import Account
from wallet_secure.models.insurance import InsuranceCategory, InsuranceCreate
from wallet_secure.repositories.account_repository import AccountRepository
from wallet_secure.repositories.insurance_repository import InsuranceRepository
from wallet_secure.repositories.memory_store import MemoryStore

logger = logging.getLogger(__name__)

DEMO_ACCOUNTS = [
    ("demo@walletsecure.com", "demo123", "Usuario Demo"),
]

DEMO_INSURANCES = [
    (
        "1",
        InsuranceCreate(
            title="Seguro Coche",
            company="Mapfre",
            policy_number="POL-2024-001",
            category=InsuranceCategory.VEHICLE,
            expiry_date=date(2025, 12, 15),
            phone_number="+34 900 100 200",
            image_url="https://images.unsplash.com/photo-1449965408869-eaa3f722e40d?w=400",
        ),
    ),
    (
        "2",
        InsuranceCreate(
            title="Seguro Salud",
            company="Sanitas",
            policy_number="POL-2024-002",
            category=InsuranceCategory.HEALTH,
            expiry_date=date(2025, 6, 20),
            phone_number="+34 902 102 400",
            image_url="https://images.unsplash.com/photo-1505751172876-fa1923c5c528?w=400",
        ),
    ),
    (
        "3",
        InsuranceCreate(
            title="Seguro Hogar",
            company="AXA",
            policy_number="POL-2024-003",
            category=InsuranceCategory.HOME,
            expiry_date=date(2025, 3, 10),
            phone_number="+34 900 123 123",
            image_url="https://images.unsplash.com/photo-1560518883-ce09059eeffa?w=400",
        ),
    ),
    (
        "4",
        InsuranceCreate(
            title="Seguro Móvil",
            company="Apple Care",
            policy_number="POL-2024-004",
            category=InsuranceCategory.ELECTRONICS,
            expiry_date=date(2024, 11, 1),
            phone_number="+34 900 150 503",
            image_url="https://images.unsplash.com/photo-1511707171634-5f897ff02aa9?w=400",
        ),
    ),
]


def seed_demo_data(store: MemoryStore, hasher: PasswordHasher) -> None:
    """Insert the demo account and demo policies if the store is empty."""
    account_repo = AccountRepository(store)
    insurance_repo = InsuranceRepository(store)

    if account_repo.count_accounts() == 0:
        for email, password, name in DEMO_ACCOUNTS:
            account_repo.create_account(
                Account(email=email, password_hash=hasher.hash_password(password), name=name)
            )

    if insurance_repo.count_insurances() == 0:
        for insurance_id, payload in DEMO_INSURANCES:
            insurance_repo.create_insurance(payload, insurance_id=insurance_id)

    logger.info(
        "Demo data ready: %d accounts, %d insurances",
        account_repo.count_accounts(),
        insurance_repo.count_insurances(),
    )
