"""Integration-like tests for the insurance service over a memory store."""

from __future__ import annotations

import json
from dataclasses import asdict
from datetime import date, datetime

import pytest

from wallet_secure.core.config import AppConfig, LoggingConfig, StoreConfig
from wallet_secure.core.container import build_container
from wallet_secure.core.crypto import PasswordHasher
from wallet_secure.core.expiry import is_expired
from wallet_secure.models.insurance import InsuranceCategory, InsuranceCreate
from wallet_secure.repositories.audit_repository import AUDIT_ACTIONS
from wallet_secure.repositories.memory_store import MemoryStore


def build_services(seed_demo_data: bool = False, store: MemoryStore | None = None):
    config = AppConfig(store=StoreConfig(seed_demo_data=seed_demo_data))
    return build_container(config, store=store or MemoryStore(), hasher=PasswordHasher(n=2**4))


def sample_payload(**overrides) -> InsuranceCreate:
    fields = {
        "title": "Seguro Bici",
        "company": "Mapfre",
        "policy_number": "POL-2026-010",
        "category": InsuranceCategory.VEHICLE,
        "expiry_date": date(2027, 5, 1),
        "phone_number": "+34 900 100 200",
        "image_url": "",
    }
    fields.update(overrides)
    return InsuranceCreate(**fields)


def test_create_appends_record_with_fresh_id() -> None:
    container = build_services(seed_demo_data=True)
    service = container.insurance_service
    existing_ids = {insurance.id for insurance in service.list_insurances()}

    payload = sample_payload()
    insurance_id = service.create_insurance(payload)

    listed = service.list_insurances()
    matches = [insurance for insurance in listed if insurance.id == insurance_id]
    assert insurance_id not in existing_ids
    assert len(matches) == 1
    assert len(listed) == len(existing_ids) + 1
    assert listed[-1].id == insurance_id

    fields = asdict(matches[0])
    fields.pop("id")
    assert fields == asdict(payload)


def test_create_ids_stay_unique_within_same_millisecond() -> None:
    container = build_services(store=MemoryStore(clock=lambda: 1_700_000_000.0))
    service = container.insurance_service

    first = service.create_insurance(sample_payload())
    second = service.create_insurance(sample_payload(title="Otro"))

    assert first == "1700000000000"
    assert second == "1700000000001"


def test_create_accepts_empty_strings() -> None:
    container = build_services()
    service = container.insurance_service

    insurance_id = service.create_insurance(
        sample_payload(title="", company="", policy_number="", phone_number="")
    )

    insurance = service.get_insurance(insurance_id)
    assert insurance is not None
    assert insurance.title == ""
    assert insurance.company == ""


def test_create_accepts_category_value_and_rejects_unknown() -> None:
    container = build_services()
    service = container.insurance_service

    insurance_id = service.create_insurance(sample_payload(category="health"))
    assert service.get_insurance(insurance_id).category is InsuranceCategory.HEALTH

    with pytest.raises(ValueError):
        service.create_insurance(sample_payload(category="coche"))
    assert len(service.list_insurances()) == 1


def test_update_replaces_fields_and_keeps_id_and_position() -> None:
    container = build_services(seed_demo_data=True)
    service = container.insurance_service

    updated = service.update_insurance(
        "2", sample_payload(title="Seguro Dental", category=InsuranceCategory.HEALTH)
    )

    assert updated is True
    listed = service.list_insurances()
    assert [insurance.id for insurance in listed] == ["1", "2", "3", "4"]
    assert listed[1].title == "Seguro Dental"
    assert listed[1].company == "Mapfre"


def test_update_missing_id_leaves_store_unchanged() -> None:
    container = build_services(seed_demo_data=True)
    service = container.insurance_service
    before = service.list_insurances()

    updated = service.update_insurance("missing", sample_payload())

    assert updated is False
    assert service.list_insurances() == before


def test_delete_removes_record_and_missing_id_is_noop() -> None:
    container = build_services(seed_demo_data=True)
    service = container.insurance_service

    assert service.delete_insurance("1") is True
    assert all(insurance.id != "1" for insurance in service.list_insurances())

    before = service.list_insurances()
    assert service.delete_insurance("1") is False
    assert service.list_insurances() == before


def test_get_insurance_missing_returns_none() -> None:
    container = build_services()
    assert container.insurance_service.get_insurance("404") is None


def test_list_returns_copies() -> None:
    container = build_services(seed_demo_data=True)
    service = container.insurance_service

    listed = service.list_insurances()
    listed[0].title = "changed"

    assert service.list_insurances()[0].title == "Seguro Coche"


def test_audit_logs_track_changes() -> None:
    container = build_services()
    service = container.insurance_service

    insurance_id = service.create_insurance(sample_payload(image_url="data:image/png;base64,AAAA"))
    service.update_insurance(insurance_id, sample_payload(company="AXA"))
    service.delete_insurance(insurance_id)

    logs = container.audit_repo.list_logs(entity="insurance")
    assert [log["action"] for log in logs] == ["DELETE", "UPDATE", "CREATE"]

    created = json.loads(logs[2]["detail"])
    assert created["after"]["image_url"] == "<embedded>"
    changes = json.loads(logs[1]["detail"])["changes"]
    assert changes["company"] == {"before": "Mapfre", "after": "AXA"}
    assert changes["image_url"] == {"before": "<embedded>", "after": ""}


def test_demo_scenario_login_list_delete() -> None:
    container = build_services(seed_demo_data=True)
    auth = container.auth_service
    service = container.insurance_service

    assert auth.login("demo@walletsecure.com", "demo123") is True
    assert auth.current_account.name == "Usuario Demo"

    listed = service.list_insurances()
    assert [insurance.id for insurance in listed] == ["1", "2", "3", "4"]
    assert [insurance.title for insurance in listed] == [
        "Seguro Coche",
        "Seguro Salud",
        "Seguro Hogar",
        "Seguro Móvil",
    ]

    service.delete_insurance("3")

    listed = service.list_insurances()
    assert len(listed) == 3
    assert all(insurance.id != "3" for insurance in listed)


def test_demo_policies_expiry_at_reference_time() -> None:
    container = build_services(seed_demo_data=True)
    reference = datetime(2025, 1, 1)

    statuses = {
        insurance.id: is_expired(insurance.expiry_date, reference)
        for insurance in container.insurance_service.list_insurances()
    }

    assert statuses == {"1": False, "2": False, "3": False, "4": True}


def test_seeding_can_be_disabled() -> None:
    container = build_services(seed_demo_data=False)

    assert container.insurance_service.list_insurances() == []
    assert container.auth_service.login("demo@walletsecure.com", "demo123") is False


def test_close_drops_state() -> None:
    container = build_services(seed_demo_data=True)
    container.auth_service.login("demo@walletsecure.com", "demo123")

    container.close()

    assert container.store.insurances == []
    assert container.store.accounts == []
    assert container.auth_service.current_account is None


def test_prune_audit_logs_applies_configured_retention() -> None:
    clock_value = {"now": datetime(2026, 1, 1, 9, 0)}
    store = MemoryStore(now=lambda: clock_value["now"])
    config = AppConfig(
        store=StoreConfig(seed_demo_data=False),
        logging=LoggingConfig(retention_days=30),
    )
    container = build_container(config, store=store, hasher=PasswordHasher(n=2**4))
    container.insurance_service.create_insurance(sample_payload())
    clock_value["now"] = datetime(2026, 3, 1, 9, 0)
    container.insurance_service.create_insurance(sample_payload(title="Seguro Hogar"))

    assert container.prune_audit_logs() == 1
    assert container.prune_audit_logs() == 0
    assert [log["action"] for log in container.audit_repo.list_logs()] == ["CREATE"]


def test_logged_actions_are_offered_as_history_filters() -> None:
    container = build_services(seed_demo_data=True)
    container.auth_service.login("demo@walletsecure.com", "wrong")
    container.auth_service.login("demo@walletsecure.com", "demo123")
    insurance_id = container.insurance_service.create_insurance(sample_payload())
    container.insurance_service.get_insurance(insurance_id)
    container.insurance_service.update_insurance(insurance_id, sample_payload(title="Otro"))
    container.insurance_service.delete_insurance(insurance_id)
    container.auth_service.logout()
    container.auth_service.register("demo@walletsecure.com", "secreto", "Ana")
    container.auth_service.register("ana@example.com", "secreto", "Ana")

    logged = {log["action"] for log in container.audit_repo.list_logs()}

    assert logged == set(AUDIT_ACTIONS)
