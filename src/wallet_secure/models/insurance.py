"""Insurance domain models."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum


class InsuranceCategory(str, Enum):
    """Kinds of insured goods."""

    VEHICLE = "vehicle"
    HEALTH = "health"
    HOME = "home"
    ELECTRONICS = "electronics"

    @property
    def label(self) -> str:
        return CATEGORY_LABELS[self]


CATEGORY_LABELS = {
    InsuranceCategory.VEHICLE: "Coche",
    InsuranceCategory.HEALTH: "Salud",
    InsuranceCategory.HOME: "Casa",
    InsuranceCategory.ELECTRONICS: "Electrónica",
}


@dataclass
class InsuranceCreate:
    """Input model for insurance data."""

    title: str
    company: str
    policy_number: str
    category: InsuranceCategory
    expiry_date: date
    phone_number: str = ""
    image_url: str = ""


@dataclass
class InsuranceView:
    """Output model for insurance retrieval."""

    id: str
    title: str
    company: str
    policy_number: str
    category: InsuranceCategory
    expiry_date: date
    phone_number: str
    image_url: str
