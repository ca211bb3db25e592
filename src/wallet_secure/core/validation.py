"""Input validation rules for the auth and insurance forms."""

from __future__ import annotations

import re
from datetime import date, datetime

from wallet_secure.models.insurance import InsuranceCategory, InsuranceCreate

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
PHONE_PATTERN = re.compile(r"^\+?[\d\s\-()]+$")
NON_DIGIT_PATTERN = re.compile(r"[^\d]")


def validate_required_text(value: str, field_name: str) -> str:
    """Validate non-empty text fields."""
    normalized = value.strip()
    if not normalized:
        raise ValueError(f"El campo {field_name} es obligatorio.")
    return normalized


def validate_email(email: str) -> str:
    """Validate a basic local@domain.tld email shape."""
    normalized = validate_required_text(email, "correo electrónico")
    if not EMAIL_PATTERN.match(normalized):
        raise ValueError("El correo electrónico no es válido.")
    return normalized


def validate_category(category: InsuranceCategory | str) -> InsuranceCategory:
    """Accept a category enum member or its string value."""
    try:
        return InsuranceCategory(category)
    except ValueError as error:
        raise ValueError("Selecciona una categoría válida.") from error


def parse_expiry_date(value: str | date) -> date:
    """Parse a YYYY-MM-DD expiry date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    normalized = value.strip()
    if not normalized:
        raise ValueError("Selecciona una fecha de vencimiento.")
    try:
        return datetime.strptime(normalized, "%Y-%m-%d").date()
    except ValueError as error:
        raise ValueError("La fecha debe tener el formato AAAA-MM-DD.") from error


def validate_optional_phone(phone: str) -> str:
    """Validate an optional assistance phone like +34 900 100 200."""
    normalized = phone.strip()
    if not normalized:
        return ""
    if not PHONE_PATTERN.match(normalized):
        raise ValueError("El teléfono solo puede contener números, espacios, +, - y paréntesis.")
    digits = NON_DIGIT_PATTERN.sub("", normalized)
    if len(digits) < 6 or len(digits) > 20:
        raise ValueError("El teléfono debe tener entre 6 y 20 dígitos.")
    return normalized


def build_insurance_payload(
    title: str,
    company: str,
    policy_number: str,
    category: InsuranceCategory | str,
    expiry_date: str | date,
    phone_number: str = "",
    image_url: str = "",
) -> InsuranceCreate:
    """Validate raw form input and return an insurance payload."""
    return InsuranceCreate(
        title=validate_required_text(title, "título"),
        company=validate_required_text(company, "compañía"),
        policy_number=policy_number.strip(),
        category=validate_category(category),
        expiry_date=parse_expiry_date(expiry_date),
        phone_number=validate_optional_phone(phone_number),
        image_url=image_url.strip(),
    )
