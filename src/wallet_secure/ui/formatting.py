"""Display helpers shared by the screens."""

from __future__ import annotations

import html
from datetime import date

from wallet_secure.core.expiry import is_expired

MONTHS_SHORT = ["ene", "feb", "mar", "abr", "may", "jun", "jul", "ago", "sept", "oct", "nov", "dic"]
MONTHS_LONG = [
    "enero",
    "febrero",
    "marzo",
    "abril",
    "mayo",
    "junio",
    "julio",
    "agosto",
    "septiembre",
    "octubre",
    "noviembre",
    "diciembre",
]


def format_date(value: date, long: bool = False) -> str:
    """Format like 15 dic 2025 or 15 de diciembre de 2025."""
    if long:
        return f"{value.day:02d} de {MONTHS_LONG[value.month - 1]} de {value.year}"
    return f"{value.day:02d} {MONTHS_SHORT[value.month - 1]} {value.year}"


def status_text(expiry_date: date) -> str:
    return "Vencido" if is_expired(expiry_date) else "Activo"


def heading_html(text: str, level: int = 2) -> str:
    """Wrap user text in a rich-text heading with markup escaped."""
    return f"<h{level}>{html.escape(text)}</h{level}>"


def audit_summary(detail: str, limit: int = 80) -> str:
    """Shorten an audit detail to one table cell line."""
    line = " ".join(detail.split())
    if len(line) <= limit:
        return line
    return line[: limit - 3] + "..."
