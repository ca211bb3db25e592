"""Tests for display helpers used by the screens."""

from __future__ import annotations

from datetime import date

from wallet_secure.ui.formatting import audit_summary, format_date, heading_html, status_text


def test_heading_html_escapes_markup() -> None:
    assert heading_html("Seguro <b>Hogar</b> & Co") == (
        "<h2>Seguro &lt;b&gt;Hogar&lt;/b&gt; &amp; Co</h2>"
    )
    assert heading_html("Moto", level=3) == "<h3>Moto</h3>"


def test_format_date_short_and_long() -> None:
    assert format_date(date(2025, 12, 15)) == "15 dic 2025"
    assert format_date(date(2025, 3, 5), long=True) == "05 de marzo de 2025"


def test_status_text() -> None:
    assert status_text(date(2000, 1, 1)) == "Vencido"
    assert status_text(date(9999, 12, 31)) == "Activo"


def test_audit_summary_collapses_and_truncates() -> None:
    assert audit_summary('{"title":\n  "Moto"}') == '{"title": "Moto"}'

    summary = audit_summary("x" * 100, limit=20)

    assert summary == "x" * 17 + "..."
    assert len(summary) == 20
