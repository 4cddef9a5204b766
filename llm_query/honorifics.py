"""
llm_query/honorifics.py — rozwijanie skrótów zwrotów grzecznościowych.

Ostatni, deterministyczny krok po tłumaczeniu: zamiana dosłownych
podciągów w całym pliku hadiths_translated.json.
"""

from __future__ import annotations

from pathlib import Path

HONORIFICS: tuple[tuple[str, str], ...] = (
    ("(ص)", "(صلوات الله علیه)"),
    ("(ع)", "(علیه السلام)"),
)


def expand_honorifics(text: str) -> tuple[str, int]:
    """Zwraca (tekst po zamianie, liczba zamian)."""
    count = 0
    for short, full in HONORIFICS:
        count += text.count(short)
        text = text.replace(short, full)
    return text, count


def fix_translated_file(path: Path) -> int:
    """Nadpisuje plik z rozwiniętymi skrótami. Zwraca liczbę zamian."""
    path = Path(path)
    fixed, count = expand_honorifics(path.read_text(encoding="utf-8"))
    path.write_text(fixed, encoding="utf-8")
    return count
