"""
data_model/translated.py — rekordy pliku hadiths_translated.json.

Rekord przetłumaczony to rekord z hadiths.json rozszerzony o pola
title_fa i content_fa. W trybie bez tłumaczenia (pass-through) oryginalny
tekst trafia do pól *_fa, a title/content są puste.
"""

from __future__ import annotations

from typing import Any

Record = dict[str, Any]


def translated_record(hadith: Record, title_fa: str, content_fa: str) -> Record:
    return {
        **hadith,
        "title_fa":   title_fa.strip(),
        "content_fa": content_fa.strip(),
    }


def passthrough_record(hadith: Record) -> Record:
    return {
        **hadith,
        "title":      "",
        "content":    "",
        "title_fa":   hadith.get("title", ""),
        "content_fa": hadith.get("content", ""),
    }
