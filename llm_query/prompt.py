"""
llm_query/prompt.py — budowanie promptu tłumaczenia arabski → perski.

Funkcje publiczne:
  build_translation_prompt(text, is_title) -> str
"""

from __future__ import annotations

_PREFIX = "Translate the following Arabic text to Farsi:"

# Podpowiedzi słownikowe tylko dla tytułów (nagłówków rozdziałów)
TITLE_GLOSSARY: tuple[tuple[str, str], ...] = (
    ("باب", "موضوع"),
    ("کراث", "تره"),
    ("جبن", "پنیر"),
)
_TITLE_NOTES = (
    'The word "مفضل" sometimes relates to a person.',
)


def _title_helpers() -> str:
    lines = ["### Translation Helpers"]
    lines += [f' - The word "{src}" is "{dst}".' for src, dst in TITLE_GLOSSARY]
    lines += [f" - {note}" for note in _TITLE_NOTES]
    return "\n".join(lines)


def build_translation_prompt(text: str, is_title: bool = False) -> str:
    header = f"{_PREFIX}\n{_title_helpers()}" if is_title else _PREFIX
    return f"{header}\n---\n{text}"
