"""
llm_query/translate.py — tłumaczenie hadisów z zapisem po każdym rekordzie.

Plik wynikowy hadiths_translated.json jest nadpisywany w całości po każdym
przetłumaczonym hadisie, więc przerwany przebieg można wznowić: hadisy,
których id już jest w pliku, są pomijane.

Publiczne API:
  Translator(ring, model, generate, sleep)
  load_translated(path)                             -> list[dict]
  save_translated(records, path)                    -> None
  translate_hadiths(hadiths, out_path, translator)  -> TranslationSummary
  write_passthrough(hadiths, out_path)              -> int
"""

from __future__ import annotations

import json
import time
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.markup import escape

from data_model.translated import passthrough_record, translated_record
from llm_query.gemini import (
    DEFAULT_MODEL,
    KeyRing,
    generate_json,
    is_retryable,
    parse_translation,
)
from llm_query.prompt import build_translation_prompt

TRANSLATED_FILE = "hadiths_translated.json"

console = Console(stderr=True)

# (api_key, model, prompt) -> surowy JSON odpowiedzi
GenerateFn = Callable[[str, str, str], str]

class Translator:
    """
    Tłumacz tekstów z cache tytułów.

    Nieudane tłumaczenie (wyczerpany limit prób) zwraca tekst oryginalny
    i nie trafia do cache.
    """

    def __init__(
        self,
        ring: KeyRing,
        model: str = DEFAULT_MODEL,
        generate: GenerateFn = generate_json,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.ring = ring
        self.model = model
        self.title_cache: dict[str, str] = {}
        self.requests = 0
        self._generate = generate
        self._sleep = sleep

    def translate(self, text: str, is_title: bool = False) -> str:
        if is_title and text in self.title_cache:
            return self.title_cache[text]

        prompt = build_translation_prompt(text, is_title)
        ring = self.ring

        for _ in range(ring.max_attempts):
            self.requests += 1
            try:
                translated = parse_translation(self._generate(ring.current, self.model, prompt))
            except Exception as e:
                # błędy API, transportu httpx i zepsute odpowiedzi: rotacja klucza
                console.print(f"[red]Błąd dla klucza #{ring.index}:[/red] {escape(str(e))}")
                delay = ring.record_failure(is_retryable(e))
                if ring.index == 0:
                    console.print("[dim]Ukończono pełny cykl kluczy API.[/dim]")
                console.print(f"[dim]Przełączam na klucz #{ring.index}[/dim]")
                if delay:
                    console.print(
                        f"[yellow]Kolejne błędy po pełnym cyklu — czekam {delay:.0f}s…[/yellow]"
                    )
                    self._sleep(delay)
                continue

            ring.record_success()
            if is_title:
                self.title_cache[text] = translated
            return translated

        console.print(f"[red]Wyczerpano {ring.max_attempts} prób — zostawiam oryginał:[/red] {escape(text[:80])}")
        return text


# ---------------------------------------------------------------------------
# Plik wynikowy
# ---------------------------------------------------------------------------

def load_translated(path: Path) -> list[dict[str, Any]]:
    """Brak pliku → pusta lista. Inne błędy odczytu/parsowania są propagowane."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except FileNotFoundError:
        return []
    return json.loads(text)


def save_translated(records: list[dict[str, Any]], path: Path) -> None:
    Path(path).write_text(json.dumps(records, ensure_ascii=False, indent=2), encoding="utf-8")


@dataclass(slots=True)
class TranslationSummary:
    loaded: int = 0
    translated: int = 0
    skipped_existing: int = 0
    skipped_empty: int = 0


def translate_hadiths(
    hadiths: list[dict[str, Any]],
    out_path: Path,
    translator: Translator,
) -> TranslationSummary:
    """
    Tłumaczy brakujące hadisy; zapis pliku po każdym rekordzie.

    Hadisy z pustą treścią są pomijane (i nie trafiają do pliku).
    """
    records = load_translated(out_path)
    summary = TranslationSummary(loaded=len(records))
    if records:
        console.print(f"Wczytano {len(records)} istniejących tłumaczeń.")
    else:
        console.print("Brak istniejących tłumaczeń — start od zera.")

    done_ids = {r.get("id") for r in records}

    for hadith in hadiths:
        if hadith["id"] in done_ids:
            summary.skipped_existing += 1
            continue
        if not hadith.get("content", "").strip():
            summary.skipped_empty += 1
            continue

        console.print(f"Tłumaczę hadis [cyan]{escape(str(hadith['id']))}[/cyan]")
        title_fa   = translator.translate(hadith.get("title", ""), is_title=True)
        content_fa = translator.translate(hadith["content"])

        records.append(translated_record(hadith, title_fa, content_fa))
        done_ids.add(hadith["id"])
        save_translated(records, out_path)
        summary.translated += 1

    return summary


def write_passthrough(hadiths: list[dict[str, Any]], out_path: Path) -> int:
    """Tryb bez tłumaczenia: oryginał w polach *_fa, title/content puste."""
    records = [passthrough_record(h) for h in hadiths]
    save_translated(records, out_path)
    return len(records)
