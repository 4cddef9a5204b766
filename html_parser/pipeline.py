"""
html_parser/pipeline.py — parsowanie całej książki do hadiths.json.

Przebieg:
  katalog książki → index_book() → strony w kolejności (tom, rozdział, strona)
  → extract_pages() (jeden HadithIndex na całe przejście)
  → extract_fallback() tylko gdy nic nie znaleziono
  → finalize() → hadiths.json

Publiczne API:
  parse_book(book_dir)              -> ParseResult
  write_hadiths(hadiths, out_path)  -> None
  load_hadiths(path)                -> list[dict]
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.markup import escape

from data_model.hadiths import HadithIndex, SourcePage
from html_parser.fallback import extract_fallback
from html_parser.parser import extract_pages
from html_parser.paths import index_book

HADITHS_FILE = "hadiths.json"

console = Console(stderr=True)


@dataclass(slots=True)
class ParseResult:
    pages: list[SourcePage]
    hadiths: list[dict[str, Any]]
    used_fallback: bool = False
    skipped: list[tuple[Path, str]] = field(default_factory=list)


def parse_book(book_dir: Path) -> ParseResult:
    """
    Parsuje wszystkie strony książki.

    Raises:
        FileNotFoundError / NotADirectoryError: brak katalogu książki.
    """
    pages = index_book(Path(book_dir))
    skipped: list[tuple[Path, str]] = []

    def on_skip(path: Path, reason: str) -> None:
        skipped.append((path, reason))
        console.print(f"[yellow]Pominięto stronę[/yellow] {escape(str(path))}: {escape(reason)}")

    index = HadithIndex()
    extract_pages(index, pages, on_skip)

    used_fallback = False
    if len(index) == 0:
        console.print("[yellow]Brak hadisów metodą główną — próbuję metody zapasowej…[/yellow]")
        used_fallback = True
        # drugie przejście zgłasza te same strony; liczymy je raz
        extract_fallback(index, pages)

    return ParseResult(
        pages=pages,
        hadiths=index.finalize(),
        used_fallback=used_fallback,
        skipped=skipped,
    )


def write_hadiths(hadiths: list[dict[str, Any]], out_path: Path) -> None:
    Path(out_path).write_text(
        json.dumps(hadiths, ensure_ascii=False, indent=2), encoding="utf-8"
    )


def load_hadiths(path: Path) -> list[dict[str, Any]]:
    return json.loads(Path(path).read_text(encoding="utf-8"))
