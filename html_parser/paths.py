"""
html_parser/paths.py — wyszukiwanie plików stron i ich kolejność czytania.

Układ katalogów książki:
  <root>/volume_<V>/section_<S>/page_<P>.json

Publiczne API:
  discover_json_files(root)  -> list[Path]
  parse_page_path(path)      -> SourcePage | None
  order_pages(paths)         -> list[SourcePage]
  index_book(root)           -> list[SourcePage]
"""

from __future__ import annotations

import os
import re
from collections.abc import Iterable
from pathlib import Path

from data_model.hadiths import SourcePage

_PAGE_PATH_RE = re.compile(r"volume_(\d+)/section_(\d+)/page_(\d+)\.json$")


def discover_json_files(root: Path) -> list[Path]:
    """
    Rekurencyjnie zbiera wszystkie pliki *.json pod root.

    Kolejność zależy od systemu plików. Dowiązania symboliczne nie są
    śledzone (ani katalogi, ani pliki); ścieżki są absolutne, ale nie
    rozwiązywane. Brak katalogu root kończy się FileNotFoundError
    (NotADirectoryError dla zwykłego pliku).
    """
    found: list[Path] = []
    _walk(Path(root).absolute(), found)
    return found


def _walk(directory: Path, found: list[Path]) -> None:
    with os.scandir(directory) as entries:
        for entry in entries:
            if entry.is_dir(follow_symlinks=False):
                _walk(Path(entry.path), found)
            elif entry.is_file(follow_symlinks=False) and entry.name.endswith(".json"):
                found.append(Path(entry.path))


def parse_page_path(path: Path) -> SourcePage | None:
    m = _PAGE_PATH_RE.search(Path(path).as_posix())
    if not m:
        return None
    volume, section, page = (int(g) for g in m.groups())
    return SourcePage(path=Path(path), volume=volume, section=section, page=page)


def order_pages(paths: Iterable[Path]) -> list[SourcePage]:
    """Pomija ścieżki spoza wzorca; sortuje po (tom, rozdział, strona)."""
    pages = [p for p in (parse_page_path(path) for path in paths) if p is not None]
    return sorted(pages, key=lambda p: p.sort_key)


def index_book(root: Path) -> list[SourcePage]:
    return order_pages(discover_json_files(root))
