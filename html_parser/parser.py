"""html_parser/parser.py — wyciąganie hadisów z fragmentów HTML stron książki."""

from __future__ import annotations

import copy
import json
from collections.abc import Callable, Iterable, Iterator
from pathlib import Path

from bs4 import BeautifulSoup, Tag

from data_model.hadiths import HadithIndex, HadithRecord, SourcePage

# Znaczniki występujące w markupie strony
_HEADING_TAG      = "heading"
_HADITH_SELECTOR  = "format.hadith"
_SANAD_SELECTOR   = "format.sanadHadith"
_GHAEL_SELECTOR   = "format.maasoom"
_FOOTNOTE_TAG     = "lfootnote"
_INDEX_ATTR       = "revayatindex"

# Wywoływane dla pominiętej strony: (ścieżka, powód)
SkipHandler = Callable[[Path, str], None]


# ---------------------------------------------------------------------------
# Czytanie stron
# ---------------------------------------------------------------------------

def read_paragraphs(path: Path) -> list[dict] | None:
    """
    Zwraca listę fragmentów strony (data[0].paragList).

    None gdy strona nie ma tej struktury. Błędny JSON zgłasza
    json.JSONDecodeError, błąd odczytu — OSError.
    """
    raw = json.loads(Path(path).read_text(encoding="utf-8"))
    try:
        paragraphs = raw["data"][0]["paragList"]
    except (KeyError, IndexError, TypeError):
        return None
    if not isinstance(paragraphs, list):
        return None
    return paragraphs


def iter_pages(
    pages: Iterable[SourcePage],
    on_skip: SkipHandler | None = None,
) -> Iterator[tuple[SourcePage, list[dict]]]:
    """Czyta strony po kolei; strony nieczytelne lub bez paragList są pomijane."""
    for page in pages:
        try:
            paragraphs = read_paragraphs(page.path)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            if on_skip:
                on_skip(page.path, str(e))
            continue
        if not paragraphs:
            continue
        yield page, paragraphs


def parse_fragment(paragraph: dict) -> BeautifulSoup:
    return BeautifulSoup(paragraph.get("text") or "", "html.parser")


def _text_of(elements: Iterable[Tag]) -> str:
    return "".join(el.get_text() for el in elements).strip()


# ---------------------------------------------------------------------------
# Pojedynczy hadis
# ---------------------------------------------------------------------------

def hadith_id(element: Tag, source_path: Path) -> str:
    """revayatindex albo id syntetyczne: gen_<ścieżka>_<id najbliższego <p>>."""
    explicit = element.get(_INDEX_ATTR)
    if explicit:
        return str(explicit)
    parent_p = element.find_parent("p")
    paragraph_id = parent_p.get("id", "") if parent_p is not None else ""
    return f"gen_{source_path}_{paragraph_id}"


def hadith_body(element: Tag) -> str:
    """Tekst hadisu bez zagnieżdżonego sanadu i przypisów."""
    clone = copy.copy(element)
    for nested in clone.select(_SANAD_SELECTOR):
        nested.decompose()
    for nested in clone.find_all(_FOOTNOTE_TAG):
        nested.decompose()
    return clone.get_text().strip()


def sanad_and_ghael(element: Tag) -> tuple[str, str]:
    sanad_elements = element.select(_SANAD_SELECTOR)
    ghael_elements = [g for s in sanad_elements for g in s.select(_GHAEL_SELECTOR)]
    return _text_of(sanad_elements), _text_of(ghael_elements)


# ---------------------------------------------------------------------------
# Główna ekstrakcja
# ---------------------------------------------------------------------------

def extract_fragment(index: HadithIndex, page: SourcePage, paragraph: dict) -> int:
    """
    Przetwarza jeden fragment: aktualizuje tytuł, dodaje lub scala hadisy.

    Returns:
        Liczba nowych rekordów.
    """
    soup = parse_fragment(paragraph)
    index.set_title(_text_of(soup.find_all(_HEADING_TAG)))

    created = 0
    for element in soup.select(_HADITH_SELECTOR):
        hid  = hadith_id(element, page.path)
        body = hadith_body(element)

        if index.merge(hid, page.page, body):
            continue

        sanad, ghael = sanad_and_ghael(element)
        index.add(HadithRecord(
            id=hid,
            vol=page.volume,
            sec=page.section,
            pages=[page.page],
            title=index.title,
            ghael=ghael,
            sanad=sanad,
            parts=[body] if body else [],
        ))
        created += 1

    return created


def extract_pages(
    index: HadithIndex,
    pages: Iterable[SourcePage],
    on_skip: SkipHandler | None = None,
) -> int:
    created = 0
    for page, paragraphs in iter_pages(pages, on_skip):
        for paragraph in paragraphs:
            created += extract_fragment(index, page, paragraph)
    return created
