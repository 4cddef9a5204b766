"""
html_parser/fallback.py — zapasowa ekstrakcja dla książek bez znaczników format.hadith.

Uruchamiana tylko wtedy, gdy główna ekstrakcja nie znalazła żadnego hadisu.
Dopasowuje zwykły tekst akapitu do wzorca:

    <mówiący> فرمود: «<treść>»

Id rekordu to fallback_<paragraphId>; brak paragraphId daje pusty sufiks
(fallback_), tak jak gen_<ścieżka>_ w parser.py. Powtórzone id jest
pomijane (pierwsze wystąpienie wygrywa, bez scalania).
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from data_model.hadiths import HadithIndex, HadithRecord, SourcePage
from html_parser.parser import SkipHandler, iter_pages, parse_fragment

_SAYING_RE = re.compile(r"(.+) فرمود: «(.+)»")


def fallback_id(paragraph: dict) -> str:
    paragraph_id = paragraph.get("paragraphId")
    return f"fallback_{'' if paragraph_id is None else paragraph_id}"


def match_saying(text: str) -> tuple[str, str] | None:
    m = _SAYING_RE.search(text)
    if not m:
        return None
    return m.group(1).strip(), m.group(2).strip()


def extract_fallback_fragment(index: HadithIndex, page: SourcePage, paragraph: dict) -> bool:
    soup = parse_fragment(paragraph)
    text = "".join(p.get_text() for p in soup.find_all("p"))
    matched = match_saying(text)
    if matched is None:
        return False

    hid = fallback_id(paragraph)
    if hid in index:
        return False

    ghael, content = matched
    index.add(HadithRecord(
        id=hid,
        vol=page.volume,
        sec=page.section,
        pages=[page.page],
        title=index.title,
        ghael=ghael,
        sanad="",
        parts=[content],
    ))
    return True


def extract_fallback(
    index: HadithIndex,
    pages: Iterable[SourcePage],
    on_skip: SkipHandler | None = None,
) -> int:
    created = 0
    for page, paragraphs in iter_pages(pages, on_skip):
        for paragraph in paragraphs:
            if extract_fallback_fragment(index, page, paragraph):
                created += 1
    return created
