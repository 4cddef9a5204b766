"""
data_model/hadiths.py — rekordy hadisów wyciągane ze stron książki.

SourcePage   — jeden plik strony (volume_<V>/section_<S>/page_<P>.json).
HadithRecord — jeden logiczny hadis; może występować na wielu stronach.
HadithIndex  — akumulator: mapa id → HadithRecord w kolejności pierwszego
               wystąpienia oraz bieżący tytuł (ostatni widziany nagłówek).

Mapowanie na plik wyjściowy hadiths.json:
  vol, sec, pages, id, title, ghael, sanad, content
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

# Tytuł przed pierwszym nagłówkiem książki
DEFAULT_TITLE = "Untitled"


@dataclass(frozen=True, slots=True)
class SourcePage:
    path: Path
    volume: int
    section: int
    page: int

    @property
    def sort_key(self) -> tuple[int, int, int]:
        return (self.volume, self.section, self.page)


@dataclass(slots=True)
class HadithRecord:
    """
    Hadis złożony ze wszystkich wystąpień o tym samym id.

    - id:     revayatindex z markupu albo identyfikator syntetyczny
    - vol/sec: z pierwszego wystąpienia, nigdy nie zmieniane
    - pages:  strony w kolejności pierwszego napotkania, bez duplikatów
    - title:  nagłówek aktualny w chwili utworzenia rekordu
    - ghael:  mówiący (format.maasoom), tylko z pierwszego wystąpienia
    - sanad:  łańcuch przekazu (format.sanadHadith), tylko z pierwszego wystąpienia
    - parts:  różne niepuste warianty treści, w kolejności pierwszego napotkania
    """
    id: str
    vol: int
    sec: int
    pages: list[int]
    title: str
    ghael: str = ""
    sanad: str = ""
    parts: list[str] = field(default_factory=list)

    @property
    def content(self) -> str:
        return "\n".join(self.parts).strip()

    def add_occurrence(self, page: int, text: str) -> None:
        if page not in self.pages:
            self.pages.append(page)
        if text and text not in self.parts:
            self.parts.append(text)

    def to_dict(self) -> dict[str, Any]:
        """Rekord wyjściowy: parts zastąpione przez content."""
        return {
            "vol":     self.vol,
            "sec":     self.sec,
            "pages":   list(self.pages),
            "id":      self.id,
            "title":   self.title,
            "ghael":   self.ghael,
            "sanad":   self.sanad,
            "content": self.content,
        }


class HadithIndex:
    """
    Akumulator przejścia po książce.

    Strony są przetwarzane po kolei, więc tytuł i mapa rekordów są
    współdzielone przez całe przejście (także między plikami).
    """

    def __init__(self, title: str = DEFAULT_TITLE) -> None:
        self.title = title
        self._records: dict[str, HadithRecord] = {}

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, hadith_id: object) -> bool:
        return hadith_id in self._records

    def get(self, hadith_id: str) -> HadithRecord | None:
        return self._records.get(hadith_id)

    def records(self) -> list[HadithRecord]:
        return list(self._records.values())

    def set_title(self, heading: str) -> None:
        if heading:
            self.title = heading

    def add(self, record: HadithRecord) -> HadithRecord:
        """Wstawia nowy rekord; istniejący id zostaje bez zmian (first wins)."""
        return self._records.setdefault(record.id, record)

    def merge(self, hadith_id: str, page: int, text: str) -> bool:
        """
        Dopisuje kolejne wystąpienie istniejącego hadisu.

        Returns:
            False gdy id jeszcze nie istnieje (nic nie zmieniono).
        """
        record = self._records.get(hadith_id)
        if record is None:
            return False
        record.add_occurrence(page, text)
        return True

    def finalize(self) -> list[dict[str, Any]]:
        return [r.to_dict() for r in self._records.values()]
