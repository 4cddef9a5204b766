"""Wspólne fixture: budowanie katalogu książki w tmp_path."""

import json
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))


def hadith_html(
    body: str,
    index: str | None = None,
    paragraph_id: str = "p1",
    ghael: str = "",
    sanad: str = "",
    footnote: str = "",
) -> str:
    attr = f' revayatindex="{index}"' if index else ""
    sanad_html = ""
    if sanad or ghael:
        ghael_html = f'<format class="maasoom">{ghael}</format>' if ghael else ""
        sanad_html = f'<format class="sanadHadith">{sanad}{ghael_html}</format>'
    note_html = f"<lfootnote>{footnote}</lfootnote>" if footnote else ""
    return (
        f'<p id="{paragraph_id}"><format class="hadith"{attr}>'
        f"{sanad_html}{body}{note_html}</format></p>"
    )


def heading_html(title: str, paragraph_id: str = "h") -> str:
    return f'<p id="{paragraph_id}"><heading>{title}</heading></p>'


def write_page(root: Path, volume: int, section: int, page: int, texts: list[str]) -> Path:
    path = root / f"volume_{volume}" / f"section_{section}" / f"page_{page}.json"
    path.parent.mkdir(parents=True, exist_ok=True)
    paragraphs = [{"paragraphId": i + 1, "text": t} for i, t in enumerate(texts)]
    path.write_text(
        json.dumps({"data": [{"paragList": paragraphs}]}, ensure_ascii=False),
        encoding="utf-8",
    )
    return path


@pytest.fixture
def book(tmp_path):
    root = tmp_path / "book"
    root.mkdir()
    return root
