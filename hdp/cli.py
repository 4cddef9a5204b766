"""
hdp — narzędzie CLI do ekstrakcji i tłumaczenia hadisów.

Użycie:
  hdp <komenda> [opcje]

Komendy:
  parse           Parsuje strony książki (JSON z HTML) do hadiths.json.
  translate       Tłumaczy hadiths.json na perski (Gemini), z wznawianiem.
  fix-honorifics  Rozwija skróty zwrotów grzecznościowych w pliku tłumaczeń.
  stats           Podsumowanie hadiths.json i postępu tłumaczenia.
"""

from __future__ import annotations

import argparse
import sys

# Windows: terminal może używać cp1252 — wymuszamy UTF-8, żeby arabskie
# i perskie znaki były wypisywane poprawnie.
if hasattr(sys.stdout, "reconfigure"):
    sys.stdout.reconfigure(encoding="utf-8", errors="replace")
if hasattr(sys.stderr, "reconfigure"):
    sys.stderr.reconfigure(encoding="utf-8", errors="replace")

from hdp.commands import parse as cmd_parse
from hdp.commands import translate as cmd_translate
from hdp.commands import fix_honorifics as cmd_fix_honorifics
from hdp.commands import stats as cmd_stats


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hdp",
        description="hadith-pipeline — narzędzie CLI.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version", action="version", version="hdp 0.1.0"
    )

    subparsers = parser.add_subparsers(
        title="komendy",
        metavar="<komenda>",
        dest="command",
    )
    subparsers.required = True

    cmd_parse.add_parser(subparsers)
    cmd_translate.add_parser(subparsers)
    cmd_fix_honorifics.add_parser(subparsers)
    cmd_stats.add_parser(subparsers)

    return parser


def main() -> None:
    parser = build_parser()
    args = parser.parse_args()
    args.func(args)


if __name__ == "__main__":
    main()
