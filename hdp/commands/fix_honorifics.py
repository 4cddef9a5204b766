"""Komenda: hdp fix-honorifics — rozwija skróty (ص) i (ع) w pliku tłumaczeń."""

from __future__ import annotations

import argparse
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from hdp._config import add_book_arguments, resolve_book_dir
from llm_query import TRANSLATED_FILE, fix_translated_file

console = Console()


def run(args: argparse.Namespace) -> None:
    if args.file:
        path = Path(args.file)
    else:
        try:
            path = resolve_book_dir(args) / TRANSLATED_FILE
        except ValueError as e:
            console.print(f"[red]Błąd konfiguracji:[/red] {escape(str(e))}")
            raise SystemExit(1)

    try:
        n = fix_translated_file(path)
    except OSError as e:
        console.print(f"[red]Błąd pliku {escape(str(path))}:[/red] {escape(str(e))}")
        raise SystemExit(1)

    console.print(f"[green]Rozwinięto {n} skrótów[/green] w {escape(str(path))}")


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "fix-honorifics",
        help="Rozwija skróty zwrotów grzecznościowych w pliku tłumaczeń.",
    )
    add_book_arguments(p)
    p.add_argument(
        "--file", "-f",
        metavar="PLIK",
        default=None,
        help=f"Plik do poprawienia (domyślnie: <katalog książki>/{TRANSLATED_FILE}).",
    )
    p.set_defaults(func=run)
