"""Komenda: hdp parse — parsowanie stron książki do hadiths.json."""

from __future__ import annotations

import argparse
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich import box

from hdp._config import add_book_arguments, resolve_book_dir
from html_parser.pipeline import HADITHS_FILE, parse_book, write_hadiths

console = Console()


# ---------------------------------------------------------------------------
# Wyświetlanie w terminalu
# ---------------------------------------------------------------------------

def _show_table(hadiths: list[dict], limit: int) -> None:
    if not hadiths:
        console.print("[yellow]Brak hadisów.[/yellow]")
        return

    table = Table(
        box=box.SIMPLE_HEAD,
        show_header=True,
        header_style="bold white",
        row_styles=["", "dim"],
        expand=False,
    )
    table.add_column("TOM",    justify="right", no_wrap=True, style="dim")
    table.add_column("ROZDZ.", justify="right", no_wrap=True, style="dim")
    table.add_column("ID",     no_wrap=True, style="bold cyan")
    table.add_column("STRONY", justify="center", no_wrap=True)
    table.add_column("LEN",    justify="right", no_wrap=True)
    table.add_column("TYTUŁ",  no_wrap=False, max_width=50)

    for h in hadiths[:limit]:
        table.add_row(
            str(h["vol"]),
            str(h["sec"]),
            escape(h["id"][:40]),
            ",".join(str(p) for p in h["pages"]),
            str(len(h["content"])),
            escape(h["title"][:80]),
        )

    console.print()
    console.print(table)
    shown = min(limit, len(hadiths))
    console.print(f"  [dim]{shown} z {len(hadiths)} hadisów[/dim]\n")


# ---------------------------------------------------------------------------
# Główna logika komendy
# ---------------------------------------------------------------------------

def run(args: argparse.Namespace) -> None:
    try:
        root = resolve_book_dir(args)
    except ValueError as e:
        console.print(f"[red]Błąd konfiguracji:[/red] {escape(str(e))}")
        raise SystemExit(1)

    console.print(f"Parsowanie książki [bold]{escape(str(root))}[/bold] …")

    try:
        result = parse_book(root)
    except (FileNotFoundError, NotADirectoryError) as e:
        console.print(f"[red]Katalog książki nie istnieje:[/red] {escape(str(e))}")
        raise SystemExit(1)

    console.print(f"Znaleziono [bold]{len(result.pages)}[/bold] stron do parsowania.")
    if result.skipped:
        console.print(f"[yellow]Pominięto {len(result.skipped)} nieczytelnych stron.[/yellow]")
    if result.used_fallback:
        console.print("[yellow]Użyto metody zapasowej.[/yellow]")

    out_path = Path(args.out) if args.out else root / HADITHS_FILE
    try:
        write_hadiths(result.hadiths, out_path)
    except OSError as e:
        console.print(f"[red]Błąd zapisu:[/red] {escape(str(e))}")
        raise SystemExit(1)

    console.print(f"[green]JSON:[/green] {escape(str(out_path))}  ({len(result.hadiths)} hadisów)")

    if args.show:
        _show_table(result.hadiths, args.limit)


# ---------------------------------------------------------------------------
# Rejestracja parsera
# ---------------------------------------------------------------------------

def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "parse",
        help="Parsuje strony książki (JSON z HTML) do hadiths.json.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Przechodzi strony volume_<V>/section_<S>/page_<P>.json w kolejności
(tom, rozdział, strona), wyciąga hadisy (format.hadith), scala powtórzenia
o tym samym id i zapisuje wynik do hadiths.json w katalogu książki.
Gdy nic nie znaleziono, używa wzorca tekstowego "… فرمود: «…»".

Przykłady:
  hdp parse --book kafi
  hdp parse --book-dir ./scraped_data/kafi --show
  hdp parse --book kafi --out /tmp/hadiths.json
        """,
    )
    add_book_arguments(p)
    p.add_argument(
        "--out", "-o",
        metavar="PLIK",
        default=None,
        help=f"Plik wyjściowy (domyślnie: <katalog książki>/{HADITHS_FILE}).",
    )
    p.add_argument(
        "--show",
        action="store_true",
        help="Wyświetl tabelę hadisów w terminalu po zapisie.",
    )
    p.add_argument(
        "--limit",
        type=int,
        default=50,
        metavar="N",
        help="Maks. liczba wierszy tabeli --show (domyślnie: 50).",
    )
    p.set_defaults(func=run)
