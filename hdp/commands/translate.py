"""Komenda: hdp translate — tłumaczenie hadiths.json na perski przez Gemini."""

from __future__ import annotations

import argparse
import json

from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm

from hdp._config import add_book_arguments, default_model, resolve_book_dir
from html_parser.pipeline import HADITHS_FILE, load_hadiths
from llm_query import (
    DEFAULT_MODEL,
    TRANSLATED_FILE,
    KeyRing,
    TranslationConfigError,
    Translator,
    api_keys_from_env,
    fix_translated_file,
    translate_hadiths,
    write_passthrough,
)

console = Console()


def _want_translation(args: argparse.Namespace) -> bool:
    if args.yes:
        return True
    if args.no_translate:
        return False
    return Confirm.ask("Czy przetłumaczyć książkę?", default=True, console=console)


def run(args: argparse.Namespace) -> None:
    try:
        root = resolve_book_dir(args)
    except ValueError as e:
        console.print(f"[red]Błąd konfiguracji:[/red] {escape(str(e))}")
        raise SystemExit(1)

    src_path = root / HADITHS_FILE
    out_path = root / TRANSLATED_FILE

    try:
        hadiths = load_hadiths(src_path)
    except (OSError, json.JSONDecodeError) as e:
        console.print(f"[red]Nie można wczytać {escape(str(src_path))}:[/red] {escape(str(e))}")
        raise SystemExit(1)

    if not _want_translation(args):
        n = write_passthrough(hadiths, out_path)
        console.print(f"[green]Zapisano {n} hadisów bez tłumaczenia:[/green] {escape(str(out_path))}")
        return

    try:
        ring = KeyRing(api_keys_from_env())
    except TranslationConfigError as e:
        console.print(f"[red]Błąd konfiguracji:[/red] {escape(str(e))}")
        raise SystemExit(1)

    model = args.model or default_model(DEFAULT_MODEL)
    console.print(
        f"Tłumaczenie [bold]{len(hadiths)}[/bold] hadisów  "
        f"model=[cyan]{model}[/cyan]  kluczy API: [bold]{len(ring)}[/bold]"
    )

    translator = Translator(ring, model=model)
    try:
        summary = translate_hadiths(hadiths, out_path, translator)
    except (OSError, json.JSONDecodeError) as e:
        console.print(f"[red]Błąd pliku {escape(str(out_path))}:[/red] {escape(str(e))}")
        raise SystemExit(1)

    console.print(
        f"[green]Tłumaczenie zakończone.[/green] nowe={summary.translated}  "
        f"wcześniej={summary.skipped_existing}  puste={summary.skipped_empty}  "
        f"zapytań={translator.requests}"
    )

    try:
        n = fix_translated_file(out_path)
    except OSError as e:
        console.print(f"[yellow]Nie udało się poprawić skrótów w {escape(str(out_path))}:[/yellow] {escape(str(e))}")
        return
    console.print(f"Rozwinięto {n} skrótów zwrotów grzecznościowych.")


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "translate",
        help="Tłumaczy hadiths.json na perski (Gemini), z wznawianiem.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description=f"""
Tłumaczy tytuł i treść każdego hadisu z {HADITHS_FILE} i zapisuje
{TRANSLATED_FILE} po każdym rekordzie. Ponowne uruchomienie pomija
hadisy już obecne w pliku wynikowym.

Bez tłumaczenia (--no-translate) oryginał trafia do pól title_fa/content_fa.

Wymaga zmiennej środowiskowej GEMINI_API_KEY (lista kluczy rozdzielona
przecinkami, lub plik .env).

Przykłady:
  hdp translate --book kafi
  hdp translate --book kafi --yes --model gemini-2.5-flash
  hdp translate --book kafi --no-translate
        """,
    )
    add_book_arguments(p)
    p.add_argument(
        "--model", "-m",
        default=None,
        metavar="MODEL",
        help=f"Model Gemini (domyślnie: GEMINI_MODEL lub {DEFAULT_MODEL}).",
    )
    mode = p.add_mutually_exclusive_group()
    mode.add_argument(
        "--yes", "-y",
        action="store_true",
        help="Tłumacz bez pytania.",
    )
    mode.add_argument(
        "--no-translate",
        action="store_true",
        help="Nie tłumacz; zapisz oryginał w polach *_fa.",
    )
    p.set_defaults(func=run)
