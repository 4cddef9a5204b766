"""Konfiguracja ścieżek książki — przez zmienne środowiskowe (i plik .env)."""

from __future__ import annotations

import argparse
import os
import pathlib

from dotenv import load_dotenv

load_dotenv(pathlib.Path(__file__).resolve().parent.parent / ".env", override=True)

_DEFAULT_DATA_DIR = "./scraped_data"


def book_dir(book: str | None = None, directory: str | None = None) -> pathlib.Path:
    """
    Katalog książki: --book-dir, albo <SCRAPED_DATA_DIR>/<--book | BOOK_NAME>.

    Raises:
        ValueError: nie podano książki ani BOOK_NAME.
    """
    if directory:
        return pathlib.Path(directory)
    name = book or os.getenv("BOOK_NAME")
    if not name:
        raise ValueError("Brak nazwy książki. Ustaw BOOK_NAME lub podaj --book / --book-dir.")
    return pathlib.Path(os.getenv("SCRAPED_DATA_DIR", _DEFAULT_DATA_DIR)) / name


def default_model(fallback: str) -> str:
    return os.getenv("GEMINI_MODEL") or fallback


def add_book_arguments(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--book", "-b",
        metavar="NAZWA",
        default=None,
        help="Nazwa książki w katalogu danych (domyślnie: BOOK_NAME z .env).",
    )
    p.add_argument(
        "--book-dir",
        metavar="KATALOG",
        default=None,
        help="Pełna ścieżka katalogu książki (zamiast --book).",
    )


def resolve_book_dir(args: argparse.Namespace) -> pathlib.Path:
    return book_dir(args.book, args.book_dir)
