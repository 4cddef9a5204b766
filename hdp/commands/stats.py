"""Komenda: hdp stats — podsumowanie sparsowanej i przetłumaczonej książki."""

from __future__ import annotations

import argparse
from collections import Counter

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich import box

from hdp._config import add_book_arguments, resolve_book_dir
from html_parser.pipeline import HADITHS_FILE, load_hadiths
from llm_query import TRANSLATED_FILE, load_translated

console = Console()


def book_stats(hadiths: list[dict], translated: list[dict]) -> dict[str, int]:
    done = {t.get("id") for t in translated}
    with_content = [h for h in hadiths if h.get("content", "").strip()]
    return {
        "hadiths":     len(hadiths),
        "empty":       len(hadiths) - len(with_content),
        "multi_page":  sum(1 for h in hadiths if len(h.get("pages", [])) > 1),
        "fallback":    sum(1 for h in hadiths if str(h.get("id", "")).startswith("fallback_")),
        "translated":  sum(1 for h in with_content if h["id"] in done),
        "pending":     sum(1 for h in with_content if h["id"] not in done),
        "titles":      len({h.get("title", "") for h in hadiths}),
    }


def run(args: argparse.Namespace) -> None:
    try:
        root = resolve_book_dir(args)
        hadiths = load_hadiths(root / HADITHS_FILE)
        translated = load_translated(root / TRANSLATED_FILE)
    except ValueError as e:
        # json.JSONDecodeError też jest ValueError
        console.print(f"[red]Błąd:[/red] {escape(str(e))}")
        raise SystemExit(1)
    except OSError as e:
        console.print(f"[red]Błąd odczytu:[/red] {escape(str(e))}")
        raise SystemExit(1)

    stats = book_stats(hadiths, translated)

    table = Table(box=box.SIMPLE_HEAD, show_header=True, header_style="bold white")
    table.add_column("METRYKA", style="cyan", no_wrap=True)
    table.add_column("WARTOŚĆ", justify="right")
    for key, value in stats.items():
        table.add_row(key, str(value))

    per_volume = Counter(h["vol"] for h in hadiths)
    for vol in sorted(per_volume):
        table.add_row(f"tom {vol}", str(per_volume[vol]), style="dim")

    console.print()
    console.print(f"Książka: [bold]{escape(str(root))}[/bold]")
    console.print(table)


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "stats",
        help="Podsumowanie hadiths.json i postępu tłumaczenia.",
    )
    add_book_arguments(p)
    p.set_defaults(func=run)
