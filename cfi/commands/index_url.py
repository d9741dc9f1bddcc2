"""Komenda: cfi index-url — pobiera stronę wyznania i indeksuje ją."""

from __future__ import annotations

import argparse
import re
from pathlib import Path

from rich.console import Console

from cfi.commands.index import _load_counters, _show_table, _write_db, _write_json
from data_model.confessions import IdCounters

console = Console()


def run(args: argparse.Namespace) -> None:
    import requests

    from html_parser.parser import ConfessionFormatError, file_name_from_url, parse_confession_url
    from scripture.resolver import UnresolvedReferenceError

    url: str = args.url
    file_name: str = args.file_name or file_name_from_url(url)
    out = args.out

    conn = None
    counters = IdCounters(search_index=args.start_id)
    if out in ("db", "both"):
        from cfi._db import get_connection
        try:
            conn = get_connection()
        except Exception as e:
            console.print(f"[red]Błąd połączenia z bazą:[/red] {e}")
            raise SystemExit(1)
        counters = _load_counters(conn)
        if args.start_id:
            counters = counters.advance(search_index=args.start_id)

    console.print(f"Pobieranie [bold]{url}[/bold] (plik=[cyan]{file_name}[/cyan]) …")

    try:
        try:
            result = parse_confession_url(url, file_name, counters=counters)
        except requests.RequestException as e:
            console.print(f"[red]Błąd pobierania:[/red] {e}")
            raise SystemExit(1)
        except ConfessionFormatError as e:
            console.print(f"[red]Nieprawidłowy dokument:[/red] {e}")
            raise SystemExit(1)
        except UnresolvedReferenceError as e:
            console.print(f"[red]Błąd odnośnika:[/red] {e}")
            raise SystemExit(1)

        console.print(f"Znaleziono [bold]{len(result.search_index)}[/bold] jednostek.")

        if out in ("json", "both"):
            safe_name = re.sub(r"[^\w.-]", "-", Path(file_name).stem)
            _write_json(result, Path(f"{safe_name}.index.json"))

        if conn is not None:
            _write_db(conn, result)
    finally:
        if conn is not None:
            conn.close()

    if args.show:
        _show_table(result)


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "index-url",
        help="Pobiera stronę HTML wyznania i indeksuje ją.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Pobiera stronę pod podanym URL i dzieli ją na jednostki wyszukiwania,
tak jak `cfi index` robi to dla plików lokalnych.

Nazwa pliku (klucz jednostek "plik.html#id") to ostatni segment ścieżki URL,
chyba że podano --file-name.

Przykłady:
  cfi index-url https://example.org/creeds/nicene.html --show
  cfi index-url https://example.org/heidelberg --file-name heidelberg.html --out db
        """,
    )
    p.add_argument(
        "url",
        metavar="URL",
        help="Adres URL strony HTML do pobrania.",
    )
    p.add_argument(
        "--file-name",
        metavar="NAZWA",
        default=None,
        help="Nazwa pliku dla kluczy jednostek (domyślnie: z URL).",
    )
    p.add_argument(
        "--out",
        choices=["json", "db", "both"],
        default="json",
        help="Cel zapisu: json, db lub both (domyślnie: json).",
    )
    p.add_argument(
        "--start-id",
        metavar="N",
        type=int,
        default=0,
        help="Ostatnie użyte id jednostki; numeracja od N+1.",
    )
    p.add_argument(
        "--show",
        action="store_true",
        help="Wyświetl tabelę jednostek w terminalu po zapisie.",
    )
    p.set_defaults(func=run)
