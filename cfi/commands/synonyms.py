"""Komenda: cfi synonyms — tabela synonimów (podgląd / zapis do bazy)."""

from __future__ import annotations

import argparse

from rich.console import Console
from rich.table import Table
from rich import box

from html_parser.synonyms import SYNONYMS

console = Console()

_UPSERT_SYNONYM = """
    INSERT INTO synonym (alternate_word, preferred_word)
    VALUES %s
    ON CONFLICT (alternate_word) DO UPDATE SET
        preferred_word = EXCLUDED.preferred_word
"""


def _show_table() -> None:
    table = Table(
        box=box.SIMPLE_HEAD,
        show_header=True,
        header_style="bold white",
        row_styles=["", "dim"],
        expand=False,
    )
    table.add_column("#",           justify="right", no_wrap=True, style="dim")
    table.add_column("ZAMIEŃ",      no_wrap=True, style="bold cyan")
    table.add_column("NA",          no_wrap=True)

    for i, synonym in enumerate(SYNONYMS, start=1):
        table.add_row(str(i), synonym.alternate_word, synonym.preferred_word)

    console.print()
    console.print(table)
    console.print(f"  [dim]{len(SYNONYMS)} synonimów (wielkość liter ma znaczenie)[/dim]\n")


def _write_db() -> None:
    from cfi._db import get_connection
    import psycopg2.extras

    try:
        conn = get_connection()
    except Exception as e:
        console.print(f"[red]Błąd połączenia z bazą:[/red] {e}")
        raise SystemExit(1)

    rows = [(s.alternate_word, s.preferred_word) for s in SYNONYMS]
    try:
        with conn, conn.cursor() as cur:
            psycopg2.extras.execute_values(cur, _UPSERT_SYNONYM, rows)
    finally:
        conn.close()

    console.print(f"[green]DB:[/green] upsert {len(rows)} synonimów")


def run(args: argparse.Namespace) -> None:
    if args.out == "db":
        _write_db()
    else:
        _show_table()


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "synonyms",
        help="Wyświetla tabelę synonimów lub zapisuje ją do bazy.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Tabela synonimów stosowana przy normalizacji treści (np. catholick → catholic).

Przykłady:
  cfi synonyms
  cfi synonyms --out db
        """,
    )
    p.add_argument(
        "--out",
        choices=["show", "db"],
        default="show",
        help="show — tabela w terminalu (domyślnie), db — upsert do tabeli synonym.",
    )
    p.set_defaults(func=run)
