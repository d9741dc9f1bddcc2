"""Komenda: cfi apply-schema — tworzy tabele indeksu z db/schema.sql."""

from __future__ import annotations

import argparse
import pathlib

from rich.console import Console

from cfi._db import get_connection

console = Console()

ROOT        = pathlib.Path(__file__).resolve().parent.parent.parent
SCHEMA_PATH = ROOT / "db" / "schema.sql"


def split_statements(sql: str) -> list[str]:
    """
    Dzieli SQL na instrukcje zakończone średnikiem na końcu linii.
    Linie komentarzy (--) są pomijane, puste instrukcje też.
    """
    stmts: list[str] = []
    buf:   list[str] = []

    for line in sql.splitlines():
        if line.lstrip().startswith("--"):
            continue
        buf.append(line)
        if line.rstrip().endswith(";"):
            stmt = "\n".join(buf).strip()
            if stmt.rstrip(";").strip():
                stmts.append(stmt)
            buf = []

    remaining = "\n".join(buf).strip()
    if remaining:
        stmts.append(remaining)

    return stmts


def run(args: argparse.Namespace) -> None:
    if not SCHEMA_PATH.exists():
        console.print(f"[red]Brak pliku schematu:[/red] {SCHEMA_PATH}")
        raise SystemExit(1)

    stmts = split_statements(SCHEMA_PATH.read_text(encoding="utf-8"))

    try:
        conn = get_connection()
    except Exception as e:
        console.print(f"[red]Błąd połączenia z bazą:[/red] {e}")
        raise SystemExit(1)

    # cały schema.sql w jednej transakcji
    try:
        with conn, conn.cursor() as cur:
            for stmt in stmts:
                cur.execute(stmt)
    except Exception as e:
        console.print(f"[red]Błąd wykonania schematu:[/red] {e}")
        raise SystemExit(1)
    finally:
        conn.close()

    console.print(f"[green]Schemat zastosowany:[/green] {SCHEMA_PATH} ({len(stmts)} instrukcji)")
    console.print("[dim]Gotowe.[/dim]")


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "apply-schema",
        help="Tworzy tabele indeksu z db/schema.sql (idempotentne).",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Wykonuje plik db/schema.sql przeciwko skonfigurowanej bazie PostgreSQL.

Tabele: confession, search_index, scripture_index, synonym.
Wszystkie instrukcje używają IF NOT EXISTS — bezpieczne do wielokrotnego uruchomienia.

Przykład:
  cfi apply-schema
        """,
    )
    p.set_defaults(func=run)
