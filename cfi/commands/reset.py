"""Komenda: cfi reset — usuwanie danych indeksu z bazy."""

from __future__ import annotations

import argparse

from rich.console import Console

from cfi._db import get_connection

console = Console()

# Kolejność usuwania/dropowania: najpierw tabele zależne
_TABLES = ("scripture_index", "search_index", "confession", "synonym")


# ---------------------------------------------------------------------------
# Pomocnicze
# ---------------------------------------------------------------------------

def _table_exists(cur, table: str) -> bool:
    cur.execute(
        """
        SELECT 1 FROM information_schema.tables
        WHERE table_schema = 'public' AND table_name = %s
        """,
        (table,),
    )
    return cur.fetchone() is not None


def _deleted(n: int, table: str) -> None:
    console.print(f"[green]Usunięto {n} wierszy z [bold]{table}[/bold][/green]")


def _skipped(table: str) -> None:
    console.print(f"[yellow]Tabela [bold]{table}[/bold] nie istnieje — pominięto.[/yellow]")


def tables_for(cel: str) -> tuple[str, ...]:
    """Tabele objęte celem, w kolejności bezpiecznej dla kluczy obcych."""
    if cel == "confession":
        return ("scripture_index", "search_index", "confession")
    if cel == "search-index":
        return ("scripture_index", "search_index")
    if cel == "synonyms":
        return ("synonym",)
    return _TABLES


# ---------------------------------------------------------------------------
# Akcje
# ---------------------------------------------------------------------------

def _reset_file(cur, file_name: str, cel: str) -> None:
    """Usuwa wiersze jednego dokumentu (po nazwie pliku)."""
    if not _table_exists(cur, "confession"):
        _skipped("confession")
        return
    if cel in ("confession", "all"):
        # search_index i scripture_index znikają przez ON DELETE CASCADE
        cur.execute("DELETE FROM confession WHERE file_name = %s", (file_name,))
        _deleted(cur.rowcount, "confession")
    else:
        cur.execute(
            """
            DELETE FROM search_index
            WHERE confession_id IN (SELECT id FROM confession WHERE file_name = %s)
            """,
            (file_name,),
        )
        _deleted(cur.rowcount, "search_index")


def _reset_tables(cur, tables: tuple[str, ...]) -> None:
    for table in tables:
        if _table_exists(cur, table):
            cur.execute(f"DELETE FROM {table}")
            _deleted(cur.rowcount, table)
        else:
            _skipped(table)


def _drop_tables(cur, tables: tuple[str, ...]) -> None:
    for table in tables:
        cur.execute(f"DROP TABLE IF EXISTS {table} CASCADE")
        console.print(f"[green]Usunięto tabelę [bold]{table}[/bold][/green]")


# ---------------------------------------------------------------------------
# Główna logika
# ---------------------------------------------------------------------------

def run(args: argparse.Namespace) -> None:
    cel: str = args.cel
    file_name: str | None = getattr(args, "file", None)

    if file_name and cel == "synonyms":
        console.print("[yellow]--file ignorowane przy celu [bold]synonyms[/bold][/yellow]")
        file_name = None
    if file_name and args.drop:
        console.print("[red]--drop nie łączy się z --file.[/red]")
        raise SystemExit(1)

    try:
        conn = get_connection()
    except Exception as e:
        console.print(f"[red]Błąd połączenia z bazą:[/red] {e}")
        raise SystemExit(1)

    try:
        with conn, conn.cursor() as cur:
            if args.drop:
                _drop_tables(cur, tables_for(cel))
            elif file_name:
                _reset_file(cur, file_name, cel)
            else:
                _reset_tables(cur, tables_for(cel))
    finally:
        conn.close()

    console.print("[dim]Gotowe.[/dim]")


# ---------------------------------------------------------------------------
# Rejestracja parsera
# ---------------------------------------------------------------------------

def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "reset",
        help="Usuwa dane indeksu z bazy (bez potwierdzenia).",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Usuwa dane indeksu. Działa natychmiast, bez pytania o potwierdzenie.

Cele:
  confession     Dokumenty wraz z jednostkami i odnośnikami.
  search-index   Jednostki wyszukiwania i odnośniki (dokumenty zostają).
  synonyms       Tabela synonimów.
  all            Wszystkie powyższe.

Opcja --file ogranicza usuwanie do jednego dokumentu.
Opcja --drop usuwa tabele zamiast wierszy (potem: cfi apply-schema).

Przykłady:
  cfi reset all
  cfi reset confession --file westminster.html
  cfi reset search-index
  cfi reset all --drop
        """,
    )
    p.add_argument(
        "cel",
        metavar="CEL",
        choices=["confession", "search-index", "synonyms", "all"],
        help="Co usunąć: confession | search-index | synonyms | all",
    )
    p.add_argument(
        "--file",
        metavar="PLIK",
        default=None,
        help="Ogranicz usuwanie do dokumentu o tej nazwie pliku (np. westminster.html).",
    )
    p.add_argument(
        "--drop",
        action="store_true",
        help="DROP TABLE zamiast DELETE.",
    )
    p.set_defaults(func=run)
