"""Komenda: cfi index — indeksowanie plików HTML wyznań i katechizmów."""

from __future__ import annotations

import argparse
import json
from dataclasses import asdict
from pathlib import Path

from rich.console import Console
from rich.progress import BarColumn, Progress, SpinnerColumn, TaskProgressColumn, TextColumn
from rich.table import Table
from rich import box

from data_model.confessions import IdCounters, ParseResult

console = Console()

# Strony serwisu, które nie są dokumentami
IGNORED_FILE_NAMES = ("index.html", "privacy.html", "terms.html")


# ---------------------------------------------------------------------------
# Wybór plików
# ---------------------------------------------------------------------------

def collect_files(path: Path) -> list[Path]:
    """Pojedynczy plik .html albo wszystkie *.html katalogu (bez stron serwisu)."""
    if path.is_dir():
        files = sorted(f for f in path.iterdir() if f.is_file() and f.suffix.lower() == ".html")
    elif path.suffix.lower() == ".html":
        files = [path]
    else:
        files = []
    return [f for f in files if f.name.lower() not in IGNORED_FILE_NAMES]


# ---------------------------------------------------------------------------
# Zapis do JSON
# ---------------------------------------------------------------------------

def _write_json(result: ParseResult, json_path: Path) -> None:
    data = {
        "confession":      asdict(result.confession),
        "search_index":    [asdict(s) for s in result.search_index],
        "scripture_index": [asdict(s) for s in result.scripture_index],
    }
    json_path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
    console.print(
        f"[green]JSON:[/green] {json_path}  ({len(result.search_index)} jednostek, "
        f"{len(result.scripture_index)} odnośników)"
    )


# ---------------------------------------------------------------------------
# Zapis do bazy danych
# ---------------------------------------------------------------------------

_INSERT_CONFESSION = """
    INSERT INTO confession (id, country, file_name, title, tradition, year, quiz)
    VALUES (%s, %s, %s, %s, %s, %s, %s)
"""

_INSERT_SEARCH_INDEX = """
    INSERT INTO search_index (id, confession_id, file_name, title, contents)
    VALUES %s
"""

_INSERT_SCRIPTURE_INDEX = """
    INSERT INTO scripture_index
        (id, address, reference, book, chapter_number, search_index_id)
    VALUES %s
"""


def _load_counters(conn) -> IdCounters:
    """Ostatnie identyfikatory w bazie — kolejny dokument numerujemy dalej."""
    with conn.cursor() as cur:
        cur.execute(
            """
            SELECT
                (SELECT COALESCE(MAX(id), 0) FROM confession),
                (SELECT COALESCE(MAX(id), 0) FROM search_index),
                (SELECT COALESCE(MAX(id), 0) FROM scripture_index)
            """
        )
        confession, search_index, scripture_index = cur.fetchone()
    return IdCounters(confession, search_index, scripture_index)


def _write_db(conn, result: ParseResult) -> None:
    import psycopg2.extras

    c = result.confession
    with conn, conn.cursor() as cur:
        # ponowne indeksowanie pliku zastępuje poprzednie wiersze (CASCADE)
        cur.execute("DELETE FROM confession WHERE file_name = %s", (c.file_name,))
        cur.execute(
            _INSERT_CONFESSION,
            (c.id, c.country, c.file_name, c.title, c.tradition, c.year, c.quiz),
        )
        if result.search_index:
            psycopg2.extras.execute_values(
                cur,
                _INSERT_SEARCH_INDEX,
                [(s.id, s.confession_id, s.file_name, s.title, s.contents)
                 for s in result.search_index],
            )
        if result.scripture_index:
            psycopg2.extras.execute_values(
                cur,
                _INSERT_SCRIPTURE_INDEX,
                [(r.id, r.address, r.reference, r.book, r.chapter_number, r.search_index_id)
                 for r in result.scripture_index],
            )

    console.print(
        f"[green]DB:[/green] {c.file_name}: {len(result.search_index)} jednostek, "
        f"{len(result.scripture_index)} odnośników"
    )


# ---------------------------------------------------------------------------
# Wyświetlanie w terminalu
# ---------------------------------------------------------------------------

def _show_table(result: ParseResult) -> None:
    if not result.search_index:
        console.print("[yellow]Brak jednostek.[/yellow]")
        return

    refs_per_unit: dict[int, int] = {}
    for ref in result.scripture_index:
        refs_per_unit[ref.search_index_id] = refs_per_unit.get(ref.search_index_id, 0) + 1

    table = Table(
        box=box.SIMPLE_HEAD,
        show_header=True,
        header_style="bold white",
        row_styles=["", "dim"],
        expand=False,
    )
    table.add_column("ID",    justify="right", no_wrap=True, style="dim")
    table.add_column("PLIK",  no_wrap=True, style="bold cyan")
    table.add_column("REF",   justify="right", no_wrap=True)
    table.add_column("LEN",   justify="right", no_wrap=True)
    table.add_column("TYTUŁ", no_wrap=False, max_width=50)

    for unit in result.search_index:
        table.add_row(
            str(unit.id),
            unit.file_name,
            str(refs_per_unit.get(unit.id, 0)),
            str(len(unit.contents)),
            unit.title[:80],
        )

    c = result.confession
    console.print()
    console.print(f"[bold]{c.title}[/bold] [dim]({c.tradition or '-'}, {c.country or '-'}, {c.year})[/dim]")
    console.print(table)
    console.print(
        f"  [dim]{len(result.search_index)} jednostek, "
        f"{len(result.scripture_index)} odnośników[/dim]\n"
    )


def _json_path(html_path: Path) -> Path:
    return html_path.with_suffix(".index.json")


# ---------------------------------------------------------------------------
# Główna logika komendy
# ---------------------------------------------------------------------------

def _parse_or_exit(path: Path, counters: IdCounters) -> ParseResult:
    from html_parser.parser import ConfessionFormatError, parse_confession_file
    from scripture.resolver import UnresolvedReferenceError

    try:
        return parse_confession_file(path, counters=counters)
    except ConfessionFormatError as e:
        console.print(f"[red]Nieprawidłowy dokument:[/red] {e}")
    except UnresolvedReferenceError as e:
        console.print(f"[red]Błąd odnośnika w {path.name}:[/red] {e}")
    except OSError as e:
        console.print(f"[red]Błąd odczytu:[/red] {e}")
    # dokument trzeba poprawić zanim indeks zostanie wygenerowany
    raise SystemExit(1)


def run(args: argparse.Namespace) -> None:
    path = Path(args.path)
    if not path.exists():
        console.print(f"[red]Ścieżka nie istnieje:[/red] {path}")
        raise SystemExit(1)

    files = collect_files(path)
    if not files:
        console.print(f"[yellow]Brak plików .html w:[/yellow] {path}")
        return

    out = args.out  # "json" | "db" | "both"
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

    results: list[ParseResult] = []
    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            console=console,
            disable=len(files) == 1,
        ) as progress:
            task = progress.add_task("Indeksowanie", total=len(files))
            for html_path in files:
                progress.update(task, description=html_path.name)
                result = _parse_or_exit(html_path, counters)
                counters = result.counters

                if out in ("json", "both"):
                    _write_json(result, _json_path(html_path))
                if conn is not None:
                    _write_db(conn, result)

                results.append(result)
                progress.advance(task)
    finally:
        if conn is not None:
            conn.close()

    console.print(
        f"Zindeksowano [bold]{len(results)}[/bold] plików, "
        f"[bold]{sum(len(r.search_index) for r in results)}[/bold] jednostek "
        f"(ostatnie id: {counters.search_index})."
    )

    if args.show:
        for result in results:
            _show_table(result)


# ---------------------------------------------------------------------------
# Rejestracja parsera
# ---------------------------------------------------------------------------

def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "index",
        help="Indeksuje plik HTML lub katalog plików HTML (JSON / baza).",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Dzieli strony wyznań i katechizmów na jednostki wyszukiwania (SearchIndex)
wraz z odnośnikami do Pisma (ScriptureIndex) i zapisuje wynik.

Pomijane pliki: index.html, privacy.html, terms.html.
Pierwszy nieprawidłowy dokument przerywa indeksowanie.

Przykłady:
  cfi index westminster.html --show
  cfi index strona/ --out json
  cfi index strona/ --out db
  cfi index heidelberg.html --out json --start-id 1000
        """,
    )
    p.add_argument(
        "path",
        metavar="ŚCIEŻKA",
        help="Plik .html albo katalog z plikami .html.",
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
        help="Ostatnie użyte id jednostki; numeracja od N+1 "
             "(domyślnie: 0, a przy zapisie do bazy MAX(id) z bazy).",
    )
    p.add_argument(
        "--show",
        action="store_true",
        help="Wyświetl tabelę jednostek w terminalu po zapisie.",
    )
    p.set_defaults(func=run)
