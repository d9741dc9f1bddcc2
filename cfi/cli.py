"""
cfi — narzędzie CLI indeksu wyznań i katechizmów.

Użycie:
  cfi <komenda> [opcje]

Komendy:
  index         Dzieli pliki HTML na jednostki wyszukiwania (JSON / baza).
  index-url     Pobiera stronę HTML i indeksuje ją.
  synonyms      Wyświetla tabelę synonimów lub zapisuje ją do bazy.
  apply-schema  Tworzy tabele z db/schema.sql (idempotentne).
  reset         Usuwa dane indeksu (confession / search-index / synonyms / all).
"""

from __future__ import annotations

import argparse
import sys

# Windows: terminal może używać cp1252, wymuszamy UTF-8 dla znaków
# typograficznych w tytułach dokumentów i tekstach pomocy.
if hasattr(sys.stdout, "reconfigure"):
    sys.stdout.reconfigure(encoding="utf-8", errors="replace")
if hasattr(sys.stderr, "reconfigure"):
    sys.stderr.reconfigure(encoding="utf-8", errors="replace")

from cfi.commands import index as cmd_index
from cfi.commands import index_url as cmd_index_url
from cfi.commands import synonyms as cmd_synonyms
from cfi.commands import apply_schema as cmd_apply_schema
from cfi.commands import reset as cmd_reset


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cfi",
        description="Confessions Indexer — narzędzie CLI.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version", action="version", version="cfi 0.1.0"
    )

    subparsers = parser.add_subparsers(
        title="komendy",
        metavar="<komenda>",
        dest="command",
    )
    subparsers.required = True

    cmd_index.add_parser(subparsers)
    cmd_index_url.add_parser(subparsers)
    cmd_synonyms.add_parser(subparsers)
    cmd_apply_schema.add_parser(subparsers)
    cmd_reset.add_parser(subparsers)

    return parser


def main() -> None:
    parser = build_parser()
    args = parser.parse_args()
    args.func(args)


if __name__ == "__main__":
    main()
