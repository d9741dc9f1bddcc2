"""
data_model — struktury danych indeksu wyznań.

Użycie:
  from data_model import Confession, SearchIndex, ScriptureIndex, ...

Moduły:
  confessions — Confession, SearchIndex, ScriptureIndex, Synonym,
                IdCounters, ParseResult

Mapowanie na schemat (db/schema.sql):
  Confession     → confession
  SearchIndex    → search_index      (FK confession_id)
  ScriptureIndex → scripture_index   (FK search_index_id,
                                      UNIQUE search_index_id+book+chapter_number)
  Synonym        → synonym
"""

from .confessions import (
    Confession,
    SearchIndex,
    ScriptureIndex,
    Synonym,
    IdCounters,
    ParseResult,
)

__all__ = [
    "Confession",
    "SearchIndex",
    "ScriptureIndex",
    "Synonym",
    "IdCounters",
    "ParseResult",
]
