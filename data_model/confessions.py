"""
data_model/confessions.py — rekordy indeksu wyznań i katechizmów.

Confession      — jeden dokument HTML (wyznanie, katechizm, credo).
SearchIndex     — jedna jednostka wyszukiwania (fragment treści z tytułem).
ScriptureIndex  — odnośnik do Pisma (księga + rozdział) w jednostce.
Synonym         — para zamiany słowa (forma archaiczna → preferowana).
IdCounters      — ostatnie użyte identyfikatory, przekazywane między dokumentami.
ParseResult     — wynik parsowania jednego dokumentu.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace


@dataclass(slots=True, frozen=True)
class Confession:
    id: int
    country: str
    file_name: str         # np. "westminster.html" (bez kotwicy)
    title: str             # zdekodowany <title> strony
    tradition: str
    year: int
    quiz: bool = False


@dataclass(slots=True)
class SearchIndex:
    id: int
    confession_id: int
    file_name: str         # "plik.html" lub "plik.html#q1"
    title: str             # "Tytuł strony: Question & Answer 1"
    contents: str = ""     # budowane przyrostowo, nigdy puste przy emisji


@dataclass(slots=True)
class ScriptureIndex:
    id: int
    address: str           # href odnośnika, np. "https://goto.bible/Romans3:23"
    reference: str         # widoczny tekst odnośnika, np. "Romans 3:23"
    book: str
    chapter_number: int
    search_index_id: int

    @property
    def key(self) -> tuple[int, str, int]:
        """Klucz unikalności: (search_index_id, book, chapter_number)."""
        return (self.search_index_id, self.book, self.chapter_number)


@dataclass(slots=True, frozen=True)
class Synonym:
    alternate_word: str
    preferred_word: str


@dataclass(slots=True, frozen=True)
class IdCounters:
    """
    Ostatnie przydzielone identyfikatory (0 = nic jeszcze nie przydzielono).

    Parser nie trzyma globalnego licznika: dostaje IdCounters na wejściu
    i zwraca przesunięte w ParseResult.counters.
    """

    confession: int = 0
    search_index: int = 0
    scripture_index: int = 0

    def advance(self, **values: int) -> IdCounters:
        return replace(self, **values)


@dataclass(slots=True)
class ParseResult:
    confession: Confession
    search_index: list[SearchIndex] = field(default_factory=list)
    scripture_index: list[ScriptureIndex] = field(default_factory=list)
    counters: IdCounters = field(default_factory=IdCounters)
