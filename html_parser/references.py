"""
html_parser/references.py — wyciąganie odnośników do Pisma z poddrzewa HTML.

Odnośnik to <a href="https://goto.bible/..."> — jego widoczny tekst jest
etykietą (reference), href adresem (address). Księgę i rozdział ustala
zewnętrzny resolver. Kontener z klasą "references" jest przechodzony tak,
jakby jego dzieci stały bezpośrednio w węźle.

Unikalność: (search_index_id, book, chapter_number) — pierwszy wygrywa.
"""

from __future__ import annotations

from bs4 import Tag

from data_model.confessions import ScriptureIndex
from html_parser.markup import attr, iter_unwrapped
from html_parser.normalizer import collapse_whitespace
from scripture.resolver import ChapterResolver

SCRIPTURE_ORIGIN = "https://goto.bible/"
REFERENCES_CLASS = "references"


class ReferenceCollector:
    """
    Uporządkowana lista odnośników jednego dokumentu + zbiór kluczy unikalności.

    Przydziela kolejne identyfikatory od last_id + 1.
    """

    def __init__(self, resolver: ChapterResolver, last_id: int = 0) -> None:
        self.resolver = resolver
        self.last_id = last_id
        self.entries: list[ScriptureIndex] = []
        self._keys: set[tuple[int, str, int]] = set()

    def add(self, search_index_id: int, address: str, reference: str) -> ScriptureIndex | None:
        """Dodaje odnośnik; zwraca None gdy (jednostka, księga, rozdział) już jest."""
        book, chapter_number = self.resolver(reference)
        key = (search_index_id, book, chapter_number)
        if key in self._keys:
            return None

        self.last_id += 1
        entry = ScriptureIndex(
            id=self.last_id,
            address=address,
            reference=reference,
            book=book,
            chapter_number=chapter_number,
            search_index_id=search_index_id,
        )
        self._keys.add(key)
        self.entries.append(entry)
        return entry

    def keep_only(self, search_index_ids: set[int]) -> list[ScriptureIndex]:
        """
        Zwraca odnośniki należące do podanych jednostek, z identyfikatorami
        przenumerowanymi bez dziur. Ustawia last_id na ostatni zachowany.
        """
        kept = [e for e in self.entries if e.search_index_id in search_index_ids]
        if len(kept) != len(self.entries):
            first = self.entries[0].id if self.entries else self.last_id + 1
            for offset, entry in enumerate(kept):
                entry.id = first + offset
            self.last_id = first - 1 + len(kept)
            self.entries = kept
            self._keys = {e.key for e in kept}
        return kept


def has_class(node: Tag, name: str) -> bool:
    return name in attr(node, "class").split()


def is_scripture_link(node: Tag) -> bool:
    if node.name != "a":
        return False
    href = attr(node, "href")
    return bool(href.strip()) and href.lower().startswith(SCRIPTURE_ORIGIN)


def extract_references(
    search_index_id: int,
    node: Tag,
    collector: ReferenceCollector,
    transparent: frozenset[str] = frozenset(),
) -> None:
    """
    Przechodzi dzieci węzła i rejestruje odnośniki w collectorze.

    transparent: tagi traktowane jak rozpakowane (patrz markup.iter_unwrapped);
    dla akapitów i punktów list to znaczniki formatowania.
    """
    for child in iter_unwrapped(node, transparent):
        if not isinstance(child, Tag):
            continue
        if has_class(child, REFERENCES_CLASS):
            extract_references(search_index_id, child, collector, transparent)
        elif is_scripture_link(child):
            collector.add(
                search_index_id,
                address=str(child["href"]),
                reference=collapse_whitespace(child.get_text()),
            )
