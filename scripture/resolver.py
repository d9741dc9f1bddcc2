"""
scripture/resolver.py — rozpoznawanie księgi i rozdziału z etykiety odnośnika.

Etykieta to widoczny tekst linku w dokumencie, np.:
  "Romans 3:23"   → ("Romans", 3)
  "1 Cor. 15:3-4" → ("1 Corinthians", 15)
  "Ps. 119"       → ("Psalms", 119)
  "Jude 3"        → ("Jude", 1)      księga jednorozdziałowa: liczba = werset

Nierozpoznana etykieta → UnresolvedReferenceError (błąd krytyczny dokumentu).
"""

from __future__ import annotations

import re
from collections.abc import Callable
from typing import TypeAlias

from scripture.books import BOOK_LOOKUP, BOOKS, SINGLE_CHAPTER_BOOKS

# Resolver: etykieta → (księga, numer rozdziału)
ChapterResolver: TypeAlias = Callable[[str], tuple[str, int]]

_LABEL_RE = re.compile(
    r"^\s*(?P<book>(?:[123]|i{1,3})?\s*[^\d\s][^\d]*?)\.?\s*(?P<chapter>\d+)(?P<rest>.*)$",
    re.IGNORECASE,
)
_LEADING_NUMBER_RE = re.compile(r"^([123])\s*")

_CHAPTER_COUNT: dict[str, int] = {name: chapters for name, chapters, _ in BOOKS}


class UnresolvedReferenceError(ValueError):
    """Etykieta odnośnika nie wskazuje księgi i rozdziału."""


def _book_key(raw: str) -> str:
    key = raw.lower().replace(".", " ")
    key = " ".join(key.split())
    return _LEADING_NUMBER_RE.sub(r"\1 ", key)


def find_book(raw: str) -> str | None:
    """Zwraca nazwę kanoniczną księgi dla nazwy lub skrótu (albo None)."""
    return BOOK_LOOKUP.get(_book_key(raw))


def resolve_chapter(label: str) -> tuple[str, int]:
    """Domyślny ChapterResolver."""
    m = _LABEL_RE.match(label.replace("\u00a0", " "))
    if m is None:
        raise UnresolvedReferenceError(f"Nie rozpoznano odnośnika: {label!r}")

    book = find_book(m.group("book"))
    if book is None:
        raise UnresolvedReferenceError(
            f"Nieznana księga {m.group('book').strip()!r} w odnośniku {label!r}"
        )

    chapter = int(m.group("chapter"))
    if book in SINGLE_CHAPTER_BOOKS and not m.group("rest").lstrip().startswith(":"):
        chapter = 1

    if not 1 <= chapter <= _CHAPTER_COUNT[book]:
        raise UnresolvedReferenceError(
            f"{book} nie ma rozdziału {chapter} (odnośnik {label!r})"
        )
    return book, chapter
