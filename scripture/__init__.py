"""
scripture — domyślny resolver odnośników do Pisma.

Publiczne API:
  resolve_chapter(label)      → (księga, rozdział)
  find_book(name)             → nazwa kanoniczna lub None
  ChapterResolver             typ resolvera (etykieta → (księga, rozdział))
  UnresolvedReferenceError    nierozpoznana etykieta
"""

from .resolver import (
    ChapterResolver,
    UnresolvedReferenceError,
    find_book,
    resolve_chapter,
)

__all__ = [
    "ChapterResolver",
    "UnresolvedReferenceError",
    "find_book",
    "resolve_chapter",
]
