"""
html_parser/markup.py — operacje na drzewie BeautifulSoup bez jego modyfikacji.

Znaczniki formatowania (pogrubienie, kursywa, proste tabele) są traktowane
jako przezroczyste: ich zawartość liczy się tak, jakby stała bezpośrednio
w rodzicu. Zastępuje to "rozpakowanie" tagów w źródłowym HTML.
"""

from __future__ import annotations

from collections.abc import Iterator

from bs4 import NavigableString, Tag
from bs4.element import PageElement, PreformattedString

FORMATTING_TAGS: frozenset[str] = frozenset({
    "b", "strong", "i", "em",
    "table", "thead", "tbody", "tfoot", "tr", "td", "th",
})


def iter_unwrapped(node: Tag, transparent: frozenset[str] = FORMATTING_TAGS) -> Iterator[PageElement]:
    """Dzieci węzła, z dziećmi tagów `transparent` wstawionymi w ich miejsce."""
    for child in node.children:
        if isinstance(child, Tag) and child.name in transparent:
            yield from iter_unwrapped(child, transparent)
        else:
            yield child


def direct_text(node: Tag, transparent: frozenset[str] = FORMATTING_TAGS) -> str:
    """
    Tekst bezpośrednich węzłów tekstowych (bez komentarzy i bez tekstu
    zagnieżdżonych elementów, poza przezroczystymi).
    """
    return "".join(
        str(child)
        for child in iter_unwrapped(node, transparent)
        if isinstance(child, NavigableString) and not isinstance(child, PreformattedString)
    )


def element_children(node: Tag) -> list[Tag]:
    return [c for c in node.children if isinstance(c, Tag)]


def attr(node: Tag, name: str) -> str:
    """Wartość atrybutu jako str ('' gdy brak); listy (np. class) łączone spacją."""
    value = node.get(name)
    if value is None:
        return ""
    if isinstance(value, list):
        return " ".join(value)
    return str(value)


def data_attr(node: Tag, name: str) -> str | None:
    """Atrybut data-<name>; None gdy brak (pusta wartość → '')."""
    value = node.get(f"data-{name}")
    if value is None:
        return None
    return attr(node, f"data-{name}")
