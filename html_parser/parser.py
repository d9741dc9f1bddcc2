"""
html_parser/parser.py — podział strony wyznania/katechizmu na jednostki wyszukiwania.

Architektura:
  HTML → BeautifulSoup → <title> + article#main
  → Confession (atrybuty data-* artykułu)
  → flatten(): dzieci <ol>/<blockquote> wstawione zaraz po rodzicu
  → _Segmenter: przejście po rodzeństwie, granice jednostek wg klucza "plik#id"
  → ParseResult (Confession, SearchIndex[], ScriptureIndex[], IdCounters)

Kluczowe funkcje publiczne:
  parse_confession(html, file_name, ...)      -> ParseResult
  parse_confession_file(path, ...)            -> ParseResult
  parse_confession_url(url, ...)              -> ParseResult

Punkt listy z id (pytanie katechizmu) dopisuje swoją treść do jednostki
otwartej PRZED nim, nadaje jej swój klucz i tytuł, a następnie zamyka ją —
kolejna jednostka startuje bez klucza, dopóki nie nada go następny punkt.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from enum import StrEnum
from pathlib import Path, PurePosixPath
from urllib.parse import unquote, urlparse

import requests
from bs4 import BeautifulSoup, Tag

from data_model.confessions import (
    Confession,
    IdCounters,
    ParseResult,
    SearchIndex,
    Synonym,
)
from html_parser.markup import FORMATTING_TAGS, attr, data_attr, direct_text, element_children
from html_parser.normalizer import collapse_whitespace, normalize
from html_parser.references import ReferenceCollector, extract_references, has_class
from html_parser.synonyms import SYNONYMS
from scripture.resolver import ChapterResolver, resolve_chapter

# ---------------------------------------------------------------------------
# Stałe
# ---------------------------------------------------------------------------

_HEADING_TAGS = {"h3", "h4", "h5"}          # z id: zmieniają bieżący tytuł
_TEXT_TAGS = {"p", "li", "h5", "h6"}        # bez id: dostarczają treści
_CONTAINER_TAGS = {"div"}                   # bez id: tylko odnośniki
_FLATTEN_TAGS = {"ol", "blockquote"}
_LIST_TAGS = {"ol", "ul"}

_NOINDEX_CLASS = "noindex"

# Tytuł strony zawierający te słowa → "Article N", w przeciwnym razie "Question & Answer N"
_ARTICLE_TITLE_WORDS = ("articles", "confession")

_DIGITS_RE = re.compile(r"\d")


class ConfessionFormatError(ValueError):
    """Dokument nie ma wymaganej struktury lub atrybutu — odrzucony w całości."""


class _Role(StrEnum):
    HEADING = "heading"          # h3–h5 z id
    ITEM = "item"                # li z id
    ANCHOR = "anchor"            # inny węzeł z id
    TEXT = "text"                # p / li / h5 / h6 bez id
    CONTAINER = "container"      # div bez id
    OTHER = "other"


# ---------------------------------------------------------------------------
# Publiczne API
# ---------------------------------------------------------------------------

def parse_confession(
    html: str | bytes,
    file_name: str,
    counters: IdCounters | None = None,
    resolver: ChapterResolver = resolve_chapter,
    synonyms: Iterable[Synonym] = SYNONYMS,
) -> ParseResult:
    """
    Parsuje jeden dokument HTML.

    Args:
        html:      Treść strony.
        file_name: Nazwa pliku (bez ścieżki), np. "heidelberg.html".
        counters:  Ostatnie użyte identyfikatory; numeracja jest kontynuowana.
        resolver:  Etykieta odnośnika → (księga, rozdział).
        synonyms:  Tabela synonimów dla normalizacji tekstu.

    Raises:
        ConfessionFormatError: brak <title>, article#main lub poprawnego data-year.
    """
    soup = BeautifulSoup(html, "html.parser")
    counters = counters or IdCounters()

    title_node = soup.find("title")
    if not isinstance(title_node, Tag):
        raise ConfessionFormatError(f"{file_name}: brak elementu <title>")
    article = soup.find("article", id="main")
    if not isinstance(article, Tag):
        raise ConfessionFormatError(f"{file_name}: brak elementu article#main")

    page_title = collapse_whitespace(title_node.get_text())
    confession = _build_confession(article, page_title, file_name, counters.confession + 1)

    segmenter = _Segmenter(
        page_title=page_title,
        file_name=file_name,
        confession_id=confession.id,
        last_id=counters.search_index,
        collector=ReferenceCollector(resolver, counters.scripture_index),
        synonyms=tuple(synonyms),
    )
    units = segmenter.run(flatten(article.children))
    references = segmenter.collector.keep_only({u.id for u in units})

    return ParseResult(
        confession=confession,
        search_index=units,
        scripture_index=references,
        counters=counters.advance(
            confession=confession.id,
            search_index=segmenter.last_id,
            scripture_index=segmenter.collector.last_id,
        ),
    )


def parse_confession_file(path: str | Path, **kwargs) -> ParseResult:
    """Wczytuje plik HTML z dysku i parsuje go (nazwa pliku = klucz jednostek)."""
    path = Path(path)
    return parse_confession(path.read_bytes(), path.name, **kwargs)


def parse_confession_url(url: str, file_name: str | None = None, **kwargs) -> ParseResult:
    """Pobiera stronę HTML z podanego URL i parsuje ją."""
    headers = {
        "User-Agent": (
            "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
            "AppleWebKit/537.36 (KHTML, like Gecko) "
            "Chrome/120.0.0.0 Safari/537.36"
        )
    }
    resp = requests.get(url, timeout=30, headers=headers)
    resp.raise_for_status()
    resp.encoding = resp.apparent_encoding or "utf-8"

    return parse_confession(resp.text, file_name or file_name_from_url(url), **kwargs)


def file_name_from_url(url: str) -> str:
    """Ostatni segment ścieżki URL, np. ".../creeds/nicene.html" → "nicene.html"."""
    name = PurePosixPath(unquote(urlparse(url).path)).name
    return name or "index.html"


def flatten(nodes: Iterable) -> list[Tag]:
    """
    Nowa, płaska lista elementów: każdy <ol>/<blockquote> jest zaraz po sobie
    uzupełniony o własne dzieci (rekurencyjnie, w kolejności dokumentu).
    Drzewo wejściowe nie jest modyfikowane.
    """
    flat: list[Tag] = []
    for node in nodes:
        if not isinstance(node, Tag):
            continue
        flat.append(node)
        if node.name in _FLATTEN_TAGS:
            flat.extend(flatten(node.children))
    return flat


def item_label(page_title: str, number: str) -> str:
    lowered = page_title.lower()
    if any(word in lowered for word in _ARTICLE_TITLE_WORDS):
        return f"Article {number}"
    return f"Question & Answer {number}"


def heading_text(node: Tag) -> str:
    # Niektóre dokumenty zapisują nagłówki jako "[Article I.]"
    return collapse_whitespace(node.get_text()).lstrip("[").rstrip("].").strip()


# ---------------------------------------------------------------------------
# Wewnętrzna implementacja
# ---------------------------------------------------------------------------

def _build_confession(article: Tag, page_title: str, file_name: str, confession_id: int) -> Confession:
    raw_year = data_attr(article, "year")
    if raw_year is None:
        raise ConfessionFormatError(f"{file_name}: article#main nie ma atrybutu data-year")
    try:
        year = int(raw_year.strip())
    except ValueError as e:
        raise ConfessionFormatError(
            f"{file_name}: data-year={raw_year!r} nie jest liczbą całkowitą"
        ) from e

    quiz = data_attr(article, "quiz")
    return Confession(
        id=confession_id,
        country=data_attr(article, "country") or "",
        file_name=file_name,
        title=page_title,
        tradition=data_attr(article, "tradition") or "",
        year=year,
        quiz=quiz is not None and quiz.strip().lower() not in ("false", "0", "no"),
    )


def _classify(node: Tag) -> _Role:
    if attr(node, "id").strip():
        if node.name in _HEADING_TAGS:
            return _Role.HEADING
        if node.name == "li":
            return _Role.ITEM
        return _Role.ANCHOR
    if node.name in _TEXT_TAGS:
        return _Role.TEXT
    if node.name in _CONTAINER_TAGS:
        return _Role.CONTAINER
    return _Role.OTHER


class _Segmenter:
    """
    Stan przejścia: bieżąca (zawsze istniejąca, być może pusta) jednostka
    i bieżący tytuł.

    Identyfikatory: bieżąca jednostka ma zawsze id = last_id. Jednostka pusta
    w chwili zamknięcia nie jest emitowana i oddaje swoje id następnej.
    """

    def __init__(
        self,
        page_title: str,
        file_name: str,
        confession_id: int,
        last_id: int,
        collector: ReferenceCollector,
        synonyms: tuple[Synonym, ...],
    ) -> None:
        self.page_title = page_title
        self.file_name = file_name
        self.confession_id = confession_id
        self.collector = collector
        self.synonyms = synonyms

        self.title = page_title
        self.last_id = last_id + 1
        self.current = self._new_unit(file_name, page_title)
        self.units: list[SearchIndex] = []

    def run(self, nodes: list[Tag]) -> list[SearchIndex]:
        for node in nodes:
            role = _classify(node)
            match role:
                case _Role.HEADING | _Role.ITEM | _Role.ANCHOR:
                    self._visit_anchored(node, role)
                case _Role.TEXT:
                    if not has_class(node, _NOINDEX_CLASS):
                        self._add_content(node)
                case _Role.CONTAINER:
                    extract_references(self.current.id, node, self.collector)
                case _Role.OTHER:
                    pass

        if self.current.contents.strip():
            self._emit(self.current)
        else:
            self.last_id -= 1
        return self.units

    # -- węzły z id ----------------------------------------------------------

    def _visit_anchored(self, node: Tag, role: _Role) -> None:
        key = f"{self.file_name}#{attr(node, 'id')}"
        override = (data_attr(node, "title") or "").strip()

        if role is _Role.HEADING:
            self.title = f"{self.page_title}: {heading_text(node)}"
        elif role is _Role.ITEM:
            number = "".join(_DIGITS_RE.findall(attr(node, "id")))
            if number:
                label = override or item_label(self.page_title, number)
                self.title = f"{self.page_title}: {label}"

            self._add_content(node)

            # Treść punktu należy do jednostki otwartej przed nim
            self.current.file_name = key
            self.current.title = self.title
            key = ""

        if override:
            self.title = f"{self.page_title}: {override}"

        if key != self.current.file_name:
            self._close_and_open(key)

    # -- treść ---------------------------------------------------------------

    def _add_content(self, node: Tag) -> None:
        self._append(direct_text(node))
        for nested in element_children(node):
            if nested.name not in _LIST_TAGS:
                continue
            for item in element_children(nested):
                if item.name != "li":
                    continue
                self._append(direct_text(item))
                extract_references(self.current.id, item, self.collector, FORMATTING_TAGS)
        extract_references(self.current.id, node, self.collector, FORMATTING_TAGS)

    def _append(self, raw_text: str) -> None:
        text = normalize(raw_text, self.synonyms, decode_entities=False)
        if not text:
            return
        if self.current.contents.strip():
            self.current.contents += " "
        self.current.contents += text

    # -- granice jednostek ---------------------------------------------------

    def _new_unit(self, file_name: str, title: str) -> SearchIndex:
        return SearchIndex(
            id=self.last_id,
            confession_id=self.confession_id,
            file_name=file_name,
            title=title,
        )

    def _close_and_open(self, file_name: str) -> None:
        if self.current.contents.strip():
            self._emit(self.current)
            self.last_id += 1
        self.current = self._new_unit(file_name, self.title)

    def _emit(self, unit: SearchIndex) -> None:
        if not unit.file_name:
            unit.file_name = self.file_name
        self.units.append(unit)
