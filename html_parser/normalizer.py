"""
html_parser/normalizer.py — oczyszczanie tekstu jednostki wyszukiwania.

Kolejność kroków (ściśle):
  1. Dekodowanie encji HTML
  2. Zwinięcie białych znaków do pojedynczej spacji + trim
  3. Synonimy (tabela w kolejności, wrażliwe na wielkość liter)
  4. Znaki typograficzne: ’ ‘ → ',  “ ” → ",  — → " - "
  5. Naprawa interpunkcji po wycięciu tekstu odnośników do Pisma

Odnośniki do Pisma stoją w tekście inline, np. "... jak napisano (Romans 3:23).".
Tekst odnośnika nie wchodzi do treści jednostki, więc zostają po nim
artefakty typu " ()." albo "(; )." — krok 5 naprawia je stałą tabelą zamian.
"""

from __future__ import annotations

import html
import re
from collections.abc import Iterable

from data_model.confessions import Synonym
from html_parser.synonyms import SYNONYMS

# ---------------------------------------------------------------------------
# Stałe
# ---------------------------------------------------------------------------

_WHITESPACE_RE = re.compile(r"\s+")

# Pauza z opcjonalną spacją po każdej stronie.
_EM_DASH_RE = re.compile(r" ?— ?")

_TYPOGRAPHIC: tuple[tuple[str, str], ...] = (
    ("’", "'"),
    ("‘", "'"),
    ("“", '"'),
    ("”", '"'),
)

# Kolejność ma znaczenie, tabela przepisana dosłownie.
_CLEANUP: tuple[tuple[str, str], ...] = (
    (" - .", ""),
    (" ().", "."),
    (" ()", ""),
    ("(; ).", "."),
    (" , ", ", "),
    ("?.", "."),
    ("..", "."),
    (",.", "."),
)


# ---------------------------------------------------------------------------
# Publiczne API
# ---------------------------------------------------------------------------

def collapse_whitespace(text: str) -> str:
    """Zamienia każdy ciąg białych znaków na jedną spację i przycina brzegi."""
    return _WHITESPACE_RE.sub(" ", text).strip()


def apply_synonyms(text: str, synonyms: Iterable[Synonym] = SYNONYMS) -> str:
    for synonym in synonyms:
        text = text.replace(synonym.alternate_word, synonym.preferred_word)
    return text


def normalize(
    raw_text: str,
    synonyms: Iterable[Synonym] = SYNONYMS,
    decode_entities: bool = True,
) -> str:
    """
    Zwraca oczyszczony tekst fragmentu. Funkcja czysta, nie rzuca wyjątków.

    decode_entities=False pomija krok 1 dla tekstu już zdekodowanego przez
    BeautifulSoup (NavigableString), inaczej "&amp;lt;" w źródle dałoby "<".

    normalize(normalize(x)) == normalize(x), o ile wynik nie zawiera encji
    (np. z "&amp;lt;"): tabela naprawcza jest stosowana aż do punktu
    stałego ("..." → "." zamiast "..").
    """
    text = html.unescape(raw_text) if decode_entities else raw_text
    text = collapse_whitespace(text)
    text = apply_synonyms(text, synonyms)

    for old, new in _TYPOGRAPHIC:
        text = text.replace(old, new)
    text = _EM_DASH_RE.sub(" - ", text)

    previous = None
    while previous != text:
        previous = text
        # Zamiany mogą zostawić podwójne spacje, np. "——" → " -  - "
        text = collapse_whitespace(text)
        for old, new in _CLEANUP:
            text = text.replace(old, new)

    return text.strip()
