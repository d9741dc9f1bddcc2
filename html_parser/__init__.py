"""
html_parser — podział stron wyznań na jednostki wyszukiwania.

Publiczne API:
  parse_confession(html, file_name, ...)   → ParseResult
  parse_confession_file(path, ...)         → ParseResult
  parse_confession_url(url, ...)           → ParseResult
  normalize(text, synonyms)                → oczyszczony tekst
  extract_references(id, node, collector)  odnośniki do Pisma z poddrzewa
  ReferenceCollector                       lista odnośników + unikalność
  ConfessionFormatError                    dokument odrzucony
  SYNONYMS                                 domyślna tabela synonimów
"""

from .normalizer import normalize
from .parser import (
    ConfessionFormatError,
    parse_confession,
    parse_confession_file,
    parse_confession_url,
)
from .references import ReferenceCollector, extract_references
from .synonyms import SYNONYMS

__all__ = [
    "ConfessionFormatError",
    "ReferenceCollector",
    "SYNONYMS",
    "extract_references",
    "normalize",
    "parse_confession",
    "parse_confession_file",
    "parse_confession_url",
]
