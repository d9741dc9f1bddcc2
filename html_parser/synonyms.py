"""
html_parser/synonyms.py — tabela synonimów stosowana przy normalizacji.

Zamiany są wrażliwe na wielkość liter i wykonywane w kolejności tabeli
(późniejsza para może działać na wyniku wcześniejszej), dlatego forma
pisana wielką literą potrzebuje osobnej pary.
"""

from __future__ import annotations

from data_model.confessions import Synonym

SYNONYMS: tuple[Synonym, ...] = (
    Synonym("catholick", "catholic"),
    Synonym("Catholick", "Catholic"),
)
