"""
scripture/books.py — księgi Biblii (kanon protestancki, 66 ksiąg).

BOOKS: (nazwa kanoniczna, liczba rozdziałów, skróty)
Skróty są porównywane bez wielkości liter i bez kropek.
"""

from __future__ import annotations

BOOKS: tuple[tuple[str, int, tuple[str, ...]], ...] = (
    # Stary Testament
    ("Genesis",          50, ("gen", "ge", "gn")),
    ("Exodus",           40, ("exod", "exo", "ex")),
    ("Leviticus",        27, ("lev", "le", "lv")),
    ("Numbers",          36, ("num", "nu", "nm", "numb")),
    ("Deuteronomy",      34, ("deut", "de", "dt")),
    ("Joshua",           24, ("josh", "jos", "jsh")),
    ("Judges",           21, ("judg", "jdg", "jg")),
    ("Ruth",              4, ("rth", "ru")),
    ("1 Samuel",         31, ("1 sam", "1 sa", "1sam", "i sam", "i samuel")),
    ("2 Samuel",         24, ("2 sam", "2 sa", "2sam", "ii sam", "ii samuel")),
    ("1 Kings",          22, ("1 kgs", "1 ki", "1kgs", "i kgs", "i kings")),
    ("2 Kings",          25, ("2 kgs", "2 ki", "2kgs", "ii kgs", "ii kings")),
    ("1 Chronicles",     29, ("1 chron", "1 chr", "1 ch", "i chron", "i chronicles")),
    ("2 Chronicles",     36, ("2 chron", "2 chr", "2 ch", "ii chron", "ii chronicles")),
    ("Ezra",             10, ("ezr",)),
    ("Nehemiah",         13, ("neh", "ne")),
    ("Esther",           10, ("esth", "est", "es")),
    ("Job",              42, ("jb",)),
    ("Psalms",          150, ("psalm", "ps", "psa", "pss", "psal")),
    ("Proverbs",         31, ("prov", "pro", "prv", "pr")),
    ("Ecclesiastes",     12, ("eccles", "eccl", "ecc", "ec", "qoh")),
    ("Song of Solomon",   8, ("song of songs", "song", "sos", "cant", "canticles")),
    ("Isaiah",           66, ("isa", "is")),
    ("Jeremiah",         52, ("jer", "je", "jr")),
    ("Lamentations",      5, ("lam", "la")),
    ("Ezekiel",          48, ("ezek", "eze", "ezk")),
    ("Daniel",           12, ("dan", "da", "dn")),
    ("Hosea",            14, ("hos", "ho")),
    ("Joel",              3, ("jl",)),
    ("Amos",              9, ("am",)),
    ("Obadiah",           1, ("obad", "ob")),
    ("Jonah",             4, ("jon", "jnh")),
    ("Micah",             7, ("mic", "mc")),
    ("Nahum",             3, ("nah", "na")),
    ("Habakkuk",          3, ("hab", "hb")),
    ("Zephaniah",         3, ("zeph", "zep", "zp")),
    ("Haggai",            2, ("hag", "hg")),
    ("Zechariah",        14, ("zech", "zec", "zc")),
    ("Malachi",           4, ("mal", "ml")),
    # Nowy Testament
    ("Matthew",          28, ("matt", "mat", "mt")),
    ("Mark",             16, ("mrk", "mar", "mk", "mr")),
    ("Luke",             24, ("luk", "lk")),
    ("John",             21, ("joh", "jhn", "jn")),
    ("Acts",             28, ("act", "ac")),
    ("Romans",           16, ("rom", "ro", "rm")),
    ("1 Corinthians",    16, ("1 cor", "1 co", "1cor", "i cor", "i corinthians")),
    ("2 Corinthians",    13, ("2 cor", "2 co", "2cor", "ii cor", "ii corinthians")),
    ("Galatians",         6, ("gal", "ga")),
    ("Ephesians",         6, ("eph", "ephes")),
    ("Philippians",       4, ("phil", "php", "pp")),
    ("Colossians",        4, ("col", "co")),
    ("1 Thessalonians",   5, ("1 thess", "1 thes", "1 th", "i thess", "i thessalonians")),
    ("2 Thessalonians",   3, ("2 thess", "2 thes", "2 th", "ii thess", "ii thessalonians")),
    ("1 Timothy",         6, ("1 tim", "1 ti", "1tim", "i tim", "i timothy")),
    ("2 Timothy",         4, ("2 tim", "2 ti", "2tim", "ii tim", "ii timothy")),
    ("Titus",             3, ("tit", "ti")),
    ("Philemon",          1, ("philem", "phm", "pm")),
    ("Hebrews",          13, ("heb",)),
    ("James",             5, ("jas", "jm")),
    ("1 Peter",           5, ("1 pet", "1 pe", "1pet", "i pet", "i peter")),
    ("2 Peter",           3, ("2 pet", "2 pe", "2pet", "ii pet", "ii peter")),
    ("1 John",            5, ("1 jn", "1 jhn", "1jn", "i jn", "i john")),
    ("2 John",            1, ("2 jn", "2 jhn", "2jn", "ii jn", "ii john")),
    ("3 John",            1, ("3 jn", "3 jhn", "3jn", "iii jn", "iii john")),
    ("Jude",              1, ("jud", "jd")),
    ("Revelation",       22, ("rev", "re", "rv", "apoc", "revelations")),
)


def _lookup() -> dict[str, str]:
    table: dict[str, str] = {}
    for name, _chapters, aliases in BOOKS:
        table[name.lower()] = name
        for alias in aliases:
            table[alias] = name
    return table


# klucz: nazwa/skrót małymi literami, bez kropek → nazwa kanoniczna
BOOK_LOOKUP: dict[str, str] = _lookup()

SINGLE_CHAPTER_BOOKS: frozenset[str] = frozenset(
    name for name, chapters, _ in BOOKS if chapters == 1
)
