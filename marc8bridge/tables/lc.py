"""Graphic character sets, built from the Library of Congress mapping data.

Rows are read from ``pymarc.marc8_mapping``. The small sets are built when a
registry is created; the larger scripts are built the first time a registry
resolves one of them, so a process that only ever sees Latin data never
pays for the CJK table.
"""

import unicodedata
from typing import Collection, List

from ..charset import TableRow

CJK = "1"

# identifier -> display name, built eagerly
BUILTIN_SETS = {
    "B": "ASCII",
    "E": "Ansel",
    "b": "Subscripts",
    "p": "Superscripts",
    "g": "GreekSymbols",
}

# identifier -> display name, built on first use
LC_SETS = {
    "2": "Hebrew",
    "3": "BasicArabic",
    "4": "ExtendedArabic",
    "N": "BasicCyrillic",
    "Q": "ExtendedCyrillic",
    "S": "Greek",
    CJK: "CJK",
}


def _display_name(ucs: int) -> str:
    return unicodedata.name(chr(ucs), f"U+{ucs:04X}")


def load_rows(identifier: str, exclude: Collection[int] = ()) -> List[TableRow]:
    """Return the table rows for one of the :data:`BUILTIN_SETS` or
    :data:`LC_SETS` identifiers.

    Args:
        identifier: The designating character, e.g. ``'N'``.
        exclude: MARC-8 codes to leave out, e.g. those owned by the
            control set.

    Returns:
        ``(marc, ucs, name, combining)`` rows. CJK codes use 6 hex digits.

    Raises:
        KeyError: If the mapping data has no table for ``identifier``.
    """
    from pymarc import marc8_mapping

    codes = marc8_mapping.CODESETS[ord(identifier)]
    digits = 6 if identifier == CJK else 2

    rows = []
    for code, (ucs, combining) in sorted(codes.items()):
        if code in exclude:
            continue
        rows.append((f"{code:0{digits}X}", f"{ucs:04X}", _display_name(ucs), bool(combining)))
    return rows
