"""Escape sequence parsing.

MARC-8 switches working sets with ISO 2022 style escape sequences. Two
techniques are in use:

1. ``ESC`` followed by one byte, designating a small set into G0 (Greek
   symbols, subscripts, superscripts, or back to ASCII).
2. ``ESC``, one or two intermediate bytes selecting the register, then the
   final byte identifying the set, e.g. ``ESC ) 2`` puts Hebrew into G1.

The parser never mutates anything itself. It reports what it consumed and
which register assignments the sequence asks for.
"""

from enum import Enum
from typing import NamedTuple, Optional, Tuple

from .charset import ByteString
from .registry import CharacterSetRegistry, default_registry
from .state import Register, RegisterMutation

# Technique 1
ESCAPE = b"\x1b"
GREEK_SYMBOLS = b"\x67"
SUBSCRIPTS = b"\x62"
SUPERSCRIPTS = b"\x70"
ASCII_DEFAULT = b"\x73"

# Technique 2
SINGLE_G0_A = b"\x28"
SINGLE_G0_B = b"\x2c"
MULTI_G0_A = b"\x24"
MULTI_G0_B = b"\x24\x2c"

SINGLE_G1_A = b"\x29"
SINGLE_G1_B = b"\x2d"
MULTI_G1_A = b"\x24\x29"
MULTI_G1_B = b"\x24\x2d"

BASIC_ARABIC = b"\x33"
EXTENDED_ARABIC = b"\x34"
BASIC_LATIN = b"\x42"
CJK = b"\x31"
BASIC_CYRILLIC = b"\x4e"
EXTENDED_CYRILLIC = b"\x51"

DEFAULT_SKIP = 3

_ESC = ESCAPE[0]

# technique 1 byte -> set identifier
_SINGLE_BYTE = {
    GREEK_SYMBOLS[0]: "g",
    SUBSCRIPTS[0]: "b",
    SUPERSCRIPTS[0]: "p",
    ASCII_DEFAULT[0]: BASIC_LATIN.decode("ascii"),
}

_INTERMEDIATES = {
    SINGLE_G0_A: Register.G0,
    SINGLE_G0_B: Register.G0,
    MULTI_G0_A: Register.G0,
    MULTI_G0_B: Register.G0,
    SINGLE_G1_A: Register.G1,
    SINGLE_G1_B: Register.G1,
    MULTI_G1_A: Register.G1,
    MULTI_G1_B: Register.G1,
}


class EscapeStatus(Enum):
    SWITCHED = "switched"
    IGNORED = "ignored"  # well formed, but the set is not registered
    TRUNCATED = "truncated"
    UNRECOGNIZED = "unrecognized"


class EscapeResult(NamedTuple):
    """Outcome of parsing one escape sequence.

    Attributes:
        cursor: Position after the sequence. Equal to the input cursor when
            the sequence is truncated; the caller must still move past ESC.
        mutations: Register assignments to apply, possibly empty.
        status: How the sequence was interpreted.
        identifier: The set identifier named by the sequence, if any.
    """

    cursor: int
    mutations: Tuple[RegisterMutation, ...]
    status: EscapeStatus
    identifier: Optional[str] = None


class EscapeSequenceParser:
    """Parses escape sequences against a character set registry.

    Args:
        registry: Where set identifiers are resolved. Defaults to the
            process-wide registry.
        skip: How many bytes to skip, ESC included, when the byte after ESC
            matches neither technique. The customary value is 3; it is a
            recovery heuristic rather than anything MARC-8 defines.
    """

    def __init__(self, registry: Optional[CharacterSetRegistry] = None, skip: int = DEFAULT_SKIP):
        self.registry = registry or default_registry()
        self.skip = skip

    def parse(self, data: ByteString, cursor: int) -> EscapeResult:
        """Parse the escape sequence starting at ``data[cursor]`` (an ESC)."""
        end = len(data)
        if cursor + 1 >= end:
            return EscapeResult(cursor, (), EscapeStatus.TRUNCATED)

        first = data[cursor + 1]
        if first in _SINGLE_BYTE:
            return self._designate(Register.G0, _SINGLE_BYTE[first], cursor + 2)

        if first == MULTI_G0_A[0]:
            second = data[cursor + 2] if cursor + 2 < end else None
            if second in (MULTI_G0_B[1], MULTI_G1_A[1], MULTI_G1_B[1]):
                intermediate = bytes((first, second))
            else:
                intermediate = MULTI_G0_A
        else:
            intermediate = bytes((first,))
            if intermediate not in _INTERMEDIATES:
                return EscapeResult(min(cursor + self.skip, end), (), EscapeStatus.UNRECOGNIZED)

        final = cursor + 1 + len(intermediate)
        if final >= end:
            return EscapeResult(cursor, (), EscapeStatus.TRUNCATED)
        return self._designate(_INTERMEDIATES[intermediate], chr(data[final]), final + 1)

    def _designate(self, register: Register, identifier: str, cursor: int) -> EscapeResult:
        charset = self.registry.find(identifier)
        if charset is None:
            return EscapeResult(cursor, (), EscapeStatus.IGNORED, identifier)
        return EscapeResult(
            cursor, (RegisterMutation(register, charset),), EscapeStatus.SWITCHED, identifier
        )


def is_escape(data: ByteString, cursor: int) -> bool:
    return data[cursor] == _ESC
