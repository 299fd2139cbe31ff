"""Working set registers.

A MARC-8 stream always has two working graphic sets: G0, invoked through
the low half of the byte range (GL, 0x21-0x7E), and G1, invoked through the
high half (GR, 0xA1-0xFE). :class:`WorkingSetState` holds the pair as an
immutable value so that a decode can thread it through explicitly instead
of mutating shared engine state.
"""

from dataclasses import dataclass, replace
from enum import IntEnum
from typing import Iterable, NamedTuple, Optional

from .charset import ByteString, CharacterSet, CodeMapping

_ESC = 0x1B


class Register(IntEnum):
    G0 = 0
    G1 = 1


class RegisterMutation(NamedTuple):
    """Assignment of a character set to a register."""

    register: Register
    charset: CharacterSet


class Match(NamedTuple):
    """A successful register lookup."""

    mapping: CodeMapping
    width: int
    register: Register


@dataclass(frozen=True)
class WorkingSetState:
    """The G0/G1 register pair. Neither register may be empty."""

    g0: CharacterSet
    g1: CharacterSet

    def __post_init__(self) -> None:
        for label, charset in (("g0", self.g0), ("g1", self.g1)):
            if not isinstance(charset, CharacterSet):
                raise TypeError(f"{label} must be a CharacterSet, got {charset!r}")

    def apply(self, mutations: Iterable[RegisterMutation]) -> "WorkingSetState":
        """Return the state after applying ``mutations`` in order."""
        state = self
        for mutation in mutations:
            if mutation.register is Register.G0:
                state = replace(state, g0=mutation.charset)
            else:
                state = replace(state, g1=mutation.charset)
        return state

    def lookup(self, data: ByteString, cursor: int) -> Optional[Match]:
        """Look up the code at ``cursor`` in G0, then in G1.

        Each register reads as many bytes as its set is wide. A one-byte set
        tabulated in the other half of the byte range is found by toggling
        the high bit: a byte below 0x80 may reach a G0 set tabulated at
        0xA1-0xFE (Ansel designated into G0), and a byte at or above 0x80 may
        reach a G1 set tabulated at 0x21-0x7E (Hebrew designated into G1).
        """
        for register, charset in ((Register.G0, self.g0), (Register.G1, self.g1)):
            width = charset.byte_width
            chunk = bytes(data[cursor:cursor + width])
            # a multibyte code never spans an ESC
            if len(chunk) < width or _ESC in chunk[1:]:
                continue
            mapping = charset.lookup(chunk)
            if mapping is None and width == 1:
                byte = chunk[0]
                if (register is Register.G0) == (byte < 0x80):
                    mapping = charset.lookup(bytes((byte ^ 0x80,)))
            if mapping is not None:
                return Match(mapping, width, register)
        return None

    def describe(self) -> str:
        """Human-readable register summary, e.g. ``'ASCII(G0), Ansel(G1)'``."""
        return f"{self.g0.name}(G0), {self.g1.name}(G1)"
