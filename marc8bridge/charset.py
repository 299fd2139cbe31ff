"""Character set tables: the MARC-8 code to Unicode mappings.

Every MARC-8 graphic set is represented by one data-driven
:class:`CharacterSet` built from :class:`CodeMapping` rows. There is no
per-charset subclass; a set is simply its name, its identifier and its
table.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Iterator, Optional, Tuple, Union

from .exceptions import CharsetTableError

ByteString = Union[bytes, bytearray, memoryview]

# (marc hex, ucs hex, display name, is combining)
TableRow = Tuple[str, str, str, bool]


@dataclass(frozen=True)
class CodeMapping:
    """A single MARC-8 to Unicode mapping.

    Attributes:
        charset_code: Identifier of the owning character set (e.g. ``'E'``
            for Ansel). Empty for the control set, which has no designator.
        marc: MARC-8 bytes as hex, 2 digits for one-byte sets and 6 digits
            for the three-byte CJK set.
        ucs: Unicode code point as hex.
        name: Descriptive name of the code point.
        is_combining: Whether the character is a combining mark.
    """

    charset_code: str
    marc: str
    ucs: str
    name: str = ""
    is_combining: bool = False

    def __post_init__(self) -> None:
        if len(self.charset_code) > 1:
            raise CharsetTableError(
                f"charset code must be a single character, got {self.charset_code!r}"
            )
        if len(self.marc) not in (2, 6):
            raise CharsetTableError(f"invalid hex code size: {self.marc} in {self}")
        try:
            int(self.marc, 16)
            int(self.ucs, 16)
        except ValueError as e:
            raise CharsetTableError(f"invalid hex value in {self}") from e

    @property
    def byte_width(self) -> int:
        """Number of MARC-8 bytes in this code (1 or 3)."""
        return len(self.marc) // 2

    @property
    def char_value(self) -> str:
        """The Unicode character."""
        return chr(int(self.ucs, 16))

    @property
    def marc_value(self) -> bytes:
        """The raw MARC-8 bytes."""
        return bytes.fromhex(self.marc)

    @property
    def hash_code(self) -> str:
        """Key made of the charset code and the MARC-8 bytes, e.g. ``'E:\\xe1'``."""
        return f"{self.charset_code}:{self.marc_value.decode('latin-1')}"

    def __str__(self) -> str:
        text = (
            f"{self.name}: charset_code={self.charset_code} "
            f"marc={self.marc} ucs={self.ucs} "
        )
        if self.is_combining:
            text += " combining"
        return text


class CharacterSet:
    """A MARC-8 graphic (or control) character set.

    Instances are immutable once built and are shared by every engine that
    resolves them.

    Args:
        name: Display name, e.g. ``"Ansel"``.
        identifier: The designating byte as a one-character string (``'E'``),
            or None for sets that cannot be designated by escape.
        mappings: The code mappings. Keys must be unique and every mapping
            must have the same byte width.

    Raises:
        CharsetTableError: If the table is malformed.
    """

    def __init__(self, name: str, identifier: Optional[str], mappings: Iterable[CodeMapping]):
        table = {}
        width = None
        for mapping in mappings:
            if width is None:
                width = mapping.byte_width
            elif mapping.byte_width != width:
                raise CharsetTableError(
                    f"{name}: mixed code widths ({width} and {mapping.byte_width} bytes)"
                )
            key = mapping.marc_value
            if key in table:
                raise CharsetTableError(f"{name}: duplicate MARC-8 code {mapping.marc}")
            table[key] = mapping

        self._name = name
        self._identifier = identifier
        self._byte_width = width or 1
        self._table = MappingProxyType(table)

    @classmethod
    def from_rows(cls, name: str, identifier: Optional[str], rows: Iterable[TableRow]) -> "CharacterSet":
        """Build a set from ``(marc, ucs, name, combining)`` rows."""
        code = identifier or ""
        return cls(
            name,
            identifier,
            (CodeMapping(code, marc.upper(), ucs.upper(), label, bool(combining))
             for marc, ucs, label, combining in rows),
        )

    @property
    def name(self) -> str:
        return self._name

    @property
    def identifier(self) -> Optional[str]:
        return self._identifier

    @property
    def byte_width(self) -> int:
        return self._byte_width

    def lookup(self, marc: ByteString) -> Optional[CodeMapping]:
        """Return the mapping for exactly these MARC-8 bytes, or None."""
        return self._table.get(bytes(marc))

    def is_combining(self, marc: ByteString) -> bool:
        mapping = self.lookup(marc)
        return mapping is not None and mapping.is_combining

    def mappings(self) -> Iterator[CodeMapping]:
        return iter(self._table.values())

    def __iter__(self) -> Iterator[CodeMapping]:
        return self.mappings()

    def __len__(self) -> int:
        return len(self._table)

    def __contains__(self, marc: object) -> bool:
        if not isinstance(marc, (bytes, bytearray, memoryview)):
            return False
        return bytes(marc) in self._table

    def __repr__(self) -> str:
        return (
            f"CharacterSet(name={self._name!r}, identifier={self._identifier!r}, "
            f"codes={len(self._table)})"
        )
