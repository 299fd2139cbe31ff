"""Resolution of MARC-8 character set identifiers to tables.

A :class:`CharacterSetRegistry` maps the final byte of a designating escape
sequence (``'E'`` for Ansel, ``'N'`` for basic Cyrillic, ...) to a shared
:class:`~marc8bridge.charset.CharacterSet`. Small sets are built when the
registry is created; the larger ones are built the first time they are
resolved. Once built, a set is cached and handed out by reference, so an
on-demand set behaves exactly like an eager one.

Example:
    >>> registry = default_registry()
    >>> registry.resolve("E").name
    'Ansel'
    >>> registry.resolve("ansel") is registry.resolve(b"E")
    True
"""

import logging
import threading
from functools import lru_cache
from typing import Callable, Dict, FrozenSet, List, Optional, Union

from .charset import CharacterSet
from .exceptions import CharsetTableError, UnknownCharsetError
from .tables import BUILTIN_SETS, LC_SETS, controls, load_rows

logger = logging.getLogger(__name__)

Identifier = Union[str, bytes, bytearray, int]
Loader = Callable[[], CharacterSet]


@lru_cache(maxsize=None)
def control_set() -> CharacterSet:
    """The process-wide control character set."""
    return CharacterSet.from_rows(controls.NAME, None, controls.ROWS)


def _lc_loader(identifier: str, name: str, exclude: FrozenSet[int] = frozenset()) -> Loader:
    def load() -> CharacterSet:
        try:
            rows = load_rows(identifier, exclude)
        except KeyError as e:
            raise CharsetTableError(f"no mapping data for {name} ({identifier!r})") from e
        logger.debug("Loaded %s table (%d codes)", name, len(rows))
        return CharacterSet.from_rows(name, identifier, rows)

    return load


class _Entry:
    __slots__ = ("identifier", "name", "loader", "charset")

    def __init__(self, identifier: Optional[str], name: str, loader: Optional[Loader],
                 charset: Optional[CharacterSet] = None):
        self.identifier = identifier
        self.name = name
        self.loader = loader
        self.charset = charset


class CharacterSetRegistry:
    """Registry of MARC-8 character sets.

    Args:
        include_builtins: Register the standard MARC-8 sets (default True).
            An empty registry is mostly useful in tests.
    """

    def __init__(self, include_builtins: bool = True):
        self._lock = threading.RLock()
        self._by_identifier: Dict[str, _Entry] = {}
        self._by_name: Dict[str, _Entry] = {}
        if include_builtins:
            self._register_builtins()

    def _register_builtins(self) -> None:
        for identifier, name in BUILTIN_SETS.items():
            self.add(_lc_loader(identifier, name, controls.RESERVED)())
        self.add(control_set())
        for identifier, name in LC_SETS.items():
            self.register(identifier, name, _lc_loader(identifier, name))

    # -- registration -----------------------------------------------------

    def register(self, identifier: Optional[Identifier], name: str, loader: Loader) -> None:
        """Register a set that is built on first use.

        Args:
            identifier: Designating byte, or None for a set that is only
                reachable by name.
            name: Display name, also usable with :meth:`resolve`.
            loader: Zero-argument callable building the CharacterSet. It runs
                under the registry lock, which is reentrant, so it may resolve
                other sets of the same registry.

        Raises:
            UnknownCharsetError: If ``identifier`` is not a single byte.
            CharsetTableError: If the identifier or name is already taken.
        """
        self._insert(_Entry(self._normalize(identifier, strict=True), name, loader))

    def add(self, charset: CharacterSet) -> None:
        """Register an already built set under its identifier and name."""
        entry = _Entry(self._normalize(charset.identifier, strict=True), charset.name, None, charset)
        self._insert(entry)

    def _insert(self, entry: _Entry) -> None:
        key = entry.name.lower()
        with self._lock:
            if entry.identifier is not None and entry.identifier in self._by_identifier:
                raise CharsetTableError(f"identifier {entry.identifier!r} is already registered")
            if key in self._by_name:
                raise CharsetTableError(f"character set {entry.name!r} is already registered")
            if entry.identifier is not None:
                self._by_identifier[entry.identifier] = entry
            self._by_name[key] = entry

    # -- lookup -----------------------------------------------------------

    @staticmethod
    def _normalize(identifier: Optional[Identifier], strict: bool = False) -> Optional[str]:
        if identifier is None:
            return None
        if isinstance(identifier, int) and not isinstance(identifier, bool):
            if 0 <= identifier <= 0xFF:
                return chr(identifier)
        elif isinstance(identifier, (bytes, bytearray)):
            if len(identifier) == 1:
                return chr(identifier[0])
        elif isinstance(identifier, str):
            if len(identifier) == 1 or not strict:
                return identifier
        raise UnknownCharsetError(identifier)

    def _entry(self, identifier: Identifier) -> Optional[_Entry]:
        key = self._normalize(identifier)
        if key is None:
            raise UnknownCharsetError(identifier)
        entry = self._by_identifier.get(key)
        if entry is None:
            entry = self._by_name.get(key.lower())
        return entry

    def resolve(self, identifier: Identifier) -> CharacterSet:
        """Return the character set for an identifier or name.

        Args:
            identifier: Designating byte as str, bytes or int, or a set name.

        Returns:
            The shared CharacterSet.

        Raises:
            UnknownCharsetError: If nothing is registered under ``identifier``.
        """
        entry = self._entry(identifier)
        if entry is None:
            raise UnknownCharsetError(identifier)
        if entry.charset is None:
            with self._lock:
                if entry.charset is None:
                    entry.charset = entry.loader()
        return entry.charset

    def find(self, identifier: Identifier) -> Optional[CharacterSet]:
        """Like :meth:`resolve`, but return None instead of raising.

        This is what the decoder uses: an identifier it cannot resolve means
        that no switch takes place.
        """
        try:
            return self.resolve(identifier)
        except UnknownCharsetError:
            return None
        except CharsetTableError:
            logger.warning("Character set %r could not be loaded", identifier, exc_info=True)
            return None

    def is_loaded(self, identifier: Identifier) -> bool:
        entry = self._entry(identifier)
        return entry is not None and entry.charset is not None

    def identifiers(self) -> List[str]:
        return sorted(self._by_identifier)

    def names(self) -> List[str]:
        return [entry.name for entry in self._by_name.values()]

    def __contains__(self, identifier: object) -> bool:
        try:
            return self._entry(identifier) is not None
        except UnknownCharsetError:
            return False

    @property
    def controls(self) -> CharacterSet:
        return self.resolve("Controls")


@lru_cache(maxsize=None)
def default_registry() -> CharacterSetRegistry:
    """The process-wide registry with the standard MARC-8 sets."""
    return CharacterSetRegistry()
