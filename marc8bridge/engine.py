"""The MARC-8 to Unicode transcoding engine.

Example:
    >>> engine = TranscodingEngine()
    >>> engine.decode(b"caf\\xe2e")
    'cafe\u0301'

    >>> result = engine.transcode(b"\\x1bgabc")
    >>> result.text, result.state.g0.name
    ('αβγ', 'GreekSymbols')
"""

from dataclasses import replace
from typing import List, NamedTuple, Optional, Tuple, Union

from .charset import ByteString, CharacterSet
from .combining import CombiningCharacterReorderer
from .config import EngineConfig
from .diagnostics import Diagnostic, DiagnosticCollector, DiagnosticKind
from .escapes import ESCAPE, EscapeResult, EscapeSequenceParser, EscapeStatus, is_escape
from .registry import CharacterSetRegistry, Identifier, default_registry
from .state import WorkingSetState

CharsetRef = Union[CharacterSet, Identifier]

_ESCAPE_DIAGNOSTICS = {
    EscapeStatus.IGNORED: DiagnosticKind.UNKNOWN_CHARSET,
    EscapeStatus.UNRECOGNIZED: DiagnosticKind.UNRECOGNIZED_ESCAPE,
    EscapeStatus.TRUNCATED: DiagnosticKind.TRUNCATED_ESCAPE,
}


class DecodeResult(NamedTuple):
    """Outcome of :meth:`TranscodingEngine.transcode`."""

    text: str
    state: WorkingSetState
    diagnostics: List[Diagnostic]


def _as_bytes(data: Union[ByteString, str]) -> bytes:
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)
    if isinstance(data, str):
        # one code point per MARC-8 byte
        try:
            return data.encode("latin-1")
        except UnicodeEncodeError as e:
            raise TypeError("str input must hold MARC-8 bytes as Latin-1 characters") from e
    raise TypeError(f"expected bytes-like MARC-8 data, got {type(data).__name__}")


class TranscodingEngine:
    """Converts MARC-8 byte strings to Unicode text.

    The engine keeps a pair of working set registers. :meth:`transcode` is the
    functional form: it takes and returns an explicit
    :class:`~marc8bridge.state.WorkingSetState` and never touches the engine,
    so one engine can serve concurrent decodes. :meth:`decode` is the stateful
    form: register switches made by escape sequences persist into the next
    call until :meth:`reset`.

    Args:
        g0: Initial G0 set, as a CharacterSet or any registry identifier.
            Defaults to the config's ``g0`` (ASCII).
        g1: Initial G1 set. Defaults to the config's ``g1`` (Ansel).
        diagnostics: Record diagnostics; overrides ``config.diagnostics``.
        registry: Character set registry. Defaults to the process-wide one.
        config: Remaining options, see :class:`~marc8bridge.config.EngineConfig`.

    Raises:
        UnknownCharsetError: If ``g0`` or ``g1`` cannot be resolved.
    """

    def __init__(
        self,
        g0: Optional[CharsetRef] = None,
        g1: Optional[CharsetRef] = None,
        diagnostics: Optional[bool] = None,
        registry: Optional[CharacterSetRegistry] = None,
        config: Optional[EngineConfig] = None,
    ):
        self.config = config or EngineConfig()
        self.registry = registry or default_registry()
        self.diagnostics_enabled = self.config.diagnostics if diagnostics is None else bool(diagnostics)

        self._initial = WorkingSetState(
            self._charset(self.config.g0 if g0 is None else g0),
            self._charset(self.config.g1 if g1 is None else g1),
        )
        self._state = self._initial
        self._escapes = EscapeSequenceParser(self.registry, skip=self.config.escape_skip)
        self._reorderer = CombiningCharacterReorderer()
        self._controls = self.registry.controls
        self.diagnostics: List[Diagnostic] = []

    def _charset(self, charset: CharsetRef) -> CharacterSet:
        if isinstance(charset, CharacterSet):
            return charset
        return self.registry.resolve(charset)

    # -- registers --------------------------------------------------------

    @property
    def initial_state(self) -> WorkingSetState:
        return self._initial

    @property
    def state(self) -> WorkingSetState:
        """Registers as left by the last :meth:`decode`."""
        return self._state

    @property
    def g0(self) -> CharacterSet:
        return self._state.g0

    @g0.setter
    def g0(self, charset: CharsetRef) -> None:
        self._state = replace(self._state, g0=self._charset(charset))

    @property
    def g1(self) -> CharacterSet:
        return self._state.g1

    @g1.setter
    def g1(self, charset: CharsetRef) -> None:
        self._state = replace(self._state, g1=self._charset(charset))

    def reset(self) -> None:
        """Restore the initial registers and forget the last diagnostics."""
        self._state = self._initial
        self.diagnostics = []

    # -- decoding ---------------------------------------------------------

    def decode(self, data: Union[ByteString, str]) -> str:
        """Decode ``data`` starting from the engine's current registers.

        The registers left by this call are kept for the next one. The
        diagnostics of this call are available as :attr:`diagnostics`.
        """
        result = self.transcode(data, self._state)
        self._state = result.state
        self.diagnostics = result.diagnostics
        return result.text

    def transcode(self, data: Union[ByteString, str],
                  state: Optional[WorkingSetState] = None) -> DecodeResult:
        """Decode ``data`` from an explicit register state.

        Args:
            data: MARC-8 bytes. A str is taken as Latin-1 encoded bytes.
            state: Registers to start from. Defaults to the initial state.

        Returns:
            The text, the registers after the last byte, and the diagnostics.

        Raises:
            TypeError: If ``data`` is not bytes-like or Latin-1 text.
        """
        data = _as_bytes(data)
        if state is None:
            state = self._initial
        collector = DiagnosticCollector(self.diagnostics_enabled)

        out = []
        pending = ""
        pending_at = 0
        pending_bytes = bytearray()
        cursor = 0
        end = len(data)

        while cursor < end:
            if is_escape(data, cursor):
                result = self._escapes.parse(data, cursor)
                state = state.apply(result.mutations)
                self._report_escape(collector, result, data, cursor, state)
                cursor = max(result.cursor, cursor + 1)
                continue

            start = cursor
            marks, cursor = self._reorderer.consume(data, cursor, state)
            if marks:
                if not pending:
                    pending_at = start
                pending += marks
                pending_bytes += data[start:cursor]
            # marks before an escape wait for the base after it
            if cursor >= end or is_escape(data, cursor):
                continue

            base, width = self._translate(data, cursor, state, collector)
            out.append(self._reorderer.attach(base, pending))
            pending = ""
            pending_bytes.clear()
            cursor += width

        if pending:
            collector.record(DiagnosticKind.ORPHAN_MARKS, pending_at, bytes(pending_bytes), state)
            if self.config.orphan_marks == "emit":
                out.append(pending)

        return DecodeResult("".join(out), state, collector.entries)

    def _translate(self, data: bytes, cursor: int, state: WorkingSetState,
                   collector: DiagnosticCollector) -> Tuple[str, int]:
        match = state.lookup(data, cursor)
        if match is not None:
            return match.mapping.char_value, match.width

        control = self._controls.lookup(data[cursor:cursor + 1])
        if control is not None:
            return control.char_value, 1

        width = 1
        g0_width = state.g0.byte_width
        if g0_width > 1 and data[cursor] < 0x80 and cursor + g0_width <= len(data):
            width = g0_width
            # an ESC always starts a new sequence
            escape = data.find(ESCAPE, cursor + 1, cursor + width)
            if escape != -1:
                width = escape - cursor
        collector.record(DiagnosticKind.UNMAPPED_BYTE, cursor, data[cursor:cursor + width], state)
        return "", width

    @staticmethod
    def _report_escape(collector: DiagnosticCollector, result: EscapeResult, data: bytes,
                       cursor: int, state: WorkingSetState) -> None:
        kind = _ESCAPE_DIAGNOSTICS.get(result.status)
        if kind is None:
            return
        if result.status is EscapeStatus.TRUNCATED:
            value = data[cursor:]
        else:
            value = data[cursor:result.cursor]
        collector.record(kind, cursor, value, state)


def marc8_to_unicode(
    data: Union[ByteString, str],
    g0: Optional[CharsetRef] = None,
    g1: Optional[CharsetRef] = None,
    diagnostics: bool = False,
) -> str:
    """Decode one MARC-8 string with fresh registers.

    Example:
        >>> marc8_to_unicode(b"\\xe8uber")
        'u\u0308ber'
    """
    engine = TranscodingEngine(g0=g0, g1=g1, diagnostics=diagnostics)
    return engine.transcode(data).text
