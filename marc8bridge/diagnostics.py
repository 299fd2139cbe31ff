"""Non-fatal decode diagnostics.

Legacy catalog data is often dirty, so nothing found in the data aborts a
decode. When diagnostics are enabled, each problem becomes a
:class:`Diagnostic` that is returned to the caller and written to the
``marc8bridge`` logger at WARNING level.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List

from .state import WorkingSetState

logger = logging.getLogger(__name__)


class DiagnosticKind(Enum):
    UNMAPPED_BYTE = "unmapped-byte"
    UNKNOWN_CHARSET = "unknown-charset"
    UNRECOGNIZED_ESCAPE = "unrecognized-escape"
    TRUNCATED_ESCAPE = "truncated-escape"
    ORPHAN_MARKS = "orphan-marks"


@dataclass(frozen=True)
class Diagnostic:
    """One problem found while decoding.

    Attributes:
        kind: What went wrong.
        position: Byte offset in the input where the problem starts.
        value: The offending bytes.
        g0_name: Name of the G0 set at that point.
        g1_name: Name of the G1 set at that point.
    """

    kind: DiagnosticKind
    position: int
    value: bytes
    g0_name: str
    g1_name: str

    @property
    def hex_value(self) -> str:
        return "0x" + self.value.hex()

    @property
    def message(self) -> str:
        sets = f"{self.g0_name}(G0), {self.g1_name}(G1)"
        if self.kind is DiagnosticKind.UNMAPPED_BYTE:
            return (
                f"chr({self.hex_value}) at position {self.position} is not a valid "
                f"character in the control sets or the current working sets {sets}"
            )
        if self.kind is DiagnosticKind.UNKNOWN_CHARSET:
            return (
                f"escape sequence {self.hex_value} at position {self.position} designates "
                f"an unknown character set; working sets remain {sets}"
            )
        if self.kind is DiagnosticKind.UNRECOGNIZED_ESCAPE:
            return (
                f"unrecognized escape sequence {self.hex_value} at position "
                f"{self.position} skipped; working sets remain {sets}"
            )
        if self.kind is DiagnosticKind.TRUNCATED_ESCAPE:
            return f"truncated escape sequence {self.hex_value} at position {self.position}"
        return (
            f"combining marks {self.hex_value} at position {self.position} have no "
            f"base character"
        )

    def __str__(self) -> str:
        return self.message


class DiagnosticCollector:
    """Accumulates diagnostics for a single decode.

    When disabled, :meth:`record` does nothing, so the engine can report
    unconditionally.
    """

    def __init__(self, enabled: bool):
        self.enabled = enabled
        self.entries: List[Diagnostic] = []

    def record(self, kind: DiagnosticKind, position: int, value: bytes,
               state: WorkingSetState) -> None:
        if not self.enabled:
            return
        diagnostic = Diagnostic(kind, position, bytes(value), state.g0.name, state.g1.name)
        self.entries.append(diagnostic)
        logger.warning("%s", diagnostic.message)

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)
