"""Combining mark reordering.

MARC-8 writes a combining mark before the letter it modifies; Unicode writes
it after. The reorderer collects a run of marks so the engine can emit them
behind their base character.
"""

from typing import Tuple

from .charset import ByteString
from .escapes import is_escape
from .state import WorkingSetState


class CombiningCharacterReorderer:
    def consume(self, data: ByteString, cursor: int, state: WorkingSetState) -> Tuple[str, int]:
        """Collect the combining marks starting at ``cursor``.

        Stops at the first code that is not a combining mark in the working
        sets, at an escape sequence, or at the end of the input.

        Returns:
            The marks as text, and the cursor of the first byte not consumed.
        """
        marks = []
        end = len(data)
        while cursor < end and not is_escape(data, cursor):
            match = state.lookup(data, cursor)
            if match is None or not match.mapping.is_combining:
                break
            marks.append(match.mapping.char_value)
            cursor += match.width
        return "".join(marks), cursor

    @staticmethod
    def attach(base: str, marks: str) -> str:
        return base + marks
