"""
Tests for escape sequence parsing.
"""

import pytest

from marc8bridge import Register
from marc8bridge.escapes import EscapeSequenceParser, EscapeStatus, is_escape

ESC = b"\x1b"


@pytest.fixture
def parser(registry):
    return EscapeSequenceParser(registry)


class TestSingleByteTechnique:
    """ESC followed by a single final byte designates into G0."""

    @pytest.mark.parametrize("final,name", [
        (b"g", "GreekSymbols"),
        (b"b", "Subscripts"),
        (b"p", "Superscripts"),
        (b"s", "ASCII"),
    ])
    def test_designates_g0(self, parser, final, name):
        result = parser.parse(ESC + final + b"abc", 0)
        assert result.status is EscapeStatus.SWITCHED
        assert result.cursor == 2
        (mutation,) = result.mutations
        assert mutation.register is Register.G0
        assert mutation.charset.name == name

    def test_parse_in_the_middle(self, parser):
        result = parser.parse(b"xy" + ESC + b"g", 2)
        assert result.cursor == 4
        assert result.mutations[0].charset.name == "GreekSymbols"


class TestMultiByteTechnique:
    """ESC, intermediate byte(s), final identifier byte."""

    @pytest.mark.parametrize("sequence,register,name,length", [
        (b"(N", Register.G0, "BasicCyrillic", 3),
        (b",N", Register.G0, "BasicCyrillic", 3),
        (b"(B", Register.G0, "ASCII", 3),
        (b")2", Register.G1, "Hebrew", 3),
        (b"-3", Register.G1, "BasicArabic", 3),
        (b")E", Register.G1, "Ansel", 3),
        (b"$1", Register.G0, "CJK", 3),
        (b"$,1", Register.G0, "CJK", 4),
        (b"$)1", Register.G1, "CJK", 4),
        (b"$-1", Register.G1, "CJK", 4),
    ])
    def test_designation(self, parser, sequence, register, name, length):
        result = parser.parse(ESC + sequence + b"tail", 0)
        assert result.status is EscapeStatus.SWITCHED
        assert result.cursor == length
        (mutation,) = result.mutations
        assert mutation.register is register
        assert mutation.charset.name == name

    def test_identifier_reported(self, parser):
        assert parser.parse(ESC + b")2", 0).identifier == "2"

    def test_unknown_identifier_is_ignored(self, parser):
        """A well formed sequence naming no known set switches nothing."""
        result = parser.parse(ESC + b"(Z", 0)
        assert result.status is EscapeStatus.IGNORED
        assert result.mutations == ()
        assert result.cursor == 3
        assert result.identifier == "Z"

    def test_unknown_identifier_two_byte_intermediate(self, parser):
        result = parser.parse(ESC + b"$)Z", 0)
        assert result.status is EscapeStatus.IGNORED
        assert result.cursor == 4


class TestMalformedSequences:
    """Recovery from broken input."""

    @pytest.mark.parametrize("data", [ESC, ESC + b"(", ESC + b")", ESC + b"$", ESC + b"$,", ESC + b"$)"])
    def test_truncated(self, parser, data):
        result = parser.parse(data, 0)
        assert result.status is EscapeStatus.TRUNCATED
        assert result.cursor == 0
        assert result.mutations == ()

    def test_truncated_at_offset(self, parser):
        result = parser.parse(b"abc" + ESC, 3)
        assert result.status is EscapeStatus.TRUNCATED
        assert result.cursor == 3

    def test_unrecognized_skips_three_bytes(self, parser):
        result = parser.parse(ESC + b"xABC", 0)
        assert result.status is EscapeStatus.UNRECOGNIZED
        assert result.cursor == 3
        assert result.mutations == ()

    def test_unrecognized_skip_clamped_to_input(self, parser):
        result = parser.parse(ESC + b"x", 0)
        assert result.status is EscapeStatus.UNRECOGNIZED
        assert result.cursor == 2

    def test_custom_skip(self, registry):
        parser = EscapeSequenceParser(registry, skip=1)
        assert parser.parse(ESC + b"xABC", 0).cursor == 1

    def test_default_registry(self):
        result = EscapeSequenceParser().parse(ESC + b"g", 0)
        assert result.status is EscapeStatus.SWITCHED


class TestIsEscape:
    def test_is_escape(self):
        assert is_escape(b"a" + ESC, 1)
        assert not is_escape(b"a" + ESC, 0)
