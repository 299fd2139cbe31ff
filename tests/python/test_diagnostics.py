"""
Tests for diagnostic records, messages and logging.
"""

import logging

from marc8bridge import Diagnostic, DiagnosticKind, TranscodingEngine
from marc8bridge.diagnostics import DiagnosticCollector

ESC = b"\x1b"


class TestDiagnosticMessages:
    def test_unmapped_byte_message(self):
        diagnostic = Diagnostic(DiagnosticKind.UNMAPPED_BYTE, 0, b"\x7f", "ASCII", "Ansel")
        assert str(diagnostic) == (
            "chr(0x7f) at position 0 is not a valid character in the control sets "
            "or the current working sets ASCII(G0), Ansel(G1)"
        )

    def test_hex_value_multibyte(self):
        diagnostic = Diagnostic(DiagnosticKind.UNMAPPED_BYTE, 4, b"\x21\x30\x7f", "CJK", "Ansel")
        assert diagnostic.hex_value == "0x21307f"

    def test_other_kinds_name_position(self):
        for kind in DiagnosticKind:
            diagnostic = Diagnostic(kind, 17, ESC + b"(Z", "ASCII", "Ansel")
            assert "position 17" in diagnostic.message

    def test_unknown_charset_names_working_sets(self):
        diagnostic = Diagnostic(DiagnosticKind.UNKNOWN_CHARSET, 0, ESC + b"(Z", "ASCII", "Hebrew")
        assert "ASCII(G0), Hebrew(G1)" in diagnostic.message


class TestCollector:
    def test_disabled_records_nothing(self, engine):
        collector = DiagnosticCollector(False)
        collector.record(DiagnosticKind.UNMAPPED_BYTE, 0, b"\x7f", engine.initial_state)
        assert len(collector) == 0

    def test_enabled_records_state_names(self, engine):
        collector = DiagnosticCollector(True)
        state = engine.transcode(ESC + b")2").state
        collector.record(DiagnosticKind.UNMAPPED_BYTE, 3, bytearray(b"\xff"), state)
        (diagnostic,) = list(collector)
        assert diagnostic.value == b"\xff"
        assert isinstance(diagnostic.value, bytes)
        assert (diagnostic.g0_name, diagnostic.g1_name) == ("ASCII", "Hebrew")


class TestLogging:
    """Diagnostics are logged at WARNING on the marc8bridge logger."""

    def test_logged_when_enabled(self, caplog):
        engine = TranscodingEngine(diagnostics=True)
        with caplog.at_level(logging.WARNING, logger="marc8bridge"):
            engine.decode(b"ab\x7f")
        records = [r for r in caplog.records if r.name == "marc8bridge.diagnostics"]
        assert len(records) == 1
        assert records[0].levelno == logging.WARNING
        assert "chr(0x7f) at position 2" in records[0].getMessage()

    def test_silent_when_disabled(self, caplog):
        engine = TranscodingEngine()
        with caplog.at_level(logging.WARNING, logger="marc8bridge"):
            engine.decode(b"ab\x7f" + ESC + b"(Z")
        assert not [r for r in caplog.records if r.name.startswith("marc8bridge")]

    def test_one_entry_per_problem(self):
        engine = TranscodingEngine(diagnostics=True)
        result = engine.transcode(b"\x7f" + ESC + b"(Z" + ESC + b"xyz" + b"\xe2")
        assert [d.kind for d in result.diagnostics] == [
            DiagnosticKind.UNMAPPED_BYTE,
            DiagnosticKind.UNKNOWN_CHARSET,
            DiagnosticKind.UNRECOGNIZED_ESCAPE,
            DiagnosticKind.ORPHAN_MARKS,
        ]
        assert [d.position for d in result.diagnostics] == [0, 1, 4, 8]
