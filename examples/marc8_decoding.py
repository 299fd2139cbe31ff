#!/usr/bin/env python3
"""
Decoding MARC-8 to Unicode

This example demonstrates:
- Decoding single MARC-8 strings
- Switching character sets with escape sequences
- How combining diacritics are reordered
- Collecting diagnostics for dirty data
- Converting a whole pymarc record to UTF-8

Run it from the repository root after installing the package:

    pip install -e .
    python examples/marc8_decoding.py
"""

import logging

from pymarc import Field, Record, Subfield

from marc8bridge import EngineConfig, TranscodingEngine, marc8_to_unicode
from marc8bridge.records import decode_record

ESC = b"\x1b"


def banner(title):
    print("\n" + "=" * 70)
    print(title)
    print("=" * 70 + "\n")


def decode_simple_strings():
    """
    Plain ASCII passes through, Ansel bytes in the high half become Latin
    letters and symbols.
    """
    banner("1. SIMPLE STRINGS")

    for data in (b"Hello", b"\xa1\xb3d\xbd", b"\xc3 1999"):
        print(f"  {data!r:28} -> {marc8_to_unicode(data)!r}")
    print()


def switch_character_sets():
    """
    Escape sequences reassign the G0 and G1 working sets.
    """
    banner("2. ESCAPE SEQUENCES")

    samples = [
        ("Greek symbols", ESC + b"gabc" + ESC + b"s"),
        ("Subscripts", b"H" + ESC + b"b2" + ESC + b"sO"),
        ("Basic Cyrillic in G0", ESC + b"(N" + b"Kniga" + ESC + b"(B"),
        ("Hebrew in G1", b"Title: " + ESC + b")2" + b"\xf9\xec\xe5\xed"),
    ]
    engine = TranscodingEngine()
    for label, data in samples:
        result = engine.transcode(data)
        print(f"  {label}:")
        print(f"    text:  {result.text!r}")
        print(f"    state: {result.state.describe()}")
    print()


def combining_marks():
    """
    MARC-8 writes a diacritic before its letter, Unicode after it.
    """
    banner("3. COMBINING DIACRITICS")

    for data in (b"Caf\xe2e", b"M\xe8unchen", b"Dvo\xe9r\xe2ak"):
        text = marc8_to_unicode(data)
        points = " ".join(f"U+{ord(c):04X}" for c in text if ord(c) > 0x7F)
        print(f"  {data!r:24} -> {text!r}  ({points})")
    print()


def diagnostics():
    """
    Nothing in the data stops a decode. With diagnostics on, each problem is
    returned and logged.
    """
    banner("4. DIAGNOSTICS")

    engine = TranscodingEngine(config=EngineConfig(diagnostics=True))
    result = engine.transcode(b"bad\x7fbyte " + ESC + b"(Z" + b"unknown set")
    print(f"  text: {result.text!r}")
    for diagnostic in result.diagnostics:
        print(f"  - [{diagnostic.kind.value}] {diagnostic.message}")
    print()


def convert_record():
    """
    Convert a MARC-8 pymarc record to a UTF-8 one.
    """
    banner("5. WHOLE RECORDS")

    record = Record(leader="00000nam  2200000   4500")
    record.add_field(Field(tag="001", data="demo0001"))
    record.add_field(Field(
        tag="245",
        indicators=["1", "0"],
        subfields=[
            Subfield(code="a", value=b"\xe2Etudes pour piano /"),
            Subfield(code="c", value=b"Fr\xe2ed\xe2eric Chopin."),
        ],
    ))

    decoded = decode_record(record)
    print(f"  Leader position 9: {str(record.leader)[9]!r} -> {str(decoded.leader)[9]!r}")
    for field in decoded.get_fields():
        print(f"  {field}")
    print()


def main():
    """Main example runner."""
    logging.basicConfig(level=logging.WARNING, format="    log: %(levelname)s %(message)s")

    print("\n" + "=" * 70)
    print("marc8bridge: MARC-8 to Unicode")
    print("=" * 70)

    decode_simple_strings()
    switch_character_sets()
    combining_marks()
    diagnostics()
    convert_record()


if __name__ == '__main__':
    main()
