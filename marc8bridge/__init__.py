"""
marc8bridge: MARC-8 to Unicode conversion for library catalog data.

MARC-8 is the legacy character encoding of MARC bibliographic records. It
switches between character sets (Latin, Greek, Hebrew, Cyrillic, Arabic,
CJK) with ISO 2022 escape sequences and writes combining diacritics before
the letter they modify. This package decodes it to Unicode text, with
diacritics moved after their base letters.

Quick Start
-----------
>>> from marc8bridge import marc8_to_unicode
>>> marc8_to_unicode(b"Gr\\xe8un")
'Gru\\u0308n'

>>> from marc8bridge import TranscodingEngine
>>> engine = TranscodingEngine(diagnostics=True)
>>> result = engine.transcode(b"\\x1b(NABC")
>>> result.state.g0.name
'BasicCyrillic'
"""

from .charset import CharacterSet, CodeMapping
from .config import EngineConfig
from .diagnostics import Diagnostic, DiagnosticKind
from .engine import DecodeResult, TranscodingEngine, marc8_to_unicode
from .exceptions import CharsetTableError, ConfigError, Marc8Error, UnknownCharsetError
from .registry import CharacterSetRegistry, control_set, default_registry
from .state import Register, WorkingSetState

__version__ = "0.1.0"
__author__ = "marc8bridge Contributors"

__all__ = [
    "CharacterSet",
    "CharacterSetRegistry",
    "CharsetTableError",
    "CodeMapping",
    "ConfigError",
    "DecodeResult",
    "Diagnostic",
    "DiagnosticKind",
    "EngineConfig",
    "Marc8Error",
    "Register",
    "TranscodingEngine",
    "UnknownCharsetError",
    "WorkingSetState",
    "control_set",
    "default_registry",
    "marc8_to_unicode",
]
