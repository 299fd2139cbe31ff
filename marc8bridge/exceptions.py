"""Exception types raised by marc8bridge.

None of these are raised while bytes are being decoded: dirty MARC-8 data is
reported through diagnostics instead. They signal problems with tables,
registrations and configuration, which are detected up front.
"""


class Marc8Error(Exception):
    """Base class for all marc8bridge errors."""


class UnknownCharsetError(Marc8Error, KeyError):
    """A character set identifier or name is not registered."""

    def __init__(self, identifier):
        self.identifier = identifier
        super().__init__(identifier)

    def __str__(self) -> str:
        return f"Unknown MARC-8 character set: {self.identifier!r}"


class CharsetTableError(Marc8Error, ValueError):
    """A character set table is malformed (bad hex width, duplicate code, ...)."""


class ConfigError(Marc8Error, ValueError):
    """An engine configuration value is invalid."""
