"""Engine configuration.

Example:
    >>> config = EngineConfig(diagnostics=True, orphan_marks="discard")
    >>> engine = TranscodingEngine(config=config)

    >>> EngineConfig.from_env({"MARC8_DIAGNOSTICS": "1"}).diagnostics
    True
"""

import os
from dataclasses import dataclass, fields
from typing import Any, Mapping, Optional

from .exceptions import ConfigError

ORPHAN_POLICIES = ("emit", "discard")

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}

# environment variable -> option
ENV_VARS = {
    "MARC8_G0": "g0",
    "MARC8_G1": "g1",
    "MARC8_DIAGNOSTICS": "diagnostics",
    "MARC8_ORPHAN_MARKS": "orphan_marks",
    "MARC8_ESCAPE_SKIP": "escape_skip",
}


@dataclass(frozen=True)
class EngineConfig:
    """Options for a :class:`~marc8bridge.engine.TranscodingEngine`.

    Attributes:
        g0: Identifier or name of the initial G0 set (default ASCII, ``'B'``).
        g1: Identifier or name of the initial G1 set (default Ansel, ``'E'``).
        diagnostics: Record and log diagnostics for problems in the data.
        orphan_marks: What to do with combining marks left over at the end of
            the input, ``"emit"`` them unattached or ``"discard"`` them.
        escape_skip: Bytes skipped, ESC included, for an unrecognized escape.
    """

    g0: str = "B"
    g1: str = "E"
    diagnostics: bool = False
    orphan_marks: str = "emit"
    escape_skip: int = 3

    def __post_init__(self) -> None:
        for option in ("g0", "g1"):
            value = getattr(self, option)
            if not isinstance(value, str) or not value:
                raise ConfigError(f"{option} must be a character set identifier or name, got {value!r}")
        if not isinstance(self.diagnostics, bool):
            raise ConfigError(f"diagnostics must be a boolean, got {self.diagnostics!r}")
        if self.orphan_marks not in ORPHAN_POLICIES:
            raise ConfigError(
                f"Unsupported orphan_marks policy {self.orphan_marks!r}. "
                f"Supported policies: {', '.join(ORPHAN_POLICIES)}"
            )
        if (not isinstance(self.escape_skip, int) or isinstance(self.escape_skip, bool)
                or self.escape_skip < 1):
            raise ConfigError(f"escape_skip must be a positive integer, got {self.escape_skip!r}")

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> "EngineConfig":
        """Build a config from a dict of options.

        Raises:
            ConfigError: On unknown keys or invalid values.
        """
        known = {f.name for f in fields(cls)}
        unknown = set(options) - known
        if unknown:
            raise ConfigError(
                f"Unknown configuration keys: {', '.join(sorted(unknown))}. "
                f"Supported keys: {', '.join(sorted(known))}"
            )
        return cls(**options)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "EngineConfig":
        """Build a config from ``MARC8_*`` environment variables.

        Variables that are not set keep their defaults.
        """
        environ = os.environ if environ is None else environ
        options = {}
        for var, option in ENV_VARS.items():
            if var not in environ:
                continue
            raw = environ[var].strip()
            if option == "diagnostics":
                options[option] = _parse_bool(var, raw)
            elif option == "escape_skip":
                try:
                    options[option] = int(raw)
                except ValueError as e:
                    raise ConfigError(f"{var} must be an integer, got {raw!r}") from e
            else:
                options[option] = raw
        return cls(**options)


def _parse_bool(var: str, raw: str) -> bool:
    value = raw.lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ConfigError(f"{var} must be a boolean (1/0, true/false, yes/no, on/off), got {raw!r}")
