"""MARC-8 table data.

The control set is bundled as a Python module. The graphic sets come from
the Library of Congress mapping data, see :mod:`marc8bridge.tables.lc`.
"""

from . import controls
from .lc import BUILTIN_SETS, LC_SETS, load_rows

__all__ = [
    "BUILTIN_SETS",
    "LC_SETS",
    "controls",
    "load_rows",
]
