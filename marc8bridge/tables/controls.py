"""Control characters, consulted after both working sets miss.

The C0 controls map to themselves. MARC-8 adds the non-sort markers and the
joiners in the 0x80 range. Space is invariant across every working set, so
it lives here too (a set such as CJK or GreekSymbols has no space of its
own).
"""

NAME = "Controls"

_C0_NAMES = [
    "NULL",
    "START OF HEADING",
    "START OF TEXT",
    "END OF TEXT",
    "END OF TRANSMISSION",
    "ENQUIRY",
    "ACKNOWLEDGE",
    "BELL",
    "BACKSPACE",
    "CHARACTER TABULATION",
    "LINE FEED",
    "LINE TABULATION",
    "FORM FEED",
    "CARRIAGE RETURN",
    "SHIFT OUT",
    "SHIFT IN",
    "DATA LINK ESCAPE",
    "DEVICE CONTROL ONE",
    "DEVICE CONTROL TWO",
    "DEVICE CONTROL THREE",
    "DEVICE CONTROL FOUR",
    "NEGATIVE ACKNOWLEDGE",
    "SYNCHRONOUS IDLE",
    "END OF TRANSMISSION BLOCK",
    "CANCEL",
    "END OF MEDIUM",
    "SUBSTITUTE",
    "ESCAPE",
    "INFORMATION SEPARATOR FOUR",
    "INFORMATION SEPARATOR THREE",  # record terminator
    "INFORMATION SEPARATOR TWO",  # field terminator
    "INFORMATION SEPARATOR ONE",  # subfield delimiter
]

ROWS = [
    (f"{code:02X}", f"{code:04X}", label, False)
    for code, label in enumerate(_C0_NAMES)
] + [
    ("20", "0020", "SPACE", False),
    ("88", "0098", "NON-SORT BEGIN / START OF STRING", False),
    ("89", "009C", "NON-SORT END / STRING TERMINATOR", False),
    ("8D", "200D", "JOINER / ZERO WIDTH JOINER", False),
    ("8E", "200C", "NON-JOINER / ZERO WIDTH NON-JOINER", False),
]

# codes only the control set may decode; space stays in the graphic sets too
RESERVED = frozenset(int(marc, 16) for marc, _, _, _ in ROWS if marc != "20")
