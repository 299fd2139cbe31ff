"""Decoding MARC-8 inside pymarc fields and records.

The engine itself only knows byte strings. These helpers walk a pymarc
:class:`~pymarc.Field` or :class:`~pymarc.Record` read without Unicode
conversion (``MARCReader(..., to_unicode=False)``), whose values are still
bytes, decode every value, and build the UTF-8 counterpart. Values that are
already ``str`` were decoded by pymarc and are kept as they are. Each
subfield starts from the default working sets, as MARC-8 requires.

Example:
    >>> from pymarc import Field, Subfield
    >>> field = Field(tag="245", indicators=["1", "0"],
    ...               subfields=[Subfield(code="a", value=b"\\xe2Etude")])
    >>> decode_field(field)["a"]
    'E\\u0301tude'
"""

from typing import List, Optional, Union

from pymarc import Field, Record, Subfield

from .engine import TranscodingEngine

UTF8_CODING = "a"
_CODING_POSITION = 9


def _text(value: Union[str, bytes]) -> str:
    if isinstance(value, bytes):
        return value.decode("ascii")
    return value


def decode_value(value: Union[str, bytes], engine: Optional[TranscodingEngine] = None) -> str:
    """Decode one stored value with fresh working sets.

    Only ``bytes`` are MARC-8. A ``str`` is text pymarc has already decoded
    and is returned unchanged.
    """
    if isinstance(value, str):
        return value
    engine = engine or TranscodingEngine()
    return engine.transcode(value).text


def decode_subfields(field: Field, engine: Optional[TranscodingEngine] = None) -> List[Subfield]:
    """Return the field's subfields with decoded values, in order."""
    engine = engine or TranscodingEngine()
    return [
        Subfield(code=_text(subfield.code), value=decode_value(subfield.value, engine))
        for subfield in field.subfields
    ]


def decode_field(field: Field, engine: Optional[TranscodingEngine] = None) -> Field:
    """Return a copy of ``field`` with every value decoded to Unicode.

    Tag and indicators are kept. Control fields have their data decoded.
    """
    engine = engine or TranscodingEngine()
    tag = _text(field.tag)
    if field.is_control_field():
        return Field(tag=tag, data=decode_value(field.data, engine))
    return Field(
        tag=tag,
        indicators=[_text(indicator) for indicator in field.indicators],
        subfields=decode_subfields(field, engine),
    )


def decode_record(record: Record, engine: Optional[TranscodingEngine] = None) -> Record:
    """Return a UTF-8 copy of a MARC-8 record.

    Every field is decoded and leader position 9 is set to ``'a'``. A record
    whose leader already declares UTF-8 is returned unchanged. A record read
    with pymarc's default ``to_unicode=True`` holds ``str`` values, which
    are copied as they are; only the leader changes.
    """
    leader = str(record.leader)
    if leader[_CODING_POSITION] == UTF8_CODING:
        return record

    engine = engine or TranscodingEngine()
    decoded = Record(
        leader=leader[:_CODING_POSITION] + UTF8_CODING + leader[_CODING_POSITION + 1:]
    )
    for field in record.get_fields():
        decoded.add_field(decode_field(field, engine))
    return decoded
