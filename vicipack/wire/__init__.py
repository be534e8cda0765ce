"""
VICI wire codec.

This sub-package turns a :class:`~vicipack.domain.Section` tree into the
tag-length-value byte format used by the strongSwan VICI interface and back.
Elements are tagged with a single byte, names carry a one-byte length and
values a two-byte big-endian length.
"""
from vicipack.wire.decode import (
    Event,
    KeyValue,
    ListEnd,
    ListItem,
    ListStart,
    SectionEnd,
    SectionStart,
    decode,
    decode_from,
    iter_events,
)
from vicipack.wire.encode import encode, encode_to
from vicipack.wire.grammar import (
    DEFAULT_MAX_DEPTH,
    MAX_NAME_LENGTH,
    MAX_VALUE_LENGTH,
    ElementType,
)
from vicipack.wire.stream import SliceSource, StreamSource

__all__ = [
    "decode",
    "decode_from",
    "encode",
    "encode_to",
    "iter_events",
    "Event",
    "KeyValue",
    "ListEnd",
    "ListItem",
    "ListStart",
    "SectionEnd",
    "SectionStart",
    "ElementType",
    "DEFAULT_MAX_DEPTH",
    "MAX_NAME_LENGTH",
    "MAX_VALUE_LENGTH",
    "SliceSource",
    "StreamSource",
]
