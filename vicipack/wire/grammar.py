"""
Element tags and length limits of the VICI message format.

A message is a flat sequence of elements. Every element starts with a single
tag byte; names are prefixed with a one-byte length and values with a
two-byte big-endian length. Sections and lists are delimited by explicit
start/end elements rather than by a total-length header.
"""
from __future__ import annotations

from enum import IntEnum


class ElementType(IntEnum):
    SECTION_START = 1
    SECTION_END = 2
    KEY_VALUE = 3
    LIST_START = 4
    LIST_ITEM = 5
    LIST_END = 6


# Tags that carry a u8-prefixed name right after the tag byte.
NAMED_ELEMENTS: frozenset[ElementType] = frozenset(
    {ElementType.SECTION_START, ElementType.KEY_VALUE, ElementType.LIST_START}
)

# Tags that carry a u16-prefixed value.
VALUED_ELEMENTS: frozenset[ElementType] = frozenset(
    {ElementType.KEY_VALUE, ElementType.LIST_ITEM}
)

MAX_NAME_LENGTH: int = 0xFF
MAX_VALUE_LENGTH: int = 0xFFFF

# Open sections and lists allowed at once while decoding untrusted input.
DEFAULT_MAX_DEPTH: int = 128


def element_type(tag: int) -> ElementType | None:
    """Return the element type for a tag byte, or ``None`` if the tag is unknown."""
    try:
        return ElementType(tag)
    except ValueError:
        return None
