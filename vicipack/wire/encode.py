"""
Encoder for VICI messages.

The root section is written as a bare sequence of elements. Nested sections
and lists are written depth-first in insertion order, each element with a
single ``write()`` call on the sink.
"""
from __future__ import annotations

import io
import logging
from collections.abc import Mapping
from typing import Any, Iterator, Protocol

from vicipack.core.binary import pack_u16, pack_u8
from vicipack.domain.value import ItemList, Section, Value
from vicipack.errors import NameTooLong, UnderlyingIoFailure, ValueTooLong
from vicipack.wire.grammar import MAX_NAME_LENGTH, MAX_VALUE_LENGTH, ElementType

logger = logging.getLogger(__name__)

_SECTION_END = pack_u8(ElementType.SECTION_END)
_LIST_END = pack_u8(ElementType.LIST_END)


class Writable(Protocol):
    def write(self, data: bytes) -> Any:
        ...


class _Writer:
    def __init__(self, sink: Writable) -> None:
        self.sink = sink
        self.position = 0

    def emit(self, chunk: bytes) -> None:
        try:
            self.sink.write(chunk)
        except OSError as exc:
            raise UnderlyingIoFailure(str(exc), position=self.position) from exc
        self.position += len(chunk)

    def name(self, name: str) -> bytes:
        raw = name.encode("utf-8")
        if len(raw) > MAX_NAME_LENGTH:
            raise NameTooLong(
                f"name of {len(raw)} bytes exceeds {MAX_NAME_LENGTH} bytes",
                position=self.position,
            )
        return pack_u8(len(raw)) + raw

    def value(self, value: bytes) -> bytes:
        if len(value) > MAX_VALUE_LENGTH:
            raise ValueTooLong(
                f"value of {len(value)} bytes exceeds {MAX_VALUE_LENGTH} bytes",
                position=self.position,
            )
        return pack_u16(len(value)) + value


def _entries(section: Section) -> Iterator[tuple[str, Value]]:
    return iter(section.items())


def encode_to(section: Section | Mapping[str, Any], sink: Writable) -> int:
    """
    Encode a root section into a caller-supplied sink.

    Each element is validated before it is written, so an oversized name or
    value never reaches the sink. Elements written before the failing one are
    not rolled back.

    Args:
        section: The root section (a mapping is converted first).
        sink: Any object with a ``write(bytes)`` method.

    Returns:
        The number of bytes written.
    """
    if not isinstance(section, Section):
        section = Section(section)

    writer = _Writer(sink)
    stack = [_entries(section)]
    while stack:
        entry = next(stack[-1], None)
        if entry is None:
            stack.pop()
            if stack:
                writer.emit(_SECTION_END)
            continue

        name, value = entry
        if isinstance(value, Section):
            writer.emit(pack_u8(ElementType.SECTION_START) + writer.name(name))
            stack.append(_entries(value))
        elif isinstance(value, ItemList):
            writer.emit(pack_u8(ElementType.LIST_START) + writer.name(name))
            for item in value:
                writer.emit(pack_u8(ElementType.LIST_ITEM) + writer.value(item))
            writer.emit(_LIST_END)
        else:
            element = pack_u8(ElementType.KEY_VALUE) + writer.name(name) + writer.value(value)
            writer.emit(element)

    logger.debug("vici_encoded", extra={"details": {"bytes": writer.position}})
    return writer.position


def encode(section: Section | Mapping[str, Any]) -> bytes:
    """
    Encode a root section into a new byte string.

    Args:
        section: The root section (a mapping is converted first).

    Returns:
        The encoded message; an empty section gives ``b""``.
    """
    buf = io.BytesIO()
    encode_to(section, buf)
    return buf.getvalue()
