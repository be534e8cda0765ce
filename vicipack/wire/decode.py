"""
Decoder for VICI messages.

The input is untrusted, so every element is checked against the frame that
is currently open: key/values and section starts only inside sections, items
only inside lists, and every end element must close a frame of its own kind.
Open frames live on an explicit stack whose height is bounded by
``max_depth``.

Two entry points are offered. :func:`iter_events` yields one structural event
per element for consumers that map fields as they arrive; :func:`decode` and
:func:`decode_from` build a complete :class:`Section` tree.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, Optional, Union

from vicipack.config import get_settings
from vicipack.core.binary import unpack_u16
from vicipack.domain.value import ItemList, Section, Value
from vicipack.errors import (
    DepthLimitExceeded,
    DuplicateKey,
    FrameKindMismatch,
    InvalidName,
    UnexpectedTag,
    UnterminatedStructure,
)
from vicipack.wire.grammar import NAMED_ELEMENTS, VALUED_ELEMENTS, ElementType, element_type
from vicipack.wire.stream import ByteSource, Readable, SliceSource, StreamSource

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SectionStart:
    name: str


@dataclass(frozen=True)
class SectionEnd:
    pass


@dataclass(frozen=True)
class KeyValue:
    key: str
    value: bytes


@dataclass(frozen=True)
class ListStart:
    name: str


@dataclass(frozen=True)
class ListItem:
    value: bytes


@dataclass(frozen=True)
class ListEnd:
    pass


Event = Union[SectionStart, SectionEnd, KeyValue, ListStart, ListItem, ListEnd]


def _read_name(source: ByteSource) -> str:
    size = source.read_exact(1, "name length")[0]
    start = source.position
    raw = source.read_exact(size, "name")
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise InvalidName(
            "invalid unicode code point in name",
            input=raw[exc.start],
            position=start + exc.start,
        ) from None


def _read_value(source: ByteSource) -> bytes:
    size = unpack_u16(source.read_exact(2, "value length"))
    return source.read_exact(size, "value")


def iter_events(
    source: Union[ByteSource, bytes, bytearray, memoryview],
    *,
    max_depth: Optional[int] = None,
) -> Iterator[Event]:
    """
    Yield the structural events of a message, validating as it goes.

    Args:
        source: A byte source or an in-memory buffer.
        max_depth: Maximum number of simultaneously open sections and lists.
            Defaults to the configured ``VICIPACK_MAX_DEPTH``.

    Yields:
        One event per element, in wire order.
    """
    for _offset, event in _scan(source, max_depth):
        yield event


def _scan(
    source: Union[ByteSource, bytes, bytearray, memoryview],
    max_depth: Optional[int],
) -> Iterator[tuple[int, Event]]:
    if isinstance(source, (bytes, bytearray, memoryview)):
        source = SliceSource(source)
    if max_depth is None:
        max_depth = get_settings().max_depth
    if max_depth < 1:
        raise ValueError("max_depth must be at least 1")

    frames: list[ElementType] = []
    while True:
        offset = source.position
        tag = source.read_tag()
        if tag is None:
            if frames:
                raise UnterminatedStructure(
                    f"EOF with {len(frames)} unterminated section(s) or list(s)",
                    position=source.position,
                )
            return

        kind = element_type(tag)
        if kind is None:
            raise UnexpectedTag("invalid element type", input=tag, position=offset)

        in_list = bool(frames) and frames[-1] is ElementType.LIST_START
        if in_list and kind not in (ElementType.LIST_ITEM, ElementType.LIST_END):
            raise FrameKindMismatch(f"{kind.name} not allowed inside a list", input=tag, position=offset)
        if kind is ElementType.SECTION_END and not frames:
            raise FrameKindMismatch("section end without open section", input=tag, position=offset)
        if kind is ElementType.LIST_ITEM and not in_list:
            raise FrameKindMismatch("list item outside a list", input=tag, position=offset)
        if kind is ElementType.LIST_END and not in_list:
            raise FrameKindMismatch("list end without open list", input=tag, position=offset)
        if kind in (ElementType.SECTION_START, ElementType.LIST_START) and len(frames) >= max_depth:
            raise DepthLimitExceeded(f"nesting exceeds maximum depth {max_depth}", position=offset)

        name = _read_name(source) if kind in NAMED_ELEMENTS else ""
        value = _read_value(source) if kind in VALUED_ELEMENTS else b""

        if kind is ElementType.SECTION_START:
            frames.append(kind)
            yield offset, SectionStart(name)
        elif kind is ElementType.LIST_START:
            frames.append(kind)
            yield offset, ListStart(name)
        elif kind is ElementType.KEY_VALUE:
            yield offset, KeyValue(name, value)
        elif kind is ElementType.LIST_ITEM:
            yield offset, ListItem(value)
        elif kind is ElementType.SECTION_END:
            frames.pop()
            yield offset, SectionEnd()
        else:
            frames.pop()
            yield offset, ListEnd()


def _attach(parent: Section, name: str, value: Value, policy: str, position: int) -> None:
    if name in parent:
        if policy == "error":
            raise DuplicateKey(f"duplicate name {name!r}", position=position)
        logger.debug("vici_duplicate_overwritten", extra={"details": {"name": name, "position": position}})
    parent[name] = value


def _build(source: ByteSource, max_depth: Optional[int], duplicate_keys: Optional[str]) -> Section:
    settings = get_settings()
    policy = duplicate_keys or settings.duplicate_keys
    if policy not in ("error", "last"):
        raise ValueError("duplicate_keys must be 'error' or 'last'")

    root = Section()
    stack: list[Union[Section, ItemList]] = [root]
    elements = 0
    for offset, event in _scan(source, settings.max_depth if max_depth is None else max_depth):
        elements += 1
        current = stack[-1]
        if isinstance(event, KeyValue):
            _attach(current, event.key, event.value, policy, offset)
        elif isinstance(event, ListItem):
            current.append(event.value)
        elif isinstance(event, (SectionStart, ListStart)):
            child: Union[Section, ItemList] = Section() if isinstance(event, SectionStart) else ItemList()
            _attach(current, event.name, child, policy, offset)
            stack.append(child)
        else:
            stack.pop()

    logger.debug("vici_decoded", extra={"details": {"bytes": source.position, "elements": elements}})
    return root


def decode(
    data: Union[bytes, bytearray, memoryview],
    *,
    max_depth: Optional[int] = None,
    duplicate_keys: Optional[str] = None,
) -> Section:
    """
    Decode a complete in-memory message into its root section.

    Args:
        data: The encoded message; ``b""`` decodes to an empty section.
        max_depth: Maximum nesting of sections and lists.
        duplicate_keys: ``"error"`` to reject repeated names within a section,
            ``"last"`` to keep the last value.

    Returns:
        The root :class:`Section`.
    """
    return _build(SliceSource(data), max_depth, duplicate_keys)


def decode_from(
    stream: Readable,
    *,
    max_depth: Optional[int] = None,
    duplicate_keys: Optional[str] = None,
) -> Section:
    """Decode a message from a file-like object, reading until it reports end of input."""
    return _build(StreamSource(stream), max_depth, duplicate_keys)
