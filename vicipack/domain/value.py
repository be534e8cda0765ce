"""
In-memory value tree exchanged with the encoder and decoder.

A value is one of three shapes:

- a scalar, represented as ``bytes``;
- a :class:`Section`, an insertion-ordered mapping of names to values;
- an :class:`ItemList`, an ordered sequence of scalars.

The root of every message is an unnamed :class:`Section`.
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Iterable, Iterator, Optional, Union

Scalar = bytes


def to_scalar(value: Any) -> bytes:
    if isinstance(value, bytes):
        return value
    if isinstance(value, (bytearray, memoryview)):
        return bytes(value)
    if isinstance(value, str):
        return value.encode("utf-8")
    raise TypeError(f"cannot use {type(value).__name__} as a scalar value")


class ItemList:
    """An ordered sequence of scalar items."""

    __slots__ = ("_items",)

    def __init__(self, items: Optional[Iterable[Any]] = None) -> None:
        self._items: list[bytes] = []
        for item in items or ():
            self.append(item)

    def append(self, item: Any) -> None:
        if isinstance(item, (Section, ItemList, Mapping, list, tuple)):
            raise TypeError("list items must be scalars")
        self._items.append(to_scalar(item))

    def __getitem__(self, index: int) -> bytes:
        return self._items[index]

    def __iter__(self) -> Iterator[bytes]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ItemList):
            return NotImplemented
        return self._items == other._items

    def __repr__(self) -> str:
        return f"ItemList({self._items!r})"


class Section:
    """An insertion-ordered mapping of names to values.

    Equality is order sensitive: two sections compare equal only when they
    hold equal entries in the same order.
    """

    __slots__ = ("_entries",)

    def __init__(self, entries: Optional[Union[Mapping[str, Any], Iterable[tuple[str, Any]]]] = None) -> None:
        self._entries: dict[str, Value] = {}
        if entries is None:
            return
        pairs = entries.items() if isinstance(entries, Mapping) else entries
        for name, value in pairs:
            self[name] = value

    def __setitem__(self, name: str, value: Any) -> None:
        if not isinstance(name, str):
            raise TypeError("section names must be str")
        self._entries[name] = _to_value(value)

    def __getitem__(self, name: str) -> Value:
        return self._entries[name]

    def __delitem__(self, name: str) -> None:
        del self._entries[name]

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, name: str, default: Any = None) -> Any:
        return self._entries.get(name, default)

    def keys(self):
        return self._entries.keys()

    def values(self):
        return self._entries.values()

    def items(self):
        return self._entries.items()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Section):
            return NotImplemented
        return list(self._entries.items()) == list(other._entries.items())

    def __repr__(self) -> str:
        return f"Section({self._entries!r})"


Value = Union[bytes, Section, ItemList]


def _to_value(value: Any) -> Value:
    if isinstance(value, (Section, ItemList)):
        return value
    if isinstance(value, Mapping):
        return Section(value)
    if isinstance(value, (list, tuple)):
        return ItemList(value)
    return to_scalar(value)


Mapping.register(Section)
