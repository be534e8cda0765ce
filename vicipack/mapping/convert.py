"""
Conversion between plain Python data and the value tree.

The rules follow the conventions of strongSwan's VICI clients:

- booleans are written as ``yes``/``no``;
- numbers are written as their decimal text;
- ``None`` is written as an empty value;
- a sequence of records is written as a section whose children are named
  ``"0"``, ``"1"``, ... because lists on the wire can only hold scalars.
"""
from __future__ import annotations

from collections.abc import Mapping
from decimal import Decimal
from enum import Enum
from typing import Any, Union

from pydantic import BaseModel

from vicipack.domain.value import ItemList, Section, Value, to_scalar


def _is_record(value: Any) -> bool:
    return isinstance(value, (BaseModel, Mapping))


def _name(key: Any) -> str:
    if isinstance(key, Enum):
        key = key.value
    return key if isinstance(key, str) else str(key)


def scalar_from_python(value: Any) -> bytes:
    """Render a single Python value as a scalar."""
    if value is None:
        return b""
    if isinstance(value, bool):
        return b"yes" if value else b"no"
    if isinstance(value, Enum):
        return scalar_from_python(value.value)
    if isinstance(value, float):
        return format(Decimal(repr(value)), "f").encode("ascii")
    if isinstance(value, (int, Decimal)):
        return str(value).encode("ascii")
    return to_scalar(value)


def value_from_python(value: Any) -> Value:
    if isinstance(value, (Section, ItemList)):
        return value
    if _is_record(value):
        return to_section(value)
    if isinstance(value, (list, tuple)):
        if value and all(_is_record(item) for item in value):
            return Section((str(index), to_section(item)) for index, item in enumerate(value))
        return ItemList(scalar_from_python(item) for item in value)
    return scalar_from_python(value)


def to_section(obj: Union[BaseModel, Mapping[Any, Any]]) -> Section:
    """
    Convert a mapping or pydantic model into a section.

    Models are dumped by alias, so ``Field(alias="sub-section")`` controls the
    name used on the wire.

    Args:
        obj: A mapping or a pydantic model instance.

    Returns:
        A new :class:`Section`.
    """
    if isinstance(obj, Section):
        return obj
    if isinstance(obj, BaseModel):
        obj = obj.model_dump(by_alias=True)
    if not isinstance(obj, Mapping):
        raise TypeError(f"cannot convert {type(obj).__name__} to a section")
    return Section((_name(key), value_from_python(value)) for key, value in obj.items())


def _scalar_to_python(value: bytes) -> Union[str, bytes]:
    try:
        return value.decode("utf-8")
    except UnicodeDecodeError:
        return value


def to_python(section: Section) -> dict[str, Any]:
    """
    Convert a section into plain Python data.

    Scalars become ``str`` when they are valid UTF-8 and stay ``bytes``
    otherwise; lists become ``list`` and sections become ``dict``.
    """
    result: dict[str, Any] = {}
    for name, value in section.items():
        if isinstance(value, Section):
            result[name] = to_python(value)
        elif isinstance(value, ItemList):
            result[name] = [_scalar_to_python(item) for item in value]
        else:
            result[name] = _scalar_to_python(value)
    return result
