from __future__ import annotations

import collections.abc
import types
from typing import Annotated, Any, Optional, Union, get_args, get_origin

from pydantic import BaseModel, ConfigDict, model_validator

from vicipack.domain.value import Section
from vicipack.mapping.convert import to_python, to_section
from vicipack.wire.decode import decode
from vicipack.wire.encode import encode

_SEQUENCE_ORIGINS = (list, tuple, set, frozenset, collections.abc.Sequence)


def _union_args(annotation: Any) -> Optional[tuple]:
    origin = get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        return get_args(annotation)
    return None


def _unwrap(annotation: Any) -> Any:
    if get_origin(annotation) is Annotated:
        return get_args(annotation)[0]
    return annotation


def accepts_sequence(annotation: Any) -> bool:
    annotation = _unwrap(annotation)
    args = _union_args(annotation)
    if args is not None:
        return any(accepts_sequence(arg) for arg in args)
    return annotation in _SEQUENCE_ORIGINS or get_origin(annotation) in _SEQUENCE_ORIGINS


def accepts_none(annotation: Any) -> bool:
    annotation = _unwrap(annotation)
    if annotation is None or annotation is type(None) or annotation is Any:
        return True
    args = _union_args(annotation)
    return args is not None and any(accepts_none(arg) for arg in args)


class ViciModel(BaseModel):
    """
    Base class for records exchanged over VICI.

    Decoded messages carry every scalar as text, so validation relies on
    pydantic's lax mode to turn ``"yes"``/``"no"`` into booleans and decimal
    text into numbers. Two shapes need help first: index-named sections that
    stand in for lists of records, and empty values that stand in for
    ``None``.
    """

    model_config = ConfigDict(populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def _from_wire_shapes(cls, data: Any) -> Any:
        if isinstance(data, Section):
            data = to_python(data)
        if not isinstance(data, dict):
            return data

        data = dict(data)
        for name, field in cls.model_fields.items():
            for key in {name, field.alias} - {None}:
                if key not in data:
                    continue
                value = data[key]
                if isinstance(value, dict) and accepts_sequence(field.annotation):
                    data[key] = list(value.values())
                elif value in ("", b"") and accepts_none(field.annotation):
                    data[key] = None
        return data

    def to_section(self) -> Section:
        return to_section(self)

    def to_bytes(self) -> bytes:
        return encode(self.to_section())

    @classmethod
    def from_section(cls, section: Section):
        return cls.model_validate(section)

    @classmethod
    def from_bytes(cls, data: bytes, **decode_options: Any):
        return cls.from_section(decode(data, **decode_options))


def from_section(section: Section, model: type[ViciModel]) -> ViciModel:
    """Validate a decoded section into ``model``."""
    return model.model_validate(section)
