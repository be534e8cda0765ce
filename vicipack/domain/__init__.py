"""
This package defines the value tree that the codec reads and writes.

It exposes :class:`Section` and :class:`ItemList`; scalars are plain ``bytes``.
"""
from vicipack.domain.value import ItemList, Scalar, Section, Value, to_scalar

__all__ = ["ItemList", "Scalar", "Section", "Value", "to_scalar"]
