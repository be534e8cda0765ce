"""
Typed record mapping for VICI messages.

``to_section`` and ``to_python`` convert between plain Python data and the
value tree; :class:`ViciModel` is a pydantic base class for records that are
encoded to and decoded from the wire.
"""
from vicipack.mapping.convert import scalar_from_python, to_python, to_section, value_from_python
from vicipack.mapping.model import ViciModel, from_section

__all__ = [
    "ViciModel",
    "from_section",
    "scalar_from_python",
    "to_python",
    "to_section",
    "value_from_python",
]
