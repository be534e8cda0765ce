from vicipack.domain import ItemList, Section
from vicipack.errors import (
    DecodeError,
    DepthLimitExceeded,
    DuplicateKey,
    EncodeError,
    FrameKindMismatch,
    InvalidName,
    NameTooLong,
    UnderlyingIoFailure,
    UnexpectedEndOfInput,
    UnexpectedTag,
    UnterminatedStructure,
    ValueTooLong,
    ViciError,
)
from vicipack.wire import decode, decode_from, encode, encode_to, iter_events
from vicipack.mapping import ViciModel, from_section, to_python, to_section
from vicipack.config import CodecSettings, get_settings
from importlib.metadata import PackageNotFoundError, version

__all__ = [
    "Section",
    "ItemList",
    "encode",
    "encode_to",
    "decode",
    "decode_from",
    "iter_events",
    "ViciModel",
    "from_section",
    "to_python",
    "to_section",
    "CodecSettings",
    "get_settings",
    "ViciError",
    "EncodeError",
    "DecodeError",
    "NameTooLong",
    "ValueTooLong",
    "UnexpectedTag",
    "UnexpectedEndOfInput",
    "FrameKindMismatch",
    "UnterminatedStructure",
    "DuplicateKey",
    "InvalidName",
    "DepthLimitExceeded",
    "UnderlyingIoFailure",
]

try:
    __version__ = version("vicipack")
except PackageNotFoundError:
    __version__ = "0.0.0"
