"""
Exceptions raised while encoding or decoding VICI messages.

Every error carries a stable ``code`` string, the byte ``position`` at which
it was detected (when known), the offending ``input`` byte (when there is
one), and a ``category`` that tells callers whether to reject the data
(``"data"``, ``"eof"``, ``"encode"``) or retry the I/O (``"io"``).
"""
from __future__ import annotations

from typing import Optional

ERR_NAME_TOO_LONG = "ERR_NAME_TOO_LONG"
ERR_VALUE_TOO_LONG = "ERR_VALUE_TOO_LONG"
ERR_UNEXPECTED_TAG = "ERR_UNEXPECTED_TAG"
ERR_UNEXPECTED_EOF = "ERR_UNEXPECTED_EOF"
ERR_FRAME_KIND = "ERR_FRAME_KIND"
ERR_UNTERMINATED = "ERR_UNTERMINATED"
ERR_DUPLICATE_KEY = "ERR_DUPLICATE_KEY"
ERR_INVALID_NAME = "ERR_INVALID_NAME"
ERR_DEPTH_LIMIT = "ERR_DEPTH_LIMIT"
ERR_IO = "ERR_IO"

CATEGORY_IO = "io"
CATEGORY_DATA = "data"
CATEGORY_EOF = "eof"
CATEGORY_ENCODE = "encode"


class ViciError(Exception):
    """Base class for all codec errors."""

    code: str = ""
    category: str = CATEGORY_DATA

    def __init__(
        self,
        message: str,
        *,
        position: Optional[int] = None,
        input: Optional[int] = None,
    ) -> None:
        self.message = message
        self.position = position
        self.input = input
        super().__init__(self._format())

    def _format(self) -> str:
        text = self.message
        if self.input is not None:
            text += f" 0x{self.input:02x}"
        if self.position is not None:
            text += f" at position {self.position}"
        return text

    def is_io(self) -> bool:
        return self.category == CATEGORY_IO

    def is_data(self) -> bool:
        return self.category == CATEGORY_DATA

    def is_eof(self) -> bool:
        return self.category == CATEGORY_EOF


class EncodeError(ViciError, ValueError):
    """A value tree cannot be represented on the wire."""
    category = CATEGORY_ENCODE


class NameTooLong(EncodeError):
    code = ERR_NAME_TOO_LONG


class ValueTooLong(EncodeError):
    code = ERR_VALUE_TOO_LONG


class DecodeError(ViciError, ValueError):
    """The byte stream is not a well-formed message."""
    pass


class UnexpectedTag(DecodeError):
    code = ERR_UNEXPECTED_TAG


class UnexpectedEndOfInput(DecodeError):
    code = ERR_UNEXPECTED_EOF
    category = CATEGORY_EOF


class FrameKindMismatch(DecodeError):
    code = ERR_FRAME_KIND


class UnterminatedStructure(DecodeError):
    code = ERR_UNTERMINATED
    category = CATEGORY_EOF


class DuplicateKey(DecodeError):
    code = ERR_DUPLICATE_KEY


class InvalidName(DecodeError):
    code = ERR_INVALID_NAME


class DepthLimitExceeded(DecodeError):
    code = ERR_DEPTH_LIMIT


class UnderlyingIoFailure(ViciError):
    """The caller-supplied sink or source failed; the original error is ``__cause__``."""
    code = ERR_IO
    category = CATEGORY_IO
