"""Byte sources accepted by generated functions.

`InputKind` tags every value a generated function can receive, `classify`
computes that tag, and `to_bytes` normalizes any byte source to ``bytes``.
HMAC keys go through `to_bytes` before they reach a descriptor's template.
"""

from __future__ import annotations

import os
from enum import Enum
from typing import Any

from digestgen.exceptions import UnsupportedInputError
from digestgen.runtime import read_all


class InputKind(Enum):
    """Runtime input kinds, one generated variant each."""

    BYTES = "bytes"
    TEXT = "text"
    STREAM = "stream"
    FILE = "file"
    ABSENT = "absent"


def classify(value: Any) -> InputKind:
    """Return the input kind of a value.

    Args:
        value: A bytes-like object, a string, a path, a readable stream or None.

    Returns:
        The matching InputKind.

    Raises:
        UnsupportedInputError: If the value is none of the above.
    """
    if value is None:
        return InputKind.ABSENT
    if isinstance(value, (bytes, bytearray, memoryview)):
        return InputKind.BYTES
    if isinstance(value, str):
        return InputKind.TEXT
    if isinstance(value, os.PathLike):
        return InputKind.FILE
    if callable(getattr(value, "read", None)):
        return InputKind.STREAM
    raise UnsupportedInputError(f"cannot read bytes from {type(value).__name__}")


def to_bytes(value: Any, encoding: str = "utf-8") -> bytes:
    """Normalize a byte source to bytes.

    Files and streams are read to the end, which consumes them.

    Args:
        value: Bytes-like object, text, path or readable stream.
        encoding: Encoding for text values and text streams.

    Returns:
        The content of the source as bytes.

    Raises:
        UnsupportedInputError: If the value is absent or not a byte source.
        OSError: If a file or stream cannot be read.
    """
    kind = classify(value)
    if kind is InputKind.BYTES:
        return bytes(value)
    if kind is InputKind.TEXT:
        return value.encode(encoding)
    if kind is InputKind.STREAM:
        return read_all(value, encoding=encoding)
    if kind is InputKind.FILE:
        with open(value, "rb") as stream:
            content = read_all(stream)
        return content
    raise UnsupportedInputError("cannot read bytes from an absent value")
