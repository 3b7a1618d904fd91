"""Runtime helpers referenced by generated code.

Descriptor templates import these by alias so that the expressions they emit
stay single expressions.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, BinaryIO, TextIO, TypeVar

from digestgen.config import check_buffer_size, current_buffer_size

C = TypeVar("C")


def _chunks(stream: Any, buffer_size: int | None, encoding: str):
    size = current_buffer_size() if buffer_size is None else check_buffer_size(buffer_size)
    while True:
        chunk = stream.read(size)
        if not chunk:
            return
        # Text streams yield str.
        if isinstance(chunk, str):
            chunk = chunk.encode(encoding)
        yield chunk


def feed(ctx: C, data: bytes) -> C:
    """Update a hashing context with data and return the context."""
    ctx.update(data)  # type: ignore[attr-defined]
    return ctx


def feed_stream(
    ctx: C, stream: BinaryIO | TextIO, buffer_size: int | None = None, encoding: str = "utf-8"
) -> C:
    """Update a hashing context with the rest of a stream.

    Args:
        ctx: Any object with an ``update(bytes)`` method.
        stream: Binary or text stream, read until exhausted.
        buffer_size: Bytes per read. Defaults to the current scoped buffer size.
        encoding: Encoding applied to the chunks of a text stream.

    Returns:
        The same context, ready to be finalized.
    """
    for chunk in _chunks(stream, buffer_size, encoding):
        ctx.update(chunk)  # type: ignore[attr-defined]
    return ctx


def read_all(stream: Any, buffer_size: int | None = None, encoding: str = "utf-8") -> bytes:
    """Read a stream to the end and return its content as bytes.

    Text chunks are encoded with the given encoding.
    """
    content = bytearray()
    for chunk in _chunks(stream, buffer_size, encoding):
        content += chunk
    return bytes(content)


def checksum_stream(
    update: Callable[[bytes, int], int],
    stream: BinaryIO | TextIO,
    start: int,
    buffer_size: int | None = None,
    encoding: str = "utf-8",
) -> int:
    """Run a rolling checksum function such as ``zlib.crc32`` over a stream."""
    value = start
    for chunk in _chunks(stream, buffer_size, encoding):
        value = update(chunk, value)
    return value
