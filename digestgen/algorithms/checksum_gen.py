"""Checksum code generators backed by `zlib`.

Checksums are native integers. Their text form is eight hex digits and their
byte form is four big-endian bytes.
"""

from __future__ import annotations

import ast
from collections.abc import Mapping

from digestgen.forms import expr


class ChecksumGen:
    """A 32-bit rolling checksum from `zlib`."""

    def __init__(self, display: str, function: str, start: int) -> None:
        """Initialize the code generator.

        Args:
            display: Display name of the checksum.
            function: Name of the `zlib` function, e.g. "crc32".
            start: Initial checksum value (0 for CRC32, 1 for Adler-32).
        """
        self._display = display
        self._function = expr(f"_zlib.{function}")
        self._start = ast.Constant(value=start)

    def algorithm_string(self) -> str:
        """Return the display name of the checksum."""
        return self._display

    def imports(self) -> Mapping[str, str]:
        """Return `zlib` and the rolling stream helper, by alias."""
        return {"_zlib": "zlib", "_checksum_stream": "digestgen.runtime:checksum_stream"}

    def bytes_to_hash(self, form: ast.expr) -> ast.expr:
        """Checksum the bytes produced by form."""
        return expr("CHECKSUM(data)", CHECKSUM=self._function, data=form)

    def stream_to_hash(self, form: ast.expr) -> ast.expr:
        """Checksum a stream, carrying the value across chunks."""
        return expr(
            "_checksum_stream(CHECKSUM, stream, START)",
            CHECKSUM=self._function,
            START=self._start,
            stream=form,
        )

    def hash_to_string(self, form: ast.expr) -> ast.expr:
        """Render the checksum as eight lowercase hex digits."""
        return expr("format(value, '08x')", value=form)

    def hash_to_bytes(self, form: ast.expr) -> ast.expr:
        """Render the checksum as four big-endian bytes."""
        return expr("value.to_bytes(4, 'big')", value=form)
