"""BLAKE3 code generator.

This module generates BLAKE3 hashing code using the `blake3` package.
"""

from __future__ import annotations

import ast
from collections.abc import Mapping

from digestgen.forms import expr


class Blake3Gen:
    """BLAKE3 hashing with 32-byte digests."""

    def algorithm_string(self) -> str:
        """Return "BLAKE3"."""
        return "BLAKE3"

    def imports(self) -> Mapping[str, str]:
        """Return the `blake3` hasher and the stream helper, by alias."""
        return {"_blake3": "blake3:blake3", "_feed_stream": "digestgen.runtime:feed_stream"}

    def bytes_to_hash(self, form: ast.expr) -> ast.expr:
        """Hash the bytes produced by form."""
        return expr("_blake3(data).digest()", data=form)

    def stream_to_hash(self, form: ast.expr) -> ast.expr:
        """Hash a stream in buffered chunks."""
        return expr("_feed_stream(_blake3(), stream).digest()", stream=form)

    def hash_to_string(self, form: ast.expr) -> ast.expr:
        """Render a digest as lowercase hex."""
        return expr("digest.hex()", digest=form)

    def hash_to_bytes(self, form: ast.expr) -> ast.expr:
        """Return a digest as bytes."""
        return expr("bytes(digest)", digest=form)
