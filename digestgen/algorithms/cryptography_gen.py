"""Code generators backed by the `cryptography` hash and HMAC primitives."""

from __future__ import annotations

import ast
from collections.abc import Mapping

from digestgen.forms import expr


class CryptographyHashGen:
    """Hashing with `cryptography.hazmat.primitives.hashes`.

    Digests are produced as bytes, so the native value and the byte output
    are the same.
    """

    def __init__(self, display: str, algorithm: str, *args: int) -> None:
        """Initialize the code generator.

        Args:
            display: Display name of the algorithm.
            algorithm: Name of the class in `cryptography.hazmat.primitives.hashes`.
            *args: Constructor arguments of that class, e.g. the BLAKE2 digest size.
        """
        self._display = display
        self._algorithm = expr(f"_hashes.{algorithm}({', '.join(str(a) for a in args)})")

    def algorithm_string(self) -> str:
        """Return the display name of the algorithm."""
        return self._display

    def imports(self) -> Mapping[str, str]:
        """Return the modules and runtime helpers the emitted code uses, by alias."""
        return {
            "_hashes": "cryptography.hazmat.primitives.hashes",
            "_feed": "digestgen.runtime:feed",
            "_feed_stream": "digestgen.runtime:feed_stream",
        }

    def bytes_to_hash(self, form: ast.expr) -> ast.expr:
        """Hash the bytes produced by form in one call."""
        return expr(
            "_feed(_hashes.Hash(ALGORITHM), data).finalize()", ALGORITHM=self._algorithm, data=form
        )

    def stream_to_hash(self, form: ast.expr) -> ast.expr:
        """Hash the stream produced by form, read in buffered chunks."""
        return expr(
            "_feed_stream(_hashes.Hash(ALGORITHM), stream).finalize()",
            ALGORITHM=self._algorithm,
            stream=form,
        )

    def hash_to_string(self, form: ast.expr) -> ast.expr:
        """Render a digest as lowercase hex."""
        return expr("digest.hex()", digest=form)

    def hash_to_bytes(self, form: ast.expr) -> ast.expr:
        """Return a digest as bytes."""
        return expr("bytes(digest)", digest=form)


class CryptographyHmacGen(CryptographyHashGen):
    """Hashing and HMAC with `cryptography`."""

    def imports(self) -> Mapping[str, str]:
        """Return the hash imports plus the `cryptography` HMAC module."""
        return {**super().imports(), "_hmac": "cryptography.hazmat.primitives.hmac"}

    def bytes_to_hmac(self, msg_form: ast.expr, key_form: ast.expr) -> ast.expr:
        """Authenticate the bytes of msg_form with the byte key of key_form."""
        return expr(
            "_feed(_hmac.HMAC(key, ALGORITHM), data).finalize()",
            ALGORITHM=self._algorithm,
            key=key_form,
            data=msg_form,
        )

    def stream_to_hmac(self, stream_form: ast.expr, key_form: ast.expr) -> ast.expr:
        """Authenticate a stream with the byte key of key_form."""
        return expr(
            "_feed_stream(_hmac.HMAC(key, ALGORITHM), stream).finalize()",
            ALGORITHM=self._algorithm,
            key=key_form,
            stream=stream_form,
        )

    def hmac_to_string(self, form: ast.expr) -> ast.expr:
        """Render a MAC as lowercase hex."""
        return expr("mac.hex()", mac=form)

    def hmac_to_bytes(self, form: ast.expr) -> ast.expr:
        """Return a MAC as bytes."""
        return expr("bytes(mac)", mac=form)
