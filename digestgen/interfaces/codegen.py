"""Code generator interfaces for digestgen.

This module defines the protocols an algorithm implements to plug into the
generator. Every transformer receives AST handles for values that only exist
when the generated function runs, and returns a new AST expression computing
the derived value. Transformers are called once, at generation time.
"""

from __future__ import annotations

import ast
from collections.abc import Mapping
from typing import Protocol, runtime_checkable


@runtime_checkable
class ICodeGen(Protocol):
    """Interface shared by all code generators."""

    def algorithm_string(self) -> str:
        """Get the display name of the algorithm.

        Returns:
            The algorithm name, e.g. "SHA-256".
        """
        ...

    def imports(self) -> Mapping[str, str]:
        """Get the runtime objects the generated expressions refer to.

        Returns:
            A mapping from alias to "module" or "module:attribute".
        """
        ...


@runtime_checkable
class IHashGen(Protocol):
    """Interface for generating plain digest computations."""

    def bytes_to_hash(self, form: ast.expr) -> ast.expr:
        """Generate code hashing the bytes produced by form.

        Args:
            form: Expression producing a bytes-like object.

        Returns:
            Expression producing the native digest value.
        """
        ...

    def stream_to_hash(self, form: ast.expr) -> ast.expr:
        """Generate code hashing the stream produced by form.

        Args:
            form: Expression producing a readable binary or text stream.

        Returns:
            Expression producing the native digest value.
        """
        ...

    def hash_to_string(self, form: ast.expr) -> ast.expr:
        """Generate code converting a native digest to a hex string."""
        ...

    def hash_to_bytes(self, form: ast.expr) -> ast.expr:
        """Generate code converting a native digest to bytes."""
        ...


@runtime_checkable
class IHmacGen(Protocol):
    """Interface for generating keyed message authentication codes."""

    def bytes_to_hmac(self, msg_form: ast.expr, key_form: ast.expr) -> ast.expr:
        """Generate code computing the HMAC of the bytes produced by msg_form.

        Args:
            msg_form: Expression producing a bytes-like message.
            key_form: Expression producing the key as bytes.

        Returns:
            Expression producing the native HMAC value.
        """
        ...

    def stream_to_hmac(self, stream_form: ast.expr, key_form: ast.expr) -> ast.expr:
        """Generate code computing the HMAC of the stream produced by stream_form.

        Args:
            stream_form: Expression producing a readable binary or text stream.
            key_form: Expression producing the key as bytes.

        Returns:
            Expression producing the native HMAC value.
        """
        ...

    def hmac_to_string(self, form: ast.expr) -> ast.expr:
        """Generate code converting a native HMAC value to a hex string."""
        ...

    def hmac_to_bytes(self, form: ast.expr) -> ast.expr:
        """Generate code converting a native HMAC value to bytes."""
        ...
