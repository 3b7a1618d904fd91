"""Identity code generators.

These generators do no hashing at all: the "digest" of a message is the
message itself, and the "HMAC" is the key followed by the message. That
makes the output of every generated function easy to predict.
"""

from __future__ import annotations

import ast
from collections.abc import Mapping

from digestgen.forms import expr


class IdentityHashGen:
    """Hash generator whose digest is its input."""

    def __init__(self, display: str = "MD5") -> None:
        self._display = display

    def algorithm_string(self) -> str:
        return self._display

    def imports(self) -> Mapping[str, str]:
        return {"_read_all": "digestgen.runtime:read_all"}

    def bytes_to_hash(self, form: ast.expr) -> ast.expr:
        return expr("bytes(data)", data=form)

    def stream_to_hash(self, form: ast.expr) -> ast.expr:
        return expr("_read_all(stream)", stream=form)

    def hash_to_string(self, form: ast.expr) -> ast.expr:
        return expr("digest.hex()", digest=form)

    def hash_to_bytes(self, form: ast.expr) -> ast.expr:
        return expr("bytes(digest)", digest=form)


class ConcatHmacGen:
    """HMAC generator whose code is the key followed by the message."""

    def __init__(self, display: str = "Concat") -> None:
        self._display = display

    def algorithm_string(self) -> str:
        return self._display

    def imports(self) -> Mapping[str, str]:
        return {"_read_all": "digestgen.runtime:read_all"}

    def bytes_to_hmac(self, msg_form: ast.expr, key_form: ast.expr) -> ast.expr:
        return expr("key + bytes(data)", key=key_form, data=msg_form)

    def stream_to_hmac(self, stream_form: ast.expr, key_form: ast.expr) -> ast.expr:
        return expr("key + _read_all(stream)", key=key_form, stream=stream_form)

    def hmac_to_string(self, form: ast.expr) -> ast.expr:
        return expr("mac.hex()", mac=form)

    def hmac_to_bytes(self, form: ast.expr) -> ast.expr:
        return expr("bytes(mac)", mac=form)


class IdentityGen(IdentityHashGen, ConcatHmacGen):
    """Identity hashing and concatenating HMAC."""

    def __init__(self) -> None:
        super().__init__("Identity")


class NothingGen:
    """Code generator without any capability."""

    def algorithm_string(self) -> str:
        return "Nothing"

    def imports(self) -> Mapping[str, str]:
        return {}
