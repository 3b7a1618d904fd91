"""Configuration for digestgen.

Generation settings live in an immutable `GeneratorConfig`. The buffer size
used by emitted functions when they read files and streams is held in a
context variable, so `buffer_size()` overrides it for one block only.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass

from digestgen.exceptions import ConfigurationError

DEFAULT_BUFFER_SIZE = 2048

_buffer_size: ContextVar[int] = ContextVar("digestgen_buffer_size", default=DEFAULT_BUFFER_SIZE)


def current_buffer_size() -> int:
    """Return the buffer size in effect for the current context."""
    return _buffer_size.get()


def check_buffer_size(size: int) -> int:
    if isinstance(size, bool) or not isinstance(size, int) or size <= 0:
        raise ConfigurationError(f"buffer size must be a positive integer, got {size!r}")
    return size


@contextmanager
def buffer_size(size: int) -> Iterator[int]:
    """Override the read buffer size for the dynamic extent of a block.

    Args:
        size: Number of bytes to request per read.

    Yields:
        The buffer size now in effect.

    Raises:
        ConfigurationError: If size is not a positive integer.
    """
    token = _buffer_size.set(check_buffer_size(size))
    try:
        yield size
    finally:
        _buffer_size.reset(token)


@dataclass(frozen=True)
class GeneratorConfig:
    """Configuration for function family generation.

    Attributes:
        encoding: Encoding applied to text inputs before hashing.
        identifier_prefix: Prefix of every fresh identifier in generated code.
        module_prefix: Dotted prefix used as `__module__` of generated functions.
    """

    encoding: str = "utf-8"
    identifier_prefix: str = "_dg_"
    module_prefix: str = "digestgen.generated"

    def __post_init__(self) -> None:
        try:
            "".encode(self.encoding)
        except LookupError as e:
            raise ConfigurationError(f"unknown text encoding: {self.encoding!r}") from e

        if not self.identifier_prefix.isidentifier():
            raise ConfigurationError(
                f"identifier prefix must be a valid identifier: {self.identifier_prefix!r}"
            )

        if not all(part.isidentifier() for part in self.module_prefix.split(".")):
            raise ConfigurationError(f"invalid module prefix: {self.module_prefix!r}")
