"""Code generator reference implementations for tests."""

from .capture import CaptureGen
from .failing import DigestFailure, FailingGen
from .identity import ConcatHmacGen, IdentityGen, IdentityHashGen, NothingGen

__all__ = [
    "CaptureGen",
    "ConcatHmacGen",
    "DigestFailure",
    "FailingGen",
    "IdentityGen",
    "IdentityHashGen",
    "NothingGen",
]
