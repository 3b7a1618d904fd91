"""digestgen interfaces package.

This package provides the protocols algorithm implementers satisfy to plug
a digest or HMAC algorithm into the generator.
"""

from .codegen import ICodeGen, IHashGen, IHmacGen

__all__ = [
    "ICodeGen",
    "IHashGen",
    "IHmacGen",
]
