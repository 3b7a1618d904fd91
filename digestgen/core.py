"""Digest and HMAC functions for every built-in algorithm.

For each algorithm ``X`` this module defines ``X``, ``X_bytes``, ``X_file``,
``X_file_bytes``, ``X_raw`` and ``X_file_raw``, and for algorithms with HMAC
support the ``X_hmac*`` analogues taking a key as second argument:

    >>> from digestgen.core import md5, sha256_hmac
    >>> md5("abc")
    '900150983cd24fb0d6963f7d28e17f72'

Names containing a dash are exported with an underscore (``sha3_256``).
"""

from digestgen.algorithms import BUILTINS
from digestgen.gen import FunctionFamily, generate_hash

FAMILIES: dict[str, FunctionFamily] = {}

__all__: list[str] = []

for _algorithm in BUILTINS:
    _family = generate_hash(_algorithm)
    if _family is None:
        continue
    FAMILIES[_algorithm] = _family
    __all__ += _family.install(globals())

del _algorithm, _family
