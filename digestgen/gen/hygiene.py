"""Fresh identifiers for generated code."""

from __future__ import annotations

import builtins
import itertools
import re
from collections.abc import Iterable

# Shared by every allocator so two generation passes never issue the same name.
_counter = itertools.count(1)


class NameAllocator:
    """Issue identifiers that cannot collide with each other or with reserved names.

    Every name is ``<prefix><hint>_<n>`` with ``n`` taken from a process-wide
    counter. Names in ``reserved`` and Python builtins are never issued.
    """

    def __init__(self, prefix: str = "_dg_", reserved: Iterable[str] = ()) -> None:
        self._prefix = prefix
        self._taken = set(reserved)

    def fresh(self, hint: str) -> str:
        """Return a new identifier.

        Args:
            hint: Readable part of the name; characters that are not valid in
                identifiers are replaced by underscores.

        Returns:
            An identifier never returned before.
        """
        hint = re.sub(r"\W", "_", hint) or "g"
        while True:
            candidate = f"{self._prefix}{hint}_{next(_counter)}"
            if candidate not in self._taken and not hasattr(builtins, candidate):
                self._taken.add(candidate)
                return candidate
