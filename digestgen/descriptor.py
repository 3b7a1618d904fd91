"""Algorithm descriptors.

An `AlgorithmDescriptor` is the only input to generation: a display name,
the optional hashing and authentication capabilities, and the runtime
imports their templates rely on.
"""

from __future__ import annotations

import builtins
import keyword
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from digestgen.exceptions import GenerationError
from digestgen.interfaces.codegen import ICodeGen, IHashGen, IHmacGen


def _is_dotted(path: str) -> bool:
    return all(part.isidentifier() and not keyword.iskeyword(part) for part in path.split("."))


def check_import(alias: str, target: str) -> None:
    """Validate one import alias and its "module" or "module:attribute" target.

    Raises:
        GenerationError: If the alias is unusable or the target is malformed.
    """
    if not alias.isidentifier() or keyword.iskeyword(alias):
        raise GenerationError(f"import alias is not an identifier: {alias!r}")
    if hasattr(builtins, alias):
        raise GenerationError(f"import alias shadows a builtin: {alias!r}")

    module, _, attribute = target.partition(":")
    if not _is_dotted(module) or (attribute and not attribute.isidentifier()):
        raise GenerationError(f"malformed import target for {alias!r}: {target!r}")


@dataclass(frozen=True)
class AlgorithmDescriptor:
    """Capabilities of one digest algorithm.

    Attributes:
        name: Display name of the algorithm.
        hashing: Transformers for plain digests, if supported.
        authentication: Transformers for HMACs, if supported.
        imports: Alias to "module" or "module:attribute" for the objects the
            transformers' expressions refer to.
    """

    name: str
    hashing: IHashGen | None = None
    authentication: IHmacGen | None = None
    imports: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for alias, target in self.imports.items():
            check_import(alias, target)
        object.__setattr__(self, "imports", MappingProxyType(dict(self.imports)))

    @property
    def supports_hashing(self) -> bool:
        """Whether plain hash functions can be generated."""
        return self.hashing is not None

    @property
    def supports_authentication(self) -> bool:
        """Whether HMAC functions can be generated."""
        return self.authentication is not None

    @classmethod
    def from_code_gen(cls, code_gen: ICodeGen) -> AlgorithmDescriptor:
        """Describe a code generator by the protocols it satisfies.

        Args:
            code_gen: Object implementing ICodeGen and any of IHashGen, IHmacGen.

        Returns:
            The descriptor for the code generator.
        """
        return cls(
            name=code_gen.algorithm_string(),
            hashing=code_gen if isinstance(code_gen, IHashGen) else None,
            authentication=code_gen if isinstance(code_gen, IHmacGen) else None,
            imports=code_gen.imports(),
        )
