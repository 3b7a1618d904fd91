"""Generation of digest function families.

`generate_family` runs both stages for one descriptor: per-input-kind
synthesis of the private operations, then synthesis of the public family,
lowered into a module that is rendered to source and executed.
"""

from __future__ import annotations

import keyword
import logging
from collections.abc import Iterator, Mapping, MutableMapping
from dataclasses import dataclass, field
from typing import Any, Callable

from digestgen.config import GeneratorConfig
from digestgen.descriptor import AlgorithmDescriptor
from digestgen.exceptions import GenerationError
from digestgen.gen.family import FamilyMember, capabilities, member_names, synthesize_family
from digestgen.gen.hygiene import NameAllocator
from digestgen.gen.lower import build_module, load, render
from digestgen.gen.private import Capability, PrivateOperationSet, synthesize_private
from digestgen.registry import code_generator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FunctionFamily:
    """The public functions generated for one base name.

    Functions can be looked up by Python name (``md5_file_raw``) or by label
    (``md5-file*``).

    Attributes:
        base_name: Base name as given by the caller.
        algorithm: Display name of the algorithm.
        functions: Generated functions by Python name, in emission order.
        labels: Python name by label.
        source: Python source of the generated module.
    """

    base_name: str
    algorithm: str
    functions: Mapping[str, Callable[..., Any]] = field(default_factory=dict)
    labels: Mapping[str, str] = field(default_factory=dict)
    source: str = ""

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(self.functions)

    def __getitem__(self, name: str) -> Callable[..., Any]:
        return self.functions[self.labels.get(name, name)]

    def __contains__(self, name: object) -> bool:
        return name in self.functions or name in self.labels

    def __iter__(self) -> Iterator[str]:
        return iter(self.functions)

    def __len__(self) -> int:
        return len(self.functions)

    def install(self, namespace: MutableMapping[str, Any]) -> list[str]:
        """Copy the functions into a namespace such as a module's globals().

        Returns:
            The installed names.
        """
        namespace.update(self.functions)
        return list(self.functions)


def to_identifier(base_name: str) -> str:
    """Map a base name such as "sha3-256" to a Python identifier root.

    Raises:
        GenerationError: If the result is not a usable identifier.
    """
    identifier = base_name.replace("-", "_")
    if not identifier.isidentifier() or keyword.iskeyword(identifier):
        raise GenerationError(f"base name does not form an identifier: {base_name!r}")
    return identifier


def _check_imports(
    descriptor: AlgorithmDescriptor, public: list[tuple[str, str]], config: GeneratorConfig
) -> None:
    for alias in descriptor.imports:
        if alias.startswith(config.identifier_prefix):
            raise GenerationError(
                f"{descriptor.name} import alias {alias!r} uses the reserved prefix "
                f"{config.identifier_prefix!r}"
            )
    clash = {function for function, _ in public} & set(descriptor.imports)
    if clash:
        raise GenerationError(
            f"{descriptor.name} import aliases clash with generated names: {sorted(clash)}"
        )


def generate_family(
    descriptor: AlgorithmDescriptor,
    base_name: str,
    config: GeneratorConfig | None = None,
) -> FunctionFamily:
    """Generate the function family of a descriptor.

    Args:
        descriptor: The algorithm to generate functions for.
        base_name: Root of the generated names, e.g. "md5" or "sha3-256".
        config: Generation settings. Defaults to GeneratorConfig().

    Returns:
        Six functions per supported capability. A descriptor without any
        capability yields an empty family and a warning.

    Raises:
        GenerationError: If the base name or the descriptor's imports are unusable.
    """
    config = config or GeneratorConfig()
    identifier = to_identifier(base_name)
    supported = capabilities(descriptor)
    if not supported:
        logger.warning(
            "%s supports neither hashing nor authentication; no functions generated for %r",
            descriptor.name,
            base_name,
        )
        return FunctionFamily(base_name=base_name, algorithm=descriptor.name)

    public = member_names(identifier, base_name, supported)
    _check_imports(descriptor, public, config)

    allocator = NameAllocator(
        config.identifier_prefix,
        reserved=[*descriptor.imports, *(function for function, _ in public)],
    )
    operations = synthesize_private(descriptor, identifier, allocator, config)
    members = synthesize_family(descriptor, identifier, base_name, operations, allocator)

    module = build_module(
        {**descriptor.imports, **operations.imports},
        [*operations.statements(), *(member.definition for member in members)],
    )
    module_name = f"{config.module_prefix}.{identifier}"
    functions = load(module, module_name, [member.name for member in members])
    logger.debug("generated %d functions for %s as %r", len(functions), descriptor.name, base_name)

    header = f"{descriptor.name} functions for {base_name!r}, generated by digestgen."
    return FunctionFamily(
        base_name=base_name,
        algorithm=descriptor.name,
        functions=functions,
        labels={member.label: member.name for member in members},
        source=render(module, header=header),
    )


def generate_hash(
    algorithm: str, base_name: str | None = None, config: GeneratorConfig | None = None
) -> FunctionFamily | None:
    """Generate the family of a registered algorithm.

    Args:
        algorithm: Registered external name.
        base_name: Root of the generated names. Defaults to the algorithm name.
        config: Generation settings.

    Returns:
        The family, or None if no descriptor is registered under that name.
    """
    descriptor = code_generator(algorithm)
    if descriptor is None:
        return None
    return generate_family(descriptor, base_name or algorithm, config)


__all__ = [
    "Capability",
    "FamilyMember",
    "FunctionFamily",
    "PrivateOperationSet",
    "generate_family",
    "generate_hash",
    "to_identifier",
]
