"""Registry of algorithm descriptors by external name."""

from __future__ import annotations

import logging

from digestgen.descriptor import AlgorithmDescriptor
from digestgen.exceptions import GenerationError
from digestgen.interfaces.codegen import ICodeGen

logger = logging.getLogger(__name__)

_descriptors: dict[str, AlgorithmDescriptor] = {}


def register(
    algorithm: str, generator: AlgorithmDescriptor | ICodeGen, *, replace: bool = False
) -> AlgorithmDescriptor:
    """Register the descriptor for an algorithm name.

    Args:
        algorithm: External name, e.g. "sha256".
        generator: A descriptor, or a code generator to describe.
        replace: Allow replacing an existing registration.

    Returns:
        The registered descriptor.

    Raises:
        GenerationError: If the name is already registered and replace is False.
    """
    if algorithm in _descriptors and not replace:
        raise GenerationError(f"algorithm already registered: {algorithm!r}")

    if isinstance(generator, AlgorithmDescriptor):
        descriptor = generator
    else:
        descriptor = AlgorithmDescriptor.from_code_gen(generator)
    _descriptors[algorithm] = descriptor
    logger.debug("registered %s as %r", descriptor.name, algorithm)
    return descriptor


def unregister(algorithm: str) -> None:
    """Remove the descriptor registered under a name, if any."""
    _descriptors.pop(algorithm, None)


def code_generator(algorithm: str) -> AlgorithmDescriptor | None:
    """Get the descriptor registered for an algorithm name.

    Unknown names are reported as a warning rather than an error, so that a
    build generating many families skips the missing one and carries on.

    Args:
        algorithm: External name of the algorithm.

    Returns:
        The descriptor, or None if nothing is registered under that name.
    """
    descriptor = _descriptors.get(algorithm)
    if descriptor is None:
        logger.warning("No such code generator: %s", algorithm)
    return descriptor


def registered() -> list[str]:
    """Return the registered algorithm names in sorted order."""
    return sorted(_descriptors)
