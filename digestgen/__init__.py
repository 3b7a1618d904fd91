"""digestgen: generated digest and HMAC function families.

This package turns a small per-algorithm code generator into a complete,
uniformly named family of functions covering byte, text, stream and file
inputs, hex, byte and native outputs, and plain hashing as well as HMAC.

Main Components:
    - AlgorithmDescriptor: Capabilities of one algorithm
    - ICodeGen, IHashGen, IHmacGen: Protocols an algorithm implements
    - generate_family / generate_hash: Build a FunctionFamily
    - to_bytes: Normalize bytes, text, files and streams to bytes
    - buffer_size: Scoped override of the read buffer size

Example:
    >>> from digestgen.core import sha256, sha256_hmac_file
    >>> # or generate a family for your own code generator
    >>> from digestgen import AlgorithmDescriptor, generate_family
"""

from digestgen.config import (
    DEFAULT_BUFFER_SIZE,
    GeneratorConfig,
    buffer_size,
    current_buffer_size,
)
from digestgen.descriptor import AlgorithmDescriptor
from digestgen.exceptions import (
    ConfigurationError,
    DigestGenError,
    GenerationError,
    UnsupportedInputError,
)
from digestgen.gen import FunctionFamily, generate_family, generate_hash
from digestgen.interfaces import ICodeGen, IHashGen, IHmacGen
from digestgen.registry import code_generator, register
from digestgen.sources import InputKind, classify, to_bytes

__version__ = "0.1.0"

__all__ = [
    # Generation
    "AlgorithmDescriptor",
    "FunctionFamily",
    "generate_family",
    "generate_hash",
    "code_generator",
    "register",
    # Interfaces
    "ICodeGen",
    "IHashGen",
    "IHmacGen",
    # Inputs
    "InputKind",
    "classify",
    "to_bytes",
    # Configuration
    "DEFAULT_BUFFER_SIZE",
    "GeneratorConfig",
    "buffer_size",
    "current_buffer_size",
    # Exceptions
    "DigestGenError",
    "GenerationError",
    "UnsupportedInputError",
    "ConfigurationError",
]
