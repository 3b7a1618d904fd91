"""Per-input-kind synthesis.

The first generation stage turns a descriptor into a `PrivateOperationSet`:
for each supported capability, one function per `InputKind`, a dispatch
table keyed by kind, and a dispatcher that classifies its argument and calls
the matching variant. Every name in this stage is fresh, so none of it can
be reached or shadowed from outside the generated module.
"""

from __future__ import annotations

import ast
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import Enum

from digestgen.config import GeneratorConfig
from digestgen.descriptor import AlgorithmDescriptor
from digestgen.forms import attribute, block, docstring, expr, name
from digestgen.gen.hygiene import NameAllocator
from digestgen.interfaces.codegen import IHashGen, IHmacGen
from digestgen.sources import InputKind

logger = logging.getLogger(__name__)


class Capability(Enum):
    """Capabilities a descriptor can support."""

    HASH = "hash"
    HMAC = "hmac"


@dataclass(frozen=True)
class Variant:
    """One generated implementation for one input kind."""

    kind: InputKind
    name: str
    definition: ast.FunctionDef


@dataclass(frozen=True)
class PrivateOperation:
    """All input-kind variants of one capability and their dispatcher.

    Attributes:
        capability: The capability these functions compute.
        dispatcher: Name of the function dispatching on the input kind.
        variants: The variants, one per InputKind.
        statements: Definitions of variants, table and dispatcher.
    """

    capability: Capability
    dispatcher: str
    variants: tuple[Variant, ...]
    statements: tuple[ast.stmt, ...]

    @property
    def keyed(self) -> bool:
        return self.capability is Capability.HMAC


@dataclass(frozen=True)
class PrivateOperationSet:
    """Implementation-private operations generated for one descriptor.

    Attributes:
        algorithm: Display name of the algorithm.
        hashing: Hash operation, if the descriptor supports hashing.
        authentication: HMAC operation, if the descriptor supports authentication.
        imports: Runtime objects the generated dispatch code needs, by fresh alias.
    """

    algorithm: str
    hashing: PrivateOperation | None
    authentication: PrivateOperation | None
    imports: Mapping[str, str]

    def operations(self) -> tuple[PrivateOperation, ...]:
        return tuple(op for op in (self.hashing, self.authentication) if op is not None)

    def statements(self) -> list[ast.stmt]:
        return [stmt for op in self.operations() for stmt in op.statements]


class _Synthesizer:
    def __init__(
        self,
        base: str,
        allocator: NameAllocator,
        config: GeneratorConfig,
    ) -> None:
        self._base = base
        self._allocator = allocator
        self._encoding = ast.Constant(value=config.encoding)
        self.classify = allocator.fresh("classify")
        self.to_bytes = allocator.fresh("to_bytes")
        self.kinds = allocator.fresh("InputKind")

    def imports(self) -> dict[str, str]:
        return {
            self.classify: "digestgen.sources:classify",
            self.to_bytes: "digestgen.sources:to_bytes",
            self.kinds: "digestgen.sources:InputKind",
        }

    def fresh(self, hint: str) -> str:
        return self._allocator.fresh(hint)

    def _encoded(self, text: str) -> ast.expr:
        return expr("text.encode(ENCODING)", text=name(text), ENCODING=self._encoding)

    def _define(self, template: str, names: dict[str, str], **holes: ast.expr) -> ast.FunctionDef:
        definition = block(template, names=names, **holes)[0]
        assert isinstance(definition, ast.FunctionDef)
        return definition

    def _variant_name(self, capability: Capability, kind: InputKind) -> str:
        return self.fresh(f"{self._base}_{capability.value}_{kind.value}")

    def hash_variants(self, gen: IHashGen) -> list[Variant]:
        variants = []
        direct: dict[InputKind, Callable[[str], ast.expr]] = {
            InputKind.BYTES: lambda this: gen.bytes_to_hash(name(this)),
            InputKind.TEXT: lambda this: gen.bytes_to_hash(self._encoded(this)),
            InputKind.STREAM: lambda this: gen.stream_to_hash(name(this)),
        }
        for kind, template in direct.items():
            fn, this = self._variant_name(Capability.HASH, kind), self.fresh("this")
            definition = self._define(
                "def NAME(THIS, /):\n    return BODY",
                {"NAME": fn, "THIS": this},
                BODY=template(this),
            )
            variants.append(Variant(kind, fn, definition))

        stream_variant = variants[-1].name
        fn = self._variant_name(Capability.HASH, InputKind.FILE)
        definition = self._define(
            "def NAME(PATH, /):\n"
            "    with open(PATH, 'rb') as STREAM:\n"
            "        return STREAM_VARIANT(STREAM)",
            {
                "NAME": fn,
                "PATH": self.fresh("path"),
                "STREAM": self.fresh("stream"),
                "STREAM_VARIANT": stream_variant,
            },
        )
        variants.append(Variant(InputKind.FILE, fn, definition))

        fn = self._variant_name(Capability.HASH, InputKind.ABSENT)
        definition = self._define(
            "def NAME(THIS, /):\n    return None", {"NAME": fn, "THIS": self.fresh("this")}
        )
        variants.append(Variant(InputKind.ABSENT, fn, definition))
        return variants

    def hmac_variants(self, gen: IHmacGen) -> list[Variant]:
        variants = []
        direct: dict[InputKind, Callable[[str, str], ast.expr]] = {
            InputKind.BYTES: lambda this, secret: gen.bytes_to_hmac(name(this), name(secret)),
            InputKind.TEXT: lambda this, secret: gen.bytes_to_hmac(
                self._encoded(this), name(secret)
            ),
            InputKind.STREAM: lambda this, secret: gen.stream_to_hmac(name(this), name(secret)),
        }
        for kind, template in direct.items():
            fn, this, secret = (
                self._variant_name(Capability.HMAC, kind),
                self.fresh("this"),
                self.fresh("secret"),
            )
            definition = self._define(
                "def NAME(THIS, KEY, /):\n"
                "    SECRET = TO_BYTES(KEY, ENCODING)\n"
                "    return BODY",
                {
                    "NAME": fn,
                    "THIS": this,
                    "KEY": self.fresh("key"),
                    "SECRET": secret,
                    "TO_BYTES": self.to_bytes,
                },
                ENCODING=self._encoding,
                BODY=template(this, secret),
            )
            variants.append(Variant(kind, fn, definition))

        stream_variant = variants[-1].name
        fn = self._variant_name(Capability.HMAC, InputKind.FILE)
        definition = self._define(
            "def NAME(PATH, KEY, /):\n"
            "    with open(PATH, 'rb') as STREAM:\n"
            "        return STREAM_VARIANT(STREAM, KEY)",
            {
                "NAME": fn,
                "PATH": self.fresh("path"),
                "KEY": self.fresh("key"),
                "STREAM": self.fresh("stream"),
                "STREAM_VARIANT": stream_variant,
            },
        )
        variants.append(Variant(InputKind.FILE, fn, definition))

        fn = self._variant_name(Capability.HMAC, InputKind.ABSENT)
        definition = self._define(
            "def NAME(THIS, KEY, /):\n    return None",
            {"NAME": fn, "THIS": self.fresh("this"), "KEY": self.fresh("key")},
        )
        variants.append(Variant(InputKind.ABSENT, fn, definition))
        return variants

    def operation(
        self, capability: Capability, algorithm: str, variants: list[Variant]
    ) -> PrivateOperation:
        table = self.fresh(f"{self._base}_{capability.value}_table")
        dispatcher = self.fresh(f"compute_{self._base}_{capability.value}")

        statements: list[ast.stmt] = [v.definition for v in variants]
        statements += block("TABLE = {}", names={"TABLE": table})
        for variant in variants:
            statements += block(
                "TABLE[KIND] = FUNCTION",
                names={"TABLE": table, "FUNCTION": variant.name},
                KIND=attribute(self.kinds, variant.kind.name),
            )

        if capability is Capability.HMAC:
            template = "def NAME(THIS, KEY, /):\n    return TABLE[CLASSIFY(THIS)](THIS, KEY)"
            names = {"KEY": self.fresh("key")}
            doc = f"Compute the {algorithm} HMAC of any supported input."
        else:
            template = "def NAME(THIS, /):\n    return TABLE[CLASSIFY(THIS)](THIS)"
            names = {}
            doc = f"Compute the {algorithm} hash of any supported input."
        names.update(
            {"NAME": dispatcher, "THIS": self.fresh("this"), "TABLE": table, "CLASSIFY": self.classify}
        )
        definition = self._define(template, names)
        definition.body.insert(0, docstring(doc))
        statements.append(definition)

        return PrivateOperation(
            capability=capability,
            dispatcher=dispatcher,
            variants=tuple(variants),
            statements=tuple(statements),
        )


def synthesize_private(
    descriptor: AlgorithmDescriptor,
    base: str,
    allocator: NameAllocator,
    config: GeneratorConfig,
) -> PrivateOperationSet:
    """Build the private operations of a descriptor.

    Args:
        descriptor: The algorithm to generate code for.
        base: Identifier root used in the hints of fresh names.
        allocator: Source of fresh identifiers for this generation pass.
        config: Generation settings.

    Returns:
        The private operations, one per supported capability.
    """
    synth = _Synthesizer(base, allocator, config)

    hashing = None
    if descriptor.hashing is not None:
        hashing = synth.operation(
            Capability.HASH, descriptor.name, synth.hash_variants(descriptor.hashing)
        )

    authentication = None
    if descriptor.authentication is not None:
        authentication = synth.operation(
            Capability.HMAC, descriptor.name, synth.hmac_variants(descriptor.authentication)
        )

    logger.debug(
        "synthesized private operations for %s: hashing=%s authentication=%s",
        descriptor.name,
        hashing is not None,
        authentication is not None,
    )
    return PrivateOperationSet(
        algorithm=descriptor.name,
        hashing=hashing,
        authentication=authentication,
        imports=synth.imports(),
    )
