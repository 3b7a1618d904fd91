"""Function family synthesis.

The second generation stage wraps the private dispatchers into the public
functions of a family. For a base name ``X`` there are six shapes per
capability:

    ============== ================ =================================
    label          Python name      computes
    ============== ================ =================================
    X              X                bytes or text -> hex string
    X-bytes        X_bytes          bytes or text -> bytes
    X-file         X_file           file path -> hex string
    X-file-bytes   X_file_bytes     file path -> bytes
    X*             X_raw            bytes or text -> native digest
    X-file*        X_file_raw       file path -> native digest
    ============== ================ =================================

The HMAC shapes insert ``-hmac`` (``_hmac``) after the base name and take the
key as a second argument.
"""

from __future__ import annotations

import ast
from dataclasses import dataclass
from enum import Enum

from digestgen.descriptor import AlgorithmDescriptor
from digestgen.forms import block, docstring, name
from digestgen.gen.hygiene import NameAllocator
from digestgen.gen.private import Capability, PrivateOperation, PrivateOperationSet


class Output(Enum):
    TEXT = "text"
    BYTES = "bytes"
    RAW = "raw"


@dataclass(frozen=True)
class Shape:
    """Input source and output representation of one public function."""

    suffix: str
    label: str
    from_file: bool
    output: Output


SHAPES = (
    Shape("", "", False, Output.TEXT),
    Shape("_bytes", "-bytes", False, Output.BYTES),
    Shape("_file", "-file", True, Output.TEXT),
    Shape("_file_bytes", "-file-bytes", True, Output.BYTES),
    Shape("_raw", "*", False, Output.RAW),
    Shape("_file_raw", "-file*", True, Output.RAW),
)

_INFIX = {Capability.HASH: ("", ""), Capability.HMAC: ("_hmac", "-hmac")}

_OUTPUT_DOC = {
    Output.TEXT: "as a hex string",
    Output.BYTES: "as bytes",
    Output.RAW: "as the algorithm's native digest value",
}


@dataclass(frozen=True)
class FamilyMember:
    """One public function of a family."""

    name: str
    label: str
    capability: Capability
    shape: Shape
    definition: ast.FunctionDef


def capabilities(descriptor: AlgorithmDescriptor) -> list[Capability]:
    supported = []
    if descriptor.supports_hashing:
        supported.append(Capability.HASH)
    if descriptor.supports_authentication:
        supported.append(Capability.HMAC)
    return supported


def member_names(identifier: str, label: str, supported: list[Capability]) -> list[tuple[str, str]]:
    """List the (Python name, label) pairs a family will define.

    Args:
        identifier: Base name as a Python identifier.
        label: Base name as given by the caller.
        supported: Capabilities of the descriptor.

    Returns:
        Pairs in emission order.
    """
    names = []
    for capability in supported:
        infix, label_infix = _INFIX[capability]
        for shape in SHAPES:
            names.append(
                (identifier + infix + shape.suffix, label + label_infix + shape.label)
            )
    return names


def _template(shape: Shape, keyed: bool) -> str:
    params = "ARG, KEY, /" if keyed else "ARG, /"
    source = "STREAM" if shape.from_file else "ARG"
    compute = f"COMPUTE({source}, KEY)" if keyed else f"COMPUTE({source})"

    lines = [f"def NAME({params}):"]
    if shape.from_file:
        lines += [
            "    if ARG is None:",
            "        return None",
            "    with open(ARG, 'rb') as STREAM:",
        ]
        if shape.output is Output.RAW:
            lines.append(f"        return {compute}")
        else:
            lines += [f"        DIGEST = {compute}", "    return ENCODED"]
    elif shape.output is Output.RAW:
        lines.append(f"    return {compute}")
    else:
        lines += [
            f"    DIGEST = {compute}",
            "    if DIGEST is None:",
            "        return None",
            "    return ENCODED",
        ]
    return "\n".join(lines)


def _encoded(descriptor: AlgorithmDescriptor, capability: Capability, output: Output, digest: str):
    form = name(digest)
    if capability is Capability.HMAC:
        gen = descriptor.authentication
        assert gen is not None
        return gen.hmac_to_string(form) if output is Output.TEXT else gen.hmac_to_bytes(form)

    gen = descriptor.hashing
    assert gen is not None
    return gen.hash_to_string(form) if output is Output.TEXT else gen.hash_to_bytes(form)


def _doc(algorithm: str, capability: Capability, shape: Shape) -> str:
    what = "HMAC" if capability is Capability.HMAC else "hash"
    source = "the file at a path" if shape.from_file else "a byte string or text"
    doc = f"Compute the {algorithm} {what} of {source}, {_OUTPUT_DOC[shape.output]}."
    if capability is Capability.HMAC:
        doc += "\n\nThe key may be bytes, text, a path or a readable stream."
    return doc + "\n\nReturns None when the input is None."


def _member(
    descriptor: AlgorithmDescriptor,
    operation: PrivateOperation,
    shape: Shape,
    function: str,
    label: str,
    allocator: NameAllocator,
) -> FamilyMember:
    names = {
        "NAME": function,
        "ARG": allocator.fresh("path" if shape.from_file else "value"),
        "COMPUTE": operation.dispatcher,
    }
    if operation.keyed:
        names["KEY"] = allocator.fresh("key")
    if shape.from_file:
        names["STREAM"] = allocator.fresh("stream")

    holes = {}
    if shape.output is not Output.RAW:
        names["DIGEST"] = allocator.fresh("digest")
        holes["ENCODED"] = _encoded(descriptor, operation.capability, shape.output, names["DIGEST"])

    definition = block(_template(shape, operation.keyed), names=names, **holes)[0]
    assert isinstance(definition, ast.FunctionDef)
    definition.body.insert(0, docstring(_doc(descriptor.name, operation.capability, shape)))
    return FamilyMember(function, label, operation.capability, shape, definition)


def synthesize_family(
    descriptor: AlgorithmDescriptor,
    identifier: str,
    label: str,
    operations: PrivateOperationSet,
    allocator: NameAllocator,
) -> list[FamilyMember]:
    """Build the public functions of a family.

    Args:
        descriptor: The algorithm the private operations were built from.
        identifier: Base name as a Python identifier.
        label: Base name as given by the caller.
        operations: Output of the per-input-kind synthesis.
        allocator: Source of fresh identifiers for this generation pass.

    Returns:
        Six members per supported capability, hashing first.
    """
    members = []
    for operation in operations.operations():
        infix, label_infix = _INFIX[operation.capability]
        for shape in SHAPES:
            members.append(
                _member(
                    descriptor,
                    operation,
                    shape,
                    identifier + infix + shape.suffix,
                    label + label_infix + shape.label,
                    allocator,
                )
            )
    return members
