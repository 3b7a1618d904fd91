"""Tests for expression templates and fresh identifiers."""

from __future__ import annotations

import ast

import pytest

from digestgen import GenerationError
from digestgen.forms import attribute, block, expr, name
from digestgen.gen.hygiene import NameAllocator


def test_expr_splices_holes() -> None:
    node = expr("data.hex()", data=expr("compute(value)"))

    assert ast.unparse(node) == "compute(value).hex()"


def test_expr_keeps_globals_and_attributes() -> None:
    node = expr("_hashes.Hash(_hashes.SHA256(), data).data", data=name("x"))

    assert ast.unparse(node) == "_hashes.Hash(_hashes.SHA256(), x).data"


def test_expr_copies_handles() -> None:
    """Output nodes are never shared with the handles passed in."""
    handle = name("value")

    node = expr("(data, data)", data=handle)
    node.elts[0].id = "changed"

    assert handle.id == "value"
    assert node.elts[1].id == "value"


def test_expr_is_pure() -> None:
    """The same handles always give the same expression."""
    first = expr("f(data) + data", data=name("v"))
    second = expr("f(data) + data", data=name("v"))

    assert ast.dump(first) == ast.dump(second)
    assert first is not second


def test_expr_rejects_unused_holes() -> None:
    with pytest.raises(GenerationError, match="not found"):
        expr("data.hex()", data=name("x"), other=name("y"))


def test_expr_rejects_syntax_errors() -> None:
    with pytest.raises(GenerationError, match="invalid template"):
        expr("data.hex(", data=name("x"))


def test_block_renames_bindings() -> None:
    statements = block(
        "def NAME(PATH, /):\n"
        "    with open(PATH, 'rb') as STREAM:\n"
        "        return BODY",
        names={"NAME": "f", "PATH": "p", "STREAM": "s"},
        BODY=expr("g(s)"),
    )

    assert ast.unparse(statements[0]) == (
        "def f(p, /):\n    with open(p, 'rb') as s:\n        return g(s)"
    )


def test_block_rejects_placeholder_used_twice() -> None:
    with pytest.raises(GenerationError, match="both"):
        block("X = Y", names={"X": "a"}, X=name("b"), Y=name("c"))


def test_fresh_names_are_unique() -> None:
    allocator = NameAllocator()

    names = {allocator.fresh("this") for _ in range(100)}

    assert len(names) == 100
    assert all(n.startswith("_dg_this_") and n.isidentifier() for n in names)


def test_fresh_names_unique_across_allocators() -> None:
    first, second = NameAllocator(), NameAllocator()

    assert first.fresh("key") != second.fresh("key")


def test_fresh_sanitizes_hints() -> None:
    identifier = NameAllocator(prefix="_p_").fresh("compute-sha3-256*")

    assert identifier.startswith("_p_compute_sha3_256__")
    assert identifier.isidentifier()


def test_reserved_names_are_never_issued() -> None:
    allocator = NameAllocator(reserved=["md5"])
    first = allocator.fresh("x")
    counter = int(first.rsplit("_", 1)[1])
    reserved = {f"_dg_x_{n}" for n in range(counter + 1, counter + 50)}
    allocator = NameAllocator(reserved=reserved)

    issued = allocator.fresh("x")

    assert issued not in reserved
    assert issued.startswith("_dg_x_")


def test_attribute_builds_dotted_access() -> None:
    node = expr("kind is KIND", KIND=attribute("_kinds", "FILE"))

    assert ast.unparse(node) == "kind is _kinds.FILE"
