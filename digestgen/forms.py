"""Expression templates as Python ASTs.

Descriptors describe their transformations as small Python expressions with
holes. `expr` parses such a template and splices in the handles it receives:

    >>> import ast
    >>> ast.unparse(expr("data.hex()", data=name("digest")))
    'digest.hex()'

`block` does the same for statements and can also rename the identifiers a
statement template binds (function names, parameters, ``with`` targets).
Spliced handles are copied, so a template never shares nodes with its input.
"""

from __future__ import annotations

import ast
import copy
from collections.abc import Mapping
from functools import lru_cache

from digestgen.exceptions import GenerationError


@lru_cache(maxsize=None)
def _parse(template: str, mode: str) -> ast.AST:
    try:
        return ast.parse(template, mode=mode)
    except SyntaxError as e:
        raise GenerationError(f"invalid template {template!r}: {e.msg}") from e


class _Splice(ast.NodeTransformer):
    def __init__(self, holes: Mapping[str, ast.expr], names: Mapping[str, str]) -> None:
        self._holes = holes
        self._names = names
        self.used: set[str] = set()

    def visit_Name(self, node: ast.Name) -> ast.AST:
        if isinstance(node.ctx, ast.Load) and node.id in self._holes:
            self.used.add(node.id)
            return copy.deepcopy(self._holes[node.id])
        if node.id in self._names:
            self.used.add(node.id)
            node.id = self._names[node.id]
        return node

    def visit_FunctionDef(self, node: ast.FunctionDef) -> ast.AST:
        if node.name in self._names:
            self.used.add(node.name)
            node.name = self._names[node.name]
        self.generic_visit(node)
        return node

    def visit_arg(self, node: ast.arg) -> ast.AST:
        if node.arg in self._names:
            self.used.add(node.arg)
            node.arg = self._names[node.arg]
        return node


def _splice(tree: ast.AST, holes: Mapping[str, ast.expr], names: Mapping[str, str]) -> ast.AST:
    clash = set(holes) & set(names)
    if clash:
        raise GenerationError(f"placeholders used both as hole and as name: {sorted(clash)}")

    splicer = _Splice(holes, names)
    tree = splicer.visit(copy.deepcopy(tree))
    unused = (set(holes) | set(names)) - splicer.used
    if unused:
        raise GenerationError(f"placeholders not found in template: {sorted(unused)}")
    return tree


def expr(template: str, **holes: ast.expr) -> ast.expr:
    """Build an expression from a template.

    Args:
        template: A single Python expression.
        **holes: AST expressions substituted for the same-named identifiers.

    Returns:
        A new expression node.

    Raises:
        GenerationError: If the template does not parse or a hole is unused.
    """
    tree = _parse(template, "eval")
    return _splice(tree, holes, {}).body  # type: ignore[attr-defined]


def block(
    template: str, names: Mapping[str, str] | None = None, **holes: ast.expr
) -> list[ast.stmt]:
    """Build statements from a template.

    Args:
        template: One or more Python statements.
        names: Identifiers to rename wherever they are bound or referenced.
        **holes: AST expressions substituted for the same-named identifiers.

    Returns:
        The list of new statement nodes.
    """
    tree = _parse(template, "exec")
    return _splice(tree, holes, names or {}).body  # type: ignore[attr-defined]


def name(identifier: str) -> ast.Name:
    return ast.Name(id=identifier, ctx=ast.Load())


def attribute(identifier: str, attr: str) -> ast.Attribute:
    return ast.Attribute(value=name(identifier), attr=attr, ctx=ast.Load())


def docstring(text: str) -> ast.stmt:
    return ast.Expr(value=ast.Constant(value=text))
