"""Lowering of generated definitions into source text and callables."""

from __future__ import annotations

import ast
from collections.abc import Iterable, Mapping
from typing import Any, Callable

from digestgen.exceptions import GenerationError


def import_statements(imports: Mapping[str, str]) -> list[ast.stmt]:
    """Turn alias -> "module" / "module:attribute" pairs into import statements."""
    statements: list[ast.stmt] = []
    for alias, target in sorted(imports.items()):
        module, _, attribute = target.partition(":")
        if attribute:
            text = f"from {module} import {attribute} as {alias}"
        else:
            text = f"import {module} as {alias}"
        statements += ast.parse(text).body
    return statements


def build_module(imports: Mapping[str, str], body: Iterable[ast.stmt]) -> ast.Module:
    module = ast.Module(body=import_statements(imports) + list(body), type_ignores=[])
    return ast.fix_missing_locations(module)


def render(module: ast.Module, header: str | None = None) -> str:
    """Render a generated module as Python source."""
    source = ast.unparse(module) + "\n"
    if header:
        source = "".join(f"# {line}\n" for line in header.splitlines()) + source
    return source


def load(module: ast.Module, module_name: str, names: Iterable[str]) -> dict[str, Callable[..., Any]]:
    """Compile and run a generated module, returning the requested globals.

    Args:
        module: The module AST, including its import statements.
        module_name: Value of ``__name__`` while the module runs.
        names: Globals to return.

    Returns:
        The requested globals by name, in the given order.

    Raises:
        GenerationError: If the module cannot be compiled or an import fails.
    """
    try:
        code = compile(module, f"<{module_name}>", "exec")
    except (SyntaxError, ValueError, TypeError) as e:
        raise GenerationError(f"generated code for {module_name} does not compile: {e}") from e

    namespace: dict[str, Any] = {"__name__": module_name}
    try:
        exec(code, namespace)
    except ImportError as e:
        raise GenerationError(f"cannot import runtime dependency of {module_name}: {e}") from e

    return {name: namespace[name] for name in names}
