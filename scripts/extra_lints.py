#!/usr/bin/env python3
"""Project-specific lint rules that ruff does not cover.

Rules:
1. no-class-tests: tests are module-level functions. Hypothesis state
   machines exposed through ``.TestCase`` are the exception.
2. no-print: library code logs through ``logging`` and never prints.
3. mutable-default: no list/dict/set literals or constructors as defaults.
4. no-global-random: library code never calls ``random.<fn>()`` directly.
   Randomness comes from the generator the caller passes in.

Usage: python scripts/extra_lints.py [paths...]
"""

import ast
import sys
from dataclasses import dataclass
from pathlib import Path

MUTABLE_FACTORIES = frozenset({"list", "dict", "set"})


@dataclass
class LintError:
    file: Path
    line: int
    column: int
    rule: str
    message: str

    def __str__(self) -> str:
        return f"{self.file}:{self.line}:{self.column}: {self.rule}: {self.message}"


def is_test_file(path: Path) -> bool:
    return path.name.startswith("test_") or path.name == "conftest.py"


def _is_mutable(node: ast.expr) -> bool:
    if isinstance(node, (ast.List, ast.Dict, ast.Set)):
        return True
    return (
        isinstance(node, ast.Call)
        and isinstance(node.func, ast.Name)
        and node.func.id in MUTABLE_FACTORIES
    )


class LintVisitor(ast.NodeVisitor):
    """Collects rule violations for a single file."""

    def __init__(self, file: Path) -> None:
        self.file = file
        self.in_tests = is_test_file(file)
        self.errors: list[LintError] = []

    def report(self, node: ast.AST, rule: str, message: str) -> None:
        self.errors.append(
            LintError(
                self.file,
                getattr(node, "lineno", 0),
                getattr(node, "col_offset", 0),
                rule,
                message,
            )
        )

    def visit_ClassDef(self, node: ast.ClassDef) -> None:
        state_machine = any(
            isinstance(base, ast.Attribute) and base.attr == "TestCase" for base in node.bases
        )
        if self.in_tests and node.name.startswith("Test") and not state_machine:
            self.report(node, "no-class-tests", f"Test class '{node.name}'. Use functions.")
        self.generic_visit(node)

    def _check_defaults(self, node: ast.FunctionDef | ast.AsyncFunctionDef) -> None:
        for default in [*node.args.defaults, *node.args.kw_defaults]:
            if default is not None and _is_mutable(default):
                self.report(default, "mutable-default", "Mutable default argument. Use None.")

    def visit_FunctionDef(self, node: ast.FunctionDef) -> None:
        self._check_defaults(node)
        self.generic_visit(node)

    def visit_AsyncFunctionDef(self, node: ast.AsyncFunctionDef) -> None:
        self._check_defaults(node)
        self.generic_visit(node)

    def visit_Call(self, node: ast.Call) -> None:
        if not self.in_tests:
            func = node.func
            if isinstance(func, ast.Name) and func.id == "print":
                self.report(node, "no-print", "Use logging instead of print().")
            elif (
                isinstance(func, ast.Attribute)
                and isinstance(func.value, ast.Name)
                and func.value.id == "random"
            ):
                self.report(
                    node,
                    "no-global-random",
                    f"random.{func.attr}() uses the shared generator. Take an rng argument.",
                )
        self.generic_visit(node)


def lint_source(path: Path, source: str) -> list[LintError]:
    try:
        tree = ast.parse(source)
    except SyntaxError as e:
        return [LintError(path, e.lineno or 0, e.offset or 0, "syntax-error", str(e))]
    visitor = LintVisitor(path)
    visitor.visit(tree)
    return visitor.errors


def lint_file(path: Path) -> list[LintError]:
    return lint_source(path, path.read_text())


def main(argv: list[str] | None = None) -> int:
    roots = [Path(p) for p in (argv if argv else ["src", "tests"])]
    errors: list[LintError] = []
    for root in roots:
        if root.is_file():
            errors.extend(lint_file(root))
        elif root.exists():
            for py_file in sorted(root.rglob("*.py")):
                errors.extend(lint_file(py_file))

    for error in sorted(errors, key=lambda e: (str(e.file), e.line, e.column)):
        print(error)
    if errors:
        print(f"\nFound {len(errors)} custom lint error(s)")
        return 1
    print("All custom lint checks passed!")
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
