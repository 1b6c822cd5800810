"""Shared test fixtures for Complexity Insight: a toy walker over dict trees."""

from typing import Any

import pytest

from complexity_insight.config import AnalysisSettings
from complexity_insight.models import Dependency
from complexity_insight.walker import HalsteadToken, SyntaxRule, TraversalCallbacks

SCOPE_TYPES = {"Function"}


def syntax_table(settings: AnalysisSettings) -> dict[str, Any]:
    """Per-node-type rules for the toy grammar, gated by settings like a real walker."""
    return {
        "Function": SyntaxRule(
            lloc=0,
            operators=(HalsteadToken("function"),),
            operands=(HalsteadToken(lambda n: n["name"], filter=lambda n: "name" in n),),
        ),
        "Return": SyntaxRule(lloc=1, operators=(HalsteadToken("return"),)),
        "If": SyntaxRule(lloc=1, cyclomatic=1, operators=(HalsteadToken("if"),)),
        "Or": SyntaxRule(
            cyclomatic=lambda n: 1 if settings.logicalor else 0,
            operators=(HalsteadToken("||"),),
        ),
        "Assign": {"lloc": 1, "operators": [{"identifier": "="}]},
        "Identifier": SyntaxRule(operands=(HalsteadToken(lambda n: n["name"]),)),
        "Literal": SyntaxRule(operands=(HalsteadToken(lambda n: n["value"]),)),
        "Require": SyntaxRule(
            lloc=1,
            operators=(HalsteadToken("require"),),
            operands=(HalsteadToken(lambda n: n["path"]),),
            dependencies=lambda n, clear: Dependency(
                n.get("kind", "CommonJS"), n["path"], n.get("line")
            ),
        ),
        "Import": SyntaxRule(
            dependencies=lambda n, clear: [Dependency("ESM", p) for p in n["paths"]],
        ),
    }


class ToyWalker:
    """Depth-first walker over ``{"type": ..., "body": [...]}`` trees.

    A function node is scored in its enclosing scope, then opens its own.
    """

    def walk(self, tree: Any, settings: AnalysisSettings, callbacks: TraversalCallbacks) -> None:
        self._visit(tree, syntax_table(settings), callbacks)

    def _visit(self, node: dict, table: dict, callbacks: TraversalCallbacks) -> None:
        if node["type"] == "Boom":
            raise RuntimeError("walker exploded")

        rule = table.get(node["type"])
        if rule is not None:
            callbacks.process_node(node, rule)

        opens_scope = node["type"] in SCOPE_TYPES
        if opens_scope:
            callbacks.create_scope(node.get("name"), node.get("loc"), len(node.get("params", [])))

        for child in node.get("body", []):
            self._visit(child, table, callbacks)

        if opens_scope:
            callbacks.pop_scope()


def make_node(node_type: str, *body: dict, **fields: Any) -> dict:
    """Build a toy tree node."""
    node = {"type": node_type, **fields}
    if body:
        node["body"] = list(body)
    return node


def lines(start: int, end: int) -> dict:
    """A location mapping in the common start/end line shape."""
    return {"start": {"line": start}, "end": {"line": end}}


@pytest.fixture
def walker():
    return ToyWalker()


@pytest.fixture
def node():
    return make_node


@pytest.fixture
def loc():
    return lines


@pytest.fixture
def function_module():
    """``function f(a, b) { return a || b; }`` spanning lines 1-3."""
    return make_node(
        "Program",
        make_node(
            "Function",
            make_node(
                "Return",
                make_node(
                    "Or", make_node("Identifier", name="a"), make_node("Identifier", name="b")
                ),
            ),
            name="f",
            params=["a", "b"],
            loc=lines(1, 3),
        ),
        loc=lines(1, 3),
    )


@pytest.fixture
def chain_modules():
    """Three modules: a requires b, b requires c, c requires nothing."""
    return [
        {"path": "/project/c.js", "tree": make_node("Program")},
        {"path": "/project/a.js", "tree": make_node("Program", make_node("Require", path="./b"))},
        {"path": "/project/b.js", "tree": make_node("Program", make_node("Require", path="./c"))},
    ]
