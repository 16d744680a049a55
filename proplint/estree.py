#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
proplint/estree.py
══════════════════

Read-only view over an ESTree syntax tree handed over by the linting host.

The host (``espree``, ``@typescript-eslint/typescript-estree`` or
``vue-eslint-parser``) serializes its tree as nested JSON objects.  This
module wraps that JSON into :class:`Node` objects and offers:

    ┌─────────────────────────────────────────────────────────────────┐
    │  Tree Construction                                              │
    │    • JSON / dict → Node with parent links                       │
    │    • Optional source text for ``range``-based slicing           │
    ├─────────────────────────────────────────────────────────────────┤
    │  Safe Accessors                                                 │
    │    • Missing fields read as ``None`` instead of raising         │
    │    • Line / column of a node (1-based columns)                  │
    ├─────────────────────────────────────────────────────────────────┤
    │  Traversal                                                      │
    │    • Pre-order iteration with subtree pruning                   │
    │    • Parent chain walking                                       │
    ├─────────────────────────────────────────────────────────────────┤
    │  Expression Utilities                                           │
    │    • Transparent-wrapper skipping (TS casts, chains, parens)    │
    │    • Expression stringification for messages                   │
    └─────────────────────────────────────────────────────────────────┘

Design Principles
─────────────────
1. **Non-invasive**: the host's data is never modified; :class:`Node`
   exposes no mutators.

2. **Defensive**: accessors tolerate ``None`` and missing fields, returning
   ``None`` / empty iterators instead of raising.

Usage Example
─────────────
    from proplint.estree import expr_to_string, iter_preorder, load_tree

    program = load_tree("component.json", source_path="component.vue")
    for node in iter_preorder(program):
        if node.type == "CallExpression":
            print(node.line, expr_to_string(node.callee))
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import (
    Any,
    Callable,
    Dict,
    FrozenSet,
    Iterator,
    List,
    Mapping,
    Optional,
    Tuple,
    Union,
)

from proplint.errors import ErrorCodes, MalformedTreeError


# ═══════════════════════════════════════════════════════════════════════════
#  CONSTANTS
# ═══════════════════════════════════════════════════════════════════════════

# Keys of a serialized node that are metadata, not child fields
_META_KEYS: FrozenSet[str] = frozenset({
    "type", "loc", "range", "start", "end", "parent", "tokens",
})

# Expression wrappers that do not change the runtime value
TRANSPARENT_WRAPPERS: FrozenSet[str] = frozenset({
    "TSAsExpression",
    "TSSatisfiesExpression",
    "TSTypeAssertion",
    "TSNonNullExpression",
    "TSInstantiationExpression",
    "ChainExpression",
    "ParenthesizedExpression",
})

FUNCTION_TYPES: FrozenSet[str] = frozenset({
    "FunctionExpression",
    "ArrowFunctionExpression",
    "FunctionDeclaration",
})


# ═══════════════════════════════════════════════════════════════════════════
#  PART 1 — SOURCE TEXT AND NODES
# ═══════════════════════════════════════════════════════════════════════════

class SourceCode:
    """The text a tree was parsed from, shared by all of its nodes."""

    __slots__ = ("text", "filename")

    def __init__(self, text: Optional[str] = None, filename: str = "") -> None:
        self.text = text
        self.filename = filename

    def slice(self, span: Optional[Tuple[int, int]]) -> Optional[str]:
        if self.text is None or span is None:
            return None
        start, end = span
        if start < 0 or end > len(self.text) or start > end:
            return None
        return self.text[start:end]


class Node:
    """
    One ESTree node.

    Child fields are reachable as attributes (``node.callee``,
    ``node.properties``); a field the node does not carry reads as
    ``None``.  Lists hold :class:`Node` objects or ``None`` for array holes.
    """

    __slots__ = ("type", "loc", "range", "parent", "_fields", "_source")

    def __init__(
        self,
        type: str,
        fields: Dict[str, Any],
        loc: Optional[Mapping[str, Any]] = None,
        range: Optional[Tuple[int, int]] = None,
        parent: Optional["Node"] = None,
        source: Optional[SourceCode] = None,
    ) -> None:
        self.type = type
        self.loc = loc
        self.range = range
        self.parent = parent
        self._fields = fields
        self._source = source

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        return self._fields.get(name)

    def iter_children(self) -> Iterator["Node"]:
        """Yield direct child nodes in field order."""
        for value in self._fields.values():
            if isinstance(value, Node):
                yield value
            elif isinstance(value, list):
                for item in value:
                    if isinstance(item, Node):
                        yield item

    @property
    def source_code(self) -> Optional[SourceCode]:
        return self._source

    @property
    def source_text(self) -> Optional[str]:
        """The exact source slice for this node, when text is available."""
        if self._source is None:
            return None
        return self._source.slice(self.range)

    @property
    def line(self) -> int:
        return node_line(self)

    @property
    def column(self) -> int:
        return node_column(self)

    def __repr__(self) -> str:
        return f"<Node {self.type} @{self.line}:{self.column}>"


# ═══════════════════════════════════════════════════════════════════════════
#  PART 2 — TREE CONSTRUCTION
# ═══════════════════════════════════════════════════════════════════════════

def _is_node_dict(value: Any) -> bool:
    return isinstance(value, Mapping) and isinstance(value.get("type"), str)


def _node_range(data: Mapping[str, Any]) -> Optional[Tuple[int, int]]:
    span = data.get("range")
    if isinstance(span, (list, tuple)) and len(span) == 2:
        return int(span[0]), int(span[1])
    start, end = data.get("start"), data.get("end")
    if isinstance(start, int) and isinstance(end, int):
        return start, end
    return None


def build_tree(
    data: Mapping[str, Any],
    source_text: Optional[str] = None,
    filename: str = "",
) -> Node:
    """
    Wrap a JSON-shaped ESTree tree into :class:`Node` objects.

    Args:
        data: The root node as nested dicts/lists
        source_text: Text the tree was parsed from (enables ``source_text``)
        filename: Name used in diagnostic locations

    Returns:
        The root :class:`Node`

    Raises:
        MalformedTreeError: if ``data`` is not a node (no string ``type``)
    """
    if not isinstance(data, Mapping):
        raise MalformedTreeError(
            f"expected a node object, got {type(data).__name__}",
            code=ErrorCodes.NOT_A_NODE,
            path=filename,
        )
    if not isinstance(data.get("type"), str):
        raise MalformedTreeError(
            "root object has no 'type' field",
            code=ErrorCodes.MISSING_NODE_TYPE,
            path=filename,
            hint="pass the parser's Program node",
        )

    source = SourceCode(source_text, filename)
    root = Node(data["type"], {}, data.get("loc"), _node_range(data), None, source)

    # Iterative construction: deep binary-expression chains would otherwise
    # exhaust the interpreter's recursion limit.
    stack: List[Tuple[Mapping[str, Any], Node]] = [(data, root)]
    while stack:
        raw, node = stack.pop()
        for key, value in raw.items():
            if key in _META_KEYS:
                continue
            if _is_node_dict(value):
                child = Node(value["type"], {}, value.get("loc"),
                             _node_range(value), node, source)
                node._fields[key] = child
                stack.append((value, child))
            elif isinstance(value, list):
                items: List[Any] = []
                for item in value:
                    if _is_node_dict(item):
                        child = Node(item["type"], {}, item.get("loc"),
                                     _node_range(item), node, source)
                        items.append(child)
                        stack.append((item, child))
                    else:
                        items.append(item)
                node._fields[key] = items
            else:
                node._fields[key] = value
    return root


def _read_utf8(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise MalformedTreeError(
            f"not valid UTF-8: byte {exc.start}",
            code=ErrorCodes.INVALID_ENCODING,
            path=str(path),
            cause=exc,
        ) from exc


def load_tree(
    path: Union[str, Path],
    source_path: Optional[Union[str, Path]] = None,
) -> Node:
    """
    Load a JSON-serialized ESTree tree from disk.

    Args:
        path: JSON file holding the root node
        source_path: Optional file with the original source text

    Raises:
        MalformedTreeError: if either file is not UTF-8, or the tree is not
            valid JSON or not a node
        OSError: if either file cannot be read
    """
    tree_path = Path(path)
    try:
        data = json.loads(_read_utf8(tree_path))
    except json.JSONDecodeError as exc:
        raise MalformedTreeError(
            f"invalid JSON: {exc.msg} (line {exc.lineno})",
            code=ErrorCodes.INVALID_JSON,
            path=str(tree_path),
            cause=exc,
        ) from exc

    text: Optional[str] = None
    filename = str(tree_path)
    if source_path is not None:
        text = _read_utf8(Path(source_path))
        filename = str(source_path)
    return build_tree(data, source_text=text, filename=filename)


# ═══════════════════════════════════════════════════════════════════════════
#  PART 3 — SAFE ACCESSORS
# ═══════════════════════════════════════════════════════════════════════════

def node_line(node: Optional[Node]) -> int:
    """
    Safely get the 1-based start line of a node.

    Returns:
        The line number, or 0 if unknown
    """
    if node is None or not node.loc:
        return 0
    start = node.loc.get("start") or {}
    return int(start.get("line", 0) or 0)


def node_column(node: Optional[Node]) -> int:
    """
    Safely get the 1-based start column of a node.

    ESTree columns are 0-based; diagnostics use 1-based columns.

    Returns:
        The column number, or 0 if unknown
    """
    if node is None or not node.loc:
        return 0
    start = node.loc.get("start") or {}
    column = start.get("column")
    if column is None:
        return 0
    return int(column) + 1


def node_filename(node: Optional[Node]) -> str:
    if node is None or node.source_code is None:
        return ""
    return node.source_code.filename


def is_function(node: Optional[Node]) -> bool:
    return node is not None and node.type in FUNCTION_TYPES


def skip_wrappers(node: Optional[Node]) -> Optional[Node]:
    """
    Strip TypeScript casts, optional chains and parentheses.

    ``foo as PropOptions<string>``, ``Number?.()`` and ``(x)`` all evaluate
    to the wrapped expression.
    """
    while node is not None and node.type in TRANSPARENT_WRAPPERS:
        node = node.expression
    return node


# ═══════════════════════════════════════════════════════════════════════════
#  PART 4 — TRAVERSAL
# ═══════════════════════════════════════════════════════════════════════════

def iter_preorder(
    root: Optional[Node],
    prune: Optional[Callable[[Node], bool]] = None,
) -> Iterator[Node]:
    """
    Iterate over nodes in pre-order (parent before children, source order).

    Args:
        root: Root of the subtree
        prune: Predicate; children of a node for which it returns True are
            not visited (the node itself still is)

    Yields:
        Nodes in pre-order sequence
    """
    if root is None:
        return
    stack: List[Node] = [root]
    while stack:
        node = stack.pop()
        yield node
        if prune is not None and prune(node):
            continue
        children = list(node.iter_children())
        # Push in reverse so the first child is processed first (LIFO)
        stack.extend(reversed(children))


def iter_parents(node: Optional[Node]) -> Iterator[Node]:
    """Walk up the parent chain, excluding ``node`` itself."""
    current = node.parent if node is not None else None
    while current is not None:
        yield current
        current = current.parent


# ═══════════════════════════════════════════════════════════════════════════
#  PART 5 — EXPRESSION STRINGIFICATION
# ═══════════════════════════════════════════════════════════════════════════

def literal_text(node: Node) -> str:
    """Render a Literal the way JavaScript's ``String()`` would."""
    if node.bigint is not None:
        return str(node.bigint)
    if node.regex is not None:
        return f"/{node.regex.get('pattern', '')}/{node.regex.get('flags', '')}"
    value = node.value
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def expr_to_string(node: Optional[Node], max_depth: int = 20) -> str:
    """
    Convert an expression back to source form.

    Uses the exact source slice when the tree carries source text and
    falls back to an approximation for the common expression kinds.

    Args:
        node: Root of the expression
        max_depth: Maximum recursion depth

    Returns:
        String representation of the expression
    """
    if node is None:
        return ""
    text = node.source_text
    if text is not None:
        return text
    if max_depth <= 0:
        return "..."

    kind = node.type
    if kind == "Identifier" or kind == "PrivateIdentifier":
        return node.name or ""
    if kind == "Literal":
        if isinstance(node.value, str):
            return repr(node.value)
        return literal_text(node)
    if kind == "ThisExpression":
        return "this"
    if kind == "TemplateLiteral":
        parts: List[str] = []
        for i, quasi in enumerate(node.quasis or []):
            parts.append((quasi.value or {}).get("raw", ""))
            if i < len(node.expressions or []):
                inner = expr_to_string(node.expressions[i], max_depth - 1)
                parts.append("${" + inner + "}")
        return "`" + "".join(parts) + "`"
    if kind == "MemberExpression":
        obj = expr_to_string(node.object, max_depth - 1)
        prop = expr_to_string(node.property, max_depth - 1)
        dot = "?." if node.optional else "."
        if node.computed:
            return f"{obj}{'?.' if node.optional else ''}[{prop}]"
        return f"{obj}{dot}{prop}"
    if kind in ("CallExpression", "NewExpression"):
        callee = expr_to_string(node.callee, max_depth - 1)
        args = ", ".join(
            expr_to_string(a, max_depth - 1) for a in (node.arguments or [])
        )
        prefix = "new " if kind == "NewExpression" else ""
        call = "?.(" if node.optional else "("
        return f"{prefix}{callee}{call}{args})"
    if kind == "BinaryExpression" or kind == "LogicalExpression":
        left = expr_to_string(node.left, max_depth - 1)
        right = expr_to_string(node.right, max_depth - 1)
        return f"{left} {node.operator} {right}"
    if kind == "UnaryExpression":
        inner = expr_to_string(node.argument, max_depth - 1)
        if node.operator in ("typeof", "void", "delete"):
            return f"{node.operator} {inner}"
        return f"{node.operator}{inner}"
    if kind in TRANSPARENT_WRAPPERS:
        return expr_to_string(node.expression, max_depth - 1)
    if kind == "ArrayExpression":
        return "[" + ", ".join(
            expr_to_string(e, max_depth - 1) for e in (node.elements or [])
        ) + "]"
    if kind == "ObjectExpression":
        return "{...}" if node.properties else "{}"
    if kind == "SpreadElement":
        return "..." + expr_to_string(node.argument, max_depth - 1)
    return f"<{kind}>"


__all__ = [
    "TRANSPARENT_WRAPPERS",
    "FUNCTION_TYPES",
    "SourceCode",
    "Node",
    "build_tree",
    "load_tree",
    "node_line",
    "node_column",
    "node_filename",
    "is_function",
    "skip_wrappers",
    "iter_preorder",
    "iter_parents",
    "literal_text",
    "expr_to_string",
]
