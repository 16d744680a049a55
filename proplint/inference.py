"""
proplint/inference.py
═════════════════════

Static inference of the runtime type of a default-value expression.

Inference is a single bottom-up pass over one expression.  It never
evaluates code and never follows identifiers; anything it cannot classify
from syntax alone is *indeterminate* (``None``), and indeterminate values
are never reported.

    ┌──────────────────────────────┬───────────────────────────────┐
    │ expression                   │ inferred                      │
    ├──────────────────────────────┼───────────────────────────────┤
    │ 'a'  `a`  1  true  1n        │ string / number / boolean ... │
    │ /re/                         │ object                        │
    │ null  `a${b}`  x  a.b  new X │ indeterminate                 │
    │ String(x)  Number?.(x)       │ constructor's tag             │
    │ []  {}                       │ array / object                │
    │ () => x   function () {...}  │ function (factory)            │
    │ !x   -1   +1   -1n           │ boolean / number / bigint     │
    └──────────────────────────────┴───────────────────────────────┘

Factory functions additionally expose what they return: the body of an
expression-bodied arrow, or every ``return`` argument of a block body
(nested functions excluded).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from proplint.estree import Node, is_function, iter_preorder, skip_wrappers
from proplint.type_tags import (
    ARRAY,
    BIGINT,
    BOOLEAN,
    CONSTRUCTOR_TAGS,
    FUNCTION,
    NUMBER,
    OBJECT,
    STRING,
    TagSet,
    TypeTag,
    union_tags,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValueType:
    """
    Inferred type of one default-value expression.

    Attributes
    ----------
    tag             : runtime tag of the expression's value
    node            : the (unwrapped) expression
    factory         : the value is a function usable as a default factory
    expression_body : body of an expression-bodied arrow function
    body_tag        : inferred tag of ``expression_body`` (``None`` when
                      indeterminate or when there is no expression body)
    """
    tag: TypeTag
    node: Node
    factory: bool = False
    expression_body: Optional[Node] = None
    body_tag: Optional[TypeTag] = None


def _literal_tag(node: Node) -> Optional[TypeTag]:
    if node.bigint is not None:
        return BIGINT
    if node.regex is not None:
        return OBJECT
    value = node.value
    if isinstance(value, bool):
        return BOOLEAN
    if isinstance(value, (int, float)):
        return NUMBER
    if isinstance(value, str):
        return STRING
    return None


def _unary_tag(node: Node) -> Optional[TypeTag]:
    if node.operator == "!":
        return BOOLEAN
    arg = skip_wrappers(node.argument)
    if arg is None or arg.type != "Literal":
        return None
    if node.operator == "-" and arg.bigint is not None:
        return BIGINT
    if node.operator in ("-", "+") and _literal_tag(arg) is NUMBER:
        return NUMBER
    return None


class DefaultValueInferencer:
    """Infers :class:`ValueType` for default-value expressions."""

    def infer(self, expr: Optional[Node]) -> Optional[ValueType]:
        """
        Infer the type of ``expr``.

        Returns:
            A :class:`ValueType`, or ``None`` when indeterminate
        """
        node = skip_wrappers(expr)
        if node is None:
            return None
        kind = node.type

        if is_function(node):
            return self._infer_function(node)

        tag: Optional[TypeTag] = None
        if kind == "Literal":
            tag = _literal_tag(node)
        elif kind == "TemplateLiteral":
            tag = None if node.expressions else STRING
        elif kind == "ArrayExpression":
            tag = ARRAY
        elif kind == "ObjectExpression":
            tag = OBJECT
        elif kind == "CallExpression":
            callee = skip_wrappers(node.callee)
            if callee is not None and callee.type == "Identifier":
                tag = CONSTRUCTOR_TAGS.get(callee.name)
        elif kind == "UnaryExpression":
            tag = _unary_tag(node)

        if tag is None:
            return None
        return ValueType(tag=tag, node=node)

    def infer_tag(self, expr: Optional[Node]) -> Optional[TypeTag]:
        inferred = self.infer(expr)
        return inferred.tag if inferred is not None else None

    def _infer_function(self, node: Node) -> ValueType:
        body = node.body
        if body is not None and body.type != "BlockStatement":
            return ValueType(
                tag=FUNCTION,
                node=node,
                factory=True,
                expression_body=body,
                body_tag=self.infer_tag(body),
            )
        return ValueType(tag=FUNCTION, node=node, factory=True)

    # ── factory returns ───────────────────────────────────────────────

    def factory_returns(self, func: Node) -> List[Tuple[Node, TypeTag]]:
        """
        Determinate ``return`` values of a block-bodied function.

        Returns in nested functions belong to those functions and are
        skipped; returns whose value is indeterminate are dropped.

        Returns:
            ``(argument node, tag)`` pairs in source order
        """
        body = func.body
        if body is None or body.type != "BlockStatement":
            return []

        results: List[Tuple[Node, TypeTag]] = []
        for node in iter_preorder(body, prune=is_function):
            if node.type != "ReturnStatement" or node.argument is None:
                continue
            inferred = self.infer(node.argument)
            if inferred is None:
                continue
            results.append((node.argument, inferred.tag))
        return results

    def factory_tags(self, func: Node) -> Optional[TagSet]:
        """
        Tags a factory may produce, or ``None`` when none is determinate.
        """
        inferred = self.infer(func)
        if inferred is None or not inferred.factory:
            return None
        if inferred.expression_body is not None:
            if inferred.body_tag is None:
                return None
            return (inferred.body_tag,)
        tags = union_tags(tag for _, tag in self.factory_returns(inferred.node))
        return tags or None


__all__ = [
    "ValueType",
    "DefaultValueInferencer",
]
