"""
proplint/type_tags.py
═════════════════════

Canonical runtime type tags and the mapping from declared types to tags.

Tag algebra
───────────

    string │ number │ boolean │ object │ array │ function │ symbol │ bigint
    custom(name)        — any user-defined constructor / class

A declared-type set is a tuple of tags with duplicates collapsed.  Order is
kept so that messages list tags the way the author wrote them; every
comparison is a set comparison.

Indeterminate
─────────────
Wherever a tag tuple is expected, ``None`` means "cannot be determined
statically".  Callers never report on ``None``.  The empty tuple means "no
type declared", which is a different thing.

TypeTagMapper
─────────────
Two entry points:

  * :meth:`TypeTagMapper.map_type_reference` — runtime declarations
    (``type: String``, ``type: [Number, Foo]``)
  * :meth:`TypeTagMapper.map_type_annotation` — TypeScript type nodes
    (``foo: string | number``, ``foo: MaybeString<1, 2>``), resolving
    aliases one level at a time through a :class:`TypeAliasOracle`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, Iterable, Optional, Sequence, Tuple

from proplint.estree import Node, skip_wrappers
from proplint.oracle import (
    NullTypeOracle,
    TypeAliasOracle,
    reference_name,
    type_arguments,
)

logger = logging.getLogger(__name__)


# ═════════════════════════════════════════════════════════════════════════
#  PART 1 — TAGS
# ═════════════════════════════════════════════════════════════════════════

class TagKind(Enum):
    """Discriminant for :class:`TypeTag`."""
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    OBJECT = "object"
    ARRAY = "array"
    FUNCTION = "function"
    SYMBOL = "symbol"
    BIGINT = "bigint"
    CUSTOM = "custom"


@dataclass(frozen=True)
class TypeTag:
    """One runtime type classification."""
    kind: TagKind
    name: str = ""

    @property
    def is_builtin(self) -> bool:
        return self.kind is not TagKind.CUSTOM

    def __str__(self) -> str:
        if self.kind is TagKind.CUSTOM:
            return f"custom({self.name})"
        return self.kind.value


STRING = TypeTag(TagKind.STRING)
NUMBER = TypeTag(TagKind.NUMBER)
BOOLEAN = TypeTag(TagKind.BOOLEAN)
OBJECT = TypeTag(TagKind.OBJECT)
ARRAY = TypeTag(TagKind.ARRAY)
FUNCTION = TypeTag(TagKind.FUNCTION)
SYMBOL = TypeTag(TagKind.SYMBOL)
BIGINT = TypeTag(TagKind.BIGINT)


def custom(name: str) -> TypeTag:
    return TypeTag(TagKind.CUSTOM, name)


TagSet = Tuple[TypeTag, ...]

# Tags whose default must be produced by a factory function
REFERENCE_TAGS: FrozenSet[TypeTag] = frozenset({OBJECT, ARRAY, FUNCTION})

# Global constructor name → tag
CONSTRUCTOR_TAGS: Dict[str, TypeTag] = {
    "String": STRING,
    "Number": NUMBER,
    "Boolean": BOOLEAN,
    "Object": OBJECT,
    "Array": ARRAY,
    "Function": FUNCTION,
    "Symbol": SYMBOL,
    "BigInt": BIGINT,
}


def tag_for_constructor(name: str) -> TypeTag:
    """``String`` → string, ..., anything else → ``custom(name)``."""
    return CONSTRUCTOR_TAGS.get(name) or custom(name)


def union_tags(*groups: Iterable[TypeTag]) -> TagSet:
    """Concatenate tag groups, dropping duplicates, keeping first-seen order."""
    seen: Dict[TypeTag, None] = {}
    for group in groups:
        for tag in group:
            seen.setdefault(tag, None)
    return tuple(seen)


def builtin_tags(tags: Sequence[TypeTag]) -> TagSet:
    return tuple(t for t in tags if t.is_builtin)


def format_tag_list(tags: Sequence[TypeTag]) -> str:
    """
    Render tags as an English alternative list.

    >>> format_tag_list((NUMBER,))
    'number'
    >>> format_tag_list((NUMBER, STRING))
    'number or string'
    >>> format_tag_list((STRING, NUMBER, BOOLEAN))
    'string, number or boolean'
    """
    words = [t.name if t.kind is TagKind.CUSTOM else t.kind.value for t in tags]
    if not words:
        return ""
    if len(words) == 1:
        return words[0]
    return ", ".join(words[:-1]) + " or " + words[-1]


# ═════════════════════════════════════════════════════════════════════════
#  PART 2 — TYPE TAG MAPPER
# ═════════════════════════════════════════════════════════════════════════

_KEYWORD_TAGS: Dict[str, TypeTag] = {
    "TSStringKeyword": STRING,
    "TSNumberKeyword": NUMBER,
    "TSBooleanKeyword": BOOLEAN,
    "TSSymbolKeyword": SYMBOL,
    "TSBigIntKeyword": BIGINT,
    "TSObjectKeyword": OBJECT,
}

# Contribute nothing to a union (a null default is never checked anyway)
_NULLISH_TYPES: FrozenSet[str] = frozenset({
    "TSNullKeyword", "TSUndefinedKeyword", "TSVoidKeyword",
})

_OBJECT_TYPES: FrozenSet[str] = frozenset({
    "TSTypeLiteral", "TSMappedType", "TSInterfaceBody",
})

_FUNCTION_TYPES: FrozenSet[str] = frozenset({
    "TSFunctionType", "TSConstructorType",
})

_ARRAY_TYPES: FrozenSet[str] = frozenset({"TSArrayType", "TSTupleType"})

# Global generic types with a fixed runtime shape
_GLOBAL_REFERENCE_TAGS: Dict[str, TypeTag] = {
    "Array": ARRAY,
    "ReadonlyArray": ARRAY,
    "Record": OBJECT,
    "Pick": OBJECT,
    "Omit": OBJECT,
    "Function": FUNCTION,
    "Object": OBJECT,
    "String": STRING,
    "Number": NUMBER,
    "Boolean": BOOLEAN,
    "Symbol": SYMBOL,
    "BigInt": BIGINT,
}

# Global generics that keep the runtime shape of their first argument
_SHAPE_PRESERVING: FrozenSet[str] = frozenset({"Partial", "Required", "Readonly"})

_GLOBAL_CONSTRUCTORS: FrozenSet[str] = frozenset({
    "Date", "RegExp", "Map", "Set", "WeakMap", "WeakSet", "Promise", "Error",
})

Bindings = Dict[str, Optional[TagSet]]


def _literal_tags(literal: Optional[Node]) -> Optional[TagSet]:
    """Tag of the literal inside a ``TSLiteralType``."""
    if literal is None:
        return None
    if literal.type == "TemplateLiteral":
        return (STRING,)
    if literal.type == "UnaryExpression" and literal.operator == "-":
        arg = literal.argument
        if arg is not None and arg.type == "Literal" and arg.bigint is not None:
            return (BIGINT,)
        return (NUMBER,)
    if literal.type != "Literal":
        return None
    if literal.bigint is not None:
        return (BIGINT,)
    value = literal.value
    if isinstance(value, bool):
        return (BOOLEAN,)
    if isinstance(value, (int, float)):
        return (NUMBER,)
    if isinstance(value, str):
        return (STRING,)
    return None


class TypeTagMapper:
    """
    Map declared types to tag tuples.

    Parameters
    ----------
    oracle : resolves type aliases; defaults to :class:`NullTypeOracle`
    """

    def __init__(self, oracle: Optional[TypeAliasOracle] = None) -> None:
        self.oracle: TypeAliasOracle = oracle or NullTypeOracle()

    # ── runtime declarations ─────────────────────────────────────────

    def map_type_reference(self, expr: Optional[Node]) -> Optional[TagSet]:
        """
        Tags of a runtime ``type`` value.

        Returns:
            ``()`` for an empty array (no type), ``None`` when the value is
            not an identifier or an array of identifiers
        """
        node = skip_wrappers(expr)
        if node is None:
            return None
        if node.type == "Identifier":
            return (tag_for_constructor(node.name),)
        if node.type != "ArrayExpression":
            return None

        tags = []
        for element in node.elements or []:
            element = skip_wrappers(element)
            if element is None:
                continue    # sparse
            if element.type != "Identifier":
                return None
            tags.append(tag_for_constructor(element.name))
        return union_tags(tags)

    # ── TypeScript annotations ───────────────────────────────────────

    def map_type_annotation(
        self,
        node: Optional[Node],
        bindings: Optional[Bindings] = None,
    ) -> Optional[TagSet]:
        """
        Tags of a TypeScript type node, or ``None`` when indeterminate.

        A type that only admits ``null``/``undefined`` is indeterminate.
        """
        tags = self._map(node, bindings or {}, frozenset())
        if not tags:
            return None
        return tags

    def _map(
        self,
        node: Optional[Node],
        bindings: Bindings,
        expanding: FrozenSet[str],
    ) -> Optional[TagSet]:
        if node is None:
            return None
        kind = node.type

        if kind == "TSTypeAnnotation" or kind == "TSParenthesizedType":
            return self._map(node.typeAnnotation, bindings, expanding)
        if kind in _KEYWORD_TAGS:
            return (_KEYWORD_TAGS[kind],)
        if kind in _NULLISH_TYPES:
            return ()
        if kind in _OBJECT_TYPES:
            return (OBJECT,)
        if kind in _FUNCTION_TYPES:
            return (FUNCTION,)
        if kind in _ARRAY_TYPES:
            return (ARRAY,)
        if kind == "TSLiteralType":
            return _literal_tags(node.literal)
        if kind == "TSTemplateLiteralType":
            return (STRING,)
        if kind == "TSOptionalType" or kind == "TSRestType":
            return self._map(node.typeAnnotation, bindings, expanding)
        if kind == "TSTypeOperator":
            if node.operator == "readonly":
                return self._map(node.typeAnnotation, bindings, expanding)
            if node.operator == "unique":
                return (SYMBOL,)
            return None
        if kind == "TSUnionType":
            parts = [self._map(t, bindings, expanding) for t in node.types or []]
            if any(p is None for p in parts):
                return None
            return union_tags(*parts)
        if kind == "TSIntersectionType":
            parts = [self._map(t, bindings, expanding) for t in node.types or []]
            if parts and all(p == (OBJECT,) for p in parts):
                return (OBJECT,)
            return None
        if kind == "TSTypeReference":
            return self._map_reference(node, bindings, expanding)
        # any / unknown / never / conditional / indexed access / typeof ...
        return None

    def _map_reference(
        self,
        node: Node,
        bindings: Bindings,
        expanding: FrozenSet[str],
    ) -> Optional[TagSet]:
        name = reference_name(node)
        args = type_arguments(node)

        if name is not None and name in bindings:
            return bindings[name]

        resolved = self.oracle.resolve(node)
        if resolved is not None:
            if resolved.name in expanding:
                logger.debug("recursive type %r treated as indeterminate", resolved.name)
                return None
            inner: Bindings = {}
            for i, param in enumerate(resolved.params):
                if i < len(args):
                    inner[param] = self._map(args[i], bindings, expanding)
                elif i < len(resolved.defaults) and resolved.defaults[i] is not None:
                    inner[param] = self._map(resolved.defaults[i], bindings, expanding)
                else:
                    inner[param] = None
            return self._map(resolved.node, inner, expanding | {resolved.name})

        if name is None:
            return None
        if name in _GLOBAL_REFERENCE_TAGS:
            return (_GLOBAL_REFERENCE_TAGS[name],)
        if name in _SHAPE_PRESERVING and args:
            return self._map(args[0], bindings, expanding)
        if name in _GLOBAL_CONSTRUCTORS:
            return (custom(name),)
        logger.debug("unresolved type reference %r", name)
        return None


__all__ = [
    "TagKind",
    "TypeTag",
    "TagSet",
    "STRING",
    "NUMBER",
    "BOOLEAN",
    "OBJECT",
    "ARRAY",
    "FUNCTION",
    "SYMBOL",
    "BIGINT",
    "custom",
    "REFERENCE_TAGS",
    "CONSTRUCTOR_TAGS",
    "tag_for_constructor",
    "union_tags",
    "builtin_tags",
    "format_tag_list",
    "TypeTagMapper",
]
