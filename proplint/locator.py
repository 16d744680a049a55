"""
proplint/locator.py
═══════════════════

Finds every prop declaration site of one component description.

Accepted description nodes
──────────────────────────

    ObjectExpression     options object; its ``props`` member is analyzed
    CallExpression       a macro call recognized by :class:`MacroResolver`
    VariableDeclarator   ``const { a = 1 } = <macro call>``

The locator does not interpret types or defaults.  It produces raw
:class:`DeclarationSite` records plus the per-name default maps that
wrappers and destructuring patterns contribute; :mod:`proplint.entries`
turns those into ``PropEntry`` objects.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set, Tuple

from proplint.estree import Node, skip_wrappers
from proplint.macros import DeclarationShape, MacroCall, MacroKind, MacroResolver
from proplint.names import (
    UNKNOWN_PROP,
    array_element_name,
    prop_display_name,
    static_name,
    string_value,
)
from proplint.oracle import NullTypeOracle, TypeAliasOracle, reference_name

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeclarationSite:
    """
    One raw prop declaration.

    Attributes
    ----------
    name        : display name (``Unknown prop`` / ``[expr]`` fallbacks)
    static_name : literal name, ``None`` when not statically known
    node        : node the specificity diagnostic points at
    shape       : declaration shape of the enclosing declaration
    value       : runtime declaration value (type reference, type array,
                  descriptor object, function); ``None`` for names-only
    type_node   : TypeScript type of a typed member / typed model, or the
                  ``TSMethodSignature`` of a method member
    """
    name: str
    static_name: Optional[str]
    node: Node
    shape: DeclarationShape
    value: Optional[Node] = None
    type_node: Optional[Node] = None

    @property
    def is_typed(self) -> bool:
        return self.type_node is not None


@dataclass(frozen=True)
class LocatedProps:
    """
    Everything the locator found for one component.

    Attributes
    ----------
    sites                 : declaration sites in source order
    merged_defaults       : name → default expression from a defaults-merge
                            wrapper
    destructured_defaults : name → default expression from a destructuring
                            pattern
    macro                 : the classified macro call, if any
    """
    sites: Tuple[DeclarationSite, ...] = ()
    merged_defaults: Dict[str, Node] = field(default_factory=dict)
    destructured_defaults: Dict[str, Node] = field(default_factory=dict)
    macro: Optional[MacroCall] = None


_EMPTY = LocatedProps()


def _object_member_defaults(obj: Optional[Node]) -> Dict[str, Node]:
    """``{ name: expr }`` → ``{"name": expr}`` for statically named members."""
    defaults: Dict[str, Node] = {}
    if obj is None or obj.type != "ObjectExpression":
        return defaults
    for prop in obj.properties or []:
        if prop is None or prop.type != "Property":
            continue
        name = static_name(prop.key, bool(prop.computed))
        if name is None or prop.value is None:
            continue
        defaults[name] = prop.value
    return defaults


def _pattern_defaults(pattern: Optional[Node]) -> Dict[str, Node]:
    """``{ a = 1, b: c = 2 }`` → ``{"a": 1, "b": 2}``."""
    defaults: Dict[str, Node] = {}
    if pattern is None or pattern.type != "ObjectPattern":
        return defaults
    for prop in pattern.properties or []:
        if prop is None or prop.type != "Property":
            continue    # RestElement
        value = prop.value
        if value is None or value.type != "AssignmentPattern":
            continue
        name = static_name(prop.key, bool(prop.computed))
        if name is None or value.right is None:
            continue
        defaults[name] = value.right
    return defaults


class DeclarationLocator:
    """
    Walks a component description and lists its prop declaration sites.

    Parameters
    ----------
    resolver : macro recognizer
    oracle   : resolves named types of typed macro arguments
    """

    def __init__(
        self,
        resolver: Optional[MacroResolver] = None,
        oracle: Optional[TypeAliasOracle] = None,
    ) -> None:
        self.resolver = resolver or MacroResolver()
        self.oracle: TypeAliasOracle = oracle or NullTypeOracle()

    def locate(self, description: Optional[Node]) -> LocatedProps:
        """Find the declaration sites of one component description."""
        if description is None:
            return _EMPTY
        if description.type == "VariableDeclarator":
            return self._locate_declarator(description)

        node = skip_wrappers(description)
        if node is None:
            return _EMPTY
        if node.type == "ObjectExpression":
            return self._locate_options(node)
        if node.type == "CallExpression":
            macro = self.resolver.classify(node)
            if macro is None:
                return _EMPTY
            return self._locate_macro(macro)
        logger.debug("unsupported component description %s", node.type)
        return _EMPTY

    # ── description kinds ─────────────────────────────────────────────

    def _locate_options(self, options: Node) -> LocatedProps:
        for prop in options.properties or []:
            if prop is None or prop.type != "Property":
                continue
            if static_name(prop.key, bool(prop.computed)) != "props":
                continue
            value = skip_wrappers(prop.value)
            if value is not None and value.type == "ArrayExpression":
                return LocatedProps(sites=self._array_sites(value))
            if value is not None and value.type == "ObjectExpression":
                return LocatedProps(sites=self._descriptor_sites(value))
            logger.debug("props option at line %d is not a literal", prop.line)
            return _EMPTY
        return _EMPTY

    def _locate_declarator(self, declarator: Node) -> LocatedProps:
        macro = self.resolver.classify(declarator.init)
        if macro is None:
            return _EMPTY
        located = self._locate_macro(macro)
        destructured = _pattern_defaults(declarator.id)
        if not destructured:
            return located
        return LocatedProps(
            sites=located.sites,
            merged_defaults=located.merged_defaults,
            destructured_defaults=destructured,
            macro=macro,
        )

    def _locate_macro(self, macro: MacroCall) -> LocatedProps:
        if macro.kind is MacroKind.DEFINE_MODEL:
            return LocatedProps(sites=(self._model_site(macro),), macro=macro)

        if macro.kind is MacroKind.WITH_DEFAULTS:
            if macro.inner is None:
                logger.debug("defaults wrapper at line %d wraps no props macro",
                             macro.call.line)
                return LocatedProps(macro=macro)
            sites = self._declaration_sites(macro.inner)
            return LocatedProps(
                sites=sites,
                merged_defaults=_object_member_defaults(macro.defaults),
                macro=macro,
            )

        return LocatedProps(sites=self._declaration_sites(macro), macro=macro)

    def _declaration_sites(self, macro: MacroCall) -> Tuple[DeclarationSite, ...]:
        shape = macro.shape
        if shape is DeclarationShape.TYPED_MACRO_ARGUMENT:
            return self._typed_sites(macro.type_argument)
        value = skip_wrappers(macro.runtime_argument)
        if shape is DeclarationShape.ARRAY_OF_NAMES and value is not None:
            return self._array_sites(value)
        if shape is DeclarationShape.OBJECT_OF_DESCRIPTORS and value is not None:
            return self._descriptor_sites(value)
        return ()

    # ── site producers ────────────────────────────────────────────────

    def _array_sites(self, array: Node) -> Tuple[DeclarationSite, ...]:
        sites: List[DeclarationSite] = []
        for element in array.elements or []:
            if element is None or element.type == "SpreadElement":
                continue
            name = array_element_name(element)
            literal = string_value(element)
            if literal is None:
                inner = skip_wrappers(element)
                if inner is not None and inner.type == "Identifier":
                    literal = inner.name
            sites.append(DeclarationSite(
                name=name,
                static_name=literal if name != UNKNOWN_PROP else None,
                node=element,
                shape=DeclarationShape.ARRAY_OF_NAMES,
            ))
        return tuple(sites)

    def _descriptor_sites(self, obj: Node) -> Tuple[DeclarationSite, ...]:
        sites: List[DeclarationSite] = []
        for prop in obj.properties or []:
            if prop is None or prop.type != "Property":
                continue    # spread
            computed = bool(prop.computed)
            sites.append(DeclarationSite(
                name=prop_display_name(prop.key, computed),
                static_name=static_name(prop.key, computed),
                node=prop,
                shape=DeclarationShape.OBJECT_OF_DESCRIPTORS,
                value=prop.value,
            ))
        return tuple(sites)

    def _typed_sites(self, type_node: Optional[Node]) -> Tuple[DeclarationSite, ...]:
        sites: List[DeclarationSite] = []
        for member in self._type_members(type_node, set()):
            computed = bool(member.computed)
            # An unannotated member is implicitly ``any``
            member_type: Node = member
            if member.type == "TSPropertySignature" and member.typeAnnotation is not None:
                member_type = member.typeAnnotation
            sites.append(DeclarationSite(
                name=prop_display_name(member.key, computed),
                static_name=static_name(member.key, computed),
                node=member,
                shape=DeclarationShape.TYPED_MACRO_ARGUMENT,
                type_node=member_type,
            ))
        return tuple(sites)

    def _model_site(self, macro: MacroCall) -> DeclarationSite:
        return DeclarationSite(
            name=macro.model_name or "",
            static_name=macro.model_name,
            node=macro.call,
            shape=DeclarationShape.MODEL_MACRO,
            value=macro.runtime_argument,
            type_node=macro.type_argument,
        )

    # ── typed argument members ────────────────────────────────────────

    def _type_members(self, node: Optional[Node], visited: Set[str]) -> List[Node]:
        """
        Property and method signatures of an object type.

        Follows references through the oracle and interface ``extends``
        clauses; ``visited`` guards against cyclic declarations.
        """
        if node is None:
            return []
        kind = node.type
        if kind in ("TSTypeAnnotation", "TSParenthesizedType"):
            return self._type_members(node.typeAnnotation, visited)
        if kind == "TSTypeLiteral":
            return self._signatures(node.members)
        if kind == "TSInterfaceBody":
            return self._signatures(node.body)
        if kind == "TSIntersectionType":
            members: List[Node] = []
            for part in node.types or []:
                members.extend(self._type_members(part, visited))
            return members
        if kind in ("TSTypeReference", "TSInterfaceHeritage",
                    "TSExpressionWithTypeArguments"):
            resolved = self.oracle.resolve(node)
            if resolved is None:
                logger.debug("unresolved props type %r", reference_name(node))
                return []
            if resolved.name in visited:
                return []
            visited.add(resolved.name)
            members = []
            for parent in resolved.heritage:
                members.extend(self._type_members(parent, visited))
            members.extend(self._type_members(resolved.node, visited))
            return members
        logger.debug("props type %s has no members", kind)
        return []

    @staticmethod
    def _signatures(members: Optional[List[Node]]) -> List[Node]:
        return [
            m for m in members or []
            if m is not None and m.type in ("TSPropertySignature", "TSMethodSignature")
        ]


__all__ = [
    "DeclarationSite",
    "LocatedProps",
    "DeclarationLocator",
]
