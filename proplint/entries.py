"""
proplint/entries.py
═══════════════════

Normalized per-prop records shared by both checks.

:class:`PropEntryBuilder` combines the locator's raw declaration sites with
the type mapper into one immutable :class:`PropEntry` per declared prop.
Checkers only ever see ``PropEntry`` objects; none of them looks at
declaration syntax again.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from proplint.estree import Node, is_function, skip_wrappers
from proplint.locator import DeclarationLocator, DeclarationSite, LocatedProps
from proplint.macros import DeclarationShape
from proplint.names import static_name
from proplint.type_tags import FUNCTION, TagSet, TypeTagMapper

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PropDefault:
    """A default value and the declaration form that supplied it."""
    expression: Node
    origin: DeclarationShape

    @property
    def destructured(self) -> bool:
        return self.origin is DeclarationShape.DESTRUCTURED_DEFAULTS


@dataclass(frozen=True)
class PropEntry:
    """
    One declared prop.

    Attributes
    ----------
    name               : display name
    declared_types     : declared tags; empty when no type is declared
    has_validator      : a ``validator`` member is present
    defaults           : every default that applies, in declaration order
    source_node        : location of the declaration
    shape              : declaration shape
    type_indeterminate : a type is declared but cannot be mapped
    static_name        : literal name, when resolvable
    """
    name: str
    declared_types: TagSet
    has_validator: bool
    defaults: Tuple[PropDefault, ...]
    source_node: Node
    shape: DeclarationShape
    type_indeterminate: bool = False
    static_name: Optional[str] = None

    @property
    def default_expr(self) -> Optional[Node]:
        return self.defaults[0].expression if self.defaults else None

    @property
    def has_declared_type(self) -> bool:
        return bool(self.declared_types) or self.type_indeterminate


@dataclass
class _Descriptor:
    types: TagSet = ()
    indeterminate: bool = False
    validator: bool = False
    default: Optional[Node] = None


def _may_be_function(value: Optional[Node]) -> bool:
    """False for a missing validator or one that is a literal or ``undefined``."""
    value = skip_wrappers(value)
    if value is None or value.type in ("Literal", "TemplateLiteral"):
        return False
    return not (value.type == "Identifier" and value.name == "undefined")


class PropEntryBuilder:
    """
    Builds :class:`PropEntry` lists.

    Parameters
    ----------
    locator : finds declaration sites
    mapper  : maps declared types to tags; shares the locator's oracle
              by default
    """

    def __init__(
        self,
        locator: Optional[DeclarationLocator] = None,
        mapper: Optional[TypeTagMapper] = None,
    ) -> None:
        self.locator = locator or DeclarationLocator()
        self.mapper = mapper or TypeTagMapper(self.locator.oracle)

    def build(self, description: Optional[Node]) -> List[PropEntry]:
        """Entries of one component description, in source order."""
        return self.from_located(self.locator.locate(description))

    def from_located(self, located: LocatedProps) -> List[PropEntry]:
        return [self._entry(site, located) for site in located.sites]

    # ── per-site normalization ────────────────────────────────────────

    def _entry(self, site: DeclarationSite, located: LocatedProps) -> PropEntry:
        desc = self._descriptor(site.value)
        types, indeterminate = desc.types, desc.indeterminate
        if site.type_node is not None:
            types, indeterminate = self._annotation_types(site.type_node)

        defaults: List[PropDefault] = []
        if desc.default is not None:
            defaults.append(PropDefault(desc.default, DeclarationShape.OBJECT_OF_DESCRIPTORS))
        name = site.static_name
        if name is not None:
            if name in located.merged_defaults:
                defaults.append(PropDefault(
                    located.merged_defaults[name],
                    DeclarationShape.DEFAULTS_MERGE_WRAPPER,
                ))
            if name in located.destructured_defaults:
                defaults.append(PropDefault(
                    located.destructured_defaults[name],
                    DeclarationShape.DESTRUCTURED_DEFAULTS,
                ))

        return PropEntry(
            name=site.name,
            declared_types=types,
            has_validator=desc.validator,
            defaults=tuple(defaults),
            source_node=site.node,
            shape=site.shape,
            type_indeterminate=indeterminate,
            static_name=site.static_name,
        )

    def _annotation_types(self, type_node: Node) -> Tuple[TagSet, bool]:
        if type_node.type == "TSMethodSignature":
            return (FUNCTION,), False
        tags = self.mapper.map_type_annotation(type_node)
        if tags is None:
            return (), True
        return tags, False

    def _descriptor(self, value: Optional[Node]) -> _Descriptor:
        """
        Interpret a runtime declaration value.

        ``String`` / ``[String, Number]`` declare types only, a function
        declares nothing, an object literal is a full descriptor.  Any other
        expression is an unknown declaration.
        """
        node = skip_wrappers(value)
        if node is None or is_function(node):
            return _Descriptor()
        if node.type in ("Identifier", "ArrayExpression"):
            return self._type_value(node, _Descriptor())
        if node.type != "ObjectExpression":
            return _Descriptor(indeterminate=True)

        desc = _Descriptor()
        members: Dict[str, Node] = {}
        has_spread = False
        for prop in node.properties or []:
            if prop is None or prop.type != "Property":
                has_spread = True
                continue
            key = static_name(prop.key, bool(prop.computed))
            if key in ("type", "default", "validator") and prop.value is not None:
                members[key] = prop.value

        if "type" in members:
            self._type_value(members["type"], desc)
        elif has_spread:
            # The type may come from the spread object
            desc.indeterminate = True
        desc.validator = _may_be_function(members.get("validator"))
        desc.default = members.get("default")
        return desc

    def _type_value(self, value: Node, desc: _Descriptor) -> _Descriptor:
        tags = self.mapper.map_type_reference(value)
        if tags is None:
            desc.indeterminate = True
        else:
            desc.types = tags
        return desc


__all__ = [
    "PropDefault",
    "PropEntry",
    "PropEntryBuilder",
]
