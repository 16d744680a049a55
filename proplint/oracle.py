"""
proplint/oracle.py
══════════════════

Type-alias oracle: resolves a named type reference of the embedded
TypeScript annotation language to its structural description.

The analysis core treats the oracle as optional.  An unresolved reference
is never an error; callers map it to "indeterminate" and stay silent.

Two implementations ship with the package:

  * :class:`NullTypeOracle`     — resolves nothing (plain JavaScript hosts)
  * :class:`ProgramTypeOracle`  — resolves ``type`` aliases and
    ``interface`` declarations found in the same program

Hosts with a full type checker can supply their own object satisfying
:class:`TypeAliasOracle`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Protocol, Tuple, runtime_checkable

from proplint.estree import Node, iter_preorder

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedType:
    """
    Structural description behind a type name.

    Attributes
    ----------
    name     : the declared name
    node     : the aliased type node, or the ``TSInterfaceBody`` of an
               interface
    params   : names of the declaration's type parameters, in order
    defaults : default type node per parameter (``None`` when absent)
    heritage : ``extends`` clauses of an interface
    """
    name: str
    node: Node
    params: Tuple[str, ...] = ()
    defaults: Tuple[Optional[Node], ...] = ()
    heritage: Tuple[Node, ...] = ()


@runtime_checkable
class TypeAliasOracle(Protocol):
    """Anything able to resolve a type reference node one level."""

    def resolve(self, reference: Node) -> Optional[ResolvedType]:
        ...


def reference_name(reference: Optional[Node]) -> Optional[str]:
    """Plain name of a ``TSTypeReference`` / heritage clause / identifier."""
    if reference is None:
        return None
    if reference.type == "TSTypeReference":
        reference = reference.typeName
    elif reference.type in ("TSInterfaceHeritage", "TSExpressionWithTypeArguments"):
        reference = reference.expression
    if reference is not None and reference.type == "Identifier":
        return reference.name
    return None


def type_arguments(reference: Optional[Node]) -> List[Node]:
    """
    Type arguments of a reference or call.

    Newer TSESTree versions use ``typeArguments``; older ones reuse
    ``typeParameters`` for the instantiation.
    """
    if reference is None:
        return []
    inst = reference.typeArguments or reference.typeParameters
    if inst is None or inst.type != "TSTypeParameterInstantiation":
        return []
    return [p for p in (inst.params or []) if p is not None]


def _param_name(param: Node) -> str:
    name = param.name
    if isinstance(name, Node):
        return name.name or ""
    return name or ""


class NullTypeOracle:
    """Oracle that never resolves anything."""

    def resolve(self, reference: Node) -> Optional[ResolvedType]:
        return None


class ProgramTypeOracle:
    """
    Resolves type aliases and interfaces declared in one program.

    Only unqualified names are supported; imported types are unresolved.
    When a name is declared more than once the first declaration wins;
    interface declaration merging is not modeled.
    """

    def __init__(self, program: Node) -> None:
        self._declarations: Dict[str, ResolvedType] = {}
        for node in iter_preorder(program):
            if node.type == "TSTypeAliasDeclaration":
                self._index(node, node.typeAnnotation, ())
            elif node.type == "TSInterfaceDeclaration":
                self._index(node, node.body, tuple(node.extends or ()))

    def _index(self, decl: Node, body: Optional[Node], heritage: Tuple[Node, ...]) -> None:
        ident = decl.id
        if ident is None or body is None or not ident.name:
            return
        if ident.name in self._declarations:
            logger.debug("duplicate type declaration %r ignored", ident.name)
            return
        params: List[str] = []
        defaults: List[Optional[Node]] = []
        decl_params = decl.typeParameters
        if decl_params is not None:
            for param in decl_params.params or []:
                params.append(_param_name(param))
                defaults.append(param.default)
        self._declarations[ident.name] = ResolvedType(
            name=ident.name,
            node=body,
            params=tuple(params),
            defaults=tuple(defaults),
            heritage=heritage,
        )

    @property
    def names(self) -> List[str]:
        return sorted(self._declarations)

    def resolve(self, reference: Node) -> Optional[ResolvedType]:
        name = reference_name(reference)
        if name is None:
            return None
        return self._declarations.get(name)


__all__ = [
    "ResolvedType",
    "TypeAliasOracle",
    "NullTypeOracle",
    "ProgramTypeOracle",
    "reference_name",
    "type_arguments",
]
