"""
proplint/components.py
══════════════════════

Discovery of component descriptions in a program.

    export default { props: ... }                       options object
    defineComponent({ props: ... })                     options object
    Vue.extend({...}) / Vue.component('x', {...})       options object
    Vue.mixin({...})  / new Vue({...})                  options object
    defineProps(...) / withDefaults(...) / defineModel  macro call
    const { a = 1 } = defineProps(...)                  declarator

Descriptions are yielded in source order, each at most once.  A props
macro wrapped by ``withDefaults`` is reported through the wrapper only.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Set

from proplint.estree import TRANSPARENT_WRAPPERS, Node, iter_preorder, skip_wrappers
from proplint.macros import MacroKind, MacroResolver
from proplint.names import static_name

logger = logging.getLogger(__name__)

_VUE_FACTORIES = frozenset({"extend", "component", "mixin"})


def _outer_parent(node: Node) -> Optional[Node]:
    """First ancestor that is not a transparent wrapper."""
    parent = node.parent
    while parent is not None and parent.type in TRANSPARENT_WRAPPERS:
        parent = parent.parent
    return parent


def _last_object_argument(call: Node) -> Optional[Node]:
    args = [skip_wrappers(a) for a in call.arguments or []]
    objects = [a for a in args if a is not None and a.type == "ObjectExpression"]
    return objects[-1] if objects else None


def _is_vue_factory_call(call: Node) -> bool:
    callee = skip_wrappers(call.callee)
    if callee is None or callee.type != "MemberExpression":
        return False
    receiver = skip_wrappers(callee.object)
    if receiver is None or receiver.type != "Identifier" or receiver.name != "Vue":
        return False
    return static_name(callee.property, bool(callee.computed)) in _VUE_FACTORIES


def _options_of_call(call: Node) -> Optional[Node]:
    callee = skip_wrappers(call.callee)
    if callee is not None and callee.type == "Identifier" and callee.name == "defineComponent":
        first = skip_wrappers((call.arguments or [None])[0])
        if first is not None and first.type == "ObjectExpression":
            return first
        return None
    if _is_vue_factory_call(call):
        return _last_object_argument(call)
    return None


def _macro_description(call: Node, resolver: MacroResolver) -> Optional[Node]:
    """Node describing a top-level macro call, ``None`` for inner calls."""
    parent = _outer_parent(call)
    if parent is not None and parent.type == "CallExpression":
        outer = resolver.classify(parent)
        if outer is not None and outer.kind is MacroKind.WITH_DEFAULTS \
                and outer.props_call is call:
            return None
    if parent is not None and parent.type == "VariableDeclarator" \
            and parent.id is not None and parent.id.type == "ObjectPattern":
        return parent
    return call


def find_component_descriptions(
    program: Optional[Node],
    resolver: Optional[MacroResolver] = None,
) -> List[Node]:
    """
    List the component description nodes of a program.

    Args:
        program: Root of the tree
        resolver: Macro recognizer (default macro names when omitted)

    Returns:
        Description nodes accepted by :class:`DeclarationLocator`
    """
    resolver = resolver or MacroResolver()
    found: List[Node] = []
    seen: Set[int] = set()

    def add(node: Optional[Node]) -> None:
        if node is not None and id(node) not in seen:
            seen.add(id(node))
            found.append(node)

    for node in iter_preorder(program):
        if node.type == "ExportDefaultDeclaration":
            decl = skip_wrappers(node.declaration)
            if decl is not None and decl.type == "ObjectExpression":
                add(decl)
        elif node.type == "NewExpression":
            callee = skip_wrappers(node.callee)
            if callee is not None and callee.type == "Identifier" and callee.name == "Vue":
                add(_last_object_argument(node))
        elif node.type == "CallExpression":
            if resolver.classify(node) is not None:
                add(_macro_description(node, resolver))
            else:
                add(_options_of_call(node))

    logger.debug("found %d component description(s)", len(found))
    return found


__all__ = [
    "find_component_descriptions",
]
