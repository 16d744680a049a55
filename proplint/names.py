"""
proplint/names.py
═════════════════

Prop name policy.

Every place that turns a syntax node into a prop name goes through this
module, so that diagnostics and default matching agree on names:

  * :func:`static_name`        — literal name of a key, or ``None``
  * :func:`array_element_name` — name of an array-of-names entry
  * :func:`prop_display_name`  — name printed in messages
"""

from __future__ import annotations

from typing import Optional

from proplint.estree import Node, expr_to_string, literal_text, skip_wrappers

UNKNOWN_PROP = "Unknown prop"


def _template_text(node: Node) -> Optional[str]:
    """Cooked text of a template literal without interpolation."""
    if node.expressions:
        return None
    quasis = node.quasis or []
    if len(quasis) != 1:
        return None
    value = quasis[0].value or {}
    cooked = value.get("cooked")
    if cooked is None:
        cooked = value.get("raw")
    return cooked


def string_value(node: Optional[Node]) -> Optional[str]:
    """Value of a string literal or an interpolation-free template."""
    node = skip_wrappers(node)
    if node is None:
        return None
    if node.type == "Literal" and isinstance(node.value, str):
        return node.value
    if node.type == "TemplateLiteral":
        return _template_text(node)
    return None


def static_name(key: Optional[Node], computed: bool = False) -> Optional[str]:
    """
    Statically known name of a property key.

    Args:
        key: The ``key`` of a Property / TSPropertySignature
        computed: Whether the key is written in brackets

    Returns:
        The name, or ``None`` when it depends on a runtime value
    """
    if key is None:
        return None
    if key.type == "Identifier" and not computed:
        return key.name
    if key.type == "Literal":
        if key.regex is not None:
            return None
        return literal_text(key)
    if key.type == "TemplateLiteral":
        return _template_text(key)
    return None


def array_element_name(element: Node) -> str:
    """Name of one ``props: [...]`` element."""
    element = skip_wrappers(element) or element
    value = string_value(element)
    if value is not None:
        return value
    if element.type == "Identifier":
        return element.name
    return UNKNOWN_PROP


def prop_display_name(key: Optional[Node], computed: bool = False) -> str:
    """
    Name printed in diagnostics.

    Unresolvable computed keys are shown as ``[<source text>]``.
    """
    name = static_name(key, computed)
    if name is not None:
        return name
    return f"[{expr_to_string(key)}]"


__all__ = [
    "UNKNOWN_PROP",
    "string_value",
    "static_name",
    "array_element_name",
    "prop_display_name",
]
