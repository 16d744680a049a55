"""
proplint/macros.py
══════════════════

Recognition of component-declaration macros.

Script-setup components declare props through compiler macros instead of
an options object:

    defineProps(['foo'])                          ARRAY_OF_NAMES
    defineProps({ foo: String })                  OBJECT_OF_DESCRIPTORS
    defineProps<{ foo: string }>()                TYPED_MACRO_ARGUMENT
    withDefaults(defineProps<...>(), {...})       DEFAULTS_MERGE_WRAPPER
    defineModel('foo', { type: String })          MODEL_MACRO

:class:`MacroResolver` classifies a ``CallExpression`` into a
:class:`MacroCall`.  Destructured defaults (``const { a = 1 } = ...``) are
recognized by the locator, which sees the enclosing declarator.

Macro names are configurable so that hosts with aliased imports can
still be analyzed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from proplint.estree import Node, skip_wrappers
from proplint.names import string_value
from proplint.oracle import type_arguments

logger = logging.getLogger(__name__)


class DeclarationShape(Enum):
    """Syntactic pattern used to declare props."""
    ARRAY_OF_NAMES = "array-of-names"
    OBJECT_OF_DESCRIPTORS = "object-of-descriptors"
    TYPED_MACRO_ARGUMENT = "typed-macro-argument"
    DEFAULTS_MERGE_WRAPPER = "defaults-merge-wrapper"
    DESTRUCTURED_DEFAULTS = "destructured-defaults"
    MODEL_MACRO = "model-macro"


class MacroKind(Enum):
    DEFINE_PROPS = "defineProps"
    WITH_DEFAULTS = "withDefaults"
    DEFINE_MODEL = "defineModel"


DEFAULT_MODEL_NAME = "modelValue"


@dataclass(frozen=True)
class MacroCall:
    """
    One classified macro call.

    Attributes
    ----------
    kind             : which macro
    call             : the call expression itself
    shape            : declaration shape, ``None`` when the argument cannot
                       be analyzed (identifier, spread, missing)
    props_call       : the ``defineProps`` call (the inner one for
                       ``withDefaults``)
    type_argument    : first type argument, if any
    runtime_argument : the runtime declaration (props literal, or model
                       options)
    defaults         : the defaults object of ``withDefaults``
    model_name       : declared model prop name (``defineModel`` only)
    inner            : the wrapped macro of ``withDefaults``
    """
    kind: MacroKind
    call: Node
    shape: Optional[DeclarationShape] = None
    props_call: Optional[Node] = None
    type_argument: Optional[Node] = None
    runtime_argument: Optional[Node] = None
    defaults: Optional[Node] = None
    model_name: Optional[str] = None
    inner: Optional["MacroCall"] = None


def _callee_name(call: Node) -> Optional[str]:
    callee = skip_wrappers(call.callee)
    if callee is not None and callee.type == "Identifier":
        return callee.name
    return None


def _argument(call: Node, index: int) -> Optional[Node]:
    args = call.arguments or []
    if index < len(args):
        return args[index]
    return None


class MacroResolver:
    """
    Name-based macro recognizer.

    Parameters
    ----------
    define_props  : callee names that declare props
    with_defaults : callee names of the defaults-merging wrapper
    define_model  : callee names of the model macro
    """

    def __init__(
        self,
        define_props: Tuple[str, ...] = ("defineProps",),
        with_defaults: Tuple[str, ...] = ("withDefaults",),
        define_model: Tuple[str, ...] = ("defineModel",),
    ) -> None:
        self.define_props = tuple(define_props)
        self.with_defaults = tuple(with_defaults)
        self.define_model = tuple(define_model)

    def classify(self, call: Optional[Node]) -> Optional[MacroCall]:
        """Classify a call expression, or return ``None`` if it is no macro."""
        call = skip_wrappers(call)
        if call is None or call.type != "CallExpression":
            return None
        name = _callee_name(call)
        if name is None:
            return None
        if name in self.define_props:
            return self._define_props(call)
        if name in self.with_defaults:
            return self._with_defaults(call)
        if name in self.define_model:
            return self._define_model(call)
        return None

    # ── per-macro classification ─────────────────────────────────────

    def _define_props(self, call: Node) -> MacroCall:
        type_args = type_arguments(call)
        runtime = _argument(call, 0)
        shape: Optional[DeclarationShape] = None
        if type_args:
            shape = DeclarationShape.TYPED_MACRO_ARGUMENT
        else:
            value = skip_wrappers(runtime)
            if value is not None and value.type == "ObjectExpression":
                shape = DeclarationShape.OBJECT_OF_DESCRIPTORS
            elif value is not None and value.type == "ArrayExpression":
                shape = DeclarationShape.ARRAY_OF_NAMES
            else:
                logger.debug("unanalyzable props macro argument at line %d", call.line)
        return MacroCall(
            kind=MacroKind.DEFINE_PROPS,
            call=call,
            shape=shape,
            props_call=call,
            type_argument=type_args[0] if type_args else None,
            runtime_argument=runtime,
        )

    def _with_defaults(self, call: Node) -> MacroCall:
        inner_call = skip_wrappers(_argument(call, 0))
        inner: Optional[MacroCall] = None
        if inner_call is not None and inner_call.type == "CallExpression" \
                and _callee_name(inner_call) in self.define_props:
            inner = self._define_props(inner_call)

        defaults = skip_wrappers(_argument(call, 1))
        if defaults is not None and defaults.type != "ObjectExpression":
            defaults = None

        shape = DeclarationShape.DEFAULTS_MERGE_WRAPPER
        if inner is None or inner.shape is None:
            shape = None
        return MacroCall(
            kind=MacroKind.WITH_DEFAULTS,
            call=call,
            shape=shape,
            props_call=inner.call if inner is not None else None,
            type_argument=inner.type_argument if inner is not None else None,
            runtime_argument=inner.runtime_argument if inner is not None else None,
            defaults=defaults,
            inner=inner,
        )

    def _define_model(self, call: Node) -> MacroCall:
        type_args = type_arguments(call)
        first = _argument(call, 0)
        name = string_value(first)
        if name is not None:
            options = _argument(call, 1)
        else:
            options = first
            name = DEFAULT_MODEL_NAME
        return MacroCall(
            kind=MacroKind.DEFINE_MODEL,
            call=call,
            shape=DeclarationShape.MODEL_MACRO,
            type_argument=type_args[0] if type_args else None,
            runtime_argument=options,
            model_name=name,
        )


__all__ = [
    "DeclarationShape",
    "MacroKind",
    "MacroCall",
    "MacroResolver",
    "DEFAULT_MODEL_NAME",
]
