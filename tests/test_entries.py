# tests/test_entries.py
"""
Tests for PropEntryBuilder: declared types, validators and defaults.
"""

import pytest

from proplint.entries import PropEntryBuilder
from proplint.locator import DeclarationLocator
from proplint.macros import DeclarationShape
from proplint.oracle import ProgramTypeOracle
from proplint.type_tags import ARRAY, BOOLEAN, FUNCTION, NUMBER, OBJECT, STRING, custom
from tests.conftest import (
    arr,
    arrow,
    as_expr,
    call,
    const,
    expr_stmt,
    ident,
    lit,
    make_tree,
    member,
    null,
    obj,
    obj_pattern,
    pattern_prop,
    program,
    prop,
    spread,
    ts,
    ts_alias,
    ts_method_sig,
    ts_prop_sig,
    ts_ref,
    ts_type_lit,
    ts_union,
)


def _entries(props_value):
    options = make_tree(obj(prop("props", props_value)))
    return PropEntryBuilder().build(options)


def _entry(descriptor):
    entry, = _entries(obj(prop("foo", descriptor)))
    return entry


class TestRuntimeDescriptors:

    def test_names_only(self):
        entries = _entries(arr(lit("a"), lit("b")))
        assert [e.name for e in entries] == ["a", "b"]
        assert all(e.declared_types == () for e in entries)
        assert all(not e.has_declared_type for e in entries)
        assert all(e.defaults == () for e in entries)

    def test_shorthand_type(self):
        entry = _entry(ident("String"))
        assert entry.declared_types == (STRING,)
        assert entry.shape is DeclarationShape.OBJECT_OF_DESCRIPTORS

    def test_shorthand_type_list(self):
        assert _entry(arr(ident("Number"), ident("String"))).declared_types == (NUMBER, STRING)

    def test_full_descriptor(self):
        entry = _entry(obj(
            prop("type", ident("Object")),
            prop("default", arrow(obj())),
            prop("validator", arrow(lit(True))),
        ))
        assert entry.declared_types == (OBJECT,)
        assert entry.has_validator
        assert entry.default_expr.type == "ArrowFunctionExpression"
        assert entry.defaults[0].origin is DeclarationShape.OBJECT_OF_DESCRIPTORS
        assert not entry.defaults[0].destructured

    def test_empty_descriptor(self):
        entry = _entry(obj())
        assert entry.declared_types == ()
        assert not entry.has_declared_type
        assert not entry.has_validator

    @pytest.mark.parametrize("validator", [
        ident("isColor"),
        member(ident("validators"), "color"),
        arrow(lit(True)),
    ])
    def test_validator_values(self, validator):
        assert _entry(obj(prop("validator", validator))).has_validator

    @pytest.mark.parametrize("validator", [null(), lit(True), ident("undefined")])
    def test_non_function_validator(self, validator):
        assert not _entry(obj(prop("validator", validator))).has_validator

    def test_empty_type_list(self):
        entry = _entry(obj(prop("type", arr())))
        assert not entry.has_declared_type

    def test_custom_constructor(self):
        assert _entry(obj(prop("type", ident("Person")))).declared_types == (custom("Person"),)

    def test_unmappable_type_is_indeterminate(self):
        entry = _entry(obj(prop("type", call("pickType"))))
        assert entry.type_indeterminate
        assert entry.has_declared_type

    def test_spread_without_type_is_indeterminate(self):
        entry = _entry(obj(spread(ident("shared")), prop("default", lit(1))))
        assert entry.type_indeterminate
        assert entry.default_expr.value == 1

    def test_function_value_declares_nothing(self):
        entry = _entry(arrow(lit(1)))
        assert not entry.has_declared_type

    def test_cast_descriptor(self):
        entry = _entry(as_expr(obj(), ts_ref("PropOptions", ts("string"))))
        assert not entry.has_declared_type

    def test_identifier_and_call_values(self):
        entry = _entry(ident("sharedDescriptor"))
        # An identifier is read as a constructor reference
        assert entry.declared_types == (custom("sharedDescriptor"),)
        entry = _entry(call("makeProp"))
        assert entry.type_indeterminate


class TestTypedDeclarations:

    def _typed(self, *members, decls=()):
        macro = call("defineProps", type_args=[ts_type_lit(*members)])
        tree = make_tree(program(*decls, expr_stmt(macro)))
        locator = DeclarationLocator(oracle=ProgramTypeOracle(tree))
        return PropEntryBuilder(locator).build(tree.body[-1].expression)

    def test_member_types(self):
        entries = self._typed(
            ts_prop_sig("a", ts("string")),
            ts_prop_sig("b", ts_union(ts("number"), ts("null"))),
            ts_method_sig("c"),
        )
        assert [e.declared_types for e in entries] == [(STRING,), (NUMBER,), (FUNCTION,)]
        assert all(e.shape is DeclarationShape.TYPED_MACRO_ARGUMENT for e in entries)

    def test_unannotated_member_is_indeterminate(self):
        entry, = self._typed(ts_prop_sig("a"))
        assert entry.type_indeterminate
        assert entry.has_declared_type

    def test_alias_through_oracle(self):
        entry, = self._typed(
            ts_prop_sig("a", ts_ref("Items")),
            decls=[ts_alias("Items", {"type": "TSArrayType", "elementType": ts("string")})],
        )
        assert entry.declared_types == (ARRAY,)


class TestDefaultSources:

    def test_with_defaults(self):
        raw = call(
            "withDefaults",
            call("defineProps", type_args=[ts_type_lit(ts_prop_sig("foo", ts("number")))]),
            obj(prop("foo", lit("x"))),
        )
        entry, = PropEntryBuilder().build(make_tree(raw))
        assert entry.defaults[0].origin is DeclarationShape.DEFAULTS_MERGE_WRAPPER
        assert entry.default_expr.value == "x"

    def test_descriptor_and_destructured_defaults(self):
        tree = make_tree(program(const(
            obj_pattern(pattern_prop("foo", lit("a"))),
            call("defineProps", obj(prop("foo", obj(
                prop("type", ident("Number")),
                prop("default", lit(1)),
            )))),
        )))
        declarator = tree.body[0].declarations[0]
        entry, = PropEntryBuilder().build(declarator)
        origins = [d.origin for d in entry.defaults]
        assert origins == [
            DeclarationShape.OBJECT_OF_DESCRIPTORS,
            DeclarationShape.DESTRUCTURED_DEFAULTS,
        ]
        assert entry.defaults[1].destructured
        assert entry.default_expr.value == 1

    def test_model_entry(self):
        raw = call("defineModel", lit("count"), obj(
            prop("type", ident("Number")),
            prop("default", lit(0)),
        ))
        entry, = PropEntryBuilder().build(make_tree(raw))
        assert entry.name == "count"
        assert entry.declared_types == (NUMBER,)
        assert entry.shape is DeclarationShape.MODEL_MACRO

    def test_model_shorthand_constructor(self):
        entry, = PropEntryBuilder().build(make_tree(call("defineModel", ident("String"))))
        assert entry.name == "modelValue"
        assert entry.declared_types == (STRING,)

    def test_typed_model(self):
        raw = call("defineModel", type_args=[ts("boolean")])
        entry, = PropEntryBuilder().build(make_tree(raw))
        assert entry.declared_types == (BOOLEAN,)
        assert not entry.type_indeterminate
