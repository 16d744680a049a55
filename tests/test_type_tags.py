# tests/test_type_tags.py
"""
Tests for the type tag algebra and TypeTagMapper.
"""

import pytest
from unittest.mock import MagicMock

from proplint.oracle import ProgramTypeOracle, ResolvedType
from proplint.type_tags import (
    ARRAY,
    BIGINT,
    BOOLEAN,
    FUNCTION,
    NUMBER,
    OBJECT,
    STRING,
    SYMBOL,
    TypeTagMapper,
    custom,
    format_tag_list,
    tag_for_constructor,
    union_tags,
)
from tests.conftest import (
    arr,
    call,
    ident,
    lit,
    make_tree,
    program,
    null,
    ts,
    ts_alias,
    ts_array,
    ts_function,
    ts_intersection,
    ts_interface,
    ts_literal,
    ts_ref,
    ts_template,
    ts_type_lit,
    ts_union,
    type_params,
    unary,
    bigint,
    template,
)


class TestTagAlgebra:

    @pytest.mark.parametrize("name,tag", [
        ("String", STRING),
        ("Number", NUMBER),
        ("Boolean", BOOLEAN),
        ("Object", OBJECT),
        ("Array", ARRAY),
        ("Function", FUNCTION),
        ("Symbol", SYMBOL),
        ("BigInt", BIGINT),
    ])
    def test_builtin_constructors(self, name, tag):
        assert tag_for_constructor(name) == tag
        assert tag.is_builtin

    def test_other_names_are_custom(self):
        tag = tag_for_constructor("Person")
        assert tag == custom("Person")
        assert not tag.is_builtin
        assert str(tag) == "custom(Person)"

    def test_union_collapses_duplicates_keeping_order(self):
        assert union_tags([NUMBER, STRING], [NUMBER, BOOLEAN]) == (NUMBER, STRING, BOOLEAN)

    def test_format_single(self):
        assert format_tag_list((NUMBER,)) == "number"

    def test_format_two(self):
        assert format_tag_list((NUMBER, STRING)) == "number or string"

    def test_format_three(self):
        assert format_tag_list((STRING, NUMBER, BOOLEAN)) == "string, number or boolean"


class TestMapTypeReference:
    """Runtime ``type:`` values."""

    def setup_method(self):
        self.mapper = TypeTagMapper()

    def test_identifier(self):
        assert self.mapper.map_type_reference(make_tree(ident("String"))) == (STRING,)

    def test_custom_identifier(self):
        assert self.mapper.map_type_reference(make_tree(ident("Date"))) == (custom("Date"),)

    def test_array_union(self):
        node = make_tree(arr(ident("Number"), ident("String"), ident("Number")))
        assert self.mapper.map_type_reference(node) == (NUMBER, STRING)

    def test_array_holes_ignored(self):
        node = make_tree(arr(ident("Number"), None))
        assert self.mapper.map_type_reference(node) == (NUMBER,)

    def test_empty_array_means_no_type(self):
        assert self.mapper.map_type_reference(make_tree(arr())) == ()

    def test_array_with_expression_is_indeterminate(self):
        node = make_tree(arr(ident("Number"), call("getType")))
        assert self.mapper.map_type_reference(node) is None

    @pytest.mark.parametrize("raw", [null(), lit("String"), call("getType")])
    def test_other_expressions_are_indeterminate(self, raw):
        assert self.mapper.map_type_reference(make_tree(raw)) is None


class TestMapTypeAnnotation:
    """TypeScript type nodes."""

    def setup_method(self):
        self.mapper = TypeTagMapper()

    def map(self, raw, oracle=None):
        mapper = TypeTagMapper(oracle) if oracle is not None else self.mapper
        return mapper.map_type_annotation(make_tree(raw))

    @pytest.mark.parametrize("keyword,tag", [
        ("string", STRING),
        ("number", NUMBER),
        ("boolean", BOOLEAN),
        ("symbol", SYMBOL),
        ("bigint", BIGINT),
        ("object", OBJECT),
    ])
    def test_keywords(self, keyword, tag):
        assert self.map(ts(keyword)) == (tag,)

    @pytest.mark.parametrize("keyword", ["any", "unknown", "never"])
    def test_top_and_bottom_are_indeterminate(self, keyword):
        assert self.map(ts(keyword)) is None

    def test_literal_types(self):
        assert self.map(ts_literal("a")) == (STRING,)
        assert self.map(ts_literal(1)) == (NUMBER,)
        assert self.map(ts_literal(True)) == (BOOLEAN,)

    def test_negative_literal_type(self):
        raw = {"type": "TSLiteralType", "literal": unary("-", lit(1))}
        assert self.map(raw) == (NUMBER,)

    def test_bigint_literal_type(self):
        assert self.map({"type": "TSLiteralType", "literal": bigint("1")}) == (BIGINT,)

    def test_template_literal_types(self):
        assert self.map(ts_template(ts("number"))) == (STRING,)
        assert self.map({"type": "TSLiteralType", "literal": template("a")}) == (STRING,)

    def test_structural_types(self):
        assert self.map(ts_array(ts("string"))) == (ARRAY,)
        assert self.map({"type": "TSTupleType", "elementTypes": []}) == (ARRAY,)
        assert self.map(ts_type_lit()) == (OBJECT,)
        assert self.map(ts_function()) == (FUNCTION,)

    def test_union_drops_nullish_members(self):
        raw = ts_union(ts("string"), ts("null"), ts("undefined"), ts("number"))
        assert self.map(raw) == (STRING, NUMBER)

    def test_union_with_indeterminate_member(self):
        assert self.map(ts_union(ts("string"), ts("any"))) is None

    def test_only_nullish_is_indeterminate(self):
        assert self.map(ts_union(ts("null"), ts("undefined"))) is None

    def test_readonly_and_parenthesized_are_transparent(self):
        raw = {"type": "TSTypeOperator", "operator": "readonly",
               "typeAnnotation": {"type": "TSParenthesizedType",
                                  "typeAnnotation": ts_array(ts("string"))}}
        assert self.map(raw) == (ARRAY,)

    def test_keyof_is_indeterminate(self):
        raw = {"type": "TSTypeOperator", "operator": "keyof",
               "typeAnnotation": ts_type_lit()}
        assert self.map(raw) is None

    def test_intersection_of_objects(self):
        assert self.map(ts_intersection(ts_type_lit(), ts("object"))) == (OBJECT,)
        assert self.map(ts_intersection(ts_type_lit(), ts("string"))) is None

    @pytest.mark.parametrize("name,expected", [
        ("Array", (ARRAY,)),
        ("ReadonlyArray", (ARRAY,)),
        ("Record", (OBJECT,)),
        ("Pick", (OBJECT,)),
        ("Function", (FUNCTION,)),
        ("String", (STRING,)),
        ("Date", (custom("Date"),)),
        ("Promise", (custom("Promise"),)),
    ])
    def test_global_references(self, name, expected):
        assert self.map(ts_ref(name, ts("string"))) == expected

    def test_partial_keeps_argument_shape(self):
        assert self.map(ts_ref("Partial", ts_type_lit())) == (OBJECT,)

    def test_unresolved_reference_is_indeterminate(self):
        assert self.map(ts_ref("Unknown")) is None


class TestAliasResolution:
    """References resolved through an oracle."""

    def _mapper(self, *decls):
        tree = make_tree(program(*decls))
        return TypeTagMapper(ProgramTypeOracle(tree))

    def test_simple_alias(self):
        mapper = self._mapper(ts_alias("Name", ts_union(ts("string"), ts("number"))))
        assert mapper.map_type_annotation(make_tree(ts_ref("Name"))) == (STRING, NUMBER)

    def test_generic_alias_binds_arguments(self):
        # type MaybeString<T> = T | `${T}`
        alias = ts_alias(
            "MaybeString",
            ts_union(ts_ref("T"), ts_template(ts_ref("T"))),
            params=type_params("T"),
        )
        mapper = self._mapper(alias)
        ref = ts_ref("MaybeString", ts_literal(1), ts_literal(2))
        assert mapper.map_type_annotation(make_tree(ref)) == (NUMBER, STRING)

    def test_generic_template_only(self):
        alias = ts_alias("MaybeString", ts_template(ts_ref("T")), params=type_params("T"))
        mapper = self._mapper(alias)
        ref = ts_ref("MaybeString", ts_literal(1), ts_literal(2))
        assert mapper.map_type_annotation(make_tree(ref)) == (STRING,)

    def test_missing_argument_uses_parameter_default(self):
        alias = ts_alias("Box", ts_ref("T"), params=type_params(("T", ts("boolean"))))
        mapper = self._mapper(alias)
        assert mapper.map_type_annotation(make_tree(ts_ref("Box"))) == (BOOLEAN,)

    def test_missing_argument_without_default(self):
        alias = ts_alias("Box", ts_ref("T"), params=type_params("T"))
        mapper = self._mapper(alias)
        assert mapper.map_type_annotation(make_tree(ts_ref("Box"))) is None

    def test_self_referential_alias(self):
        alias = ts_alias("Tree", ts_union(ts("string"), ts_ref("Tree")))
        mapper = self._mapper(alias)
        assert mapper.map_type_annotation(make_tree(ts_ref("Tree"))) is None

    def test_interface_maps_to_object(self):
        mapper = self._mapper(ts_interface("Props"))
        assert mapper.map_type_annotation(make_tree(ts_ref("Props"))) == (OBJECT,)

    def test_oracle_is_consulted(self):
        body = make_tree(ts("number"))
        oracle = MagicMock()
        oracle.resolve.return_value = ResolvedType(name="Count", node=body)
        mapper = TypeTagMapper(oracle)
        assert mapper.map_type_annotation(make_tree(ts_ref("Count"))) == (NUMBER,)
        oracle.resolve.assert_called_once()

    def test_oracle_never_resolving(self):
        oracle = MagicMock()
        oracle.resolve.return_value = None
        mapper = TypeTagMapper(oracle)
        assert mapper.map_type_annotation(make_tree(ts_ref("Count"))) is None
