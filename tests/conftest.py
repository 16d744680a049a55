# tests/conftest.py
"""
Shared ESTree builders for the proplint test-suite.

The builders return plain dicts shaped exactly like the JSON a parser
host serializes; :func:`make_tree` wraps them into ``Node`` objects.
Keeping the raw-dict form lets tests also write trees to disk for the
CLI tests.
"""

from __future__ import annotations

import copy
import json
from typing import Any, Dict, List, Optional

import pytest

from proplint.checkers import CheckerRunner, Diagnostic
from proplint.estree import Node, build_tree

Raw = Dict[str, Any]


# ── expressions ──────────────────────────────────────────────────────

def ident(name: str) -> Raw:
    return {"type": "Identifier", "name": name}


def lit(value: Any, raw: Optional[str] = None) -> Raw:
    node = {"type": "Literal", "value": value}
    if raw is not None:
        node["raw"] = raw
    return node


def null() -> Raw:
    return {"type": "Literal", "value": None, "raw": "null"}


def bigint(digits: str) -> Raw:
    return {"type": "Literal", "value": None, "bigint": digits, "raw": digits + "n"}


def regex(pattern: str, flags: str = "") -> Raw:
    return {"type": "Literal", "value": {}, "regex": {"pattern": pattern, "flags": flags}}


def template(*quasis: str, expressions: Optional[List[Raw]] = None) -> Raw:
    expressions = expressions or []
    return {
        "type": "TemplateLiteral",
        "quasis": [
            {
                "type": "TemplateElement",
                "value": {"raw": q, "cooked": q},
                "tail": i == len(quasis) - 1,
            }
            for i, q in enumerate(quasis)
        ],
        "expressions": expressions,
    }


def arr(*elements: Optional[Raw]) -> Raw:
    return {"type": "ArrayExpression", "elements": list(elements)}


def prop(key: Any, value: Raw, computed: bool = False, method: bool = False) -> Raw:
    """``key: value``; a string key becomes an Identifier unless computed."""
    key_node = ident(key) if isinstance(key, str) else key
    return {
        "type": "Property",
        "key": key_node,
        "value": value,
        "computed": computed,
        "method": method,
        "shorthand": False,
        "kind": "init",
    }


def obj(*properties: Raw) -> Raw:
    return {"type": "ObjectExpression", "properties": list(properties)}


def spread(argument: Raw) -> Raw:
    return {"type": "SpreadElement", "argument": argument}


def call(callee: Any, *args: Raw, type_args: Optional[List[Raw]] = None,
         optional: bool = False) -> Raw:
    node: Raw = {
        "type": "CallExpression",
        "callee": ident(callee) if isinstance(callee, str) else callee,
        "arguments": list(args),
        "optional": optional,
    }
    if type_args is not None:
        node["typeArguments"] = {
            "type": "TSTypeParameterInstantiation",
            "params": list(type_args),
        }
    return node


def new(callee: Any, *args: Raw) -> Raw:
    return {
        "type": "NewExpression",
        "callee": ident(callee) if isinstance(callee, str) else callee,
        "arguments": list(args),
    }


def member(obj_node: Raw, name: str) -> Raw:
    return {
        "type": "MemberExpression",
        "object": obj_node,
        "property": ident(name),
        "computed": False,
        "optional": False,
    }


def unary(operator: str, argument: Raw) -> Raw:
    return {"type": "UnaryExpression", "operator": operator,
            "prefix": True, "argument": argument}


def arrow(body: Raw) -> Raw:
    """Arrow function; a BlockStatement body makes it block-bodied."""
    return {
        "type": "ArrowFunctionExpression",
        "params": [],
        "body": body,
        "expression": body["type"] != "BlockStatement",
        "async": False,
        "generator": False,
    }


def func(*statements: Raw) -> Raw:
    return {
        "type": "FunctionExpression",
        "id": None,
        "params": [],
        "body": block(*statements),
        "async": False,
        "generator": False,
    }


def block(*statements: Raw) -> Raw:
    return {"type": "BlockStatement", "body": list(statements)}


def ret(argument: Optional[Raw] = None) -> Raw:
    return {"type": "ReturnStatement", "argument": argument}


def if_stmt(test: Raw, consequent: Raw, alternate: Optional[Raw] = None) -> Raw:
    return {"type": "IfStatement", "test": test,
            "consequent": consequent, "alternate": alternate}


def as_expr(expression: Raw, type_annotation: Raw) -> Raw:
    return {"type": "TSAsExpression", "expression": expression,
            "typeAnnotation": type_annotation}


def chain(expression: Raw) -> Raw:
    return {"type": "ChainExpression", "expression": expression}


# ── statements / program ─────────────────────────────────────────────

def expr_stmt(expression: Raw) -> Raw:
    return {"type": "ExpressionStatement", "expression": expression}


def export_default(declaration: Raw) -> Raw:
    return {"type": "ExportDefaultDeclaration", "declaration": declaration}


def const(id_node: Any, init: Raw) -> Raw:
    return {
        "type": "VariableDeclaration",
        "kind": "const",
        "declarations": [{
            "type": "VariableDeclarator",
            "id": ident(id_node) if isinstance(id_node, str) else id_node,
            "init": init,
        }],
    }


def pattern_prop(key: str, default: Optional[Raw] = None) -> Raw:
    """``key`` or ``key = default`` inside an object pattern."""
    value: Raw = ident(key)
    if default is not None:
        value = {"type": "AssignmentPattern", "left": ident(key), "right": default}
    return {
        "type": "Property",
        "key": ident(key),
        "value": value,
        "computed": False,
        "method": False,
        "shorthand": True,
        "kind": "init",
    }


def obj_pattern(*properties: Raw) -> Raw:
    return {"type": "ObjectPattern", "properties": list(properties)}


def rest(name: str) -> Raw:
    return {"type": "RestElement", "argument": ident(name)}


def line_comment(value: str, line: int) -> Raw:
    return {
        "type": "Line",
        "value": value,
        "loc": {"start": {"line": line, "column": 0},
                "end": {"line": line, "column": len(value) + 2}},
    }


def program(*body: Raw, comments: Optional[List[Raw]] = None) -> Raw:
    node: Raw = {"type": "Program", "sourceType": "module", "body": list(body)}
    if comments is not None:
        node["comments"] = list(comments)
    return node


def options_component(props_value: Raw) -> Raw:
    """``export default { props: <props_value> }``"""
    return program(export_default(obj(prop("props", props_value))))


def at(node: Raw, line: int, column: int = 0) -> Raw:
    """Attach an ESTree ``loc`` (0-based column) to a raw node."""
    node = copy.deepcopy(node)
    node["loc"] = {"start": {"line": line, "column": column},
                   "end": {"line": line, "column": column + 1}}
    return node


# ── TypeScript type nodes ────────────────────────────────────────────

_KEYWORDS = {
    "string": "TSStringKeyword",
    "number": "TSNumberKeyword",
    "boolean": "TSBooleanKeyword",
    "symbol": "TSSymbolKeyword",
    "bigint": "TSBigIntKeyword",
    "object": "TSObjectKeyword",
    "null": "TSNullKeyword",
    "undefined": "TSUndefinedKeyword",
    "void": "TSVoidKeyword",
    "any": "TSAnyKeyword",
    "unknown": "TSUnknownKeyword",
    "never": "TSNeverKeyword",
}


def ts(keyword: str) -> Raw:
    return {"type": _KEYWORDS[keyword]}


def ts_literal(value: Any) -> Raw:
    return {"type": "TSLiteralType", "literal": lit(value)}


def ts_union(*types: Raw) -> Raw:
    return {"type": "TSUnionType", "types": list(types)}


def ts_intersection(*types: Raw) -> Raw:
    return {"type": "TSIntersectionType", "types": list(types)}


def ts_array(element: Raw) -> Raw:
    return {"type": "TSArrayType", "elementType": element}


def ts_function() -> Raw:
    return {"type": "TSFunctionType", "params": [],
            "returnType": {"type": "TSTypeAnnotation", "typeAnnotation": ts("void")}}


def ts_template(*types: Raw) -> Raw:
    quasis = [template("")["quasis"][0] for _ in range(len(types) + 1)]
    return {"type": "TSTemplateLiteralType", "quasis": quasis, "types": list(types)}


def ts_ref(name: str, *args: Raw) -> Raw:
    node: Raw = {"type": "TSTypeReference", "typeName": ident(name)}
    if args:
        node["typeArguments"] = {
            "type": "TSTypeParameterInstantiation",
            "params": list(args),
        }
    return node


def annotation(type_node: Raw) -> Raw:
    return {"type": "TSTypeAnnotation", "typeAnnotation": type_node}


def ts_prop_sig(name: str, type_node: Optional[Raw] = None,
                optional: bool = False) -> Raw:
    node: Raw = {
        "type": "TSPropertySignature",
        "key": ident(name),
        "computed": False,
        "optional": optional,
    }
    if type_node is not None:
        node["typeAnnotation"] = annotation(type_node)
    return node


def ts_method_sig(name: str) -> Raw:
    return {"type": "TSMethodSignature", "key": ident(name), "computed": False,
            "kind": "method", "params": []}


def ts_type_lit(*members: Raw) -> Raw:
    return {"type": "TSTypeLiteral", "members": list(members)}


def type_params(*params: Any) -> Raw:
    """Each param is a name or ``(name, default_type)``."""
    out = []
    for param in params:
        name, default = (param, None) if isinstance(param, str) else param
        out.append({"type": "TSTypeParameter", "name": ident(name),
                    "constraint": None, "default": default})
    return {"type": "TSTypeParameterDeclaration", "params": out}


def ts_alias(name: str, type_node: Raw, params: Optional[Raw] = None) -> Raw:
    node: Raw = {"type": "TSTypeAliasDeclaration", "id": ident(name),
                 "typeAnnotation": type_node}
    if params is not None:
        node["typeParameters"] = params
    return node


def ts_interface(name: str, *members: Raw, extends: Optional[List[str]] = None) -> Raw:
    return {
        "type": "TSInterfaceDeclaration",
        "id": ident(name),
        "body": {"type": "TSInterfaceBody", "body": list(members)},
        "extends": [
            {"type": "TSInterfaceHeritage", "expression": ident(parent)}
            for parent in extends or []
        ],
    }


# ── helpers ──────────────────────────────────────────────────────────

def make_tree(raw: Raw, source_text: Optional[str] = None,
              filename: str = "test.vue") -> Node:
    return build_tree(raw, source_text=source_text, filename=filename)


def analyze(raw: Raw, checkers: Optional[List[str]] = None) -> List[Diagnostic]:
    """Run the checker suite on a raw program."""
    return CheckerRunner().run(make_tree(raw), checkers=checkers).diagnostics


def messages(raw: Raw, checkers: Optional[List[str]] = None) -> List[str]:
    return [d.message for d in analyze(raw, checkers)]


def type_messages(raw: Raw) -> List[str]:
    return messages(raw, ["require-prop-types"])


def default_messages(raw: Raw) -> List[str]:
    return messages(raw, ["require-valid-default-prop"])


def default_message(name: str, type_list: str) -> str:
    return f"Type of the default value for '{name}' prop must be a {type_list}."


def type_message(name: str) -> str:
    return f"Prop '{name}' should define at least its type."


@pytest.fixture
def write_tree(tmp_path):
    """Write a raw program to ``tmp_path`` as JSON; returns the path."""
    def _write(raw: Raw, name: str = "Component.json") -> str:
        path = tmp_path / name
        path.write_text(json.dumps(raw), encoding="utf-8")
        return str(path)

    return _write
