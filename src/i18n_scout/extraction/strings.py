"""Find literal string arguments of extractor calls such as ``t("Hello")``."""

from __future__ import annotations

from dataclasses import dataclass

from tree_sitter import Node

from i18n_scout.parsers.base import decode_string_literal, first_argument, iter_tree
from i18n_scout.parsers.ts_js_parser import TSJSParser

_PARSER = TSJSParser()


@dataclass(frozen=True)
class PlainName:
    """``t(...)``"""
    name: str


@dataclass(frozen=True)
class PropertyAccess:
    """``i18n.t(...)`` or ``i18n?.t(...)``"""
    object: str
    property: str


@dataclass(frozen=True)
class OtherCallee:
    """Any other callee shape: ``obj["t"](...)``, ``getT()(...)``, ``import(...)``."""
    type: str


Callee = PlainName | PropertyAccess | OtherCallee


def classify_callee(call: Node) -> Callee:
    func = call.child_by_field_name("function")
    if func is None:
        return OtherCallee(type="missing")
    if func.type == "identifier":
        return PlainName(name=func.text.decode("utf-8"))
    if func.type == "member_expression":
        obj = func.child_by_field_name("object")
        prop = func.child_by_field_name("property")
        if prop is not None and prop.type in ("property_identifier", "private_property_identifier"):
            return PropertyAccess(
                object=obj.text.decode("utf-8", errors="replace") if obj is not None else "",
                property=prop.text.decode("utf-8"),
            )
    return OtherCallee(type=func.type)


def callee_matches(callee: Callee, extractor_name: str) -> bool:
    match callee:
        case PlainName(name=name):
            return name == extractor_name
        case PropertyAccess(property=prop):
            return prop == extractor_name
        case _:
            return False


def extract(extractor_name: str, source: bytes | str, filename: str) -> list[str] | None:
    """Return the first-argument literals of every matching call, in pre-order.

    Returns None when the source does not parse. A call matches when its first
    argument is a plain string literal and its callee is ``extractor_name``
    itself or a property access ending in ``.extractor_name``. Calls whose
    first argument is anything else (identifiers, template strings,
    concatenations) are skipped.
    """
    if isinstance(source, str):
        source = source.encode("utf-8")
    tree = _PARSER.parse(source, filename)
    if tree is None:
        return None

    found = []
    for node in iter_tree(tree.root_node):
        if node.type != "call_expression":
            continue
        arg = first_argument(node)
        if arg is None or arg.type != "string":
            continue
        if callee_matches(classify_callee(node), extractor_name):
            found.append(decode_string_literal(arg))
    return found

