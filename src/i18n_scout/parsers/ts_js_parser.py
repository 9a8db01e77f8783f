"""Tree-sitter parser for TypeScript and JavaScript (incl. JSX and Flow-ish JS)."""

import logging

from tree_sitter import Node, Parser, Tree

from i18n_scout.constants import grammars_for
from i18n_scout.parsers.base import (
    ExtractedImport,
    decode_string_literal,
    first_argument,
    get_language,
    iter_tree,
)

logger = logging.getLogger(__name__)


class TSJSParser:
    """Parser for TypeScript (.ts/.tsx) and JavaScript (.js/.jsx/.mjs/.cjs).

    Each file is tried against the grammars ``grammars_for`` lists for its
    extension. In strict mode a tree containing ERROR or MISSING nodes counts
    as a failed parse; in lenient mode the first grammar's tree is returned
    as-is, which is enough for import discovery.
    """

    def parse(self, source: bytes, file_path: str, *, strict: bool = True) -> Tree | None:
        grammars = grammars_for(file_path)
        first: Tree | None = None
        for grammar in grammars:
            # Parser objects are not shared: the batch extractor parses from threads.
            tree = Parser(get_language(grammar)).parse(source)
            if not tree.root_node.has_error:
                return tree
            logger.debug("%s: syntax errors under the %s grammar", file_path, grammar)
            if first is None:
                first = tree
        if strict:
            return None
        return first

    def extract_imports(self, source: bytes, file_path: str) -> list[ExtractedImport]:
        """Return every static dependency specifier of a file, in source order."""
        tree = self.parse(source, file_path, strict=False)
        if tree is None:
            return []
        imports = []
        for node in iter_tree(tree.root_node):
            imp = None
            if node.type == "import_statement":
                imp = _source_import(node, "import")
            elif node.type == "export_statement":
                imp = _source_import(node, "export")
            elif node.type == "call_expression":
                imp = _call_import(node)
            if imp:
                imports.append(imp)
        return imports


def _source_import(node: Node, kind: str) -> ExtractedImport | None:
    """``import x from "m"``, ``import "m"`` and ``export * from "m"``."""
    source_node = node.child_by_field_name("source")
    if source_node is None or source_node.type != "string":
        return None
    return ExtractedImport(
        module=decode_string_literal(source_node),
        kind=kind,
        line=node.start_point[0] + 1,
    )


def _call_import(node: Node) -> ExtractedImport | None:
    """``require("m")`` and dynamic ``import("m")`` with a literal argument."""
    func = node.child_by_field_name("function")
    if func is None:
        return None
    if func.type == "import":
        kind = "dynamic_import"
    elif func.type == "identifier" and func.text == b"require":
        kind = "require"
    else:
        return None

    first = first_argument(node)
    if first is None or first.type != "string":
        return None
    return ExtractedImport(
        module=decode_string_literal(first),
        kind=kind,
        line=node.start_point[0] + 1,
    )
