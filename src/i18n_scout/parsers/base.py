from __future__ import annotations

import logging
import re
from dataclasses import dataclass

import tree_sitter_javascript as tsjs
import tree_sitter_typescript as tsts
from tree_sitter import Language, Node

logger = logging.getLogger(__name__)

_LANGUAGES: dict[str, Language] = {}


def get_language(grammar: str) -> Language:
    """Get or create the tree-sitter Language for a grammar name."""
    if grammar not in _LANGUAGES:
        if grammar == "javascript":
            _LANGUAGES[grammar] = Language(tsjs.language())
        elif grammar == "typescript":
            _LANGUAGES[grammar] = Language(tsts.language_typescript())
        elif grammar == "tsx":
            _LANGUAGES[grammar] = Language(tsts.language_tsx())
        else:
            raise ValueError(f"No grammar named: {grammar}")
    return _LANGUAGES[grammar]


@dataclass
class ExtractedImport:
    module: str  # the raw specifier, e.g. "./Foo" or "react-native"
    kind: str  # "import", "export", "require", "dynamic_import"
    line: int  # 1-based


def iter_tree(node: Node):
    """Iterate all nodes in the tree in pre-order.

    Uses an explicit stack; minified bundles nest deeper than the
    interpreter's recursion limit.
    """
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children))


_SIMPLE_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "0": "\0",
}
_LINE_CONTINUATION = re.compile(r"^\\(\r\n|\r|\n|\u2028|\u2029)$")


def _decode_escape(escape: str) -> str:
    """Decode a single JS escape sequence such as ``\\n`` or ``\\u{1F600}``."""
    if _LINE_CONTINUATION.match(escape):
        return ""
    body = escape[1:]
    if body in _SIMPLE_ESCAPES:
        return _SIMPLE_ESCAPES[body]
    try:
        if body.startswith("u{") and body.endswith("}"):
            return chr(int(body[2:-1], 16))
        if body.startswith(("u", "x")) and len(body) > 1:
            return chr(int(body[1:], 16))
        if body and all(c in "01234567" for c in body):
            # Legacy octal escapes, e.g. "\101"
            return chr(int(body, 8))
    except ValueError:
        # Out-of-range code point; keep the escape text
        return escape
    return body


def decode_string_literal(node: Node) -> str:
    """Return the runtime value of a JS/TS ``string`` node.

    Escape sequences are interpreted; surrogate pairs written as two
    ``\\uXXXX`` escapes are joined into one code point.
    """
    parts: list[str] = []
    for child in node.named_children:
        text = child.text.decode("utf-8", errors="replace")
        if child.type == "escape_sequence":
            parts.append(_decode_escape(text))
        else:
            parts.append(text)
    value = "".join(parts)
    try:
        return value.encode("utf-16-le", "surrogatepass").decode("utf-16-le")
    except UnicodeDecodeError:
        logger.debug("Unpaired surrogate in string literal at line %d", node.start_point[0] + 1)
        return value


def first_argument(call: Node) -> Node | None:
    """Return the first argument node of a ``call_expression``, skipping comments."""
    args = call.child_by_field_name("arguments")
    if args is None:
        return None
    for child in args.named_children:
        if child.type != "comment":
            return child
    return None
