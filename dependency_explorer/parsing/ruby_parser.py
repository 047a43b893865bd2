"""Tree-sitter adapter that turns Ruby source into SyntaxNode trees.

The produced trees follow the shape of the whitequark ``parser`` gem AST,
which is what the dependency visitor understands:

    (class (const nil "User") (const nil "ApplicationRecord") body)
    (send (const nil "Enemy") "health")
    (send nil "belongs_to" (sym "account"))

Grammar nodes without a dedicated converter keep their tree-sitter type as
``kind`` and their named children, so the visitor can still descend into
them.
"""

from __future__ import annotations

import logging
from typing import Callable

from dependency_explorer.models import NodeKind, SyntaxNode

try:
    from tree_sitter_language_pack import get_parser
except ImportError as _err:
    raise ImportError(
        "tree-sitter-language-pack is required. Install with: "
        "pip install tree-sitter-language-pack"
    ) from _err

logger = logging.getLogger(__name__)

_GRAMMAR = "ruby"

# Named nodes that never carry dependency information
_SKIP_TYPES = {"comment", "empty_statement", "heredoc_body", "uninterpreted"}


def _text(node) -> str:
    if node is None or node.text is None:
        return ""
    return node.text.decode("utf-8", errors="replace")


def _statements(nodes) -> list:
    out = []
    for child in nodes:
        if not child.is_named or child.type in _SKIP_TYPES:
            continue
        converted = _convert(child)
        if converted is not None:
            out.append(converted)
    return out


def _wrap(statements: list):
    """Collapse a statement list the way the parser gem does."""
    if not statements:
        return None
    if len(statements) == 1:
        return statements[0]
    return SyntaxNode(NodeKind.BEGIN, tuple(statements))


def _body(node, *field_names: str):
    """Resolve a declaration body.

    Newer grammars expose a ``body`` field (``body_statement``); older ones
    inline the statements after the header fields.
    """
    body = node.child_by_field_name("body")
    if body is not None:
        return _wrap(_statements(body.children))

    header_ids = set()
    for name in field_names:
        child = node.child_by_field_name(name)
        if child is not None:
            header_ids.add(child.id)
    return _wrap(_statements(c for c in node.children if c.id not in header_ids))


def _convert_program(node):
    return _wrap(_statements(node.children))


def _convert_body_statement(node):
    return _wrap(_statements(node.children))


def _convert_constant(node):
    return SyntaxNode(NodeKind.CONST, (None, _text(node)))


def _convert_scope_resolution(node):
    scope = node.child_by_field_name("scope")
    name = node.child_by_field_name("name")
    return SyntaxNode(
        NodeKind.CONST,
        (_convert(scope) if scope is not None else None, _text(name)),
    )


def _convert_class(node):
    name = node.child_by_field_name("name")
    superclass = node.child_by_field_name("superclass")
    parent = None
    if superclass is not None:
        expressions = _statements(superclass.children)
        parent = expressions[0] if expressions else None
    return SyntaxNode(
        NodeKind.CLASS,
        (_convert(name), parent, _body(node, "name", "superclass")),
    )


def _convert_module(node):
    name = node.child_by_field_name("name")
    return SyntaxNode(NodeKind.MODULE, (_convert(name), _body(node, "name")))


def _parameters(node):
    params = node.child_by_field_name("parameters")
    if params is None:
        return SyntaxNode(NodeKind.ARGS)
    return SyntaxNode(NodeKind.ARGS, tuple(_statements(params.children)))


def _convert_method(node):
    name = node.child_by_field_name("name")
    return SyntaxNode(
        NodeKind.DEF,
        (_text(name), _parameters(node), _body(node, "name", "parameters")),
    )


def _convert_singleton_method(node):
    obj = node.child_by_field_name("object")
    name = node.child_by_field_name("name")
    return SyntaxNode(
        NodeKind.DEFS,
        (
            _convert(obj) if obj is not None else None,
            _text(name),
            _parameters(node),
            _body(node, "object", "name", "parameters"),
        ),
    )


def _convert_call(node):
    receiver = node.child_by_field_name("receiver")
    method = node.child_by_field_name("method")
    arguments = node.child_by_field_name("arguments")
    block = node.child_by_field_name("block")

    args = _statements(arguments.children) if arguments is not None else []
    send = SyntaxNode(
        NodeKind.SEND,
        (
            _convert(receiver) if receiver is not None else None,
            _text(method) if method is not None else "call",
            *args,
        ),
    )
    if block is None:
        return send

    block_params = block.child_by_field_name("parameters")
    block_args = SyntaxNode(
        NodeKind.ARGS,
        tuple(_statements(block_params.children)) if block_params is not None else (),
    )
    return SyntaxNode(
        NodeKind.BLOCK,
        (send, block_args, _body(block, "parameters")),
    )


def _convert_symbol(node):
    return SyntaxNode(NodeKind.SYM, (_text(node).lstrip(":").rstrip(":"),))


def _convert_delimited_symbol(node):
    content = "".join(
        _text(c) for c in node.children if c.type == "string_content"
    )
    return SyntaxNode(NodeKind.SYM, (content,))


def _convert_string(node):
    parts: list = []
    for child in node.children:
        if child.type == "string_content":
            parts.append(_text(child))
        elif child.is_named and child.type not in _SKIP_TYPES:
            converted = _convert(child)
            if converted is not None:
                parts.append(converted)
    return SyntaxNode(NodeKind.STR, tuple(parts))


def _convert_integer(node):
    text = _text(node)
    try:
        return int(text, 0)
    except ValueError:
        return text


def _convert_float(node):
    text = _text(node).replace("_", "")
    try:
        return float(text)
    except ValueError:
        return text


def _convert_generic(node):
    named = [c for c in node.children if c.is_named]
    if not named:
        # Leaf tokens (identifiers, self, nil, ...) keep their source text
        return SyntaxNode(node.type, (_text(node),))
    return SyntaxNode(node.type, tuple(_statements(named)))


_CONVERTERS: dict[str, Callable] = {
    "program": _convert_program,
    "body_statement": _convert_body_statement,
    "constant": _convert_constant,
    "scope_resolution": _convert_scope_resolution,
    "class": _convert_class,
    "module": _convert_module,
    "method": _convert_method,
    "singleton_method": _convert_singleton_method,
    "call": _convert_call,
    "simple_symbol": _convert_symbol,
    "hash_key_symbol": _convert_symbol,
    "delimited_symbol": _convert_delimited_symbol,
    "string": _convert_string,
    "integer": _convert_integer,
    "float": _convert_float,
}


def _convert(node):
    if node is None:
        return None
    converter = _CONVERTERS.get(node.type, _convert_generic)
    return converter(node)


class RubyParser:
    """Parses Ruby source with tree-sitter and converts the result."""

    def __init__(self):
        self._parser_cache: dict[str, object] = {}

    def parse(self, source: str | bytes) -> SyntaxNode | None:
        """Parse source code; return ``None`` when the source is invalid."""
        source_bytes = source.encode("utf-8") if isinstance(source, str) else source
        tree = self._get_parser().parse(source_bytes)
        root = tree.root_node
        if root.has_error:
            logger.debug("tree-sitter reported syntax errors; treating source as unparseable")
            return None
        return _convert(root)

    def _get_parser(self):
        if _GRAMMAR not in self._parser_cache:
            self._parser_cache[_GRAMMAR] = get_parser(_GRAMMAR)
        return self._parser_cache[_GRAMMAR]


_default_parser = RubyParser()


def parse_ruby(source: str | bytes) -> SyntaxNode | None:
    """Parse Ruby source into a SyntaxNode tree, or ``None`` on failure."""
    return _default_parser.parse(source)
