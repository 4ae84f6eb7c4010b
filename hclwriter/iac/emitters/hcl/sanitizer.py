"""AST sanitizer for HCL trees parsed from JSON.

A tree produced by the JSON front end prints as literal JSON: every key is
quoted, heredoc strings are single-line escaped strings, and no item carries
an assignment position. ``AstSanitizer`` rewrites the tree in place so it
prints as idiomatic HCL instead.
"""

import json
from typing import Any

import structlog

from ...syntax import (
    File,
    ListType,
    LiteralType,
    ObjectItem,
    ObjectKey,
    ObjectList,
    ObjectType,
    Pos,
    TokenType,
)

logger = structlog.get_logger(__name__)

SAFE_CHARS = frozenset(
    "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789-_"
)


def is_safe_identifier(text: str) -> bool:
    """Return True if ``text`` can be printed as a bare identifier."""
    return bool(text) and all(c in SAFE_CHARS for c in text)


class AstSanitizer:
    """Fixes up an HCL syntax tree produced by the JSON parser.

    The sanitizer is the only writer of the tree while it runs; it never
    raises, and anything it cannot repair is left as it was. The walk keeps
    its own stack, so nesting depth is bounded by memory only.

    Unlike the HCL1 visitor this walk also enters list elements, so objects
    nested in lists get their keys unquoted and their heredocs restored too.
    """

    def __init__(self, heredoc_json_indent: int = 2) -> None:
        self.heredoc_json_indent = heredoc_json_indent

    def visit(self, node: Any) -> None:
        pending = [node]
        while pending:
            node = pending.pop()
            if isinstance(node, File):
                pending.append(node.node)
            elif isinstance(node, ObjectList):
                pending.extend(reversed(node.items))
            elif isinstance(node, ObjectItem):
                self.visit_object_item(node)
                pending.append(node.val)
            elif isinstance(node, (ObjectKey, LiteralType)):
                pass
            elif isinstance(node, ListType):
                pending.extend(reversed(node.items))
            elif isinstance(node, ObjectType):
                pending.append(node.list)
            else:
                logger.warning("unknown node type", node_type=type(node).__name__)

    def visit_object_item(self, item: ObjectItem) -> None:
        """Repair a single item; its value is left for ``visit`` to descend into."""
        if item.keys:
            self._unquote_key(item.keys[0])

        val = item.val
        if isinstance(val, LiteralType) and val.token.text.startswith('"<<'):
            self._restore_heredoc(val)

        # The JSON front end never records "=", and the renderer only prints
        # it for items with a valid assign position.
        item.assign = Pos(line=1, column=1)

    def _unquote_key(self, key: ObjectKey) -> None:
        text = key.token.text
        if len(text) >= 2 and text[0] == '"' and text[-1] == '"':
            inner = text[1:-1]
            if is_safe_identifier(inner):
                key.token.text = inner

    def _restore_heredoc(self, literal: LiteralType) -> None:
        text = literal.token.text[1:-1]
        text = text.replace("\\n", "\n").replace("\\t", "")
        literal.token.text = text
        literal.token.type = TokenType.HEREDOC

        lines = text.split("\n")
        body = "\n".join(lines[1:-1]).replace('\\"', '"')
        try:
            data = json.loads(body)
        except ValueError:
            return
        if not isinstance(data, dict):
            return

        pretty = json.dumps(
            data,
            indent=self.heredoc_json_indent,
            sort_keys=True,
            ensure_ascii=False,
        )
        literal.token.text = "\n".join([lines[0], *pretty.split("\n"), lines[-1]])
        logger.debug("re-indented heredoc JSON body", marker=lines[0])


def sanitize(node: Any, heredoc_json_indent: int = 2) -> None:
    """Sanitize ``node`` in place. See ``AstSanitizer``."""
    AstSanitizer(heredoc_json_indent=heredoc_json_indent).visit(node)


__all__ = ["AstSanitizer", "SAFE_CHARS", "is_safe_identifier", "sanitize"]
