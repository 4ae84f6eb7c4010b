"""Rendering and canonical formatting of HCL text.

``render`` prints a syntax tree exactly as it stands, token text included, so
any repair work has to happen on the tree before it gets here. ``format_source``
re-indents rendered text, aligns ``=`` across consecutive single-line
assignments, and rejects text that is not lexically well formed.
"""

import re
from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

from ...exceptions import HclRenderError, HclSyntaxError
from .nodes import (
    File,
    ListType,
    LiteralType,
    Node,
    ObjectItem,
    ObjectKey,
    ObjectList,
    ObjectType,
    TokenType,
)

INDENT = "  "

_HEREDOC_OPEN = re.compile(r"<<(-?)([A-Za-z_][A-Za-z0-9_-]*)")
_CLOSERS = {"}": "{", "]": "["}


def _is_multiline(node: Node) -> bool:
    if isinstance(node, ObjectType):
        return bool(node.list.items)
    if isinstance(node, ListType):
        return not _is_inline_list(node)
    if isinstance(node, LiteralType):
        return node.token.type == TokenType.HEREDOC
    return False


def _is_inline_list(node: ListType) -> bool:
    return all(
        isinstance(e, LiteralType) and e.token.type != TokenType.HEREDOC
        for e in node.items
    )


def _render_value(node: Node, level: int) -> str:
    if isinstance(node, LiteralType):
        return node.token.text
    if isinstance(node, ObjectType):
        if not node.list.items:
            return "{}"
        return "{\n" + _render_items(node.list.items, level + 1) + "\n" + INDENT * level + "}"
    if isinstance(node, ListType):
        if _is_inline_list(node):
            return "[" + ", ".join(e.token.text for e in node.items) + "]"
        pad = INDENT * (level + 1)
        body = "".join(pad + _render_value(e, level + 1) + ",\n" for e in node.items)
        return "[\n" + body + INDENT * level + "]"
    raise HclRenderError(
        f"unsupported value node: {type(node).__name__}", node_type=type(node).__name__
    )


def _render_item(item: ObjectItem, level: int) -> str:
    if not isinstance(item, ObjectItem):
        raise HclRenderError(
            f"unsupported list item: {type(item).__name__}", node_type=type(item).__name__
        )
    parts = []
    for key in item.keys:
        if not isinstance(key, ObjectKey):
            raise HclRenderError(
                f"unsupported key node: {type(key).__name__}", node_type=type(key).__name__
            )
        parts.append(key.token.text)
    head = " ".join(parts)
    if item.assign.is_valid() and len(item.keys) == 1:
        head += " ="
    return INDENT * level + head + " " + _render_value(item.val, level)


def _render_items(items: List[ObjectItem], level: int) -> str:
    chunks = []
    for i, item in enumerate(items):
        rendered = _render_item(item, level)
        if i > 0 and _is_multiline(item.val):
            rendered = "\n" + rendered
        chunks.append(rendered)
    return "\n".join(chunks)


def render(node: Node) -> str:
    """Render a syntax tree to HCL text.

    Top-level items are separated by a blank line; nested multi-line items
    are preceded by one. The text ends with a newline.

    Raises:
        HclRenderError: If the tree holds a node outside the known node set
    """
    if isinstance(node, File):
        node = node.node
    if isinstance(node, ObjectList):
        return "\n\n".join(_render_item(item, 0) for item in node.items) + "\n"
    if isinstance(node, ObjectItem):
        return _render_item(node, 0) + "\n"
    if isinstance(node, ObjectKey):
        return node.token.text + "\n"
    return _render_value(node, 0) + "\n"


@dataclass
class _Line:
    depth: int
    text: str
    key: Optional[str] = None
    value: Optional[str] = None
    raw: bool = False


def _scan_line(
    text: str, lineno: int, stack: List[Tuple[str, int, int]]
) -> Tuple[Optional[int], Optional[Tuple[str, bool]]]:
    """Lex one stripped line, updating the bracket stack.

    Returns the offset of the first top-level ``=`` and the heredoc marker
    opened at the end of the line, if any. Trailing comments are not lexed.

    Raises:
        HclSyntaxError: On an unterminated string, a stray closer, or a
            ``<<`` that does not open a heredoc at the end of the line
    """
    depth_at_start = len(stack)
    heredoc: Optional[Tuple[str, bool]] = None
    assign_at: Optional[int] = None
    i = 0
    while i < len(text):
        ch = text[i]
        if ch == '"':
            i = _skip_string(text, i, lineno)
            continue
        if ch == "#" or text.startswith("//", i):
            break
        if ch == "<" and text.startswith("<<", i):
            heredoc = _heredoc_opener(text, i, lineno)
            break
        if ch in "{[":
            stack.append((ch, lineno, i + 1))
        elif ch in _CLOSERS:
            if not stack or stack[-1][0] != _CLOSERS[ch]:
                raise HclSyntaxError(f"unexpected {ch!r}", line=lineno, column=i + 1)
            stack.pop()
        elif ch == "=" and assign_at is None and len(stack) == depth_at_start:
            if not text.startswith("==", i) and (i == 0 or text[i - 1] not in "!<>="):
                assign_at = i
        i += 1

    return assign_at, heredoc


def _heredoc_opener(text: str, start: int, lineno: int) -> Tuple[str, bool]:
    """Return the (marker, indented) pair of the heredoc opened at ``start``."""
    match = _HEREDOC_OPEN.match(text, start)
    if match is None:
        raise HclSyntaxError(
            "heredoc expected identifier", line=lineno, column=start + 3
        )
    if match.end() != len(text):
        raise HclSyntaxError(
            "heredoc expected newline", line=lineno, column=match.end() + 1
        )
    return match.group(2), match.group(1) == "-"


def _skip_string(text: str, start: int, lineno: int) -> int:
    """Return the offset just past the string literal starting at ``start``.

    Quotes inside a ``${ ... }`` interpolation do not end the string.
    """
    braces = 0
    i = start + 1
    while i < len(text):
        ch = text[i]
        if ch == "\\":
            i += 2
            continue
        if braces == 0 and ch == '"':
            return i + 1
        if braces == 0 and ch == "$" and text.startswith("${", i):
            braces = 1
            i += 2
            continue
        if braces > 0 and ch == "{":
            braces += 1
        elif braces > 0 and ch == "}":
            braces -= 1
        i += 1
    raise HclSyntaxError("literal not terminated", line=lineno, column=start + 1)


def format_source(src: Union[str, bytes]) -> bytes:
    """Apply canonical style to HCL text.

    Raises:
        HclSyntaxError: On unterminated strings or heredocs and on unbalanced
            braces or brackets
    """
    if isinstance(src, bytes):
        src = src.decode("utf-8")

    lines: List[_Line] = []
    stack: List[Tuple[str, int, int]] = []
    heredoc: Optional[Tuple[str, bool]] = None
    heredoc_line = 0

    for lineno, line in enumerate(src.split("\n"), start=1):
        if heredoc is not None:
            marker, indented = heredoc
            lines.append(_Line(depth=0, text=line, raw=True))
            if (line.strip() if indented else line) == marker:
                heredoc = None
            continue

        stripped = line.strip()
        if not stripped:
            if lines and lines[-1].text != "":
                lines.append(_Line(depth=0, text=""))
            continue

        depth = len(stack)
        if stripped[0] in _CLOSERS:
            depth -= 1
        assign_at, heredoc = _scan_line(stripped, lineno, stack)
        if heredoc is not None:
            heredoc_line = lineno

        entry = _Line(depth=max(depth, 0), text=stripped)
        if assign_at is not None:
            key = stripped[:assign_at].rstrip()
            value = stripped[assign_at + 1 :].strip()
            # Only assignments that open nothing are aligned with their neighbours.
            if len(stack) == depth and heredoc is None:
                entry.key, entry.value = key, value
            else:
                entry.text = f"{key} = {value}"
        lines.append(entry)

    if heredoc is not None:
        raise HclSyntaxError(
            f"heredoc {heredoc[0]!r} not terminated", line=heredoc_line, column=1
        )
    if stack:
        opener, line_opened, column = stack[-1]
        raise HclSyntaxError(f"unclosed {opener!r}", line=line_opened, column=column)

    _align(lines)

    out = []
    for entry in lines:
        if entry.raw or entry.text == "":
            out.append(entry.text)
        else:
            out.append(INDENT * entry.depth + entry.text)
    while out and out[-1] == "":
        out.pop()
    return ("\n".join(out) + "\n").encode("utf-8")


def _align(lines: List[_Line]) -> None:
    run: List[_Line] = []

    def flush() -> None:
        width = max((len(e.key) for e in run), default=0)
        for e in run:
            e.text = f"{e.key.ljust(width)} = {e.value}"
        run.clear()

    for entry in lines:
        if entry.key is not None and (not run or run[0].depth == entry.depth):
            run.append(entry)
            continue
        flush()
        if entry.key is not None:
            run.append(entry)
    flush()


__all__ = ["format_source", "render"]
