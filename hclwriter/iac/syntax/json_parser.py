"""JSON front end for the HCL syntax tree.

Parses JSON text into the same node types HCL source produces, keeping every
token's raw source text (string tokens keep their quotes and escapes), then
flattens nested objects into multi-key items the way HCL's own JSON parser
does, so ``{"resource": {"aws_instance": {"web": {...}}}}`` becomes a single
``resource "aws_instance" "web"`` item.
"""

import re
from typing import Iterator, List, Optional, Union

from ...exceptions import HclSyntaxError
from .nodes import (
    File,
    ListType,
    LiteralType,
    Node,
    ObjectItem,
    ObjectKey,
    ObjectList,
    ObjectType,
    Pos,
    Token,
    TokenType,
)

_SCANNER = re.compile(
    r"""
    (?P<ws>[ \t\r\n]+)
    |(?P<string>"(?:[^"\\\x00-\x1f]|\\["\\/bfnrt]|\\u[0-9a-fA-F]{4})*")
    |(?P<number>-?(?:0|[1-9][0-9]*)(?P<frac>\.[0-9]+)?(?P<exp>[eE][+-]?[0-9]+)?)
    |(?P<keyword>true|false|null)
    |(?P<punct>[{}\[\]:,])
    """,
    re.VERBOSE,
)

# Internal token kinds for punctuation; literal kinds use TokenType.
_LBRACE, _RBRACE, _LBRACK, _RBRACK, _COLON, _COMMA, _EOF = (
    "{",
    "}",
    "[",
    "]",
    ":",
    ",",
    "EOF",
)


class _Lexeme:
    __slots__ = ("kind", "text", "pos")

    def __init__(self, kind: Union[str, TokenType], text: str, pos: Pos) -> None:
        self.kind = kind
        self.text = text
        self.pos = pos


def _scan(src: str) -> Iterator[_Lexeme]:
    offset = 0
    line, column = 1, 1
    while offset < len(src):
        match = _SCANNER.match(src, offset)
        if match is None:
            if src[offset] == '"':
                raise HclSyntaxError("literal not terminated", line=line, column=column)
            raise HclSyntaxError(
                f"illegal char {src[offset]!r}", line=line, column=column
            )
        text = match.group(0)
        pos = Pos(line=line, column=column)
        if match.lastgroup == "string":
            yield _Lexeme(TokenType.STRING, text, pos)
        elif match.lastgroup in ("number", "frac", "exp"):
            is_float = match.group("frac") or match.group("exp")
            yield _Lexeme(TokenType.FLOAT if is_float else TokenType.NUMBER, text, pos)
        elif match.lastgroup == "keyword":
            kind = TokenType.NULL if text == "null" else TokenType.BOOL
            yield _Lexeme(kind, text, pos)
        elif match.lastgroup == "punct":
            yield _Lexeme(text, text, pos)

        newlines = text.count("\n")
        if newlines:
            line += newlines
            column = len(text) - text.rfind("\n")
        else:
            column += len(text)
        offset = match.end()
    yield _Lexeme(_EOF, "", Pos(line=line, column=column))


class _Parser:
    def __init__(self, src: str) -> None:
        self._lexemes = _scan(src)
        self._tok = next(self._lexemes)

    def _advance(self) -> _Lexeme:
        tok = self._tok
        self._tok = next(self._lexemes)
        return tok

    def _expect(self, kind: str, what: str) -> _Lexeme:
        if self._tok.kind != kind:
            raise self._unexpected(what)
        return self._advance()

    def _unexpected(self, what: str) -> HclSyntaxError:
        found = "end of input" if self._tok.kind == _EOF else repr(self._tok.text)
        return HclSyntaxError(
            f"expected {what}, got {found}",
            line=self._tok.pos.line,
            column=self._tok.pos.column,
        )

    def parse_file(self) -> File:
        if self._tok.kind != _LBRACE:
            raise self._unexpected("'{' at top level")
        obj = self._object()
        if self._tok.kind != _EOF:
            raise self._unexpected("end of input")
        return File(node=obj.list)

    def _object(self) -> ObjectType:
        self._expect(_LBRACE, "'{'")
        items: List[ObjectItem] = []
        if self._tok.kind == _RBRACE:
            self._advance()
            return ObjectType(list=ObjectList(items=items))
        while True:
            key = self._expect(TokenType.STRING, "object key")
            self._expect(_COLON, "':'")
            val = self._value()
            items.append(
                ObjectItem(
                    keys=[ObjectKey(token=Token(TokenType.STRING, key.text, key.pos))],
                    val=val,
                )
            )
            if self._tok.kind == _COMMA:
                self._advance()
                continue
            self._expect(_RBRACE, "',' or '}'")
            return ObjectType(list=ObjectList(items=items))

    def _list(self) -> ListType:
        self._expect(_LBRACK, "'['")
        elements: List[Node] = []
        if self._tok.kind == _RBRACK:
            self._advance()
            return ListType(items=elements)
        while True:
            elements.append(self._value())
            if self._tok.kind == _COMMA:
                self._advance()
                continue
            self._expect(_RBRACK, "',' or ']'")
            return ListType(items=elements)

    def _value(self) -> Node:
        kind = self._tok.kind
        if kind == _LBRACE:
            return self._object()
        if kind == _LBRACK:
            return self._list()
        if isinstance(kind, TokenType):
            tok = self._advance()
            return LiteralType(token=Token(kind, tok.text, tok.pos))
        raise self._unexpected("value")


def _expand(item: ObjectItem) -> List[ObjectItem]:
    val = item.val
    if isinstance(val, ObjectType):
        members = val.list.items
        if members and all(isinstance(m.val, ObjectType) for m in members):
            flattened: List[ObjectItem] = []
            for member in members:
                flattened.extend(
                    _expand(
                        ObjectItem(
                            keys=item.keys + member.keys,
                            val=member.val,
                            assign=item.assign,
                        )
                    )
                )
            return flattened
    elif isinstance(val, ListType):
        if val.items and all(isinstance(e, ObjectType) for e in val.items):
            flattened = []
            for element in val.items:
                flattened.extend(
                    _expand(ObjectItem(keys=item.keys, val=element, assign=item.assign))
                )
            return flattened
    return [item]


def flatten_objects(node: Optional[Node]) -> None:
    """Rewrite every object list in ``node`` so nested blocks become multi-key items."""
    if isinstance(node, File):
        flatten_objects(node.node)
    elif isinstance(node, ObjectList):
        items: List[ObjectItem] = []
        for item in node.items:
            items.extend(_expand(item))
        node.items = items
        for item in node.items:
            flatten_objects(item.val)
    elif isinstance(node, ObjectType):
        flatten_objects(node.list)
    elif isinstance(node, ListType):
        for element in node.items:
            flatten_objects(element)


def parse_json(src: Union[str, bytes]) -> File:
    """Parse JSON source into a flattened HCL syntax tree.

    Args:
        src: JSON text whose top-level value is an object

    Returns:
        File node wrapping the top-level object list

    Raises:
        HclSyntaxError: If the source is not valid JSON or not an object
    """
    if isinstance(src, bytes):
        try:
            src = src.decode("utf-8")
        except UnicodeDecodeError as e:
            raise HclSyntaxError(f"invalid UTF-8 input: {e}", cause=e) from e
    tree = _Parser(src).parse_file()
    flatten_objects(tree)
    return tree


__all__ = ["flatten_objects", "parse_json"]
