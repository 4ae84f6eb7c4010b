"""Syntax tree node types for HCL documents.

The node set is closed: File, ObjectList, ObjectItem, ObjectKey, LiteralType,
ListType and ObjectType. Code that dispatches over nodes should handle each
of these explicitly and treat anything else as unknown.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Union


class TokenType(Enum):
    """Lexical classification of key and literal tokens."""

    IDENT = "IDENT"
    NUMBER = "NUMBER"
    FLOAT = "FLOAT"
    BOOL = "BOOL"
    NULL = "NULL"
    STRING = "STRING"
    HEREDOC = "HEREDOC"


@dataclass
class Pos:
    """Source position. A zero line means the position was never set."""

    line: int = 0
    column: int = 0

    def is_valid(self) -> bool:
        return self.line > 0


@dataclass
class Token:
    type: TokenType
    text: str
    pos: Pos = field(default_factory=Pos)


@dataclass
class ObjectKey:
    token: Token


@dataclass
class LiteralType:
    token: Token


@dataclass
class ListType:
    items: List["Node"] = field(default_factory=list)


@dataclass
class ObjectItem:
    """A key/value pair.

    ``keys`` holds more than one key for flattened blocks such as
    ``resource "aws_instance" "web" { ... }``. ``assign`` marks where the
    ``=`` operator sits; the renderer prints ``=`` only when it is valid.
    """

    keys: List[ObjectKey]
    val: "Node"
    assign: Pos = field(default_factory=Pos)


@dataclass
class ObjectList:
    items: List[ObjectItem] = field(default_factory=list)


@dataclass
class ObjectType:
    list: ObjectList = field(default_factory=ObjectList)


@dataclass
class File:
    node: ObjectList = field(default_factory=ObjectList)


Node = Union[File, ObjectList, ObjectItem, ObjectKey, LiteralType, ListType, ObjectType]

__all__ = [
    "File",
    "ListType",
    "LiteralType",
    "Node",
    "ObjectItem",
    "ObjectKey",
    "ObjectList",
    "ObjectType",
    "Pos",
    "Token",
    "TokenType",
]
