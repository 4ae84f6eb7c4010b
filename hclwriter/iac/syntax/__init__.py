"""HCL syntax layer: node types, JSON front end, renderer and formatter.

Usage:
    from hclwriter.iac.syntax import format_source, parse_json, render

    tree = parse_json('{"resource": {"aws_instance": {"web": {"ami": "x"}}}}')
    text = render(tree)
    formatted = format_source(text)
"""

from .json_parser import flatten_objects, parse_json
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
from .printer import format_source, render

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
    "flatten_objects",
    "format_source",
    "parse_json",
    "render",
]
