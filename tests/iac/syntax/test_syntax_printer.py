"""Tests for rendering and canonical formatting in the HCL syntax layer."""

import pytest

from hclwriter.exceptions import HclRenderError, HclSyntaxError
from hclwriter.iac.syntax import (
    File,
    ListType,
    LiteralType,
    ObjectItem,
    ObjectKey,
    ObjectList,
    ObjectType,
    Pos,
    Token,
    TokenType,
    format_source,
    render,
)


def _key(text: str) -> ObjectKey:
    return ObjectKey(token=Token(TokenType.IDENT, text))


def _lit(text: str, token_type: TokenType = TokenType.STRING) -> LiteralType:
    return LiteralType(token=Token(token_type, text))


def _attr(name: str, val) -> ObjectItem:
    return ObjectItem(keys=[_key(name)], val=val, assign=Pos(line=1, column=1))


class TestRender:
    """Rendering prints the tree verbatim."""

    def test_block_with_attributes(self) -> None:
        """Multi-key items print as blocks, single-key items as assignments."""
        tree = File(
            node=ObjectList(
                items=[
                    ObjectItem(
                        keys=[_key("resource"), _key('"aws_vpc"'), _key('"main"')],
                        val=ObjectType(
                            list=ObjectList(
                                items=[
                                    _attr("cidr_block", _lit('"10.0.0.0/16"')),
                                    _attr("enable_dns", _lit("true", TokenType.BOOL)),
                                ]
                            )
                        ),
                        assign=Pos(line=1, column=1),
                    )
                ]
            )
        )

        assert render(tree) == (
            'resource "aws_vpc" "main" {\n'
            '  cidr_block = "10.0.0.0/16"\n'
            "  enable_dns = true\n"
            "}\n"
        )

    def test_no_equals_without_assign_position(self) -> None:
        """Items whose assign position is unset print without '='."""
        item = ObjectItem(keys=[_key('"a"')], val=_lit('"b"'))
        assert render(File(node=ObjectList(items=[item]))) == '"a" "b"\n'

    def test_top_level_items_separated_by_blank_line(self) -> None:
        tree = File(node=ObjectList(items=[_attr("a", _lit("1")), _attr("b", _lit("2"))]))
        assert render(tree) == "a = 1\n\nb = 2\n"

    def test_nested_multiline_item_gets_blank_line(self) -> None:
        """A nested block after the first item is preceded by a blank line."""
        tags = ObjectType(list=ObjectList(items=[_attr("Name", _lit('"web"'))]))
        body = ObjectType(list=ObjectList(items=[_attr("ami", _lit('"x"')), _attr("tags", tags)]))
        tree = File(node=ObjectList(items=[_attr("web", body)]))

        assert render(tree) == (
            "web = {\n"
            '  ami = "x"\n'
            "\n"
            "  tags = {\n"
            '    Name = "web"\n'
            "  }\n"
            "}\n"
        )

    def test_lists_and_empty_object(self) -> None:
        """Scalar lists print inline, empty objects as {}."""
        tree = File(
            node=ObjectList(
                items=[
                    _attr("zones", ListType(items=[_lit('"a"'), _lit('"b"')])),
                    _attr("features", ObjectType()),
                    _attr("empty", ListType()),
                ]
            )
        )
        assert render(tree) == 'zones = ["a", "b"]\n\nfeatures = {}\n\nempty = []\n'

    def test_list_of_objects_prints_one_per_line(self) -> None:
        inner = ObjectType(list=ObjectList(items=[_attr("a", _lit("1"))]))
        tree = File(node=ObjectList(items=[_attr("x", ListType(items=[inner, _lit('"s"')]))]))

        assert render(tree) == "x = [\n  {\n    a = 1\n  },\n  \"s\",\n]\n"

    def test_heredoc_is_not_indented(self) -> None:
        heredoc = _lit("<<EOF\nline one\nEOF", TokenType.HEREDOC)
        body = ObjectType(list=ObjectList(items=[_attr("script", heredoc)]))
        tree = File(node=ObjectList(items=[_attr("x", body)]))

        assert render(tree) == "x = {\n  script = <<EOF\nline one\nEOF\n}\n"

    def test_unknown_node_raises(self) -> None:
        tree = File(node=ObjectList(items=[_attr("x", "not a node")]))
        with pytest.raises(HclRenderError, match="unsupported value node: str"):
            render(tree)


class TestFormatSource:
    """Canonical formatting of rendered text."""

    def test_aligns_consecutive_assignments(self) -> None:
        src = 'resource "a" "b" {\nami = "x"\ninstance_type = "y"\n}\n'
        assert format_source(src) == (
            b'resource "a" "b" {\n'
            b'  ami           = "x"\n'
            b'  instance_type = "y"\n'
            b"}\n"
        )

    def test_block_opener_breaks_alignment_run(self) -> None:
        src = "x {\n  a = 1\n  tags = {\n    Name = 2\n  }\n  long_name = 3\n}"
        assert format_source(src) == (
            b"x {\n"
            b"  a = 1\n"
            b"  tags = {\n"
            b"    Name = 2\n"
            b"  }\n"
            b"  long_name = 3\n"
            b"}\n"
        )

    def test_collapses_blank_lines_and_trailing_whitespace(self) -> None:
        src = "\n\na = 1   \n\n\n\nb = 2\n\n\n"
        assert format_source(src) == b"a = 1\n\nb = 2\n"

    def test_heredoc_body_untouched(self) -> None:
        src = 'x {\npolicy = <<EOF\n{\n  "a": 1\n}\nEOF\nname = "n"\n}\n'
        assert format_source(src) == (
            b"x {\n"
            b"  policy = <<EOF\n"
            b"{\n"
            b'  "a": 1\n'
            b"}\n"
            b"EOF\n"
            b'  name = "n"\n'
            b"}\n"
        )

    def test_interpolation_quotes_do_not_end_string(self) -> None:
        src = 'a = "${file("policy.json")}"\n'
        assert format_source(src) == b'a = "${file("policy.json")}"\n'

    def test_braces_in_strings_and_comments_ignored(self) -> None:
        src = 'a = "{"  # }\nb = "]"\n'
        assert format_source(src) == b'a = "{"  # }\nb = "]"\n'

    def test_unterminated_string(self) -> None:
        with pytest.raises(HclSyntaxError, match="literal not terminated") as exc_info:
            format_source('a = 1\nb = "oops\n')
        assert exc_info.value.line == 2

    def test_unterminated_heredoc(self) -> None:
        with pytest.raises(HclSyntaxError, match="heredoc 'EOF' not terminated"):
            format_source("x {\n  s = <<EOF\necho hi\n}\n")

    def test_heredoc_marker_must_end_the_line(self) -> None:
        with pytest.raises(HclSyntaxError, match="heredoc expected newline") as exc_info:
            format_source("x {\n  note = <<not a heredoc\n}\n")
        assert (exc_info.value.line, exc_info.value.column) == (2, 13)

    def test_heredoc_marker_required(self) -> None:
        with pytest.raises(HclSyntaxError, match="heredoc expected identifier"):
            format_source("a = <<\n")

    def test_shift_inside_string_is_not_a_heredoc(self) -> None:
        assert format_source('a = "x << y"\n') == b'a = "x << y"\n'

    def test_unexpected_closing_brace(self) -> None:
        with pytest.raises(HclSyntaxError, match="unexpected"):
            format_source("a = 1\n}\n")

    def test_mismatched_bracket(self) -> None:
        with pytest.raises(HclSyntaxError, match="unexpected"):
            format_source("a = [1, 2}\n")

    def test_unclosed_block(self) -> None:
        with pytest.raises(HclSyntaxError, match="unclosed") as exc_info:
            format_source('resource "a" "b" {\n  x = 1\n')
        assert exc_info.value.line == 1
