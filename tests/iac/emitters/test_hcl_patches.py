"""Tests for the ordered text patch rules."""

from hclwriter.iac.emitters.hcl.patches import (
    ESCAPING_RULES,
    PATCH_RULES,
    WHITESPACE_RULES,
    PatchRule,
    apply_patches,
)


class TestPatchRules:
    def test_rule_order(self) -> None:
        """Whitespace rules run before escaping rules, collapse before separate."""
        assert PATCH_RULES == WHITESPACE_RULES + ESCAPING_RULES
        assert [r.name for r in WHITESPACE_RULES] == [
            "collapse-blank-lines",
            "separate-resource-blocks",
        ]

    def test_single_rule_apply(self) -> None:
        rule = PatchRule("x", "a", "b")
        assert rule.apply("banana") == "bbnbnb"

    def test_blank_lines_only_between_resources(self) -> None:
        text = (
            'provider "aws" {\n  region = "x"\n}\n\n'
            'resource "a" "b" {\n  x = 1\n\n  y = {\n    z = 2\n  }\n}\n\n'
            'resource "c" "d" {\n  w = 3\n}\n'
        )
        assert apply_patches(text, WHITESPACE_RULES) == (
            'provider "aws" {\n  region = "x"\n}\n\n'
            'resource "a" "b" {\n  x = 1\n  y = {\n    z = 2\n  }\n}\n\n'
            'resource "c" "d" {\n  w = 3\n}\n'
        )

    def test_nested_resource_attribute_not_separated(self) -> None:
        """Only a top-level 'resource' right after '}' gets a blank line."""
        text = "x {\n  a = {\n  }\n  resource = 1\n}\n"
        assert apply_patches(text) == text

    def test_quotes_around_parentheses_unescaped(self) -> None:
        text = 'user_data = "${file(\\"init.sh\\")}"'
        assert apply_patches(text) == 'user_data = "${file("init.sh")}"'

    def test_angle_bracket_escapes_replaced(self) -> None:
        text = 'condition = "a \\u003c b \\u003e c"'
        assert apply_patches(text, ESCAPING_RULES) == 'condition = "a < b > c"'

    def test_no_rules_is_identity(self) -> None:
        assert apply_patches("a\n\nb", ()) == "a\n\nb"
