"""Whole-document text patches applied between rendering and formatting.

The renderer prints token text verbatim, so a few artifacts of the JSON
round trip survive into its output. Rather than special-casing them inside
the renderer, each one is corrected here by a literal substring replacement.
The rules run in the order listed; the order is part of their behavior.
"""

from dataclasses import dataclass
from typing import Iterable, Tuple


@dataclass(frozen=True)
class PatchRule:
    """A literal ``pattern`` -> ``replacement`` substitution over the whole text."""

    name: str
    pattern: str
    replacement: str

    def apply(self, text: str) -> str:
        return text.replace(self.pattern, self.replacement)


WHITESPACE_RULES: Tuple[PatchRule, ...] = (
    # Remove extra whitespace...
    PatchRule("collapse-blank-lines", "\n\n", "\n"),
    # ...but leave whitespace between resources
    PatchRule("separate-resource-blocks", "}\nresource", "}\n\nresource"),
)

ESCAPING_RULES: Tuple[PatchRule, ...] = (
    # Quotes are not escaped inside interpolated function calls, e.g. file("x")
    PatchRule("unescape-quote-after-paren", '(\\"', '("'),
    PatchRule("unescape-quote-before-paren", '\\")', '")'),
    # < and > need no escaping
    PatchRule("unescape-less-than", "\\u003c", "<"),
    PatchRule("unescape-greater-than", "\\u003e", ">"),
)

PATCH_RULES: Tuple[PatchRule, ...] = WHITESPACE_RULES + ESCAPING_RULES


def apply_patches(text: str, rules: Iterable[PatchRule] = PATCH_RULES) -> str:
    for rule in rules:
        text = rule.apply(text)
    return text


__all__ = [
    "ESCAPING_RULES",
    "PATCH_RULES",
    "PatchRule",
    "WHITESPACE_RULES",
    "apply_patches",
]
