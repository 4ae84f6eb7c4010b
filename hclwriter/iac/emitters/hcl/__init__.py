"""HCL emitter package: turns resource entries into formatted Terraform HCL.

Main Components:
- DocumentBuilder / hcl_print_document: group resources and drive conversion
- AstSanitizer: repair a JSON-origin syntax tree in place
- PATCH_RULES: ordered text fixups applied after rendering
- hcl_print: sanitize, render, patch and format a syntax tree
"""

from .document import (
    Document,
    DocumentBuilder,
    ResourceEntry,
    group_resources,
    hcl_print_document,
    tf_sanitize,
)
from .patches import PATCH_RULES, PatchRule, apply_patches
from .printer import hcl_print
from .sanitizer import AstSanitizer, sanitize

__all__ = [
    "AstSanitizer",
    "Document",
    "DocumentBuilder",
    "PATCH_RULES",
    "PatchRule",
    "ResourceEntry",
    "apply_patches",
    "group_resources",
    "hcl_print",
    "hcl_print_document",
    "sanitize",
    "tf_sanitize",
]
