"""HCL printer: sanitize, render, patch and format a syntax tree.

Rendering goes through the syntax layer untouched; the known artifacts of
the JSON round trip are corrected afterwards by ``patches.PATCH_RULES``.
"""

import sys
from typing import Any, Optional, TextIO

import structlog

from ....config_manager import PrinterConfig
from ....exceptions import FormatError, HclRenderError, HclSyntaxError, RenderError
from ...syntax import format_source, render
from .patches import PATCH_RULES, apply_patches
from .sanitizer import AstSanitizer

logger = structlog.get_logger(__name__)


def dump_numbered(text: str, stream: TextIO) -> None:
    """Write ``text`` to ``stream`` with 1-based line numbers."""
    for i, line in enumerate(text.split("\n"), start=1):
        stream.write(f"{i}\t{line}\n")
    stream.flush()


def hcl_print(
    node: Any,
    config: Optional[PrinterConfig] = None,
    diagnostic_stream: Optional[TextIO] = None,
) -> bytes:
    """Print a syntax tree parsed from JSON as formatted HCL.

    The tree is sanitized in place first and must not be reused afterwards.

    Args:
        node: Syntax tree, normally the File returned by ``parse_json``
        config: Printer configuration; defaults are read from the environment
        diagnostic_stream: Where invalid output is dumped (stderr by default)

    Returns:
        Formatted HCL as UTF-8 bytes

    Raises:
        RenderError: If the tree cannot be rendered or is nested too deeply
        FormatError: If the rendered text fails canonical formatting
    """
    config = config or PrinterConfig()

    AstSanitizer(heredoc_json_indent=config.heredoc_json_indent).visit(node)

    try:
        text = render(node)
    except HclRenderError as e:
        raise RenderError(f"error writing document: {e.message}", cause=e) from e
    except RecursionError as e:
        raise RenderError(
            "error writing document: nesting too deep to render", cause=e
        ) from e

    text = apply_patches(text, PATCH_RULES)

    try:
        formatted = format_source(text)
    except HclSyntaxError as e:
        logger.error("invalid HCL produced", error=e.message, lines=text.count("\n") + 1)
        if config.dump_invalid_output:
            stream = diagnostic_stream or sys.stderr
            stream.write("Invalid HCL follows:\n")
            dump_numbered(text, stream)
        raise FormatError(f"error formatting document: {e.message}", cause=e) from e

    return formatted


__all__ = ["dump_numbered", "hcl_print"]
