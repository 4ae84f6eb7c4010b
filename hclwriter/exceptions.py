"""
Custom Exception Hierarchy for hclwriter

This module provides the exception hierarchy used across the syntax layer and
the HCL emitters, carrying error codes and context so that failures can be
logged and inspected without string parsing.
"""

from typing import Any, Dict, Optional


class HclWriterError(Exception):
    """
    Base exception class for all hclwriter related errors.

    Provides structured error information including context, error codes,
    and optional recovery suggestions.
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
        recovery_suggestion: Optional[str] = None,
    ) -> None:
        """
        Initialize the base exception.

        Args:
            message: Human-readable error message
            error_code: Optional error code for programmatic handling
            context: Optional dictionary with error context
            cause: Optional underlying exception that caused this error
            recovery_suggestion: Optional suggestion for error recovery
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.context = context or {}
        self.cause = cause
        self.recovery_suggestion = recovery_suggestion

    def __str__(self) -> str:
        """Return a formatted error message with context."""
        result = self.message
        if self.error_code:
            result = f"[{self.error_code}] {result}"
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            result += f" (context: {context_str})"
        if self.cause:
            result += f" (caused by: {self.cause})"
        if self.recovery_suggestion:
            result += f" (suggestion: {self.recovery_suggestion})"
        return result

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code,
            "context": self.context,
            "cause": str(self.cause) if self.cause else None,
            "recovery_suggestion": self.recovery_suggestion,
        }


# Syntax layer exceptions
class HclSyntaxError(HclWriterError):
    """Raised when JSON or HCL source text cannot be scanned or parsed."""

    def __init__(
        self,
        message: str,
        line: Optional[int] = None,
        column: Optional[int] = None,
        **kwargs: Any,
    ) -> None:
        self.line = line
        self.column = column
        if line is not None:
            message = f"At {line}:{column or 0}: {message}"
        kwargs.setdefault("error_code", "HCL_SYNTAX_ERROR")
        super().__init__(message, **kwargs)


class HclRenderError(HclWriterError):
    """Raised when a syntax tree contains a node the renderer cannot print."""

    def __init__(self, message: str, node_type: Optional[str] = None, **kwargs: Any) -> None:
        context = kwargs.get("context", {})
        if node_type:
            context["node_type"] = node_type
        kwargs["context"] = context
        kwargs.setdefault("error_code", "HCL_RENDER_ERROR")
        super().__init__(message, **kwargs)


# Document conversion exceptions
class DocumentError(HclWriterError):
    """Base class for failures while converting resources to an HCL document."""

    pass


class DuplicateResourceError(DocumentError):
    """Raised when two resources map to the same type and sanitized name."""

    def __init__(self, resource_type: str, resource_name: str, **kwargs: Any) -> None:
        self.resource_type = resource_type
        self.resource_name = resource_name
        context = kwargs.get("context", {})
        context["resource_type"] = resource_type
        context["resource_name"] = resource_name
        kwargs["context"] = context
        kwargs.setdefault("error_code", "DUPLICATE_RESOURCE")
        kwargs.setdefault(
            "recovery_suggestion",
            "Rename one of the resources; names are compared after sanitization",
        )
        super().__init__(
            f"duplicate resource found: {resource_type}.{resource_name}", **kwargs
        )


class EncodingError(DocumentError):
    """Raised when the document cannot be serialized to JSON."""

    def __init__(self, message: str, **kwargs: Any) -> None:
        kwargs.setdefault("error_code", "JSON_ENCODING_FAILED")
        kwargs.setdefault(
            "recovery_suggestion",
            "Resource items may only contain strings, numbers, booleans, null, "
            "mappings with string keys and sequences",
        )
        super().__init__(message, **kwargs)


class ParseError(DocumentError):
    """Raised when the intermediate JSON cannot be parsed into a syntax tree."""

    def __init__(self, message: str, **kwargs: Any) -> None:
        kwargs.setdefault("error_code", "JSON_PARSE_FAILED")
        super().__init__(message, **kwargs)


class RenderError(DocumentError):
    """Raised when a sanitized syntax tree cannot be rendered to text."""

    def __init__(self, message: str, **kwargs: Any) -> None:
        kwargs.setdefault("error_code", "HCL_RENDER_FAILED")
        super().__init__(message, **kwargs)


class FormatError(DocumentError):
    """Raised when rendered HCL fails the canonical formatting pass."""

    def __init__(self, message: str, **kwargs: Any) -> None:
        kwargs.setdefault("error_code", "HCL_FORMAT_FAILED")
        kwargs.setdefault(
            "recovery_suggestion",
            "Inspect the line-numbered output dumped to stderr",
        )
        super().__init__(message, **kwargs)


__all__ = [
    "DocumentError",
    "DuplicateResourceError",
    "EncodingError",
    "FormatError",
    "HclRenderError",
    "HclSyntaxError",
    "HclWriterError",
    "ParseError",
    "RenderError",
]
