"""Build a Terraform HCL document from resource entries and provider config.

Resources are grouped by type under sanitized names, wrapped together with
the provider configuration, encoded as JSON, parsed back as an HCL syntax
tree and printed.

Usage:
    from hclwriter.iac.emitters.hcl import ResourceEntry, hcl_print_document

    hcl = hcl_print_document(
        [ResourceEntry("aws_s3_bucket", "logs.example.com", {"acl": "private"})],
        {"aws": {"region": "us-east-1"}},
    )
"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence, TextIO, Tuple, Union

import structlog

from ....config_manager import PrinterConfig
from ....exceptions import DuplicateResourceError, EncodingError, HclSyntaxError, ParseError
from ...syntax import File, parse_json
from .printer import hcl_print

logger = structlog.get_logger(__name__)


def tf_sanitize(name: str) -> str:
    """Sanitize a resource name for Terraform style.

    ``*.`` is dropped before ``.`` becomes ``-``, so ``*.example.com``
    yields ``example-com`` rather than ``*-example-com``.

    Examples:
        >>> tf_sanitize("*.example.com")
        'example-com'
        >>> tf_sanitize("vpc/subnet.a")
        'vpc--subnet-a'
    """
    name = name.replace("*.", "")
    name = name.replace(".", "-")
    name = name.replace("/", "--")
    return name


@dataclass(frozen=True)
class ResourceEntry:
    """One named resource block, e.g. ``resource "aws_instance" "web" {}``."""

    resource_type: str
    resource_name: str
    item: Any


EntryLike = Union[ResourceEntry, Tuple[str, str, Any]]


def _as_entry(entry: EntryLike) -> ResourceEntry:
    if isinstance(entry, ResourceEntry):
        return entry
    resource_type, resource_name, item = entry
    return ResourceEntry(resource_type, resource_name, item)


@dataclass
class Document:
    """Aggregate document serialized to JSON before re-parsing."""

    resource: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    provider: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {"resource": self.resource, "provider": self.provider}


class DocumentBuilder:
    """Collects resources for a single document and renders it.

    Usage:
        builder = DocumentBuilder({"aws": {"region": "eu-west-1"}})
        builder.add(ResourceEntry("aws_vpc", "main", {"cidr_block": "10.0.0.0/16"}))
        hcl = builder.render()
    """

    def __init__(
        self,
        provider: Optional[Dict[str, Any]] = None,
        config: Optional[PrinterConfig] = None,
    ) -> None:
        self.config = config or PrinterConfig()
        self.provider = provider if provider is not None else {}
        self.resources_by_type: Dict[str, Dict[str, Any]] = {}

    def add(self, entry: EntryLike) -> str:
        """Add a resource under its sanitized name.

        Returns:
            The sanitized resource name

        Raises:
            DuplicateResourceError: If the type already holds that name
        """
        entry = _as_entry(entry)
        resources = self.resources_by_type.setdefault(entry.resource_type, {})
        tf_name = tf_sanitize(entry.resource_name)
        if tf_name in resources:
            raise DuplicateResourceError(entry.resource_type, tf_name)
        resources[tf_name] = entry.item
        return tf_name

    def add_all(self, entries: Iterable[EntryLike]) -> None:
        for entry in entries:
            self.add(entry)

    def build(self) -> Document:
        return Document(resource=self.resources_by_type, provider=self.provider)

    def to_json(self) -> str:
        """Encode the document as indented JSON with ``<`` and ``>`` unescaped."""
        document = self.build().to_dict()
        try:
            data_json = json.dumps(
                document,
                indent=self.config.json_indent,
                sort_keys=True,
                ensure_ascii=False,
                allow_nan=False,
            )
        except (TypeError, ValueError, RecursionError) as e:
            raise EncodingError(
                f"error marshalling terraform data to json: {e}", cause=e
            ) from e
        return data_json.replace("\\u003c", "<").replace("\\u003e", ">")

    def parse(self) -> File:
        data_json = self.to_json()
        try:
            return parse_json(data_json)
        except HclSyntaxError as e:
            raise ParseError(f"error parsing terraform json: {e.message}", cause=e) from e
        except RecursionError as e:
            raise ParseError(
                "error parsing terraform json: nesting too deep to parse", cause=e
            ) from e

    def render(self, diagnostic_stream: Optional[TextIO] = None) -> bytes:
        """Render the collected resources and provider config as HCL."""
        tree = self.parse()
        logger.debug(
            "printing HCL document",
            resource_types=len(self.resources_by_type),
            resources=sum(len(r) for r in self.resources_by_type.values()),
        )
        return hcl_print(tree, config=self.config, diagnostic_stream=diagnostic_stream)


def group_resources(entries: Sequence[EntryLike]) -> Dict[str, Dict[str, Any]]:
    """Group entries by type under sanitized names, failing on the first duplicate."""
    builder = DocumentBuilder()
    builder.add_all(entries)
    return builder.resources_by_type


def hcl_print_document(
    resources: List[EntryLike],
    provider: Optional[Dict[str, Any]] = None,
    config: Optional[PrinterConfig] = None,
    diagnostic_stream: Optional[TextIO] = None,
) -> bytes:
    """Print an HCL file from resource entries plus provider configuration.

    Args:
        resources: Entries or ``(type, name, item)`` triples
        provider: Provider configuration, passed through unmodified
        config: Printer configuration
        diagnostic_stream: Where invalid output is dumped on format failure

    Returns:
        Formatted HCL as UTF-8 bytes

    Raises:
        DuplicateResourceError: Two entries share a type and sanitized name
        EncodingError: The document is not JSON-serializable
        ParseError: The intermediate JSON does not parse
        RenderError: The syntax tree cannot be rendered
        FormatError: The rendered text fails canonical formatting
    """
    builder = DocumentBuilder(provider, config=config)
    builder.add_all(resources)
    return builder.render(diagnostic_stream=diagnostic_stream)


__all__ = [
    "Document",
    "DocumentBuilder",
    "ResourceEntry",
    "group_resources",
    "hcl_print_document",
    "tf_sanitize",
]
