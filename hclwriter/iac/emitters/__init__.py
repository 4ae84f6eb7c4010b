"""IaC emitters. Only the HCL emitter is provided."""

from .hcl import DocumentBuilder, ResourceEntry, hcl_print, hcl_print_document

__all__ = ["DocumentBuilder", "ResourceEntry", "hcl_print", "hcl_print_document"]
