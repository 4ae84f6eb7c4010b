"""Render typed resource descriptions as canonically formatted Terraform HCL."""

from .iac.emitters.hcl import ResourceEntry, hcl_print_document, tf_sanitize
from .logging_config import configure_logging

configure_logging()

__all__ = ["ResourceEntry", "configure_logging", "hcl_print_document", "tf_sanitize"]

__version__ = "0.1.0"
