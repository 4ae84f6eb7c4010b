import os
from typing import Any, Dict
from unittest.mock import patch

import pytest

from hclwriter.config_manager import PrinterConfig
from hclwriter.iac.emitters.hcl import ResourceEntry


# ============================================================================
# Environment Fixtures
# ============================================================================


@pytest.fixture
def clean_env():
    """Run a test without any hclwriter or logging environment overrides."""
    keys = [
        k
        for k in os.environ
        if k.startswith("HCLWRITER_") or k in ("LOG_LEVEL", "LOG_JSON")
    ]
    with patch.dict(os.environ, {}, clear=False):
        for key in keys:
            del os.environ[key]
        yield


@pytest.fixture
def printer_config(clean_env) -> PrinterConfig:
    """Printer configuration with defaults and no diagnostic dump."""
    return PrinterConfig(json_indent=2, heredoc_json_indent=2, dump_invalid_output=False)


# ============================================================================
# Resource Fixtures
# ============================================================================


@pytest.fixture
def aws_provider() -> Dict[str, Any]:
    """Provide a minimal AWS provider block."""
    return {"aws": {"region": "us-east-1"}}


@pytest.fixture
def web_instance() -> ResourceEntry:
    """Provide a simple EC2 instance resource."""
    return ResourceEntry(
        resource_type="aws_instance",
        resource_name="web",
        item={"ami": "ami-123", "instance_type": "t2.micro"},
    )


@pytest.fixture
def logs_bucket() -> ResourceEntry:
    """Provide a simple S3 bucket resource."""
    return ResourceEntry(
        resource_type="aws_s3_bucket",
        resource_name="logs",
        item={"bucket": "logs"},
    )
