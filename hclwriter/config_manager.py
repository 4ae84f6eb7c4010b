"""
Configuration Management for hclwriter

This module provides centralized configuration with validation and
environment variable handling. Values are read from the process environment,
optionally seeded from a ``.env`` file.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict

from dotenv import load_dotenv

logger = logging.getLogger(__name__)


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


@dataclass
class LoggingConfig:
    """Configuration for logging behavior."""

    level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    json_output: bool = field(default_factory=lambda: _env_bool("LOG_JSON", "false"))

    def __post_init__(self) -> None:
        """Validate logging configuration."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if self.level.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        self.level = self.level.upper()

    def get_log_level(self) -> int:
        """Convert string log level to logging constant."""
        level_attr = getattr(logging, self.level, None)
        if level_attr is None:
            raise ValueError(f"Invalid log level: {self.level}")
        return int(level_attr)


@dataclass
class PrinterConfig:
    """Configuration for JSON encoding and HCL printing."""

    json_indent: int = field(
        default_factory=lambda: int(os.getenv("HCLWRITER_JSON_INDENT", "2"))
    )
    heredoc_json_indent: int = field(
        default_factory=lambda: int(os.getenv("HCLWRITER_HEREDOC_INDENT", "2"))
    )
    dump_invalid_output: bool = field(
        default_factory=lambda: _env_bool("HCLWRITER_DUMP_INVALID", "true")
    )

    def __post_init__(self) -> None:
        """Validate printer configuration."""
        if self.json_indent < 0:
            raise ValueError("JSON indent must be non-negative")
        if self.heredoc_json_indent < 0:
            raise ValueError("Heredoc JSON indent must be non-negative")


@dataclass
class HclWriterConfig:
    """Main configuration class that aggregates all configuration sections."""

    logging: LoggingConfig = field(default_factory=LoggingConfig)
    printer: PrinterConfig = field(default_factory=PrinterConfig)

    @classmethod
    def from_environment(cls, debug: bool = False) -> "HclWriterConfig":
        """
        Create configuration from environment variables.

        Args:
            debug: Force DEBUG log level regardless of LOG_LEVEL

        Returns:
            Configured HclWriterConfig instance
        """
        load_dotenv(override=False)
        config = cls()
        if debug:
            config.logging.level = "DEBUG"
        return config

    def log_configuration_summary(self) -> None:
        """Log a summary of the current configuration."""
        logger.info("=" * 40)
        logger.info("hclwriter configuration")
        logger.info(f"Log level: {self.logging.level}")
        logger.info(f"JSON indent: {self.printer.json_indent}")
        logger.info(f"Heredoc JSON indent: {self.printer.heredoc_json_indent}")
        logger.info(f"Dump invalid output: {self.printer.dump_invalid_output}")
        logger.info("=" * 40)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            "logging": {
                "level": self.logging.level,
                "json_output": self.logging.json_output,
            },
            "printer": {
                "json_indent": self.printer.json_indent,
                "heredoc_json_indent": self.printer.heredoc_json_indent,
                "dump_invalid_output": self.printer.dump_invalid_output,
            },
        }
