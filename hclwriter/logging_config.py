import logging
import sys
from typing import Optional

import structlog

from .config_manager import LoggingConfig


def configure_logging(config: Optional[LoggingConfig] = None) -> None:
    config = config or LoggingConfig()
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=config.get_log_level(),
    )
    renderer = (
        structlog.processors.JSONRenderer()
        if config.json_output
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.stdlib.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )
