"""
Logging configuration for tool-protocol hosts.

Library modules only create loggers with ``logging.getLogger(__name__)``.
Host applications call :func:`initialize_logging` once at startup.
"""

import logging

from tool_protocol.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class LongValueFilter(logging.Filter):
    """
    Truncate oversized log messages.

    Tool parameters can be megabytes of text (a payload to hash, a file to
    encode). Records longer than ``max_length`` are cut so that a single
    DEBUG line does not flood the log.
    """

    def __init__(self, max_length: int = 2000) -> None:
        super().__init__()
        self.max_length = max_length

    def filter(self, record: logging.LogRecord) -> bool:
        msg = record.getMessage()
        if len(msg) > self.max_length:
            record.msg = f"{msg[:self.max_length]}... [truncated {len(msg) - self.max_length} chars]"
            record.args = None
        return True


def initialize_logging(level: str | None = None) -> None:
    """
    Configure root logging for a host application.

    Should be called once during application startup.

    Args:
        level: Log level name; defaults to ``settings.log_level``
    """
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format=LOG_FORMAT,
    )
    # Logger filters do not see records from child loggers, so attach to handlers
    for handler in logging.getLogger().handlers:
        if not any(isinstance(f, LongValueFilter) for f in handler.filters):
            handler.addFilter(LongValueFilter())
