"""
ProcSync Logging Module - Structured Application Logging.

Provides structured logging with JSON and text output formats, rich console
formatting for development, and optional file output.

Example:
    >>> from procsync.core.logging import get_logger
    >>>
    >>> logger = get_logger(__name__)
    >>> logger.info("Processor loaded", processor="markdown")
"""

from .logger import get_logger, setup_logging

__all__ = ["get_logger", "setup_logging"]
