"""
Custom exception hierarchy for ProcSync error handling.

Exception Hierarchy:
    ProcSyncError (base)
    ├── ConfigurationError: Missing or unusable processor configuration
    └── ProcessingError: Processor output that cannot be normalized
        └── UnsupportedProcessorError: Processor broke the synchronous contract

Processor failures raised from a processor's own ``preprocess`` call are not
part of this hierarchy: they are converted into fatal lint messages by the
processor service. Exceptions defined here always propagate to the caller.

Example:
    >>> raise ConfigurationError(
    ...     "Configuration does not provide a processor",
    ...     error_code="CONFIG_MISSING_PROCESSOR",
    ...     details={"config_type": "dict"}
    ... )
"""

from typing import Any, Dict, Optional


class ProcSyncError(Exception):
    """
    Base exception class for all ProcSync application errors.

    Attributes:
        message (str): Human-readable error description
        error_code (str): Machine-readable error identifier
        details (Dict[str, Any]): Additional contextual information

    The error_code defaults to the class name if not specified.
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}


class ConfigurationError(ProcSyncError):
    """
    Raised when the configuration value does not carry a usable processor.

    Common scenarios:
        - No ``processor`` key or attribute on the configuration
        - A processor without a callable ``preprocess``
    """

    pass


class ProcessingError(ProcSyncError):
    """
    Raised when processor output cannot be turned into virtual files.

    Common scenarios:
        - ``preprocess`` returned something that is not a sequence of blocks
        - A block is neither a string nor carries ``text`` and ``filename``
    """

    pass


class UnsupportedProcessorError(ProcessingError):
    """
    Raised when a processor returns an awaitable from ``preprocess``.

    The processor service runs strictly synchronously. An asynchronous
    processor is an integration bug, so this is never degraded into a
    lint message.
    """

    pass
