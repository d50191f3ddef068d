"""
ProcSync - Synchronous Processor Adapter for Virtual Files

ProcSync applies pluggable processors to source files before and after
analysis. A processor can split one file into several virtual sub-files,
such as the code blocks embedded in a Markdown document, and later fold the
per-block results back into a single ordered list of messages.

Modules:
    core: Configuration, logging and the exception hierarchy
    processing: Virtual files, blocks, messages and the processor service

Example:
    >>> from procsync import ProcessorService, VirtualFile
    >>> service = ProcessorService()
    >>> file = VirtualFile("/docs/readme.md", "Some text")
    >>> result = service.preprocess_sync(file, {"processor": my_processor})
"""

__version__ = "0.1.0"
__author__ = "ProcSync"
__description__ = (
    "Synchronous adapter between a file-content pipeline and pluggable "
    "processors that split files into virtual sub-files and merge the "
    "messages reported for them."
)

from procsync.core.config.settings import Settings
from procsync.core.logging.logger import get_logger
from procsync.processing import ProcessorService, VirtualFile

__all__ = [
    "ProcessorService",
    "Settings",
    "VirtualFile",
    "get_logger",
]
