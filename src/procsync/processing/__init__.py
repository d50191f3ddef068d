"""
ProcSync Processing Module - Processor Adapter for Virtual Files.

This module applies pluggable processors to files before and after analysis.
A processor can split one source file into several virtual sub-files (for
example the code blocks embedded in a Markdown document) and later fold the
messages reported for each block back into one ordered list.

Core Components:
    - ProcessorService: Runs processors synchronously and normalizes output
    - VirtualFile: Content unit with logical and physical paths
    - Block: Structured processor output
    - LintMessage: Severity-tagged diagnostic

The processing flow:
    1. The loader builds a VirtualFile, stripping any BOM
    2. The service re-attaches the BOM and calls ``processor.preprocess``
    3. Each block becomes a derived VirtualFile named ``<path>/<index>_<name>``
    4. Analysis runs per derived file (outside this package)
    5. The service calls ``processor.postprocess`` with messages per block

Example:
    >>> from procsync.processing import ProcessorService, VirtualFile
    >>> from procsync.processing.processors import MarkdownCodeBlockProcessor
    >>>
    >>> service = ProcessorService()
    >>> config = {"processor": MarkdownCodeBlockProcessor()}
    >>> file = VirtualFile.from_content("/docs/readme.md", markdown_text)
    >>> result = service.preprocess_sync(file, config)
    >>> if result.ok:
    ...     groups = [analyze(f) for f in result.files]
    ...     messages = service.postprocess_sync(file, groups, config)
"""

from .base import PostprocessingProcessor, Processor, has_postprocess
from .blocks import Block, coerce_block
from .messages import LintMessage, Severity, flatten_messages
from .service import PreprocessResult, ProcessorService
from .vfile import VirtualFile, get_body_with_bom

__all__ = [
    "Block",
    "LintMessage",
    "PostprocessingProcessor",
    "PreprocessResult",
    "Processor",
    "ProcessorService",
    "Severity",
    "VirtualFile",
    "coerce_block",
    "flatten_messages",
    "get_body_with_bom",
    "has_postprocess",
]
