"""
Processor service for applying processors to virtual files.

The service sits between file loading and analysis. It hands a file's
original body to a processor, turns the processor's blocks into derived
virtual files, and later gives the processor the per-block messages to
merge back into one list for the original file.

Execution is strictly synchronous. A processor that fails while splitting
degrades the whole file to a single fatal lint message; a processor that
returns an awaitable is rejected outright.

Example:
    >>> service = ProcessorService()
    >>> file = VirtualFile("/docs/readme.md", "```js\\nfoo()\\n```\\n")
    >>> config = {"processor": MarkdownCodeBlockProcessor()}
    >>> result = service.preprocess_sync(file, config)
    >>> [f.path for f in result.files]
    ['/docs/readme.md/0_0.js']
"""

import inspect
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from procsync.core.config.settings import settings
from procsync.core.exceptions.custom_exceptions import (
    ConfigurationError,
    ProcessingError,
    UnsupportedProcessorError,
)
from procsync.core.logging.logger import get_logger
from procsync.processing.base import has_postprocess, processor_name
from procsync.processing.blocks import coerce_block
from procsync.processing.messages import LintMessage
from procsync.processing.normalizers import error_location, format_preprocessing_error
from procsync.processing.vfile import VirtualFile, get_body_with_bom

logger = get_logger(__name__)

# Legacy string blocks are passed through as-is next to derived files.
PreprocessedFile = Union[VirtualFile, str]


@dataclass
class PreprocessResult:
    """
    Outcome of preprocessing one file.

    Attributes:
        ok (bool): Whether the processor split the file successfully
        files (List[Union[VirtualFile, str]]): Derived files in block order
        errors (List[LintMessage]): The single fatal message on failure
    """

    ok: bool
    files: List[PreprocessedFile] = field(default_factory=list)
    errors: List[LintMessage] = field(default_factory=list)

    @classmethod
    def success(cls, files: List[PreprocessedFile]) -> "PreprocessResult":
        return cls(ok=True, files=files)

    @classmethod
    def failure(cls, errors: List[LintMessage]) -> "PreprocessResult":
        return cls(ok=False, errors=errors)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization"""
        if not self.ok:
            return {"ok": False, "errors": [error.to_dict() for error in self.errors]}
        return {
            "ok": True,
            "files": [f if isinstance(f, str) else f.to_dict() for f in self.files],
        }


def _resolve_processor(config: Any) -> Any:
    if isinstance(config, Mapping):
        processor = config.get("processor")
    else:
        processor = getattr(config, "processor", None)

    if processor is None:
        raise ConfigurationError(
            "Configuration does not provide a processor",
            error_code="CONFIG_MISSING_PROCESSOR",
            details={"config_type": type(config).__name__},
        )
    if not callable(getattr(processor, "preprocess", None)):
        raise ConfigurationError(
            "Processor does not implement preprocess()",
            error_code="CONFIG_INVALID_PROCESSOR",
            details={"processor": processor_name(processor)},
        )
    return processor


def _is_deferred(value: Any) -> bool:
    return (
        inspect.isawaitable(value)
        or inspect.isasyncgen(value)
        or callable(getattr(value, "then", None))
    )


def _is_lazy(value: Any) -> bool:
    return isinstance(value, Iterable) and not isinstance(
        value, (Sequence, Mapping, bytes)
    )


class ProcessorService:
    """
    The service that applies processors to files.

    Attributes:
        error_prefix (str): Text prepended to processor failure messages
    """

    def __init__(self, error_prefix: Optional[str] = None):
        self.error_prefix = (
            settings.PREPROCESS_ERROR_PREFIX if error_prefix is None else error_prefix
        )

    def preprocess_sync(self, file: VirtualFile, config: Any) -> PreprocessResult:
        """
        Preprocess the given file synchronously.

        Args:
            file (VirtualFile): The file to preprocess
            config: Mapping or object carrying a ``processor``

        Returns:
            PreprocessResult: Derived files on success, or one fatal message
            when the processor raised

        Raises:
            ConfigurationError: If the configuration has no usable processor
            UnsupportedProcessorError: If the processor returned an awaitable
            ProcessingError: If the processor output cannot be mapped to files
        """
        processor = _resolve_processor(config)

        try:
            blocks = processor.preprocess(get_body_with_bom(file), file.path)
            if not _is_deferred(blocks) and _is_lazy(blocks):
                blocks = list(blocks)
        except Exception as ex:
            line, column = error_location(ex)
            message = format_preprocessing_error(ex, self.error_prefix)
            logger.warning(
                "Processor failed to split file",
                path=file.path,
                processor=processor_name(processor),
                error=str(ex),
            )
            return PreprocessResult.failure(
                [LintMessage.preprocessing_failure(message, line=line, column=column)]
            )

        if _is_deferred(blocks):
            if inspect.iscoroutine(blocks):
                blocks.close()
            raise UnsupportedProcessorError(
                "Unsupported: Preprocessor returned an awaitable.",
                error_code="PREPROCESS_ASYNC_RESULT",
                details={"processor": processor_name(processor), "path": file.path},
            )

        if isinstance(blocks, (str, bytes, Mapping)) or not hasattr(
            blocks, "__iter__"
        ):
            raise ProcessingError(
                "Preprocessor must return a sequence of blocks",
                error_code="PREPROCESS_INVALID_RESULT",
                details={"result_type": type(blocks).__name__, "path": file.path},
            )

        files: List[PreprocessedFile] = []
        for index, raw in enumerate(blocks):
            block = coerce_block(raw)
            if isinstance(block, str):
                files.append(block)
                continue
            files.append(file.derive(index, block.filename, block.text))

        logger.debug(
            "Preprocessed file",
            path=file.path,
            processor=processor_name(processor),
            blocks=len(files),
        )
        return PreprocessResult.success(files)

    def postprocess_sync(
        self, file: VirtualFile, messages: List[List[LintMessage]], config: Any
    ) -> Union[List[LintMessage], List[List[LintMessage]]]:
        """
        Postprocess the given messages synchronously.

        Args:
            file (VirtualFile): The original file the blocks came from
            messages (List[List[LintMessage]]): Messages per block, in block order
            config: Mapping or object carrying a ``processor``

        Returns:
            The processor's merged messages, or ``messages`` unchanged when the
            processor has no postprocess capability. Exceptions raised by the
            processor propagate.
        """
        processor = _resolve_processor(config)

        if has_postprocess(processor):
            logger.debug(
                "Postprocessing messages",
                path=file.path,
                processor=processor_name(processor),
                groups=len(messages),
            )
            return processor.postprocess(messages, file.path)

        return messages
