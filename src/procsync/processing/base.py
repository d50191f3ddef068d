"""
Processor contract for the processor service.

A processor splits one file into virtual sub-files before analysis and may
fold the per-block messages back together afterwards. Processors are plain
objects: any object with a synchronous ``preprocess`` method qualifies, and
``postprocess`` is an optional capability checked at call time rather than
inherited from a base class.

Classes:
    Processor: Protocol for the required splitting operation
    PostprocessingProcessor: Protocol for processors that also merge messages

Example:
    >>> class UpperProcessor:
    ...     def preprocess(self, text, filename):
    ...         return [Block(text=text.upper(), filename="upper.txt")]
    >>> isinstance(UpperProcessor(), Processor)
    True
    >>> has_postprocess(UpperProcessor())
    False
"""

from typing import Any, Dict, List, Protocol, Sequence, Union, runtime_checkable

from procsync.processing.blocks import BlockLike
from procsync.processing.messages import LintMessage
from procsync.processing.vfile import Body


@runtime_checkable
class Processor(Protocol):
    """Protocol for processors that split a file into blocks.

    ``preprocess`` must return its blocks directly. Returning an awaitable
    is rejected by the processor service.
    """

    def preprocess(self, text: Body, filename: str) -> Sequence[BlockLike]:
        """Split the full file body (BOM included) into ordered blocks."""
        ...


@runtime_checkable
class PostprocessingProcessor(Processor, Protocol):
    """Protocol for processors that also merge per-block messages."""

    def postprocess(
        self, messages: List[List[LintMessage]], filename: str
    ) -> List[LintMessage]:
        """Map block-local messages onto the original file and flatten them."""
        ...


def has_postprocess(processor: Any) -> bool:
    """Check whether a processor offers the optional postprocess capability."""
    return callable(getattr(processor, "postprocess", None))


def processor_name(processor: Any) -> str:
    """Name used in log output; taken from ``meta`` when the processor has one."""
    meta: Union[Dict[str, Any], Any] = getattr(processor, "meta", None)
    if isinstance(meta, dict) and meta.get("name"):
        version = meta.get("version")
        return f"{meta['name']}@{version}" if version else str(meta["name"])
    return type(processor).__name__
