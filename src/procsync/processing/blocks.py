"""Processor output blocks and their normalization."""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Union

from procsync.core.exceptions.custom_exceptions import ProcessingError


@dataclass(frozen=True)
class Block:
    """A piece of text extracted by a processor, with the name it should carry."""

    text: str
    filename: str


# Legacy processors return bare strings instead of Block values.
BlockLike = Union[str, Block]


def coerce_block(raw: Any) -> BlockLike:
    """
    Resolve a raw processor output item into a string or a Block.

    Strings pass through untouched. Block instances, mappings with ``text``
    and ``filename`` keys, and objects with ``text`` and ``filename``
    attributes all become Blocks.

    Raises:
        ProcessingError: If the item has neither shape
    """
    if isinstance(raw, (str, Block)):
        return raw

    if isinstance(raw, Mapping):
        if "text" in raw and "filename" in raw:
            return Block(text=raw["text"], filename=raw["filename"])
    elif hasattr(raw, "text") and hasattr(raw, "filename"):
        return Block(text=raw.text, filename=raw.filename)

    raise ProcessingError(
        "Processor returned a block without text and filename",
        error_code="INVALID_BLOCK",
        details={"block_type": type(raw).__name__},
    )
