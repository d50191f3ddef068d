"""
Markdown processor extracting fenced code blocks.

The processor turns every fenced code block of a Markdown document into a
block of its own, named after the block's language, so that each snippet can
be analyzed as a standalone file. Messages reported against the snippets are
shifted back onto the Markdown document's lines and columns.

Supported fences:
    - Backtick fences (three or more backticks)
    - Tilde fences (three or more tildes)
    - Fences indented by up to three spaces; the indent is removed from the
      snippet and added back to reported columns

Example:
    >>> processor = MarkdownCodeBlockProcessor(languages={"python"})
    >>> processor.preprocess("# Title\\n```python\\nx = 1\\n```\\n", "doc.md")
    [Block(text='x = 1\\n', filename='0.py')]
"""

import re
from collections import OrderedDict
from dataclasses import replace
from typing import Iterable, List, Optional, Tuple, Union

from procsync.core.logging.logger import get_logger
from procsync.processing.blocks import Block
from procsync.processing.messages import LintMessage
from procsync.processing.vfile import BOM_CHAR

logger = get_logger(__name__)

FENCE_PATTERN = re.compile(r"^(?P<indent> {0,3})(?P<fence>`{3,}|~{3,})(?P<info>.*)$")

LANGUAGE_EXTENSIONS = {
    "javascript": "js",
    "js": "js",
    "jsx": "jsx",
    "typescript": "ts",
    "ts": "ts",
    "python": "py",
    "py": "py",
    "shell": "sh",
    "bash": "sh",
    "sh": "sh",
    "yaml": "yml",
    "yml": "yml",
}


class MarkdownCodeBlockProcessor:
    """
    Split Markdown documents into their fenced code blocks.

    Attributes:
        languages (Optional[set]): Languages to extract; all when None
        max_tracked (int): Documents whose block locations are remembered
            until postprocess; the least recently split are dropped first
        meta (dict): Processor name and version
    """

    meta = {"name": "markdown", "version": "0.1.0"}

    def __init__(
        self, languages: Optional[Iterable[str]] = None, max_tracked: int = 256
    ):
        self.languages = (
            None if languages is None else {lang.lower() for lang in languages}
        )
        self.max_tracked = max_tracked
        # (line offset, indent) per extracted block, keyed by document path
        self._locations: "OrderedDict[str, List[Tuple[int, int]]]" = OrderedDict()

    def preprocess(self, text: Union[str, bytes], filename: str) -> List[Block]:
        self._locations.pop(filename, None)

        if isinstance(text, bytes):
            text = text.decode("utf-8")
        if text.startswith(BOM_CHAR):
            text = text[1:]

        blocks: List[Block] = []
        locations: List[Tuple[int, int]] = []

        lines = text.split("\n")
        index = 0
        while index < len(lines):
            match = FENCE_PATTERN.match(lines[index].rstrip("\r"))
            if not match or (
                match.group("fence")[0] == "`" and "`" in match.group("info")
            ):
                index += 1
                continue

            fence_line = index + 1
            indent = len(match.group("indent"))
            fence = match.group("fence")
            info = match.group("info").strip()
            language = info.split()[0].lower() if info else ""

            content: List[str] = []
            index += 1
            while True:
                if index >= len(lines):
                    raise ValueError(f"line {fence_line}: unterminated code fence")
                line = lines[index].rstrip("\r")
                if _closes(line, fence):
                    break
                content.append(_dedent(line, indent))
                index += 1
            index += 1

            if self.languages is not None and language not in self.languages:
                continue

            extension = LANGUAGE_EXTENSIONS.get(language, language or "txt")
            blocks.append(
                Block(
                    text="".join(f"{line}\n" for line in content),
                    filename=f"{len(blocks)}.{extension}",
                )
            )
            locations.append((fence_line, indent))

        if locations:
            self._locations[filename] = locations
            while len(self._locations) > self.max_tracked:
                self._locations.popitem(last=False)
        logger.debug("Extracted code blocks", path=filename, blocks=len(blocks))
        return blocks

    def postprocess(
        self, messages: List[List[LintMessage]], filename: str
    ) -> List[LintMessage]:
        locations = self._locations.pop(filename, [])
        merged: List[LintMessage] = []

        for position, group in enumerate(messages):
            line_offset, indent = (
                locations[position] if position < len(locations) else (0, 0)
            )
            for message in group:
                merged.append(_relocate(message, line_offset, indent))

        return merged


def _closes(line: str, fence: str) -> bool:
    stripped = line.strip()
    return (
        len(stripped) >= len(fence)
        and set(stripped) == {fence[0]}
        and len(line) - len(line.lstrip(" ")) <= 3
    )


def _dedent(line: str, indent: int) -> str:
    leading = len(line) - len(line.lstrip(" "))
    return line[min(leading, indent) :]


def _relocate(message: LintMessage, line_offset: int, indent: int) -> LintMessage:
    def shift(value: Optional[int], delta: int) -> Optional[int]:
        return None if value is None else value + delta

    return replace(
        message,
        line=shift(message.line, line_offset),
        end_line=shift(message.end_line, line_offset),
        column=shift(message.column, indent),
        end_column=shift(message.end_column, indent),
    )
