"""
Tests for the Markdown code block processor.

Covers block extraction, language filtering, failure reporting through the
processor service, and mapping of block-local messages back onto the
Markdown document.
"""

import pytest

from procsync.processing.blocks import Block
from procsync.processing.messages import LintMessage
from procsync.processing.processors.markdown import MarkdownCodeBlockProcessor
from procsync.processing.service import ProcessorService
from procsync.processing.vfile import VirtualFile


class TestMarkdownCodeBlockProcessor:
    """Test cases for the MarkdownCodeBlockProcessor class."""

    def test_extracts_fenced_blocks(self, sample_markdown):
        """Test extraction of backtick and tilde fences."""
        processor = MarkdownCodeBlockProcessor()

        blocks = processor.preprocess(sample_markdown, "README.md")

        assert blocks == [
            Block(text="const a = 1;\n", filename="0.js"),
            Block(text="print('hi')\nx = 2\n", filename="1.py"),
        ]

    def test_language_filter(self, sample_markdown):
        """Test that only requested languages are extracted."""
        processor = MarkdownCodeBlockProcessor(languages=["Python"])

        blocks = processor.preprocess(sample_markdown, "README.md")

        assert blocks == [Block(text="print('hi')\nx = 2\n", filename="0.py")]

    def test_block_without_language(self):
        processor = MarkdownCodeBlockProcessor()

        blocks = processor.preprocess("```\nplain\n```\n", "doc.md")

        assert blocks == [Block(text="plain\n", filename="0.txt")]

    def test_bytes_with_bom(self):
        """Test that byte input and a leading BOM are handled."""
        processor = MarkdownCodeBlockProcessor()

        blocks = processor.preprocess(b"\xef\xbb\xbf```sh\nls\n```\n", "doc.md")

        assert blocks == [Block(text="ls\n", filename="0.sh")]

    def test_indented_fence_is_dedented(self):
        processor = MarkdownCodeBlockProcessor()

        blocks = processor.preprocess("  ```js\n  foo();\n  ```\n", "doc.md")

        assert blocks == [Block(text="foo();\n", filename="0.js")]

    def test_longer_fence_needs_matching_close(self):
        """Test that a shorter fence inside a longer one is content."""
        processor = MarkdownCodeBlockProcessor()
        text = "````md\n```js\nx\n```\n````\n"

        blocks = processor.preprocess(text, "doc.md")

        assert blocks == [Block(text="```js\nx\n```\n", filename="0.md")]

    def test_unterminated_fence_raises(self):
        processor = MarkdownCodeBlockProcessor()

        with pytest.raises(ValueError, match="line 3: unterminated code fence"):
            processor.preprocess("# T\n\n```js\nfoo()\n", "doc.md")

    def test_postprocess_relocates_messages(self, sample_markdown):
        """Test that block-local positions map onto document positions."""
        processor = MarkdownCodeBlockProcessor()
        processor.preprocess(sample_markdown, "README.md")

        merged = processor.postprocess(
            [
                [LintMessage("semi", line=1, column=12)],
                [LintMessage("name", line=2, column=1, end_line=2, end_column=2)],
            ],
            "README.md",
        )

        assert [(m.message, m.line, m.column) for m in merged] == [
            ("semi", 4, 12),
            ("name", 11, 1),
        ]
        assert merged[1].end_line == 11

    def test_postprocess_shifts_columns_by_indent(self):
        processor = MarkdownCodeBlockProcessor()
        processor.preprocess("  ```js\n  foo();\n  ```\n", "doc.md")

        merged = processor.postprocess([[LintMessage("x", line=1, column=1)]], "doc.md")

        assert (merged[0].line, merged[0].column) == (2, 3)

    def test_postprocess_keeps_missing_positions(self, sample_markdown):
        processor = MarkdownCodeBlockProcessor()
        processor.preprocess(sample_markdown, "README.md")

        merged = processor.postprocess([[LintMessage("file level")], []], "README.md")

        assert merged[0].line is None
        assert merged[0].column is None

    def test_no_locations_kept_for_documents_without_blocks(self):
        processor = MarkdownCodeBlockProcessor()

        processor.preprocess("# Only prose\n", "prose.md")

        assert len(processor._locations) == 0

    def test_tracked_documents_are_bounded(self):
        """Test that documents never postprocessed are evicted oldest first."""
        processor = MarkdownCodeBlockProcessor(max_tracked=3)

        for number in range(1000):
            processor.preprocess("```js\nfoo();\n```\n", f"doc{number}.md")

        assert list(processor._locations) == ["doc997.md", "doc998.md", "doc999.md"]

    def test_failed_resplit_discards_previous_locations(self):
        """Test that an unterminated fence does not leave earlier offsets behind."""
        processor = MarkdownCodeBlockProcessor()
        processor.preprocess("# T\n\n\n```js\nfoo();\n```\n", "doc.md")

        with pytest.raises(ValueError):
            processor.preprocess("```js\nfoo();\n", "doc.md")
        merged = processor.postprocess([[LintMessage("x", line=1, column=1)]], "doc.md")

        assert (merged[0].line, merged[0].column) == (1, 1)


class TestMarkdownThroughService:
    """End-to-end tests running the processor through the ProcessorService."""

    def test_round_trip(self, sample_markdown):
        """Test preprocess, per-block analysis and postprocess together."""
        service = ProcessorService()
        config = {"processor": MarkdownCodeBlockProcessor()}
        file = VirtualFile.from_content(
            "/docs/README.md", "\ufeff" + sample_markdown, physical_path="/docs/README.md"
        )

        result = service.preprocess_sync(file, config)

        assert result.ok is True
        assert [f.path for f in result.files] == [
            "/docs/README.md/0_0.js",
            "/docs/README.md/1_1.py",
        ]
        assert {f.physical_path for f in result.files} == {"/docs/README.md"}

        groups = [[LintMessage(f"in {f.path}", line=1, column=1)] for f in result.files]
        merged = service.postprocess_sync(file, groups, config)

        assert [m.line for m in merged] == [4, 10]

    def test_unterminated_fence_becomes_fatal_message(self):
        """Test that a processor failure degrades to one fatal message."""
        service = ProcessorService()
        file = VirtualFile("/docs/broken.md", "```js\nfoo()\n")

        result = service.preprocess_sync(
            file, {"processor": MarkdownCodeBlockProcessor()}
        )

        assert result.ok is False
        assert result.errors[0].message == (
            "Preprocessing error: unterminated code fence"
        )
        assert result.errors[0].fatal is True

    def test_repeated_preprocess_without_postprocess_stays_bounded(self):
        service = ProcessorService()
        processor = MarkdownCodeBlockProcessor(max_tracked=10)

        for number in range(1000):
            file = VirtualFile(f"/docs/{number}.md", "```js\nfoo();\n```\n")
            service.preprocess_sync(file, {"processor": processor})

        assert len(processor._locations) == 10
