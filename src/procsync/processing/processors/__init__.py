"""
Bundled processors.

Available Processors:
    - MarkdownCodeBlockProcessor: Extracts fenced code blocks from Markdown
"""

from .markdown import MarkdownCodeBlockProcessor

__all__ = ["MarkdownCodeBlockProcessor"]
