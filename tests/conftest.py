"""
Pytest configuration and fixtures for ProcSync tests
"""

import pytest

from procsync.core.config.settings import Settings
from procsync.processing.vfile import VirtualFile


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """Test settings with quiet logging"""
    return Settings(ENVIRONMENT="testing", DEBUG=False, LOG_LEVEL="WARNING")


@pytest.fixture
def text_file() -> VirtualFile:
    """Plain text file without a BOM"""
    return VirtualFile("/a/foo.md", "# Foo\n", physical_path="/disk/a/foo.md")


@pytest.fixture
def bom_text_file() -> VirtualFile:
    """Text file whose BOM was stripped on load"""
    return VirtualFile.from_content("/a/bom.md", "\ufeff# Bom\n")


@pytest.fixture
def bom_bytes_file() -> VirtualFile:
    """Byte file whose BOM was stripped on load"""
    return VirtualFile.from_content("/a/bom.bin", b"\xef\xbb\xbfdata")


@pytest.fixture
def sample_markdown() -> str:
    """Markdown document with two fenced code blocks"""
    return (
        "# Usage\n"
        "\n"
        "```js\n"
        "const a = 1;\n"
        "```\n"
        "\n"
        "Some prose.\n"
        "\n"
        "~~~python\n"
        "print('hi')\n"
        "x = 2\n"
        "~~~\n"
    )

