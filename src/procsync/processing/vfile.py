"""
Virtual files and byte-order-mark handling.

A VirtualFile is the unit of content that flows through the processor
service. The original file read from storage becomes one VirtualFile;
every block a processor extracts from it becomes another, derived one.

Loaders strip a leading byte-order mark for internal convenience and record
that they did so in ``bom``. Processors, however, must see exactly what the
author wrote, so ``get_body_with_bom`` puts the marker back before the body
is handed over.

Example:
    >>> file = VirtualFile.from_content("/docs/readme.md", "\\ufeff# Title")
    >>> file.bom, file.body
    (True, '# Title')
    >>> get_body_with_bom(file)
    '\\ufeff# Title'
"""

import os
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

BOM_CHAR = "\ufeff"
BOM_BYTES = b"\xef\xbb\xbf"

Body = Union[str, bytes]


@dataclass(frozen=True)
class VirtualFile:
    """
    A unit of content with a logical and a physical location.

    Attributes:
        path (str): Logical path used for diagnostics and derived naming
        body (Union[str, bytes]): Text or raw bytes, without a leading BOM
        physical_path (str): On-disk origin; defaults to ``path``
        bom (bool): Whether a BOM was stripped from the body on load
    """

    path: str
    body: Body
    physical_path: Optional[str] = None
    bom: bool = False

    def __post_init__(self):
        if self.physical_path is None:
            object.__setattr__(self, "physical_path", self.path)

    @classmethod
    def from_content(
        cls,
        path: str,
        content: Union[str, bytes, bytearray, memoryview],
        physical_path: Optional[str] = None,
    ) -> "VirtualFile":
        """
        Build a VirtualFile from freshly read content, stripping any BOM.

        Args:
            path: Logical path of the file
            content: Text or bytes exactly as read from storage
            physical_path: On-disk origin, if different from ``path``

        Returns:
            VirtualFile: File with the BOM removed and ``bom`` set accordingly
        """
        if isinstance(content, str):
            if content.startswith(BOM_CHAR):
                return cls(path, content[1:], physical_path, bom=True)
            return cls(path, content, physical_path)

        data = bytes(content)
        if data.startswith(BOM_BYTES):
            return cls(path, data[len(BOM_BYTES) :], physical_path, bom=True)
        return cls(path, data, physical_path)

    @property
    def is_text(self) -> bool:
        return isinstance(self.body, str)

    def derive(self, index: int, filename: str, text: str) -> "VirtualFile":
        """
        Create the child file for the block at ``index``.

        The child path is ``<path>/<index>_<filename>`` and the child always
        inherits this file's physical path.
        """
        derived_path = os.path.normpath(os.path.join(self.path, f"{index}_{filename}"))
        return VirtualFile(derived_path, text, physical_path=self.physical_path)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization"""
        return {
            "path": self.path,
            "physical_path": self.physical_path,
            "bom": self.bom,
            "body": self.body if self.is_text else None,
            "size_bytes": None if self.is_text else len(self.body),
        }


def get_body_with_bom(file: VirtualFile) -> Body:
    """
    Reconstruct the body of a file exactly as it was read from storage.

    Args:
        file (VirtualFile): The file whose body should be returned

    Returns:
        Union[str, bytes]: The body, with the BOM re-attached when ``file.bom``
        is set. Byte bodies are returned as a new ``bytes`` object.
    """
    if not file.bom:
        return file.body

    if isinstance(file.body, str):
        return f"{BOM_CHAR}{file.body}"

    body_with_bom = bytearray(len(BOM_BYTES) + len(file.body))
    body_with_bom[: len(BOM_BYTES)] = BOM_BYTES
    body_with_bom[len(BOM_BYTES) :] = file.body

    return bytes(body_with_bom)
