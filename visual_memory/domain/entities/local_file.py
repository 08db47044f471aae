"""Local image file entity."""

import mimetypes
from dataclasses import dataclass
from pathlib import Path
from typing import Union


@dataclass(frozen=True)
class LocalImageFile:
    """A file the user picked for upload."""

    name: str
    content_type: str
    content: bytes

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "LocalImageFile":
        """Read a file from disk, guessing its content type from the name."""
        path = Path(path)
        content_type, _ = mimetypes.guess_type(path.name)
        return cls(
            name=path.name,
            content_type=content_type or "application/octet-stream",
            content=path.read_bytes()
        )

    @property
    def is_image(self) -> bool:
        """Check if the content type is an image type."""
        return self.content_type.lower().startswith("image/")

    @property
    def size(self) -> int:
        """Size in bytes."""
        return len(self.content)
