"""Domain models for visiting card uploads."""

import mimetypes
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

_BYTES_PER_MB = 1024 * 1024


class UploadState(str, Enum):
    """Lifecycle of the upload widget."""

    IDLE = "idle"
    FILE_SELECTED = "file_selected"
    UPLOADING = "uploading"
    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class SelectedFile:
    """An image chosen by the user, held in memory until upload or clear."""

    name: str
    size: int
    content_type: str
    content: bytes

    @classmethod
    def from_bytes(
        cls, name: str, content: bytes, content_type: str | None = None
    ) -> "SelectedFile":
        """Build a selection from raw bytes, guessing the MIME type if absent."""
        resolved_type = content_type or _guess_content_type(name)
        return cls(
            name=name,
            size=len(content),
            content_type=resolved_type,
            content=content,
        )

    @classmethod
    def from_path(cls, path: str | Path) -> "SelectedFile":
        """Read a file from disk the way a file picker would hand it over."""
        file_path = Path(path)
        return cls.from_bytes(file_path.name, file_path.read_bytes())

    @property
    def is_image(self) -> bool:
        return self.content_type.startswith("image/")

    @property
    def size_label(self) -> str:
        """Size in megabytes with two decimals, e.g. ``2.00 MB``."""
        return format_megabytes(self.size)


@dataclass(frozen=True)
class UploadView:
    """What the upload card displays for the current state."""

    state: UploadState
    title: str
    prompt: str
    show_drop_zone: bool
    file_name: str | None
    size_label: str | None
    preview_ref: str | None
    submit_label: str
    submit_enabled: bool
    clear_enabled: bool


def format_megabytes(size: int) -> str:
    """Render a byte count as megabytes with two decimals."""
    return f"{size / _BYTES_PER_MB:.2f} MB"


def _guess_content_type(name: str) -> str:
    guessed, _ = mimetypes.guess_type(name)
    return guessed or "application/octet-stream"
