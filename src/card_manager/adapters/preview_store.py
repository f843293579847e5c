"""Local preview handles for selected images."""

from dataclasses import dataclass, field
from typing import Protocol
from uuid import uuid4

from card_manager.domain.uploads import SelectedFile

PREVIEW_SCHEME = "preview://"


class PreviewStore(Protocol):
    """Issues and releases locally resolvable preview references."""

    def create(self, selected: SelectedFile) -> str:
        """Create a preview reference for the file."""

    def release(self, ref: str) -> None:
        """Release a preview reference; each reference is released once."""


@dataclass
class InMemoryPreviewStore(PreviewStore):
    """Keeps preview bytes in memory behind ``preview://`` handles."""

    _previews: dict[str, bytes] = field(default_factory=dict)

    def create(self, selected: SelectedFile) -> str:
        ref = f"{PREVIEW_SCHEME}{uuid4()}"
        self._previews[ref] = selected.content
        return ref

    def resolve(self, ref: str) -> bytes | None:
        """Return the bytes behind a live reference."""
        return self._previews.get(ref)

    def release(self, ref: str) -> None:
        """Drop a reference, raising ``KeyError`` if it is not live."""
        if ref not in self._previews:
            raise KeyError(ref)
        del self._previews[ref]

    @property
    def active_count(self) -> int:
        return len(self._previews)
