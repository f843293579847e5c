"""Visiting card manager page composing the upload and directory widgets."""

import logging
from dataclasses import dataclass

from card_manager.services.directory import DirectoryWidget
from card_manager.services.upload import UploadWidget

TITLE = "Visiting Card Manager"
SUBTITLE = (
    "Upload visiting cards, extract information, "
    "and manage your professional contacts"
)
FOOTER = "Manage your professional network efficiently"

_logger = logging.getLogger(__name__)


def log_upload_complete(image_url: str) -> None:
    """Default upload-complete handler."""
    _logger.info("Image uploaded successfully: %s", image_url)


@dataclass
class VisitingCardPage:
    """Hosts both widgets side by side; they share no state."""

    upload: UploadWidget
    directory: DirectoryWidget
    title: str = TITLE
    subtitle: str = SUBTITLE
    footer: str = FOOTER

    async def mount(self) -> None:
        await self.directory.mount()

    def close(self) -> None:
        self.upload.close()
        self.directory.close()
