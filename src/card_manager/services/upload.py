"""Visiting card upload widget."""

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from pydantic import ValidationError

from card_manager.adapters.card_api_client import CardApiClient, CardApiError
from card_manager.adapters.notifier import Notifier
from card_manager.adapters.preview_store import PreviewStore
from card_manager.domain.api_models import UploadResponse
from card_manager.domain.notices import Notice, Severity
from card_manager.domain.uploads import SelectedFile, UploadState, UploadView

MAX_UPLOAD_BYTES = 5 * 1024 * 1024

TITLE = "Upload Visiting Card"
DROP_PROMPT = "Drop your visiting card here"
SUBMIT_LABEL = "Upload & Process"
UPLOADING_LABEL = "Uploading..."
SUCCESS_LABEL = "Uploaded Successfully"

_logger = logging.getLogger(__name__)


@dataclass
class UploadWidget:
    """Single-image upload form backed by the card API.

    The widget owns one selection at a time together with its preview
    reference. Every path that drops a selection releases its preview, so a
    store never accumulates stale handles.
    """

    api_client: CardApiClient
    notifier: Notifier
    preview_store: PreviewStore
    max_upload_bytes: int = MAX_UPLOAD_BYTES
    on_upload_complete: Callable[[str], None] | None = None
    state: UploadState = field(default=UploadState.IDLE, init=False)
    selected_file: SelectedFile | None = field(default=None, init=False)
    preview_ref: str | None = field(default=None, init=False)
    image_url: str | None = field(default=None, init=False)
    _selection_id: int = field(default=0, init=False, repr=False)

    def select_file(self, candidate: SelectedFile) -> bool:
        """Validate and adopt a candidate image, replacing any prior one."""
        if self.state is UploadState.UPLOADING:
            _logger.info("Ignoring file selection while an upload is in flight")
            return False
        if not candidate.is_image:
            self.notifier.notify(
                Notice(
                    title="Invalid file type",
                    description="Please select an image file.",
                    severity=Severity.ERROR,
                )
            )
            return False
        if candidate.size > self.max_upload_bytes:
            limit = _limit_label(self.max_upload_bytes)
            self.notifier.notify(
                Notice(
                    title="File too large",
                    description=f"Please select an image smaller than {limit}.",
                    severity=Severity.ERROR,
                )
            )
            return False

        self._release_preview()
        self._selection_id += 1
        self.selected_file = candidate
        self.preview_ref = self.preview_store.create(candidate)
        self.image_url = None
        self.state = UploadState.FILE_SELECTED
        _logger.debug("Selected %s (%s bytes)", candidate.name, candidate.size)
        return True

    def select_files(self, candidates: Sequence[SelectedFile]) -> bool:
        """Adopt the first of several dropped or picked files."""
        if not candidates:
            return False
        return self.select_file(candidates[0])

    async def submit(self) -> str | None:
        """Upload the selected image and return its URL on success."""
        if self.selected_file is None or self.state in {
            UploadState.UPLOADING,
            UploadState.SUCCESS,
        }:
            return None

        selected = self.selected_file
        selection_id = self._selection_id
        self.state = UploadState.UPLOADING
        try:
            payload = await self.api_client.upload_visiting_card(
                filename=selected.name,
                content=selected.content,
                content_type=selected.content_type,
            )
            image_url = UploadResponse.model_validate(payload).image_url
        except (CardApiError, ValidationError) as exc:
            if selection_id != self._selection_id:
                _logger.info("Discarding failed upload for a cleared selection")
                return None
            _logger.warning("Upload of %s failed: %s", selected.name, exc)
            self._mark_failed()
            return None
        except Exception:
            if selection_id == self._selection_id:
                _logger.exception("Unexpected error uploading %s", selected.name)
                self._mark_failed()
            raise

        if selection_id != self._selection_id:
            _logger.info("Discarding upload result for a cleared selection")
            return None
        self.state = UploadState.SUCCESS
        self.image_url = image_url
        if self.on_upload_complete is not None:
            self.on_upload_complete(image_url)
        self.notifier.notify(
            Notice(
                title="Upload successful!",
                description="Your visiting card has been uploaded and processed.",
            )
        )
        return image_url

    def clear(self) -> None:
        """Drop the selection and return to the initial state."""
        self._release_preview()
        self._selection_id += 1
        self.selected_file = None
        self.image_url = None
        self.state = UploadState.IDLE

    def close(self) -> None:
        """Tear the widget down, releasing any live preview."""
        self.clear()

    def view(self) -> UploadView:
        selected = self.selected_file
        if self.state is UploadState.UPLOADING:
            submit_label = UPLOADING_LABEL
        elif self.state is UploadState.SUCCESS:
            submit_label = SUCCESS_LABEL
        else:
            submit_label = SUBMIT_LABEL
        return UploadView(
            state=self.state,
            title=TITLE,
            prompt=DROP_PROMPT,
            show_drop_zone=selected is None,
            file_name=selected.name if selected else None,
            size_label=selected.size_label if selected else None,
            preview_ref=self.preview_ref,
            submit_label=submit_label,
            submit_enabled=selected is not None
            and self.state in {UploadState.FILE_SELECTED, UploadState.FAILED},
            clear_enabled=selected is not None,
        )

    def _mark_failed(self) -> None:
        self.state = UploadState.FAILED
        self.notifier.notify(
            Notice(
                title="Upload failed",
                description="Please try again later.",
                severity=Severity.ERROR,
            )
        )

    def _release_preview(self) -> None:
        if self.preview_ref is None:
            return
        ref = self.preview_ref
        self.preview_ref = None
        self.preview_store.release(ref)


def _limit_label(max_bytes: int) -> str:
    """Compact megabyte limit for messages, e.g. ``5MB``."""
    return f"{max_bytes / (1024 * 1024):g}MB"
