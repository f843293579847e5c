"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from card_manager.adapters.card_api_client import CardApiClient, HttpxCardApiClient
from card_manager.adapters.notifier import LoggingNotifier, Notifier
from card_manager.adapters.preview_store import InMemoryPreviewStore, PreviewStore
from card_manager.app_logging import configure_logging
from card_manager.config import Settings
from card_manager.page import VisitingCardPage, log_upload_complete
from card_manager.services.directory import DirectoryWidget
from card_manager.services.upload import UploadWidget


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    api_client: CardApiClient
    notifier: Notifier
    preview_store: PreviewStore
    page: VisitingCardPage
    close_resources: Callable[[], Awaitable[None]]


def build_container(
    settings: Settings | None = None,
    on_upload_complete: Callable[[str], None] | None = None,
) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    configure_logging(resolved_settings.log_level)
    api_client = HttpxCardApiClient.create(
        base_url=resolved_settings.api_base_url,
        upload_path=resolved_settings.upload_path,
        users_path=resolved_settings.users_path,
        request_timeout_seconds=resolved_settings.request_timeout_seconds,
        upload_timeout_seconds=resolved_settings.upload_timeout_seconds,
    )
    notifier = LoggingNotifier()
    preview_store = InMemoryPreviewStore()
    upload = UploadWidget(
        api_client=api_client,
        notifier=notifier,
        preview_store=preview_store,
        max_upload_bytes=resolved_settings.max_upload_bytes,
        on_upload_complete=on_upload_complete or log_upload_complete,
    )
    directory = DirectoryWidget(
        api_client=api_client,
        notifier=notifier,
        page_size=resolved_settings.page_size,
        search_debounce_seconds=resolved_settings.search_debounce_seconds,
    )
    page = VisitingCardPage(upload=upload, directory=directory)

    async def close_resources() -> None:
        page.close()
        await api_client.close()

    return AppContainer(
        settings=resolved_settings,
        api_client=api_client,
        notifier=notifier,
        preview_store=preview_store,
        page=page,
        close_resources=close_resources,
    )
