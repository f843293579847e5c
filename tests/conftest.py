"""Shared test fixtures."""

import asyncio
from dataclasses import dataclass, field

import pytest

from card_manager.adapters.card_api_client import CardApiClient
from card_manager.adapters.notifier import Notifier
from card_manager.adapters.preview_store import InMemoryPreviewStore
from card_manager.config import Settings
from card_manager.domain.notices import Notice, Severity
from card_manager.domain.uploads import SelectedFile
from card_manager.services.directory import DirectoryWidget
from card_manager.services.upload import UploadWidget

MB = 1024 * 1024


def make_user(index: int) -> dict[str, object]:
    return {
        "id": f"user-{index}",
        "name": f"User {index}",
        "email": f"user{index}@example.com",
        "website": f"https://user{index}.example.com",
        "phone": f"+1-555-010{index}",
        "jobTitle": "Engineer",
        "company": "Acme",
    }


def users_payload(
    count: int, total: int | None = None, total_pages: int = 1, page: int = 1
) -> dict[str, object]:
    return {
        "data": [make_user(i) for i in range(1, count + 1)],
        "pagination": {
            "total": count if total is None else total,
            "totalPages": total_pages,
            "page": page,
        },
    }


def make_file(
    name: str = "card.png", size: int = 2 * MB, content_type: str = "image/png"
) -> SelectedFile:
    return SelectedFile(
        name=name, size=size, content_type=content_type, content=b"\x89PNG" * 4
    )


@dataclass
class FakeCardApiClient(CardApiClient):
    """Fake card API that records calls and replays canned payloads."""

    upload_payload: dict[str, object] = field(
        default_factory=lambda: {"imageUrl": "https://x/y.png"}
    )
    users_payload: dict[str, object] = field(default_factory=lambda: users_payload(4))
    upload_error: Exception | None = None
    users_error: Exception | None = None
    upload_gate: asyncio.Event | None = None
    uploads: list[tuple[str, str]] = field(default_factory=list)
    user_calls: list[tuple[int, int, str | None]] = field(default_factory=list)

    async def upload_visiting_card(
        self, filename: str, content: bytes, content_type: str
    ) -> dict[str, object]:
        self.uploads.append((filename, content_type))
        if self.upload_gate is not None:
            await self.upload_gate.wait()
        if self.upload_error is not None:
            raise self.upload_error
        return self.upload_payload

    async def list_users(
        self, page: int, limit: int, search: str | None = None
    ) -> dict[str, object]:
        self.user_calls.append((page, limit, search))
        if self.users_error is not None:
            raise self.users_error
        return self.users_payload


@dataclass
class RecordingNotifier(Notifier):
    """Notifier that keeps every notice for assertions."""

    notices: list[Notice] = field(default_factory=list)

    def notify(self, notice: Notice) -> None:
        self.notices.append(notice)

    @property
    def titles(self) -> list[str]:
        return [notice.title for notice in self.notices]

    @property
    def errors(self) -> list[Notice]:
        return [n for n in self.notices if n.severity is Severity.ERROR]


@pytest.fixture
def settings() -> Settings:
    return Settings(
        api_base_url="https://cards.test",
        search_debounce_seconds=0.01,
    )


@pytest.fixture
def api_client() -> FakeCardApiClient:
    return FakeCardApiClient()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def preview_store() -> InMemoryPreviewStore:
    return InMemoryPreviewStore()


@pytest.fixture
def completed_urls() -> list[str]:
    return []


@pytest.fixture
def upload_widget(
    api_client: FakeCardApiClient,
    notifier: RecordingNotifier,
    preview_store: InMemoryPreviewStore,
    completed_urls: list[str],
) -> UploadWidget:
    return UploadWidget(
        api_client=api_client,
        notifier=notifier,
        preview_store=preview_store,
        on_upload_complete=completed_urls.append,
    )


@pytest.fixture
def directory_widget(
    api_client: FakeCardApiClient, notifier: RecordingNotifier
) -> DirectoryWidget:
    return DirectoryWidget(
        api_client=api_client,
        notifier=notifier,
        search_debounce_seconds=0.01,
    )
