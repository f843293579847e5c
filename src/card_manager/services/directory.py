"""Paginated, searchable user directory widget."""

import logging
from dataclasses import dataclass, field

from pydantic import ValidationError

from card_manager.adapters.card_api_client import CardApiClient, CardApiError
from card_manager.adapters.notifier import Notifier
from card_manager.domain.api_models import UsersResponse
from card_manager.domain.directory import (
    DirectoryQuery,
    DirectoryResult,
    DirectoryStatus,
    DirectoryView,
    PageControls,
    Pagination,
    UserRecord,
)
from card_manager.domain.notices import Notice, Severity
from card_manager.services.debounce import Debouncer

DEFAULT_PAGE_SIZE = 10
DEFAULT_SEARCH_DEBOUNCE_SECONDS = 0.3

LOAD_ERROR_MESSAGE = "Failed to fetch users"

_logger = logging.getLogger(__name__)


@dataclass
class DirectoryWidget:
    """User table fed one page at a time by the card API.

    Every load takes a fresh generation number; a response is applied only if
    its generation is still the latest, so a slow stale page can never
    overwrite a newer one.
    """

    api_client: CardApiClient
    notifier: Notifier
    page_size: int = DEFAULT_PAGE_SIZE
    search_debounce_seconds: float = DEFAULT_SEARCH_DEBOUNCE_SECONDS
    status: DirectoryStatus = field(default=DirectoryStatus.IDLE, init=False)
    search_term: str = field(default="", init=False)
    query: DirectoryQuery | None = field(default=None, init=False)
    users: list[UserRecord] = field(default_factory=list, init=False)
    pagination: Pagination = field(default_factory=Pagination, init=False)
    error: str | None = field(default=None, init=False)
    _generation: int = field(default=0, init=False, repr=False)
    _mounted: bool = field(default=False, init=False, repr=False)
    _debouncer: Debouncer = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.page_size < 1:
            raise ValueError("page_size must be positive")
        self._debouncer = Debouncer(self.search_debounce_seconds)

    @property
    def current_page(self) -> int:
        """Page of the most recent request, defaulting to the first."""
        return self.query.page if self.query else 1

    @property
    def _applied_term(self) -> str:
        return self.query.search_term if self.query else ""

    async def mount(self) -> None:
        """Run the initial load once."""
        if self._mounted:
            return
        self._mounted = True
        await self.load(1, "")

    async def load(self, page: int, search_term: str = "") -> DirectoryResult | None:
        """Fetch a page of users and display it if still current."""
        if page < 1:
            raise ValueError("page must be >= 1")
        self._generation += 1
        generation = self._generation
        query = DirectoryQuery(
            page=page, page_size=self.page_size, search_term=search_term
        )
        self.query = query
        self.status = DirectoryStatus.LOADING
        self.error = None

        try:
            payload = await self.api_client.list_users(
                page=query.page,
                limit=query.page_size,
                search=query.search_term or None,
            )
            result = UsersResponse.model_validate(payload).to_result()
        except (CardApiError, ValidationError) as exc:
            if generation != self._generation:
                _logger.debug("Dropping stale directory failure: %s", exc)
                return None
            _logger.warning("Directory load failed for %s: %s", query, exc)
            self._mark_errored()
            return None
        except Exception:
            if generation == self._generation:
                _logger.exception(
                    "Unexpected error loading directory for %s", query
                )
                self._mark_errored()
            raise

        if generation != self._generation:
            _logger.debug("Dropping stale directory response for %s", query)
            return None
        self.users = list(result.users)
        self.pagination = result.pagination
        self.status = DirectoryStatus.LOADED
        _logger.debug(
            "Directory loaded page=%s rows=%s total=%s",
            result.pagination.page,
            len(result.users),
            result.pagination.total,
        )
        return result

    def set_search_term(self, term: str) -> None:
        """Record a keystroke and reload page 1 once typing pauses."""
        if term == self.search_term:
            return
        self.search_term = term
        self._debouncer.schedule(lambda: self._load_search(term))

    async def wait_for_search(self) -> None:
        """Wait for a pending debounced search to fire and finish."""
        await self._debouncer.wait()

    async def go_to_page(self, page: int) -> DirectoryResult | None:
        """Load another page for the current search term."""
        self._debouncer.cancel()
        return await self.load(page, self.search_term)

    async def next_page(self) -> DirectoryResult | None:
        controls = self._page_controls()
        if controls is None or not controls.next_enabled:
            return None
        return await self.go_to_page(controls.active + 1)

    async def previous_page(self) -> DirectoryResult | None:
        controls = self._page_controls()
        if controls is None or not controls.previous_enabled:
            return None
        return await self.go_to_page(controls.active - 1)

    async def refresh(self) -> DirectoryResult | None:
        """Reload the current page; ignored while a load is outstanding."""
        if self.status is DirectoryStatus.LOADING:
            return None
        self._debouncer.cancel()
        if self.search_term != self._applied_term:
            return await self.load(1, self.search_term)
        return await self.load(self.current_page, self._applied_term)

    def close(self) -> None:
        """Cancel any search that has not fired yet."""
        self._debouncer.cancel()

    def view(self) -> DirectoryView:
        loading = self.status is DirectoryStatus.LOADING
        errored = self.status is DirectoryStatus.ERRORED
        show_table = self.status is DirectoryStatus.LOADED
        rows = self.users if show_table else []
        empty_message = None
        if show_table and not rows:
            empty_message = (
                "No users match your search criteria."
                if self._applied_term
                else "No users found."
            )
        return DirectoryView(
            status=self.status,
            search_term=self.search_term,
            refresh_enabled=not loading,
            loading_message="Loading users..." if loading else None,
            error_title="Error Loading Users" if errored else None,
            error_message=self.error if errored else None,
            retry_label="Try Again" if errored else None,
            show_table=show_table,
            rows=list(rows),
            empty_message=empty_message,
            footer_text=self._footer_text() if show_table and rows else None,
            page_controls=self._page_controls() if show_table else None,
        )

    def _mark_errored(self) -> None:
        self.status = DirectoryStatus.ERRORED
        self.error = LOAD_ERROR_MESSAGE
        self.notifier.notify(
            Notice(
                title="Error loading users",
                description=LOAD_ERROR_MESSAGE,
                severity=Severity.ERROR,
            )
        )

    async def _load_search(self, term: str) -> None:
        await self.load(1, term)

    def _footer_text(self) -> str:
        page = self.pagination.page or self.current_page
        start = (page - 1) * self.page_size + 1
        end = start + len(self.users) - 1
        total = self.pagination.total or len(self.users)
        text = f"Showing {start} to {end} of {total} users"
        if self._applied_term:
            text += f' matching "{self._applied_term}"'
        return text

    def _page_controls(self) -> PageControls | None:
        if self.status is not DirectoryStatus.LOADED:
            return None
        total_pages = max(self.pagination.total_pages, 1)
        active = min(max(self.pagination.page or self.current_page, 1), total_pages)
        return PageControls(
            pages=list(range(1, total_pages + 1)),
            active=active,
            previous_enabled=active > 1,
            next_enabled=active < total_pages,
        )
