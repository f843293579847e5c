"""Domain models for the user directory."""

from dataclasses import dataclass, field
from enum import Enum


class DirectoryStatus(str, Enum):
    """Load status of the directory widget."""

    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    ERRORED = "errored"


@dataclass(frozen=True)
class UserRecord:
    """A user row as returned by the backend, displayed verbatim."""

    id: str
    name: str
    email: str
    website: str
    phone: str
    job_title: str
    company: str


@dataclass(frozen=True)
class Pagination:
    """Pagination metadata echoed by the server."""

    total: int = 0
    total_pages: int = 0
    page: int = 0


@dataclass(frozen=True)
class DirectoryQuery:
    """Parameters of a single directory fetch."""

    page: int
    page_size: int
    search_term: str = ""


@dataclass(frozen=True)
class DirectoryResult:
    """One page of users plus the server's pagination metadata."""

    users: list[UserRecord] = field(default_factory=list)
    pagination: Pagination = field(default_factory=Pagination)


@dataclass(frozen=True)
class PageControls:
    """State of the pager under the table."""

    pages: list[int]
    active: int
    previous_enabled: bool
    next_enabled: bool


@dataclass(frozen=True)
class DirectoryView:
    """What the directory card displays for the current state."""

    status: DirectoryStatus
    search_term: str
    refresh_enabled: bool
    loading_message: str | None
    error_title: str | None
    error_message: str | None
    retry_label: str | None
    show_table: bool
    rows: list[UserRecord]
    empty_message: str | None
    footer_text: str | None
    page_controls: PageControls | None
