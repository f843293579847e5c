"""Visiting card backend API client."""

from dataclasses import dataclass
from typing import Protocol

import httpx

UPLOAD_FIELD_NAME = "visitingCard"


class CardApiError(RuntimeError):
    """Raised when a card API call fails for any transport or status reason."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class CardApiClient(Protocol):
    """Interface for the visiting card backend."""

    async def upload_visiting_card(
        self, filename: str, content: bytes, content_type: str
    ) -> dict[str, object]:
        """Upload a visiting card image and return the raw JSON body."""

    async def list_users(
        self, page: int, limit: int, search: str | None = None
    ) -> dict[str, object]:
        """Fetch one page of users and return the raw JSON body."""


@dataclass
class HttpxCardApiClient(CardApiClient):
    """HTTPX-backed card API client."""

    base_url: str
    http_client: httpx.AsyncClient
    upload_path: str = "/api/upload-visiting-card"
    users_path: str = "/api/users"
    request_timeout_seconds: float = 15
    upload_timeout_seconds: float = 30

    @classmethod
    def create(  # noqa: PLR0913
        cls,
        base_url: str,
        upload_path: str = "/api/upload-visiting-card",
        users_path: str = "/api/users",
        request_timeout_seconds: float = 15,
        upload_timeout_seconds: float = 30,
    ) -> "HttpxCardApiClient":
        """Create a card API client with a managed httpx session."""
        return cls(
            base_url=base_url,
            http_client=httpx.AsyncClient(),
            upload_path=upload_path,
            users_path=users_path,
            request_timeout_seconds=request_timeout_seconds,
            upload_timeout_seconds=upload_timeout_seconds,
        )

    async def upload_visiting_card(
        self, filename: str, content: bytes, content_type: str
    ) -> dict[str, object]:
        """POST the image as multipart form data."""
        url = f"{self.base_url.rstrip('/')}{self.upload_path}"
        files = {UPLOAD_FIELD_NAME: (filename, content, content_type)}
        return await self._send(
            "POST",
            url,
            action="upload",
            files=files,
            timeout=self.upload_timeout_seconds,
        )

    async def list_users(
        self, page: int, limit: int, search: str | None = None
    ) -> dict[str, object]:
        """GET one page of users, omitting ``search`` when it is empty."""
        url = f"{self.base_url.rstrip('/')}{self.users_path}"
        params: dict[str, object] = {"page": page, "limit": limit}
        if search:
            params["search"] = search
        return await self._send(
            "GET",
            url,
            action="list_users",
            params=params,
            timeout=self.request_timeout_seconds,
        )

    async def _send(
        self, method: str, url: str, *, action: str, **kwargs: object
    ) -> dict[str, object]:
        try:
            response = await self.http_client.request(method, url, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise CardApiError(
                f"Card API {action} failed with status {exc.response.status_code}",
                status_code=exc.response.status_code,
            ) from exc
        except httpx.HTTPError as exc:
            raise CardApiError(f"Card API {action} failed: {exc}") from exc
        try:
            payload = response.json()
        except ValueError as exc:
            raise CardApiError(
                f"Card API {action} returned invalid JSON",
                status_code=response.status_code,
            ) from exc
        if not isinstance(payload, dict):
            raise CardApiError(
                f"Card API {action} returned a non-object body",
                status_code=response.status_code,
            )
        return payload

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
