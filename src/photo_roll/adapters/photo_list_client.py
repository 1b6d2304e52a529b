"""HTTP client for photo list endpoints."""

from dataclasses import dataclass
from typing import Protocol

import httpx


class PhotoListClient(Protocol):
    """Interface for a single photo list endpoint."""

    async def list_photos(self) -> list[dict[str, object]]:
        """Return the raw photo rows in server order."""


@dataclass
class HttpxPhotoListClient(PhotoListClient):
    """HTTPX-backed photo list client."""

    base_url: str
    path: str
    http_client: httpx.AsyncClient
    timeout: float = 15

    @classmethod
    def create(
        cls, base_url: str, path: str, timeout: float = 15
    ) -> "HttpxPhotoListClient":
        """Create a photo list client with a managed httpx session."""
        return cls(
            base_url=base_url,
            path=path,
            http_client=httpx.AsyncClient(),
            timeout=timeout,
        )

    @property
    def url(self) -> str:
        """Full list endpoint URL."""
        return f"{self.base_url.rstrip('/')}/{self.path.lstrip('/')}"

    async def list_photos(self) -> list[dict[str, object]]:
        """Fetch the photo list with a single GET."""
        response = await self.http_client.get(self.url, timeout=self.timeout)
        response.raise_for_status()
        payload = response.json()
        if not isinstance(payload, list):
            raise ValueError(f"Expected a JSON list from {self.url}")
        return payload

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
