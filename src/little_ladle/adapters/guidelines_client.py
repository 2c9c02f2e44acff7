"""Client for the static WHO nutrition guideline document."""

from dataclasses import dataclass
from typing import Protocol

import httpx


class GuidelinesClient(Protocol):
    """Interface for fetching WHO guideline data."""

    async def fetch_guidelines(self) -> dict[str, object]:
        """Return the raw guideline document."""


@dataclass
class HttpxGuidelinesClient(GuidelinesClient):
    """HTTPX-backed guideline client."""

    url: str
    http_client: httpx.AsyncClient
    timeout_seconds: float = 15.0

    @classmethod
    def create(cls, url: str, timeout_seconds: float = 15.0) -> "HttpxGuidelinesClient":
        """Create a guideline client with a managed httpx session."""
        return cls(
            url=url,
            http_client=httpx.AsyncClient(),
            timeout_seconds=timeout_seconds,
        )

    async def fetch_guidelines(self) -> dict[str, object]:
        """Fetch the guideline JSON document."""
        response = await self.http_client.get(self.url, timeout=self.timeout_seconds)
        response.raise_for_status()
        return response.json()

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
