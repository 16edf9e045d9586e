"""
quotesync remote quote source.

Fetches the remote collection over HTTP and classifies failures as
transient (retriable) or permanent.
"""

from __future__ import annotations

import json
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

import httpx

from quotesync.core.errors import (
    PermanentFetchError,
    QuoteValidationError,
    TransientFetchError,
)
from quotesync.core.logging import get_logger
from quotesync.core.models import Quote

logger = get_logger(__name__)


@dataclass(frozen=True)
class RemoteResponse:
    status: int
    body: bytes


Transport = Callable[[str], Awaitable[RemoteResponse]]


def is_transient_status(status: int) -> bool:
    return status == 429 or status >= 500


class HttpTransport:
    """
    httpx-backed transport returning raw status and body.

    Attributes:
        timeout: Request timeout in seconds
        _client: Lazily created httpx.AsyncClient
    """

    def __init__(
        self,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.timeout = timeout
        self._client = client

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=self.timeout)
            logger.debug("Created HTTP client", timeout=self.timeout)
        return self._client

    async def __call__(self, url: str) -> RemoteResponse:
        client = self._get_client()
        try:
            response = await client.get(url)
        except httpx.TransportError as exc:
            raise TransientFetchError(f"Transport error: {exc}") from exc
        except httpx.RequestError as exc:
            raise PermanentFetchError(f"Request failed: {exc}") from exc
        return RemoteResponse(status=response.status_code, body=response.content)

    async def close(self) -> None:
        """Close the HTTP client and release connections."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            logger.debug("Closed HTTP client")


class RemoteQuoteSource:
    """
    Remote collection of posts mapped to quotes.

    Each post's ``title`` (or ``text``) becomes the quote text. The category
    is the post's own ``category`` when it has one, otherwise
    ``category_label`` formatted with the post's fields, e.g.
    ``"User {userId}"``.
    """

    def __init__(
        self,
        transport: Transport,
        url: str,
        category_label: str = "Server Sync",
    ) -> None:
        self.transport = transport
        self.url = url
        self.category_label = category_label

    async def fetch(self) -> list[Quote]:
        """
        Fetch and map the remote collection once.

        Raises:
            TransientFetchError: Transport failure, HTTP 429 or 5xx
            PermanentFetchError: Any other non-2xx status or a malformed body
        """
        response = await self.transport(self.url)

        if not 200 <= response.status < 300:
            message = f"Server status: {response.status}"
            if is_transient_status(response.status):
                raise TransientFetchError(message, status_code=response.status)
            raise PermanentFetchError(message, status_code=response.status)

        try:
            payload = json.loads(response.body)
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise PermanentFetchError(
                f"Invalid JSON response: {exc}", status_code=response.status
            ) from exc

        if not isinstance(payload, list):
            raise PermanentFetchError(
                f"Expected a JSON array, got {type(payload).__name__}",
                status_code=response.status,
            )

        quotes: list[Quote] = []
        for index, item in enumerate(payload):
            quote = self._to_quote(item)
            if quote is None:
                logger.warning("Skipping unusable remote item", index=index)
                continue
            quotes.append(quote)
        return quotes

    def _to_quote(self, item: Any) -> Quote | None:
        if not isinstance(item, dict):
            return None
        text = item.get("title") or item.get("text")
        category = item.get("category")
        if not isinstance(category, str) or not category.strip():
            category = self._label_for(item)
        try:
            return Quote(text=text, category=category)
        except QuoteValidationError:
            return None

    def _label_for(self, item: dict[str, Any]) -> str:
        try:
            return self.category_label.format_map(item)
        except (KeyError, IndexError, ValueError, AttributeError, TypeError):
            return self.category_label
