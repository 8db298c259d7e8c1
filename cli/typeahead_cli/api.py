"""API client for the interests autocomplete service."""

from typing import Optional

import httpx
import structlog

from typeahead_cli.config import Settings, get_settings
from typeahead_cli.core.items import AutocompleteResponse, RawItem

logger = structlog.get_logger(__name__)


class ApiError(Exception):
    """Raised when an autocomplete request fails at the transport or HTTP level."""


class ApiClient:
    """Async API client for the autocomplete service."""

    def __init__(
        self,
        base_url: str = "https://be-v2.convose.com",
        token: Optional[str] = None,
        path: str = "/autocomplete/interests",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url
        self.token = token
        self.path = path
        self.timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs) -> "ApiClient":
        return cls(
            base_url=settings.api_base_url,
            token=settings.api_token,
            path=settings.autocomplete_path,
            timeout=settings.request_timeout,
            **kwargs,
        )

    async def __aenter__(self):
        await self.start()
        return self

    async def __aexit__(self, *args):
        await self.close()

    async def start(self) -> None:
        if self._client is None:
            headers = {"Accept": "application/json"}
            if self.token:
                headers["Authorization"] = self.token
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers=headers,
                timeout=self.timeout,
                transport=self._transport,
            )

    async def close(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            raise RuntimeError("ApiClient must be started or used as async context manager")
        return self._client

    async def query(self, term: str, limit: int, page: int) -> AutocompleteResponse:
        """Fetch one page of suggestions for term."""
        params = {"q": term, "limit": limit, "from": page}

        try:
            response = await self.client.get(self.path, params=params)
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise ApiError(f"Autocomplete request for {term!r} failed: {e}") from e

        try:
            data = response.json()
            items = [RawItem.from_dict(raw) for raw in data.get("autocomplete") or []]
        except (ValueError, KeyError, AttributeError, TypeError) as e:
            raise ApiError(f"Malformed autocomplete response for {term!r}: {e}") from e

        logger.debug(
            "Autocomplete response",
            term=term,
            page=page,
            count=len(items),
            pages_left=data.get("pages_left"),
        )

        return AutocompleteResponse(
            items=items,
            pages_left=data.get("pages_left") or 0,
        )


# Singleton instance for convenience
_api: Optional[ApiClient] = None


def get_api() -> ApiClient:
    """Get the global API client instance."""
    global _api
    if _api is None:
        _api = ApiClient.from_settings(get_settings())
    return _api
