"""
Base client with HTTP session management and error handling.

Provides the foundation for both Steam API clients: a lazily created
httpx client, a request helper that turns transport failures and
error statuses into typed exceptions, and structured logging.
Requests are never retried.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Generic, TypeVar

import httpx

from steam_mac_check.config import SteamAPIConfig
from steam_mac_check.logger import get_logger

# Type variable for response models
T = TypeVar("T")


class CatalogError(Exception):
    """Base exception for Steam catalog errors."""

    def __init__(
        self,
        message: str,
        *,
        source: str | None = None,
        endpoint: str | None = None,
        status_code: int | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.source = source
        self.endpoint = endpoint
        self.status_code = status_code
        self.original_error = original_error
        self.timestamp = datetime.now(timezone.utc)


class APIError(CatalogError):
    """Raised when the API returns an error response."""

    pass


class ValidationError(CatalogError):
    """Raised when a response body does not match the expected schema."""

    pass


class RetrievalError(CatalogError):
    """Raised when the owned-games list cannot be retrieved. Fatal to a run."""

    pass


class BaseClient(ABC, Generic[T]):
    """
    Abstract base class for Steam API clients.

    Provides common functionality including:
    - HTTP client management
    - Error status and transport failure mapping
    - JSON decoding
    - Structured logging

    Subclasses must implement:
    - source_name: Identifier for the data source
    - _parse_response(): Response parsing and validation
    """

    def __init__(
        self,
        config: SteamAPIConfig,
        *,
        max_connections: int | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            config: Steam API configuration
            max_connections: Connection pool size (None is unbounded)
            http_client: Pre-built httpx client to use instead of creating one
        """
        self._config = config
        self._max_connections = max_connections
        self._owns_client = http_client is None
        self._client: httpx.AsyncClient | None = http_client
        self._logger = get_logger(
            self.__class__.__name__,
            component="client",
            source=self.source_name,
        )

    @property
    @abstractmethod
    def source_name(self) -> str:
        """Return identifier for this data source."""
        ...

    @property
    def client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self._config.timeout_seconds),
                limits=httpx.Limits(
                    max_connections=self._max_connections,
                    max_keepalive_connections=self._max_connections or 20,
                ),
                follow_redirects=True,
                headers={
                    "User-Agent": "SteamMacCheck/1.0",
                    "Accept": "application/json",
                },
            )
            self._owns_client = True
        return self._client

    async def close(self) -> None:
        """Close HTTP client and release resources."""
        if self._owns_client and self._client is not None and not self._client.is_closed:
            await self._client.aclose()
        self._client = None

    async def __aenter__(self) -> "BaseClient[T]":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.close()

    async def _make_request(
        self,
        method: str,
        url: str,
        **kwargs: Any,
    ) -> httpx.Response:
        """
        Make a single HTTP request.

        Args:
            method: HTTP method (GET, POST, etc.)
            url: Request URL
            **kwargs: Additional arguments passed to httpx

        Returns:
            httpx.Response: Successful response

        Raises:
            APIError: If API returns error response
            CatalogError: If the request could not be completed
        """
        self._logger.debug("Making request", method=method, url=url)

        try:
            response = await self.client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            raise CatalogError(
                f"Request failed: {e.__class__.__name__}: {e}",
                source=self.source_name,
                endpoint=url,
                original_error=e,
            ) from e

        if response.status_code >= 400:
            raise APIError(
                f"API error: {response.status_code}",
                source=self.source_name,
                endpoint=url,
                status_code=response.status_code,
            )

        return response

    def _decode_json(self, response: httpx.Response) -> Any:
        """
        Decode a JSON body.

        Raises:
            ValidationError: If the body is not valid JSON
        """
        try:
            return response.json()
        except ValueError as e:
            raise ValidationError(
                f"Response is not valid JSON: {e}",
                source=self.source_name,
                endpoint=str(response.request.url),
                status_code=response.status_code,
                original_error=e,
            ) from e

    @abstractmethod
    def _parse_response(self, raw_data: Any) -> T:
        """
        Parse and validate raw API response.

        Args:
            raw_data: Decoded JSON response from API

        Returns:
            T: Validated response model

        Raises:
            ValidationError: If response doesn't match expected schema
        """
        ...
