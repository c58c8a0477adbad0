"""
Base Provider Client - Common HTTP pattern for the expert and trial providers.

Provides:
- Lazy httpx.AsyncClient management
- Query parameter encoding (booleans as "true"/"false", lists comma-joined)
- Response envelope unwrapping ({"data": ...})
- Consistent error handling: every transport or HTTP failure becomes a
  ProviderError so the search engine can apply its failure policy

No retries are performed here; a failed request fails the search call.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx
from typing_extensions import Self

from curalink_search.shared.exceptions import ErrorContext, ProviderError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0


def encode_params(params: dict[str, Any]) -> dict[str, str]:
    """Drop empty values and stringify the rest the way the REST backend expects."""
    encoded: dict[str, str] = {}
    for key, value in params.items():
        if value is None:
            continue
        if isinstance(value, bool):
            encoded[key] = "true" if value else "false"
            continue
        if isinstance(value, (list, tuple)):
            text = ",".join(str(v) for v in value)
        else:
            text = str(value).strip()
        if text:
            encoded[key] = text
    return encoded


class BaseProviderClient:
    """
    Base class for HTTP candidate providers.

    Subclasses set ``_service_name`` and ``_path`` and implement
    ``_records_from_payload()``.

    Example:
        class MyProvider(BaseProviderClient):
            _service_name = "MyAPI"
            _path = "/items"
    """

    _service_name: str = "API"
    _path: str = "/"

    def __init__(
        self,
        base_url: str,
        timeout: float = DEFAULT_TIMEOUT,
        headers: dict[str, str] | None = None,
    ) -> None:
        """
        Initialize client.

        Args:
            base_url: REST backend root, e.g. "http://localhost:8080/api/v1"
            timeout: Request timeout in seconds
            headers: Default headers for all requests (auth tokens etc.)
        """
        self._base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._headers = {"Accept": "application/json", **(headers or {})}
        self._client: httpx.AsyncClient | None = None

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy-init HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=self.timeout, headers=self._headers)
        return self._client

    @property
    def url(self) -> str:
        return f"{self._base_url}{self._path}"

    async def _get_json(self, params: dict[str, Any]) -> Any:
        """GET the provider endpoint and return the decoded body."""
        try:
            response = await self.client.get(self.url, params=encode_params(params))
            response.raise_for_status()
            return response.json()
        except httpx.TimeoutException as e:
            logger.warning(f"{self._service_name} timeout for params: {params}")
            raise self._error(f"{self._service_name} timed out", e) from e
        except httpx.HTTPStatusError as e:
            logger.warning(f"{self._service_name} HTTP error {e.response.status_code}")
            raise self._error(f"{self._service_name} returned HTTP {e.response.status_code}", e) from e
        except httpx.RequestError as e:
            logger.warning(f"{self._service_name} request error: {e}")
            raise self._error(f"{self._service_name} request failed", e) from e
        except ValueError as e:
            logger.warning(f"{self._service_name} returned invalid JSON: {e}")
            raise self._error(f"{self._service_name} returned invalid JSON", e) from e

    def _error(self, message: str, cause: Exception) -> ProviderError:
        return ProviderError(
            message,
            providers=(self._service_name,),
            context=ErrorContext(operation=f"GET {self._path}", related_errors=(cause,)),
        )

    @staticmethod
    def unwrap(payload: Any, *collection_keys: str) -> list[dict[str, Any]]:
        """
        Pull the record list out of the backend's response envelope.

        Accepts a bare list, ``{"data": [...]}``, or ``{"data": {"<key>": [...]}}``
        for any of ``collection_keys``.
        """
        if isinstance(payload, dict) and "data" in payload:
            payload = payload["data"]
        if isinstance(payload, dict):
            for key in collection_keys:
                if isinstance(payload.get(key), list):
                    payload = payload[key]
                    break
        if payload is None:
            return []
        if not isinstance(payload, list):
            raise ProviderError(
                "Unexpected provider response shape",
                context=ErrorContext(input_value=type(payload).__name__),
            )
        return [record for record in payload if isinstance(record, dict)]

    async def close(self) -> None:
        """Close HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()
