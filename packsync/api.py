"""API client for the pack web backend."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any
from urllib.parse import quote

import httpx

from .exceptions import (
    PackAPIError,
    PackAuthenticationError,
    PackConfigError,
    PackNetworkError,
    PackNotFoundError,
)
from .models import PackMetadata

if TYPE_CHECKING:
    from .config import Settings

logger = logging.getLogger(__name__)


class PackClient:
    """Client for the pack web API.

    Every request carries the bearer token and a JSON content type; calls
    that send another body type pass their own ``Content-Type``. Requests
    are not retried.
    """

    def __init__(
        self,
        api_url: str | None,
        token: str | None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize the pack API client.

        Args:
            api_url: Base URL of the API
            token: Bearer token used for every request
            timeout: Request timeout in seconds (transport default if omitted)
            transport: Optional httpx transport, mainly for tests

        Raises:
            PackConfigError: If the token or base URL is missing
        """
        if not token:
            raise PackConfigError("Input required and not supplied: web_token")
        if not api_url:
            raise PackConfigError("Input required and not supplied: api")

        self.api_url = api_url.rstrip("/")
        self.token = token
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create the httpx client."""
        if self._client is None or self._client.is_closed:
            kwargs: dict[str, Any] = {
                "headers": {
                    "Content-Type": "application/json",
                    "Authorization": f"Bearer {self.token}",
                },
                "follow_redirects": True,
            }
            if self.timeout is not None:
                kwargs["timeout"] = httpx.Timeout(self.timeout)
            if self._transport is not None:
                kwargs["transport"] = self._transport
            self._client = httpx.AsyncClient(**kwargs)
        return self._client

    async def aclose(self) -> None:
        """Close the client and release connections."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "PackClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    def _url(self, endpoint: str) -> str:
        return f"{self.api_url}/{endpoint.lstrip('/')}"

    def _error_from_status(self, e: httpx.HTTPStatusError, url: str) -> PackAPIError:
        """Map an HTTP error status to a packsync exception.

        Args:
            e: The HTTP error raised by httpx
            url: The requested URL

        Returns:
            Exception to raise
        """
        status_code = e.response.status_code
        body = e.response.text

        if status_code == 401:
            return PackAuthenticationError(
                "Invalid web token or unauthorized access",
                url=url,
                status_code=status_code,
                body=body,
            )
        if status_code == 404:
            return PackNotFoundError(
                "Resource not found", url=url, status_code=status_code, body=body
            )

        error_msg = f"API request failed with status {status_code}"
        try:
            if e.response.content:
                error_data = e.response.json()
                if isinstance(error_data, dict):
                    msg = error_data.get("message") or error_data.get("error")
                    if msg:
                        error_msg = f"{error_msg}: {msg}"
        except ValueError:
            # Not JSON, keep the status-based message
            pass
        return PackAPIError(error_msg, url=url, status_code=status_code, body=body)

    async def _request(self, method: str, endpoint: str, **kwargs: Any) -> Any:
        """Make an API request.

        Args:
            method: HTTP method
            endpoint: API endpoint path
            **kwargs: Additional arguments passed to httpx

        Returns:
            Decoded JSON body, response text for non-JSON bodies, or ``{}``
            for an empty body

        Raises:
            PackAPIError: If the server answers with a non-2xx status
            PackNetworkError: If no response could be obtained
        """
        url = self._url(endpoint)
        client = self._get_client()
        logger.debug(f"{method} {url}")

        try:
            response = await client.request(method, url, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise self._error_from_status(e, url) from e
        except httpx.RequestError as e:
            raise PackNetworkError(f"Network error: {e}", url=url) from e

        if not response.content:
            return {}
        content_type = response.headers.get("Content-Type", "")
        if "application/json" in content_type:
            try:
                return response.json()
            except ValueError:
                logger.debug(f"Invalid JSON body from {url}")
        return response.text

    # =========================
    # Verbs
    # =========================

    async def get(self, path: str) -> Any:
        return await self._request("GET", path)

    async def put(
        self,
        path: str,
        body: Any = None,
        headers: dict[str, str] | None = None,
        content: bytes | None = None,
    ) -> Any:
        """Put a resource.

        Args:
            path: API endpoint path
            body: JSON-serialisable body
            headers: Per-call headers, overriding the client defaults
            content: Raw body, used instead of ``body`` when given

        Returns:
            Response body
        """
        kwargs: dict[str, Any] = {}
        if content is not None:
            kwargs["content"] = content
        elif body is not None:
            kwargs["json"] = body
        if headers:
            kwargs["headers"] = headers
        return await self._request("PUT", path, **kwargs)

    # =========================
    # Pack resources
    # =========================

    async def get_pack(self) -> PackMetadata:
        """Fetch the pack metadata stored on the backend."""
        data = await self.get("/pack")
        return PackMetadata.from_dict(data if isinstance(data, dict) else {})

    async def update_pack(self, data: dict[str, Any]) -> Any:
        return await self.put("/pack", data)

    async def update_page(self, content: dict[str, Any]) -> Any:
        return await self.put("/pack/page", content)

    async def update_assets(self, headers: dict[str, str], body: bytes) -> Any:
        """Upload the asset files as one multipart body.

        Args:
            headers: Multipart headers (content type with boundary)
            body: Encoded multipart body
        """
        return await self.put("/pack/assets", headers=headers, content=body)

    async def create_release(self, tag: str, payload: dict[str, Any]) -> Any:
        """Create or replace the release for a tag.

        Returns:
            The release record assigned by the backend
        """
        return await self.put(f"/pack/release/{quote(tag, safe='')}", payload)


def create_client(settings: "Settings", **kwargs: Any) -> PackClient:
    """Create a client bound to the configured API URL and token."""
    return PackClient(api_url=settings.api_url, token=settings.web_token, **kwargs)
