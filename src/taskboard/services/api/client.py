"""API client for Taskboard."""

from typing import Any, TypeVar

import httpx
from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from taskboard.models.exceptions import ApiError, TransportError
from taskboard.services.config_service import get_config_service
from taskboard.utils.logger import get_logger

T = TypeVar("T")


class APIClient:
    """HTTP client for the Taskboard API.

    Requests are sent exactly once. Non-2xx responses raise ``ApiError``
    and network failures raise ``TransportError``.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        if base_url is None or timeout is None:
            config_service = get_config_service()
            base_url = base_url or config_service.api_endpoint
            if timeout is None:
                timeout = config_service.config.api.timeout
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "APIClient":
        """Enter the async context manager."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit the async context manager and ensure the client is closed."""
        await self.close()

    def _get_headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                headers=self._get_headers(),
                follow_redirects=True,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and body.get("error"):
            return str(body["error"])
        return f"HTTP error! status: {response.status_code}"

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """Make an HTTP request to the API and return the decoded JSON body.

        Returns:
            The decoded body, or None for an empty (204) response

        Raises:
            ApiError: If the server answers with a non-2xx status
            TransportError: If the request never got a response
        """
        client = await self._get_client()
        url = path if path.startswith("/") else f"/{path}"

        try:
            response = await client.request(method=method, url=url, json=json, params=params)
        except httpx.RequestError as e:
            get_logger().warning("request failed: %s %s - %s", method, url, e)
            raise TransportError(f"Could not reach {self.base_url}: {e}") from e

        if response.is_error:
            message = self._error_message(response)
            get_logger().warning(
                "request failed: %s %s -> %d %s", method, url, response.status_code, message
            )
            raise ApiError(message, response.status_code)

        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            get_logger().warning("request failed: %s %s - body is not JSON", method, url)
            raise ApiError("Invalid JSON response", response.status_code) from e

    async def get(self, path: str, *, params: dict[str, Any] | None = None) -> Any:
        """Make a GET request."""
        return await self.request("GET", path, params=params)

    async def post(self, path: str, *, json: dict[str, Any] | None = None) -> Any:
        """Make a POST request."""
        return await self.request("POST", path, json=json)

    async def put(self, path: str, *, json: dict[str, Any] | None = None) -> Any:
        """Make a PUT request."""
        return await self.request("PUT", path, json=json)

    async def delete(self, path: str) -> Any:
        """Make a DELETE request."""
        return await self.request("DELETE", path)


def get_client() -> APIClient:
    """Get an API client instance."""
    return APIClient()


def parse_reply(schema: type[T], data: Any) -> T:
    """Validate a decoded reply, raising ``ApiError`` when it has the wrong shape."""
    try:
        return TypeAdapter(schema).validate_python(data)
    except PydanticValidationError as e:
        get_logger().warning("unexpected reply for %s: %s", schema, e)
        raise ApiError(f"Invalid response from server ({e.error_count()} errors)") from e
