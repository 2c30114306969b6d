"""
HTTP client for the editor API.

The editor exposes RPC-style methods: every call is a JSON ``POST`` to
``{api_url}/{method}`` answering ``{"data": ...}``.

Example:
    async with MentionApiClient(MentionMenuConfig.from_env()) as api:
        data = await api.suggest_mentions("al")
"""

import logging
from typing import Any

import httpx

from .config import MentionMenuConfig
from .errors import MalformedResponseError, TransportError

logger = logging.getLogger(__name__)

SUGGESTIONS_METHOD = "suggestions.mention"
DOCUMENT_USERS_METHOD = "documents.users"


class MentionApiClient:
    """Thin async wrapper over the two editor API methods the menu needs.

    No retries are performed; failures surface as TransportError.
    """

    def __init__(
        self,
        config: MentionMenuConfig | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: API location, credentials and timeout.
            http_client: Optional preconfigured client (e.g. with a mock
                transport). When omitted one is created and owned here.
        """
        self.config = config or MentionMenuConfig()
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(
            timeout=self.config.timeout_seconds
        )

    async def __aenter__(self) -> "MentionApiClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_client:
            await self._http.aclose()

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.config.api_token:
            headers["Authorization"] = f"Bearer {self.config.api_token}"
        return headers

    async def post(self, method: str, payload: dict[str, Any]) -> Any:
        """Call an API method and return the ``data`` field of its response.

        Raises:
            TransportError: The request failed or returned a non-2xx status.
            MalformedResponseError: The body was not a ``{"data": ...}`` object.
        """
        url = f"{self.config.api_url.rstrip('/')}/{method}"
        logger.debug(f"POST {method}")

        try:
            response = await self._http.post(url, json=payload, headers=self._headers())
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise TransportError(
                f"{method} returned HTTP {e.response.status_code}",
                method=method,
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            raise TransportError(f"{method} failed: {e}", method=method) from e

        try:
            body = response.json()
        except ValueError as e:
            raise MalformedResponseError(
                f"{method} returned a non-JSON body", method=method
            ) from e

        if not isinstance(body, dict) or "data" not in body:
            raise MalformedResponseError(
                f"{method} response has no 'data' field", method=method
            )
        return body["data"]

    async def suggest_mentions(self, query: str) -> dict[str, Any]:
        """Return ``{"users": [...], "documents": [...]}`` matching a query."""
        data = await self.post(SUGGESTIONS_METHOD, {"query": query})
        if not isinstance(data, dict):
            raise MalformedResponseError(
                f"{SUGGESTIONS_METHOD} data is not an object",
                method=SUGGESTIONS_METHOD,
            )
        return data

    async def list_document_users(
        self, document_id: str, user_id: str
    ) -> list[dict[str, Any]]:
        """Return the access records for ``user_id`` on ``document_id``.

        An empty list means the user cannot currently see the document.
        """
        data = await self.post(
            DOCUMENT_USERS_METHOD, {"id": document_id, "userId": user_id}
        )
        if not isinstance(data, list):
            raise MalformedResponseError(
                f"{DOCUMENT_USERS_METHOD} data is not a list",
                method=DOCUMENT_USERS_METHOD,
            )
        return data
