"""
==============================================================================
Content Service Client Module
==============================================================================

Async HTTP client for the headless content service query API.

Endpoint:
---------
    GET https://{project}.api.sanity.io/v{version}/data/query/{dataset}
        ?query=<GROQ>&$param=<json>

The CDN host ({project}.apicdn.sanity.io) serves cached results and is
used when `use_cdn` is enabled. Successful responses carry the query
result under the "result" key.

==============================================================================
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional

import httpx


# Module logger
logger = logging.getLogger(__name__)


class ContentServiceError(Exception):
    """Raised when a content service query cannot be completed."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class ContentClient:
    """
    Read-only client for content service queries.

    Attributes:
        project_id: Project identifier (first label of the host)
        dataset: Dataset to query
        api_version: Dated API version, without the leading "v"
        use_cdn: Whether to query the cached CDN host

    Example:
        >>> client = ContentClient("tt81m3xp", "production", "2024-01-03")
        >>> records = await client.fetch('*[_type == "product"]')
    """

    def __init__(
        self,
        project_id: str,
        dataset: str,
        api_version: str,
        use_cdn: bool = True,
        token: Optional[str] = None,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.project_id = project_id
        self.dataset = dataset
        self.api_version = api_version
        self.use_cdn = use_cdn
        self._token = token
        self._timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls, settings) -> "ContentClient":
        """Build a client from application settings."""
        return cls(
            project_id=settings.cms_project_id,
            dataset=settings.cms_dataset,
            api_version=settings.cms_api_version,
            use_cdn=settings.cms_use_cdn,
            token=settings.cms_token,
            timeout=settings.cms_timeout_seconds,
        )

    @property
    def query_url(self) -> str:
        """Full URL of the query endpoint."""
        domain = "apicdn.sanity.io" if self.use_cdn else "api.sanity.io"
        return (
            f"https://{self.project_id}.{domain}"
            f"/v{self.api_version}/data/query/{self.dataset}"
        )

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    @staticmethod
    def _params(query: str, params: Optional[Dict[str, Any]]) -> Dict[str, str]:
        encoded = {"query": query}
        for name, value in (params or {}).items():
            encoded[f"${name}"] = json.dumps(value)
        return encoded

    async def fetch(self, query: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """
        Run a query and return its result.

        Args:
            query: GROQ query string
            params: Query parameters, referenced as $name in the query

        Returns:
            The "result" member of the response body

        Raises:
            ContentServiceError: On transport errors, non-2xx responses
                or a body without a result
        """
        logger.debug(f"Querying content service: {self.query_url}")

        try:
            async with httpx.AsyncClient(
                timeout=self._timeout,
                transport=self._transport,
            ) as client:
                response = await client.get(
                    self.query_url,
                    params=self._params(query, params),
                    headers=self._headers(),
                )
        except httpx.HTTPError as e:
            raise ContentServiceError(f"Content service unreachable: {e}") from e

        if response.status_code != 200:
            raise ContentServiceError(
                f"Content service returned HTTP {response.status_code}",
                status_code=response.status_code,
            )

        try:
            body = response.json()
        except ValueError as e:
            raise ContentServiceError("Content service returned invalid JSON") from e

        if not isinstance(body, dict) or "result" not in body:
            raise ContentServiceError("Content service response has no result")

        return body["result"]
