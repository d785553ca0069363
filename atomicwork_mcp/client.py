"""HTTP client for the Atomicwork REST API."""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from .config import Settings
from .errors import AtomicworkAPIError, AtomicworkConnectionError

logger = logging.getLogger(__name__)


class AtomicworkClient:
    """Issue single JSON requests against the configured Atomicwork API."""

    def __init__(
        self,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.settings = settings
        self._transport = transport

    @property
    def headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "x-api-key": self.settings.ATOMICWORK_API_KEY,
        }

    def url_for(self, endpoint: str) -> str:
        return f"{self.settings.ATOMICWORK_BASE_URL}{endpoint}"

    async def request(
        self,
        endpoint: str,
        method: str = "GET",
        body: Any = None,
    ) -> Any:
        """Send a request and return the decoded JSON body.

        Raises :class:`AtomicworkAPIError` for non-2xx responses and
        :class:`AtomicworkConnectionError` when the API cannot be reached.
        """
        url = self.url_for(endpoint)
        logger.debug("%s %s", method, url)

        async with httpx.AsyncClient(
            transport=self._transport,
            timeout=self.settings.ATOMICWORK_TIMEOUT,
        ) as client:
            try:
                resp = await client.request(
                    method, url, headers=self.headers, json=body
                )
            except (httpx.RequestError, httpx.InvalidURL) as exc:
                logger.error("Request error calling %s: %s", url, exc)
                raise AtomicworkConnectionError(str(exc) or exc.__class__.__name__) from exc

        if not resp.is_success:
            logger.warning("Atomicwork returned %s for %s %s", resp.status_code, method, url)
            raise AtomicworkAPIError(resp.status_code, resp.text)

        try:
            return resp.json()
        except ValueError as exc:
            raise AtomicworkAPIError(
                resp.status_code, f"Invalid JSON in response: {exc}"
            ) from exc

    async def get(self, endpoint: str) -> Any:
        return await self.request(endpoint)

    async def post(self, endpoint: str, body: Any) -> Any:
        return await self.request(endpoint, method="POST", body=body)


__all__ = ["AtomicworkClient"]
