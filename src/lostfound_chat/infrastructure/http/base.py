from __future__ import annotations

import logging
from types import TracebackType
from typing import Any, Self

import httpx

from lostfound_chat.application.exceptions import TransientFetchError
from lostfound_chat.infrastructure.http.errors import raise_for_status
from lostfound_chat.request_id import HEADER as REQUEST_ID_HEADER
from lostfound_chat.request_id import current_request_id

logger = logging.getLogger(__name__)


class StoreHttpClient:
    """Shared httpx plumbing for the store clients.

    ``timeout=None`` leaves requests unbounded: a hung call only delays the
    polling tick that issued it.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=timeout,
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def _request(self, method: str, url: str, **kwargs: Any) -> Any:
        request_id = current_request_id()
        try:
            response = await self._client.request(
                method, url, headers={REQUEST_ID_HEADER: request_id}, **kwargs
            )
        except httpx.HTTPError as exc:
            logger.debug("[%s] %s %s failed: %s", request_id, method, url, exc)
            raise TransientFetchError(f"{method} {url}: {exc}") from exc
        raise_for_status(response)
        try:
            return response.json()
        except ValueError as exc:
            raise TransientFetchError(f"{method} {url}: malformed JSON body") from exc
