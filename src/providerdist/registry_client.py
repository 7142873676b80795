"""
HTTPS client for reading published registry documents.

Only GET is needed: the discovery document and the provider's version list.
Every failure mode (non-200 status, network error, timeout, undecodable
body) surfaces as RemoteFetchFailed; callers decide on the fallback.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Protocol, TypeVar

import aiohttp

from providerdist.errors import RemoteFetchFailed

if TYPE_CHECKING:
    from types import TracebackType

    from providerdist.contracts import RegistryDocument

logger = logging.getLogger(__name__)

DocumentT = TypeVar("DocumentT", bound="RegistryDocument")

DEFAULT_TIMEOUT_S = 10.0


class DocumentFetcher(Protocol):
    """Anything that can fetch and decode a registry document."""

    async def fetch_document(self, url: str, document_type: type[DocumentT]) -> DocumentT: ...


class RegistryClient:
    """
    Async client for a static registry host.

    Requests are issued one at a time; the session carries a total
    timeout so an unresponsive host cannot block a run indefinitely.
    """

    def __init__(self, timeout_s: float = DEFAULT_TIMEOUT_S) -> None:
        if timeout_s <= 0:
            raise ValueError(f"timeout_s must be > 0, got {timeout_s}")
        self._timeout_s = timeout_s
        self._session: aiohttp.ClientSession | None = None

    async def __aenter__(self) -> RegistryClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session."""
        if self._session is None or self._session.closed:
            timeout = aiohttp.ClientTimeout(total=self._timeout_s)
            self._session = aiohttp.ClientSession(timeout=timeout)
        return self._session

    async def close(self) -> None:
        """Close the HTTP session."""
        if self._session and not self._session.closed:
            await self._session.close()
            self._session = None

    async def get(self, url: str) -> bytes:
        """
        GET ``url`` and return the response body.

        Raises:
            RemoteFetchFailed: On non-200 status, network error or timeout.
        """
        try:
            session = await self._get_session()
            async with session.request("GET", url) as response:
                if response.status != 200:
                    logger.warning(
                        "Registry returned non-200 status",
                        extra={"url": url, "status": response.status},
                    )
                    raise RemoteFetchFailed(
                        url, f"status code {response.status}, expected 200", status=response.status
                    )
                return await response.read()
        except aiohttp.ClientError as e:
            logger.warning("Registry request failed", extra={"url": url, "error": str(e)})
            raise RemoteFetchFailed(url, str(e) or type(e).__name__) from e
        except asyncio.TimeoutError as e:
            logger.warning("Registry request timed out", extra={"url": url})
            raise RemoteFetchFailed(url, f"timed out after {self._timeout_s}s") from e

    async def fetch_document(self, url: str, document_type: type[DocumentT]) -> DocumentT:
        """
        GET ``url`` and decode it as ``document_type``.

        Raises:
            RemoteFetchFailed: If the fetch fails or the body does not decode.
        """
        body = await self.get(url)
        try:
            return document_type.from_json(body)
        except ValueError as e:
            logger.warning(
                "Registry document is malformed",
                extra={"url": url, "document": document_type.__name__},
            )
            raise RemoteFetchFailed(url, f"malformed {document_type.__name__}: {e}") from e
