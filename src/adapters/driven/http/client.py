"""HTTP client adapter posting serialized requests with aiohttp."""

import logging
from types import TracebackType

import aiohttp

from src.ports.http import HttpPort

__all__ = ["HttpClient"]

logger = logging.getLogger(__name__)


class HttpClient:
    """Thin aiohttp transport for the sender.

    One POST per call, no retry, aiohttp's default timeout.
    Use as an async context manager so the session is closed.
    """

    def __init__(self) -> None:
        self.session: aiohttp.ClientSession | None = None

    async def __aenter__(self) -> "HttpClient":
        """Enter async context manager (start session).

        Returns:
            Self for use in async with statement.
        """
        self.session = aiohttp.ClientSession()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        """Exit async context manager (close session)."""
        if self.session:
            await self.session.close()

    async def post(self, req: HttpPort) -> int:
        """Send one POST request and release the response.

        Args:
            req: Serialized request with URL, body and headers.

        Returns:
            HTTP status code.

        Raises:
            RuntimeError: If session not initialized.
            aiohttp exceptions: Network/timeout errors.
        """
        if self.session is None:
            raise RuntimeError("Session not initialized; use 'async with' context manager")

        logger.debug(f"Posting {req.headers.get('Content-Length')} bytes to {req.url}")
        async with self.session.post(
            req.url, data=req.body.encode("utf-8"), headers=req.headers
        ) as resp:
            return resp.status
