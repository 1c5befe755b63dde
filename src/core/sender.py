"""JSON sender that posts payloads to the local API in the background."""

import asyncio
import json
import logging
from collections.abc import Awaitable, Callable
from types import TracebackType
from typing import Any

from aiohttp.client_exceptions import ClientConnectionError
from pydantic import BaseModel

from src.core.fx_events import FxEventKind, FxName, FxParam, fx_endpoint, fx_event_body
from src.ports.http import HttpPort

__all__ = [
    "DEFAULT_API_BASE_URL",
    "Sender",
    "SerializationError",
    "build_request",
    "serialize_body",
]

logger = logging.getLogger(__name__)

DEFAULT_API_BASE_URL = "http://127.0.0.1:8080"
JSON_CONTENT_TYPE = "application/json"

RequestFn = Callable[[HttpPort], Awaitable[int]]


class SerializationError(ValueError):
    """Payload could not be converted to JSON."""


def serialize_body(data: Any) -> str:
    """Serialize a payload to compact JSON text.

    Pydantic models are dumped in JSON mode using their field aliases.
    Output is ASCII-escaped, so its character length is also its byte length.

    Args:
        data: JSON-serializable value or pydantic model.

    Returns:
        JSON text.

    Raises:
        SerializationError: On cyclic references, non-serializable values,
            NaN or infinite floats.
    """
    if isinstance(data, BaseModel):
        data = data.model_dump(mode="json", by_alias=True)
    try:
        return json.dumps(data, separators=(",", ":"), allow_nan=False)
    except (TypeError, ValueError) as e:
        raise SerializationError(f"Payload is not JSON serializable: {e}") from e


def build_request(base_url: str, endpoint: str, data: Any) -> HttpPort:
    """Build the POST request for one payload.

    The endpoint is appended verbatim after the base URL and a slash.

    Raises:
        SerializationError: If data cannot be serialized.
    """
    body = serialize_body(data)
    return HttpPort(
        url=f"{base_url}/{endpoint}",
        body=body,
        headers={
            "Content-Type": JSON_CONTENT_TYPE,
            "Content-Length": str(len(body.encode("utf-8"))),
        },
    )


class Sender:
    """Fire-and-forget JSON poster.

    Each send() serializes synchronously, then runs the POST in its own
    asyncio.Task. Callers never see the response or network errors; those
    are logged. Not thread-safe; use from the event loop thread only.
    """

    def __init__(self, request_fn: RequestFn, base_url: str = DEFAULT_API_BASE_URL) -> None:
        """Initialize sender.

        Args:
            request_fn: Async transport performing one POST, returns status code.
            base_url: Base URL every endpoint is appended to.
        """
        self._base_url = base_url
        self._request_fn = request_fn
        self._pending: set[asyncio.Task[None]] = set()

    @property
    def base_url(self) -> str:
        """Base URL every endpoint is appended to."""
        return self._base_url

    @property
    def pending(self) -> int:
        """Number of deliveries still in flight."""
        return len(self._pending)

    def send(self, endpoint: str, data: Any) -> None:
        """Post data as JSON to base_url/endpoint without waiting.

        Args:
            endpoint: Path segment appended after the base URL.
            data: JSON-serializable value or pydantic model.

        Raises:
            SerializationError: If data cannot be serialized; nothing is sent.
            RuntimeError: If called without a running event loop.
        """
        req = build_request(self._base_url, endpoint, data)
        loop = asyncio.get_running_loop()

        # Fire and forget
        task: asyncio.Task[None] = loop.create_task(self._deliver(req))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    def send_fx_event(self, unit_id: int, kind: FxEventKind, param: FxParam | FxName) -> None:
        """Post one FX unit event to fx/<unit_id>."""
        self.send(fx_endpoint(unit_id), fx_event_body(kind, param))

    async def _deliver(self, req: HttpPort) -> None:
        """Run one request and log its outcome."""
        try:
            status = await self._request_fn(req)
            if 200 <= status < 300:
                logger.debug(f"POST {req.url} -> {status}")
            else:
                logger.warning(f"POST {req.url} returned status {status}")
        except ClientConnectionError as e:
            logger.warning(f"API unreachable at {req.url}: {e}")
        except asyncio.CancelledError:
            logger.info(f"Delivery to {req.url} cancelled.")
        except Exception as e:  # noqa: BLE001
            logger.error(f"Unexpected error posting to {req.url}: {e}", exc_info=True)

    async def drain(self) -> None:
        """Wait until every in-flight delivery has finished."""
        while self._pending:
            await asyncio.gather(*self._pending, return_exceptions=True)

    async def aclose(self) -> None:
        """Cancel in-flight deliveries and wait for them to exit."""
        pending = list(self._pending)
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)

    async def __aenter__(self) -> "Sender":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        """Drain pending deliveries on normal exit, cancel them on error."""
        if exc_type is None:
            await self.drain()
        else:
            await self.aclose()
