"""Connection — the hub's handle on one client WebSocket.

Learn: Starlette WebSockets tolerate one writer at a time, but several
session tasks may broadcast to the same socket concurrently. Every write
goes through a per-connection asyncio.Lock, and is bounded by an optional
deadline so one stalled client cannot hold a broadcaster forever.
"""

import asyncio
import uuid
from typing import Optional

import structlog
from fastapi import WebSocket, WebSocketDisconnect, status
from starlette.websockets import WebSocketState

logger = structlog.get_logger()

# Everything a send or receive on a dead/dying socket can raise
TRANSPORT_ERRORS = (
    WebSocketDisconnect,
    RuntimeError,
    OSError,
    asyncio.TimeoutError,
)


class Connection:
    """One client socket: serialized writes, idempotent close."""

    def __init__(self, websocket: WebSocket, send_timeout: Optional[float] = None):
        self.id = uuid.uuid4().hex[:12]
        self.websocket = websocket
        self.send_timeout = send_timeout or None
        self.write_lock = asyncio.Lock()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    async def send(self, payload: str) -> None:
        """Write one text frame. Raises one of TRANSPORT_ERRORS on failure."""
        async with self.write_lock:
            await self.send_locked(payload)

    async def send_locked(self, payload: str) -> None:
        """Write while the caller already holds write_lock."""
        if self._closed:
            raise RuntimeError("connection is closed")
        if self.send_timeout is None:
            await self.websocket.send_text(payload)
        else:
            await asyncio.wait_for(
                self.websocket.send_text(payload), timeout=self.send_timeout
            )

    async def receive(self) -> str | bytes:
        """Read the next text or binary frame.

        Raises WebSocketDisconnect when the client goes away.
        """
        message = await self.websocket.receive()
        if message["type"] == "websocket.disconnect":
            raise WebSocketDisconnect(message.get("code", status.WS_1000_NORMAL_CLOSURE))
        text = message.get("text")
        if text is not None:
            return text
        return message.get("bytes") or b""

    async def close(self, code: int = status.WS_1000_NORMAL_CLOSURE) -> None:
        """Close the socket. Later calls, and closing a dead socket, are no-ops.

        The close frame waits for any in-flight write, under the same deadline
        as a send. Writes still queued on the lock fail once this starts.
        """
        if self._closed:
            return
        self._closed = True
        ws = self.websocket
        if (
            ws.client_state == WebSocketState.DISCONNECTED
            or ws.application_state == WebSocketState.DISCONNECTED
        ):
            return
        try:
            if self.send_timeout is None:
                await self._close_locked(code)
            else:
                await asyncio.wait_for(self._close_locked(code), timeout=self.send_timeout)
        except TRANSPORT_ERRORS as e:
            logger.debug("connection.close_failed", connection_id=self.id, error=repr(e))

    async def _close_locked(self, code: int) -> None:
        async with self.write_lock:
            await self.websocket.close(code=code)
