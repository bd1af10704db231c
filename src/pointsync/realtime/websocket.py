"""WebSocket endpoint — one ConnectionSession per client socket.

Learn: A session walks a small state machine:

    CONNECTING → UPGRADED → ACTIVE → CLOSED

1. CONNECTING: the origin policy decides; accept() completes the upgrade.
   Nothing touches the hub until the upgrade succeeds.
2. UPGRADED: register with the hub and send the init snapshot. Both
   happen under the connection's write lock, so a broadcast racing with
   the join queues up behind init instead of overtaking it.
3. ACTIVE: read one message at a time, apply it, fan it out if it
   changed the point set.
4. CLOSED: unregister (which closes the socket). Terminal.

Any read failure ends the session: the client left, the transport broke,
or the frame was not a valid message. Unknown kinds are only logged.
"""

import enum
from typing import Optional

import structlog
from fastapi import Depends, WebSocket, status
from pydantic import ValidationError

from pointsync.events.types import ADD, MUTATIONS
from pointsync.hub.state import Hub, get_hub
from pointsync.realtime.connection import TRANSPORT_ERRORS, Connection
from pointsync.realtime.origin import WILDCARD, OriginCheck, OriginPolicy
from pointsync.schemas.points import Message, decode_message, encode_message

logger = structlog.get_logger()


class SessionState(str, enum.Enum):
    CONNECTING = "connecting"
    UPGRADED = "upgraded"
    ACTIVE = "active"
    CLOSED = "closed"


class ConnectionSession:
    """Protocol state machine for a single client socket."""

    def __init__(
        self,
        websocket: WebSocket,
        hub: Hub,
        origin_policy: Optional[OriginCheck] = None,
        send_timeout: Optional[float] = None,
    ):
        self.websocket = websocket
        self.hub = hub
        self.origin_policy = origin_policy or OriginPolicy([WILDCARD])
        self.conn = Connection(websocket, send_timeout=send_timeout)
        self.state = SessionState.CONNECTING
        self.close_code = status.WS_1000_NORMAL_CLOSURE

    async def run(self) -> None:
        """Drive the session from handshake to close."""
        with structlog.contextvars.bound_contextvars(connection_id=self.conn.id):
            try:
                if not await self._handshake():
                    return
                if not await self._activate():
                    return
                await self._receive_loop()
            finally:
                if self.state is not SessionState.CLOSED:
                    await self._close()

    # ─── Transitions ──────────────────────────────────────────

    async def _handshake(self) -> bool:
        origin = self.websocket.headers.get("origin")
        if not self.origin_policy(origin):
            logger.warning("session.handshake_rejected", origin=origin)
            self.state = SessionState.CLOSED
            await self.conn.close(code=status.WS_1008_POLICY_VIOLATION)
            return False

        try:
            await self.websocket.accept()
        except TRANSPORT_ERRORS as e:
            logger.warning("session.handshake_failed", origin=origin, error=repr(e))
            self.state = SessionState.CLOSED
            return False

        self.state = SessionState.UPGRADED
        return True

    async def _activate(self) -> bool:
        async with self.conn.write_lock:
            self.hub.connections.register(self.conn)
            init = self.hub.init_message()
            try:
                await self.conn.send_locked(encode_message(init))
            except TRANSPORT_ERRORS as e:
                logger.warning("session.init_failed", error=repr(e))
                return False

        self.state = SessionState.ACTIVE
        logger.info(
            "session.active",
            points=len(init.points),
            connections=len(self.hub.connections),
        )
        return True

    async def _receive_loop(self) -> None:
        while not self.conn.closed:
            try:
                raw = await self.conn.receive()
            except TRANSPORT_ERRORS as e:
                logger.info("session.disconnected", error=repr(e))
                return

            try:
                message = decode_message(raw)
            except ValidationError as e:
                logger.warning("session.malformed_message", errors=e.error_count())
                self.close_code = status.WS_1003_UNSUPPORTED_DATA
                return

            await self.handle(message)

    async def _close(self) -> None:
        self.state = SessionState.CLOSED
        await self.hub.connections.unregister(self.conn, code=self.close_code)
        logger.info("session.closed", code=self.close_code)

    # ─── Dispatch ─────────────────────────────────────────────

    async def handle(self, message: Message) -> bool:
        """Apply one client message. Returns True if it was broadcast."""
        if message.type not in MUTATIONS:
            logger.warning("session.unknown_type", type=message.type)
            return False
        if message.point is None:
            logger.warning("session.missing_point", type=message.type)
            return False

        point = message.point
        if message.type == ADD:
            changed = self.hub.points.add(point)
            event = Message.add(point)
        else:
            changed = self.hub.points.remove(point)
            event = Message.remove(point)

        if not changed:
            logger.debug("session.noop", type=message.type)
            return False

        delivered = await self.hub.broadcaster.broadcast(event)
        logger.debug("session.broadcast", type=message.type, delivered=delivered)
        return True


# ─── Endpoint ─────────────────────────────────────────────────


async def points_websocket(websocket: WebSocket, hub: Hub = Depends(get_hub)):
    """WebSocket endpoint for the shared point set.

    Mounted at Settings.ws_path by create_app().
    """
    state = websocket.app.state
    session = ConnectionSession(
        websocket,
        hub,
        origin_policy=state.origin_policy,
        send_timeout=state.settings.send_timeout_seconds,
    )
    await session.run()
