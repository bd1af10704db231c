"""BroadcastEngine — fan one event out to every registered connection.

Learn: The event is encoded once and the same payload string goes to
every recipient. If encoding fails nobody gets anything. A failed write
only costs the connection that failed: it is unregistered and closed,
and the loop moves on to the rest.

Fan-out runs on the triggering session's task and awaits each write in
turn. The per-write deadline on Connection bounds how long one stalled
client can hold it up.
"""

import structlog

from pointsync.hub.registry import ConnectionRegistry
from pointsync.realtime.connection import TRANSPORT_ERRORS
from pointsync.schemas.points import Message, encode_message

logger = structlog.get_logger()


class BroadcastEngine:
    """Best-effort, at-most-once delivery to a registry snapshot."""

    def __init__(self, registry: ConnectionRegistry):
        self.registry = registry

    async def broadcast(self, event: Message) -> int:
        """Send the event to all current connections.

        Returns the number of connections that accepted the write.
        """
        try:
            payload = encode_message(event)
        except (TypeError, ValueError) as e:
            logger.error("broadcast.encode_failed", type=event.type, error=str(e))
            return 0

        delivered = 0
        for conn in self.registry.snapshot():
            try:
                await conn.send(payload)
            except TRANSPORT_ERRORS as e:
                logger.warning(
                    "broadcast.write_failed",
                    target=conn.id,
                    type=event.type,
                    error=repr(e),
                )
                await self.registry.unregister(conn)
                continue
            delivered += 1
        return delivered
