"""ConnectionRegistry — the set of live client connections.

Learn: A connection leaves the set before its socket is closed, so the
set never holds a connection the hub already closed. Fan-out iterates a
snapshot copy; registering or unregistering mid-broadcast never races
with the iteration.
"""

import threading
from typing import TYPE_CHECKING, Optional

import structlog
from fastapi import status

if TYPE_CHECKING:
    from pointsync.realtime.connection import Connection

logger = structlog.get_logger()


class ConnectionRegistry:
    """Thread-safe set of Connection handles."""

    def __init__(self, lock: Optional[threading.Lock] = None):
        self._lock = lock or threading.Lock()
        self._connections: set["Connection"] = set()

    def register(self, conn: "Connection") -> None:
        with self._lock:
            self._connections.add(conn)

    async def unregister(
        self,
        conn: "Connection",
        code: int = status.WS_1000_NORMAL_CLOSURE,
    ) -> bool:
        """Remove the connection and close it.

        Returns True if this call removed it. Safe to call repeatedly.
        """
        with self._lock:
            removed = conn in self._connections
            self._connections.discard(conn)
        if removed:
            logger.info("registry.unregistered", connection_id=conn.id, code=code)
        await conn.close(code=code)
        return removed

    def snapshot(self) -> list["Connection"]:
        with self._lock:
            return list(self._connections)

    def __len__(self) -> int:
        with self._lock:
            return len(self._connections)

    def __contains__(self, conn: "Connection") -> bool:
        with self._lock:
            return conn in self._connections
