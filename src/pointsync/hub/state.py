"""Hub — the single shared-state object behind every session.

Learn: create_app() builds exactly one Hub and every session receives it
by reference. One lock guards both collections. The start timestamp is
captured once and handed to every client in its init message as a shared time origin.
"""

import threading
import time
from typing import Optional

from starlette.requests import HTTPConnection

from pointsync.hub.broadcast import BroadcastEngine
from pointsync.hub.points import DEFAULT_PRECISION, PointStore
from pointsync.hub.registry import ConnectionRegistry
from pointsync.schemas.points import Message


class Hub:
    """Owns the point set, the connection set and the broadcaster."""

    def __init__(
        self,
        key_precision: int = DEFAULT_PRECISION,
        start_time: Optional[int] = None,
    ):
        self._lock = threading.Lock()
        self._start_time = start_time if start_time is not None else int(time.time() * 1000)
        self.points = PointStore(self._lock, precision=key_precision)
        self.connections = ConnectionRegistry(self._lock)
        self.broadcaster = BroadcastEngine(self.connections)

    @property
    def start_time(self) -> int:
        """Epoch milliseconds at hub construction."""
        return self._start_time

    def init_message(self) -> Message:
        return Message.init(self.points.snapshot(), self._start_time)


def get_hub(conn: HTTPConnection) -> Hub:
    """FastAPI dependency: the app's single Hub, built by create_app()."""
    return conn.app.state.hub

