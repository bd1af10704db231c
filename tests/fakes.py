"""Connection stand-ins for hub unit tests."""

import asyncio

from starlette.websockets import WebSocketState


class FakeConnection:
    """Stand-in for realtime.connection.Connection in hub unit tests."""

    def __init__(self, name: str, fail_with: BaseException | None = None):
        self.id = name
        self.fail_with = fail_with
        self.sent: list[str] = []
        self.send_attempts = 0
        self.close_codes: list[int] = []

    async def send(self, payload: str) -> None:
        self.send_attempts += 1
        if self.fail_with is not None:
            raise self.fail_with
        self.sent.append(payload)

    async def close(self, code: int = 1000) -> None:
        self.close_codes.append(code)


class StubWebSocket:
    """Just enough of starlette's WebSocket for Connection and the session handshake.

    `gate`, when set, holds every send_text until the event fires.
    """

    def __init__(
        self,
        stall: bool = False,
        close_error: BaseException | None = None,
        accept_error: BaseException | None = None,
        send_error: BaseException | None = None,
        gate: asyncio.Event | None = None,
    ):
        self.headers: dict[str, str] = {}
        self.client_state = WebSocketState.CONNECTED
        self.application_state = WebSocketState.CONNECTED
        self.stall = stall
        self.close_error = close_error
        self.accept_error = accept_error
        self.send_error = send_error
        self.gate = gate
        self.accepted = False
        self.sent: list[str] = []
        self.close_codes: list[int] = []

    async def accept(self) -> None:
        if self.accept_error is not None:
            raise self.accept_error
        self.accepted = True

    async def send_text(self, data: str) -> None:
        if self.stall:
            await asyncio.Event().wait()
        if self.gate is not None:
            await self.gate.wait()
        if self.send_error is not None:
            raise self.send_error
        self.sent.append(data)

    async def close(self, code: int = 1000, reason: str | None = None) -> None:
        self.close_codes.append(code)
        if self.close_error is not None:
            raise self.close_error
