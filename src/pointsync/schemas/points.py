"""Pydantic schemas for points and wire messages.

Learn: One JSON document per WebSocket frame, the same shape in both
directions. Optional fields are left out of server output entirely
rather than sent as null, so an `add` event is just {"type", "point"}.
"""

import json
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from pointsync.events.types import ADD, INIT, REMOVE


# ─── Point ────────────────────────────────────────────────


class Point(BaseModel):
    """Immutable 3-D point. Coordinates must be finite numbers."""

    x: float
    y: float
    z: float

    model_config = ConfigDict(frozen=True, strict=True, allow_inf_nan=False)


# ─── Messages ─────────────────────────────────────────────


class Message(BaseModel):
    """A protocol message: init, add or remove.

    `type` defaults to "" so a document without one parses and is
    treated as an unknown kind instead of a malformed payload.
    """

    type: str = ""
    point: Optional[Point] = None
    points: Optional[list[Point]] = None
    start_time: Optional[int] = Field(None, alias="startTime")

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def init(cls, points: list[Point], start_time: int) -> "Message":
        return cls(type=INIT, points=points, start_time=start_time)

    @classmethod
    def add(cls, point: Point) -> "Message":
        return cls(type=ADD, point=point)

    @classmethod
    def remove(cls, point: Point) -> "Message":
        return cls(type=REMOVE, point=point)


def encode_message(message: Message) -> str:
    """Serialize a message to its JSON wire payload.

    Raises ValueError for non-finite coordinates and TypeError for
    values JSON cannot represent.
    """
    return json.dumps(
        message.model_dump(by_alias=True, exclude_none=True),
        allow_nan=False,
        separators=(",", ":"),
    )


def decode_message(raw: str | bytes) -> Message:
    """Parse one client frame. Raises pydantic.ValidationError if malformed."""
    return Message.model_validate_json(raw)
