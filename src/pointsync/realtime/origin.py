"""Origin policy — which handshake origins may open a session.

Learn: Browsers send an Origin header on WebSocket upgrades; the server
decides whether to accept. The policy is any callable taking the origin
(or None when the header is absent) and returning a bool, so deployments
can plug in their own rule through create_app(origin_policy=...).

Requests without an Origin header come from non-browser clients and are
accepted: a browser cannot omit it.
"""

from typing import Callable, Iterable, Optional

OriginCheck = Callable[[Optional[str]], bool]

WILDCARD = "*"


def _normalize(origin: str) -> str:
    return origin.strip().rstrip("/").lower()


class OriginPolicy:
    """Allow-list of origins. "*" accepts every origin."""

    def __init__(self, allowed: Iterable[str]):
        allowed = list(allowed)
        self.allow_all = WILDCARD in allowed
        self.allowed = frozenset(_normalize(o) for o in allowed if o != WILDCARD)

    def __call__(self, origin: Optional[str]) -> bool:
        if self.allow_all or origin is None:
            return True
        return _normalize(origin) in self.allowed

    def __repr__(self) -> str:
        if self.allow_all:
            return "OriginPolicy(*)"
        return f"OriginPolicy({sorted(self.allowed)})"
