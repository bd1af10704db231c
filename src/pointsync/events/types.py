"""Wire message kinds.

Learn: Centralizing message kinds as constants prevents typos and makes
it easy to see every kind the protocol speaks.
"""

# ─── Server → client ─────────────────────────────────────

INIT = "init"

# ─── Both directions ─────────────────────────────────────

ADD = "add"
REMOVE = "remove"

MUTATIONS = frozenset({ADD, REMOVE})
