"""pointsync — real-time shared point collection.

Clients connect over WebSockets, add or remove 3-D points, and see each
other's changes immediately. One in-memory hub owns the authoritative
point set and the live connection registry.
"""

__version__ = "0.1.0"
