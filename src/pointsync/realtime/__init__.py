"""Real-time transport — WebSocket sessions feeding the hub.

Learn: Each client holds one long-lived WebSocket. The session task
for that socket:
1. Checks the handshake origin and accepts the upgrade
2. Registers with the hub and sends the init snapshot
3. Applies every add/remove the client sends and fans accepted ones out

A session ends when its socket fails in either direction.
"""
