"""Shared hub state — the authoritative point set and live connections.

Learn: Everything in this package is safe to call from many session
tasks at once. The PointStore and ConnectionRegistry share one lock
owned by the Hub; nothing iterates or mutates either collection except
through their own methods.
"""
