"""Peer version policy used by the stale-peer auto-ban."""

from __future__ import annotations

from typing import Optional, Tuple

MIN_VERSION: Tuple[int, int, int] = (4, 7, 0)
BAN_DURATION_S = 86400
_AGENT_PREFIX = "Hemp0x:"


def parse_version(subver: str) -> Optional[Tuple[int, int, int]]:
    """Extract ``(major, minor, patch)`` from a ``/Hemp0x:4.7.1/`` user agent."""
    stripped = (subver or "").strip("/")
    if not stripped.startswith(_AGENT_PREFIX):
        return None
    parts = stripped[len(_AGENT_PREFIX):].split(".")
    if len(parts) < 3:
        return None
    try:
        return int(parts[0]), int(parts[1]), int(parts[2])
    except ValueError:
        return None


def version_is_old(subver: str) -> bool:
    """True for peers below ``MIN_VERSION``; unparseable agents count as old."""
    version = parse_version(subver)
    if version is None:
        return True
    return version < MIN_VERSION


def peer_host(addr: str) -> str:
    """Strip the port from an ``ip:port`` peer address."""
    return (addr or "").split(":", 1)[0]


__all__ = ["BAN_DURATION_S", "MIN_VERSION", "parse_version", "peer_host", "version_is_old"]
