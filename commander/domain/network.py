"""Network-mode rules for the node configuration file.

The active chain is never stored as a single value. It is derived from raw
``testnet=1`` / ``regtest=1`` flag lines, with regtest taking precedence.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterable, List, Mapping, Optional

from .errors import InvalidArgument

_FLAG_PREFIXES = ("testnet=", "regtest=")


class NetworkMode(str, Enum):
    """Isolated chain instance selected by config flags."""

    MAINNET = "mainnet"
    TESTNET = "testnet"
    REGTEST = "regtest"

    @classmethod
    def parse(cls, value: str) -> "NetworkMode":
        key = (value or "").strip().lower()
        for mode in cls:
            if mode.value == key:
                return mode
        raise InvalidArgument("Invalid network mode")

    @property
    def flag_line(self) -> Optional[str]:
        """Config line that selects this mode; mainnet has none."""
        if self is NetworkMode.MAINNET:
            return None
        return f"{self.value}=1"

    @property
    def cli_flag(self) -> Optional[str]:
        if self is NetworkMode.MAINNET:
            return None
        return f"-{self.value}"


def detect_network_mode(lines: Iterable[str]) -> NetworkMode:
    """Scan raw config lines for network flags (regtest > testnet > mainnet)."""
    is_testnet = False
    is_regtest = False
    for raw in lines:
        line = raw.strip()
        if line.startswith("testnet=1"):
            is_testnet = True
        elif line.startswith("regtest=1"):
            is_regtest = True
    if is_regtest:
        return NetworkMode.REGTEST
    if is_testnet:
        return NetworkMode.TESTNET
    return NetworkMode.MAINNET


def mode_from_config(values: Mapping[str, str]) -> NetworkMode:
    """Derive the mode from a parsed key/value map, as the daemon does."""
    if values.get("regtest") == "1":
        return NetworkMode.REGTEST
    if values.get("testnet") == "1":
        return NetworkMode.TESTNET
    return NetworkMode.MAINNET


def rewrite_network_flags(lines: Iterable[str], mode: NetworkMode) -> List[str]:
    """Drop every existing network flag line and append the one for ``mode``."""
    kept = [line for line in lines if not line.strip().startswith(_FLAG_PREFIXES)]
    flag = mode.flag_line
    if flag:
        kept.append(flag)
    return kept


__all__ = [
    "NetworkMode",
    "detect_network_mode",
    "mode_from_config",
    "rewrite_network_flags",
]
