"""Typed result objects returned by use cases to the command surface.

These are plain immutable records; the API layer serializes them as JSON.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Tuple


@dataclass(frozen=True)
class BinaryStatus:
    daemon_exists: bool
    cli_exists: bool


@dataclass(frozen=True)
class ConfigPaths:
    data_dir: str
    config_path: str
    daemon_path: str
    cli_path: str


@dataclass(frozen=True)
class AddressItem:
    label: str
    address: str
    balance: str


@dataclass(frozen=True)
class AssetItem:
    """One wallet-held asset; names ending in ``!`` are ownership tokens."""

    name: str
    balance: str
    asset_type: str


@dataclass(frozen=True)
class AssetData:
    name: str
    amount: float
    units: int
    reissuable: bool
    has_ipfs: bool
    ipfs_hash: str
    block_height: int


@dataclass(frozen=True)
class BanResult:
    banned_count: int
    banned_peers: Tuple[str, ...] = ()


@dataclass(frozen=True)
class BanEntry:
    address: str
    banned_until: str
    ban_reason: str


@dataclass(frozen=True)
class NetworkInfo:
    version: int
    subversion: str
    protocolversion: int
    connections: int
    localaddresses: Tuple[str, ...]
    full_ip: str


@dataclass(frozen=True)
class DataFolderInfo:
    path: str
    size_bytes: int
    size_display: str
    config_exists: bool
    wallet_exists: bool
    folder_exists: bool


@dataclass(frozen=True)
class AddressBookEntry:
    """Saved contact; persisted verbatim as JSON."""

    label: str
    address: str
    locked: bool = False
    date: int = 0

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "AddressBookEntry":
        return cls(
            label=str(payload.get("label") or ""),
            address=str(payload.get("address") or ""),
            locked=bool(payload.get("locked", False)),
            date=int(payload.get("date") or 0),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "label": self.label,
            "address": self.address,
            "locked": self.locked,
            "date": self.date,
        }


@dataclass(frozen=True)
class RawTxInput:
    txid: str
    vout: int


@dataclass(frozen=True)
class AdvancedTransaction:
    """Inputs and ``address -> amount`` outputs for a hand-built transaction."""

    inputs: Tuple[RawTxInput, ...]
    outputs: Dict[str, str] = field(default_factory=dict)

    def inputs_payload(self) -> List[Dict[str, Any]]:
        return [{"txid": item.txid, "vout": item.vout} for item in self.inputs]


__all__ = [
    "AddressBookEntry",
    "AddressItem",
    "AdvancedTransaction",
    "AssetData",
    "AssetItem",
    "BanEntry",
    "BanResult",
    "BinaryStatus",
    "ConfigPaths",
    "DataFolderInfo",
    "NetworkInfo",
    "RawTxInput",
]
