"""Pydantic models for the JSON documents printed by ``hemp0x-cli``.

Missing fields fall back to neutral defaults so older daemons keep working;
output that is not JSON, or has the wrong shape, raises ``MalformedResponse``.
"""

from __future__ import annotations

import json
from typing import Any, List, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from .errors import MalformedResponse

M = TypeVar("M", bound=BaseModel)


class _Payload(BaseModel):
    model_config = ConfigDict(extra="ignore")


class GeneralInfo(_Payload):
    """Subset of ``getinfo``."""

    blocks: int = 0
    connections: int = 0
    difficulty: float = 0.0
    balance: float = 0.0
    unconfirmed_balance: float = 0.0
    immature_balance: float = 0.0
    unlocked_until: Optional[int] = None


class BlockchainInfo(_Payload):
    """Subset of ``getblockchaininfo``."""

    blocks: Optional[int] = None
    headers: int = 0
    verificationprogress: float = 0.0
    initialblockdownload: bool = False
    mediantime: int = 0


class TransactionRecord(_Payload):
    """One row of ``listtransactions``."""

    time: int = 0
    category: str = ""
    amount: float = 0.0
    confirmations: int = 0
    txid: str = "-"


class ReceivedRecord(_Payload):
    """One row of ``listreceivedbyaddress``."""

    address: str = ""
    label: Optional[str] = None
    account: Optional[str] = None


class PeerRecord(_Payload):
    addr: str = ""
    subver: str = ""


class BanRecord(_Payload):
    address: str = ""
    banned_until: int = 0
    ban_reason: str = "manual"


class LocalAddress(_Payload):
    address: Optional[str] = None


class NetworkInfoPayload(_Payload):
    """Subset of ``getnetworkinfo``."""

    version: int = 0
    subversion: str = ""
    protocolversion: int = 0
    connections: int = 0
    localaddresses: List[LocalAddress] = Field(default_factory=list)


class AssetDataPayload(_Payload):
    """``getassetdata``; flags are reported as 0/1 integers."""

    name: Optional[str] = None
    amount: float = 0.0
    units: int = 0
    reissuable: int = 0
    has_ipfs: int = 0
    ipfs_hash: str = ""
    block_height: int = 0


class UtxoRecord(_Payload):
    """One row of ``listunspent``."""

    txid: str
    vout: int
    address: Optional[str] = None
    amount: float
    confirmations: int
    spendable: Optional[bool] = None
    solvable: Optional[bool] = None
    desc: Optional[str] = None
    safe: Optional[bool] = None


class SignedTransaction(_Payload):
    complete: bool = False
    hex: Optional[str] = None


def parse_json(raw: str, *, context: str) -> Any:
    """Decode CLI output as JSON or raise ``MalformedResponse``."""
    try:
        return json.loads(raw)
    except (TypeError, ValueError) as exc:
        raise MalformedResponse(context, str(exc), raw=raw) from exc


def parse_model(raw: str, model: Type[M], *, context: str) -> M:
    payload = parse_json(raw, context=context)
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise MalformedResponse(context, _summarize(exc), raw=raw) from exc


def parse_model_list(raw: str, model: Type[M], *, context: str) -> List[M]:
    payload = parse_json(raw, context=context)
    try:
        return TypeAdapter(List[model]).validate_python(payload)  # type: ignore[valid-type]
    except ValidationError as exc:
        raise MalformedResponse(context, _summarize(exc), raw=raw) from exc


def _summarize(exc: ValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "invalid payload"
    first = errors[0]
    loc = ".".join(str(part) for part in first.get("loc", ()))
    msg = first.get("msg", "invalid value")
    return f"{loc}: {msg}" if loc else msg


__all__ = [
    "AssetDataPayload",
    "BanRecord",
    "BlockchainInfo",
    "GeneralInfo",
    "LocalAddress",
    "NetworkInfoPayload",
    "PeerRecord",
    "ReceivedRecord",
    "SignedTransaction",
    "TransactionRecord",
    "UtxoRecord",
    "parse_json",
    "parse_model",
    "parse_model_list",
]
