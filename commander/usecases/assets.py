"""Asset use cases wrapping the daemon's asset RPCs.

Numeric inputs are validated here so a bad quantity or unit count never
reaches the CLI.
"""

from __future__ import annotations

import json
import math
from dataclasses import dataclass
from typing import List, Optional, Sequence

from ..domain.errors import InvalidArgument, MalformedResponse
from ..domain.models import AssetData, AssetItem
from ..domain.payloads import AssetDataPayload, parse_json, parse_model
from ..domain.ports import CliPort
from ..domain.util import format_quantity

MAX_UNITS = 8
NETWORK_LIST_LIMIT = "50"
OWNER_SUFFIX = "!"


def parse_quantity(qty: str) -> str:
    """Validate a quantity and render it the way the daemon expects."""
    try:
        value = float((qty or "").strip())
    except ValueError:
        raise InvalidArgument("Quantity must be a number")
    if not math.isfinite(value):
        raise InvalidArgument("Quantity must be a number")
    return format_quantity(value)


def _flag(value: bool) -> str:
    return "true" if value else "false"


@dataclass
class ListMyAssets:
    cli: CliPort

    def __call__(self) -> List[AssetItem]:
        payload = parse_json(self.cli.run(["listmyassets"]), context="listmyassets")
        if not isinstance(payload, dict):
            raise MalformedResponse("listmyassets", "expected an object", raw=payload)
        items = []
        for name, balance in payload.items():
            amount = float(balance) if isinstance(balance, (int, float)) else 0.0
            items.append(
                AssetItem(
                    name=name,
                    balance=f"{amount:.8f}",
                    asset_type="OWNER" if name.endswith(OWNER_SUFFIX) else "TOKEN",
                )
            )
        return items


@dataclass
class TransferAsset:
    cli: CliPort

    def __call__(self, asset: str, amount: str, to: str) -> str:
        return self.cli.run(["transfer", asset, amount, to])


@dataclass
class IssueAsset:
    cli: CliPort

    def __call__(self, name: str, qty: str, units: int, reissuable: bool, ipfs: str = "") -> str:
        quantity = parse_quantity(qty)
        if units < 0 or units > MAX_UNITS:
            raise InvalidArgument("Units must be between 0 and 8")
        args = ["issue", name, quantity, "", "", str(units), _flag(reissuable)]
        if ipfs:
            args.extend(["true", ipfs])
        return self.cli.run(args)


@dataclass
class ReissueAsset:
    """``reissue`` with optional verifier change and new IPFS hash.

    Positional RPC arguments are padded so the IPFS hash always lands in the
    seventh slot.
    """

    cli: CliPort

    def __call__(
        self,
        name: str,
        qty: str,
        to_address: str,
        change_verifier: bool = False,
        new_verifier: str = "",
        new_ipfs: str = "",
    ) -> str:
        args = ["reissue", name, parse_quantity(qty), to_address]
        if change_verifier:
            args.extend(["true", new_verifier])
        if new_ipfs:
            if len(args) < 6:
                args.extend(["false", ""])
            args.append(new_ipfs)
        return self.cli.run(args)


@dataclass
class IssueUniqueAsset:
    cli: CliPort

    def __call__(self, root_name: str, tags: Sequence[str], ipfs_hashes: Sequence[str] = ()) -> str:
        if not tags:
            raise InvalidArgument("At least one tag is required")
        hashes = list(ipfs_hashes) if any(ipfs_hashes) else []
        return self.cli.run(["issueunique", root_name, json.dumps(list(tags)), json.dumps(hashes)])


@dataclass
class GetAssetData:
    cli: CliPort

    def __call__(self, name: str) -> AssetData:
        data = parse_model(self.cli.run(["getassetdata", name]), AssetDataPayload, context="getassetdata")
        return AssetData(
            name=data.name or name,
            amount=data.amount,
            units=data.units,
            reissuable=data.reissuable == 1,
            has_ipfs=data.has_ipfs == 1,
            ipfs_hash=data.ipfs_hash,
            block_height=data.block_height,
        )


@dataclass
class ListNetworkAssets:
    cli: CliPort

    def __call__(self, pattern: Optional[str] = None, verbose: bool = False) -> str:
        return self.cli.run(["listassets", pattern or "*", _flag(verbose), NETWORK_LIST_LIMIT])


@dataclass
class CheckOwnershipToken:
    """True if the wallet holds a positive balance of ``NAME!``."""

    cli: CliPort

    def __call__(self, asset_name: str) -> bool:
        token = asset_name.rstrip(OWNER_SUFFIX) + OWNER_SUFFIX
        payload = parse_json(self.cli.run(["listmyassets", token, "true"]), context="listmyassets")
        if not isinstance(payload, dict):
            return False
        info = payload.get(token)
        if not isinstance(info, dict):
            return False
        balance = info.get("balance")
        if isinstance(balance, bool) or not isinstance(balance, (int, float)):
            return False
        return balance > 0


__all__ = [
    "CheckOwnershipToken",
    "GetAssetData",
    "IssueAsset",
    "IssueUniqueAsset",
    "ListMyAssets",
    "ListNetworkAssets",
    "ReissueAsset",
    "TransferAsset",
    "parse_quantity",
]
