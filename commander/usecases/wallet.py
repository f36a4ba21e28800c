"""Wallet use cases: addresses, sending, UTXOs, raw transactions and backups."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Callable, Dict, List, Optional

from ..domain.errors import InvalidArgument, MalformedResponse
from ..domain.models import AddressItem, AdvancedTransaction
from ..domain.payloads import (
    ReceivedRecord,
    SignedTransaction,
    UtxoRecord,
    parse_json,
    parse_model,
    parse_model_list,
)
from ..domain.ports import CliPort, ConfigPort
from ..domain.util import parse_balances

log = logging.getLogger(__name__)

CHANGE_LABEL = "(Change)"
BACKUP_STAMP = "%Y%m%d_%H%M%S"


@dataclass
class GetReceiveAddresses:
    """Receiving addresses with balances, optionally including change rows.

    Balances come from ``listaddressgroupings``; the address list itself from
    ``listreceivedbyaddress 0 true`` so empty addresses are shown too.
    """

    cli: CliPort

    def __call__(self, show_change: bool = False) -> List[AddressItem]:
        groups = parse_json(self.cli.run(["listaddressgroupings"]), context="listaddressgroupings")
        balances: Dict[str, float] = {}
        parse_balances(groups, balances)

        raw = self.cli.run(["listreceivedbyaddress", "0", "true"])
        received = parse_model_list(raw, ReceivedRecord, context="listreceivedbyaddress")

        items: List[AddressItem] = []
        seen = set()
        for record in received:
            if not record.address:
                continue
            items.append(
                AddressItem(
                    label=record.label or record.account or "",
                    address=record.address,
                    balance=f"{balances.get(record.address, 0.0):.8f}",
                )
            )
            seen.add(record.address)

        if show_change:
            for address, amount in balances.items():
                if address not in seen:
                    items.append(AddressItem(label=CHANGE_LABEL, address=address, balance=f"{amount:.8f}"))
        return items


@dataclass
class NewAddress:
    cli: CliPort

    def __call__(self, label: Optional[str] = None) -> str:
        if label and label.strip():
            return self.cli.run(["getnewaddress", label])
        return self.cli.run(["getnewaddress"])


@dataclass
class GetChangeAddress:
    cli: CliPort

    def __call__(self) -> str:
        return self.cli.run(["getrawchangeaddress"])


@dataclass
class SendFunds:
    cli: CliPort

    def __call__(self, to: str, amount: str) -> str:
        return self.cli.run(["sendtoaddress", to, amount])


@dataclass
class ListUtxos:
    cli: CliPort

    def __call__(self) -> List[UtxoRecord]:
        raw = self.cli.run(["listunspent", "0", "9999999", "[]", "true"])
        return parse_model_list(raw, UtxoRecord, context="listunspent")


@dataclass
class BroadcastAdvancedTransaction:
    """Create, sign and send a hand-built transaction; returns the txid."""

    cli: CliPort

    def __call__(self, tx: AdvancedTransaction) -> str:
        if not tx.inputs:
            raise InvalidArgument("At least one input is required")
        if not tx.outputs:
            raise InvalidArgument("At least one output is required")

        raw_hex = self.cli.run(
            [
                "createrawtransaction",
                json.dumps(tx.inputs_payload()),
                json.dumps(dict(tx.outputs)),
            ]
        )
        signed = parse_model(
            self.cli.run(["signrawtransaction", raw_hex]),
            SignedTransaction,
            context="signrawtransaction",
        )
        if not signed.complete:
            raise MalformedResponse("signrawtransaction", "Failed to sign transaction completely.")
        if not signed.hex:
            raise MalformedResponse("signrawtransaction", "No signed hex returned")
        return self.cli.run(["sendrawtransaction", signed.hex])


@dataclass
class BackupWallet:
    """Ask the daemon to copy its wallet to a timestamped file in the data dir."""

    cli: CliPort
    config: ConfigPort
    now: Callable[[], datetime] = field(default=datetime.now)

    def __call__(self) -> str:
        dest = Path(self.config.data_dir) / f"hemp0x_backup_{self.now().strftime(BACKUP_STAMP)}.dat"
        self.cli.run(["backupwallet", str(dest)])
        log.info("Wallet backed up to %s", dest)
        return str(dest)


@dataclass
class BackupWalletTo:
    cli: CliPort

    def __call__(self, path: str) -> None:
        if not (path or "").strip():
            raise InvalidArgument("Backup path is required")
        self.cli.run(["backupwallet", path])


__all__ = [
    "BackupWallet",
    "BackupWalletTo",
    "BroadcastAdvancedTransaction",
    "GetChangeAddress",
    "GetReceiveAddresses",
    "ListUtxos",
    "NewAddress",
    "SendFunds",
]
