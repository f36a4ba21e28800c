"""Use case composing the liveness probe and CLI calls into one dashboard snapshot.

Call order per request: liveness probe, ``getinfo``, ``getblockchaininfo``,
``listtransactions``. Only the blockchain-info step may fail without failing
the whole snapshot; it degrades to the block count from ``getinfo``.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Tuple

from commander.domain.dashboard import (
    TX_FETCH_COUNT,
    DashboardSnapshot,
    NodeState,
    NodeStatus,
    TransactionEntry,
    WalletStatus,
    format_fixed,
    is_synced,
    lock_status_from,
    order_transactions,
)
from commander.domain.errors import CommanderError
from commander.domain.payloads import (
    BlockchainInfo,
    GeneralInfo,
    TransactionRecord,
    parse_model,
    parse_model_list,
)
from commander.domain.ports import CliPort, LivenessPort

log = logging.getLogger(__name__)

TX_DATE_FORMAT = "%m/%d %H:%M"


def format_tx_date(epoch: int) -> str:
    """Local ``MM/DD HH:MM``; out-of-range timestamps render as now."""
    try:
        moment = datetime.fromtimestamp(epoch)
    except (OverflowError, OSError, ValueError):
        moment = datetime.now()
    return moment.strftime(TX_DATE_FORMAT)


@dataclass
class PollDashboard:
    """Use-case callable producing a fresh ``DashboardSnapshot``.

    Attributes:
        cli: CLI adapter used for ``getinfo``/``getblockchaininfo``/``listtransactions``.
        liveness: Probe that short-circuits to an offline snapshot.
        clock: Epoch-seconds source for the sync staleness check.
    """

    cli: CliPort
    liveness: LivenessPort
    clock: Callable[[], float] = field(default=time.time)

    def __call__(self) -> DashboardSnapshot:
        """Build a snapshot for the current daemon state.

        Returns:
            DashboardSnapshot: OFFLINE placeholders when the probe reports the
            daemon absent (no CLI call is made), else live values.

        Raises:
            CommanderError: If ``getinfo`` or ``listtransactions`` fails.
        """
        if not self.liveness.is_running():
            return DashboardSnapshot.offline()

        info = parse_model(self.cli.run(["getinfo"]), GeneralInfo, context="getinfo")
        blocks, headers, synced = self._chain_state(info.blocks)

        node = NodeStatus(
            state=NodeState.RUNNING,
            blocks=blocks,
            headers=headers,
            peers=info.connections,
            difficulty=format_fixed(info.difficulty, 4),
            synced=synced,
        )
        wallet = WalletStatus(
            balance=format_fixed(info.balance, 3),
            pending=format_fixed(info.unconfirmed_balance, 3),
            staked=format_fixed(info.immature_balance, 3),
            lock_status=lock_status_from(info.unlocked_until),
        )

        raw_txs = self.cli.run(["listtransactions", "*", str(TX_FETCH_COUNT)])
        records = parse_model_list(raw_txs, TransactionRecord, context="listtransactions")
        entries = tuple(self._entry(record) for record in order_transactions(records))
        return DashboardSnapshot(node=node, wallet=wallet, transactions=entries)

    def _chain_state(self, fallback_blocks: int) -> Tuple[int, int, bool]:
        try:
            raw = self.cli.run(["getblockchaininfo"])
            chain = parse_model(raw, BlockchainInfo, context="getblockchaininfo")
        except CommanderError as exc:
            log.warning("Blockchain info unavailable, using getinfo blocks: %s", exc.message)
            return fallback_blocks, fallback_blocks, False

        blocks = chain.blocks if chain.blocks is not None else fallback_blocks
        synced = is_synced(
            blocks=blocks,
            headers=chain.headers,
            progress=chain.verificationprogress,
            initial_download=chain.initialblockdownload,
            median_time=chain.mediantime,
            now=self.clock(),
        )
        return blocks, chain.headers, synced

    @staticmethod
    def _entry(record: TransactionRecord) -> TransactionEntry:
        return TransactionEntry(
            date=format_tx_date(record.time),
            category=record.category or "unknown",
            amount=format_fixed(record.amount, 7),
            confirmations=max(0, record.confirmations),
            txid=record.txid,
        )


__all__ = ["PollDashboard", "format_tx_date"]
