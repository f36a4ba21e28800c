"""Dashboard snapshot value objects and the rules that shape them.

Snapshots are recomputed for every request and never cached. Formatted
strings (balances, difficulty, amounts) are display-only.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Tuple, TypeVar

PLACEHOLDER = "--"
SYNC_STALENESS_S = 5400
SYNC_PROGRESS_MIN = 0.999
TX_DISPLAY_LIMIT = 50
TX_FETCH_COUNT = 100


class NodeState(str, Enum):
    RUNNING = "RUNNING"
    OFFLINE = "OFFLINE"


class LockStatus(str, Enum):
    """Wallet encryption state as reported by ``unlocked_until``."""

    UNENCRYPTED = "UNENCRYPTED"
    LOCKED = "LOCKED"
    UNLOCKED = "UNLOCKED"
    UNKNOWN = PLACEHOLDER


@dataclass(frozen=True)
class NodeStatus:
    state: NodeState
    blocks: int
    headers: int
    peers: int
    difficulty: str
    synced: bool


@dataclass(frozen=True)
class WalletStatus:
    balance: str
    pending: str
    staked: str
    lock_status: LockStatus


@dataclass(frozen=True)
class TransactionEntry:
    date: str
    category: str
    amount: str
    confirmations: int
    txid: str


@dataclass(frozen=True)
class DashboardSnapshot:
    node: NodeStatus
    wallet: WalletStatus
    transactions: Tuple[TransactionEntry, ...] = ()

    @classmethod
    def offline(cls) -> "DashboardSnapshot":
        """Placeholder snapshot used when the daemon process is absent."""
        return cls(
            node=NodeStatus(
                state=NodeState.OFFLINE,
                blocks=0,
                headers=0,
                peers=0,
                difficulty=PLACEHOLDER,
                synced=False,
            ),
            wallet=WalletStatus(
                balance=PLACEHOLDER,
                pending=PLACEHOLDER,
                staked=PLACEHOLDER,
                lock_status=LockStatus.UNKNOWN,
            ),
            transactions=(),
        )


def lock_status_from(unlocked_until: Optional[int]) -> LockStatus:
    if unlocked_until is None:
        return LockStatus.UNENCRYPTED
    if unlocked_until == 0:
        return LockStatus.LOCKED
    return LockStatus.UNLOCKED


def is_synced(
    *,
    blocks: int,
    headers: int,
    progress: float,
    initial_download: bool,
    median_time: int,
    now: float,
) -> bool:
    """Composite catch-up estimate; tolerates 90 minutes of tip staleness."""
    return (
        headers > 0
        and blocks >= headers
        and progress >= SYNC_PROGRESS_MIN
        and not initial_download
        and (now - median_time) < SYNC_STALENESS_S
    )


def _category_rank(category: str) -> Tuple[str, int]:
    # "send" sorts immediately before "receive" within one timestamp.
    if category == "send":
        return ("receive", 0)
    if category == "receive":
        return ("receive", 1)
    return (category, 0)


T = TypeVar("T")


def order_transactions(records: Iterable[T], *, limit: int = TX_DISPLAY_LIMIT) -> List[T]:
    """Return records most-recent-first, capped at ``limit``.

    Records are stably sorted ascending by ``time`` (ties: send before
    receive, then category name), reversed, then truncated.
    """
    ascending = sorted(
        records,
        key=lambda rec: (getattr(rec, "time", 0), _category_rank(getattr(rec, "category", ""))),
    )
    ascending.reverse()
    return ascending[:limit]


def format_fixed(value: float, places: int) -> str:
    return f"{value:.{places}f}"


__all__ = [
    "DashboardSnapshot",
    "LockStatus",
    "NodeState",
    "NodeStatus",
    "PLACEHOLDER",
    "TransactionEntry",
    "WalletStatus",
    "format_fixed",
    "is_synced",
    "lock_status_from",
    "order_transactions",
]
