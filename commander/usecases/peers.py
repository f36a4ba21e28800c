from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import List

from ..domain.errors import CommanderError
from ..domain.models import BanEntry, BanResult
from ..domain.payloads import BanRecord, PeerRecord, parse_model_list
from ..domain.peers import BAN_DURATION_S, peer_host, version_is_old
from ..domain.ports import CliPort

log = logging.getLogger(__name__)

BAN_DATE_FORMAT = "%Y-%m-%d %H:%M"


def format_ban_until(epoch: int) -> str:
    try:
        return datetime.fromtimestamp(epoch).strftime(BAN_DATE_FORMAT)
    except (OverflowError, OSError, ValueError):
        return "Unknown"


@dataclass
class BanOldPeers:
    """Ban every connected peer whose user agent is older than the minimum.

    A failed ``setban`` for one peer is logged and skipped; only successful
    bans are counted.
    """

    cli: CliPort

    def __call__(self) -> BanResult:
        peers = parse_model_list(self.cli.run(["getpeerinfo"]), PeerRecord, context="getpeerinfo")
        banned: List[str] = []
        for peer in peers:
            if not peer.subver or not version_is_old(peer.subver):
                continue
            host = peer_host(peer.addr)
            if not host:
                continue
            try:
                self.cli.run(["setban", host, "add", str(BAN_DURATION_S)])
            except CommanderError as exc:
                log.warning("Could not ban %s: %s", host, exc.message)
                continue
            banned.append(f"{host} ({peer.subver})")
        if banned:
            log.info("Banned %d outdated peer(s)", len(banned))
        return BanResult(banned_count=len(banned), banned_peers=tuple(banned))


@dataclass
class ListBannedPeers:
    cli: CliPort

    def __call__(self) -> List[BanEntry]:
        bans = parse_model_list(self.cli.run(["listbanned"]), BanRecord, context="listbanned")
        return [
            BanEntry(
                address=ban.address,
                banned_until=format_ban_until(ban.banned_until),
                ban_reason=ban.ban_reason,
            )
            for ban in bans
        ]


@dataclass
class UnbanPeer:
    cli: CliPort

    def __call__(self, address: str) -> str:
        return self.cli.run(["setban", address, "remove"])


__all__ = ["BanOldPeers", "ListBannedPeers", "UnbanPeer", "format_ban_until"]
