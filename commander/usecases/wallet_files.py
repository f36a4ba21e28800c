"""Wallet file replacement (restore from a backup, or start a fresh wallet).

Both flows require a confirmed daemon shutdown before ``wallet.dat`` is
touched: the stop request result is only logged, and the shutdown poll
(lock file or liveness probe) decides whether it is safe to proceed. A
requested restart needs the daemon binary up front; once the wallet is
swapped, a failed restart is logged and the backup path is still returned.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from ..domain.errors import CommanderError, InvalidArgument, StateUnavailable
from ..domain.ports import CliPort, DaemonPort, StoragePort
from .node_lifecycle import request_stop

log = logging.getLogger(__name__)


@dataclass
class _ReplaceWallet:
    cli: CliPort
    daemon: DaemonPort
    storage: StoragePort

    def _replace(self, source: Optional[Path], *, backup_existing: bool, restart_node: bool) -> Optional[Path]:
        if restart_node:
            self.daemon.ensure_available()
        request_stop(self.cli)
        if not self.daemon.wait_for_shutdown():
            raise StateUnavailable("Node is still running; wallet file left untouched.")

        backup = self.storage.replace_wallet(source, backup_existing=backup_existing)
        if backup is not None:
            log.info("Previous wallet moved to %s", backup)
        if restart_node:
            try:
                self.daemon.start()
            except CommanderError as exc:
                log.warning("Wallet replaced but node restart failed: %s", exc.message)
        return backup


@dataclass
class RestoreWallet(_ReplaceWallet):
    def __call__(self, path: str, *, backup_existing: bool = True, restart_node: bool = True) -> Optional[str]:
        source = Path(path or "")
        if not path or not source.is_file():
            raise InvalidArgument("Restore file not found.")
        backup = self._replace(source, backup_existing=backup_existing, restart_node=restart_node)
        return str(backup) if backup is not None else None


@dataclass
class CreateNewWallet(_ReplaceWallet):
    def __call__(self, *, backup_existing: bool = True, restart_node: bool = True) -> Optional[str]:
        backup = self._replace(None, backup_existing=backup_existing, restart_node=restart_node)
        return str(backup) if backup is not None else None


__all__ = ["CreateNewWallet", "RestoreWallet"]
