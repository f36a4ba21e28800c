"""Daemon start/stop/restart and network-mode selection."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Callable

from ..domain.errors import CommanderError, StateUnavailable
from ..domain.network import NetworkMode
from ..domain.ports import CliPort, ConfigPort, DaemonPort

log = logging.getLogger(__name__)

NETWORK_MODE_UPDATED = "Network mode updated. Please restart the node."


def request_stop(cli: CliPort) -> bool:
    """Ask the daemon to stop; the outcome is logged, never raised."""
    try:
        cli.run(["stop"])
    except CommanderError as exc:
        log.info("Stop request not accepted: %s", exc.message)
        return False
    return True


@dataclass
class StartNode:
    daemon: DaemonPort

    def __call__(self) -> None:
        self.daemon.start()


@dataclass
class StopNode:
    cli: CliPort

    def __call__(self) -> None:
        self.cli.run(["stop"])


@dataclass
class RestartNode:
    """Stop, wait for the data-dir lock to clear, then start again."""

    cli: CliPort
    daemon: DaemonPort

    def __call__(self) -> None:
        request_stop(self.cli)
        if not self.daemon.wait_for_shutdown():
            raise StateUnavailable("Node did not shut down; restart aborted.")
        self.daemon.start()


@dataclass
class GetNetworkMode:
    config: ConfigPort

    def __call__(self) -> NetworkMode:
        return self.config.get_network_mode()


@dataclass
class SetNetworkMode:
    """Stop the node, give it a grace period, then rewrite the network flags.

    The mode is validated before anything else happens, so an unknown mode
    leaves both the node and the config untouched.
    """

    cli: CliPort
    config: ConfigPort
    grace_s: float = 2.0
    sleep: Callable[[float], None] = field(default=time.sleep)

    def __call__(self, mode: str) -> str:
        target = NetworkMode.parse(mode)
        request_stop(self.cli)
        self.sleep(self.grace_s)
        self.config.ensure()
        self.config.write_network_mode(target)
        log.info("Network mode set to %s", target.value)
        return NETWORK_MODE_UPDATED


__all__ = [
    "GetNetworkMode",
    "NETWORK_MODE_UPDATED",
    "RestartNode",
    "SetNetworkMode",
    "StartNode",
    "StopNode",
    "request_stop",
]
