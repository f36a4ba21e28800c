"""Port protocols (hexagonal boundaries) for the node control layer.

Use cases depend on these protocols only; concrete implementations live in
``commander.adapters`` and are wired once by ``commander.app.controller``.
"""
from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional, Protocol, Sequence

from .models import AddressBookEntry, BinaryStatus, DataFolderInfo
from .network import NetworkMode


class CliPort(Protocol):
    """Run one ``hemp0x-cli`` command and return its trimmed stdout."""

    def run(self, args: Sequence[str]) -> str: ...


class LivenessPort(Protocol):
    """Cheap OS-level check for a running daemon process."""

    def is_running(self) -> bool: ...


class ConfigPort(Protocol):
    """Line-oriented node configuration file and data directory."""

    @property
    def data_dir(self) -> Path: ...
    @property
    def config_path(self) -> Path: ...
    def ensure(self) -> Path: ...
    def parse(self, path: Optional[Path] = None) -> Dict[str, str]: ...
    def get_network_mode(self) -> NetworkMode: ...
    def write_network_mode(self, mode: NetworkMode) -> None: ...
    def exists(self) -> bool: ...
    def read_text(self) -> str: ...
    def write_text(self, contents: str) -> None: ...
    def create_default(self) -> Path: ...


class BinaryLocatorPort(Protocol):
    """Resolve executable paths across deployment layouts."""

    def resolve(self, name: str) -> str: ...
    def daemon_path(self) -> str: ...
    def cli_path(self) -> str: ...
    def status(self) -> BinaryStatus: ...


class DaemonPort(Protocol):
    """Start the daemon and observe its shutdown."""

    def ensure_available(self) -> str: ...
    def start(self) -> None: ...
    def wait_for_shutdown(self) -> bool: ...


class ShellPort(Protocol):
    """Persistent pseudo-shell with one shared working directory."""

    def run(self, line: str) -> str: ...
    def autocomplete(self, line: str) -> List[str]: ...


class StoragePort(Protocol):
    """Data-folder file operations (address book, wallet files, logs)."""

    def load_address_book(self) -> List[AddressBookEntry]: ...
    def save_address_book(self, entries: Sequence[AddressBookEntry]) -> None: ...
    def data_folder_info(self) -> DataFolderInfo: ...
    def read_log_tail(self, max_lines: int) -> str: ...
    def replace_wallet(self, source: Optional[Path], *, backup_existing: bool) -> Optional[Path]: ...


class NetToolsPort(Protocol):
    """Host reachability diagnostics."""

    def ping(self, host: str) -> str: ...
    def check_port(self, host: str, port: int) -> bool: ...


__all__ = [
    "BinaryLocatorPort",
    "CliPort",
    "ConfigPort",
    "DaemonPort",
    "LivenessPort",
    "NetToolsPort",
    "ShellPort",
    "StoragePort",
]
