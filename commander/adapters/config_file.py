"""Node configuration file (``hemp.conf``) in the data directory.

The file is plain ``key=value`` text with ``#`` comments. Reads and writes are
not locked; concurrent writers can race.
"""

from __future__ import annotations

import logging
import secrets
import string
import uuid
from pathlib import Path
from typing import Dict, Optional

from ..domain.network import NetworkMode, detect_network_mode, rewrite_network_flags

log = logging.getLogger(__name__)

CONFIG_FILE_NAME = "hemp.conf"
SEED_NODES = ("154.38.164.123:42069", "147.93.185.184:42069")
DEFAULT_P2P_PORT = 42069
DEFAULT_RPC_PORT = 42068


def _random_token(length: int) -> str:
    alphabet = string.ascii_letters + string.digits
    return "".join(secrets.choice(alphabet) for _ in range(length))


class ConfigFile:
    """Ensure, parse, and rewrite the node configuration file."""

    def __init__(self, data_dir: Path, *, file_name: str = CONFIG_FILE_NAME) -> None:
        self._data_dir = Path(data_dir)
        self._file_name = file_name

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    @property
    def config_path(self) -> Path:
        return self._data_dir / self._file_name

    # ---- Lifecycle ----
    def ensure(self) -> Path:
        """Create the data dir and a credentialed default config if missing.

        Never overwrites an existing file.
        """
        self._data_dir.mkdir(parents=True, exist_ok=True)
        cfg = self.config_path
        if not cfg.exists():
            rpc_user = f"u{10000 + secrets.randbelow(89999)}"
            lines = [
                f"rpcuser={rpc_user}",
                f"rpcpassword={uuid.uuid4()}",
                "server=1",
                "daemon=0",
            ]
            lines.extend(f"addnode={node}" for node in SEED_NODES)
            cfg.write_text("\n".join(lines) + "\n", encoding="utf-8")
            log.info("Created default config at %s", cfg)
        return cfg

    def create_default(self) -> Path:
        """Write the full default config with fresh credentials (overwrites)."""
        self._data_dir.mkdir(parents=True, exist_ok=True)
        contents = (
            "# Hemp0x Configuration File\n"
            f"rpcuser={_random_token(12)}\n"
            f"rpcpassword={_random_token(24)}\n"
            "server=1\n"
            "daemon=0\n"
            "listen=1\n"
            "txindex=1\n"
            "assetindex=1\n"
            f"port={DEFAULT_P2P_PORT}\n"
            f"rpcport={DEFAULT_RPC_PORT}\n"
        )
        self.config_path.write_text(contents, encoding="utf-8")
        return self.config_path

    def exists(self) -> bool:
        return self.config_path.exists()

    # ---- Reading ----
    def parse(self, path: Optional[Path] = None) -> Dict[str, str]:
        """Return the key/value map; blank and comment lines are skipped."""
        target = Path(path) if path is not None else self.config_path
        values: Dict[str, str] = {}
        for raw in target.read_text(encoding="utf-8").splitlines():
            line = raw.strip()
            if not line or line.startswith("#"):
                continue
            key, sep, value = line.partition("=")
            if not sep:
                continue
            values[key.strip()] = value.strip()
        return values

    def get_network_mode(self) -> NetworkMode:
        cfg = self.config_path
        if not cfg.exists():
            return NetworkMode.MAINNET
        return detect_network_mode(cfg.read_text(encoding="utf-8").splitlines())

    def read_text(self) -> str:
        return self.ensure().read_text(encoding="utf-8")

    # ---- Writing ----
    def write_text(self, contents: str) -> None:
        self.ensure().write_text(contents, encoding="utf-8")

    def write_network_mode(self, mode: NetworkMode) -> None:
        """Replace every network flag line with the single flag for ``mode``."""
        cfg = self.ensure()
        lines = rewrite_network_flags(cfg.read_text(encoding="utf-8").splitlines(), mode)
        cfg.write_text("\n".join(lines) + "\n", encoding="utf-8")
        log.info("Network mode set to %s in %s", mode.value, cfg)


__all__ = ["CONFIG_FILE_NAME", "ConfigFile"]
