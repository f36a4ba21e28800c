"""Child-process adapter for ``hemp0x-cli``.

Each call spawns one blocking process and waits for it to exit. There is no
timeout and no retry: a stalled daemon blocks the caller.
"""

from __future__ import annotations

import logging
import os
import subprocess
from pathlib import Path
from typing import Any, Dict, List, Sequence

from ..domain.errors import BinaryNotFound, ProcessExitedNonZero, ProcessSpawnFailed
from ..domain.network import mode_from_config
from .binary_locator import BinaryLocator
from .config_file import ConfigFile

log = logging.getLogger(__name__)

# Commands whose positional arguments carry secrets: command -> arg indexes.
_SECRET_ARGS: Dict[str, tuple] = {
    "encryptwallet": (1,),
    "walletpassphrase": (1,),
    "walletpassphrasechange": (1, 2),
    "importprivkey": (1,),
}


def hidden_window_kwargs() -> Dict[str, Any]:
    """Popen kwargs that keep a console window from flashing up on Windows."""
    if os.name == "nt":
        return {"creationflags": getattr(subprocess, "CREATE_NO_WINDOW", 0x08000000)}
    return {}


def decode_output(data: bytes) -> str:
    return (data or b"").decode("utf-8", errors="replace")


def redact_args(args: Sequence[str]) -> List[str]:
    """Copy of ``args`` with passphrases and private keys masked for logs."""
    cleaned = [str(arg) for arg in args]
    if not cleaned:
        return cleaned
    for index in _SECRET_ARGS.get(cleaned[0].lower(), ()):
        if index < len(cleaned):
            cleaned[index] = "***"
    return cleaned


class CliProcessAdapter:
    """Run CLI commands against the local daemon with the right context flags."""

    def __init__(self, config: ConfigFile, locator: BinaryLocator) -> None:
        self.config = config
        self.locator = locator

    def build_argv(self, cli: str, args: Sequence[str]) -> List[str]:
        """``<cli> -conf=<cfg> -datadir=<dir> [-regtest|-testnet] <args...>``."""
        cfg = self.config.ensure()
        argv = [cli, f"-conf={cfg}", f"-datadir={self.config.data_dir}"]
        # Mirror the daemon's own mode selection so client and server agree.
        flag = mode_from_config(self.config.parse(cfg)).cli_flag
        if flag:
            argv.append(flag)
        argv.extend(str(arg) for arg in args)
        return argv

    def run(self, args: Sequence[str]) -> str:
        """Run one CLI command and return its trimmed stdout.

        Raises:
            BinaryNotFound: The CLI executable does not exist.
            ProcessSpawnFailed: The OS could not start the process.
            ProcessExitedNonZero: The CLI reported failure.
        """
        self.config.ensure()
        cli = self.locator.cli_path()
        cli_path = Path(cli)
        if not cli_path.exists():
            raise BinaryNotFound("CLI", cli)

        argv = self.build_argv(cli, args)
        log.debug("CLI %s", " ".join(redact_args(args)))
        try:
            completed = subprocess.run(
                argv,
                cwd=str(cli_path.parent),
                capture_output=True,
                **hidden_window_kwargs(),
            )
        except OSError as exc:
            raise ProcessSpawnFailed(cli, str(exc)) from exc

        stdout = decode_output(completed.stdout)
        stderr = decode_output(completed.stderr)
        if completed.returncode != 0:
            message = (
                f"CLI error (exit status: {completed.returncode}): "
                f"{stderr.strip()} {stdout.strip()}"
            ).strip()
            log.debug("CLI %s failed: %s", args[0] if args else "", message)
            raise ProcessExitedNonZero(
                message,
                exit_code=completed.returncode,
                stdout=stdout,
                stderr=stderr,
            )
        return stdout.strip()


__all__ = ["CliProcessAdapter", "decode_output", "hidden_window_kwargs", "redact_args"]
