"""Start the node daemon and observe its shutdown through the lock file and liveness probe."""

from __future__ import annotations

import logging
import os
import subprocess
import time
from pathlib import Path
from typing import Callable, List, Optional

from ..domain.errors import BinaryNotFound, ProcessSpawnFailed
from ..domain.ports import LivenessPort
from .binary_locator import BinaryLocator
from .cli_process import hidden_window_kwargs
from .config_file import ConfigFile

log = logging.getLogger(__name__)

LOCK_FILE_NAME = ".lock"


class DaemonLauncher:
    """Spawn ``hemp0xd`` detached and poll until it has stopped."""

    def __init__(
        self,
        config: ConfigFile,
        locator: BinaryLocator,
        *,
        poll_attempts: int = 20,
        poll_interval_s: float = 0.5,
        liveness: Optional[LivenessPort] = None,
        sleep: Callable[[float], None] = time.sleep,
        windows: Optional[bool] = None,
    ) -> None:
        self.config = config
        self.locator = locator
        self.liveness = liveness
        self.poll_attempts = max(1, int(poll_attempts))
        self.poll_interval_s = max(0.0, float(poll_interval_s))
        self._sleep = sleep
        self.windows = (os.name == "nt") if windows is None else windows

    @property
    def lock_path(self) -> Path:
        return self.config.data_dir / LOCK_FILE_NAME

    def build_argv(self, daemon: str) -> List[str]:
        cfg = self.config.ensure()
        argv = [daemon, f"-conf={cfg}", f"-datadir={self.config.data_dir}"]
        if not self.windows:
            argv.append("-daemon")
        return argv

    def start(self) -> None:
        """Launch the daemon without waiting for it to exit."""
        self.config.ensure()
        daemon = self.ensure_available()
        daemon_path = Path(daemon)
        argv = self.build_argv(daemon)
        try:
            subprocess.Popen(
                argv,
                cwd=str(daemon_path.parent),
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                **hidden_window_kwargs(),
            )
        except OSError as exc:
            raise ProcessSpawnFailed(daemon, str(exc)) from exc
        log.info("Started daemon %s", daemon)

    def ensure_available(self) -> str:
        """Return the daemon path, raising ``BinaryNotFound`` if it is missing."""
        daemon = self.locator.daemon_path()
        if not Path(daemon).exists():
            raise BinaryNotFound("Daemon", daemon)
        return daemon

    def _stopped(self) -> bool:
        if not self.lock_path.exists():
            return True
        # The daemon leaves .lock behind after a clean exit.
        return self.liveness is not None and not self.liveness.is_running()

    def wait_for_shutdown(self) -> bool:
        """Poll until the daemon is gone.

        The daemon counts as stopped once its lock file is absent or the
        liveness probe clearly reports no daemon process.

        Returns:
            bool: ``True`` once stopped, ``False`` if it still looks alive
            after all attempts.
        """
        for _ in range(self.poll_attempts):
            if self._stopped():
                return True
            self._sleep(self.poll_interval_s)
        stopped = self._stopped()
        if not stopped:
            log.warning("Daemon still running after %d polls", self.poll_attempts)
        return stopped


__all__ = ["DaemonLauncher", "LOCK_FILE_NAME"]
