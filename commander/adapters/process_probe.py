"""OS-level liveness probe for the daemon process.

The probe is a fast path that spares the dashboard a slow CLI round trip when
the daemon is known to be down. Anything short of a clear "absent" answer is
reported as running, and the CLI call that follows decides.
"""

from __future__ import annotations

import logging
import os
import subprocess
from typing import List, Optional

from .cli_process import decode_output, hidden_window_kwargs

log = logging.getLogger(__name__)

_PGREP_NO_MATCH = 1


class ProcessProbe:
    """Check for a process by exact name via ``pgrep`` or ``tasklist``."""

    def __init__(self, process_name: str = "hemp0xd", *, windows: Optional[bool] = None) -> None:
        self.process_name = process_name
        self.windows = (os.name == "nt") if windows is None else windows

    @property
    def image_name(self) -> str:
        return f"{self.process_name}.exe" if self.windows else self.process_name

    def probe_argv(self) -> List[str]:
        if self.windows:
            return ["tasklist", "/FI", f"IMAGENAME eq {self.image_name}", "/NH"]
        return ["pgrep", "-x", self.process_name]

    def is_running(self) -> bool:
        argv = self.probe_argv()
        try:
            completed = subprocess.run(argv, capture_output=True, **hidden_window_kwargs())
        except OSError as exc:
            log.debug("Liveness probe %s could not run: %s", argv[0], exc)
            return True

        if self.windows:
            if completed.returncode != 0:
                log.debug("tasklist exited with %s; assuming running", completed.returncode)
                return True
            return self.image_name.lower() in decode_output(completed.stdout).lower()

        if completed.returncode == 0:
            return True
        if completed.returncode == _PGREP_NO_MATCH:
            return False
        log.debug("pgrep exited with %s; assuming running", completed.returncode)
        return True


__all__ = ["ProcessProbe"]
