"""Host reachability diagnostics: ICMP ping via the OS tool and TCP connect."""

from __future__ import annotations

import logging
import os
import socket
import subprocess
from typing import List, Optional

from ..domain.errors import InvalidArgument, ProcessExitedNonZero, ProcessSpawnFailed
from .cli_process import decode_output, hidden_window_kwargs

log = logging.getLogger(__name__)

PING_COUNT = 3
CONNECT_TIMEOUT_S = 3.0


class NetTools:
    def __init__(self, *, windows: Optional[bool] = None) -> None:
        self.windows = (os.name == "nt") if windows is None else windows

    def ping_argv(self, host: str) -> List[str]:
        count_flag = "-n" if self.windows else "-c"
        return ["ping", count_flag, str(PING_COUNT), host]

    def ping(self, host: str) -> str:
        target = (host or "").strip()
        if not target or target.startswith("-"):
            raise InvalidArgument("Invalid host")
        argv = self.ping_argv(target)
        try:
            completed = subprocess.run(argv, capture_output=True, **hidden_window_kwargs())
        except OSError as exc:
            raise ProcessSpawnFailed("ping", str(exc)) from exc
        stdout = decode_output(completed.stdout)
        stderr = decode_output(completed.stderr)
        if completed.returncode == 0:
            return stdout
        raise ProcessExitedNonZero(
            f"Ping failed:\n{stdout}\n{stderr}",
            exit_code=completed.returncode,
            stdout=stdout,
            stderr=stderr,
        )

    def check_port(self, host: str, port: int) -> bool:
        """True if any resolved address accepts a TCP connection."""
        try:
            infos = socket.getaddrinfo(host, port, type=socket.SOCK_STREAM)
        except (socket.gaierror, UnicodeError) as exc:
            raise InvalidArgument(f"DNS/Parse Error: {exc}") from exc
        for family, socktype, proto, _, address in infos:
            try:
                with socket.socket(family, socktype, proto) as sock:
                    sock.settimeout(CONNECT_TIMEOUT_S)
                    sock.connect(address)
                    return True
            except OSError as exc:
                log.debug("Connect to %s failed: %s", address, exc)
        return False


__all__ = ["NetTools"]
