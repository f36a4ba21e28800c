from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from ..domain.errors import InvalidArgument, StateUnavailable

_ENV_PREFIX = "COMMANDER_"


def default_data_dir(environ: Mapping[str, str], *, windows: bool) -> Path:
    """Per-user node data directory: ``%APPDATA%/Hemp0x`` or ``~/.hemp0x``."""
    if windows:
        appdata = environ.get("APPDATA")
        if not appdata:
            raise StateUnavailable("APPDATA not set")
        return Path(appdata) / "Hemp0x"
    return Path.home() / ".hemp0x"


@dataclass
class CommanderSettings:
    """Typed runtime settings, overridable through ``COMMANDER_*`` env vars."""

    data_dir: Path
    daemon_name: str = "hemp0xd"
    cli_name: str = "hemp0x-cli"
    app_dir: Optional[Path] = None
    source_root: Optional[Path] = None
    api_host: str = "127.0.0.1"
    api_port: int = 42080
    api_key: str = ""
    shutdown_grace_s: float = 2.0
    lock_poll_attempts: int = 20
    lock_poll_interval_s: float = 0.5

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        *,
        windows: Optional[bool] = None,
    ) -> "CommanderSettings":
        env = os.environ if environ is None else environ
        is_windows = (os.name == "nt") if windows is None else windows

        def get(name: str) -> Optional[str]:
            value = env.get(_ENV_PREFIX + name)
            if value is None or not value.strip():
                return None
            return value.strip()

        data_dir = get("DATA_DIR")
        app_dir = get("APP_DIR")
        source_root = get("SOURCE_ROOT")
        return cls(
            data_dir=Path(data_dir).expanduser() if data_dir else default_data_dir(env, windows=is_windows),
            daemon_name=get("DAEMON_NAME") or cls.daemon_name,
            cli_name=get("CLI_NAME") or cls.cli_name,
            app_dir=Path(app_dir) if app_dir else None,
            source_root=Path(source_root) if source_root else None,
            api_host=get("API_HOST") or cls.api_host,
            api_port=_coerce_int("API_PORT", get("API_PORT"), cls.api_port),
            api_key=get("API_KEY") or "",
            shutdown_grace_s=_coerce_float("SHUTDOWN_GRACE_S", get("SHUTDOWN_GRACE_S"), cls.shutdown_grace_s),
            lock_poll_attempts=_coerce_int("LOCK_POLL_ATTEMPTS", get("LOCK_POLL_ATTEMPTS"), cls.lock_poll_attempts),
            lock_poll_interval_s=_coerce_float(
                "LOCK_POLL_INTERVAL_S", get("LOCK_POLL_INTERVAL_S"), cls.lock_poll_interval_s
            ),
        )


def _coerce_int(name: str, value: Optional[str], fallback: int) -> int:
    if value is None:
        return fallback
    try:
        return int(value)
    except ValueError:
        raise InvalidArgument(f"{_ENV_PREFIX}{name} must be an integer")


def _coerce_float(name: str, value: Optional[str], fallback: float) -> float:
    if value is None:
        return fallback
    try:
        return float(value)
    except ValueError:
        raise InvalidArgument(f"{_ENV_PREFIX}{name} must be a number")


__all__ = ["CommanderSettings", "default_data_dir"]
