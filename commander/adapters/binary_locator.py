"""Filesystem lookup for the daemon and CLI executables.

Bundled installs, source checkouts, and the scripted deploy layout all place
the binaries differently. Lookups are never cached so a freshly installed
binary is found without restarting the application.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Callable, List, Optional

from ..domain.models import BinaryStatus

log = logging.getLogger(__name__)

CWD_SEARCH_DEPTH = 4
SOURCE_SEARCH_DEPTH = 5
DEPLOY_SUBPATH = ("hemp0x-deploy", "hemp0x-core", "src")


def application_dir() -> Path:
    """Directory of the running application binary (or launching script)."""
    if getattr(sys, "frozen", False):
        return Path(sys.executable).resolve().parent
    script = sys.argv[0] if sys.argv and sys.argv[0] else ""
    if script:
        return Path(script).resolve().parent
    return Path.cwd()


def source_root() -> Path:
    """Repository root that contains the ``commander`` package."""
    return Path(__file__).resolve().parents[2]


class BinaryLocator:
    """Resolve executables by searching a fixed list of candidate locations."""

    def __init__(
        self,
        *,
        daemon_name: str = "hemp0xd",
        cli_name: str = "hemp0x-cli",
        app_dir: Optional[Path] = None,
        source_dir: Optional[Path] = None,
        home_dir: Optional[Path] = None,
        cwd: Optional[Callable[[], Path]] = None,
        windows: Optional[bool] = None,
    ) -> None:
        self.daemon_name = daemon_name
        self.cli_name = cli_name
        self._app_dir = app_dir
        self._source_dir = source_dir
        self._home_dir = home_dir
        self._cwd = cwd or Path.cwd
        self.windows = (os.name == "nt") if windows is None else windows

    def bin_name(self, name: str) -> str:
        return f"{name}.exe" if self.windows else name

    def candidates(self, name: str) -> List[Path]:
        """All candidate paths for ``name`` in search order."""
        exe = self.bin_name(name)
        app_dir = self._app_dir or application_dir()
        found: List[Path] = [app_dir / exe, app_dir / "resources" / exe]

        try:
            cwd = self._cwd()
        except OSError:
            cwd = None
        if cwd is not None:
            found.extend(self._ancestors(cwd, exe, CWD_SEARCH_DEPTH))

        found.extend(
            self._ancestors(self._source_dir or source_root(), exe, SOURCE_SEARCH_DEPTH)
        )

        if not self.windows:
            home = self._home_dir or Path.home()
            found.append(home.joinpath(*DEPLOY_SUBPATH, exe))
        return found

    def resolve(self, name: str) -> str:
        """Return the first existing candidate, else the bare executable name."""
        for candidate in self.candidates(name):
            if candidate.exists():
                return str(candidate)
        log.debug("No %s binary found in search paths; relying on PATH", name)
        return name

    def daemon_path(self) -> str:
        return self.resolve(self.daemon_name)

    def cli_path(self) -> str:
        return self.resolve(self.cli_name)

    def status(self) -> BinaryStatus:
        return BinaryStatus(
            daemon_exists=Path(self.daemon_path()).exists(),
            cli_exists=Path(self.cli_path()).exists(),
        )

    @staticmethod
    def _ancestors(base: Path, exe: str, depth: int) -> List[Path]:
        paths: List[Path] = []
        current: Optional[Path] = base
        for _ in range(depth + 1):
            if current is None:
                break
            paths.append(current / exe)
            parent = current.parent
            current = parent if parent != current else None
        return paths


__all__ = ["BinaryLocator", "application_dir", "source_root"]
