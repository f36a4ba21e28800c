"""Persistent pseudo-shell for ad-hoc diagnostics.

One ``ShellSession`` is built at application start and shared by every shell
request. It owns a single working directory that survives between commands:
``cd`` is handled in-process because a spawned shell's directory change dies
with that shell. A lock is held for the whole of each call.
"""

from __future__ import annotations

import contextlib
import logging
import os
import subprocess
import threading
from pathlib import Path
from typing import Iterator, List, Optional

from ..domain.errors import (
    CommanderError,
    InvalidArgument,
    ProcessExitedNonZero,
    ProcessSpawnFailed,
    StateUnavailable,
)
from .cli_process import decode_output, hidden_window_kwargs

log = logging.getLogger(__name__)

NO_OUTPUT = "(no output)"
COMMAND_FAILED = "Command failed"


def translate_posix_idioms(line: str) -> str:
    """Rewrite a few POSIX habits into ``cmd.exe`` equivalents."""
    trimmed = line.strip()
    if trimmed == "ls":
        return "dir"
    if trimmed.startswith("ls "):
        return f"dir {trimmed[3:].strip()}"
    if trimmed == "pwd":
        return "cd"
    if trimmed.startswith("cat "):
        return f"type {trimmed[4:].strip()}"
    if trimmed.startswith("rm -rf "):
        return f"rmdir /s /q {trimmed[7:].strip()}"
    if trimmed.startswith("rm -r "):
        return f"rmdir /s /q {trimmed[6:].strip()}"
    if trimmed.startswith("rm "):
        return f"del /q {trimmed[3:].strip()}"
    return line


def _is_cd(lower: str) -> bool:
    return lower == "cd" or lower.startswith(("cd ", "cd\t"))


class ShellSession:
    """Shared working directory plus command execution and completion."""

    def __init__(self, initial_dir: Path, *, windows: Optional[bool] = None) -> None:
        self._cwd = Path(initial_dir)
        self._lock = threading.Lock()
        self._poisoned = False
        self.windows = (os.name == "nt") if windows is None else windows

    @property
    def cwd(self) -> Path:
        with self._locked():
            return self._cwd

    def reset(self, directory: Optional[Path] = None) -> None:
        """Clear a poisoned session, optionally moving to ``directory``."""
        with self._lock:
            self._poisoned = False
            if directory is not None:
                self._cwd = Path(directory)

    @contextlib.contextmanager
    def _locked(self) -> Iterator[None]:
        with self._lock:
            if self._poisoned:
                raise StateUnavailable("Shell state unavailable")
            try:
                yield
            except CommanderError:
                raise
            except Exception:
                # Unexpected failure mid-call: the directory may be half-updated.
                self._poisoned = True
                log.exception("Shell session poisoned")
                raise

    def _live_dir(self) -> Path:
        if not self._cwd.exists():
            self._cwd = Path.cwd()
        return self._cwd

    # ---- Commands ----
    def run(self, line: str) -> str:
        """Run one command line in the shared directory and return its output."""
        raw = (line or "").strip()
        if not raw:
            raise InvalidArgument("Empty command")
        command = translate_posix_idioms(raw) if self.windows else raw

        with self._locked():
            if _is_cd(command.lower()):
                return self._change_dir(command)
            return self._execute(command, self._live_dir())

    def _change_dir(self, command: str) -> str:
        current = self._cwd
        arg = command[2:].strip()
        if arg.lower().startswith(("/d ", "/d\t")):
            arg = arg[2:].strip()
        if not arg:
            return str(current)
        if len(arg) > 1 and arg.startswith('"') and arg.endswith('"'):
            arg = arg[1:-1]
        target = Path(arg).expanduser()
        if not target.is_absolute():
            target = current / target
        if not target.is_dir():
            raise InvalidArgument(f"Directory not found: {target}")
        canonical = target.resolve()
        self._cwd = canonical
        return str(canonical)

    def _execute(self, command: str, cwd: Path) -> str:
        argv = ["cmd", "/C", command] if self.windows else ["bash", "-lc", command]
        log.debug("Shell %s (cwd=%s)", command, cwd)
        try:
            completed = subprocess.run(
                argv,
                cwd=str(cwd),
                capture_output=True,
                **hidden_window_kwargs(),
            )
        except OSError as exc:
            raise ProcessSpawnFailed(argv[0], str(exc)) from exc

        stdout = decode_output(completed.stdout)
        stderr = decode_output(completed.stderr)
        text = stdout
        if stderr:
            if text:
                text += "\n"
            text += stderr

        if completed.returncode == 0:
            return text.rstrip() if text.strip() else NO_OUTPUT
        output = text.rstrip()
        raise ProcessExitedNonZero(
            output if output.strip() else COMMAND_FAILED,
            exit_code=completed.returncode,
            stdout=stdout,
            stderr=stderr,
            combined_output=output,
        )

    # ---- Completion ----
    def autocomplete(self, line: str) -> List[str]:
        """Entries of the shared directory matching the last typed token."""
        with self._locked():
            cwd = self._live_dir()
            tokens = (line or "").rstrip().split()
            prefix = tokens[-1] if tokens else ""
            if prefix.startswith('"'):
                prefix = prefix[1:]
            if self.windows:
                prefix = prefix.lower()
            try:
                names = [entry.name for entry in os.scandir(cwd)]
            except OSError as exc:
                raise StateUnavailable(f"Cannot read {cwd}: {exc}") from exc
            matches = [
                name
                for name in names
                if (name.lower() if self.windows else name).startswith(prefix)
            ]
            return sorted(matches)


__all__ = ["COMMAND_FAILED", "NO_OUTPUT", "ShellSession", "translate_posix_idioms"]
