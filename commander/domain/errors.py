"""Domain-level error types shared by adapters, use cases, and the API layer.

Every failure the control layer reports is one of the kinds below. Adapters
raise them with structured fields; text rendering happens only at the outer
boundary (``rest_api``) through ``message``.
"""
from __future__ import annotations

from typing import Any, Optional


class CommanderError(Exception):
    """Base class for user-presentable control-layer errors."""

    code = "COMMANDER_ERROR"

    def __init__(self, message: str, *, code: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code


class BinaryNotFound(CommanderError):
    """The daemon or CLI executable could not be located on disk."""

    code = "BINARY_NOT_FOUND"

    def __init__(self, label: str, path: str) -> None:
        super().__init__(f"{label} not found at {path}")
        self.label = label
        self.path = path


class ProcessSpawnFailed(CommanderError):
    """The OS refused to start a child process."""

    code = "PROCESS_SPAWN_FAILED"

    def __init__(self, program: str, reason: str) -> None:
        super().__init__(f"Failed to start {program}: {reason}")
        self.program = program
        self.reason = reason


class ProcessExitedNonZero(CommanderError):
    """A child process ran to completion but reported failure."""

    code = "PROCESS_EXITED_NONZERO"

    def __init__(
        self,
        message: str,
        *,
        exit_code: Optional[int],
        stdout: str = "",
        stderr: str = "",
        combined_output: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.exit_code = exit_code
        self.stdout = stdout
        self.stderr = stderr
        if combined_output is None:
            combined_output = " ".join(
                part for part in (stderr.strip(), stdout.strip()) if part
            )
        self.combined_output = combined_output


class MalformedResponse(CommanderError):
    """A CLI call succeeded but its output could not be interpreted."""

    code = "MALFORMED_RESPONSE"

    def __init__(self, context: str, detail: str, *, raw: Any = None) -> None:
        super().__init__(f"{context}: {detail}")
        self.context = context
        self.detail = detail
        self.raw = raw


class InvalidArgument(CommanderError):
    """Caller input rejected before any process was spawned."""

    code = "INVALID_ARGUMENT"


class StateUnavailable(CommanderError):
    """Shared state or environment is not in a usable condition."""

    code = "STATE_UNAVAILABLE"


__all__ = [
    "BinaryNotFound",
    "CommanderError",
    "InvalidArgument",
    "MalformedResponse",
    "ProcessExitedNonZero",
    "ProcessSpawnFailed",
    "StateUnavailable",
]
