"""Translate arbitrary exceptions into the closed ``CommanderError`` taxonomy."""

from __future__ import annotations

from typing import Optional

from commander.domain.errors import (
    BinaryNotFound,
    CommanderError,
    InvalidArgument,
    MalformedResponse,
    ProcessExitedNonZero,
    ProcessSpawnFailed,
    StateUnavailable,
)

_HTTP_STATUS = {
    InvalidArgument: 400,
    BinaryNotFound: 404,
    StateUnavailable: 503,
    ProcessExitedNonZero: 502,
    ProcessSpawnFailed: 502,
    MalformedResponse: 502,
}


def map_error(
    exc: Exception,
    *,
    default_code: str,
    default_message: Optional[str] = None,
) -> CommanderError:
    """Return ``exc`` if it is already a ``CommanderError``, else wrap it.

    Args:
        exc (Exception): Failure raised by an adapter or use case.
        default_code (str): Code for exceptions outside the taxonomy.
        default_message (Optional[str]): Text used when ``exc`` has none.

    Returns:
        CommanderError: Value safe to render at the API boundary.
    """
    if isinstance(exc, CommanderError):
        return exc
    message = default_message or str(exc) or "Unexpected error."
    return CommanderError(message, code=default_code)


def http_status_for(err: CommanderError) -> int:
    for kind, status in _HTTP_STATUS.items():
        if isinstance(err, kind):
            return status
    return 500


def error_payload(err: CommanderError) -> dict:
    """JSON-ready ``{"code", "message"}`` plus structured process fields."""
    payload = {"code": err.code, "message": err.message}
    if isinstance(err, ProcessExitedNonZero):
        payload["exit_code"] = err.exit_code
        payload["output"] = err.combined_output
    return payload


__all__ = ["error_payload", "http_status_for", "map_error"]
