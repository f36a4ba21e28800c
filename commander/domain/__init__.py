"""Domain package exports for node-control value objects and rules."""

from .dashboard import DashboardSnapshot, LockStatus, NodeState
from .errors import (
    BinaryNotFound,
    CommanderError,
    InvalidArgument,
    MalformedResponse,
    ProcessExitedNonZero,
    ProcessSpawnFailed,
    StateUnavailable,
)
from .network import NetworkMode, detect_network_mode
from .util import split_args

__all__ = [
    "BinaryNotFound",
    "CommanderError",
    "DashboardSnapshot",
    "InvalidArgument",
    "LockStatus",
    "MalformedResponse",
    "NetworkMode",
    "NodeState",
    "ProcessExitedNonZero",
    "ProcessSpawnFailed",
    "StateUnavailable",
    "detect_network_mode",
    "split_args",
]
