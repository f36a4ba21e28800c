import pytest

from commander.adapters.config_file import ConfigFile
from commander.domain.errors import InvalidArgument, ProcessExitedNonZero, StateUnavailable
from commander.domain.network import NetworkMode
from commander.usecases.config_ops import InitConfig, ReadDebugLog
from commander.usecases.node_lifecycle import (
    NETWORK_MODE_UPDATED,
    GetNetworkMode,
    RestartNode,
    SetNetworkMode,
)


class _CliStub:
    def __init__(self, fail=False):
        self.fail = fail
        self.calls = []

    def run(self, args):
        self.calls.append(list(args))
        if self.fail:
            raise ProcessExitedNonZero("couldn't connect to server", exit_code=1)
        return "Hemp0x server stopping"


class _DaemonStub:
    def __init__(self, released=True):
        self.released = released
        self.started = 0

    def start(self):
        self.started += 1

    def wait_for_shutdown(self):
        return self.released


class _LocatorStub:
    def daemon_path(self):
        return "/opt/hemp0x/hemp0xd"

    def cli_path(self):
        return "/opt/hemp0x/hemp0x-cli"


class _StorageStub:
    def __init__(self):
        self.requested = []

    def read_log_tail(self, max_lines):
        self.requested.append(max_lines)
        return "tail"


def test_set_network_mode_stops_waits_and_writes_single_flag(tmp_path):
    cfg = ConfigFile(tmp_path)
    cfg.config_path.write_text("rpcuser=a\nregtest=1\n", encoding="utf-8")
    cli, sleeps = _CliStub(fail=True), []
    uc = SetNetworkMode(cli, cfg, grace_s=2.0, sleep=sleeps.append)

    message = uc("testnet")

    assert message == NETWORK_MODE_UPDATED
    assert cli.calls == [["stop"]]
    assert sleeps == [2.0]
    lines = cfg.config_path.read_text(encoding="utf-8").splitlines()
    flags = [line for line in lines if line.startswith(("testnet=", "regtest="))]
    assert flags == ["testnet=1"]
    assert GetNetworkMode(cfg)() is NetworkMode.TESTNET


def test_invalid_mode_has_no_side_effects(tmp_path):
    cfg = ConfigFile(tmp_path)
    cfg.config_path.write_text("testnet=1\n", encoding="utf-8")
    cli, sleeps = _CliStub(), []

    with pytest.raises(InvalidArgument):
        SetNetworkMode(cli, cfg, sleep=sleeps.append)("signet")

    assert cli.calls == []
    assert sleeps == []
    assert cfg.config_path.read_text(encoding="utf-8") == "testnet=1\n"


def test_restart_requires_confirmed_shutdown():
    daemon = _DaemonStub(released=False)

    with pytest.raises(StateUnavailable):
        RestartNode(_CliStub(), daemon)()

    assert daemon.started == 0

    running = _DaemonStub()
    RestartNode(_CliStub(), running)()
    assert running.started == 1


def test_init_config_reports_paths(tmp_path):
    cfg = ConfigFile(tmp_path / "data")

    paths = InitConfig(cfg, _LocatorStub())()

    assert paths.data_dir == str(tmp_path / "data")
    assert paths.config_path == str(cfg.config_path)
    assert paths.cli_path == "/opt/hemp0x/hemp0x-cli"
    assert cfg.exists()


def test_debug_log_defaults_to_200_lines():
    storage = _StorageStub()

    assert ReadDebugLog(storage)() == "tail"
    assert storage.requested == [200]
