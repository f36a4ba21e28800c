import subprocess

import pytest

from commander.adapters import process_probe
from commander.adapters.process_probe import ProcessProbe


def _fake_run(returncode, stdout=b""):
    calls = []

    def run(argv, **kwargs):
        calls.append(argv)
        return subprocess.CompletedProcess(argv, returncode, stdout=stdout, stderr=b"")

    return run, calls


def test_pgrep_match_means_running(monkeypatch):
    run, calls = _fake_run(0, b"1234\n")
    monkeypatch.setattr(process_probe.subprocess, "run", run)

    assert ProcessProbe(windows=False).is_running() is True
    assert calls == [["pgrep", "-x", "hemp0xd"]]


def test_pgrep_no_match_means_absent(monkeypatch):
    run, _ = _fake_run(1)
    monkeypatch.setattr(process_probe.subprocess, "run", run)

    assert ProcessProbe(windows=False).is_running() is False


@pytest.mark.parametrize("returncode", [2, 3])
def test_ambiguous_pgrep_exit_counts_as_running(monkeypatch, returncode):
    run, _ = _fake_run(returncode)
    monkeypatch.setattr(process_probe.subprocess, "run", run)

    assert ProcessProbe(windows=False).is_running() is True


def test_spawn_failure_counts_as_running(monkeypatch):
    def boom(argv, **kwargs):
        raise FileNotFoundError("pgrep")

    monkeypatch.setattr(process_probe.subprocess, "run", boom)

    assert ProcessProbe(windows=False).is_running() is True


def test_tasklist_output_is_searched_for_image_name(monkeypatch):
    run, calls = _fake_run(0, b"hemp0xd.exe   4242 Console  1  50,000 K\r\n")
    monkeypatch.setattr(process_probe.subprocess, "run", run)

    assert ProcessProbe(windows=True).is_running() is True
    assert calls[0][:3] == ["tasklist", "/FI", "IMAGENAME eq hemp0xd.exe"]


def test_tasklist_without_image_means_absent(monkeypatch):
    run, _ = _fake_run(0, b"INFO: No tasks are running which match the specified criteria.\r\n")
    monkeypatch.setattr(process_probe.subprocess, "run", run)

    assert ProcessProbe(windows=True).is_running() is False
