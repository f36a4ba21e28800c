import os
import subprocess

import pytest

from commander.adapters import shell_session
from commander.adapters.shell_session import NO_OUTPUT, ShellSession, translate_posix_idioms
from commander.domain.errors import InvalidArgument, ProcessExitedNonZero, StateUnavailable

posix_only = pytest.mark.skipif(os.name == "nt", reason="runs commands through bash")


def test_cd_dotdot_then_bare_cd_reports_parent(tmp_path):
    child = tmp_path / "child"
    child.mkdir()
    shell = ShellSession(child, windows=False)

    assert shell.run("cd ..") == str(tmp_path.resolve())
    assert shell.run("cd") == str(tmp_path.resolve())
    assert shell.cwd == tmp_path.resolve()


def test_cd_into_missing_directory_keeps_cwd(tmp_path):
    shell = ShellSession(tmp_path, windows=False)

    with pytest.raises(InvalidArgument) as exc_info:
        shell.run("cd nowhere")

    assert "Directory not found" in exc_info.value.message
    assert shell.cwd == tmp_path


def test_cd_handles_quotes_and_windows_drive_switch(tmp_path):
    spaced = tmp_path / "with space"
    spaced.mkdir()
    shell = ShellSession(tmp_path, windows=False)

    assert shell.run('cd /d "with space"') == str(spaced.resolve())


def test_empty_command_is_rejected(tmp_path):
    with pytest.raises(InvalidArgument):
        ShellSession(tmp_path, windows=False).run("   ")


def test_autocomplete_matches_last_token_sorted(tmp_path):
    for name in ("report.csv", "readme.txt", "data"):
        (tmp_path / name).write_text("", encoding="utf-8")
    shell = ShellSession(tmp_path, windows=False)

    assert shell.autocomplete("cat re") == ["readme.txt", "report.csv"]
    assert shell.autocomplete("") == ["data", "readme.txt", "report.csv"]


def test_windows_autocomplete_is_case_insensitive(tmp_path):
    (tmp_path / "Readme.TXT").write_text("", encoding="utf-8")
    shell = ShellSession(tmp_path, windows=True)

    assert shell.autocomplete('type "rea') == ["Readme.TXT"]


@pytest.fixture
def quiet_home(tmp_path, monkeypatch):
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("BASH_ENV", raising=False)
    return home


def _fake_run(monkeypatch, returncode, stdout=b"", stderr=b""):
    seen = {}

    def run(argv, **kwargs):
        seen["argv"] = argv
        seen["cwd"] = kwargs["cwd"]
        return subprocess.CompletedProcess(argv, returncode, stdout=stdout, stderr=stderr)

    monkeypatch.setattr(shell_session.subprocess, "run", run)
    return seen


@posix_only
def test_commands_run_in_shared_directory(tmp_path, quiet_home):
    (tmp_path / "sub").mkdir()
    (tmp_path / "sub" / "marker.txt").write_text("hi", encoding="utf-8")
    shell = ShellSession(tmp_path, windows=False)

    shell.run("cd sub")

    assert shell.run("cat marker.txt").splitlines()[-1] == "hi"


@posix_only
def test_real_failure_reports_exit_code(tmp_path, quiet_home):
    shell = ShellSession(tmp_path, windows=False)

    with pytest.raises(ProcessExitedNonZero) as exc_info:
        shell.run("echo out; echo err >&2; exit 4")

    err = exc_info.value
    assert err.exit_code == 4
    assert err.stdout.splitlines()[-1] == "out"
    assert err.stderr.splitlines()[-1] == "err"


def test_login_shell_runs_in_session_directory(tmp_path, monkeypatch):
    seen = _fake_run(monkeypatch, 0)

    assert ShellSession(tmp_path, windows=False).run("true") == NO_OUTPUT
    assert seen["argv"] == ["bash", "-lc", "true"]
    assert seen["cwd"] == str(tmp_path)


def test_failed_command_keeps_combined_output(tmp_path, monkeypatch):
    _fake_run(monkeypatch, 4, stdout=b"out\n", stderr=b"err\n")

    with pytest.raises(ProcessExitedNonZero) as exc_info:
        ShellSession(tmp_path, windows=False).run("build")

    err = exc_info.value
    assert err.exit_code == 4
    assert err.combined_output == "out\n\nerr"


def test_silent_failure_reports_generic_message(tmp_path, monkeypatch):
    _fake_run(monkeypatch, 1)

    with pytest.raises(ProcessExitedNonZero) as exc_info:
        ShellSession(tmp_path, windows=False).run("exit 1")

    assert exc_info.value.message == "Command failed"


def test_unexpected_error_poisons_session_until_reset(tmp_path, monkeypatch):
    shell = ShellSession(tmp_path, windows=False)

    def explode(command, cwd):
        raise RuntimeError("boom")

    monkeypatch.setattr(shell, "_execute", explode)
    with pytest.raises(RuntimeError):
        shell.run("ls")

    with pytest.raises(StateUnavailable):
        shell.autocomplete("")

    shell.reset(tmp_path)
    assert shell.autocomplete("") == []


def test_posix_idioms_translate_for_cmd():
    assert translate_posix_idioms("ls") == "dir"
    assert translate_posix_idioms("ls -la") == "dir -la"
    assert translate_posix_idioms("pwd") == "cd"
    assert translate_posix_idioms("cat a.txt") == "type a.txt"
    assert translate_posix_idioms("rm -rf build") == "rmdir /s /q build"
    assert translate_posix_idioms("rm old.log") == "del /q old.log"
    assert translate_posix_idioms("echo hi") == "echo hi"
