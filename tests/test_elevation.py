import os
import subprocess
import sys

import pytest

from mojang_auth_checker import elevation
from mojang_auth_checker.elevation import (
    OsascriptElevator,
    PkexecElevator,
    WindowsElevator,
    default_elevator,
    package_root,
    relaunch_argv,
)
from mojang_auth_checker.errors import ElevationError


def test_relaunch_argv_from_source():
    argv = relaunch_argv("clean")
    assert argv[:2] == [sys.executable, "-c"]
    assert argv[3] == package_root()
    assert argv[-1] == "clean"
    assert os.path.isdir(os.path.join(argv[3], "mojang_auth_checker"))


def test_relaunch_argv_runs_from_another_directory(tmp_path):
    env = {key: value for key, value in os.environ.items() if key != "PYTHONPATH"}
    completed = subprocess.run(
        relaunch_argv("--help"), cwd=str(tmp_path), env=env, capture_output=True, text=True
    )
    assert completed.returncode == 0, completed.stderr
    assert "mojang-auth-checker" in completed.stdout


def test_relaunch_argv_frozen(monkeypatch):
    monkeypatch.setattr(sys, "frozen", True, raising=False)
    assert relaunch_argv("clean") == [sys.executable, "clean"]


def test_windows_command_waits_for_elevated_process():
    command = WindowsElevator().build_command([r"C:\Program Files\checker.exe", "clean"])
    assert command[0] == "powershell"
    script = command[-1]
    assert "-Verb RunAs" in script
    assert "-Wait -PassThru" in script
    assert r"'C:\Program Files\checker.exe'" in script
    assert "-ArgumentList 'clean'" in script
    assert "exit $p.ExitCode" in script


def test_windows_command_escapes_quotes():
    script = WindowsElevator().build_command([r"C:\it's\checker.exe", "clean"])[-1]
    assert r"'C:\it''s\checker.exe'" in script


def test_pkexec_command():
    assert PkexecElevator().build_command(["/usr/bin/python3", "-m", "x", "clean"]) == [
        "pkexec", "/usr/bin/python3", "-m", "x", "clean",
    ]


def test_osascript_command():
    command = OsascriptElevator().build_command(["/usr/bin/python3", "clean"])
    assert command[:2] == ["osascript", "-e"]
    assert command[2] == 'do shell script "/usr/bin/python3 clean" with administrator privileges'


def test_missing_helper_raises(monkeypatch):
    monkeypatch.setattr(elevation.shutil, "which", lambda name: None)
    with pytest.raises(ElevationError):
        PkexecElevator().relaunch(["/usr/bin/python3", "clean"])


def test_relaunch_returns_exit_code(monkeypatch):
    calls = []

    def fake_run(command):
        calls.append(command)
        return subprocess.CompletedProcess(command, 3)

    monkeypatch.setattr(elevation.shutil, "which", lambda name: "/usr/bin/" + name)
    monkeypatch.setattr(elevation.subprocess, "run", fake_run)

    assert PkexecElevator().relaunch(["/usr/bin/python3", "clean"]) == 3
    assert calls == [["/usr/bin/pkexec", "/usr/bin/python3", "clean"]]


def test_relaunch_start_failure(monkeypatch):
    def fake_run(command):
        raise FileNotFoundError(2, "No such file")

    monkeypatch.setattr(elevation.shutil, "which", lambda name: "/usr/bin/" + name)
    monkeypatch.setattr(elevation.subprocess, "run", fake_run)
    with pytest.raises(ElevationError):
        PkexecElevator().relaunch(["/usr/bin/python3", "clean"])


@pytest.mark.parametrize(
    "platform, expected",
    [("win32", WindowsElevator), ("darwin", OsascriptElevator), ("linux", PkexecElevator)],
)
def test_default_elevator(monkeypatch, platform, expected):
    monkeypatch.setattr(elevation.sys, "platform", platform)
    assert isinstance(default_elevator(), expected)
