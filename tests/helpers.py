import builtins
from typing import List, Sequence

from mojang_auth_checker import model
from mojang_auth_checker.elevation import Elevator

SAMPLE_LINES = [
    "127.0.0.1 localhost",
    "1.2.3.4 mojang.com",
    "::1 localhost",
    "5.6.7.8 authserver.mojang.com # injected",
    "10.0.0.1 printer.lan",
]


def write_hosts(tmp_path, lines: List[str], newline: str = "\n"):
    path = tmp_path / "hosts"
    path.write_bytes("".join(line + newline for line in lines).encode("utf-8"))
    return path


def deny_writes(monkeypatch):
    """Makes every write-mode open() inside the model fail with EACCES."""
    real_open = builtins.open

    def fake_open(file, mode="r", *args, **kwargs):
        if "w" in mode:
            raise PermissionError(13, "Permission denied", str(file))
        return real_open(file, mode, *args, **kwargs)

    monkeypatch.setattr(model, "open", fake_open, raising=False)


class RecordingElevator(Elevator):
    def __init__(self, exit_code: int = 0, error: Exception = None):
        self.exit_code = exit_code
        self.error = error
        self.calls: List[List[str]] = []

    def relaunch(self, argv: Sequence[str]) -> int:
        self.calls.append(list(argv))
        if self.error is not None:
            raise self.error
        return self.exit_code
