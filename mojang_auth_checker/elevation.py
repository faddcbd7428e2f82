import os
import sys
import shlex
import shutil
import logging
import subprocess
from abc import ABC, abstractmethod
from typing import List, Sequence

from mojang_auth_checker.errors import ElevationError

logger = logging.getLogger(__name__)

PACKAGE_NAME = "mojang_auth_checker"

# argv[1] is the directory holding the package, the rest goes to the CLI
BOOTSTRAP = (
    "import sys; sys.path.insert(0, sys.argv[1]); "
    f"from {PACKAGE_NAME}.cli import main; sys.exit(main(sys.argv[2:]))"
)


def package_root() -> str:
    return os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


def relaunch_argv(directive: str) -> List[str]:
    """Builds the command line that starts this program again with a directive.

    Elevated children start in another directory (System32 for RunAs) and
    pkexec drops PYTHONPATH, so source runs carry the package location along.
    """
    if getattr(sys, "frozen", False):
        return [sys.executable, directive]
    return [sys.executable, "-c", BOOTSTRAP, package_root(), directive]


class Elevator(ABC):
    """Runs a command with administrator rights and reports its exit status."""

    @abstractmethod
    def relaunch(self, argv: Sequence[str]) -> int:
        ...


class CommandElevator(Elevator):
    """Elevates by wrapping the command in a platform helper program."""

    helper: str = ""

    @abstractmethod
    def build_command(self, argv: Sequence[str]) -> List[str]:
        ...

    def relaunch(self, argv: Sequence[str]) -> int:
        if not argv:
            raise ElevationError("Nothing to relaunch")
        helper_path = shutil.which(self.helper)
        if not helper_path:
            raise ElevationError(f"'{self.helper}' command not found in PATH")

        command = self.build_command(argv)
        command[0] = helper_path
        logger.debug("Running elevation helper: %s", command)
        try:
            # Blocks until the OS prompt is answered and the elevated process exits
            completed = subprocess.run(command)
        except OSError as e:
            raise ElevationError(f"Could not start {self.helper}: {e}") from e
        return completed.returncode


class WindowsElevator(CommandElevator):
    helper = "powershell"

    @staticmethod
    def _ps_quote(value: str) -> str:
        return "'" + value.replace("'", "''") + "'"

    def build_command(self, argv: Sequence[str]) -> List[str]:
        exe, args = argv[0], list(argv[1:])
        start = f"Start-Process -FilePath {self._ps_quote(exe)} -Verb RunAs -Wait -PassThru -ErrorAction Stop"
        if args:
            start += f" -ArgumentList {self._ps_quote(subprocess.list2cmdline(args))}"
        script = f"try {{ $p = {start}; exit $p.ExitCode }} catch {{ exit 1 }}"
        return [self.helper, "-NoProfile", "-NonInteractive", "-Command", script]


class PkexecElevator(CommandElevator):
    helper = "pkexec"

    def build_command(self, argv: Sequence[str]) -> List[str]:
        return [self.helper, *argv]


class OsascriptElevator(CommandElevator):
    helper = "osascript"

    def build_command(self, argv: Sequence[str]) -> List[str]:
        shell_command = shlex.join(argv).replace("\\", "\\\\").replace('"', '\\"')
        script = f'do shell script "{shell_command}" with administrator privileges'
        return [self.helper, "-e", script]


def default_elevator() -> Elevator:
    if sys.platform == "win32":
        return WindowsElevator()
    if sys.platform == "darwin":
        return OsascriptElevator()
    return PkexecElevator()
