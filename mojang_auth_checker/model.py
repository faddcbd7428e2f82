import asyncio
import enum
import logging
from dataclasses import dataclass
from typing import List, Optional

from mojang_auth_checker.config import Settings
from mojang_auth_checker.elevation import Elevator, relaunch_argv
from mojang_auth_checker.errors import CleanError, ElevationError, PermissionDenied, ReadError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HostEntry:
    line: str
    flagged: bool = False


class CleanResult(enum.Enum):
    SUCCESS = "success"
    PERMISSION_DENIED = "permission_denied"
    FAILED = "failed"


@dataclass(frozen=True)
class CleanOutcome:
    result: CleanResult
    message: Optional[str] = None

    @classmethod
    def success(cls) -> "CleanOutcome":
        return cls(CleanResult.SUCCESS)

    @classmethod
    def permission_denied(cls, message: Optional[str] = None) -> "CleanOutcome":
        return cls(CleanResult.PERMISSION_DENIED, message)

    @classmethod
    def failed(cls, message: str) -> "CleanOutcome":
        return cls(CleanResult.FAILED, message)


class HostsChecker:
    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or Settings()

    @property
    def hosts_path(self) -> str:
        return self.settings.hosts_path

    @property
    def target(self) -> str:
        return self.settings.target

    def is_flagged(self, line: str) -> bool:
        return self.target in line

    def read_lines(self) -> List[str]:
        """Reads the hosts file and splits it into lines.

        Only "\\n" ends a line; a "\\r" right before it is dropped. Other
        characters str.splitlines() treats as boundaries stay in the line.
        """
        try:
            with open(self.hosts_path, "r", encoding="utf-8", newline="") as f:
                content = f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise ReadError(f"Cannot read {self.hosts_path}: {e}") from e

        lines = content.split("\n")
        if lines[-1] == "":
            lines.pop()
        return [line[:-1] if line.endswith("\r") else line for line in lines]

    def entries(self) -> List[HostEntry]:
        """Returns every line of the hosts file, marking the ones referencing the target."""
        return [HostEntry(line=line, flagged=self.is_flagged(line)) for line in self.read_lines()]

    def scan(self) -> List[str]:
        """Returns the lines containing the target, in file order."""
        flagged = [entry.line for entry in self.entries() if entry.flagged]
        logger.info("Scanned %s: %d line(s) referencing %s", self.hosts_path, len(flagged), self.target)
        return flagged

    def clean(self) -> List[str]:
        """Rewrites the hosts file without the flagged lines and returns the removed ones.

        The file is truncated and every kept line is written followed by the
        configured line terminator. Raises PermissionDenied when the file can't
        be accessed for lack of rights and CleanError on any other I/O failure.
        """
        try:
            lines = self.read_lines()
        except ReadError as e:
            if isinstance(e.__cause__, PermissionError):
                raise PermissionDenied(str(e)) from e.__cause__
            raise CleanError(str(e)) from e.__cause__

        kept = [line for line in lines if not self.is_flagged(line)]
        removed = [line for line in lines if self.is_flagged(line)]
        if not removed:
            logger.info("Nothing to clean in %s", self.hosts_path)
            return removed

        try:
            # newline="" keeps the terminator exactly as configured
            with open(self.hosts_path, "w", encoding="utf-8", newline="") as f:
                for line in kept:
                    f.write(line)
                    f.write(self.settings.newline)
        except PermissionError as e:
            raise PermissionDenied(f"Permission denied writing {self.hosts_path}: {e}") from e
        except OSError as e:
            raise CleanError(f"Cannot write {self.hosts_path}: {e}") from e

        logger.info("Cleaned %s: removed %d line(s)", self.hosts_path, len(removed))
        return removed

    def try_clean(self) -> CleanOutcome:
        """Runs clean() and folds its failures into a CleanOutcome."""
        try:
            self.clean()
        except PermissionDenied as e:
            logger.warning("Clean refused: %s", e)
            return CleanOutcome.permission_denied(str(e))
        except CleanError as e:
            logger.error("Clean failed: %s", e)
            return CleanOutcome.failed(str(e))
        return CleanOutcome.success()

    def clean_elevated(self, elevator: Elevator) -> bool:
        """Relaunches the program once with administrator rights in clean mode.

        Returns True only if the elevated process exited with status zero.
        """
        argv = relaunch_argv(self.settings.clean_directive)
        logger.info("Requesting elevation: %s", argv)
        try:
            code = elevator.relaunch(argv)
        except ElevationError as e:
            logger.error("Elevation failed: %s", e)
            return False
        logger.info("Elevated clean exited with status %s", code)
        return code == 0


async def scan_async(checker: HostsChecker) -> List[str]:
    """Runs the scan in a worker thread so the event loop stays responsive."""
    return await asyncio.to_thread(checker.scan)
