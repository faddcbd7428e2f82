"""Application states and the reducer that moves between them.

Loading -> Clean | Modified | LoadFailed
Modified -> Cleaning -> Cleaned | ElevationPrompt | Failed
ElevationPrompt -> Cleaned | Failed
"""
from dataclasses import dataclass, field
from typing import Tuple, Union

from mojang_auth_checker.model import CleanOutcome, CleanResult

CLEANED_TEXT = "OK! Launch Minecraft to check."
FAILED_TEXT = "Cleaning failed"


@dataclass(frozen=True)
class Loading:
    text: str = "Loading..."
    can_clean: bool = False


@dataclass(frozen=True)
class Clean:
    text: str = "Everything looks good!"
    can_clean: bool = False


@dataclass(frozen=True)
class Modified:
    lines: Tuple[str, ...] = field(default_factory=tuple)
    text: str = "The hosts file has been modified! Entries found:"
    can_clean: bool = True


@dataclass(frozen=True)
class LoadFailed:
    message: str = ""
    text: str = "Unable to read the hosts file!"
    can_clean: bool = False


@dataclass(frozen=True)
class Cleaning:
    text: str = "Cleaning..."
    can_clean: bool = False


@dataclass(frozen=True)
class ElevationPrompt:
    text: str = "Administrator rights required, waiting for approval..."
    can_clean: bool = False


@dataclass(frozen=True)
class Cleaned:
    text: str = CLEANED_TEXT
    can_clean: bool = False


@dataclass(frozen=True)
class Failed:
    message: str = ""
    can_clean: bool = False

    @property
    def text(self) -> str:
        if self.message:
            return f"{FAILED_TEXT}: {self.message}"
        return FAILED_TEXT


State = Union[Loading, Clean, Modified, LoadFailed, Cleaning, ElevationPrompt, Cleaned, Failed]


@dataclass(frozen=True)
class ScanSucceeded:
    lines: Tuple[str, ...]


@dataclass(frozen=True)
class ScanFailed:
    message: str


@dataclass(frozen=True)
class CleanRequested:
    pass


@dataclass(frozen=True)
class CleanFinished:
    outcome: CleanOutcome


@dataclass(frozen=True)
class ElevationFinished:
    success: bool


Event = Union[ScanSucceeded, ScanFailed, CleanRequested, CleanFinished, ElevationFinished]


def reduce(state: State, event: Event) -> State:
    """Returns the state that follows `state` once `event` happened.

    Events that make no sense in the current state leave it unchanged.
    """
    if isinstance(state, Loading):
        if isinstance(event, ScanSucceeded):
            if event.lines:
                return Modified(lines=tuple(event.lines))
            return Clean()
        if isinstance(event, ScanFailed):
            return LoadFailed(message=event.message)

    elif isinstance(state, Modified):
        if isinstance(event, CleanRequested):
            return Cleaning()

    elif isinstance(state, Cleaning):
        if isinstance(event, CleanFinished):
            result = event.outcome.result
            if result is CleanResult.SUCCESS:
                return Cleaned()
            if result is CleanResult.PERMISSION_DENIED:
                return ElevationPrompt()
            return Failed(message=event.outcome.message or "")

    elif isinstance(state, ElevationPrompt):
        if isinstance(event, ElevationFinished):
            return Cleaned() if event.success else Failed()

    return state
