import logging
from typing import Optional

from textual import on, work
from textual.app import App, ComposeResult, SuspendNotSupported
from textual.containers import Center, Vertical, VerticalScroll
from textual.screen import Screen
from textual.widgets import Button, Footer, Label, Static

from mojang_auth_checker.config import Settings
from mojang_auth_checker.elevation import Elevator, default_elevator
from mojang_auth_checker.errors import ReadError
from mojang_auth_checker.model import HostsChecker, scan_async
from mojang_auth_checker.state import (
    CleanFinished,
    CleanRequested,
    ElevationFinished,
    ElevationPrompt,
    Event,
    Loading,
    Modified,
    ScanFailed,
    ScanSucceeded,
    State,
    reduce,
)

logger = logging.getLogger(__name__)


class LoadingScreen(Screen):
    """Shown while the hosts file is being scanned."""

    def compose(self) -> ComposeResult:
        yield Static(Loading().text, id="loading")


class CheckScreen(Screen):
    """Scan result, flagged lines and the clean action."""

    def __init__(self, state: State):
        super().__init__()
        self.initial_state = state

    def compose(self) -> ComposeResult:
        state = self.initial_state
        with Vertical(id="check"):
            yield Label(self.app.title, id="title")
            yield Static(state.text, id="status", markup=False)
            with VerticalScroll(id="lines"):
                for line in self.modified_lines(state):
                    yield Label(line, markup=False, classes="line")
            with Center():
                yield Button("Clean", id="clean", variant="error", disabled=not state.can_clean)
        yield Footer()

    @staticmethod
    def modified_lines(state: State):
        return state.lines if isinstance(state, Modified) else ()

    def show(self, state: State):
        """Refreshes the widgets for a new state."""
        self.query_one("#status", Static).update(state.text)
        lines = self.query_one("#lines", VerticalScroll)
        lines.remove_children()
        new_lines = [Label(line, markup=False, classes="line") for line in self.modified_lines(state)]
        if new_lines:
            lines.mount(*new_lines)
        self.query_one("#clean", Button).disabled = not state.can_clean

    @on(Button.Pressed, "#clean")
    def handle_clean(self):
        self.app.request_clean()


class CheckerApp(App):
    CSS = """
    #loading {
        width: 100%;
        height: 100%;
        content-align: center middle;
        text-style: bold;
    }

    #check {
        padding: 1;
    }

    #title {
        width: 100%;
        content-align: center middle;
        color: $text-muted;
        text-style: bold;
        margin-bottom: 1;
    }

    #status {
        width: 100%;
        content-align: center middle;
        background: $boost;
        margin-bottom: 1;
    }

    #lines {
        height: auto;
        max-height: 50%;
    }

    Button {
        margin: 1;
    }
    """

    BINDINGS = [
        ("q", "quit", "Quit"),
    ]

    def __init__(
        self,
        settings: Optional[Settings] = None,
        checker: Optional[HostsChecker] = None,
        elevator: Optional[Elevator] = None,
    ):
        super().__init__()
        self.settings = settings or Settings()
        self.checker = checker or HostsChecker(self.settings)
        self.elevator = elevator or default_elevator()
        self.check_state: State = Loading()
        self.title = self.settings.title

    def on_mount(self):
        self.push_screen(LoadingScreen())
        self.load_hosts()

    @work(exclusive=True)
    async def load_hosts(self):
        try:
            lines = await scan_async(self.checker)
        except ReadError as e:
            logger.error("Scan failed: %s", e)
            self.apply_event(ScanFailed(str(e)))
            return
        self.apply_event(ScanSucceeded(tuple(lines)))

    def apply_event(self, event: Event):
        previous = self.check_state
        self.check_state = reduce(previous, event)
        logger.debug("%s + %s -> %s", type(previous).__name__, type(event).__name__, type(self.check_state).__name__)
        self.render_state()

    def render_state(self):
        if isinstance(self.check_state, Loading):
            return
        if isinstance(self.screen, CheckScreen):
            self.screen.show(self.check_state)
        else:
            self.switch_screen(CheckScreen(self.check_state))

    def request_clean(self):
        if not self.check_state.can_clean:
            return
        self.apply_event(CleanRequested())
        self.apply_event(CleanFinished(self.checker.try_clean()))
        if isinstance(self.check_state, ElevationPrompt):
            # Let the prompt message paint before the OS dialog blocks
            self.call_after_refresh(self.run_elevation)

    def run_elevation(self):
        try:
            # Hand the terminal back so a text password prompt stays usable
            with self.suspend():
                success = self.checker.clean_elevated(self.elevator)
        except SuspendNotSupported:
            success = self.checker.clean_elevated(self.elevator)
        self.apply_event(ElevationFinished(success))
