from __future__ import annotations

from typing_extensions import override

from textual.app import App, ComposeResult
from textual.containers import Container
from textual.events import Key
from textual.widgets import Static

from devreclaim.models.finding import Finding, sort_findings
from devreclaim.ui.selection import SelectionEvent, SelectionMachine
from devreclaim.ui.views import selection_footer, selection_lines

KEY_EVENTS: dict[str, SelectionEvent] = {
    "up": SelectionEvent.UP,
    "k": SelectionEvent.UP,
    "down": SelectionEvent.DOWN,
    "j": SelectionEvent.DOWN,
    "space": SelectionEvent.TOGGLE,
    "a": SelectionEvent.TOGGLE_ALL,
    "s": SelectionEvent.SELECT_SAFE,
    "enter": SelectionEvent.CONFIRM,
    "q": SelectionEvent.QUIT,
    "escape": SelectionEvent.QUIT,
    "ctrl+c": SelectionEvent.QUIT,
}


class SelectionError(Exception):
    """The interactive selection screen could not be run."""


class SelectionApp(App[list[Finding]]):
    CSS = """
    #title-row {
        color: #ff5faf;
        text-style: bold;
        margin-bottom: 1;
    }
    #items {
        height: auto;
    }
    #footer-row {
        margin-top: 1;
        height: auto;
    }
    """

    def __init__(self, findings: list[Finding]) -> None:
        super().__init__()
        self.machine = SelectionMachine(sort_findings(findings))

    @override
    def compose(self) -> ComposeResult:
        yield Container(
            Static("🧹 Select items to clean", id="title-row"),
            Static(id="items"),
            Static(id="footer-row"),
        )

    def on_mount(self) -> None:
        self._refresh()

    def _refresh(self) -> None:
        self.query_one("#items", Static).update(selection_lines(self.machine))
        self.query_one("#footer-row", Static).update(selection_footer(self.machine))

    def on_key(self, event: Key) -> None:
        selection_event = KEY_EVENTS.get(event.key)
        if selection_event is None:
            return
        event.stop()
        state = self.machine.handle(selection_event)
        if state.is_terminal:
            self.exit(self.machine.result())
            return
        self._refresh()


def select_interactively(findings: list[Finding]) -> list[Finding]:
    """Run the selection screen and return the confirmed findings.

    Quitting and confirming nothing both come back as an empty list.
    """
    if not findings:
        return []
    app = SelectionApp(findings)
    try:
        selected = app.run()
    except Exception as exc:  # noqa: BLE001
        raise SelectionError(f"Interactive selection failed: {exc}") from exc
    return selected or []
