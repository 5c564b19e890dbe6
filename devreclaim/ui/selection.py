from __future__ import annotations

from enum import Enum

from devreclaim.models.enums import SafetyLevel
from devreclaim.models.finding import Finding


class SelectionState(str, Enum):
    BROWSING = "browsing"
    CONFIRMED = "confirmed"
    ABORTED = "aborted"

    @property
    def is_terminal(self) -> bool:
        return self is not SelectionState.BROWSING


class SelectionEvent(str, Enum):
    UP = "up"
    DOWN = "down"
    TOGGLE = "toggle"
    TOGGLE_ALL = "toggle_all"
    SELECT_SAFE = "select_safe"
    CONFIRM = "confirm"
    QUIT = "quit"


class SelectionMachine:
    """Cursor plus per-index selection flags over a fixed list of findings.

    Knows nothing about keys or rendering: callers feed ``SelectionEvent``
    values through ``handle`` and read ``state`` / ``result()``. Once the
    machine reaches CONFIRMED or ABORTED it ignores further events.
    """

    def __init__(self, findings: list[Finding]) -> None:
        self.findings = list(findings)
        self.state = SelectionState.BROWSING
        self.cursor = 0
        self.selected: dict[int, bool] = {}

    def is_selected(self, index: int) -> bool:
        return self.selected.get(index, False)

    @property
    def selected_count(self) -> int:
        return sum(1 for index in range(len(self.findings)) if self.is_selected(index))

    @property
    def selected_bytes(self) -> int:
        return sum(item.size_bytes for index, item in enumerate(self.findings) if self.is_selected(index))

    def handle(self, event: SelectionEvent) -> SelectionState:
        if self.state.is_terminal:
            return self.state

        if event is SelectionEvent.QUIT:
            self.state = SelectionState.ABORTED
        elif event is SelectionEvent.CONFIRM:
            if self.selected_count > 0:
                self.state = SelectionState.CONFIRMED
        elif event is SelectionEvent.UP:
            if self.cursor > 0:
                self.cursor -= 1
        elif event is SelectionEvent.DOWN:
            if self.cursor < len(self.findings) - 1:
                self.cursor += 1
        elif event is SelectionEvent.TOGGLE:
            if self.findings:
                self.selected[self.cursor] = not self.is_selected(self.cursor)
        elif event is SelectionEvent.TOGGLE_ALL:
            # One global flip: everything selected clears, anything less selects all.
            all_selected = all(self.is_selected(index) for index in range(len(self.findings)))
            for index in range(len(self.findings)):
                self.selected[index] = not all_selected
        elif event is SelectionEvent.SELECT_SAFE:
            for index, item in enumerate(self.findings):
                self.selected[index] = item.safety is SafetyLevel.SAFE
        return self.state

    def result(self) -> list[Finding]:
        """Selected findings in list order; empty unless CONFIRMED."""
        if self.state is not SelectionState.CONFIRMED:
            return []
        return [item for index, item in enumerate(self.findings) if self.is_selected(index)]
