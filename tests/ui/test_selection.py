from __future__ import annotations

from devreclaim.models.enums import SafetyLevel
from devreclaim.ui.selection import SelectionEvent, SelectionMachine, SelectionState
from tests.factories import MB, make_finding


def _machine() -> SelectionMachine:
    return SelectionMachine(
        [
            make_finding("/a", 500 * MB),
            make_finding("/b", 200 * MB, safety=SafetyLevel.WARNING),
            make_finding("/c", 10 * MB),
        ]
    )


class TestCursor:
    def test_starts_at_top(self) -> None:
        m = _machine()
        assert m.cursor == 0
        assert m.state is SelectionState.BROWSING

    def test_up_at_top_stays(self) -> None:
        m = _machine()
        m.handle(SelectionEvent.UP)
        assert m.cursor == 0

    def test_down_clamps_at_bottom(self) -> None:
        m = _machine()
        for _ in range(10):
            m.handle(SelectionEvent.DOWN)
        assert m.cursor == 2

    def test_empty_list(self) -> None:
        m = SelectionMachine([])
        m.handle(SelectionEvent.DOWN)
        m.handle(SelectionEvent.TOGGLE)
        assert m.cursor == 0
        assert m.selected_count == 0


class TestToggle:
    def test_toggle_current(self) -> None:
        m = _machine()
        m.handle(SelectionEvent.DOWN)
        m.handle(SelectionEvent.TOGGLE)
        assert not m.is_selected(0)
        assert m.is_selected(1)
        m.handle(SelectionEvent.TOGGLE)
        assert not m.is_selected(1)

    def test_toggle_all_selects_everything(self) -> None:
        m = _machine()
        m.handle(SelectionEvent.TOGGLE)
        m.handle(SelectionEvent.TOGGLE_ALL)
        assert m.selected_count == 3

    def test_toggle_all_twice_clears(self) -> None:
        m = _machine()
        m.handle(SelectionEvent.TOGGLE_ALL)
        m.handle(SelectionEvent.TOGGLE_ALL)
        assert m.selected_count == 0

    def test_toggle_all_twice_from_full_selection_restores_it(self) -> None:
        m = _machine()
        m.handle(SelectionEvent.TOGGLE_ALL)
        assert m.selected_count == 3
        m.handle(SelectionEvent.TOGGLE_ALL)
        assert m.selected_count == 0
        m.handle(SelectionEvent.TOGGLE_ALL)
        assert m.selected_count == 3

    def test_select_safe_exact(self) -> None:
        m = _machine()
        m.handle(SelectionEvent.DOWN)
        m.handle(SelectionEvent.TOGGLE)
        m.handle(SelectionEvent.SELECT_SAFE)
        assert [m.is_selected(i) for i in range(3)] == [True, False, True]
        assert m.selected_bytes == 510 * MB

    def test_select_safe_idempotent(self) -> None:
        m = _machine()
        m.handle(SelectionEvent.SELECT_SAFE)
        first = dict(m.selected)
        m.handle(SelectionEvent.SELECT_SAFE)
        assert m.selected == first


class TestTerminalStates:
    def test_confirm_with_nothing_selected_is_ignored(self) -> None:
        m = _machine()
        assert m.handle(SelectionEvent.CONFIRM) is SelectionState.BROWSING
        assert m.result() == []

    def test_confirm_returns_selection_in_order(self) -> None:
        m = _machine()
        m.handle(SelectionEvent.SELECT_SAFE)
        assert m.handle(SelectionEvent.CONFIRM) is SelectionState.CONFIRMED
        assert [f.path for f in m.result()] == ["/a", "/c"]
        assert sum(f.size_bytes for f in m.result()) == 510 * MB

    def test_quit_aborts_with_selection(self) -> None:
        m = _machine()
        m.handle(SelectionEvent.TOGGLE_ALL)
        assert m.handle(SelectionEvent.QUIT) is SelectionState.ABORTED
        assert m.result() == []

    def test_terminal_state_ignores_events(self) -> None:
        m = _machine()
        m.handle(SelectionEvent.QUIT)
        m.handle(SelectionEvent.TOGGLE_ALL)
        m.handle(SelectionEvent.DOWN)
        assert m.state is SelectionState.ABORTED
        assert m.cursor == 0
        assert m.selected_count == 0

    def test_is_terminal(self) -> None:
        assert not SelectionState.BROWSING.is_terminal
        assert SelectionState.CONFIRMED.is_terminal
        assert SelectionState.ABORTED.is_terminal
