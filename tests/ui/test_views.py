from __future__ import annotations

from devreclaim.models.enums import SafetyLevel
from devreclaim.ui.selection import SelectionEvent, SelectionMachine
from devreclaim.ui.views import HELP_LINE, selection_footer, selection_lines
from tests.factories import MB, make_finding


def _machine() -> SelectionMachine:
    return SelectionMachine(
        [
            make_finding("/a", 500 * MB, description="Antigravity Cache"),
            make_finding("/b", 200 * MB, safety=SafetyLevel.WARNING, description="Pixel_7.avd"),
        ]
    )


def test_lines_show_cursor_and_checkbox() -> None:
    m = _machine()
    m.handle(SelectionEvent.TOGGLE)
    lines = selection_lines(m).plain.splitlines()
    assert lines[0].startswith("> [x] Antigravity Cache")
    assert lines[0].endswith("500.0 MB")
    assert lines[1].startswith("  [ ] Pixel_7.avd")


def test_footer_counts_selection() -> None:
    m = _machine()
    m.handle(SelectionEvent.TOGGLE_ALL)
    footer = selection_footer(m).plain
    assert "Selected: 700.0 MB (2/2)" in footer
    assert HELP_LINE in footer
