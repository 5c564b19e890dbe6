from __future__ import annotations

from rich.text import Text

from devreclaim.services.formatting import format_bytes
from devreclaim.ui.selection import SelectionMachine

HELP_LINE = "↑/↓: Navigate • Space: Toggle • a: Toggle All • s: Select Safe • Enter: Confirm • q: Quit"

_DESCRIPTION_WIDTH = 45


def selection_lines(machine: SelectionMachine) -> Text:
    text = Text()
    for index, item in enumerate(machine.findings):
        current = index == machine.cursor
        cursor = ">" if current else " "
        checked = "[x]" if machine.is_selected(index) else "[ ]"
        line = Text(f"{cursor} {checked} ")
        line.append(f"{item.description:<{_DESCRIPTION_WIDTH}}", style=item.safety.style)
        line.append(f" {format_bytes(item.size_bytes)}")
        if current:
            line.stylize("reverse")
        text.append_text(line)
        text.append("\n")
    return text


def selection_footer(machine: SelectionMachine) -> Text:
    return Text.from_markup(
        f"Selected: [bold]{format_bytes(machine.selected_bytes)}[/bold] "
        f"({machine.selected_count}/{len(machine.findings)})\n[#969896]{HELP_LINE}[/]"
    )
