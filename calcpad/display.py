"""Rich rendering of the calculator display and keypad.

The display is two right-aligned lines: the pending expression
("<previous> <operator>", only while a chain is open) and the current value.
"""

from __future__ import annotations

from rich import box
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from calcpad.keymap import BUTTON_ROWS, GRID_COLUMNS, Action
from calcpad.models import CalculatorState
from calcpad.settings import Theme

# Rich style palettes, one per theme
DARK_PALETTE = {
    "border": "bright_blue",
    "pending": "dim white",
    "value": "bold white",
    "error": "bold red",
    "number": "white",
    "operator": "magenta",
    "equals": "bold black on bright_magenta",
    "control": "cyan",
}

LIGHT_PALETTE = {
    "border": "blue",
    "pending": "grey50",
    "value": "bold grey11",
    "error": "bold dark_red",
    "number": "grey11",
    "operator": "purple",
    "equals": "bold white on purple",
    "control": "dark_cyan",
}

_BUTTON_STYLE_KEYS = {
    Action.NUMBER: "number",
    Action.DECIMAL: "number",
    Action.OPERATOR: "operator",
    Action.PERCENT: "operator",
    Action.EQUALS: "equals",
    Action.CLEAR: "control",
    Action.BACKSPACE: "control",
}


def get_theme(theme: Theme | str) -> dict[str, str]:
    """Return the palette for a theme.

    Raises:
        ValueError: theme is not 'dark' or 'light'.
    """
    return LIGHT_PALETTE if Theme(theme) == Theme.LIGHT else DARK_PALETTE


def pending_expression(state: CalculatorState) -> str:
    """The secondary display line, e.g. '12 +'. Empty when nothing is pending."""
    if not state.previous_value:
        return ""
    if state.operation is None:
        return state.previous_value
    return f"{state.previous_value} {state.operation.value}"


def render_display(state: CalculatorState, theme: Theme | str = Theme.DARK) -> Panel:
    """Build a Panel showing the pending expression and the current value."""
    palette = get_theme(theme)
    text = Text(justify="right")
    text.append(pending_expression(state), style=palette["pending"])
    text.append("\n")
    value_style = palette["error"] if state.is_error else palette["value"]
    text.append(state.current_value, style=value_style)
    return Panel(text, box=box.ROUNDED, border_style=palette["border"], width=24)


def render_buttons(theme: Theme | str = Theme.DARK) -> Table:
    """Build the keypad as a grid table; wide buttons take two cells."""
    palette = get_theme(theme)
    table = Table(show_header=False, box=box.SQUARE, border_style=palette["border"])
    for _ in range(GRID_COLUMNS):
        table.add_column(justify="center", min_width=3)

    for row in BUTTON_ROWS:
        cells: list[Text] = []
        for button in row:
            style = palette[_BUTTON_STYLE_KEYS[button.action]]
            cells.append(Text(button.label, style=style))
            # Rich tables have no colspan; pad the spanned cells
            cells.extend(Text("") for _ in range(button.span - 1))
        table.add_row(*cells)
    return table
