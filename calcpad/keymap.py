"""Keyboard and keypad input for the calculator engine.

Translates raw key names (as a terminal or browser reports them) and keypad
button labels into engine calls. Keys with no meaning are ignored, never
rejected.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional

from calcpad.engine import CalculatorEngine
from calcpad.models import Operation


class Action(str, Enum):
    """What a key or button does."""

    NUMBER = "number"
    OPERATOR = "operator"
    PERCENT = "percent"
    EQUALS = "equals"
    CLEAR = "clear"
    BACKSPACE = "backspace"
    DECIMAL = "decimal"


# Multi-character key names, matched case-insensitively by split_keys()
NAMED_KEYS = ("Enter", "Backspace", "Escape")

_OPERATOR_KEYS: dict[str, Operation] = {
    "+": Operation.ADD,
    "-": Operation.SUBTRACT,
    "*": Operation.MULTIPLY,
    "×": Operation.MULTIPLY,
    "/": Operation.DIVIDE,
    "÷": Operation.DIVIDE,
}

_SIMPLE_KEYS: dict[str, Action] = {
    ".": Action.DECIMAL,
    "%": Action.PERCENT,
    "=": Action.EQUALS,
    "Enter": Action.EQUALS,
    "Backspace": Action.BACKSPACE,
    "⌫": Action.BACKSPACE,
    "Escape": Action.CLEAR,
    "c": Action.CLEAR,
    "C": Action.CLEAR,
}


def translate_key(key: str) -> Optional[tuple[Action, str]]:
    """Map a key to (action, value), or None if the key does nothing.

    value is the digit for NUMBER and the operator symbol for OPERATOR
    ('*' and '/' come back as '×' and '÷'); otherwise it is the key itself.
    """
    if len(key) == 1 and "0" <= key <= "9":
        return Action.NUMBER, key
    if key in _OPERATOR_KEYS:
        return Action.OPERATOR, _OPERATOR_KEYS[key].value
    action = _SIMPLE_KEYS.get(key)
    if action is None:
        return None
    return action, key


def apply_action(engine: CalculatorEngine, action: Action, value: str = "") -> None:
    """Dispatch one action to the engine."""
    if action == Action.NUMBER:
        engine.input_number(value)
    elif action == Action.OPERATOR:
        engine.input_operation(value)
    elif action == Action.PERCENT:
        engine.percentage()
    elif action == Action.EQUALS:
        engine.calculate()
    elif action == Action.CLEAR:
        engine.clear()
    elif action == Action.BACKSPACE:
        engine.backspace()
    elif action == Action.DECIMAL:
        engine.input_decimal()


def press_key(engine: CalculatorEngine, key: str) -> bool:
    """Feed one key to the engine. Returns False if the key was ignored."""
    mapped = translate_key(key)
    if mapped is None:
        return False
    apply_action(engine, *mapped)
    return True


def split_keys(tokens: Iterable[str]) -> list[str]:
    """Break command-line style tokens into individual keys.

    'Enter', 'Backspace' and 'Escape' (any case) are single keys wherever
    they appear in a token; everything else is split into characters.
    Whitespace is dropped.

    >>> split_keys(["12+7", "enter"])
    ['1', '2', '+', '7', 'Enter']
    >>> split_keys(["5Escape3"])
    ['5', 'Escape', '3']
    """
    keys: list[str] = []
    for token in tokens:
        for part in token.split():
            i = 0
            while i < len(part):
                for name in NAMED_KEYS:
                    if part[i:i + len(name)].lower() == name.lower():
                        keys.append(name)
                        i += len(name)
                        break
                else:
                    keys.append(part[i])
                    i += 1
    return keys


# ---------------------------------------------------------------------------
# Keypad
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Button:
    """A keypad button. span is the number of grid columns it covers."""

    label: str
    action: Action
    span: int = 1


GRID_COLUMNS = 4

BUTTON_ROWS: list[list[Button]] = [
    [
        Button("C", Action.CLEAR),
        Button("⌫", Action.BACKSPACE),
        Button("%", Action.PERCENT),
        Button("÷", Action.OPERATOR),
    ],
    [
        Button("7", Action.NUMBER),
        Button("8", Action.NUMBER),
        Button("9", Action.NUMBER),
        Button("×", Action.OPERATOR),
    ],
    [
        Button("4", Action.NUMBER),
        Button("5", Action.NUMBER),
        Button("6", Action.NUMBER),
        Button("-", Action.OPERATOR),
    ],
    [
        Button("1", Action.NUMBER),
        Button("2", Action.NUMBER),
        Button("3", Action.NUMBER),
        Button("+", Action.OPERATOR),
    ],
    [
        Button("0", Action.NUMBER, span=2),
        Button(".", Action.DECIMAL),
        Button("=", Action.EQUALS),
    ],
]

BUTTONS: dict[str, Button] = {b.label: b for row in BUTTON_ROWS for b in row}


def press_button(engine: CalculatorEngine, label: str) -> None:
    """Press a keypad button by its label.

    Raises:
        KeyError: label is not on the keypad.
    """
    button = BUTTONS[label]
    apply_action(engine, button.action, label)
