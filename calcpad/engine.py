"""Calculator engine — the state machine behind the keypad.

Every input replaces the current CalculatorState with a new one:
1. Digits and the decimal point edit current_value
2. An operator parks current_value in previous_value (collapsing any
   pending pair first, so 2 + 2 + 2 = works without equals in between)
3. Equals applies the pending operator left to right and formats the result
4. Failures never raise; they show up as the "Error" sentinel
"""

from __future__ import annotations

import math
from dataclasses import replace
from typing import Union

from calcpad.formatting import format_result, parse_number
from calcpad.models import ERROR_VALUE, INITIAL_STATE, CalculatorState, Operation


def _apply(operation: Operation, left: float, right: float) -> float:
    if operation == Operation.ADD:
        return left + right
    if operation == Operation.SUBTRACT:
        return left - right
    if operation == Operation.MULTIPLY:
        return left * right
    return left / right


class CalculatorEngine:
    """Single-session calculator.

    Not thread-safe: a host sharing one engine across threads has to
    serialize calls itself.
    """

    def __init__(self) -> None:
        self._state = INITIAL_STATE

    @property
    def state(self) -> CalculatorState:
        return self._state

    def get_state(self) -> CalculatorState:
        """Return the current snapshot. Safe to keep; it never changes."""
        return self._state

    def input_number(self, digit: str) -> None:
        """Type a digit (or run of digits) into the current operand."""
        s = self._state
        if s.overwrite:
            self._state = replace(s, current_value=digit, overwrite=False)
        elif s.current_value == "0":
            self._state = replace(s, current_value=digit)
        else:
            self._state = replace(s, current_value=s.current_value + digit)

    def input_operation(self, operation: Union[Operation, str]) -> None:
        """Select a binary operator.

        Ignored while there is no operand to commit. That also means pressing
        a second operator straight after the first keeps the first one: the
        current value is empty at that point, so nothing changes.

        Raises:
            ValueError: operation is not one of + - × ÷.
        """
        op = Operation(operation)
        if self._state.current_value == "":
            return

        if self._state.previous_value != "":
            self.calculate()

        s = self._state
        self._state = replace(
            s,
            operation=op,
            previous_value=s.current_value,
            current_value="",
        )

    def calculate(self) -> None:
        """Apply the pending operator (the equals key)."""
        s = self._state
        if s.operation is None or s.previous_value == "" or s.current_value == "":
            return

        left = parse_number(s.previous_value)
        right = parse_number(s.current_value)

        # An "Error" operand carried into a chain stays an error
        if math.isnan(left) or math.isnan(right):
            self._fail()
            return
        if s.operation == Operation.DIVIDE and right == 0:
            self._fail()
            return

        result = _apply(s.operation, left, right)
        if not math.isfinite(result):
            self._fail()
            return

        self._state = replace(
            s,
            current_value=format_result(result),
            previous_value="",
            operation=None,
            overwrite=True,
        )

    def _fail(self) -> None:
        # overwrite is left as-is; the display stays on "Error" until clear()
        self._state = replace(
            self._state,
            current_value=ERROR_VALUE,
            previous_value="",
            operation=None,
        )

    def percentage(self) -> None:
        """Divide the current value by 100.

        No-op when the current value is not a number or too large for a float.
        """
        s = self._state
        current = parse_number(s.current_value)
        if not math.isfinite(current):
            return
        self._state = replace(s, current_value=format_result(current / 100))

    def input_decimal(self) -> None:
        """Add a decimal point; a second one in the same operand is dropped."""
        s = self._state
        if s.overwrite:
            self._state = replace(s, current_value="0.", overwrite=False)
            return
        if "." in s.current_value:
            return
        self._state = replace(s, current_value=s.current_value + ".")

    def clear(self) -> None:
        """Reset everything to the power-on state."""
        self._state = INITIAL_STATE

    def backspace(self) -> None:
        """Delete the last character.

        Right after a result, starts a fresh "0" instead of editing the
        result. Never goes below a single "0".
        """
        s = self._state
        if s.overwrite:
            self._state = replace(s, current_value="0", overwrite=False)
        elif len(s.current_value) <= 1:
            self._state = replace(s, current_value="0")
        else:
            self._state = replace(s, current_value=s.current_value[:-1])
