"""Data models for the calcpad calculator.

Operation enum and CalculatorState — the typed structures that flow through
engine → display → CLI.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Operation(str, Enum):
    """Binary operators, keyed by the symbol shown on the display."""

    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "×"
    DIVIDE = "÷"


ALL_OPERATIONS = [Operation.ADD, Operation.SUBTRACT, Operation.MULTIPLY, Operation.DIVIDE]

# Sentinel shown in place of a number after an arithmetic failure.
ERROR_VALUE = "Error"


@dataclass(frozen=True)
class CalculatorState:
    """Snapshot of everything the calculator knows.

    Frozen so a snapshot handed to a caller can never change underneath it;
    the engine swaps in a new value on every input.
    """

    current_value: str = "0"
    previous_value: str = ""
    operation: Optional[Operation] = None
    overwrite: bool = False

    @property
    def is_error(self) -> bool:
        return self.current_value == ERROR_VALUE

    def to_dict(self) -> dict:
        """Serialize to a JSON-compatible dict."""
        return {
            "current_value": self.current_value,
            "previous_value": self.previous_value,
            "operation": self.operation.value if self.operation else None,
            "overwrite": self.overwrite,
        }


INITIAL_STATE = CalculatorState()
