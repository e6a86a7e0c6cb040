"""Built-in replay scenarios for calcpad.

Each scenario is a keyboard sequence typed into a fresh engine plus the value
the display must show afterwards. They double as a quick smoke check of the
engine from the command line (`python -m calcpad run --all`).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from calcpad.engine import CalculatorEngine
from calcpad.keymap import press_key, split_keys
from calcpad.models import CalculatorState


@dataclass
class ScenarioInfo:
    """A named key sequence and the display it should end on."""

    name: str
    description: str
    keys: list[str]
    expected: str


@dataclass
class ScenarioResult:
    """Outcome of replaying one scenario."""

    scenario: ScenarioInfo
    state: CalculatorState
    ignored_keys: list[str] = field(default_factory=list)

    @property
    def actual(self) -> str:
        return self.state.current_value

    @property
    def verdict(self) -> str:
        return "pass" if self.actual == self.scenario.expected else "fail"


def _scenario(name: str, description: str, keys: str, expected: str) -> ScenarioInfo:
    return ScenarioInfo(name, description, split_keys([keys]), expected)


_SCENARIOS: dict[str, ScenarioInfo] = {
    s.name: s
    for s in (
        _scenario("tip", "15% of a 50 bill, straight from the percent key", "50*15%", "0.15"),
        _scenario("discount", "100 minus 20 percent-of-one", "100-20% Enter", "99.8"),
        _scenario("shopping_cart", "Running total without equals in between", "10+5+3=", "18"),
        _scenario("average", "Sum then divide by the count", "10+20+30= /3=", "20"),
        _scenario("chain", "Left-to-right chaining", "2+2+2=", "6"),
        _scenario("divide_by_zero", "Division by zero shows the error sentinel", "5/0=", "Error"),
        _scenario("float_noise", "Binary float noise is rounded away", "0.1+0.2=", "0.3"),
        _scenario("big_product", "Products stay exact while they fit", "999*999=", "998001"),
    )
}


def list_scenarios() -> list[ScenarioInfo]:
    """All built-in scenarios, in definition order."""
    return list(_SCENARIOS.values())


def load_scenario(name: str) -> Optional[ScenarioInfo]:
    """Look up a scenario by name. Returns None if there is no such scenario."""
    return _SCENARIOS.get(name)


def replay(keys: list[str], engine: Optional[CalculatorEngine] = None) -> tuple[CalculatorState, list[str]]:
    """Press keys in order on engine (a fresh one by default).

    Returns (final_state, ignored_keys).
    """
    engine = engine or CalculatorEngine()
    ignored = [key for key in keys if not press_key(engine, key)]
    return engine.get_state(), ignored


def run_scenario(name: str) -> ScenarioResult:
    """Replay a built-in scenario on a fresh engine.

    Raises:
        KeyError: no scenario with that name.
    """
    scenario = load_scenario(name)
    if scenario is None:
        raise KeyError(name)
    state, ignored = replay(scenario.keys)
    return ScenarioResult(scenario=scenario, state=state, ignored_keys=ignored)
