"""Tests for the calculator engine state machine.

Covers arithmetic, chaining, decimal entry, clear/backspace, the overwrite
flag and the Error sentinel.
"""

import pytest

from calcpad.engine import CalculatorEngine
from calcpad.models import ALL_OPERATIONS, INITIAL_STATE, CalculatorState, Operation


@pytest.fixture
def calc():
    return CalculatorEngine()


def _run(calc, *steps):
    """Apply steps: digits as str, Operation for operators, '=' for equals."""
    for step in steps:
        if isinstance(step, Operation):
            calc.input_operation(step)
        elif step == "=":
            calc.calculate()
        elif step == ".":
            calc.input_decimal()
        elif step == "%":
            calc.percentage()
        else:
            calc.input_number(step)
    return calc.get_state()


ADD, SUB, MUL, DIV = Operation.ADD, Operation.SUBTRACT, Operation.MULTIPLY, Operation.DIVIDE


# --- Basic arithmetic ---

@pytest.mark.parametrize(
    "steps, expected",
    [
        (("2", ADD, "2", "="), "4"),
        (("5", ADD, "10", "="), "15"),
        (("5", ADD, "0", "="), "5"),
        (("10", SUB, "5", "="), "5"),
        (("5", SUB, "10", "="), "-5"),
        (("3", MUL, "4", "="), "12"),
        (("5", MUL, "0", "="), "0"),
        (("999", MUL, "999", "="), "998001"),
        (("15", DIV, "3", "="), "5"),
        (("10", DIV, "4", "="), "2.5"),
    ],
)
def test_binary_operations(calc, steps, expected):
    assert _run(calc, *steps).current_value == expected


def test_operator_accepts_symbol_strings(calc):
    for op in ALL_OPERATIONS:
        calc.clear()
        calc.input_number("8")
        calc.input_operation(op.value)
        assert calc.state.operation == op
    calc.input_number("2")
    calc.calculate()
    assert calc.state.current_value == "4"


def test_unknown_operator_raises(calc):
    with pytest.raises(ValueError):
        calc.input_operation("^")


def test_successful_calculation_clears_chain(calc):
    state = _run(calc, "5", ADD, "3", "=")
    assert state == CalculatorState(current_value="8", previous_value="", operation=None, overwrite=True)


# --- Chaining ---

def test_chain_addition(calc):
    assert _run(calc, "2", ADD, "2", ADD, "2", "=").current_value == "6"


def test_chain_subtraction(calc):
    assert _run(calc, "10", SUB, "5", SUB, "2", "=").current_value == "3"


def test_chain_division(calc):
    assert _run(calc, "100", DIV, "5", DIV, "4", "=").current_value == "5"


def test_chain_evaluates_left_to_right(calc):
    """2 + 3 × 4 is (2 + 3) × 4 = 20, not 14."""
    assert _run(calc, "2", ADD, "3", MUL, "4", "=").current_value == "20"


def test_mixed_operations(calc):
    assert _run(calc, "10", MUL, "2", SUB, "5", "=").current_value == "15"


def test_operator_after_result_starts_new_chain(calc):
    state = _run(calc, "10", ADD, "20", ADD, "30", "=", DIV, "3", "=")
    assert state.current_value == "20"


def test_pending_chain_collapses_into_previous_value(calc):
    state = _run(calc, "2", ADD, "3", MUL)
    assert state.previous_value == "5"
    assert state.operation == MUL
    assert state.current_value == ""


# --- Operator quirks ---

def test_operator_on_initial_zero(calc):
    state = _run(calc, ADD)
    assert state.operation == ADD
    assert state.previous_value == "0"
    assert state.current_value == ""


def test_second_operator_without_digit_keeps_first(calc):
    state = _run(calc, "5", ADD, SUB, MUL)
    assert state.operation == ADD
    assert state.previous_value == "5"
    assert state.current_value == ""


def test_operator_change_before_second_number_is_ignored(calc):
    assert _run(calc, "5", ADD, SUB, "3", "=").current_value == "8"


# --- Calculate no-ops ---

def test_calculate_with_incomplete_operation(calc):
    state = _run(calc, "5", ADD, "=")
    assert state.previous_value == "5"
    assert state.current_value == ""
    assert state.operation == ADD


def test_calculate_without_operation(calc):
    assert _run(calc, "5", "=").current_value == "5"


def test_repeated_equals_is_idempotent(calc):
    first = _run(calc, "5", ADD, "3", "=")
    calc.calculate()
    assert calc.get_state() == first


# --- Division by zero ---

def test_division_by_zero(calc):
    state = _run(calc, "5", DIV, "0", "=")
    assert state == CalculatorState(current_value="Error", previous_value="", operation=None, overwrite=False)
    assert state.is_error


def test_zero_divided_by_zero(calc):
    assert _run(calc, "0", DIV, "0", "=").current_value == "Error"


def test_divide_by_zero_point(calc):
    assert _run(calc, "7", DIV, "0", ".", "=").current_value == "Error"


def test_error_operand_keeps_chain_in_error(calc):
    state = _run(calc, "5", DIV, "0", "=", ADD, "3", "=")
    assert state.current_value == "Error"
    assert state.previous_value == ""
    assert state.operation is None


def test_division_by_zero_mid_chain(calc):
    state = _run(calc, "5", DIV, "0", ADD)
    assert state.previous_value == "Error"
    assert state.operation == ADD


# --- Percentage ---

@pytest.mark.parametrize("digits, expected", [("50", "0.5"), ("25", "0.25"), ("0", "0")])
def test_percentage(calc, digits, expected):
    assert _run(calc, digits, "%").current_value == expected


def test_percentage_leaves_chain_alone(calc):
    state = _run(calc, "50", MUL, "15", "%")
    assert state.current_value == "0.15"
    assert state.previous_value == "50"
    assert state.operation == MUL
    assert not state.overwrite


def test_percentage_then_equals(calc):
    assert _run(calc, "100", SUB, "20", "%", "=").current_value == "99.8"


def test_percentage_on_empty_value_is_noop(calc):
    before = _run(calc, "5", ADD)
    calc.percentage()
    assert calc.get_state() == before


def test_percentage_on_error_is_noop(calc):
    before = _run(calc, "5", DIV, "0", "=")
    calc.percentage()
    assert calc.get_state() == before


# --- Number input ---

def test_starts_at_zero(calc):
    assert calc.get_state() == INITIAL_STATE
    assert calc.state.current_value == "0"


def test_first_digit_replaces_zero(calc):
    assert _run(calc, "5").current_value == "5"


def test_digits_append(calc):
    assert _run(calc, "2", "5", "0").current_value == "250"


def test_many_digits_append(calc):
    assert _run(calc, "1", "2", "3", "4", "5").current_value == "12345"


def test_multi_character_input_appends_as_is(calc):
    assert _run(calc, "12", "34").current_value == "1234"


def test_digit_after_result_starts_fresh(calc):
    _run(calc, "5", ADD, "3", "=")
    calc.input_number("2")
    assert calc.state.current_value == "2"
    assert calc.state.overwrite is False


# --- Decimal input ---

def test_decimal_point(calc):
    assert _run(calc, "3", ".", "14").current_value == "3.14"


def test_leading_decimal_point(calc):
    assert _run(calc, ".", "5").current_value == "0.5"


def test_second_decimal_point_is_dropped(calc):
    assert _run(calc, "3", ".", "14", ".", "15").current_value == "3.1415"


def test_decimal_after_result(calc):
    _run(calc, "5", ADD, "3", "=")
    calc.input_decimal()
    assert calc.state.current_value == "0."
    assert calc.state.overwrite is False
    calc.input_number("5")
    assert calc.state.current_value == "0.5"


def test_decimals_in_calculation(calc):
    assert _run(calc, "3", ".", "14", ADD, "2", ".", "86", "=").current_value == "6"


def test_floating_point_noise(calc):
    assert _run(calc, "0", ".", "1", ADD, "0", ".", "2", "=").current_value == "0.3"


def test_small_decimal_entry(calc):
    assert _run(calc, "0", ".", "0", "0", "1").current_value == "0.001"


# --- Clear ---

def test_clear_resets_everything(calc):
    _run(calc, "123", ADD, "456")
    calc.clear()
    assert calc.get_state() == CalculatorState("0", "", None, False)


def test_clear_after_error(calc):
    _run(calc, "5", DIV, "0", "=")
    calc.clear()
    assert calc.get_state() == INITIAL_STATE


def test_clear_during_operation(calc):
    _run(calc, "10", ADD)
    calc.clear()
    assert calc.get_state() == INITIAL_STATE


def test_clear_after_result(calc):
    _run(calc, "5", ADD, "3", "=")
    calc.clear()
    assert calc.get_state() == INITIAL_STATE


def test_decimal_after_clear(calc):
    _run(calc, "5")
    calc.clear()
    assert _run(calc, ".", "5").current_value == "0.5"


# --- Backspace ---

def test_backspace_removes_last_digit(calc):
    _run(calc, "12345")
    calc.backspace()
    assert calc.state.current_value == "1234"


def test_backspace_single_digit(calc):
    _run(calc, "5")
    calc.backspace()
    assert calc.state.current_value == "0"


def test_backspace_after_result(calc):
    _run(calc, "5", ADD, "3", "=")
    calc.backspace()
    assert calc.state.current_value == "0"
    assert calc.state.overwrite is False


def test_backspace_strips_decimal_point(calc):
    _run(calc, "3", ".", "14")
    calc.backspace()
    assert calc.state.current_value == "3.1"
    calc.backspace()
    assert calc.state.current_value == "3."
    calc.backspace()
    assert calc.state.current_value == "3"


def test_backspace_on_zero(calc):
    calc.backspace()
    assert calc.state.current_value == "0"


def test_backspace_on_empty_operand(calc):
    _run(calc, "5", ADD)
    calc.backspace()
    assert calc.state.current_value == "0"
    assert calc.state.previous_value == "5"


@pytest.mark.parametrize(
    "steps",
    [
        ("98765",),
        ("3", ".", "14"),
        ("5", ADD),
        ("5", SUB, "10", "="),
        ("5", DIV, "0", "="),
    ],
)
def test_backspace_floor(calc, steps):
    _run(calc, *steps)
    for _ in range(10):
        calc.backspace()
    assert calc.state.current_value == "0"
    calc.backspace()
    assert calc.state.current_value == "0"


# --- Display limits ---

def test_large_product_fits_display(calc):
    result = _run(calc, "999999999", MUL, "999", "=").current_value
    assert result
    assert len(result) <= 12


def test_overflowing_product_fits_display(calc):
    result = _run(calc, "999999999999", MUL, "999999999999", "=").current_value
    assert len(result) <= 12


def test_long_quotient_is_cut_to_display(calc):
    assert _run(calc, "100", DIV, "3", "=").current_value == "33.333333333"


def test_result_too_large_to_round_stays_numeric(calc):
    state = _run(calc, "1" + "0" * 300, ADD, "0", "=")
    assert state == CalculatorState(current_value="1e+300", previous_value="", operation=None, overwrite=True)


def test_overflowing_operand_is_error(calc):
    assert _run(calc, "1" + "0" * 400, ADD, "0", "=").current_value == "Error"


def test_percentage_of_overflowing_operand_is_noop(calc):
    before = _run(calc, "1" + "0" * 400)
    calc.percentage()
    assert calc.get_state() == before


# --- Snapshots ---

def test_snapshot_does_not_change(calc):
    state1 = calc.get_state()
    calc.input_number("5")
    state2 = calc.get_state()
    assert state1.current_value == "0"
    assert state2.current_value == "5"
    assert state1 is not state2


def test_snapshot_is_immutable(calc):
    state = calc.get_state()
    with pytest.raises(AttributeError):
        state.current_value = "9"


def test_overwrite_set_after_calculation(calc):
    assert _run(calc, "5", ADD, "3", "=").overwrite is True


def test_overwrite_survives_operator(calc):
    state = _run(calc, "5", ADD, "3", "=", DIV)
    assert state.overwrite is True
    assert _run(calc, "2").current_value == "2"
    assert calc.state.overwrite is False
