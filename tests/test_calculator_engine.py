"""Tests de CalculationEngine.

Coverage:
- Escenarios básicos de la máquina de estados
- Estado de error persistente y salida por Clear/ClearEntry
- Entrada de dígitos (punto decimal, ceros, cambio de signo)
- Operaciones unarias y binarias, encadenado, traza
- Restricciones de modo y cambio de modo en caliente
- Inyección directa de valores
"""

import pytest

from calculator_engine import CalculationEngine
from calculator_mode import CalculatorMode, OperationType as Op
from rational_number import RationalNumber


def enter(engine, text):
    for char in text:
        engine.input_digit(char)


@pytest.fixture
def engine():
    calc = CalculationEngine()
    calc.perform_operation(Op.CLEAR)
    return calc


@pytest.fixture
def sci():
    calc = CalculationEngine(mode=CalculatorMode.SCIENTIFIC)
    calc.perform_operation(Op.CLEAR)
    return calc


class TestScenarios:
    """Escenarios de referencia."""

    def test_two_plus_three(self, engine):
        enter(engine, "2")
        engine.perform_operation(Op.ADD)
        enter(engine, "3")
        engine.perform_operation(Op.EQUALS)

        assert engine.current_display == "5"
        assert engine.current_expression == "2 + 3"
        assert engine.get_complete_expression() == "2 + 3 = 5"

    def test_one_third_times_three_is_exact(self, engine):
        enter(engine, "1")
        engine.perform_operation(Op.DIVIDE)
        enter(engine, "3")
        engine.perform_operation(Op.MULTIPLY)
        enter(engine, "3")
        engine.perform_operation(Op.EQUALS)

        assert engine.current_display == "1"
        assert engine.current_value == 1

    def test_divide_by_zero(self, engine):
        enter(engine, "5")
        engine.perform_operation(Op.DIVIDE)
        enter(engine, "0")
        engine.perform_operation(Op.EQUALS)

        assert engine.has_error
        assert engine.current_display == "Cannot divide by zero"

    def test_scientific_sqrt(self, sci):
        enter(sci, "9")
        sci.perform_operation(Op.SQRT)

        assert sci.current_display == "3"
        assert sci.current_expression == "sqrt(9)"

    def test_standard_sqrt_is_ignored(self, engine):
        enter(engine, "9")
        engine.perform_operation(Op.SQRT)

        assert engine.current_display == "9"
        assert engine.current_value == 9
        assert engine.current_expression == ""
        assert not engine.has_error

    def test_point_one_plus_point_two(self, engine):
        enter(engine, "0.1")
        engine.perform_operation(Op.ADD)
        enter(engine, "0.2")
        engine.perform_operation(Op.EQUALS)

        assert engine.current_display == "0.3"


class TestErrorState:
    """Estado de error persistente."""

    def _divide_five_by_zero(self, engine):
        enter(engine, "5")
        engine.perform_operation(Op.DIVIDE)
        enter(engine, "0")
        engine.perform_operation(Op.EQUALS)

    def test_digits_and_operations_ignored_while_errored(self, engine):
        self._divide_five_by_zero(engine)
        enter(engine, "7")
        engine.perform_operation(Op.ADD)
        engine.perform_operation(Op.EQUALS)

        assert engine.has_error
        assert engine.current_display == "Cannot divide by zero"

    def test_clear_exits_error(self, engine):
        self._divide_five_by_zero(engine)
        engine.perform_operation(Op.CLEAR)

        assert not engine.has_error
        assert engine.error_message is None
        assert engine.current_display == "0"
        assert engine.current_expression == ""
        assert engine.pending_operation is None

    def test_clear_entry_keeps_pending_operation(self, engine):
        self._divide_five_by_zero(engine)
        engine.perform_operation(Op.CLEAR_ENTRY)

        assert not engine.has_error
        assert engine.current_display == "0"
        assert engine.pending_operation == Op.DIVIDE
        assert engine.current_expression == "5 ÷ "

        enter(engine, "5")
        engine.perform_operation(Op.EQUALS)
        assert engine.current_display == "1"
        assert engine.get_complete_expression() == "5 ÷ 5 = 1"

    def test_reciprocal_of_zero(self, engine):
        enter(engine, "0")
        engine.perform_operation(Op.RECIPROCAL)

        assert engine.has_error
        assert engine.current_display == "Cannot divide by zero"

    def test_invalid_digit(self, engine):
        engine.input_digit("x")

        assert engine.has_error
        assert engine.current_display == "Invalid input"

    def test_unknown_operation(self, engine):
        engine.perform_operation("Bogus")

        assert engine.has_error

    def test_logarithm_of_zero(self, sci):
        enter(sci, "0")
        sci.perform_operation(Op.LOG)

        assert sci.current_display == "Invalid input for logarithm"

    def test_log10_of_negative(self, sci):
        enter(sci, "5")
        sci.perform_operation(Op.CHANGE_SIGN)
        sci.perform_operation(Op.LOG10)

        assert sci.current_display == "Invalid input for logarithm"

    def test_sqrt_of_negative(self, sci):
        enter(sci, "4")
        sci.perform_operation(Op.CHANGE_SIGN)
        sci.perform_operation(Op.SQRT)

        assert sci.has_error
        assert sci.current_display == "Cannot compute square root of negative number"


class TestDigitEntry:
    """Entrada de dígitos."""

    def test_initial_display(self):
        assert CalculationEngine().current_display == "0"

    def test_second_decimal_point_ignored(self, engine):
        enter(engine, "1..5")

        assert engine.current_display == "1.5"
        assert engine.current_value == RationalNumber(3, 2)

    def test_display_shows_entry_text(self, engine):
        enter(engine, ".")
        assert engine.current_display == "0."

        enter(engine, "50")
        assert engine.current_display == "0.50"
        assert engine.current_value == RationalNumber(1, 2)

    def test_leading_zeros_replaced(self, engine):
        enter(engine, "007")

        assert engine.current_display == "7"

    def test_change_sign_while_typing(self, engine):
        enter(engine, "12")
        engine.perform_operation(Op.CHANGE_SIGN)
        assert engine.current_display == "-12"

        enter(engine, "3")
        assert engine.current_display == "-123"
        assert engine.current_value == -123

    def test_digit_after_operator_starts_new_number(self, engine):
        enter(engine, "12")
        engine.perform_operation(Op.ADD)
        enter(engine, "3")

        assert engine.current_display == "3"

    def test_entry_beyond_str_conversion_limit(self, engine):
        enter(engine, "9" * 4301)

        assert not engine.has_error
        assert engine.current_display == "9" * 4301
        assert engine.current_value == RationalNumber(10 ** 4301 - 1)


class TestOperations:
    """Operaciones unarias y binarias."""

    def test_percent(self, engine):
        enter(engine, "50")
        engine.perform_operation(Op.PERCENT)

        assert engine.current_display == "0.5"
        assert engine.current_expression == "50%"

    def test_reciprocal(self, engine):
        enter(engine, "4")
        engine.perform_operation(Op.RECIPROCAL)

        assert engine.current_display == "0.25"
        assert engine.current_expression == "1/(4)"

    def test_change_sign_of_result(self, engine):
        enter(engine, "2")
        engine.perform_operation(Op.ADD)
        enter(engine, "3")
        engine.perform_operation(Op.EQUALS)
        engine.perform_operation(Op.CHANGE_SIGN)

        assert engine.current_display == "-5"
        assert engine.current_expression == "negate(5)"

    def test_change_sign_of_zero_leaves_trace_alone(self, engine):
        engine.perform_operation(Op.CHANGE_SIGN)

        assert engine.current_display == "0"
        assert engine.current_expression == ""
        assert not engine.has_error

    def test_chained_operators_resolve_pending(self, engine):
        enter(engine, "2")
        engine.perform_operation(Op.ADD)
        enter(engine, "3")
        engine.perform_operation(Op.MULTIPLY)

        assert engine.current_display == "5"
        assert engine.current_expression == "2 + 3 × "

        enter(engine, "4")
        engine.perform_operation(Op.EQUALS)
        assert engine.current_display == "20"
        assert engine.get_complete_expression() == "2 + 3 × 4 = 20"

    def test_subtract(self, engine):
        enter(engine, "1")
        engine.perform_operation(Op.SUBTRACT)
        enter(engine, "0.75")
        engine.perform_operation(Op.EQUALS)

        assert engine.current_display == "0.25"
        assert engine.current_expression == "1 − 0.75"

    def test_equals_without_pending_is_noop(self, engine):
        enter(engine, "5")
        engine.perform_operation(Op.EQUALS)

        assert engine.current_display == "5"
        assert engine.current_expression == ""

    def test_digit_after_equals_starts_new_calculation(self, engine):
        enter(engine, "2")
        engine.perform_operation(Op.ADD)
        enter(engine, "3")
        engine.perform_operation(Op.EQUALS)
        enter(engine, "7")

        assert engine.current_display == "7"
        assert engine.current_expression == ""

        engine.perform_operation(Op.ADD)
        enter(engine, "1")
        engine.perform_operation(Op.EQUALS)
        assert engine.current_display == "8"
        assert engine.current_expression == "7 + 1"

    def test_operator_after_equals_continues_with_result(self, engine):
        enter(engine, "2")
        engine.perform_operation(Op.ADD)
        enter(engine, "3")
        engine.perform_operation(Op.EQUALS)
        engine.perform_operation(Op.ADD)
        enter(engine, "1")
        engine.perform_operation(Op.EQUALS)

        assert engine.current_display == "6"
        assert engine.current_expression == "5 + 1"

    def test_large_exact_product(self, engine):
        enter(engine, "99999999999999999999")
        engine.perform_operation(Op.MULTIPLY)
        enter(engine, "99999999999999999999")
        engine.perform_operation(Op.EQUALS)

        assert engine.current_display == "9999999999999999999800000000000000000001"


class TestScientific:
    """Operaciones del modo científico."""

    def test_log10(self, sci):
        enter(sci, "100")
        sci.perform_operation(Op.LOG10)

        assert sci.current_display == "2"
        assert sci.current_expression == "log(100)"

    @pytest.mark.parametrize(
        "operation, expected",
        [(Op.SIN, "0"), (Op.COS, "1"), (Op.EXP, "1")],
    )
    def test_functions_at_zero(self, sci, operation, expected):
        enter(sci, "0")
        sci.perform_operation(operation)

        assert sci.current_display == expected

    def test_sin_in_degrees(self, sci):
        sci.angle_mode = "deg"
        enter(sci, "90")
        sci.perform_operation(Op.SIN)

        assert sci.current_display == "1"

    def test_sqrt_of_large_value(self, sci):
        sci.set_current_value("1e5000")
        sci.perform_operation(Op.SQRT)

        assert not sci.has_error
        assert sci.current_display == "1" + "0" * 2500

    def test_invalid_angle_mode(self, sci):
        with pytest.raises(ValueError):
            sci.angle_mode = "grad"

    def test_nested_functions_trace(self, sci):
        enter(sci, "9")
        sci.perform_operation(Op.SQRT)
        sci.perform_operation(Op.SIN)

        assert sci.current_expression == "sin(sqrt(9))"

    def test_unary_then_binary_trace(self, sci):
        enter(sci, "9")
        sci.perform_operation(Op.SQRT)
        sci.perform_operation(Op.ADD)
        enter(sci, "1")
        sci.perform_operation(Op.EQUALS)

        assert sci.current_display == "4"
        assert sci.get_complete_expression() == "sqrt(9) + 1 = 4"

    def test_power(self, sci):
        enter(sci, "2")
        sci.perform_operation(Op.POWER)
        enter(sci, "10")
        sci.perform_operation(Op.EQUALS)

        assert sci.current_display == "1024"
        assert sci.current_expression == "2 ^ 10"

    def test_power_with_complex_result(self, sci):
        enter(sci, "8")
        sci.perform_operation(Op.CHANGE_SIGN)
        sci.perform_operation(Op.POWER)
        enter(sci, "0.5")
        sci.perform_operation(Op.EQUALS)

        assert sci.has_error
        assert sci.current_display == "Invalid input for power"

    def test_power_of_zero_to_negative(self, sci):
        enter(sci, "0")
        sci.perform_operation(Op.POWER)
        enter(sci, "1")
        sci.perform_operation(Op.CHANGE_SIGN)
        sci.perform_operation(Op.EQUALS)

        assert sci.current_display == "Cannot divide by zero"

    def test_power_ignored_in_standard(self, engine):
        enter(engine, "2")
        engine.perform_operation(Op.POWER)

        assert engine.pending_operation is None
        assert engine.current_expression == ""
        assert engine.current_display == "2"

    @pytest.mark.parametrize("operation", [Op.SIN, Op.COS, Op.TAN, Op.LOG, Op.LOG10, Op.EXP])
    def test_scientific_functions_ignored_in_standard(self, engine, operation):
        enter(engine, "2")
        engine.perform_operation(operation)

        assert engine.current_value == 2
        assert not engine.has_error


class TestMode:
    """Cambio de modo."""

    def test_precision_follows_mode(self, engine):
        assert engine.precision == 16
        engine.mode = CalculatorMode.SCIENTIFIC
        assert engine.precision == 32

    def test_mode_switch_keeps_state(self, engine):
        enter(engine, "1")
        engine.perform_operation(Op.DIVIDE)
        enter(engine, "3")
        engine.perform_operation(Op.EQUALS)
        assert engine.current_display == "0." + "3" * 16

        engine.mode = CalculatorMode.SCIENTIFIC
        assert engine.current_display == "0." + "3" * 32
        assert engine.current_value == RationalNumber(1, 3)

    def test_mode_accepts_string(self, engine):
        engine.mode = "Scientific"
        assert engine.mode is CalculatorMode.SCIENTIFIC

    def test_scientific_operator_available_after_switch(self, engine):
        enter(engine, "16")
        engine.perform_operation(Op.SQRT)
        assert engine.current_display == "16"

        engine.mode = CalculatorMode.SCIENTIFIC
        engine.perform_operation(Op.SQRT)
        assert engine.current_display == "4"


class TestSetCurrentValue:
    """Inyección directa de valores."""

    def test_sets_value_and_trace(self, engine):
        engine.set_current_value("12.5")

        assert engine.current_display == "12.5"
        assert engine.current_expression == "12.5"
        assert not engine.has_error

    def test_invalid_value(self, engine):
        engine.set_current_value("abc")

        assert engine.has_error
        assert engine.current_display == "Invalid value format"

    def test_clears_error(self, engine):
        engine.set_current_value("abc")
        engine.set_current_value("3")

        assert not engine.has_error
        assert engine.current_display == "3"

    def test_as_right_operand(self, engine):
        enter(engine, "2")
        engine.perform_operation(Op.ADD)
        engine.set_current_value("9")
        engine.perform_operation(Op.EQUALS)

        assert engine.current_display == "11"
        assert engine.current_expression == "2 + 9"

    def test_digit_after_injection_starts_new_number(self, engine):
        engine.set_current_value("9")
        enter(engine, "4")

        assert engine.current_display == "4"
        assert engine.current_expression == ""

    def test_value_beyond_str_conversion_limit(self, engine):
        engine.set_current_value("1e5000")

        assert not engine.has_error
        assert engine.current_display == "1" + "0" * 5000
        assert engine.current_expression == "1" + "0" * 5000

    def test_product_of_large_values(self, engine):
        engine.set_current_value("1e3000")
        engine.perform_operation(Op.MULTIPLY)
        engine.set_current_value("1e3000")
        engine.perform_operation(Op.EQUALS)

        assert not engine.has_error
        assert engine.current_display == "1" + "0" * 6000
        assert engine.get_complete_expression().endswith(" = 1" + "0" * 6000)

    def test_exponent_out_of_range_is_error_state(self, engine):
        engine.set_current_value("1e" + "9" * 5000)

        assert engine.has_error
        assert engine.current_display == "Invalid value format"


class TestCompleteExpression:
    """Expresión completa para el historial."""

    def test_empty_trace_returns_value(self):
        assert CalculationEngine().get_complete_expression() == "0"

    def test_unary_only(self, sci):
        enter(sci, "9")
        sci.perform_operation(Op.SQRT)

        assert sci.get_complete_expression() == "sqrt(9) = 3"
