"""
Motor de cálculo para la calculadora.

Este módulo provee la clase CalculationEngine, la máquina de estados que
recibe dígitos y operaciones, mantiene un único operador pendiente, la
traza de la expresión y un estado de error persistente. La aritmética
básica es exacta (RationalNumber); solo las funciones trascendentes y la
potencia pasan por coma flotante acotada (BoundedMathProvider).

Contrato de interfaz:
    - input_digit(digit: str)
    - perform_operation(operation: OperationType)
    - set_current_value(text: str)
    - current_display / current_expression / has_error: solo lectura
    - mode: CalculatorMode (lectura/escritura)
    - angle_mode: propiedad 'rad' | 'deg'
    - get_complete_expression() -> str

Ningún error cruza la interfaz: se convierte en estado de error hasta
Clear o ClearEntry.
"""

import logging

from calculator_errors import CalculatorError, DivideByZeroError, DomainError
from calculator_mode import (
    BINARY_OPERATIONS,
    FUNCTION_NAMES,
    OPERATOR_SYMBOLS,
    SCIENTIFIC_OPERATIONS,
    CalculatorMode,
    CalculatorPrecision,
    OperationType,
)
from rational_number import ONE, ZERO, RationalNumber
from scientific_functions import BoundedMathProvider

logger = logging.getLogger(__name__)

DIVIDE_BY_ZERO_MESSAGE = "Cannot divide by zero"
INVALID_INPUT_MESSAGE = "Invalid input"
INVALID_LOGARITHM_MESSAGE = "Invalid input for logarithm"
INVALID_VALUE_MESSAGE = "Invalid value format"


class CalculationEngine:
    """Estado de una superficie de cálculo. No es seguro entre hilos."""

    def __init__(self, mode: CalculatorMode = CalculatorMode.STANDARD, provider=None):
        self._provider = provider if provider is not None else BoundedMathProvider()

        self._current_value = ZERO
        self._previous_value = ZERO
        self._pending_operation = None

        # Traza confirmada + fragmento del operando actual (p. ej. "sqrt(9)")
        self._trace: list[str] = []
        self._operand_fragment: str | None = None

        self._entry_text: str | None = None
        self._awaiting_new_entry = True
        self._calculation_complete = False

        self._has_error = False
        self._error_message: str | None = None

        self._mode = CalculatorMode(mode)
        self._precision = CalculatorPrecision.for_mode(self._mode)

    # ── Propiedades ──────────────────────────────────────────────

    @property
    def current_display(self) -> str:
        if self._has_error:
            return self._error_message
        if self._entry_text is not None:
            return self._entry_text
        return self._render(self._current_value)

    @property
    def current_expression(self) -> str:
        return "".join(self._trace) + (self._operand_fragment or "")

    @property
    def has_error(self) -> bool:
        return self._has_error

    @property
    def error_message(self) -> str | None:
        return self._error_message

    @property
    def current_value(self) -> RationalNumber:
        return self._current_value

    @property
    def pending_operation(self) -> OperationType | None:
        return self._pending_operation

    @property
    def precision(self) -> int:
        return self._precision

    @property
    def mode(self) -> CalculatorMode:
        return self._mode

    @mode.setter
    def mode(self, mode: CalculatorMode):
        # Solo cambia la precisión de salida; el cálculo en curso continúa
        self._mode = CalculatorMode(mode)
        self._precision = CalculatorPrecision.for_mode(self._mode)

    @property
    def angle_mode(self) -> str:
        return self._provider.angle_mode

    @angle_mode.setter
    def angle_mode(self, mode: str):
        self._provider.angle_mode = mode

    # ── Entrada de dígitos ───────────────────────────────────────

    def input_digit(self, digit: str):
        """Añade un dígito o el punto decimal al número en edición."""
        if self._has_error:
            return

        if self._calculation_complete:
            self._start_new_trace()

        if self._awaiting_new_entry or self._entry_text is None:
            self._entry_text = "0"
            self._awaiting_new_entry = False
            self._operand_fragment = None

        if digit == "." and "." in self._entry_text:
            return

        if self._entry_text in ("0", "-0") and digit != ".":
            text = self._entry_text[:-1] + digit
        else:
            text = self._entry_text + digit

        try:
            value = RationalNumber.parse(text)
        except (CalculatorError, ValueError):
            self._set_error(INVALID_INPUT_MESSAGE)
            return

        self._entry_text = text
        self._current_value = value

    def set_current_value(self, text: str):
        """Inyecta un valor (p. ej. recuperado del historial)."""
        try:
            value = RationalNumber.parse(text)
            rendered = self._render(value)
        except (CalculatorError, AttributeError, ValueError):
            self._set_error(INVALID_VALUE_MESSAGE)
            return

        if self._pending_operation is None:
            self._trace.clear()
        self._calculation_complete = False
        self._current_value = value
        self._operand_fragment = rendered
        self._entry_text = None
        self._awaiting_new_entry = True
        self._clear_error()

    # ── Operaciones ──────────────────────────────────────────────

    def perform_operation(self, operation: OperationType):
        """Aplica una operación; cualquier fallo pasa al estado de error."""
        if self._has_error and operation not in (
            OperationType.CLEAR,
            OperationType.CLEAR_ENTRY,
        ):
            return

        try:
            self._dispatch(OperationType(operation))
        except (CalculatorError, ArithmeticError, ValueError) as exc:
            message = str(exc) if str(exc) else type(exc).__name__
            self._set_error(message)

    def _dispatch(self, operation: OperationType):
        logger.debug("Operación %s sobre %r", operation.value, self._current_value)

        if operation == OperationType.CLEAR:
            self._clear()
        elif operation == OperationType.CLEAR_ENTRY:
            self._clear_entry()
        elif (
            operation in SCIENTIFIC_OPERATIONS
            and self._mode != CalculatorMode.SCIENTIFIC
        ):
            logger.debug("%s ignorada en modo %s", operation.value, self._mode.value)
        elif operation == OperationType.EQUALS:
            self._calculate_result()
        elif operation in BINARY_OPERATIONS:
            self._handle_binary_operation(operation)
        else:
            self._apply_unary(operation)

    def _apply_unary(self, operation: OperationType):
        if operation == OperationType.CHANGE_SIGN:
            self._change_sign()
            return

        value = self._current_value
        operand = self._take_operand_text()

        if operation == OperationType.PERCENT:
            result = value / 100
            fragment = f"{operand}%"
        elif operation == OperationType.RECIPROCAL:
            if value.is_zero:
                raise DivideByZeroError(DIVIDE_BY_ZERO_MESSAGE)
            result = ONE / value
            fragment = f"1/({operand})"
        else:
            name = FUNCTION_NAMES[operation]
            if operation == OperationType.SQRT:
                result = value.sqrt()
            elif operation in (OperationType.LOG, OperationType.LOG10):
                if value <= ZERO:
                    raise DomainError(INVALID_LOGARITHM_MESSAGE)
                result = self._provider.evaluate(name, value)
            else:
                result = self._provider.evaluate(name, value)
            fragment = f"{name}({operand})"

        self._current_value = result
        self._operand_fragment = fragment
        self._entry_text = None
        self._awaiting_new_entry = True

    def _change_sign(self):
        if self._entry_text is not None and not self._awaiting_new_entry:
            # Número en edición: se alterna el signo y se sigue escribiendo
            if self._entry_text.startswith("-"):
                self._entry_text = self._entry_text[1:]
            else:
                self._entry_text = "-" + self._entry_text
            self._current_value = -self._current_value
            return

        if self._current_value.is_zero:
            # -0 == 0: no hay nada que negar
            return

        operand = self._take_operand_text()
        self._current_value = -self._current_value
        self._operand_fragment = f"negate({operand})"
        self._awaiting_new_entry = True

    def _handle_binary_operation(self, operation: OperationType):
        symbol = OPERATOR_SYMBOLS[operation]

        if self._pending_operation is not None and self._resolve_pending():
            # El resultado parcial ya está en la traza como "a op b"
            self._trace.append(f" {symbol} ")
        else:
            self._trace.append(f"{self._take_operand_text()} {symbol} ")

        self._previous_value = self._current_value
        self._pending_operation = operation
        self._operand_fragment = None
        self._entry_text = None
        self._awaiting_new_entry = True

    def _calculate_result(self):
        if self._pending_operation is None:
            return
        if self._resolve_pending():
            self._calculation_complete = True

    def _resolve_pending(self) -> bool:
        """Evalúa ``previous op current``; False si la operación se ignora."""
        operation = self._pending_operation
        left, right = self._previous_value, self._current_value

        if operation == OperationType.ADD:
            result = left + right
        elif operation == OperationType.SUBTRACT:
            result = left - right
        elif operation == OperationType.MULTIPLY:
            result = left * right
        elif operation == OperationType.DIVIDE:
            if right.is_zero:
                raise DivideByZeroError(DIVIDE_BY_ZERO_MESSAGE)
            result = left / right
        elif operation == OperationType.POWER:
            if self._mode != CalculatorMode.SCIENTIFIC:
                return False
            result = self._provider.power(left, right)
        else:
            return False

        if self._operand_fragment is not None:
            self._trace.append(self._operand_fragment)
        else:
            self._trace.append(self._render(right))

        self._current_value = result
        self._pending_operation = None
        self._operand_fragment = None
        self._entry_text = None
        self._awaiting_new_entry = True
        return True

    # ── Limpieza y error ─────────────────────────────────────────

    def _clear(self):
        self._current_value = ZERO
        self._previous_value = ZERO
        self._pending_operation = None
        self._start_new_trace()
        self._entry_text = None
        self._awaiting_new_entry = True
        self._clear_error()

    def _clear_entry(self):
        self._current_value = ZERO
        self._operand_fragment = None
        self._entry_text = None
        self._awaiting_new_entry = True
        self._clear_error()

    def _set_error(self, message: str):
        logger.warning("Estado de error: %s", message)
        self._has_error = True
        self._error_message = message

    def _clear_error(self):
        self._has_error = False
        self._error_message = None

    # ── Traza ────────────────────────────────────────────────────

    def _start_new_trace(self):
        self._trace.clear()
        self._operand_fragment = None
        self._calculation_complete = False

    def _take_operand_text(self) -> str:
        """Texto del operando actual; tras '=' empieza una traza nueva."""
        if self._calculation_complete:
            self._start_new_trace()
        if self._operand_fragment is not None:
            return self._operand_fragment
        return self._render(self._current_value)

    def _render(self, value: RationalNumber) -> str:
        return value.to_string(self._precision)

    def get_complete_expression(self) -> str:
        """Traza terminada en ``= resultado``, para el historial."""
        expression = self.current_expression
        if not expression:
            return self._render(self._current_value)
        if not expression.endswith("="):
            expression = f"{expression.rstrip()} = {self._render(self._current_value)}"
        return expression
