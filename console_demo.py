"""Demostración por consola de la aritmética exacta y del historial."""

import sys

from calculation_history import CalculationHistory
from calculator_engine import CalculationEngine
from calculator_mode import CalculatorMode, OperationType
from input_mapping import apply_action, resolve_button
from rational_number import RationalNumber


class ConsoleDemo:
    """Ejecuta cálculos de ejemplo y escribe los resultados en ``out``."""

    def __init__(self, out=None):
        self._out = out if out is not None else sys.stdout
        self.engine = CalculationEngine()
        self.history = CalculationHistory()

    def _print(self, text: str = ""):
        print(text, file=self._out)

    def _section(self, title: str):
        self._print(title)
        self._print("=" * len(title))

    def run(self):
        self._print("=== Calculadora de precisión exacta: demostración ===")
        self._print()
        self.show_exact_arithmetic()
        self.show_engine()
        self.show_history()
        self._print("Demostración terminada.")

    # ── 1. Aritmética racional ───────────────────────────────────

    def show_exact_arithmetic(self):
        self._section("1. Aritmética exacta")

        a = RationalNumber.parse("123.456789012345678901234567890")
        b = RationalNumber.parse("987.654321098765432109876543210")
        self._print(f"a = {a}")
        self._print(f"b = {b}")
        self._print(f"a + b = {a + b}")
        self._print(f"a - b = {a - b}")
        self._print(f"a * b = {a * b}")
        self._print(f"a / b = {a / b}")

        third = RationalNumber(1) / RationalNumber(3)
        self._print(f"1/3 = {third.to_string(50)}")
        self._print(f"1/3 * 3 = {third * 3}")

        scientific = RationalNumber.parse("1.23456789E-15")
        self._print(f"Notación científica: {scientific.to_string(20)}")
        self._print()

    # ── 2. Motor ─────────────────────────────────────────────────

    def show_engine(self):
        self._section("2. Motor de cálculo")

        self.engine.mode = CalculatorMode.STANDARD
        self._print("Modo estándar:")
        self.calculate("2", "+", "3")
        self.calculate("10", "÷", "3")
        self.calculate("123.456", "×", "789.123")

        self.engine.mode = CalculatorMode.SCIENTIFIC
        self._print()
        self._print("Modo científico:")
        for value, label, operation in (
            ("9", "√9", OperationType.SQRT),
            ("100", "log(100)", OperationType.LOG10),
            ("90", "sin(90)", OperationType.SIN),
        ):
            self.engine.set_current_value(value)
            self.engine.perform_operation(operation)
            self._print(f"  {label} = {self.engine.current_display}")
            self._record()
        self._print()

    def calculate(self, left: str, operator: str, right: str):
        self.engine.perform_operation(OperationType.CLEAR)
        for label in (*left, operator, *right, "="):
            apply_action(self.engine, resolve_button(label))
        self._print(f"  {self.engine.get_complete_expression()}")
        self._record()

    def _record(self):
        if self.engine.has_error:
            return
        self.history.add_calculation(
            self.engine.get_complete_expression(),
            self.engine.current_display,
            self.engine.mode,
        )

    # ── 3. Historial ─────────────────────────────────────────────

    def show_history(self):
        self._section("3. Historial")
        for mode in CalculatorMode:
            items = self.history.get_history(mode)
            self._print(f"Modo {mode.value} ({len(items)} elementos):")
            for item in items:
                self._print(f"  {item.timestamp:%H:%M:%S} - {item}")
        total = sum(self.history.get_history_count(mode) for mode in CalculatorMode)
        self._print(f"Total: {total}")
        self._print()


def run_demo(out=None):
    ConsoleDemo(out).run()
