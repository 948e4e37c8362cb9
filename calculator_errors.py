"""Errores del núcleo de cálculo.

El motor convierte cualquiera de estos errores en su estado de error
persistente; nunca cruzan la interfaz pública de CalculationEngine.
"""


class CalculatorError(Exception):
    """Base de todos los errores del núcleo."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class FormatError(CalculatorError, ValueError):
    """Texto numérico que no se puede interpretar."""


class DivideByZeroError(CalculatorError, ZeroDivisionError):
    """Denominador o divisor igual a cero."""


class DomainError(CalculatorError, ValueError):
    """Argumento fuera del dominio (raíz de negativo, logaritmo de no positivo)."""
