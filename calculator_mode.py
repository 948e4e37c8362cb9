"""Modos, operaciones y parámetros de precisión de la calculadora."""

from enum import Enum


class CalculatorMode(str, Enum):
    STANDARD = "Standard"
    SCIENTIFIC = "Scientific"


class CalculatorPrecision:
    """Dígitos fraccionarios mostrados según el modo."""

    STANDARD = 16
    SCIENTIFIC = 32

    @classmethod
    def for_mode(cls, mode: CalculatorMode) -> int:
        if mode == CalculatorMode.SCIENTIFIC:
            return cls.SCIENTIFIC
        return cls.STANDARD


class OperationType(str, Enum):
    ADD = "Add"
    SUBTRACT = "Subtract"
    MULTIPLY = "Multiply"
    DIVIDE = "Divide"
    EQUALS = "Equals"
    CLEAR = "Clear"
    CLEAR_ENTRY = "ClearEntry"
    CHANGE_SIGN = "ChangeSign"
    PERCENT = "Percent"
    SQRT = "Sqrt"
    RECIPROCAL = "Reciprocal"
    SIN = "Sin"
    COS = "Cos"
    TAN = "Tan"
    LOG = "Log"
    LOG10 = "Log10"
    EXP = "Exp"
    POWER = "Power"


BINARY_OPERATIONS = frozenset({
    OperationType.ADD,
    OperationType.SUBTRACT,
    OperationType.MULTIPLY,
    OperationType.DIVIDE,
    OperationType.POWER,
})

# Solo disponibles en modo científico; en estándar se ignoran sin error
SCIENTIFIC_OPERATIONS = frozenset({
    OperationType.SQRT,
    OperationType.SIN,
    OperationType.COS,
    OperationType.TAN,
    OperationType.LOG,
    OperationType.LOG10,
    OperationType.EXP,
    OperationType.POWER,
})

OPERATOR_SYMBOLS = {
    OperationType.ADD: "+",
    OperationType.SUBTRACT: "−",
    OperationType.MULTIPLY: "×",
    OperationType.DIVIDE: "÷",
    OperationType.POWER: "^",
}

# Nombre de función usado en la traza para cada operación unaria científica
FUNCTION_NAMES = {
    OperationType.SQRT: "sqrt",
    OperationType.SIN: "sin",
    OperationType.COS: "cos",
    OperationType.TAN: "tan",
    OperationType.LOG: "ln",
    OperationType.LOG10: "log",
    OperationType.EXP: "exp",
}
