"""Traducción de botones y teclas a acciones del motor.

Una acción es ``("digit", texto)`` o ``("op", OperationType)``; las
entradas desconocidas se resuelven a None. No depende de tkinter.
"""

from calculator_mode import OperationType


DIGITS = frozenset("0123456789.")

BUTTON_OPERATIONS = {
    "+": OperationType.ADD,
    "\u2212": OperationType.SUBTRACT,     # −
    "\u00D7": OperationType.MULTIPLY,     # ×
    "\u00F7": OperationType.DIVIDE,       # ÷
    "=": OperationType.EQUALS,
    "\u00B1": OperationType.CHANGE_SIGN,  # ±
    "%": OperationType.PERCENT,
    "\u221A": OperationType.SQRT,         # √
    "1/x": OperationType.RECIPROCAL,
    "sin": OperationType.SIN,
    "cos": OperationType.COS,
    "tan": OperationType.TAN,
    "log": OperationType.LOG10,
    "ln": OperationType.LOG,
    "exp": OperationType.EXP,
    "x^y": OperationType.POWER,
    "C": OperationType.CLEAR,
    "CE": OperationType.CLEAR_ENTRY,
}

# keysym de tkinter -> operación
KEYSYM_OPERATIONS = {
    "plus": OperationType.ADD,
    "KP_Add": OperationType.ADD,
    "minus": OperationType.SUBTRACT,
    "KP_Subtract": OperationType.SUBTRACT,
    "asterisk": OperationType.MULTIPLY,
    "KP_Multiply": OperationType.MULTIPLY,
    "slash": OperationType.DIVIDE,
    "KP_Divide": OperationType.DIVIDE,
    "Return": OperationType.EQUALS,
    "KP_Enter": OperationType.EQUALS,
    "equal": OperationType.EQUALS,
    "Escape": OperationType.CLEAR,
    "Delete": OperationType.CLEAR_ENTRY,
}

KEYSYM_DIGITS = {
    "period": ".",
    "KP_Decimal": ".",
    **{str(d): str(d) for d in range(10)},
    **{f"KP_{d}": str(d) for d in range(10)},
}


def resolve_button(label: str):
    """Acción asociada a la etiqueta de un botón."""
    if label in DIGITS:
        return ("digit", label)
    operation = BUTTON_OPERATIONS.get(label)
    if operation is not None:
        return ("op", operation)
    return None


def resolve_key(keysym: str):
    """Acción asociada a un keysym de tkinter."""
    if keysym in KEYSYM_DIGITS:
        return ("digit", KEYSYM_DIGITS[keysym])
    operation = KEYSYM_OPERATIONS.get(keysym)
    if operation is not None:
        return ("op", operation)
    return None


def apply_action(engine, action) -> bool:
    """Ejecuta la acción sobre el motor; devuelve False si no había acción."""
    if action is None:
        return False
    kind, value = action
    if kind == "digit":
        engine.input_digit(value)
    else:
        engine.perform_operation(value)
    return True
