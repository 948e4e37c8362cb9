"""Funciones trascendentes evaluadas con coma flotante acotada.

Seno, coseno, tangente, logaritmos, exponencial y potencia no tienen
resultado racional en general. Se calculan con mpmath a FLOAT_DIGITS
dígitos y el resultado se eleva de nuevo a RationalNumber.
"""

from mpmath import mp

from calculator_errors import DivideByZeroError, DomainError
from rational_number import FLOAT_DIGITS, RationalNumber


class BoundedMathProvider:
    """Proveedor matemático basado en mpmath con precisión fija."""

    def __init__(self, digits: int = FLOAT_DIGITS):
        self._angle_mode = "rad"
        self._digits = digits

    @property
    def angle_mode(self) -> str:
        return self._angle_mode

    @angle_mode.setter
    def angle_mode(self, mode: str):
        if mode not in ("rad", "deg"):
            raise ValueError("El modo debe ser 'rad' o 'deg'")
        self._angle_mode = mode

    @property
    def digits(self) -> int:
        return self._digits

    def _trig(self, fn):
        mode = self._angle_mode

        def wrapped(x):
            value = mp.radians(x) if mode == "deg" else x
            return fn(value)

        return wrapped

    def build_namespace(self) -> dict:
        return {
            "sin": self._trig(mp.sin),
            "cos": self._trig(mp.cos),
            "tan": self._trig(mp.tan),
            "ln": mp.log,
            "log": mp.log10,
            "exp": mp.exp,
        }

    def evaluate(self, name: str, value: RationalNumber) -> RationalNumber:
        """Aplica la función ``name`` del namespace a ``value``.

        Raises:
            ValueError: función desconocida.
            DomainError: resultado complejo o no finito.
        """
        namespace = self.build_namespace()
        if name not in namespace:
            raise ValueError(f"Unknown function: {name}")

        with mp.workdps(self._digits):
            result = namespace[name](value.to_mpf())
            return self._lift(result, name)

    def power(self, base: RationalNumber, exponent: RationalNumber) -> RationalNumber:
        """``base ** exponent`` por la vía de coma flotante.

        Raises:
            DivideByZeroError: base cero con exponente negativo.
            DomainError: resultado complejo (base negativa, exponente no
                entero) o no finito.
        """
        if base.is_zero and exponent < 0:
            raise DivideByZeroError("Cannot divide by zero")

        with mp.workdps(self._digits):
            result = mp.power(base.to_mpf(), exponent.to_mpf())
            return self._lift(result, "power")

    @staticmethod
    def _lift(result, name: str) -> RationalNumber:
        if isinstance(result, mp.mpc) or not mp.isfinite(result):
            raise DomainError(f"Invalid input for {name}")
        return RationalNumber.from_float(result)
