"""Número racional exacto sobre enteros de precisión arbitraria.

Cualquier valor decimal finito (o en notación científica) se representa
como una fracción irreducible con denominador positivo. Suma, resta,
multiplicación y división nunca redondean; la precisión solo se recorta
al convertir a texto con to_string().
"""

from __future__ import annotations

import math
import re

from mpmath import mp

from calculator_errors import DivideByZeroError, DomainError, FormatError


SQRT_MAX_ITERATIONS = 50
MAX_EXPONENT = 100_000      # |exp| máximo aceptado en notación científica
FLOAT_DIGITS = 15           # dígitos significativos del desvío por coma flotante
SEED_GUARD_BITS = 110       # 2**-110 < 10**-30: la semilla ya cumple la tolerancia
CHUNK_DIGITS = 1000         # por debajo del límite int <-> str de CPython
_CHUNK_BASE = 10 ** CHUNK_DIGITS


def int_from_digits(digits: str) -> int:
    """Entero a partir de una cadena de dígitos de cualquier longitud."""
    value = 0
    for start in range(0, len(digits), CHUNK_DIGITS):
        chunk = digits[start:start + CHUNK_DIGITS]
        value = value * 10 ** len(chunk) + int(chunk)
    return value


def int_to_text(value: int) -> str:
    """Texto decimal de un entero de cualquier longitud."""
    if value < 0:
        return "-" + int_to_text(-value)
    if value < _CHUNK_BASE:
        return str(value)

    chunks = []
    while value >= _CHUNK_BASE:
        value, chunk = divmod(value, _CHUNK_BASE)
        chunks.append(str(chunk).zfill(CHUNK_DIGITS))
    chunks.append(str(value))
    return "".join(reversed(chunks))


class RationalNumber:
    """Fracción inmutable ``numerator / denominator`` en términos mínimos."""

    __slots__ = ("_numerator", "_denominator")

    DEFAULT_PRECISION = 32

    _DECIMAL_RE = re.compile(r"^(?P<sign>[+-]?)(?P<int>[0-9]*)(?:\.(?P<frac>[0-9]*))?$")
    _EXPONENT_RE = re.compile(r"^[+-]?[0-9]+$")

    def __init__(self, numerator: int = 0, denominator: int = 1):
        if not isinstance(numerator, int) or not isinstance(denominator, int):
            raise TypeError("numerator y denominator deben ser enteros")
        if denominator == 0:
            raise DivideByZeroError("Denominator cannot be zero")

        if denominator < 0:
            numerator, denominator = -numerator, -denominator

        divisor = math.gcd(numerator, denominator)
        self._numerator = numerator // divisor
        self._denominator = denominator // divisor

    # ── Construcción ─────────────────────────────────────────────

    @classmethod
    def from_int(cls, value: int) -> RationalNumber:
        return cls(value, 1)

    @classmethod
    def parse(cls, text: str) -> RationalNumber:
        """Interpreta ``[signo]entero[.fracción][e[signo]exponente]``.

        Raises:
            FormatError: texto vacío, más de un punto decimal, más de un
                marcador de exponente o caracteres no numéricos.
        """
        if text is None or not text.strip():
            raise FormatError("Value cannot be empty")

        text = text.strip()
        markers = text.count("e") + text.count("E")
        if markers > 1:
            raise FormatError("Invalid scientific notation format")

        if markers == 1:
            mantissa_text, exponent_text = re.split("[eE]", text)
            if not cls._EXPONENT_RE.fullmatch(exponent_text):
                raise FormatError("Invalid scientific notation format")

            exponent = int_from_digits(exponent_text.lstrip("+-"))
            if exponent_text.startswith("-"):
                exponent = -exponent
            if abs(exponent) > MAX_EXPONENT:
                raise FormatError("Exponent out of range")

            mantissa = cls._parse_decimal(mantissa_text)
            power = 10 ** abs(exponent)
            if exponent >= 0:
                return cls(mantissa._numerator * power, mantissa._denominator)
            return cls(mantissa._numerator, mantissa._denominator * power)

        return cls._parse_decimal(text)

    @classmethod
    def _parse_decimal(cls, text: str) -> RationalNumber:
        if text.count(".") > 1:
            raise FormatError("Invalid decimal format")

        match = cls._DECIMAL_RE.fullmatch(text)
        if match is None or not (match["int"] or match["frac"]):
            raise FormatError(f"Invalid number: {text!r}")

        fraction = match["frac"] or ""
        numerator = int_from_digits((match["int"] or "0") + fraction)
        if match["sign"] == "-":
            numerator = -numerator
        return cls(numerator, 10 ** len(fraction))

    @classmethod
    def from_float(cls, value) -> RationalNumber:
        """Eleva una aproximación binaria (float o mpf) a valor exacto.

        Se usa la representación decimal más corta del valor, de modo que
        ``0.1`` se convierte en 1/10 y no en la fracción binaria exacta.
        """
        if isinstance(value, mp.mpf):
            if not mp.isfinite(value):
                raise FormatError(f"Invalid number: {value}")
            return cls.parse(mp.nstr(value, FLOAT_DIGITS))

        if isinstance(value, int):
            return cls(value, 1)

        value = float(value)
        if not math.isfinite(value):
            raise FormatError(f"Invalid number: {value}")
        return cls.parse(repr(value))

    @classmethod
    def _coerce(cls, other):
        if isinstance(other, RationalNumber):
            return other
        if isinstance(other, int):
            return cls(other, 1)
        return NotImplemented

    # ── Propiedades ──────────────────────────────────────────────

    @property
    def numerator(self) -> int:
        return self._numerator

    @property
    def denominator(self) -> int:
        return self._denominator

    @property
    def is_zero(self) -> bool:
        return self._numerator == 0

    @property
    def is_one(self) -> bool:
        return self._numerator == self._denominator

    # ── Aritmética exacta ────────────────────────────────────────

    def __add__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return other
        return RationalNumber(
            self._numerator * other._denominator + other._numerator * self._denominator,
            self._denominator * other._denominator,
        )

    __radd__ = __add__

    def __sub__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return other
        return RationalNumber(
            self._numerator * other._denominator - other._numerator * self._denominator,
            self._denominator * other._denominator,
        )

    def __rsub__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return other
        return other - self

    def __mul__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return other
        return RationalNumber(
            self._numerator * other._numerator,
            self._denominator * other._denominator,
        )

    __rmul__ = __mul__

    def __truediv__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return other
        if other.is_zero:
            raise DivideByZeroError("Cannot divide by zero")
        return RationalNumber(
            self._numerator * other._denominator,
            self._denominator * other._numerator,
        )

    def __rtruediv__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return other
        return other / self

    def __neg__(self):
        return RationalNumber(-self._numerator, self._denominator)

    def __pos__(self):
        return self

    def __abs__(self):
        return RationalNumber(abs(self._numerator), self._denominator)

    def abs(self) -> RationalNumber:
        return abs(self)

    # ── Comparación por producto cruzado ─────────────────────────

    def _cross(self, other):
        """Devuelve (n1*d2, n2*d1); válido porque ambos denominadores son > 0."""
        return (
            self._numerator * other._denominator,
            other._numerator * self._denominator,
        )

    def __eq__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return other
        left, right = self._cross(other)
        return left == right

    def __lt__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return other
        left, right = self._cross(other)
        return left < right

    def __le__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return other
        left, right = self._cross(other)
        return left <= right

    def __gt__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return other
        left, right = self._cross(other)
        return left > right

    def __ge__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return other
        left, right = self._cross(other)
        return left >= right

    def compare_to(self, other) -> int:
        if self < other:
            return -1
        if self > other:
            return 1
        return 0

    def __hash__(self):
        # Igual que hash(int) para enteros, así RationalNumber(3) y 3 coinciden
        if self._denominator == 1:
            return hash(self._numerator)
        return hash((self._numerator, self._denominator))

    def __bool__(self):
        return self._numerator != 0

    # ── Conversión ───────────────────────────────────────────────

    def __float__(self):
        return self._numerator / self._denominator

    def to_mpf(self):
        """Aproximación mpf a la precisión de trabajo actual de mpmath."""
        return mp.mpf(self._numerator) / self._denominator

    # ── Funciones ────────────────────────────────────────────────

    def sqrt(self) -> RationalNumber:
        """Raíz cuadrada por Newton-Raphson sobre la representación racional.

        La semilla viene de mp.sqrt con SEED_GUARD_BITS bits por debajo de la
        unidad (solo acelera la convergencia) y se convierte a racional desde
        su mantisa y exponente binarios, sin pasar por texto, así que no
        hereda el límite de exponente del parser. La tolerancia es absoluta
        (SQRT_TOLERANCE), así que para magnitudes muy grandes o muy pequeñas
        el error relativo del resultado no está acotado por ella.

        Raises:
            DomainError: si el valor es negativo.
        """
        if self._numerator < 0:
            raise DomainError("Cannot compute square root of negative number")
        if self.is_zero:
            return ZERO

        x = self._sqrt_seed()

        for _ in range(SQRT_MAX_ITERATIONS):
            next_x = (x + self / x) / 2
            if abs(next_x - x) < SQRT_TOLERANCE:
                return next_x
            x = next_x
        return x

    def _sqrt_seed(self) -> RationalNumber:
        magnitude = (self._numerator.bit_length() - self._denominator.bit_length()) // 2 + 1
        with mp.workprec(max(mp.prec, magnitude + SEED_GUARD_BITS)):
            root = mp.sqrt(self.to_mpf())

        mantissa, exponent = (int(part) for part in root.man_exp)
        if exponent >= 0:
            return RationalNumber(mantissa << exponent)
        return RationalNumber(mantissa, 1 << -exponent)

    # ── Representación decimal ───────────────────────────────────

    def to_string(self, precision: int = DEFAULT_PRECISION) -> str:
        """Texto decimal por división larga, truncado a ``precision`` dígitos.

        Los ceros finales y el punto decimal sobrante se eliminan.
        """
        if self._denominator == 1:
            return int_to_text(self._numerator)

        if precision <= 0:
            precision = self.DEFAULT_PRECISION

        quotient, remainder = divmod(abs(self._numerator), self._denominator)
        digits = []
        while remainder and len(digits) < precision:
            digit, remainder = divmod(remainder * 10, self._denominator)
            digits.append(str(digit))

        text = int_to_text(quotient)
        fraction = "".join(digits).rstrip("0")
        if fraction:
            text = f"{text}.{fraction}"
        if self._numerator < 0 and text != "0":
            text = "-" + text
        return text

    def __str__(self):
        return self.to_string()

    def __repr__(self):
        return f"RationalNumber({int_to_text(self._numerator)}, {int_to_text(self._denominator)})"


ZERO = RationalNumber(0, 1)
ONE = RationalNumber(1, 1)
SQRT_TOLERANCE = RationalNumber(1, 10 ** 30)

RationalNumber.ZERO = ZERO
RationalNumber.ONE = ONE
