# app/math/rational.py

from __future__ import annotations
from fractions import Fraction
from typing import Any, Union

from pydantic_core import core_schema

from app.errors import ConstructionError, DivisionByZero

Number = Union["Rational", int]


class Rational:
    """
    Pecahan eksak untuk bagian waris (tanpa floating point).

    - Tanda selalu dibawa pembilang, penyebut selalu > 0.
    - Operasi aritmetika mengembalikan pecahan baru yang sudah disederhanakan.
    - Kesamaan dibandingkan lewat bentuk kanonik (1/2 == 2/4).
    - to_decimal() satu-satunya titik konversi ke float; jangan dipakai untuk membandingkan.
    """

    __slots__ = ("_num", "_den")

    def __init__(self, numerator: int, denominator: int = 1):
        if denominator == 0:
            raise ConstructionError("Penyebut tidak boleh nol")
        if denominator < 0:
            numerator, denominator = -numerator, -denominator
        object.__setattr__(self, "_num", int(numerator))
        object.__setattr__(self, "_den", int(denominator))

    def __setattr__(self, name, value):
        raise AttributeError("Rational bersifat immutable")

    def __reduce__(self):
        return (Rational, (self._num, self._den))

    @property
    def numerator(self) -> int:
        return self._num

    @property
    def denominator(self) -> int:
        return self._den

    # --------------------------
    # Helper bilangan bulat
    # --------------------------
    @staticmethod
    def gcd(a: int, b: int) -> int:
        """FPB dengan algoritma Euclid pada nilai mutlak."""
        a, b = abs(a), abs(b)
        while b:
            a, b = b, a % b
        return a

    @staticmethod
    def lcm(a: int, b: int) -> int:
        if not a or not b:
            return abs(a or b)
        return abs(a * b) // Rational.gcd(a, b)

    @staticmethod
    def _coerce(other: Number) -> "Rational":
        if isinstance(other, Rational):
            return other
        if isinstance(other, int) and not isinstance(other, bool):
            return Rational(other, 1)
        raise TypeError(f"Tidak bisa memakai {type(other).__name__} sebagai Rational")

    # --------------------------
    # Bentuk kanonik
    # --------------------------
    def simplify(self) -> "Rational":
        if self._num == 0:
            return Rational(0, 1)
        g = Rational.gcd(self._num, self._den)
        return Rational(self._num // g, self._den // g)

    # --------------------------
    # Aritmetika
    # --------------------------
    def add(self, other: Number) -> "Rational":
        other = Rational._coerce(other)
        return Rational(self._num * other._den + other._num * self._den,
                        self._den * other._den).simplify()

    def subtract(self, other: Number) -> "Rational":
        other = Rational._coerce(other)
        return Rational(self._num * other._den - other._num * self._den,
                        self._den * other._den).simplify()

    def multiply(self, other: Number) -> "Rational":
        other = Rational._coerce(other)
        return Rational(self._num * other._num, self._den * other._den).simplify()

    def divide(self, other: Number) -> "Rational":
        other = Rational._coerce(other)
        if other._num == 0:
            raise DivisionByZero("Pembagian dengan nol")
        return Rational(self._num * other._den, self._den * other._num).simplify()

    def __add__(self, other):
        return self.add(other)

    __radd__ = __add__

    def __sub__(self, other):
        return self.subtract(other)

    def __rsub__(self, other):
        return Rational._coerce(other).subtract(self)

    def __mul__(self, other):
        return self.multiply(other)

    __rmul__ = __mul__

    def __truediv__(self, other):
        return self.divide(other)

    def __rtruediv__(self, other):
        return Rational._coerce(other).divide(self)

    def __neg__(self):
        return Rational(-self._num, self._den).simplify()

    # --------------------------
    # Perbandingan (perkalian silang, eksak)
    # --------------------------
    def greater_than(self, other: Number) -> bool:
        other = Rational._coerce(other)
        return self._num * other._den > other._num * self._den

    def less_than(self, other: Number) -> bool:
        other = Rational._coerce(other)
        return self._num * other._den < other._num * self._den

    def equals(self, other: Number) -> bool:
        other = Rational._coerce(other)
        a, b = self.simplify(), other.simplify()
        return a._num == b._num and a._den == b._den

    def __eq__(self, other):
        if isinstance(other, (Rational, int)) and not isinstance(other, bool):
            return self.equals(other)
        return NotImplemented

    def __hash__(self):
        c = self.simplify()
        return hash((c._num, c._den))

    def __lt__(self, other):
        return self.less_than(other)

    def __gt__(self, other):
        return self.greater_than(other)

    def __le__(self, other):
        return not self.greater_than(other)

    def __ge__(self, other):
        return not self.less_than(other)

    def is_zero(self) -> bool:
        return self._num == 0

    def is_positive(self) -> bool:
        return self._num > 0

    def is_negative(self) -> bool:
        return self._num < 0

    # --------------------------
    # Konversi
    # --------------------------
    def to_decimal(self) -> float:
        return self._num / self._den

    @classmethod
    def from_decimal(cls, value: float, max_denominator: int = 1_000_000) -> "Rational":
        """
        Aproksimasi terbaik dengan penyebut <= max_denominator.
        Hanya untuk input desimal dari luar, bukan untuk hasil yang sejak awal eksak.
        """
        if max_denominator < 1:
            raise ConstructionError("max_denominator minimal 1")
        approx = Fraction(value).limit_denominator(max_denominator)
        return cls(approx.numerator, approx.denominator).simplify()

    @classmethod
    def parse(cls, text: str) -> "Rational":
        """Baca bentuk "a/b" atau "a"."""
        raw = text.strip()
        if "/" in raw:
            num, den = raw.split("/", 1)
            return cls(int(num), int(den)).simplify()
        return cls(int(raw), 1)

    def __str__(self):
        c = self.simplify()
        if c._den == 1:
            return str(c._num)
        return f"{c._num}/{c._den}"

    def __repr__(self):
        return f"Rational({self._num}, {self._den})"

    # --------------------------
    # Integrasi pydantic: validasi dari Rational/int/"a/b", serialisasi ke "a/b"
    # --------------------------
    @classmethod
    def _validate(cls, value: Any) -> "Rational":
        if isinstance(value, Rational):
            return value
        if isinstance(value, int) and not isinstance(value, bool):
            return cls(value, 1)
        if isinstance(value, str):
            try:
                return cls.parse(value)
            except ValueError as exc:
                raise ValueError(f"Pecahan tidak valid: {value!r}") from exc
        raise ValueError(f"Pecahan tidak valid: {value!r}")

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type, handler):
        from_str = core_schema.no_info_after_validator_function(cls._validate, core_schema.str_schema())
        return core_schema.json_or_python_schema(
            json_schema=from_str,
            python_schema=core_schema.no_info_plain_validator_function(cls._validate),
            serialization=core_schema.plain_serializer_function_ser_schema(str, return_schema=core_schema.str_schema()),
        )


ZERO = Rational(0, 1)
ONE = Rational(1, 1)
