"""
NaN — Shared "Undefined" Value

Единственный экземпляр NaNType, общий для всех семейств Num.

Поглощающий элемент: каждая арифметическая операция возвращает сам NaN.
Предикаты знака возвращают False, is_nan() — True, is_equal(NaN) — True.
int_value/long_value бросают NaNConversionError, double_value/float_value
возвращают нативный float nan, compare_to всегда 0.
"""

import math
from decimal import Decimal
from typing import Optional, Union

from tanum.core.num.num import NaNConversionError, Num, NumberLike, NumFactory

NAN_NAME = "NaN"


class NaNType(Num):
    """Синглтон "неопределённого" значения."""

    __slots__ = ()

    _instance: Optional["NaNType"] = None

    def __new__(cls) -> "NaNType":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __reduce__(self) -> str:
        # Синглтон переживает pickle/copy
        return "NaN"

    @property
    def name(self) -> str:
        return NAN_NAME

    @property
    def delegate(self) -> float:
        return math.nan

    @property
    def factory(self) -> "NaNFactory":
        return NAN_FACTORY

    # -------------------------------------------------------------------------
    # Арифметика: всегда NaN
    # -------------------------------------------------------------------------

    def plus(self, augend: Num) -> Num:
        return self

    def minus(self, subtrahend: Num) -> Num:
        return self

    def multiplied_by(self, multiplicand: Num) -> Num:
        return self

    def divided_by(self, divisor: Num) -> Num:
        return self

    def remainder(self, divisor: Num) -> Num:
        return self

    def floor(self) -> Num:
        return self

    def ceil(self) -> Num:
        return self

    def pow(self, n: Union[int, Num]) -> Num:
        return self

    def log(self) -> Num:
        return self

    def exp(self) -> Num:
        return self

    def sqrt(self, precision: Optional[int] = None) -> Num:
        return self

    def abs(self) -> Num:
        return self

    def negate(self) -> Num:
        return self

    def min(self, other: Num) -> Num:
        return self

    def max(self, other: Num) -> Num:
        return self

    # -------------------------------------------------------------------------
    # Предикаты
    # -------------------------------------------------------------------------

    def is_zero(self) -> bool:
        return False

    def is_positive(self) -> bool:
        return False

    def is_positive_or_zero(self) -> bool:
        return False

    def is_negative(self) -> bool:
        return False

    def is_negative_or_zero(self) -> bool:
        return False

    def is_nan(self) -> bool:
        return True

    def compare_to(self, other: Num) -> int:
        return 0

    def is_equal(self, other: Optional[Num]) -> bool:
        return other is not None and other.is_nan()

    # -------------------------------------------------------------------------
    # Конверсии
    # -------------------------------------------------------------------------

    def decimal_value(self) -> Optional[Decimal]:
        return None

    def double_value(self) -> float:
        return math.nan

    def float_value(self) -> float:
        return math.nan

    def int_value(self) -> int:
        raise NaNConversionError("No integral representation of NaN")

    def long_value(self) -> int:
        raise NaNConversionError("No integral representation of NaN")

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Num) and other.is_nan()

    def __hash__(self) -> int:
        return hash(NAN_NAME)

    def __str__(self) -> str:
        return NAN_NAME

    def __repr__(self) -> str:
        return NAN_NAME


NaN = NaNType()


class NaNFactory(NumFactory):
    """Фабрика NaN: любая константа и любое num_of дают NaN."""

    def num_of(self, value: Union[NumberLike, Num], precision: Optional[int] = None) -> Num:
        return NaN

    def produces(self, num: Num) -> bool:
        return num.is_nan()

    def _constant(self, value: int) -> Num:
        return NaN


NAN_FACTORY = NaNFactory()
