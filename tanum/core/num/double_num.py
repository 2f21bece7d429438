"""
DoubleNum — Fast-Path Num on Native float

Высокая производительность, ограниченная точность (64-bit IEEE-754).

Равенство (is_equal, ==) толерантно: abs(a - b) < EPS_DOUBLE_NUM (1e-5),
чтобы поглощать дрейф округления в цепочках вычислений. Упорядочивание
(compare_to, is_less_than, ...) точное, без epsilon. Поэтому вблизи
границы epsilon значения могут быть одновременно is_equal и is_less_than:
    5.is_equal(5.000001)      -> True
    5.is_less_than(5.000001)  -> True

Нативный float nan внутрь DoubleNum не попадает: неопределённые
результаты канонизируются в синглтон NaN. Бесконечности допустимы
(потолок точности быстрого пути).
"""

import math
from decimal import Decimal
from typing import Optional, Union

from tanum.core.math.decimal_algorithms import INT32_MAX, INT32_MIN, INT64_MAX, INT64_MIN
from tanum.core.math.numerical_safeguards import (
    EPS_DOUBLE_NUM,
    ieee_exp,
    ieee_fmod,
    ieee_pow,
    is_close_abs,
    is_valid_float,
)
from tanum.core.num.nan import NaN
from tanum.core.num.num import (
    InvalidNumLiteralError,
    Num,
    NumberLike,
    NumFactory,
    reject_nan_literal,
    require_family,
)

DOUBLE_NUM_NAME = "DoubleNum"


def _parse_float(value: Union[NumberLike, Num]) -> float:
    if isinstance(value, Num):
        if value.is_nan():
            raise InvalidNumLiteralError("NaN cannot be converted, use the NaN singleton")
        return value.double_value()

    reject_nan_literal(value)

    try:
        parsed = float(value)
    except OverflowError:
        # int вне диапазона float
        return math.inf if value > 0 else -math.inf
    except (TypeError, ValueError) as exc:
        raise InvalidNumLiteralError(f"Cannot create {DOUBLE_NUM_NAME} from {value!r}") from exc

    # float("nan") отсекается выше; Decimal("NaN") даёт nan здесь
    if math.isnan(parsed):
        raise InvalidNumLiteralError(f"Cannot create {DOUBLE_NUM_NAME} from {value!r}")
    return parsed


class DoubleNum(Num):
    """
    Num на float.

    Parameters
    ----------
    value : float
        Нативное значение (не nan).
    """

    __slots__ = ("_delegate",)

    def __init__(self, value: float) -> None:
        if math.isnan(value):
            raise InvalidNumLiteralError(f"{DOUBLE_NUM_NAME} cannot hold float NaN")
        self._delegate = float(value)

    @classmethod
    def value_of(cls, value: Union[NumberLike, Num]) -> "DoubleNum":
        """
        DoubleNum из числа, строки, Decimal или другого Num.

        Args:
            value: Исходное значение

        Returns:
            DoubleNum (для DecimalNum возможна потеря точности)

        Raises:
            InvalidNumLiteralError: Для "NaN", float NaN, NaN и нечисловых строк
        """
        return cls(_parse_float(value))

    @staticmethod
    def _of(value: float) -> Num:
        # Канонизация: float nan -> NaN
        if math.isnan(value):
            return NaN
        return DoubleNum(value)

    @property
    def name(self) -> str:
        return DOUBLE_NUM_NAME

    @property
    def delegate(self) -> float:
        return self._delegate

    @property
    def factory(self) -> "DoubleNumFactory":
        return DoubleNumFactory.get_instance()

    # -------------------------------------------------------------------------
    # Арифметика
    # -------------------------------------------------------------------------

    def plus(self, augend: Num) -> Num:
        if augend.is_nan():
            return NaN
        return self._of(self._delegate + require_family(augend, DoubleNum)._delegate)

    def minus(self, subtrahend: Num) -> Num:
        if subtrahend.is_nan():
            return NaN
        return self._of(self._delegate - require_family(subtrahend, DoubleNum)._delegate)

    def multiplied_by(self, multiplicand: Num) -> Num:
        if multiplicand.is_nan():
            return NaN
        return self._of(self._delegate * require_family(multiplicand, DoubleNum)._delegate)

    def divided_by(self, divisor: Num) -> Num:
        if divisor.is_nan():
            return NaN
        divisor_value = require_family(divisor, DoubleNum)._delegate
        if divisor_value == 0.0:
            return NaN
        return self._of(self._delegate / divisor_value)

    def remainder(self, divisor: Num) -> Num:
        if divisor.is_nan():
            return NaN
        return self._of(ieee_fmod(self._delegate, require_family(divisor, DoubleNum)._delegate))

    def floor(self) -> Num:
        if not is_valid_float(self._delegate):
            return self
        return DoubleNum(float(math.floor(self._delegate)))

    def ceil(self) -> Num:
        if not is_valid_float(self._delegate):
            return self
        return DoubleNum(float(math.ceil(self._delegate)))

    def pow(self, n: Union[int, Num]) -> Num:
        if isinstance(n, Num):
            if n.is_nan():
                return NaN
            exponent = require_family(n, DoubleNum)._delegate
        else:
            try:
                exponent = float(n)
            except OverflowError:
                exponent = math.inf if n > 0 else -math.inf
        return self._of(ieee_pow(self._delegate, exponent))

    def log(self) -> Num:
        if self._delegate <= 0:
            return NaN
        return DoubleNum(math.log(self._delegate))

    def exp(self) -> Num:
        return DoubleNum(ieee_exp(self._delegate))

    def sqrt(self, precision: Optional[int] = None) -> Num:
        """
        Квадратный корень; precision игнорируется (точность float).

        Returns:
            √self или NaN для отрицательного значения
        """
        if self._delegate < 0:
            return NaN
        return DoubleNum(math.sqrt(self._delegate))

    def abs(self) -> Num:
        return DoubleNum(abs(self._delegate))

    def negate(self) -> Num:
        return DoubleNum(-self._delegate)

    def min(self, other: Num) -> Num:
        if other.is_nan():
            return NaN
        other_value = require_family(other, DoubleNum)._delegate
        return self if self._delegate <= other_value else other

    def max(self, other: Num) -> Num:
        if other.is_nan():
            return NaN
        other_value = require_family(other, DoubleNum)._delegate
        return self if self._delegate >= other_value else other

    # -------------------------------------------------------------------------
    # Предикаты и сравнения
    # -------------------------------------------------------------------------

    def is_zero(self) -> bool:
        return self._delegate == 0.0

    def is_positive(self) -> bool:
        return self._delegate > 0.0

    def is_positive_or_zero(self) -> bool:
        return self._delegate >= 0.0

    def is_negative(self) -> bool:
        return self._delegate < 0.0

    def is_negative_or_zero(self) -> bool:
        return self._delegate <= 0.0

    def compare_to(self, other: Num) -> int:
        if other.is_nan():
            return 0
        other_value = require_family(other, DoubleNum)._delegate
        return (self._delegate > other_value) - (self._delegate < other_value)

    def is_equal(self, other: Optional[Num]) -> bool:
        if other is None or other.is_nan():
            return False
        return is_close_abs(self._delegate, require_family(other, DoubleNum)._delegate, EPS_DOUBLE_NUM)

    # -------------------------------------------------------------------------
    # Конверсии
    # -------------------------------------------------------------------------

    def decimal_value(self) -> Optional[Decimal]:
        if not is_valid_float(self._delegate):
            return None
        return Decimal(repr(self._delegate))

    def double_value(self) -> float:
        return self._delegate

    def int_value(self) -> int:
        """Целая часть; бесконечность насыщается до границы signed 32-bit."""
        if math.isinf(self._delegate):
            return INT32_MAX if self._delegate > 0 else INT32_MIN
        return int(self._delegate)

    def long_value(self) -> int:
        """Целая часть; бесконечность насыщается до границы signed 64-bit."""
        if math.isinf(self._delegate):
            return INT64_MAX if self._delegate > 0 else INT64_MIN
        return int(self._delegate)

    def __eq__(self, other: object) -> bool:
        # Хеш точный, равенство толерантное: значения в пределах epsilon
        # равны, но могут иметь разные хеши
        if not isinstance(other, DoubleNum):
            return False
        return is_close_abs(self._delegate, other._delegate, EPS_DOUBLE_NUM)

    def __hash__(self) -> int:
        return hash(self._delegate)

    def __str__(self) -> str:
        return repr(self._delegate)


class DoubleNumFactory(NumFactory):
    """Фабрика DoubleNum (синглтон на процесс)."""

    _instance: Optional["DoubleNumFactory"] = None

    @classmethod
    def get_instance(cls) -> "DoubleNumFactory":
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    def num_of(self, value: Union[NumberLike, Num], precision: Optional[int] = None) -> Num:
        return DoubleNum.value_of(value)

    def produces(self, num: Num) -> bool:
        return isinstance(num, DoubleNum)
