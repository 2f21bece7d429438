"""
DecimalNum — Arbitrary-Precision Num on decimal.Decimal

Num = Decimal + собственный контекст точности (DecimalNumSettings:
значащие цифры и режим округления, по умолчанию 32 цифры, HALF_UP).

Правила точности:
- Строковый литерал без явной точности хранится точно, а точность
  расширяется до числа его значащих цифр (но не ниже 32)
- С явной точностью значение округляется до неё
- Результат бинарной операции несёт настройки операнда с большей точностью

Итеративные алгоритмы (sqrt, log, exp, вещественная степень) —
см. tanum.core.math.decimal_algorithms.
"""

import logging
from decimal import ROUND_CEILING, ROUND_FLOOR, Decimal, InvalidOperation
from functools import lru_cache
from typing import Optional, Union

from tanum.core.math.decimal_algorithms import (
    EXACT_CONTEXT,
    babylonian_sqrt,
    continued_fraction_log,
    integral_power,
    split_power,
    taylor_exp,
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
from tanum.core.num.settings import (
    DEFAULT_PRECISION,
    DEFAULT_SETTINGS,
    SETTINGS_CACHE_SIZE,
    DecimalNumSettings,
    RoundingMode,
    math_context,
    settings_for,
)

logger = logging.getLogger(__name__)

DECIMAL_NUM_NAME = "DecimalNum"

_ZERO = Decimal(0)
_ONE = Decimal(1)


def _parse_decimal(value: Union[NumberLike, Num]) -> Decimal:
    """
    Точное Decimal представление исходного значения.

    float переводится через repr (кратчайшее десятичное представление),
    а не через точное двоичное разложение.

    Raises:
        InvalidNumLiteralError: Для NaN, нефинитных и нечисловых значений
    """
    if isinstance(value, Num):
        parsed = value.decimal_value()
        if parsed is None:
            raise InvalidNumLiteralError(f"{value!r} has no decimal representation")
        return parsed

    reject_nan_literal(value)

    try:
        if isinstance(value, float):
            parsed = EXACT_CONTEXT.create_decimal(repr(value))
        elif isinstance(value, (int, str, Decimal)):
            parsed = EXACT_CONTEXT.create_decimal(value)
        else:
            raise TypeError(f"unsupported type {type(value).__name__}")
    except (InvalidOperation, TypeError, ValueError) as exc:
        raise InvalidNumLiteralError(f"Cannot create {DECIMAL_NUM_NAME} from {value!r}") from exc

    if not parsed.is_finite():
        raise InvalidNumLiteralError(f"Cannot create {DECIMAL_NUM_NAME} from {value!r}")
    return parsed


def significant_digits(value: Decimal) -> int:
    """Число цифр в коэффициенте (аналог BigDecimal.precision())."""
    return len(value.as_tuple().digits)


class DecimalNum(Num):
    """
    Num произвольной точности.

    Parameters
    ----------
    value : Decimal
        Конечное значение; хранится как есть, без округления.
    settings : DecimalNumSettings
        Контекст точности значения.
    """

    __slots__ = ("_delegate", "_settings")

    def __init__(self, value: Decimal, settings: DecimalNumSettings = DEFAULT_SETTINGS) -> None:
        if not value.is_finite():
            raise InvalidNumLiteralError(f"{DECIMAL_NUM_NAME} cannot hold {value}")
        self._delegate = value
        self._settings = settings

    @classmethod
    def value_of(
        cls,
        value: Union[NumberLike, Num],
        precision: Optional[int] = None,
        rounding: RoundingMode = RoundingMode.HALF_UP,
    ) -> "DecimalNum":
        """
        DecimalNum из числа, строки, Decimal или другого Num.

        Строка — самый точный источник: только она представляет значение
        без потерь. float может нести погрешность двоичного представления.

        Args:
            value: Исходное значение
            precision: Значащие цифры; None — точное значение и точность
                max(цифры литерала, DEFAULT_PRECISION)
            rounding: Режим округления

        Returns:
            DecimalNum

        Raises:
            InvalidNumLiteralError: Для "NaN", float NaN, бесконечностей и
                нечисловых строк
            pydantic.ValidationError: Если precision <= 0
        """
        exact = _parse_decimal(value)

        if precision is None:
            settings = settings_for(max(significant_digits(exact), DEFAULT_PRECISION), rounding)
            return cls(exact, settings)

        settings = settings_for(precision, rounding)
        return cls(settings.context().create_decimal(exact), settings)

    @property
    def name(self) -> str:
        return DECIMAL_NUM_NAME

    @property
    def delegate(self) -> Decimal:
        return self._delegate

    @property
    def settings(self) -> DecimalNumSettings:
        return self._settings

    @property
    def precision(self) -> int:
        return self._settings.precision

    @property
    def factory(self) -> "DecimalNumFactory":
        return DecimalNumFactory.from_settings(self._settings)

    def _widest(self, other: Num) -> tuple["DecimalNum", DecimalNumSettings]:
        operand = require_family(other, DecimalNum)
        return operand, self._settings.widest(operand._settings)

    # -------------------------------------------------------------------------
    # Арифметика
    # -------------------------------------------------------------------------

    def plus(self, augend: Num) -> Num:
        if augend.is_nan():
            return NaN
        operand, settings = self._widest(augend)
        return DecimalNum(settings.context().add(self._delegate, operand._delegate), settings)

    def minus(self, subtrahend: Num) -> Num:
        if subtrahend.is_nan():
            return NaN
        operand, settings = self._widest(subtrahend)
        return DecimalNum(settings.context().subtract(self._delegate, operand._delegate), settings)

    def multiplied_by(self, multiplicand: Num) -> Num:
        if multiplicand.is_nan():
            return NaN
        operand, settings = self._widest(multiplicand)
        return DecimalNum(settings.context().multiply(self._delegate, operand._delegate), settings)

    def divided_by(self, divisor: Num) -> Num:
        if divisor.is_nan():
            return NaN
        operand, settings = self._widest(divisor)
        if operand.is_zero():
            return NaN
        return DecimalNum(settings.context().divide(self._delegate, operand._delegate), settings)

    def remainder(self, divisor: Num) -> Num:
        if divisor.is_nan():
            return NaN
        operand, settings = self._widest(divisor)
        if operand.is_zero():
            return NaN
        # Точный остаток, затем округление до рабочей точности
        exact = EXACT_CONTEXT.remainder(self._delegate, operand._delegate)
        return DecimalNum(settings.context().create_decimal(exact), settings)

    def floor(self) -> Num:
        return DecimalNum(self._delegate.to_integral_value(rounding=ROUND_FLOOR), self._settings)

    def ceil(self) -> Num:
        return DecimalNum(self._delegate.to_integral_value(rounding=ROUND_CEILING), self._settings)

    def pow(self, n: Union[int, Num]) -> Num:
        """
        self ** n.

        Целый n — точное decimal возведение в степень на рабочей точности.
        Num n — разложение n = a + b (см. split_power): дробная часть
        считается через float pow и ограничена точностью double.

        Returns:
            Степень; NaN для 0 в отрицательной степени и для неопределённых
            вещественных степеней

        Raises:
            OverflowError: Если целая часть Num n не помещается в int32
        """
        if isinstance(n, Num):
            if n.is_nan():
                return NaN
            operand, settings = self._widest(n)
            result = split_power(self._delegate, operand._delegate, settings.context())
            if result is None:
                return NaN
            return DecimalNum(result, settings)

        if self.is_zero() and n < 0:
            return NaN
        return DecimalNum(integral_power(self._delegate, n, self._settings.context()), self._settings)

    def sqrt(self, precision: Optional[int] = None) -> Num:
        """
        Квадратный корень методом Герона.

        Args:
            precision: Значащие цифры результата; None — точность значения

        Returns:
            √self на заданной точности, 0 для нуля, NaN для отрицательных
        """
        settings = self._settings if precision is None else settings_for(precision, self._settings.rounding)

        if self.is_negative():
            return NaN
        if self.is_zero():
            return DecimalNum(_ZERO, settings)

        return DecimalNum(babylonian_sqrt(self._delegate, settings.context()), settings)

    def log(self) -> Num:
        if self.is_negative_or_zero():
            return NaN
        if self._delegate == _ONE:
            return DecimalNum(_ZERO, self._settings)
        return DecimalNum(continued_fraction_log(self._delegate, self._settings.context()), self._settings)

    def exp(self) -> Num:
        return DecimalNum(taylor_exp(self._delegate, self._settings.context()), self._settings)

    def abs(self) -> Num:
        return DecimalNum(self._delegate.copy_abs(), self._settings)

    def negate(self) -> Num:
        return DecimalNum(self._delegate.copy_negate(), self._settings)

    def min(self, other: Num) -> Num:
        if other.is_nan():
            return NaN
        return self if self.compare_to(other) <= 0 else other

    def max(self, other: Num) -> Num:
        if other.is_nan():
            return NaN
        return self if self.compare_to(other) >= 0 else other

    # -------------------------------------------------------------------------
    # Предикаты и сравнения
    # -------------------------------------------------------------------------

    def is_zero(self) -> bool:
        return self._delegate == _ZERO

    def is_positive(self) -> bool:
        return self._delegate > _ZERO

    def is_positive_or_zero(self) -> bool:
        return self._delegate >= _ZERO

    def is_negative(self) -> bool:
        return self._delegate < _ZERO

    def is_negative_or_zero(self) -> bool:
        return self._delegate <= _ZERO

    def compare_to(self, other: Num) -> int:
        if other.is_nan():
            return 0
        operand = require_family(other, DecimalNum)
        return (self._delegate > operand._delegate) - (self._delegate < operand._delegate)

    def is_equal(self, other: Optional[Num]) -> bool:
        return other is not None and not other.is_nan() and self.compare_to(other) == 0

    def matches(self, other: Num, precision: int) -> bool:
        """
        Совпадение с другим значением на заданной точности.

        Оба значения округляются до precision значащих цифр. other может
        быть любого семейства (сравнение через текстовое представление).

        Args:
            other: Сравниваемое значение
            precision: Значащие цифры сравнения

        Returns:
            True если округлённые значения равны
        """
        if other.is_nan():
            return False

        context = math_context(precision, self._settings.rounding)
        this_rounded = context.create_decimal(self._delegate)
        other_rounded = context.create_decimal(_parse_decimal(str(other)))
        if this_rounded == other_rounded:
            return True

        logger.debug("%s from %s does not match", this_rounded, self)
        logger.debug("%s from %s to precision %s", other_rounded, other, precision)
        return False

    def matches_within(self, other: Num, delta: Num) -> bool:
        """
        Совпадение с точностью до смещения: |self - other| <= delta.

        Args:
            other: Сравниваемое значение того же семейства
            delta: Допустимое смещение

        Returns:
            True если разница не превышает delta; False для NaN
        """
        if other.is_nan() or delta.is_nan():
            return False
        if not self.minus(other).abs().is_greater_than(delta):
            return True

        logger.debug("%s does not match %s within offset %s", self, other, delta)
        return False

    # -------------------------------------------------------------------------
    # Конверсии
    # -------------------------------------------------------------------------

    def decimal_value(self) -> Decimal:
        return self._delegate

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DecimalNum):
            return False
        return self._delegate == other._delegate

    def __hash__(self) -> int:
        return hash(self._delegate)

    def __str__(self) -> str:
        return str(self._delegate)


class DecimalNumFactory(NumFactory):
    """
    Фабрика DecimalNum для одного контекста точности.

    Экземпляры кэшируются по (precision, rounding).
    """

    def __init__(self, settings: DecimalNumSettings = DEFAULT_SETTINGS) -> None:
        super().__init__()
        self._settings = settings

    @classmethod
    def get_instance(
        cls,
        precision: int = DEFAULT_PRECISION,
        rounding: RoundingMode = RoundingMode.HALF_UP,
    ) -> "DecimalNumFactory":
        return _factory_for(precision, RoundingMode(rounding))

    @classmethod
    def from_settings(cls, settings: DecimalNumSettings) -> "DecimalNumFactory":
        return _factory_for(settings.precision, settings.rounding)

    @property
    def settings(self) -> DecimalNumSettings:
        return self._settings

    @property
    def precision(self) -> int:
        return self._settings.precision

    def num_of(self, value: Union[NumberLike, Num], precision: Optional[int] = None) -> Num:
        """
        DecimalNum, округлённый до precision (по умолчанию — точность фабрики).

        Raises:
            InvalidNumLiteralError: Для "NaN", float NaN, бесконечностей и
                нечисловых строк
        """
        return DecimalNum.value_of(
            value,
            self.precision if precision is None else precision,
            self._settings.rounding,
        )

    def produces(self, num: Num) -> bool:
        return isinstance(num, DecimalNum)

    def __repr__(self) -> str:
        return f"DecimalNumFactory(precision={self.precision}, rounding={self._settings.rounding.name})"


@lru_cache(maxsize=SETTINGS_CACHE_SIZE)
def _factory_for(precision: int, rounding: RoundingMode) -> DecimalNumFactory:
    return DecimalNumFactory(settings_for(precision, rounding))
