"""
Num — Contract of the Numeric Value Abstraction

Каждый индикатор, правило, модель издержек и критерий считает только
через Num. Контракт реализуют три семейства:
- DoubleNum: быстрый путь на float
- DecimalNum: произвольная точность на decimal.Decimal
- NaN: единственный поглощающий "неопределённый" экземпляр

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Immutability: каждая операция возвращает новое значение
2. Однородность семейств: бинарная операция над разными семействами —
   немедленная ошибка NumFamilyMismatchError, без неявной конверсии
3. NaN contagion: любая операция с NaN даёт NaN (кроме предикатов)
4. Деление на ноль или на NaN возвращает NaN, исключения нет
5. Предикаты порядка против NaN (с любой стороны) возвращают False
"""

import ctypes
import math
from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Any, Optional, Type, TypeVar, Union

# =============================================================================
# EXCEPTIONS
# =============================================================================


class NumFamilyMismatchError(TypeError):
    """
    Бинарная операция над значениями разных семейств Num.

    Ошибка вызывающего кода: вычислительный конвейер должен целиком
    оставаться в одном семействе. Неявная конверсия не выполняется.
    """

    pass


class InvalidNumLiteralError(ValueError):
    """
    Недопустимый литерал при создании Num.

    Строка "NaN" (в любом регистре) и нативный float NaN запрещены:
    "неопределённое" значение получают только через синглтон NaN.
    """

    pass


class NaNConversionError(ValueError):
    """Нет целочисленного представления NaN."""

    pass


# =============================================================================
# TYPES
# =============================================================================

NumberLike = Union[int, float, str, Decimal]

N = TypeVar("N", bound="Num")

NAN_LITERAL = "nan"


def require_family(value: "Num", family: Type[N]) -> N:
    """
    Проверка, что операнд принадлежит семейству family.

    Статическая типизация отсекает смешение семейств там, где типы известны;
    эта проверка — путь отказа для значений, пришедших через динамическую
    границу.

    Args:
        value: Второй операнд (не NaN)
        family: Ожидаемый класс семейства

    Returns:
        value, суженный до family

    Raises:
        NumFamilyMismatchError: Если value не экземпляр family
    """
    if not isinstance(value, family):
        raise NumFamilyMismatchError(
            f"Cannot combine {family.__name__} with {type(value).__name__}"
        )
    return value


def reject_nan_literal(value: Any) -> None:
    """
    Отказ для литералов "NaN" и нативного float NaN.

    Args:
        value: Исходное значение фабрики

    Raises:
        InvalidNumLiteralError: Если value — "NaN" (без учёта регистра и
            пробелов) или float NaN
    """
    if isinstance(value, str) and value.strip().lower() == NAN_LITERAL:
        raise InvalidNumLiteralError(
            f"{value!r} is reserved, use the NaN singleton instead"
        )
    if isinstance(value, float) and math.isnan(value):
        raise InvalidNumLiteralError("float NaN is reserved, use the NaN singleton instead")


def to_single_precision(value: float) -> float:
    """Округление float до 32-bit float (переполнение даёт ±inf)."""
    return ctypes.c_float(value).value


# =============================================================================
# NUM CONTRACT
# =============================================================================


class Num(ABC):
    """
    Числовое значение, общее для всего тулкита.

    Алгоритмы над Num не ветвятся по конкретному семейству: константы
    (zero/one/hundred) и новые значения берутся через num_of у значения
    того же семейства.

    Операторы Python (+ - * / % ** < <= > >= abs -x float int) делегируют
    именованным методам и принимают только Num.
    """

    __slots__ = ()

    # -------------------------------------------------------------------------
    # Семейство и фабрика
    # -------------------------------------------------------------------------

    @property
    @abstractmethod
    def name(self) -> str:
        """Имя семейства."""

    @property
    @abstractmethod
    def delegate(self) -> Any:
        """Нативное значение, на котором построен Num."""

    @property
    @abstractmethod
    def factory(self) -> "NumFactory":
        """Фабрика семейства, которому принадлежит значение."""

    def zero(self) -> "Num":
        return self.factory.zero()

    def one(self) -> "Num":
        return self.factory.one()

    def hundred(self) -> "Num":
        return self.factory.hundred()

    def num_of(self, value: Union[NumberLike, "Num"], precision: Optional[int] = None) -> "Num":
        """
        Новое значение того же семейства.

        Args:
            value: Число, строка, Decimal или Num
            precision: Точность (значащие цифры); учитывается DecimalNum

        Returns:
            Num того же семейства, что и self
        """
        return self.factory.num_of(value, precision)

    # -------------------------------------------------------------------------
    # Арифметика
    # -------------------------------------------------------------------------

    @abstractmethod
    def plus(self, augend: "Num") -> "Num":
        """self + augend"""

    @abstractmethod
    def minus(self, subtrahend: "Num") -> "Num":
        """self - subtrahend"""

    @abstractmethod
    def multiplied_by(self, multiplicand: "Num") -> "Num":
        """self * multiplicand"""

    def times(self, multiplicand: "Num") -> "Num":
        return self.multiplied_by(multiplicand)

    @abstractmethod
    def divided_by(self, divisor: "Num") -> "Num":
        """self / divisor; NaN при делении на ноль или NaN."""

    def div(self, divisor: "Num") -> "Num":
        return self.divided_by(divisor)

    @abstractmethod
    def remainder(self, divisor: "Num") -> "Num":
        """Остаток со знаком делимого; NaN при делителе ноль или NaN."""

    @abstractmethod
    def floor(self) -> "Num":
        """Округление вниз до целого."""

    @abstractmethod
    def ceil(self) -> "Num":
        """Округление вверх до целого."""

    @abstractmethod
    def pow(self, n: Union[int, "Num"]) -> "Num":
        """self ** n для целого n или Num n."""

    @abstractmethod
    def log(self) -> "Num":
        """Натуральный логарифм; NaN для self <= 0."""

    @abstractmethod
    def exp(self) -> "Num":
        """e ** self"""

    @abstractmethod
    def sqrt(self, precision: Optional[int] = None) -> "Num":
        """Квадратный корень; NaN для self < 0."""

    @abstractmethod
    def abs(self) -> "Num":
        """Модуль."""

    @abstractmethod
    def negate(self) -> "Num":
        """-self"""

    @abstractmethod
    def min(self, other: "Num") -> "Num":
        """Меньшее из значений; NaN если other — NaN."""

    @abstractmethod
    def max(self, other: "Num") -> "Num":
        """Большее из значений; NaN если other — NaN."""

    # -------------------------------------------------------------------------
    # Предикаты
    # -------------------------------------------------------------------------

    @abstractmethod
    def is_zero(self) -> bool: ...

    @abstractmethod
    def is_positive(self) -> bool: ...

    @abstractmethod
    def is_positive_or_zero(self) -> bool: ...

    @abstractmethod
    def is_negative(self) -> bool: ...

    @abstractmethod
    def is_negative_or_zero(self) -> bool: ...

    def is_nan(self) -> bool:
        return False

    # -------------------------------------------------------------------------
    # Сравнения
    # -------------------------------------------------------------------------

    @abstractmethod
    def compare_to(self, other: "Num") -> int:
        """
        Трёхзначное сравнение: -1, 0, 1.

        Возвращает 0, если любой из операндов NaN (нетотальный порядок).

        Raises:
            NumFamilyMismatchError: Если семейства операндов различаются
        """

    @abstractmethod
    def is_equal(self, other: Optional["Num"]) -> bool:
        """Равенство значений; NaN равен только NaN."""

    def is_greater_than(self, other: Optional["Num"]) -> bool:
        return self._is_ordered(other) and self.compare_to(other) > 0

    def is_greater_than_or_equal(self, other: Optional["Num"]) -> bool:
        return self._is_ordered(other) and self.compare_to(other) >= 0

    def is_less_than(self, other: Optional["Num"]) -> bool:
        return self._is_ordered(other) and self.compare_to(other) < 0

    def is_less_than_or_equal(self, other: Optional["Num"]) -> bool:
        return self._is_ordered(other) and self.compare_to(other) <= 0

    def _is_ordered(self, other: Optional["Num"]) -> bool:
        return other is not None and not self.is_nan() and not other.is_nan()

    # -------------------------------------------------------------------------
    # Конверсии
    # -------------------------------------------------------------------------

    @abstractmethod
    def decimal_value(self) -> Optional[Decimal]:
        """Значение как Decimal; None если точного представления нет."""

    def double_value(self) -> float:
        return float(self.delegate)

    def float_value(self) -> float:
        """Значение, округлённое до 32-bit float."""
        return to_single_precision(self.double_value())

    def int_value(self) -> int:
        """Целая часть (усечение к нулю)."""
        return int(self.delegate)

    def long_value(self) -> int:
        return self.int_value()

    # -------------------------------------------------------------------------
    # Статические проверки
    # -------------------------------------------------------------------------

    @staticmethod
    def is_nan_or_none(value: Optional["Num"]) -> bool:
        """
        True для None, NaN и значений с нативным NaN внутри.

        Args:
            value: Проверяемое значение

        Returns:
            True если значение непригодно для вычислений
        """
        return value is None or value.is_nan() or math.isnan(value.double_value())

    @staticmethod
    def is_valid(value: Optional["Num"]) -> bool:
        return not Num.is_nan_or_none(value)

    # -------------------------------------------------------------------------
    # Операторы Python
    # -------------------------------------------------------------------------

    def __add__(self, other: object) -> "Num":
        if not isinstance(other, Num):
            return NotImplemented
        return self.plus(other)

    def __sub__(self, other: object) -> "Num":
        if not isinstance(other, Num):
            return NotImplemented
        return self.minus(other)

    def __mul__(self, other: object) -> "Num":
        if not isinstance(other, Num):
            return NotImplemented
        return self.multiplied_by(other)

    def __truediv__(self, other: object) -> "Num":
        if not isinstance(other, Num):
            return NotImplemented
        return self.divided_by(other)

    def __mod__(self, other: object) -> "Num":
        if not isinstance(other, Num):
            return NotImplemented
        return self.remainder(other)

    def __pow__(self, other: object) -> "Num":
        if isinstance(other, bool) or not isinstance(other, (int, Num)):
            return NotImplemented
        return self.pow(other)

    def __neg__(self) -> "Num":
        return self.negate()

    def __abs__(self) -> "Num":
        return self.abs()

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Num):
            return NotImplemented
        return self.is_less_than(other)

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Num):
            return NotImplemented
        return self.is_less_than_or_equal(other)

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Num):
            return NotImplemented
        return self.is_greater_than(other)

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Num):
            return NotImplemented
        return self.is_greater_than_or_equal(other)

    def __float__(self) -> float:
        return self.double_value()

    def __int__(self) -> int:
        return self.int_value()

    def __repr__(self) -> str:
        return f"{self.name}('{self}')"


# =============================================================================
# NUM FACTORY
# =============================================================================


class NumFactory(ABC):
    """
    Фабрика семейства Num.

    Константы (minus_one ... thousand) создаются лениво при первом
    обращении и далее переиспользуются; значения неизменяемы.
    """

    def __init__(self) -> None:
        self._constants: dict[int, Num] = {}

    @abstractmethod
    def num_of(self, value: Union[NumberLike, Num], precision: Optional[int] = None) -> Num:
        """
        Значение семейства из числа, строки, Decimal или другого Num.

        Raises:
            InvalidNumLiteralError: Для "NaN", float NaN и нечисловых строк
        """

    @abstractmethod
    def produces(self, num: Num) -> bool:
        """True если num принадлежит семейству этой фабрики."""

    def _constant(self, value: int) -> Num:
        constant = self._constants.get(value)
        if constant is None:
            constant = self._constants.setdefault(value, self.num_of(value))
        return constant

    def minus_one(self) -> Num:
        return self._constant(-1)

    def zero(self) -> Num:
        return self._constant(0)

    def one(self) -> Num:
        return self._constant(1)

    def two(self) -> Num:
        return self._constant(2)

    def three(self) -> Num:
        return self._constant(3)

    def hundred(self) -> Num:
        return self._constant(100)

    def thousand(self) -> Num:
        return self._constant(1000)
